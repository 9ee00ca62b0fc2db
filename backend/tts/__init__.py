"""Text-to-Speech Package"""
from .sarvam_tts_engine import SarvamTTSEngine, ResponseShape, DecodedAudio, decode_audio_response
from .placeholder import generate_beep_wav, generate_beep_wav_base64
from .base import BaseTTSEngine, TTSResult, FallbackReason

__all__ = [
    "SarvamTTSEngine",
    "ResponseShape",
    "DecodedAudio",
    "decode_audio_response",
    "generate_beep_wav",
    "generate_beep_wav_base64",
    "BaseTTSEngine",
    "TTSResult",
    "FallbackReason",
]
