"""
Sarvam AI TTS Engine (Bulbul)

Callers always receive playable audio: any upstream failure degrades to
the placeholder beep, tagged with the reason.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

import httpx
from loguru import logger

from config import Settings
from languages import to_locale
from utils import get_httpx_client_kwargs, sarvam_headers

from .base import BaseTTSEngine, FallbackReason, TTSResult
from .placeholder import generate_beep_wav_base64


class ResponseShape(Enum):
    """Known shapes of a Sarvam TTS response body"""
    AUDIO_LIST = "audios"  # {"audios": ["<base64>", ...]}
    AUDIO_FIELD = "audio"  # {"audio": "<base64>"}
    UNRECOGNIZED = "unrecognized"


@dataclass
class DecodedAudio:
    """Result of decoding a TTS response body"""
    shape: ResponseShape
    audio_base64: Optional[str] = None


def _is_audio_payload(value: Any) -> bool:
    return isinstance(value, str) and bool(value)


def decode_audio_response(body: Any) -> DecodedAudio:
    """
    Decode a TTS response body

    A populated "audios" list wins (only the first blob is used), then a
    direct "audio" field. Payloads must be non-empty strings; anything
    else is UNRECOGNIZED.
    """
    if not isinstance(body, dict):
        return DecodedAudio(ResponseShape.UNRECOGNIZED)

    audios = body.get("audios")
    if isinstance(audios, list) and audios:
        if _is_audio_payload(audios[0]):
            return DecodedAudio(ResponseShape.AUDIO_LIST, audios[0])
        return DecodedAudio(ResponseShape.UNRECOGNIZED)

    audio = body.get("audio")
    if _is_audio_payload(audio):
        return DecodedAudio(ResponseShape.AUDIO_FIELD, audio)

    return DecodedAudio(ResponseShape.UNRECOGNIZED)


def placeholder_result(reason: FallbackReason) -> TTSResult:
    """Placeholder beep tagged with the fallback reason"""
    return TTSResult(
        audio_base64=generate_beep_wav_base64(),
        content_type="audio/wav",
        fallback_reason=reason,
    )


class SarvamTTSEngine(BaseTTSEngine):
    """
    Sarvam AI text-to-speech

    Uses a fixed voice profile for every language; the language code is
    mapped to a Sarvam locale tag before the call.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = "https://api.sarvam.ai",
        speaker: str = "meera",
        model: str = "bulbul:v1",
        pitch: float = 0,
        pace: float = 1.0,
        loudness: float = 1.0,
        sample_rate: int = 8000,
        enable_preprocessing: bool = True,
        client_kwargs: Optional[dict] = None,
    ):
        if not api_key:
            raise ValueError("Sarvam API key not configured")
        self.api_key = api_key
        self.endpoint = f"{base_url.rstrip('/')}/text-to-speech"
        self.speaker = speaker
        self.model = model
        self.pitch = pitch
        self.pace = pace
        self.loudness = loudness
        self.sample_rate = sample_rate
        self.enable_preprocessing = enable_preprocessing
        self.client_kwargs = client_kwargs or {}
        logger.info(f"Initialized Sarvam TTS with speaker: {speaker} ({model})")

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> "SarvamTTSEngine":
        return cls(
            api_key=settings.SARVAM_API_KEY,
            base_url=settings.SARVAM_BASE_URL,
            speaker=settings.TTS_SPEAKER,
            model=settings.TTS_MODEL,
            pitch=settings.TTS_PITCH,
            pace=settings.TTS_PACE,
            loudness=settings.TTS_LOUDNESS,
            sample_rate=settings.TTS_SAMPLE_RATE,
            enable_preprocessing=settings.TTS_PREPROCESSING,
            client_kwargs=get_httpx_client_kwargs(
                timeout=settings.HTTP_TIMEOUT,
                proxy_url=settings.PROXY_URL,
                transport=transport,
            ),
        )

    def build_payload(self, text: str, language_code: str) -> dict:
        return {
            "inputs": [text],
            "target_language_code": language_code,
            "speaker": self.speaker,
            "pitch": self.pitch,
            "pace": self.pace,
            "loudness": self.loudness,
            "speech_sample_rate": self.sample_rate,
            "enable_preprocessing": self.enable_preprocessing,
            "model": self.model,
        }

    async def synthesize(self, text: str, language: str) -> TTSResult:
        """
        Synthesize speech from text

        Args:
            text: Text to synthesize
            language: Short language code (e.g. "hi")

        Returns:
            TTSResult with base64 WAV audio, never raises for upstream errors
        """
        language_code = to_locale(language)

        try:
            async with httpx.AsyncClient(**self.client_kwargs) as client:
                response = await client.post(
                    self.endpoint,
                    headers=sarvam_headers(self.api_key),
                    json=self.build_payload(text, language_code),
                )

            if not response.is_success:
                logger.error(f"Sarvam TTS error {response.status_code}: {response.text}")
                return placeholder_result(FallbackReason.BEEP)

            decoded = decode_audio_response(response.json())

        except Exception as e:
            logger.error(f"Sarvam TTS exception ({language_code}): {e}")
            return placeholder_result(FallbackReason.EXCEPTION)

        if decoded.shape is ResponseShape.UNRECOGNIZED:
            logger.warning("Sarvam TTS unknown response shape, using fallback")
            return placeholder_result(FallbackReason.SHAPE)

        return TTSResult(audio_base64=decoded.audio_base64, content_type="audio/wav")
