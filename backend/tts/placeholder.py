"""
Placeholder audio used when speech synthesis fails

Generates a short sine beep as a mono 16-bit PCM WAV. The output depends
only on its parameters, so the same call always yields the same bytes.
"""
import base64
import io
import wave

import numpy as np

PLACEHOLDER_DURATION_MS = 800
PLACEHOLDER_SAMPLE_RATE = 16000
PLACEHOLDER_FREQUENCY = 440


def generate_beep_samples(
    duration_ms: int = PLACEHOLDER_DURATION_MS,
    sample_rate: int = PLACEHOLDER_SAMPLE_RATE,
    freq: float = PLACEHOLDER_FREQUENCY,
) -> np.ndarray:
    """Sine wave quantized to the signed 16-bit range"""
    n_samples = int(duration_ms * sample_rate // 1000)
    t = np.arange(n_samples, dtype=np.float64)
    wave_data = np.floor(32767 * np.sin(2 * np.pi * freq * t / sample_rate))
    return wave_data.astype(np.int16)


def generate_beep_wav(
    duration_ms: int = PLACEHOLDER_DURATION_MS,
    sample_rate: int = PLACEHOLDER_SAMPLE_RATE,
    freq: float = PLACEHOLDER_FREQUENCY,
) -> bytes:
    """
    Build a WAV file containing a beep

    Returns:
        44-byte RIFF header followed by little-endian PCM samples
    """
    samples = generate_beep_samples(duration_ms, sample_rate, freq)

    wav_buffer = io.BytesIO()
    with wave.open(wav_buffer, "wb") as wav_file:
        wav_file.setnchannels(1)
        wav_file.setsampwidth(2)
        wav_file.setframerate(sample_rate)
        wav_file.setnframes(len(samples))
        wav_file.writeframes(samples.astype("<i2").tobytes())

    return wav_buffer.getvalue()


def generate_beep_wav_base64(
    duration_ms: int = PLACEHOLDER_DURATION_MS,
    sample_rate: int = PLACEHOLDER_SAMPLE_RATE,
    freq: float = PLACEHOLDER_FREQUENCY,
) -> str:
    """Beep WAV encoded as base64 text"""
    return base64.b64encode(generate_beep_wav(duration_ms, sample_rate, freq)).decode()
