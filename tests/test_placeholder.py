import base64
import io
import math
import struct
import wave

import numpy as np

from tts.placeholder import (
    generate_beep_samples,
    generate_beep_wav,
    generate_beep_wav_base64,
)


def test_beep_wav_size_and_header():
    data = generate_beep_wav()

    assert len(data) == 44 + 12800 * 2 == 25644
    assert data[0:4] == b"RIFF"
    assert data[8:12] == b"WAVE"
    assert data[12:16] == b"fmt "
    assert data[36:40] == b"data"

    riff_size, = struct.unpack("<I", data[4:8])
    fmt_size, audio_format, channels, sample_rate, byte_rate, block_align, bits = struct.unpack(
        "<IHHIIHH", data[16:36]
    )
    data_size, = struct.unpack("<I", data[40:44])

    assert riff_size == 36 + 12800 * 2
    assert (fmt_size, audio_format, channels) == (16, 1, 1)
    assert sample_rate == 16000
    assert byte_rate == 32000
    assert (block_align, bits) == (2, 16)
    assert data_size == 12800 * 2


def test_beep_wav_readable_by_wave_module():
    with wave.open(io.BytesIO(generate_beep_wav()), "rb") as wav_file:
        assert wav_file.getnchannels() == 1
        assert wav_file.getsampwidth() == 2
        assert wav_file.getframerate() == 16000
        assert wav_file.getnframes() == 12800


def test_beep_is_reproducible():
    assert generate_beep_wav() == generate_beep_wav()
    assert generate_beep_wav_base64() == generate_beep_wav_base64()


def test_beep_samples_follow_sine():
    samples = generate_beep_samples()

    assert samples.dtype == np.int16
    assert len(samples) == 12800
    assert samples[0] == 0
    for i in (1, 9, 250, 12799):
        expected = math.floor(32767 * math.sin(2 * math.pi * 440 * i / 16000))
        assert abs(int(samples[i]) - expected) <= 1
    assert samples.max() <= 32767
    assert samples.min() >= -32768


def test_base64_decodes_to_wav():
    decoded = base64.b64decode(generate_beep_wav_base64())
    assert decoded == generate_beep_wav()


def test_custom_parameters_change_length():
    data = generate_beep_wav(duration_ms=100, sample_rate=8000, freq=880)
    assert len(data) == 44 + 800 * 2
