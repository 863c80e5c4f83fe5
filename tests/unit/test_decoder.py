import struct

import numpy as np
import pytest

from tests.helpers import make_wav, pcm16_bytes
from transcription_service.audio.decoder import (
    Decoded,
    UnsupportedBitDepth,
    decode_pcm16,
    decode_raw_pcm,
    decode_samples,
)
from transcription_service.audio.wav import parse_wav


def test_decode_pcm16_scales_extremes():
    payload = struct.pack("<4h", -32768, 0, 16384, 32767)

    samples = decode_pcm16(payload)

    assert samples.dtype == np.float32
    assert samples.tolist() == pytest.approx([-1.0, 0.0, 0.5, 32767 / 32768.0])


def test_decode_pcm16_drops_trailing_odd_byte():
    samples = decode_pcm16(b"\x00\x40\x00\xc0\x7f")

    assert samples.tolist() == pytest.approx([0.5, -0.5])


def test_decode_16bit_wav_sample_count_and_range():
    rng = np.random.default_rng(7)
    ints = rng.integers(-32768, 32768, size=1001, dtype=np.int32).astype("<i2")
    ints[:2] = [-32768, 32767]
    buffer = make_wav(ints.tobytes())
    container = parse_wav(buffer)

    result = decode_samples(buffer[container.data.offset : container.data.end], container.format.bits_per_sample)

    assert isinstance(result, Decoded)
    assert result.samples.size == container.data.length // 2
    assert result.samples.min() >= -1.0
    assert result.samples.max() <= 1.0


def test_decode_32bit_returns_floats_unscaled():
    values = [0.25, -0.75, 1.5, -3.0]
    payload = struct.pack("<4f", *values)

    result = decode_samples(payload, 32)

    assert isinstance(result, Decoded)
    assert result.samples.dtype == np.float32
    assert result.samples.tolist() == values


def test_decode_32bit_drops_partial_sample():
    payload = struct.pack("<2f", 0.5, -0.5) + b"\x01\x02"

    result = decode_samples(payload, 32)

    assert result.samples.tolist() == [0.5, -0.5]


@pytest.mark.parametrize("bits", [8, 24, 64, 0])
def test_decode_unsupported_bit_depth(bits):
    result = decode_samples(b"\x00" * 12, bits)

    assert isinstance(result, UnsupportedBitDepth)
    assert result.message == f"unsupported bit depth: {bits}"


def test_raw_pcm_decodes_whole_buffer_as_16bit():
    payload = b"ABCDEFG"

    samples = decode_raw_pcm(payload)

    expected = np.frombuffer(payload[:6], dtype="<i2") / 32768.0
    assert samples.size == 3
    np.testing.assert_allclose(samples, expected)


def test_sine_round_trip_within_quantization_error():
    t = np.arange(1600) / 16000.0
    sine = 0.8 * np.sin(2.0 * np.pi * 440.0 * t)
    buffer = make_wav(pcm16_bytes(sine))
    container = parse_wav(buffer)

    result = decode_samples(buffer[container.data.offset : container.data.end], 16)

    assert result.samples.size == sine.size
    assert np.max(np.abs(result.samples.astype(np.float64) - sine)) <= 1.0 / 32768.0


def test_silent_second_decodes_to_zeros():
    buffer = make_wav(b"\x00\x00" * 16000)
    container = parse_wav(buffer)

    result = decode_samples(buffer[container.data.offset : container.data.end], 16)

    assert result.samples.size == 16000
    assert not result.samples.any()
