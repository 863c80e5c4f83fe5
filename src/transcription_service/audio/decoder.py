"""PCM payload decoding into normalized float32 samples.

Two layouts are understood:

* 16-bit signed little-endian integers, scaled by ``1 / 32768``.
* 32-bit little-endian IEEE-754 floats, used as stored.

A 32-bit payload is always read as float PCM; 32-bit integer PCM is not
recognised. Channels are not deinterleaved, interleaved frames come out as a
flat sequence.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

import numpy as np

PCM16_SCALE = 32768.0
SUPPORTED_BIT_DEPTHS = (16, 32)


@dataclass(frozen=True, slots=True)
class Decoded:
    samples: np.ndarray


@dataclass(frozen=True, slots=True)
class UnsupportedBitDepth:
    bits_per_sample: int

    @property
    def message(self) -> str:
        return f"unsupported bit depth: {self.bits_per_sample}"


DecodeResult = Union[Decoded, UnsupportedBitDepth]


def _whole_samples(payload: bytes, width: int) -> memoryview:
    view = memoryview(payload)
    return view[: (len(view) // width) * width]


def decode_pcm16(payload: bytes) -> np.ndarray:
    """Decode signed 16-bit PCM; a trailing odd byte is dropped."""

    ints = np.frombuffer(_whole_samples(payload, 2), dtype="<i2")
    return ints.astype(np.float32) / np.float32(PCM16_SCALE)


def decode_float32(payload: bytes) -> np.ndarray:
    floats = np.frombuffer(_whole_samples(payload, 4), dtype="<f4")
    return floats.astype(np.float32)


def decode_samples(payload: bytes, bits_per_sample: int) -> DecodeResult:
    if bits_per_sample == 16:
        return Decoded(decode_pcm16(payload))
    if bits_per_sample == 32:
        return Decoded(decode_float32(payload))
    return UnsupportedBitDepth(bits_per_sample)


def decode_raw_pcm(buffer: bytes) -> np.ndarray:
    """Headerless input is always read as 16-bit PCM over the whole buffer."""

    return decode_pcm16(buffer)
