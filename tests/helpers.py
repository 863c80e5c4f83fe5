"""Helpers for building WAV buffers and fake ASR providers in tests."""

import asyncio
import struct
from typing import Iterable, Optional

import numpy as np

from transcription_service.asr.providers.base import AsrProvider
from transcription_service.asr.types import AsrOptions, AsrResult


def pack_chunk(chunk_id: bytes, payload: bytes, declared_size: Optional[int] = None) -> bytes:
    size = len(payload) if declared_size is None else declared_size
    return chunk_id + struct.pack("<I", size) + payload


def fmt_payload(*, channels: int = 1, sample_rate: int = 16000, bits: int = 16, audio_format: int = 1) -> bytes:
    block_align = channels * bits // 8
    return struct.pack(
        "<HHIIHH",
        audio_format,
        channels,
        sample_rate,
        sample_rate * block_align,
        block_align,
        bits,
    )


def build_wav(chunks: Iterable[bytes]) -> bytes:
    body = b"WAVE" + b"".join(chunks)
    return b"RIFF" + struct.pack("<I", len(body)) + body


def make_wav(
    data: bytes,
    *,
    channels: int = 1,
    sample_rate: int = 16000,
    bits: int = 16,
    audio_format: int = 1,
) -> bytes:
    return build_wav(
        [
            pack_chunk(b"fmt ", fmt_payload(channels=channels, sample_rate=sample_rate, bits=bits, audio_format=audio_format)),
            pack_chunk(b"data", data),
        ]
    )


def pcm16_bytes(samples: np.ndarray) -> bytes:
    ints = np.clip(np.round(np.asarray(samples) * 32768.0), -32768, 32767).astype("<i2")
    return ints.tobytes()


class CountingProvider(AsrProvider):
    """Fake provider that records loads and inference calls."""

    name = "counting"

    def __init__(self, *, text: str = "hello world", load_delay: float = 0.0, fail_loads: int = 0) -> None:
        self.text = text
        self.load_delay = load_delay
        self.fail_loads = fail_loads
        self.load_calls = 0
        self.seen: list[np.ndarray] = []

    async def load(self) -> None:
        self.load_calls += 1
        await asyncio.sleep(self.load_delay)
        if self.fail_loads > 0:
            self.fail_loads -= 1
            raise RuntimeError("model download failed")

    async def transcribe(self, *, samples: np.ndarray, options: AsrOptions) -> AsrResult:
        self.seen.append(samples)
        return AsrResult(text=self.text, provider=self.name)


class FailingProvider(CountingProvider):
    name = "failing"

    async def transcribe(self, *, samples: np.ndarray, options: AsrOptions) -> AsrResult:
        raise RuntimeError("inference exploded")
