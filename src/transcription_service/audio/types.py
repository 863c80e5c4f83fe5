from __future__ import annotations

from dataclasses import dataclass

DEFAULT_CHANNELS = 1
DEFAULT_SAMPLE_RATE = 16000
DEFAULT_BITS_PER_SAMPLE = 16


@dataclass(frozen=True, slots=True)
class WavFormat:
    """Format parameters taken from a ``fmt `` chunk."""

    channels: int = DEFAULT_CHANNELS
    sample_rate: int = DEFAULT_SAMPLE_RATE
    bits_per_sample: int = DEFAULT_BITS_PER_SAMPLE
    audio_format: int = 1


@dataclass(frozen=True, slots=True)
class AudioDataSpan:
    """Byte range of the audio payload inside the original buffer."""

    offset: int
    length: int

    @property
    def end(self) -> int:
        return self.offset + self.length


@dataclass(frozen=True, slots=True)
class ChunkHeader:
    chunk_id: bytes
    size: int
    offset: int

    @property
    def payload_offset(self) -> int:
        return self.offset + 8

    @property
    def next_offset(self) -> int:
        return self.offset + 8 + self.size


@dataclass(frozen=True, slots=True)
class WavContainer:
    """Result of parsing a RIFF/WAVE buffer."""

    format: WavFormat
    data: AudioDataSpan
    format_found: bool = True
