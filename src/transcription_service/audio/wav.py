"""RIFF/WAVE container parsing.

Only the pieces needed to locate PCM samples are read: the ``fmt `` chunk for
format parameters and the first ``data`` chunk for the payload range. Any other
chunk (``LIST``, ``fact``, ``cue `` ...) is skipped using its declared size.

Chunks are walked in byte order and scanning stops at the first ``data`` chunk.
A ``fmt `` chunk stored after ``data`` is therefore never seen and the default
format (mono, 16 kHz, 16-bit) applies. Odd-sized chunks are not padded to an
even boundary.
"""

from __future__ import annotations

import logging
import struct
from typing import Iterator, Optional

from ..errors import WavFormatError
from .types import AudioDataSpan, ChunkHeader, WavContainer, WavFormat

logger = logging.getLogger(__name__)

RIFF_ID = b"RIFF"
WAVE_ID = b"WAVE"
FMT_ID = b"fmt "
DATA_ID = b"data"

_RIFF_HEADER_SIZE = 12
_CHUNK_HEADER = struct.Struct("<4sI")
# audio format, channels, sample rate, byte rate, block align, bits per sample
_FMT_FIELDS = struct.Struct("<HHIIHH")


def is_wav(buffer: bytes) -> bool:
    return (
        len(buffer) >= _RIFF_HEADER_SIZE
        and buffer[0:4] == RIFF_ID
        and buffer[8:12] == WAVE_ID
    )


def read_chunk_header(buffer: bytes, offset: int) -> Optional[ChunkHeader]:
    """Read the 8-byte chunk header at ``offset``.

    Returns ``None`` when fewer than 8 bytes remain. Raises ``WavFormatError``
    when the declared size runs past the end of the buffer.
    """

    if offset + _CHUNK_HEADER.size > len(buffer):
        return None
    chunk_id, size = _CHUNK_HEADER.unpack_from(buffer, offset)
    header = ChunkHeader(chunk_id=chunk_id, size=size, offset=offset)
    if header.next_offset > len(buffer):
        name = chunk_id.decode("ascii", errors="replace")
        raise WavFormatError(f"chunk '{name}' at offset {offset} exceeds buffer")
    return header


def iter_chunks(buffer: bytes, start: int = _RIFF_HEADER_SIZE) -> Iterator[ChunkHeader]:
    offset = start
    while True:
        header = read_chunk_header(buffer, offset)
        if header is None:
            return
        yield header
        offset = header.next_offset


def parse_fmt_chunk(buffer: bytes, header: ChunkHeader) -> WavFormat:
    if header.size < _FMT_FIELDS.size:
        raise WavFormatError("fmt chunk too short")
    audio_format, channels, sample_rate, _byte_rate, _block_align, bits = _FMT_FIELDS.unpack_from(
        buffer, header.payload_offset
    )
    if channels < 1 or sample_rate < 1:
        raise WavFormatError("invalid fmt chunk")
    return WavFormat(
        channels=channels,
        sample_rate=sample_rate,
        bits_per_sample=bits,
        audio_format=audio_format,
    )


def parse_wav(buffer: bytes) -> Optional[WavContainer]:
    """Locate format and payload of a WAV buffer.

    Returns ``None`` if the buffer does not carry the RIFF/WAVE signature so the
    caller can fall back to headerless PCM.
    """

    if not is_wav(buffer):
        return None

    fmt: Optional[WavFormat] = None
    for header in iter_chunks(buffer):
        if header.chunk_id == FMT_ID:
            fmt = parse_fmt_chunk(buffer, header)
            logger.debug(
                "audio.wav.fmt",
                extra={
                    "audio_format": fmt.audio_format,
                    "channels": fmt.channels,
                    "sample_rate": fmt.sample_rate,
                    "bits_per_sample": fmt.bits_per_sample,
                },
            )
        elif header.chunk_id == DATA_ID:
            span = AudioDataSpan(offset=header.payload_offset, length=header.size)
            if fmt is None:
                logger.warning("audio.wav.fmt_missing_before_data", extra={"data_offset": header.offset})
            return WavContainer(format=fmt or WavFormat(), data=span, format_found=fmt is not None)

    raise WavFormatError("no data chunk found in WAV file")
