"""WAV container parsing and PCM decoding."""

from .decoder import Decoded, DecodeResult, UnsupportedBitDepth, decode_raw_pcm, decode_samples
from .ingest import AudioIngestor, IngestLimits
from .types import AudioDataSpan, WavContainer, WavFormat
from .wav import parse_wav, read_chunk_header

__all__ = [
    "AudioIngestor",
    "IngestLimits",
    "AudioDataSpan",
    "WavContainer",
    "WavFormat",
    "Decoded",
    "DecodeResult",
    "UnsupportedBitDepth",
    "decode_samples",
    "decode_raw_pcm",
    "parse_wav",
    "read_chunk_header",
]
