"""ASR provider implementations."""

from .base import AsrProvider
from .mock import MockAsrProvider
from .whisper import WhisperAsrProvider

__all__ = [
    "AsrProvider",
    "MockAsrProvider",
    "WhisperAsrProvider",
]
