from __future__ import annotations


class TranscriptionError(Exception):
    """Base class for failures raised inside the transcription pipeline."""


class InvalidAudioError(TranscriptionError, ValueError):
    """Raised when the inbound buffer is missing, empty or too large."""


class WavFormatError(TranscriptionError, ValueError):
    """Raised when a RIFF/WAVE container is structurally broken."""
