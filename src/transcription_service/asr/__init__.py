"""ASR engine and transcription façade."""

from .engine import AsrEngine, EngineState
from .service import TranscriptionService
from .types import AsrOptions, AsrResult, ErrorKind, TranscriptionResult

__all__ = [
    "AsrEngine",
    "EngineState",
    "TranscriptionService",
    "AsrOptions",
    "AsrResult",
    "ErrorKind",
    "TranscriptionResult",
]
