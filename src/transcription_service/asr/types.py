from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, model_validator


@dataclass(slots=True)
class AsrOptions:
    lang: Optional[str] = None
    sample_rate: Optional[int] = None


@dataclass(slots=True)
class AsrResult:
    text: str
    duration_seconds: Optional[float] = None
    provider: Optional[str] = None


class ErrorKind(str, Enum):
    INPUT = "input"
    FORMAT = "format"
    MODEL = "model"


class TranscriptionResult(BaseModel):
    """Uniform outcome of a transcription request."""

    success: bool
    text: Optional[str] = None
    error: Optional[str] = None
    error_kind: Optional[ErrorKind] = None

    @model_validator(mode="after")
    def validate_payload(self) -> "TranscriptionResult":
        if self.success and self.text is None:
            raise ValueError("successful result must contain text")
        if not self.success and not self.error:
            raise ValueError("failed result must contain error")
        return self

    @classmethod
    def ok(cls, text: str) -> "TranscriptionResult":
        return cls(success=True, text=text)

    @classmethod
    def failed(cls, message: str, kind: ErrorKind) -> "TranscriptionResult":
        return cls(success=False, error=message, error_kind=kind)

    def to_response(self) -> Dict[str, Any]:
        if self.success:
            return {"success": True, "data": {"transcription": self.text}}
        return {"success": False, "error": self.error}
