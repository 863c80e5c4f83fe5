from __future__ import annotations

from dataclasses import dataclass

from ..errors import InvalidAudioError

_BUFFER_TYPES = (bytes, bytearray, memoryview)


@dataclass(slots=True)
class IngestLimits:
    max_bytes: int


class AudioIngestor:
    """Validates raw request bodies before any parsing happens."""

    def __init__(self, *, limits: IngestLimits) -> None:
        self._limits = limits

    def from_buffer(self, data: object) -> bytes:
        if not isinstance(data, _BUFFER_TYPES):
            raise InvalidAudioError("invalid audio buffer")
        try:
            buffer = bytes(data)
        except (TypeError, ValueError) as exc:
            raise InvalidAudioError("invalid audio buffer") from exc
        if not buffer:
            raise InvalidAudioError("invalid audio buffer")
        self._enforce_size(len(buffer))
        return buffer

    def _enforce_size(self, size: int) -> None:
        if self._limits.max_bytes > 0 and size > self._limits.max_bytes:
            raise InvalidAudioError("audio payload exceeds configured size limit")
