from __future__ import annotations

import numpy as np

from ..types import AsrOptions, AsrResult
from .base import AsrProvider


class MockAsrProvider(AsrProvider):
    name = "mock"

    def __init__(self, *, text: str = "mock transcription") -> None:
        self._text = text

    async def load(self) -> None:
        return None

    async def transcribe(self, *, samples: np.ndarray, options: AsrOptions) -> AsrResult:
        duration = None
        if options.sample_rate:
            duration = float(len(samples)) / float(options.sample_rate)
        return AsrResult(text=self._text, duration_seconds=duration, provider=self.name)
