from __future__ import annotations

import abc

import numpy as np

from ..types import AsrOptions, AsrResult


class AsrProvider(abc.ABC):
    """Interface for ASR providers."""

    name: str

    @abc.abstractmethod
    async def load(self) -> None:
        """Load model weights. Called once per successful engine load."""
        raise NotImplementedError

    @abc.abstractmethod
    async def transcribe(self, *, samples: np.ndarray, options: AsrOptions) -> AsrResult:
        """Produce a transcription for normalized float32 samples."""
        raise NotImplementedError
