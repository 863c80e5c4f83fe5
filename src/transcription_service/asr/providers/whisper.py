from __future__ import annotations

import asyncio
from typing import Iterable, Optional

import numpy as np

from ..types import AsrOptions, AsrResult
from .base import AsrProvider

try:  # pragma: no cover - optional dependency
    from faster_whisper import WhisperModel
except Exception:  # pragma: no cover - guard for environments without faster-whisper
    WhisperModel = None  # type: ignore[assignment]


class WhisperAsrProvider(AsrProvider):
    """ASR provider backed by faster-whisper."""

    name = "whisper"

    def __init__(
        self,
        *,
        model: str = "tiny.en",
        device: str = "auto",
        compute_type: str = "int8",
        beam_size: int = 1,
        temperature: float = 0.0,
        cache_dir: Optional[str] = None,
    ) -> None:
        if WhisperModel is None:
            raise RuntimeError("faster-whisper must be installed to use WhisperAsrProvider")

        self._model_name = model
        self._device = device
        self._compute_type = compute_type
        self._beam_size = max(1, beam_size)
        self._temperature = max(0.0, temperature)
        self._cache_dir = cache_dir

        self._model: WhisperModel | None = None

    async def load(self) -> None:
        if self._model is None:
            self._model = await asyncio.to_thread(self._build_model)

    def _build_model(self) -> WhisperModel:
        return WhisperModel(
            self._model_name,
            device=self._device,
            compute_type=self._compute_type,
            download_root=self._cache_dir,
        )

    async def transcribe(self, *, samples: np.ndarray, options: AsrOptions) -> AsrResult:
        if self._model is None:
            raise RuntimeError("whisper model not loaded")

        segments, info = await asyncio.to_thread(self._run_transcribe, samples, options.lang)

        text_parts: list[str] = []
        for segment in segments:
            segment_text = (getattr(segment, "text", "") or "").strip()
            if segment_text:
                text_parts.append(segment_text)

        return AsrResult(
            text=" ".join(text_parts).strip(),
            duration_seconds=getattr(info, "duration", None),
            provider=self.name,
        )

    def _run_transcribe(self, samples: np.ndarray, language: Optional[str]) -> tuple[Iterable[object], object]:
        audio = np.ascontiguousarray(samples, dtype=np.float32)
        segments, info = self._model.transcribe(
            audio,
            language=language,
            beam_size=self._beam_size,
            temperature=self._temperature,
            without_timestamps=True,
            task="transcribe",
        )
        # faster-whisper yields segments lazily; decoding happens while iterating
        return list(segments), info
