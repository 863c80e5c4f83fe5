from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Optional

import numpy as np

from ..audio import (
    AudioIngestor,
    Decoded,
    IngestLimits,
    WavFormat,
    decode_raw_pcm,
    decode_samples,
    parse_wav,
)
from ..errors import InvalidAudioError, WavFormatError
from ..settings import AsrSettings
from .engine import AsrEngine
from .providers.base import AsrProvider
from .providers.mock import MockAsrProvider
from .providers.whisper import WhisperAsrProvider
from .types import AsrOptions, ErrorKind, TranscriptionResult

logger = logging.getLogger(__name__)

DEFAULT_MAX_BYTES = 25 * 1024 * 1024


@dataclass(frozen=True, slots=True)
class PreparedAudio:
    samples: np.ndarray
    format: WavFormat
    is_wav: bool


def build_provider(cfg: AsrSettings) -> AsrProvider:
    provider_name = (cfg.provider or "mock").strip().lower()
    if provider_name in {"mock", "fake"}:
        return MockAsrProvider()
    if provider_name in {"whisper", "faster-whisper"}:
        return WhisperAsrProvider(
            model=cfg.whisper_model,
            device=cfg.whisper_device,
            compute_type=cfg.whisper_compute_type,
            beam_size=cfg.whisper_beam_size,
            cache_dir=cfg.whisper_cache_dir,
        )
    raise RuntimeError(f"unsupported ASR provider: {cfg.provider}")


class TranscriptionService:
    """Turns an uploaded audio buffer into text.

    ``transcribe`` never raises: every failure comes back as a failed
    ``TranscriptionResult``.
    """

    def __init__(
        self,
        *,
        engine: Optional[AsrEngine] = None,
        ingestor: Optional[AudioIngestor] = None,
        default_lang: Optional[str] = None,
    ) -> None:
        self._engine = engine or AsrEngine(MockAsrProvider())
        self._ingestor = ingestor or AudioIngestor(limits=IngestLimits(max_bytes=DEFAULT_MAX_BYTES))
        self._default_lang = default_lang

    @classmethod
    def from_settings(cls, cfg: AsrSettings | None) -> "TranscriptionService":
        if cfg is None:
            return cls()
        return cls(
            engine=AsrEngine(build_provider(cfg)),
            ingestor=AudioIngestor(limits=IngestLimits(max_bytes=cfg.max_bytes)),
            default_lang=cfg.default_lang,
        )

    @property
    def engine(self) -> AsrEngine:
        return self._engine

    def prepare(self, audio: object) -> PreparedAudio:
        """Validate, parse and decode a buffer without touching the model."""

        buffer = self._ingestor.from_buffer(audio)
        container = parse_wav(buffer)
        if container is None:
            logger.info("asr.audio.raw_pcm_fallback", extra={"bytes": len(buffer)})
            return PreparedAudio(samples=decode_raw_pcm(buffer), format=WavFormat(), is_wav=False)

        span = container.data
        decoded = decode_samples(buffer[span.offset : span.end], container.format.bits_per_sample)
        if not isinstance(decoded, Decoded):
            raise WavFormatError(decoded.message)
        return PreparedAudio(samples=decoded.samples, format=container.format, is_wav=True)

    async def transcribe(self, audio: object) -> TranscriptionResult:
        try:
            prepared = self.prepare(audio)
        except InvalidAudioError as exc:
            logger.warning("asr.transcribe.invalid_input", extra={"reason": str(exc)})
            return TranscriptionResult.failed(str(exc), ErrorKind.INPUT)
        except WavFormatError as exc:
            logger.warning("asr.transcribe.invalid_format", extra={"reason": str(exc)})
            return TranscriptionResult.failed(str(exc), ErrorKind.FORMAT)
        except Exception as exc:
            logger.exception("asr.transcribe.decode_failed")
            return TranscriptionResult.failed(f"failed to decode audio: {exc}", ErrorKind.FORMAT)

        logger.info(
            "asr.transcribe.started",
            extra={"samples": int(prepared.samples.size), "sample_rate": prepared.format.sample_rate},
        )
        options = AsrOptions(lang=self._default_lang, sample_rate=prepared.format.sample_rate)
        started = time.perf_counter()
        try:
            result = await self._engine.infer(prepared.samples, options=options)
        except Exception as exc:
            logger.exception("asr.transcribe.failed", extra={"provider": self._engine.provider.name})
            return TranscriptionResult.failed(f"transcription failed: {exc}", ErrorKind.MODEL)

        logger.info(
            "asr.transcribe.finished",
            extra={
                "provider": result.provider or self._engine.provider.name,
                "duration_seconds": result.duration_seconds,
                "latency_ms": round((time.perf_counter() - started) * 1000.0, 1),
            },
        )
        return TranscriptionResult.ok(result.text or "")
