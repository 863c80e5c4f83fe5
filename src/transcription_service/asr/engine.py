"""Process-wide ASR engine with at-most-once model loading.

The engine moves ``UNLOADED -> LOADING -> READY``. Concurrent callers that
arrive while a load is running await the same task instead of starting their
own. A failed load drops back to ``UNLOADED`` so the next request retries.
"""

from __future__ import annotations

import asyncio
import enum
import logging
import time
from typing import Optional

import numpy as np

from .providers.base import AsrProvider
from .types import AsrOptions, AsrResult

logger = logging.getLogger(__name__)


class EngineState(str, enum.Enum):
    UNLOADED = "unloaded"
    LOADING = "loading"
    READY = "ready"


class AsrEngine:
    def __init__(self, provider: AsrProvider) -> None:
        self._provider = provider
        self._state = EngineState.UNLOADED
        self._load_task: Optional[asyncio.Task[None]] = None
        self.load_count = 0

    @property
    def provider(self) -> AsrProvider:
        return self._provider

    @property
    def state(self) -> EngineState:
        return self._state

    async def ensure_loaded(self) -> None:
        if self._state is EngineState.READY:
            return
        if self._load_task is None:
            self._state = EngineState.LOADING
            self.load_count += 1
            self._load_task = asyncio.create_task(self._load())
        # one caller giving up must not cancel the load for everyone else
        await asyncio.shield(self._load_task)

    async def _load(self) -> None:
        started = time.perf_counter()
        logger.info("asr.engine.load_started", extra={"provider": self._provider.name})
        try:
            await self._provider.load()
        except BaseException:
            self._state = EngineState.UNLOADED
            self._load_task = None
            logger.warning("asr.engine.load_failed", extra={"provider": self._provider.name})
            raise
        self._state = EngineState.READY
        logger.info(
            "asr.engine.load_finished",
            extra={
                "provider": self._provider.name,
                "latency_ms": round((time.perf_counter() - started) * 1000.0, 1),
            },
        )

    async def cancel_load(self) -> None:
        """Cancel an in-flight load and wait for it to unwind."""

        task = self._load_task
        if task is None or task.done():
            return
        task.cancel()
        await asyncio.gather(task, return_exceptions=True)
        # a task cancelled before it ever ran skips the reset in _load
        if self._load_task is task:
            self._load_task = None
            self._state = EngineState.UNLOADED

    async def infer(self, samples: np.ndarray, *, options: Optional[AsrOptions] = None) -> AsrResult:
        await self.ensure_loaded()
        return await self._provider.transcribe(samples=samples, options=options or AsrOptions())
