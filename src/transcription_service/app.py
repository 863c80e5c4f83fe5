import asyncio
import logging
from typing import Any, Dict

from fastapi import FastAPI, Request, Response
from fastapi.responses import JSONResponse

from .asr import ErrorKind, TranscriptionService
from .logger import setup_logger
from .settings import settings as runtime_settings

setup_logger(runtime_settings.logging)

app = FastAPI()
logger = logging.getLogger(__name__)
asr_cfg = runtime_settings.asr
_preload_task = None

try:
    transcription_service = TranscriptionService.from_settings(asr_cfg)
except Exception:  # pragma: no cover - fallback to mock provider if config invalid
    logger.exception("asr.provider_init_failed", extra={"provider": asr_cfg.provider})
    transcription_service = TranscriptionService()

_STATUS_BY_KIND = {
    ErrorKind.INPUT: 400,
    ErrorKind.FORMAT: 422,
    ErrorKind.MODEL: 502,
}


@app.get("/health")
async def health() -> Dict[str, Any]:
    engine = transcription_service.engine
    return {
        "status": "ok",
        "service": "transcription-service",
        "provider": engine.provider.name,
        "engine_state": engine.state.value,
    }


@app.head("/model/whisper")
async def whisper_probe() -> Response:
    return Response(status_code=200)


@app.post("/model/whisper")
async def transcribe_audio(request: Request) -> JSONResponse:
    # format is sniffed from the bytes; content type and file name are ignored
    body = await request.body()
    result = await transcription_service.transcribe(body)
    status_code = 200 if result.success else _STATUS_BY_KIND.get(result.error_kind, 400)
    return JSONResponse(result.to_response(), status_code=status_code)


async def _preload_engine() -> None:
    try:
        await transcription_service.engine.ensure_loaded()
    except Exception:
        logger.exception("asr.preload_failed", extra={"provider": asr_cfg.provider})


@app.on_event("startup")
async def _on_startup():
    global _preload_task
    if asr_cfg.preload:
        _preload_task = asyncio.create_task(_preload_engine())


@app.on_event("shutdown")
async def _on_shutdown():
    global _preload_task
    if _preload_task and not _preload_task.done():
        _preload_task.cancel()
    _preload_task = None
    await transcription_service.engine.cancel_load()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "transcription_service.app:app",
        host=runtime_settings.server.host,
        port=runtime_settings.server.port,
        reload=False,
    )
