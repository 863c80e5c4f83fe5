from __future__ import annotations

"""Runtime configuration helpers for the transcription service."""

import os
from dataclasses import dataclass

_BOOL_TRUTHY = {"1", "true", "yes", "on"}


def _env_bool(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in _BOOL_TRUTHY


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None:
        return default
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def _env_str(name: str, default: str | None = None) -> str | None:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    return value.strip()


@dataclass(frozen=True)
class AsrSettings:
    provider: str
    preload: bool
    max_bytes: int
    default_lang: str | None
    whisper_model: str
    whisper_device: str
    whisper_compute_type: str
    whisper_beam_size: int
    whisper_cache_dir: str | None


@dataclass(frozen=True)
class LoggingSettings:
    level: str
    format: str
    file: str | None


@dataclass(frozen=True)
class ServerSettings:
    host: str
    port: int


@dataclass(frozen=True)
class Settings:
    asr: AsrSettings
    logging: LoggingSettings
    server: ServerSettings


def load_settings() -> Settings:
    """Load settings from environment variables with sensible defaults."""

    asr_settings = AsrSettings(
        provider=_env_str("ASR_PROVIDER", "mock"),
        preload=_env_bool("ASR_PRELOAD", False),
        max_bytes=_env_int("ASR_MAX_BYTES", 25 * 1024 * 1024),
        default_lang=_env_str("ASR_DEFAULT_LANG", "en"),
        whisper_model=_env_str("ASR_WHISPER_MODEL", "tiny.en"),
        whisper_device=_env_str("ASR_WHISPER_DEVICE", "auto"),
        whisper_compute_type=_env_str("ASR_WHISPER_COMPUTE_TYPE", "int8"),
        whisper_beam_size=_env_int("ASR_WHISPER_BEAM_SIZE", 1),
        whisper_cache_dir=_env_str("ASR_WHISPER_CACHE_DIR"),
    )

    logging_settings = LoggingSettings(
        level=_env_str("LOG_LEVEL", "INFO"),
        format=_env_str("LOG_FORMAT", "%(asctime)s - %(name)s - %(levelname)s - %(message)s"),
        file=_env_str("LOG_FILE"),
    )

    server_settings = ServerSettings(
        host=_env_str("HOST", "0.0.0.0"),
        port=_env_int("PORT", 8100),
    )

    return Settings(asr=asr_settings, logging=logging_settings, server=server_settings)


settings = load_settings()

__all__ = [
    "Settings",
    "AsrSettings",
    "LoggingSettings",
    "ServerSettings",
    "settings",
    "load_settings",
]
