from transcription_service.settings import load_settings


def test_load_settings_defaults(monkeypatch):
    for name in ("ASR_PROVIDER", "ASR_PRELOAD", "ASR_MAX_BYTES", "ASR_WHISPER_MODEL", "PORT", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)

    cfg = load_settings()

    assert cfg.asr.provider == "mock"
    assert cfg.asr.preload is False
    assert cfg.asr.max_bytes == 25 * 1024 * 1024
    assert cfg.asr.whisper_model == "tiny.en"
    assert cfg.server.port == 8100
    assert cfg.logging.level == "INFO"


def test_load_settings_from_env(monkeypatch):
    monkeypatch.setenv("ASR_PROVIDER", "whisper")
    monkeypatch.setenv("ASR_PRELOAD", "yes")
    monkeypatch.setenv("ASR_MAX_BYTES", "2048")
    monkeypatch.setenv("ASR_WHISPER_BEAM_SIZE", "not-a-number")
    monkeypatch.setenv("ASR_WHISPER_CACHE_DIR", "/models")

    cfg = load_settings()

    assert cfg.asr.provider == "whisper"
    assert cfg.asr.preload is True
    assert cfg.asr.max_bytes == 2048
    assert cfg.asr.whisper_beam_size == 1
    assert cfg.asr.whisper_cache_dir == "/models"
