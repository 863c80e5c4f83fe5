import logging

from .settings import LoggingSettings


def setup_logger(cfg: LoggingSettings) -> logging.Logger:
    """
    Sets up the root logger based on the provided configuration.
    """
    level = (cfg.level or "INFO").upper()
    logging.basicConfig(level=level, format=cfg.format)
    # basicConfig is a no-op once the server has installed handlers
    logging.getLogger().setLevel(level)

    if cfg.file:
        file_handler = logging.FileHandler(cfg.file)
        file_handler.setFormatter(logging.Formatter(cfg.format))
        logging.getLogger().addHandler(file_handler)

    return logging.getLogger("transcription_service")
