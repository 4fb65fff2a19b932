from __future__ import annotations

import logging
from pathlib import Path

from logfmter import Logfmter

from agentdeck.adapters.config.schema import LoggingConfig


def configure_logging(config: LoggingConfig) -> logging.Logger:
    if config.logfmt_enabled:
        formatter: logging.Formatter = Logfmter(
            keys=["at", "when", "name", "msg"],
            mapping={"at": "levelname", "when": "asctime"},
            datefmt="%Y%m%d %H:%M:%S",
        )
    else:
        formatter = logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s")

    logger = logging.getLogger("agentdeck")
    level = getattr(logging, getattr(config, "log_level", "INFO").upper(), logging.INFO)
    logger.setLevel(level)

    stream_handler = logging.StreamHandler()
    stream_handler.setFormatter(formatter)
    handlers: list[logging.Handler] = [stream_handler]

    if config.file_enabled:
        log_dir = Path(config.directory)
        log_dir.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_dir / "agentdeck.log")
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)

    logger.handlers = handlers
    logger.propagate = False
    return logger
