"""Logging setup shared by every module.

Modules call `setup_logger(__name__)` once at import time and log through the
returned `CustomLogger`.
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from typing import Any

from routecopy.config import env

_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class CustomLogger(logging.Logger):
    """Logger with an `error_trace` shortcut for errors with stack traces."""

    def error_trace(self, msg: Any, *args: Any, **kwargs: Any) -> None:
        kwargs.setdefault("exc_info", True)
        self.error(msg, *args, **kwargs)


logging.setLoggerClass(CustomLogger)


def setup_logger(name: str) -> CustomLogger:
    logger = logging.getLogger(name)
    logger.setLevel(env.LOG_LEVEL)

    if logger.handlers:
        return logger  # type: ignore[return-value]

    formatter = logging.Formatter(_FORMAT)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if env.ENABLE_LOGGING:
        try:
            env.LOG_DIR.mkdir(parents=True, exist_ok=True)
            file_handler = RotatingFileHandler(
                env.LOG_DIR / "routecopy.log",
                maxBytes=10 * 1024 * 1024,
                backupCount=5,
            )
            file_handler.setFormatter(formatter)
            logger.addHandler(file_handler)
        except OSError as exc:
            logger.warning(f"File logging disabled, cannot write to {env.LOG_DIR}: {exc}")

    return logger  # type: ignore[return-value]
