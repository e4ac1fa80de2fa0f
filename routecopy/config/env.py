"""Bootstrap configuration read from the environment.

Values here are read once at import time. Stage options passed to
`CopyStage` take precedence over the copy-related defaults.
"""

import os
from pathlib import Path


def string_to_bool(s: str) -> bool:
    return s.lower() in ["true", "yes", "1", "y", "on"]


def _int_from_env(key: str, default: int) -> int:
    value = os.getenv(key)
    if value is None or not value.strip():
        return default
    try:
        return int(value)
    except ValueError:
        return default


DEBUG = string_to_bool(os.getenv("DEBUG", "false"))
LOG_LEVEL = "DEBUG" if DEBUG else os.getenv("LOG_LEVEL", "INFO").upper()
ENABLE_LOGGING = string_to_bool(os.getenv("ENABLE_LOGGING", "false"))
LOG_DIR = Path(os.getenv("LOG_ROOT", "/var/log/")) / "routecopy"

# Bytes per read; queue depth bounds how many chunks sit between reader and writer
COPY_CHUNK_SIZE = max(_int_from_env("COPY_CHUNK_SIZE", 64 * 1024), 1)
COPY_QUEUE_DEPTH = max(_int_from_env("COPY_QUEUE_DEPTH", 8), 1)
SHOW_PROGRESS = string_to_bool(os.getenv("SHOW_PROGRESS", "false"))
