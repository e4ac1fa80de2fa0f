"""Directory provisioning for copy targets.

Creation goes through a single `mkdir(parents=True, exist_ok=True)` call
rather than a check-then-create pair, so directories created meanwhile by
another process are never reported as failures.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Union

from routecopy.core.errors import DirectoryCreateFailed
from routecopy.core.logger import setup_logger
from routecopy.stage.permissions_debug import log_path_permission_context

logger = setup_logger(__name__)


def ensure_directory(path: Union[str, "os.PathLike[str]"]) -> None:
    """Create `path` and any missing ancestors; no-op if it already exists.

    Raises:
        DirectoryCreateFailed: If a segment cannot be created, e.g. permission
            denied or an existing segment is a regular file.
    """
    raw = os.fspath(path)
    if not raw:
        return

    directory = Path(raw)
    try:
        directory.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        log_path_permission_context("ensure_directory", directory, error=exc)
        logger.warning(f"Cannot create destination: {directory} ({exc})")
        raise DirectoryCreateFailed(raw, exc) from exc
