from __future__ import annotations

import os
from pathlib import Path
from typing import Iterator, Union

from routecopy.core.logger import setup_logger
from routecopy.core.models import ContentKind, FileObject
from routecopy.stage.permissions_debug import log_path_permission_context

logger = setup_logger(__name__)


def collect_file_objects(
    base_dir: Union[str, "os.PathLike[str]"],
    include_directories: bool = True,
) -> Iterator[FileObject]:
    """Walk `base_dir` and yield a file object per entry, in sorted order.

    Directories come out as EMPTY objects (forwarded untouched by the copy
    stage), regular files as CONTENT objects. Unreadable subdirectories are
    logged and skipped.

    Raises:
        FileNotFoundError / NotADirectoryError / PermissionError: If `base_dir`
            itself cannot be listed.
    """

    base = Path(base_dir)
    try:
        with os.scandir(base) as it:
            next(it, None)
    except PermissionError:
        log_path_permission_context("scan_directory", base)
        raise

    base_path = str(base)
    logged_walk_permission_context = False

    def onerror(error: OSError) -> None:
        nonlocal logged_walk_permission_context

        if isinstance(error, PermissionError) and not logged_walk_permission_context:
            log_path_permission_context("scan_directory_walk", Path(error.filename or base))
            logged_walk_permission_context = True
        logger.debug(f"Skipping inaccessible path during scan: {error}")

    for root, dirs, files in os.walk(base, onerror=onerror):
        dirs.sort()
        if include_directories:
            for dirname in dirs:
                yield FileObject(
                    path=os.path.join(root, dirname),
                    base_path=base_path,
                    kind=ContentKind.EMPTY,
                )
        for filename in sorted(files):
            yield FileObject(
                path=os.path.join(root, filename),
                base_path=base_path,
                kind=ContentKind.CONTENT,
            )
