"""Streaming byte copy between two paths.

A reader thread pushes fixed-size chunks through a bounded queue to a writer
thread, so memory use never depends on file size. Three events can end a
copy: the reader failing, the writer failing, and the writer closing the
target after the last chunk. They race freely; a `CompletionLatch` keeps the
first one and drops the rest, and the caller waits on that latch only.
"""

from __future__ import annotations

import os
from pathlib import Path
from queue import Empty, Full, Queue
from shutil import SameFileError
from threading import Event, Lock, Thread
from typing import Any, Optional, Union

from tqdm import tqdm

from routecopy.config import env
from routecopy.core.errors import CopyFailed
from routecopy.core.logger import setup_logger
from routecopy.stage.permissions_debug import log_transfer_permission_context

logger = setup_logger(__name__)

_EOF = object()
_POLL_INTERVAL = 0.05

PathLike = Union[str, "os.PathLike[str]"]


class CompletionLatch:
    """One-shot completion signal shared by the reader and writer threads."""

    def __init__(self) -> None:
        self._lock = Lock()
        self._event = Event()
        self._error: Optional[BaseException] = None
        self._origin: Optional[str] = None

    @property
    def done(self) -> bool:
        return self._event.is_set()

    @property
    def origin(self) -> Optional[str]:
        """Which event completed the copy: "read", "write" or "close"."""
        return self._origin

    @property
    def error(self) -> Optional[BaseException]:
        return self._error

    def fire(self, error: Optional[BaseException], origin: str) -> bool:
        """Record completion. Returns False if an earlier event already won."""
        with self._lock:
            if self._event.is_set():
                logger.debug("Ignoring late %s completion (already finished by %s)", origin, self._origin)
                return False
            self._error = error
            self._origin = origin
            self._event.set()
            return True

    def wait(self) -> Optional[BaseException]:
        self._event.wait()
        return self._error


def _offer(chunks: Queue, item: Any, latch: CompletionLatch) -> bool:
    while not latch.done:
        try:
            chunks.put(item, timeout=_POLL_INTERVAL)
            return True
        except Full:
            continue
    return False


def _read_source(source: str, chunk_size: int, chunks: Queue, latch: CompletionLatch) -> None:
    try:
        with open(source, "rb") as handle:
            while not latch.done:
                chunk = handle.read(chunk_size)
                if not chunk:
                    break
                if not _offer(chunks, chunk, latch):
                    return
    except Exception as exc:
        latch.fire(exc, "read")
        return
    _offer(chunks, _EOF, latch)


def _write_target(target: str, chunks: Queue, latch: CompletionLatch, progress: tqdm) -> None:
    try:
        with open(target, "wb") as handle:
            while True:
                try:
                    chunk = chunks.get(timeout=_POLL_INTERVAL)
                except Empty:
                    if latch.done:
                        return
                    continue
                if chunk is _EOF:
                    break
                if latch.done:
                    return
                handle.write(chunk)
                progress.update(len(chunk))
    except Exception as exc:
        latch.fire(exc, "write")
        return
    latch.fire(None, "close")


def _is_same_file(source: str, target: str) -> bool:
    try:
        return os.path.exists(target) and os.path.samefile(source, target)
    except OSError:
        return False


def copy_file(
    source: PathLike,
    target: PathLike,
    chunk_size: int = env.COPY_CHUNK_SIZE,
    show_progress: bool = env.SHOW_PROGRESS,
    queue_depth: int = env.COPY_QUEUE_DEPTH,
) -> None:
    """Copy `source` to `target` byte for byte, overwriting `target`.

    Blocks until the copy completes. Bytes already written stay in place when
    the copy fails.

    Raises:
        CopyFailed: If reading the source or writing the target fails,
            or if `target` is the same file as `source`.
    """
    source_path = os.fspath(source)
    target_path = os.fspath(target)

    if _is_same_file(source_path, target_path):
        error = SameFileError(f"{source_path!r} and {target_path!r} are the same file")
        logger.warning(f"Refusing to copy a file onto itself: {source_path}")
        raise CopyFailed(source_path, error)

    try:
        total: Optional[int] = os.path.getsize(source_path)
    except OSError:
        total = None  # the reader reports the real error

    latch = CompletionLatch()
    chunks: Queue = Queue(maxsize=queue_depth)
    progress = tqdm(
        total=total,
        unit="B",
        unit_scale=True,
        desc=os.path.basename(source_path) or "Copying",
        disable=not show_progress,
    )

    reader = Thread(
        target=_read_source,
        args=(source_path, chunk_size, chunks, latch),
        name="CopyReader",
        daemon=True,
    )
    writer = Thread(
        target=_write_target,
        args=(target_path, chunks, latch, progress),
        name="CopyWriter",
        daemon=True,
    )
    writer.start()
    reader.start()

    error = latch.wait()
    reader.join()
    writer.join()
    progress.close()

    if error is not None:
        if isinstance(error, PermissionError):
            log_transfer_permission_context("copy_file", Path(source_path), Path(target_path), error)
        logger.warning(f"Copy failed during {latch.origin} ({source_path} -> {target_path}): {error}")
        raise CopyFailed(source_path, error) from error

    logger.debug(f"Copied {source_path} -> {target_path}" + (f" ({total} bytes)" if total is not None else ""))
