"""The copy stage: routes each file object to its destination and copies it.

File objects are handled strictly one at a time. A failure on any file ends
the run; nothing is skipped and nothing is retried.
"""

from __future__ import annotations

from typing import Any, Callable, Iterable, Iterator, List, Optional

from routecopy.core.errors import CopyStageError, StreamingUnsupported
from routecopy.core.logger import setup_logger
from routecopy.core.matching import PathMatcher, glob_match
from routecopy.core.models import CopyOutcome, FileObject, PlanStep, StageConfig
from routecopy.stage.destination import resolve_destination
from routecopy.stage.fs import ensure_directory
from routecopy.stage.options import build_stage_config
from routecopy.stage.paths import (
    compose_target_path,
    count_segments,
    normalize_relative_path,
    parent_directory,
    strip_prefix,
)
from routecopy.stage.steps import log_plan_steps, record_step
from routecopy.stage.transfer import copy_file

logger = setup_logger(__name__)

StatusCallback = Callable[[str, Optional[str]], None]


class CopyStage:
    """Pipeline stage that copies file objects to a fixed or routed destination.

    Args:
        destination: A path (fixed destination) or a mapping of glob pattern to
            path (routed destination, first match wins in insertion order).
        options: Optional mapping with `prefix`, `chunk_size`, `show_progress`.
        matcher: Predicate `matcher(path, pattern)` used for routed lookups.
        status_callback: Optional `callback(status, message)` receiving
            "copying", "complete", "skipped" and "error" updates.

    Raises:
        InvalidConfiguration: Immediately, if the configuration is malformed.
    """

    def __init__(
        self,
        destination: Any,
        options: Optional[Any] = None,
        *,
        matcher: PathMatcher = glob_match,
        status_callback: Optional[StatusCallback] = None,
    ) -> None:
        self.config: StageConfig = build_stage_config(destination, options)
        self.matcher = matcher
        self.status_callback = status_callback

    def _status(self, status: str, message: Optional[str] = None) -> None:
        if self.status_callback:
            self.status_callback(status, message)

    def _copy_content(self, file: FileObject, steps: List[PlanStep]) -> CopyOutcome:
        original_relative = normalize_relative_path(file.base_path, file.path)
        relative = original_relative
        if self.config.prefix:
            relative = strip_prefix(original_relative, self.config.prefix)
            if self.config.prefix >= count_segments(original_relative):
                logger.warning(
                    "Prefix %d strips all of %s; copying to the destination root itself",
                    self.config.prefix,
                    original_relative,
                )
        record_step(steps, "normalize", relative=relative)

        root = resolve_destination(self.config.destination, original_relative, self.matcher)
        record_step(steps, "resolve", root=root)

        target_path = compose_target_path(root, relative)
        ensure_directory(parent_directory(target_path))
        record_step(steps, "provision")

        self._status("copying", f"{file.path} -> {target_path}")
        copy_file(
            file.path,
            target_path,
            chunk_size=self.config.chunk_size,
            show_progress=self.config.show_progress,
        )
        record_step(steps, "copy", target=target_path)

        file.path = target_path
        return CopyOutcome.success(file, target_path)

    def transform(self, file: FileObject) -> CopyOutcome:
        """Process one file object and return exactly one outcome for it."""

        steps: List[PlanStep] = []
        record_step(steps, "classify", kind=file.kind.value)

        try:
            if file.is_stream():
                raise StreamingUnsupported(file.path)

            if file.is_null():
                record_step(steps, "pass_through")
                self._status("skipped", file.path)
                return CopyOutcome.success(file, file.path, copied=False)

            outcome = self._copy_content(file, steps)
            self._status("complete", outcome.new_path)
            return outcome

        except CopyStageError as exc:
            record_step(steps, "failed", error=type(exc).__name__)
            logger.warning(str(exc))
            self._status("error", str(exc))
            return CopyOutcome.failure(file, exc)

        finally:
            log_plan_steps(file.path, steps)

    def process(self, file: FileObject) -> FileObject:
        """Forward `file` (possibly with a rewritten path) or raise its failure."""

        outcome = self.transform(file)
        if outcome.error is not None:
            raise outcome.error
        return outcome.file

    def run(self, files: Iterable[FileObject]) -> Iterator[FileObject]:
        """Process `files` in order, pulling the next only after the current one
        is done. Stops at the first failure by raising it."""

        processed = 0
        for file in files:
            try:
                forwarded = self.process(file)
            except CopyStageError:
                logger.error("Copy run aborted after %d file(s)", processed)
                raise
            except Exception as exc:
                logger.error_trace(f"Unexpected error copying {file.path}: {exc}")
                raise
            processed += 1
            yield forwarded
        logger.info("Copy run finished: %d file(s) forwarded", processed)


def copy_stage(destination: Any, options: Optional[Any] = None, **kwargs: Any) -> CopyStage:
    """Build a `CopyStage`; see `CopyStage` for arguments."""
    return CopyStage(destination, options, **kwargs)
