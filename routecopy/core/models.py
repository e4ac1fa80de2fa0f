from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Tuple, Union

from routecopy.core.errors import CopyStageError


class ContentKind(str, Enum):
    """How a file object carries its content."""
    EMPTY = "empty"      # Directory entry or placeholder, forwarded untouched
    CONTENT = "content"  # Bytes on disk at `path`
    STREAM = "stream"    # Incremental content, not materialized on disk


@dataclass
class FileObject:
    """A file flowing through the pipeline.

    Only `path` is ever reassigned by the copy stage, and only after a
    successful copy.
    """
    path: str
    base_path: str
    kind: ContentKind = ContentKind.CONTENT
    cwd: Optional[str] = None

    def is_null(self) -> bool:
        return self.kind == ContentKind.EMPTY

    def is_stream(self) -> bool:
        return self.kind == ContentKind.STREAM


@dataclass(frozen=True)
class FixedDestination:
    root: str


@dataclass(frozen=True)
class RoutedDestination:
    """Ordered (pattern, root) pairs; the first matching pattern wins."""
    routes: Tuple[Tuple[str, str], ...]

    def __post_init__(self) -> None:
        if not self.routes:
            raise ValueError("RoutedDestination requires at least one route")


DestinationSpec = Union[FixedDestination, RoutedDestination]


@dataclass(frozen=True)
class StageConfig:
    destination: DestinationSpec
    prefix: int = 0
    chunk_size: int = 64 * 1024
    show_progress: bool = False


@dataclass(frozen=True)
class CopyOutcome:
    """Result of processing one file object: exactly one per input."""
    file: FileObject
    new_path: Optional[str] = None
    copied: bool = False
    error: Optional[CopyStageError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, file: FileObject, new_path: str, copied: bool = True) -> "CopyOutcome":
        return cls(file=file, new_path=new_path, copied=copied)

    @classmethod
    def failure(cls, file: FileObject, error: CopyStageError) -> "CopyOutcome":
        return cls(file=file, error=error)


@dataclass(frozen=True)
class PlanStep:
    name: str
    details: Dict[str, Any] = field(default_factory=dict)
