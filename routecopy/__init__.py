"""File routing and copy stage for build/streaming pipelines."""

from routecopy.core.errors import (
    CopyFailed,
    CopyStageError,
    DirectoryCreateFailed,
    InvalidConfiguration,
    NoDestinationMatch,
    StreamingUnsupported,
)
from routecopy.core.models import ContentKind, CopyOutcome, FileObject, StageConfig
from routecopy.stage.pipeline import CopyStage, copy_stage

__all__ = [
    "ContentKind",
    "CopyFailed",
    "CopyOutcome",
    "CopyStage",
    "CopyStageError",
    "DirectoryCreateFailed",
    "FileObject",
    "InvalidConfiguration",
    "NoDestinationMatch",
    "StageConfig",
    "StreamingUnsupported",
    "copy_stage",
]
