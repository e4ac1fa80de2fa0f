"""Copy stage internals.

- `paths`: relative path computation and prefix stripping
- `destination`: fixed/routed destination resolution
- `fs`: idempotent directory provisioning
- `transfer`: streaming copy with single-fire completion
- `options`: construction-time configuration validation
- `pipeline`: the stage itself
- `scan`: directory walker producing file objects
- `steps`: per-file plan logging
"""

from .destination import resolve_destination
from .fs import ensure_directory
from .options import build_stage_config
from .paths import compose_target_path, normalize_relative_path, parent_directory, strip_prefix
from .pipeline import CopyStage, copy_stage
from .scan import collect_file_objects
from .transfer import CompletionLatch, copy_file

__all__ = [
    "CompletionLatch",
    "CopyStage",
    "build_stage_config",
    "collect_file_objects",
    "compose_target_path",
    "copy_file",
    "copy_stage",
    "ensure_directory",
    "normalize_relative_path",
    "parent_directory",
    "resolve_destination",
    "strip_prefix",
]
