"""Construction-time validation of stage configuration."""

from __future__ import annotations

import os
from collections.abc import Mapping
from typing import Any, Optional, Tuple

from routecopy.config import env
from routecopy.core.errors import InvalidConfiguration
from routecopy.core.logger import setup_logger
from routecopy.core.models import DestinationSpec, FixedDestination, RoutedDestination, StageConfig

logger = setup_logger(__name__)

KNOWN_OPTIONS = ("prefix", "chunk_size", "show_progress")


def _is_path(value: Any) -> bool:
    return isinstance(value, (str, os.PathLike))


def parse_destination(destination: Any) -> DestinationSpec:
    if _is_path(destination):
        return FixedDestination(root=os.fspath(destination))

    if isinstance(destination, Mapping) and destination:
        routes: Tuple[Tuple[str, str], ...] = ()
        for pattern, root in destination.items():
            if not isinstance(pattern, str) or not _is_path(root):
                raise InvalidConfiguration("No valid destination specified")
            routes += ((pattern, os.fspath(root)),)
        return RoutedDestination(routes=routes)

    raise InvalidConfiguration("No valid destination specified")


def _non_negative_int(options: Mapping, key: str, default: int) -> int:
    value = options.get(key)
    if value is None:
        return default
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise InvalidConfiguration(f"Option '{key}' must be a non-negative integer, got {value!r}")
    return value


def build_stage_config(destination: Any, options: Optional[Any] = None) -> StageConfig:
    """Validate `destination` and `options` into an immutable `StageConfig`.

    Raises:
        InvalidConfiguration: On a missing or malformed destination, or when
            `options` is given but is not a mapping of valid values.
    """

    spec = parse_destination(destination)

    if options is None:
        options = {}
    elif not isinstance(options, Mapping):
        raise InvalidConfiguration("No valid options specified")

    unknown = sorted(str(key) for key in options if key not in KNOWN_OPTIONS)
    if unknown:
        logger.warning("Ignoring unknown copy options: %s", ", ".join(unknown))

    prefix = _non_negative_int(options, "prefix", 0)
    chunk_size = _non_negative_int(options, "chunk_size", env.COPY_CHUNK_SIZE)
    if chunk_size == 0:
        raise InvalidConfiguration("Option 'chunk_size' must be greater than zero")

    show_progress = options.get("show_progress")
    if show_progress is None:
        show_progress = env.SHOW_PROGRESS
    elif not isinstance(show_progress, bool):
        raise InvalidConfiguration(f"Option 'show_progress' must be a boolean, got {show_progress!r}")

    return StageConfig(
        destination=spec,
        prefix=prefix,
        chunk_size=chunk_size,
        show_progress=show_progress,
    )
