"""Relative path computation and prefix stripping.

Everything here works on forward-slash strings so routing and output layout
behave the same on every platform.
"""

from __future__ import annotations

import os


def to_forward_slashes(path: str) -> str:
    return path.replace("\\", "/")


def normalize_relative_path(base_path: str, path: str) -> str:
    """Path of `path` relative to `base_path`, with `/` separators and no leading `./`."""
    relative = to_forward_slashes(os.path.relpath(os.fspath(path), os.fspath(base_path)))
    while relative.startswith("./"):
        relative = relative[2:]
    return relative


def strip_prefix(relative_path: str, count: int) -> str:
    """Drop the first `count` segments of a relative path.

    Each step discards everything up to and including the next `/`; a step
    with no `/` left empties the remainder. Over-stripping returns "".
    """
    remainder = relative_path
    for _ in range(count):
        slash = remainder.find("/")
        remainder = remainder[slash + 1:] if slash >= 0 else ""
    return remainder


def count_segments(relative_path: str) -> int:
    if not relative_path:
        return 0
    return len(relative_path.split("/"))


def compose_target_path(root: str, relative_path: str) -> str:
    return f"{to_forward_slashes(os.fspath(root))}/{relative_path}"


def parent_directory(target_path: str) -> str:
    slash = target_path.rfind("/")
    return target_path[:slash] if slash >= 0 else ""
