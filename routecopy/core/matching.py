"""Glob matching for routed destinations.

Minimatch-style semantics from `wcmatch`: `*`, `?` and `[...]` never cross a
`/`, `**` spans segments, `{a,b}` expands, a leading `!` excludes, and
wildcards skip dot-files unless the pattern names the dot.
"""

from __future__ import annotations

from typing import Callable

from wcmatch import glob

PathMatcher = Callable[[str, str], bool]

GLOB_FLAGS = glob.GLOBSTAR | glob.BRACE | glob.NEGATE | glob.NEGATEALL | glob.FORCEUNIX


def glob_match(path: str, pattern: str) -> bool:
    """Return True if the forward-slash `path` matches the glob `pattern`."""
    return glob.globmatch(path, pattern, flags=GLOB_FLAGS)
