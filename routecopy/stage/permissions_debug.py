"""Permission and ownership diagnostics for failed filesystem operations.

Only called from failure paths. Collecting context must never mask the
original error, so every probe swallows its own failures into a debug line.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Iterable, Optional

from routecopy.core.logger import setup_logger

logger = setup_logger(__name__)


def _user_name(uid: int) -> str:
    try:
        import pwd

        return pwd.getpwuid(uid).pw_name
    except Exception:
        return str(uid)


def _group_name(gid: int) -> str:
    try:
        import grp

        return grp.getgrgid(gid).gr_name
    except Exception:
        return str(gid)


def _log_process_identity(label: str, error: Optional[BaseException]) -> None:
    if not hasattr(os, "geteuid"):
        return
    euid, egid = os.geteuid(), os.getegid()
    logger.debug(
        "Process identity (%s): user=%s(%d) group=%s(%d) groups=%s%s",
        label,
        _user_name(euid),
        euid,
        _group_name(egid),
        egid,
        [_group_name(g) for g in os.getgroups()],
        f" error={error}" if error is not None else "",
    )


def _log_probes(label: str, probes: Iterable[Path]) -> None:
    for probe in probes:
        try:
            st = probe.stat()
        except OSError as stat_error:
            logger.debug("Path stat (%s): %s unavailable: %s", label, probe, stat_error)
            continue
        logger.debug(
            "Path stat (%s): %s mode=%s owner=%s group=%s dir=%s symlink=%s",
            label,
            probe,
            oct(st.st_mode & 0o777),
            _user_name(st.st_uid),
            _group_name(st.st_gid),
            probe.is_dir(),
            probe.is_symlink(),
        )


def log_path_permission_context(label: str, path: Path, error: Optional[BaseException] = None) -> None:
    """Log ownership context for a path and its nearest existing ancestor."""

    try:
        _log_process_identity(label, error)
        probes = [path]
        ancestor = path.parent
        while ancestor != ancestor.parent and not ancestor.exists():
            ancestor = ancestor.parent
        probes.append(ancestor)
        _log_probes(label, probes)
    except Exception as context_error:
        logger.debug("Permission context (%s): failed to collect: %s", label, context_error)


def log_transfer_permission_context(label: str, source: Path, dest: Path, error: BaseException) -> None:
    """Log ownership context when a copy between two paths fails."""

    try:
        _log_process_identity(label, error)
        _log_probes(label, [source, dest, dest.parent])
    except Exception as context_error:
        logger.debug("Permission context (%s): failed to collect: %s", label, context_error)
