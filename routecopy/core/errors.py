"""Error taxonomy for the copy stage.

Every error renders as ``"routecopy: <message>"`` so a failed run always names
the stage that stopped it.
"""

from __future__ import annotations

from typing import Optional

STAGE_NAME = "routecopy"


class CopyStageError(Exception):
    """Base class for all copy stage failures."""

    def __init__(
        self,
        message: str,
        path: Optional[str] = None,
        cause: Optional[BaseException] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.path = path
        self.cause = cause

    def __str__(self) -> str:
        return f"{STAGE_NAME}: {self.message}"


class InvalidConfiguration(CopyStageError):
    """Destination or options are missing or malformed."""


class StreamingUnsupported(CopyStageError):
    """File object carries open-stream content."""

    def __init__(self, path: Optional[str] = None) -> None:
        message = "Streaming not supported" if path is None else f"Streaming not supported <{path}>"
        super().__init__(message, path=path)


class NoDestinationMatch(CopyStageError):
    """No routed pattern matched the file's relative path."""

    def __init__(self, path: str) -> None:
        super().__init__(f'No destination found for "{path}"', path=path)


class DirectoryCreateFailed(CopyStageError):
    def __init__(self, path: str, cause: BaseException) -> None:
        super().__init__(f"Could not create destination <{path}>: {cause}", path=path, cause=cause)


class CopyFailed(CopyStageError):
    def __init__(self, path: str, cause: BaseException) -> None:
        super().__init__(f"Could not copy file <{path}>: {cause}", path=path, cause=cause)
