"""Error types raised while scanning and copying docs directories."""

from pathlib import Path
from typing import Optional, Union

PathLike = Union[str, Path]


class CpDocsError(Exception):
    """Base class for all cp-docs failures. Always names the failing path."""

    message = "cp-docs failed"

    def __init__(self, path: PathLike, reason: Optional[str] = None):
        self.path = Path(path)
        self.reason = reason
        super().__init__(str(self))

    def __str__(self) -> str:
        text = f"{self.message}: {self.path}"
        if self.reason:
            text += f" ({self.reason})"
        return text


class TraversalError(CpDocsError):
    """Source root missing, not a directory, or unreadable during the scan."""

    message = "Cannot scan directory"


class CopyError(CpDocsError):
    """Failure creating, cleaning or writing into the destination tree.

    ``path`` is the destination entry being written, ``source`` the entry being
    copied from when there is one.
    """

    message = "Cannot copy into"

    def __init__(self, path: PathLike, reason: Optional[str] = None, source: Optional[PathLike] = None):
        self.source = Path(source) if source is not None else None
        super().__init__(path, reason)

    def __str__(self) -> str:
        text = super().__str__()
        if self.source is not None:
            text += f" (from {self.source})"
        return text


def describe_os_error(exc: OSError) -> str:
    """Short human readable reason for an OSError."""
    return exc.strerror or exc.__class__.__name__
