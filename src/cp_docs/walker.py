"""Depth-first search for ``docs`` directories inside a source tree."""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Iterator, List, Tuple

from loguru import logger

from cp_docs.errors import PathLike, TraversalError, describe_os_error

DOCS_DIR_NAME = "docs"

# Directories the original tool never descended into.
DEFAULT_IGNORE_PATTERNS = (
    "venv",
    "site-packages",
    "__pycache__",
    "node_modules",
    ".git",
    "target",
    "build",
    "third_party",
    "tests",
)

Chain = Tuple[str, ...]


@dataclass(frozen=True)
class DocsMatch:
    """A qualifying directory and the segments leading to it from the scan root."""

    chain: Chain
    path: Path

    @property
    def relative_path(self) -> Path:
        """Path of the docs directory relative to the scan root, e.g. ``A/B/docs``."""
        return Path(*self.chain, self.path.name)

    def destination_in(self, destination_root: PathLike) -> Path:
        """Where the contents of this docs directory land under ``destination_root``."""
        return Path(destination_root).joinpath(*self.chain)


def _list_subdirs(path: Path) -> List[os.DirEntry]:
    """Immediate subdirectories of ``path`` sorted by name. Symlinks are not followed."""
    try:
        with os.scandir(path) as entries:
            subdirs = [entry for entry in entries if entry.is_dir(follow_symlinks=False)]
    except OSError as e:
        raise TraversalError(path, describe_os_error(e)) from e
    subdirs.sort(key=lambda entry: entry.name)
    return subdirs


def _is_skipped(name: str, ignore_patterns: Iterable[str], skip_hidden: bool) -> bool:
    if skip_hidden and name.startswith((".", "_")):
        return True
    return any(pattern in name for pattern in ignore_patterns)


def walk_docs_dirs(
    root: PathLike,
    *,
    name: str = DOCS_DIR_NAME,
    ignore_case: bool = False,
    ignore_patterns: Iterable[str] = (),
    skip_hidden: bool = False,
    exclude: Iterable[PathLike] = (),
) -> Iterator[DocsMatch]:
    """
    Lazily yield every directory below ``root`` named ``name``, depth-first.

    Children are visited in lexicographic order of their names. The inside of a
    matched directory is never searched, so a ``docs`` folder nested in another
    one is payload of the outer match. The root itself is never a match.

    Args:
        root: Directory to scan
        name: Directory name that qualifies for copying
        ignore_case: Compare names case-insensitively
        ignore_patterns: Skip directories whose name contains any of these
        skip_hidden: Skip directories starting with ``.`` or ``_``
        exclude: Paths that are never entered (e.g. a destination inside root)
    Raises:
        TraversalError: root is missing, not a directory, or a directory is unreadable
    """
    root = Path(root)
    if not root.exists():
        raise TraversalError(root, "no such directory")
    if not root.is_dir():
        raise TraversalError(root, "not a directory")

    target = name.lower() if ignore_case else name
    patterns = tuple(ignore_patterns)
    excluded = {os.path.normcase(os.path.abspath(p)) for p in exclude}

    # Work-list of (directory, chain of its ancestors below root).
    stack: List[Tuple[Path, Chain]] = []

    def push_children(directory: Path, chain: Chain):
        logger.trace(f"Scanning {directory}")
        pending = []
        for entry in _list_subdirs(directory):
            if _is_skipped(entry.name, patterns, skip_hidden):
                logger.trace(f"Skipping ignored directory {entry.path}")
                continue
            if excluded and os.path.normcase(os.path.abspath(entry.path)) in excluded:
                logger.warning(f"Not searching excluded directory {entry.path}; docs directories below it are not copied")
                continue
            pending.append((Path(entry.path), chain))
        # Reversed so the smallest name is popped first.
        stack.extend(reversed(pending))

    push_children(root, ())
    while stack:
        current, chain = stack.pop()
        current_name = current.name
        if (current_name.lower() if ignore_case else current_name) == target:
            match = DocsMatch(chain=chain, path=current)
            logger.debug(f"Found docs directory {match.relative_path}")
            yield match
            continue
        push_children(current, chain + (current_name,))
