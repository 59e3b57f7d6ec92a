"""Copy the contents of one docs directory into the reshaped destination tree."""

import os
import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Tuple

from loguru import logger

from cp_docs.errors import CopyError, PathLike, describe_os_error
from cp_docs.walker import DocsMatch


@dataclass
class CopyStats:
    """What a copy wrote into the destination."""

    files: int = 0
    directories: int = 0
    links: int = 0

    def __iadd__(self, other: "CopyStats") -> "CopyStats":
        self.files += other.files
        self.directories += other.directories
        self.links += other.links
        return self


def _remove_existing(path: Path):
    """Drop whatever an earlier copy left at ``path`` (last writer wins)."""
    if path.is_dir() and not path.is_symlink():
        shutil.rmtree(path)
    else:
        path.unlink()


def _ensure_dir(path: Path, source: Optional[Path] = None) -> bool:
    """Make sure ``path`` is a real directory. Returns True when it had to be created."""
    try:
        if path.is_dir() and not path.is_symlink():
            return False
        if os.path.lexists(path):
            logger.debug(f"Replacing {path} with a directory")
            _remove_existing(path)
        path.mkdir()
        return True
    except OSError as e:
        raise CopyError(path, describe_os_error(e), source=source) from e


def _copy_file(source: Path, destination: Path):
    try:
        if destination.is_symlink() or destination.is_dir():
            logger.debug(f"Replacing {destination} with a file")
            _remove_existing(destination)
        shutil.copyfile(source, destination)
    except OSError as e:
        raise CopyError(destination, describe_os_error(e), source=source) from e


def _copy_link(source: Path, destination: Path):
    try:
        link_target = os.readlink(source)
        if os.path.lexists(destination):
            _remove_existing(destination)
        os.symlink(link_target, destination)
    except OSError as e:
        raise CopyError(destination, describe_os_error(e), source=source) from e


def _list_entries(source: Path, destination: Path) -> List[os.DirEntry]:
    try:
        with os.scandir(source) as entries:
            listed = list(entries)
    except OSError as e:
        raise CopyError(destination, describe_os_error(e), source=source) from e
    listed.sort(key=lambda entry: entry.name)
    return listed


def _entry_kind(entry: os.DirEntry, destination: Path) -> str:
    """``"link"``, ``"dir"`` or ``"file"``, without following symlinks."""
    try:
        if entry.is_symlink():
            return "link"
        if entry.is_dir(follow_symlinks=False):
            return "dir"
        return "file"
    except OSError as e:
        raise CopyError(destination, describe_os_error(e), source=entry.path) from e


def prepare_destination(match: DocsMatch, destination_root: PathLike) -> Tuple[Path, int]:
    """
    Create ``<destination_root>/<chain>`` one segment at a time.

    Returns:
        The base directory and how many directories had to be created
    """
    base = Path(destination_root)
    try:
        base.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise CopyError(base, describe_os_error(e)) from e

    created = 0
    for segment in match.chain:
        base = base / segment
        if _ensure_dir(base):
            created += 1
    return base, created


def copy_docs_dir(match: DocsMatch, destination_root: PathLike) -> CopyStats:
    """
    Copy everything below ``match.path`` into ``<destination_root>/<match.chain>``.

    Files are copied byte for byte and overwrite what is already there.
    Symlinks are recreated, not followed. The copy stops at the first failure.
    When the destination root lies inside the docs directory it is not copied
    into itself.

    Raises:
        CopyError: a directory could not be read or created, or a file could not be written
    """
    stats = CopyStats()
    base, stats.directories = prepare_destination(match, destination_root)
    own_output = Path(os.path.realpath(destination_root))
    logger.debug(f"Copying {match.path} -> {base}")

    stack: List[Tuple[Path, Path]] = [(match.path, base)]
    while stack:
        source_dir, destination_dir = stack.pop()
        subdirs = []
        for entry in _list_entries(source_dir, destination_dir):
            source = Path(entry.path)
            destination = destination_dir / entry.name
            kind = _entry_kind(entry, destination)
            if kind == "link":
                _copy_link(source, destination)
                stats.links += 1
            elif kind == "dir":
                if entry.name == own_output.name and Path(os.path.realpath(source)) == own_output:
                    logger.debug(f"Skipping {source}: it is the destination directory")
                    continue
                if _ensure_dir(destination, source=source):
                    stats.directories += 1
                subdirs.append((source, destination))
            else:
                logger.trace(f"Copying file {source} -> {destination}")
                _copy_file(source, destination)
                stats.files += 1
        stack.extend(reversed(subdirs))

    return stats
