"""Find every docs directory in a source tree and merge them into one destination."""

import os
import shutil
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Iterable, List, Optional

from loguru import logger

from cp_docs.copier import CopyStats, copy_docs_dir
from cp_docs.errors import CopyError, PathLike, TraversalError, describe_os_error
from cp_docs.walker import DOCS_DIR_NAME, DocsMatch, walk_docs_dirs

ProgressCallback = Callable[[int, int, DocsMatch, CopyStats], None]


@dataclass
class MergeReport:
    """Outcome of a successful merge."""

    source: Path
    destination: Path
    matches: List[DocsMatch] = field(default_factory=list)
    stats: CopyStats = field(default_factory=CopyStats)

    @property
    def total(self) -> int:
        return len(self.matches)


def resolve_source(source: PathLike) -> Path:
    """Absolute, symlink-free path of the source root."""
    path = Path(source)
    if not path.exists():
        raise TraversalError(path, "no such directory")
    if not path.is_dir():
        raise TraversalError(path, "not a directory")
    try:
        return path.resolve(strict=True)
    except OSError as e:
        raise TraversalError(path, describe_os_error(e)) from e


def clean_destination(destination: Path, source: Path):
    """Remove the destination root before copying, as a fresh full copy."""
    resolved = destination.resolve()
    if resolved == source or resolved in source.parents:
        raise CopyError(destination, "refusing to clean a directory that contains the source tree")
    if not os.path.lexists(destination):
        return
    logger.info(f"Cleaning the target dir: {destination}")
    try:
        if destination.is_dir() and not destination.is_symlink():
            shutil.rmtree(destination)
        else:
            destination.unlink()
    except OSError as e:
        raise CopyError(destination, describe_os_error(e)) from e


def merge_docs(
    source: PathLike,
    destination: PathLike,
    *,
    clean: bool = False,
    name: str = DOCS_DIR_NAME,
    ignore_case: bool = False,
    ignore_patterns: Iterable[str] = (),
    skip_hidden: bool = False,
    on_copied: Optional[ProgressCallback] = None,
) -> MergeReport:
    """
    Copy the contents of every ``docs`` directory under ``source`` into ``destination``.

    ``source/A/B/docs/x.md`` ends up at ``destination/A/B/x.md``. All matches are
    collected before anything is written, so a scan failure leaves the destination
    untouched. Matches are copied in traversal order and a later match overwrites
    files of an earlier one at the same destination path.

    Raises:
        TraversalError: the source tree cannot be scanned
        CopyError: writing into the destination failed; earlier matches stay copied
    """
    source_root = resolve_source(source)
    destination_root = Path(destination)
    if destination_root.resolve() == source_root:
        raise CopyError(destination_root, "destination is the source tree")
    logger.info(f"root={source_root}; target={destination_root}")

    matches = list(
        walk_docs_dirs(
            source_root,
            name=name,
            ignore_case=ignore_case,
            ignore_patterns=ignore_patterns,
            skip_hidden=skip_hidden,
            exclude=(destination_root.resolve(),),
        )
    )
    total = len(matches)
    logger.info(f"Found {total} docs directories")

    if clean:
        clean_destination(destination_root, source_root)
    try:
        destination_root.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise CopyError(destination_root, describe_os_error(e)) from e

    report = MergeReport(source=source_root, destination=destination_root, matches=matches)
    width = len(str(total))
    for index, match in enumerate(matches, start=1):
        stats = copy_docs_dir(match, destination_root)
        report.stats += stats
        logger.debug(f"({index:0{width}d}/{total:0{width}d}) finished copying {match.relative_path}")
        if on_copied is not None:
            on_copied(index, total, match, stats)

    return report
