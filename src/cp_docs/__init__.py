"""Merge every ``docs`` directory of a source tree into a single destination tree."""

from cp_docs.copier import CopyStats, copy_docs_dir
from cp_docs.errors import CopyError, CpDocsError, TraversalError
from cp_docs.merge import MergeReport, merge_docs
from cp_docs.walker import DEFAULT_IGNORE_PATTERNS, DocsMatch, walk_docs_dirs

__version__ = "0.1.0"

__all__ = [
    "CopyError",
    "CopyStats",
    "CpDocsError",
    "DEFAULT_IGNORE_PATTERNS",
    "DocsMatch",
    "MergeReport",
    "TraversalError",
    "copy_docs_dir",
    "merge_docs",
    "walk_docs_dirs",
]
