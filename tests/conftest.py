import os
import sys
from pathlib import Path

import pytest
from loguru import logger


def write_tree(base: Path, files: dict) -> Path:
    """Create ``files`` (relative path -> text or bytes) under ``base``."""
    for relative, content in files.items():
        path = base / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(content, bytes):
            path.write_bytes(content)
        else:
            path.write_text(content)
    return base


def snapshot(root: Path) -> dict:
    """Relative path -> bytes for every file below ``root`` (None for directories)."""
    result = {}
    for dirpath, dirnames, filenames in os.walk(root):
        for dirname in dirnames:
            result[Path(dirpath, dirname).relative_to(root).as_posix()] = None
        for filename in filenames:
            path = Path(dirpath, filename)
            result[path.relative_to(root).as_posix()] = path.read_bytes()
    return result


def block_scandir(monkeypatch, module_os, blocked: Path):
    """Make ``os.scandir`` fail with EACCES for ``blocked`` only."""
    real_scandir = os.scandir

    def fake_scandir(path="."):
        if Path(path) == blocked:
            raise PermissionError(13, "Permission denied", str(path))
        return real_scandir(path)

    monkeypatch.setattr(module_os, "scandir", fake_scandir)


@pytest.fixture
def example_tree(tmp_path):
    """The reference layout: three docs directories along one branch."""
    return write_tree(
        tmp_path / "src",
        {
            "A/docs/A.md": "# A\n",
            "A/B/docs/b.md": "# B\n",
            "A/B/C/docs/a-b-c.md": "# A B C\n",
            "A/B/C/main.rs": "fn main() {}\n",
        },
    )


@pytest.fixture
def running_as_root():
    return hasattr(os, "geteuid") and os.geteuid() == 0


@pytest.fixture(autouse=True)
def reset_logger():
    yield
    # The CLI rebinds loguru to streams that are closed after each test.
    logger.remove()
    logger.add(sys.stderr)
