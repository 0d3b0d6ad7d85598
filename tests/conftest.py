"""
Shared pytest fixtures for dupfinder.

Contains:
- make_file: factory writing a file (parents created) under tmp_path
- abc_tree: a.txt / b.txt (same content) + c.txt (same size, other content)

Note: async tests run through pytest-asyncio in auto mode (see pyproject.toml).
"""

import sys
from pathlib import Path
from typing import Callable

import pytest

# Add repo root to PYTHONPATH so tests run without installing the package
repo_root = Path(__file__).parent.parent
if str(repo_root) not in sys.path:
    sys.path.insert(0, str(repo_root))


@pytest.fixture
def make_file(tmp_path) -> Callable[[str, bytes], Path]:
    """
    Factory creating a file relative to tmp_path.

    Usage:
        >>> path = make_file("sub/dir/a.txt", b"content")
    """

    def _make(relative: str, content: bytes) -> Path:
        path = tmp_path / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(content)
        return path

    return _make


@pytest.fixture
def abc_tree(make_file, tmp_path) -> Path:
    """Three 10-byte files: a.txt and b.txt identical, c.txt different."""
    make_file("a.txt", b"X" * 10)
    make_file("b.txt", b"X" * 10)
    make_file("c.txt", b"Y" * 10)
    return tmp_path
