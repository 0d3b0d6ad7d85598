"""
Directory traversal producing the flat file list for the pipeline.

Walks the tree with ``os.scandir`` without following directory symlinks and
records every regular file. Failures on individual entries are counted and
skipped; only a root that cannot be listed at all aborts the walk.
"""

from __future__ import annotations

import os
from pathlib import Path

import structlog

from dupfinder.config.exceptions import ScanRootError
from dupfinder.counters import ScanCounters
from dupfinder.models import FileRecord, ScanConfig

logger = structlog.get_logger(__name__)


def walk_tree(config: ScanConfig, counters: ScanCounters) -> list[FileRecord]:
    """
    Collect every regular file under ``config.root_path``.

    Args:
        config: Scan configuration (root, exclusions, size bounds)
        counters: Run counters (files_scanned, files_skipped, errors_encountered)

    Returns:
        FileRecords with digest unset, in deterministic walk order

    Raises:
        ScanRootError: Root does not exist, is not a directory or cannot be listed
    """
    root = config.root_path
    if not root.exists():
        raise ScanRootError(root, "path does not exist")
    if not root.is_dir():
        raise ScanRootError(root, "not a directory")

    try:
        root_entries = _list_dir(root)
    except OSError as e:
        raise ScanRootError(root, str(e)) from e

    files: list[FileRecord] = []
    stack: list[list[os.DirEntry]] = [root_entries]

    while stack:
        entries = stack.pop()
        for entry in entries:
            try:
                if entry.is_dir(follow_symlinks=False):
                    if entry.name.lower() in config.excluded_dir_names:
                        continue
                    stack.append(_list_dir(entry.path))
                    continue

                if not entry.is_file(follow_symlinks=False):
                    # Symlinks, sockets, fifos, devices
                    counters.add_skipped()
                    continue

                size = entry.stat(follow_symlinks=False).st_size
            except OSError as e:
                counters.add_error()
                logger.debug(
                    "dedup_walk_entry_error",
                    path=entry.path,
                    error=str(e),
                )
                continue

            if not _accept(entry.name, size, config):
                counters.add_skipped()
                continue

            files.append(FileRecord(path=Path(entry.path), name=entry.name, size=size))
            counters.add_scanned()

    return files


def _list_dir(path) -> list[os.DirEntry]:
    # Sorted so the walk order is deterministic across runs
    with os.scandir(path) as it:
        return sorted(it, key=lambda e: e.name)


def _accept(name: str, size: int, config: ScanConfig) -> bool:
    """Apply filename and size filters."""
    if name.lower() in config.excluded_filenames:
        return False
    if size < config.min_file_size:
        return False
    if config.max_file_size is not None and size > config.max_file_size:
        return False
    return True
