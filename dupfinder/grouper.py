"""
Key-based grouping stages of the pipeline.

- group_candidates: cheap pre-filter on metadata, before any file is read
- regroup_by_digest: final grouping once content digests are known

Both drop single-member groups: a file alone under its key cannot be a
duplicate of anything.
"""

from __future__ import annotations

from collections import defaultdict
from typing import Hashable, Iterable

from dupfinder.models import ComparisonMode, FileRecord


def candidate_key(record: FileRecord, mode: ComparisonMode) -> Hashable:
    """
    Pre-filter key for a file.

    ``hash`` mode groups on size alone: files can only be byte-identical
    if they have the same size.
    """
    if mode is ComparisonMode.hash:
        return record.size
    return (record.name, record.size)


def final_key(record: FileRecord, mode: ComparisonMode) -> Hashable:
    """Key used once the digest is known."""
    if mode is ComparisonMode.combined:
        return (record.name, record.content_digest)
    if mode is ComparisonMode.hash:
        return record.content_digest
    raise ValueError(f"Mode {mode.value} does not group by digest")


def group_candidates(
    files: Iterable[FileRecord],
    mode: ComparisonMode,
) -> list[list[FileRecord]]:
    """
    Partition files by their cheap key and keep groups of 2 or more.

    Args:
        files: Flat file list from traversal
        mode: Active comparison mode

    Returns:
        Candidate groups, in first-seen key order
    """
    groups: dict[Hashable, list[FileRecord]] = defaultdict(list)
    for record in files:
        groups[candidate_key(record, mode)].append(record)

    return [group for group in groups.values() if len(group) > 1]


def regroup_by_digest(
    files: Iterable[FileRecord],
    mode: ComparisonMode,
) -> list[list[FileRecord]]:
    """
    Group hashed files by digest (``hash``) or name + digest (``combined``).

    Files whose hash failed are left out entirely.
    """
    groups: dict[Hashable, list[FileRecord]] = defaultdict(list)
    for record in files:
        if not record.has_digest:
            continue
        groups[final_key(record, mode)].append(record)

    return [group for group in groups.values() if len(group) > 1]
