"""
Duplicate file scanner pipeline.

Stages, each finished before the next starts:
1. Walk the tree into a flat file list
2. Group candidates on a cheap key (name+size, or size alone)
3. Hash candidates on a bounded worker pool (skipped in name_size mode)
4. Regroup on the final key (digest, or name+digest)

Only a root that cannot be scanned fails the run. Every per-file problem is
absorbed into the counters exposed by ``get_stats()``.
"""

from __future__ import annotations

import asyncio
import time
from typing import Callable, Optional

import structlog

from dupfinder.counters import ScanCounters
from dupfinder.grouper import group_candidates, regroup_by_digest
from dupfinder.models import (
    ComparisonMode,
    DuplicateGroup,
    FileRecord,
    ScanConfig,
    ScanResult,
    ScanStats,
)
from dupfinder.traversal import walk_tree
from dupfinder.worker_pool import HashWorkerPool

logger = structlog.get_logger(__name__)


class DuplicateScanner:
    """
    Find duplicate files under a directory.

    Features:
    - Cheap metadata pre-filter before any file is read
    - Chunked SHA256 hashing on a bounded worker pool
    - Per-file error isolation (counted, never raised)
    - Live progress counters, safe to read from any thread
    """

    def __init__(
        self,
        config: ScanConfig,
        progress_callback: Optional[Callable[[ScanStats], None]] = None,
    ):
        """
        Initialize scanner.

        Args:
            config: Scan configuration
            progress_callback: Optional callback for progress updates
        """
        self.config = config
        self.progress_callback = progress_callback
        self.counters = ScanCounters()

    def get_stats(self) -> ScanStats:
        """Snapshot of the current run's counters."""
        return self.counters.snapshot()

    def run(self) -> ScanResult:
        """Synchronous entry point (runs ``scan()`` in a new event loop)."""
        return asyncio.run(self.scan())

    async def scan(self) -> ScanResult:
        """
        Main scan entry point.

        Returns:
            ScanResult with duplicate groups and final counters

        Raises:
            ScanRootError: Root path missing or not listable
        """
        start_time = time.monotonic()
        self.counters.reset()
        mode = self.config.mode

        logger.info(
            "dedup_scan_started",
            root_path=str(self.config.root_path),
            mode=mode.value,
            workers=self.config.workers,
        )

        # Phase 1: traversal
        files = await asyncio.to_thread(walk_tree, self.config, self.counters)
        self._report_progress()

        # Phase 2: cheap pre-filter
        candidates = group_candidates(files, mode)
        logger.info(
            "dedup_candidates_grouped",
            files=len(files),
            candidate_groups=len(candidates),
            candidate_files=sum(len(g) for g in candidates),
        )

        # Phases 3-4: hash + regroup
        if mode.needs_hashing:
            pool = HashWorkerPool(
                workers=self.config.workers,
                counters=self.counters,
                chunk_size=self.config.chunk_size,
                progress_callback=self.progress_callback,
                progress_interval=self.config.progress_interval,
            )
            hashed = await pool.hash_all(candidates)
            final = regroup_by_digest(hashed, mode)
            logger.info(
                "dedup_hashing_completed",
                hashed=sum(1 for f in hashed if f.has_digest),
                failed=sum(1 for f in hashed if f.hash_error is not None),
            )
        else:
            final = candidates

        self.counters.set_duplicate_groups(len(final))
        groups = self._build_duplicate_groups(final)
        stats = self.counters.snapshot()
        self._report_progress()

        result = ScanResult(
            root_path=self.config.root_path,
            mode=mode,
            workers=self.config.workers,
            total_scanned=stats.files_scanned,
            duplicate_groups_count=stats.duplicate_groups_found,
            total_errors=stats.errors_encountered,
            total_skipped=stats.files_skipped,
            total_duplicates=sum(g.count - 1 for g in groups),
            space_reclaimable_bytes=sum(g.wasted_bytes for g in groups),
            elapsed_seconds=round(time.monotonic() - start_time, 3),
            groups=groups,
        )

        logger.info(
            "dedup_scan_completed",
            total_scanned=result.total_scanned,
            duplicate_groups=result.duplicate_groups_count,
            total_duplicates=result.total_duplicates,
            errors=result.total_errors,
            elapsed_seconds=result.elapsed_seconds,
        )

        return result

    def _report_progress(self) -> None:
        if self.progress_callback:
            self.progress_callback(self.counters.snapshot())

    def _build_duplicate_groups(self, raw_groups: list[list[FileRecord]]) -> list[DuplicateGroup]:
        """
        Wrap raw groups into numbered DuplicateGroups.

        Groups are ordered by reclaimable bytes (largest first), then by first
        path; files inside a group are ordered by path.
        """
        mode = self.config.mode
        groups = []

        for members in raw_groups:
            files = sorted(members, key=lambda f: str(f.path))
            first = files[0]
            groups.append(
                DuplicateGroup(
                    group_id=0,
                    name=first.name if mode is not ComparisonMode.hash else None,
                    size=first.size,
                    content_digest=first.content_digest if mode.needs_hashing else None,
                    files=files,
                )
            )

        groups.sort(key=lambda g: (-g.wasted_bytes, str(g.files[0].path)))
        for group_id, group in enumerate(groups, start=1):
            group.group_id = group_id

        return groups
