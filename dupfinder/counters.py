"""
Live scan counters shared between the pipeline and its hashing threads.

One ScanCounters instance belongs to one DuplicateScanner and is reset at the
start of every run. All access goes through a lock so ``snapshot()`` is safe to
call from any thread while a scan is in progress.
"""

from __future__ import annotations

import threading

from dupfinder.models import ScanStats


class ScanCounters:
    """Thread-safe counters for one pipeline run."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._files_scanned = 0
        self._duplicate_groups_found = 0
        self._errors_encountered = 0
        self._files_skipped = 0

    def reset(self) -> None:
        with self._lock:
            self._files_scanned = 0
            self._duplicate_groups_found = 0
            self._errors_encountered = 0
            self._files_skipped = 0

    def add_scanned(self, n: int = 1) -> None:
        with self._lock:
            self._files_scanned += n

    def add_skipped(self, n: int = 1) -> None:
        with self._lock:
            self._files_skipped += n

    def add_error(self, n: int = 1) -> None:
        with self._lock:
            self._errors_encountered += n

    def set_duplicate_groups(self, count: int) -> None:
        with self._lock:
            self._duplicate_groups_found = count

    def snapshot(self) -> ScanStats:
        """Consistent copy of all counters."""
        with self._lock:
            return ScanStats(
                files_scanned=self._files_scanned,
                duplicate_groups_found=self._duplicate_groups_found,
                errors_encountered=self._errors_encountered,
                files_skipped=self._files_skipped,
            )
