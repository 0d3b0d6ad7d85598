"""Unit tests for ScanCounters."""

import threading

from dupfinder.counters import ScanCounters
from dupfinder.models import ScanStats


def test_snapshot_starts_at_zero():
    assert ScanCounters().snapshot() == ScanStats()


def test_increments_and_store():
    counters = ScanCounters()
    counters.add_scanned()
    counters.add_scanned(2)
    counters.add_error()
    counters.add_skipped()
    counters.set_duplicate_groups(4)

    stats = counters.snapshot()

    assert stats.files_scanned == 3
    assert stats.errors_encountered == 1
    assert stats.files_skipped == 1
    assert stats.duplicate_groups_found == 4


def test_reset_clears_everything():
    counters = ScanCounters()
    counters.add_scanned(5)
    counters.add_error(2)
    counters.set_duplicate_groups(1)

    counters.reset()

    assert counters.snapshot() == ScanStats()


def test_concurrent_increments_are_not_lost():
    """8 threads x 5000 increments each -> exact total."""
    counters = ScanCounters()

    def bump():
        for _ in range(5000):
            counters.add_scanned()
            counters.add_error()

    threads = [threading.Thread(target=bump) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    stats = counters.snapshot()
    assert stats.files_scanned == 40000
    assert stats.errors_encountered == 40000
