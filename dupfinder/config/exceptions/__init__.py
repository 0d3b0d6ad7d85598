"""
dupfinder - Canonical exception hierarchy.

Per-file problems (unreadable entries, hash I/O failures) are never raised
to callers: they are counted in ScanCounters. Only errors that stop a run
from starting, or stop a report from being written, are exceptions.
"""


class DupFinderError(Exception):
    """Base exception dupfinder."""


class ScanRootError(DupFinderError):
    """Scan root missing, not a directory, or not listable."""

    def __init__(self, root_path, reason: str):
        self.root_path = root_path
        self.reason = reason
        super().__init__(f"Cannot scan {root_path}: {reason}")


class ReportError(DupFinderError):
    """Report could not be written."""
