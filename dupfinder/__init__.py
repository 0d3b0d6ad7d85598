"""
dupfinder - duplicate file finder.

Modules:
- traversal: flat file list from a directory tree
- grouper: cheap pre-filter and final regrouping
- hasher: streaming SHA256 digest
- worker_pool: bounded concurrent hashing
- scanner: pipeline orchestration and live counters
- report_generator: summary, CSV and JSON output
- models: Pydantic data models
"""

from dupfinder.models import (
    ComparisonMode,
    DuplicateGroup,
    FileRecord,
    ScanConfig,
    ScanResult,
    ScanStats,
)
from dupfinder.scanner import DuplicateScanner

__all__ = [
    "ComparisonMode",
    "DuplicateGroup",
    "DuplicateScanner",
    "FileRecord",
    "ScanConfig",
    "ScanResult",
    "ScanStats",
]
