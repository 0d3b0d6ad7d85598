"""
Pydantic models for dupfinder.

Models:
- ComparisonMode: Which keys define a duplicate (name_size, hash, combined)
- ScanConfig: Scan configuration (root, mode, workers, filters)
- FileRecord: Single file discovered by traversal, digest set after hashing
- DuplicateGroup: Group of >= 2 files sharing the active mode's key
- ScanStats: Snapshot of the live scan counters
- ScanResult: Final scan result
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, field_validator, model_validator


class ComparisonMode(str, Enum):
    """Comparison strategy, fixed for a whole run."""

    name_size = "name_size"  # metadata only, no hashing
    hash = "hash"  # content only
    combined = "combined"  # name + content hash

    @property
    def needs_hashing(self) -> bool:
        return self is not ComparisonMode.name_size


class ScanConfig(BaseModel):
    """Configuration for a duplicate scan."""

    root_path: Path = Field(description="Root directory to scan")
    mode: ComparisonMode = Field(
        default=ComparisonMode.hash,
        description="Comparison strategy",
    )
    workers: int = Field(
        default=4,
        ge=1,
        description="Maximum number of files hashed concurrently",
    )
    chunk_size: int = Field(
        default=65536,
        gt=0,
        description="SHA256 hashing chunk size in bytes",
    )
    min_file_size: int = Field(
        default=0,
        ge=0,
        description="Minimum file size in bytes (skip smaller)",
    )
    max_file_size: Optional[int] = Field(
        default=None,
        ge=0,
        description="Maximum file size in bytes (skip larger), None = no limit",
    )
    excluded_dir_names: set[str] = Field(
        default_factory=set,
        description="Directory names not descended into (lowercased)",
    )
    excluded_filenames: set[str] = Field(
        default_factory=set,
        description="Exact filenames to skip (lowercased)",
    )
    progress_interval: int = Field(
        default=100,
        ge=1,
        description="Invoke the progress callback every N files",
    )

    model_config = {"frozen": True}

    @field_validator("excluded_dir_names", "excluded_filenames")
    @classmethod
    def lowercase_names(cls, v: set[str]) -> set[str]:
        """Exclusions are matched case-insensitively."""
        return {name.lower() for name in v}

    @model_validator(mode="after")
    def check_size_bounds(self) -> "ScanConfig":
        if self.max_file_size is not None and self.max_file_size < self.min_file_size:
            raise ValueError("max_file_size must be >= min_file_size")
        return self


class FileRecord(BaseModel):
    """
    Single file produced by traversal.

    ``content_digest`` and ``hash_error`` start unset and exactly one of them
    is filled in by the hashing stage. A record with ``hash_error`` set is
    never part of a duplicate group.
    """

    path: Path
    name: str
    size: int = Field(ge=0)
    content_digest: Optional[str] = None
    hash_error: Optional[str] = None

    @property
    def has_digest(self) -> bool:
        return self.content_digest is not None and self.hash_error is None


class DuplicateGroup(BaseModel):
    """Group of files that are duplicates under the active comparison mode."""

    group_id: int
    name: Optional[str] = None  # set for name_size / combined
    size: Optional[int] = None
    content_digest: Optional[str] = None  # set for hash / combined
    files: list[FileRecord] = Field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.files)

    @property
    def wasted_bytes(self) -> int:
        """Bytes reclaimable by keeping a single copy."""
        return sum(f.size for f in self.files[1:])


class ScanStats(BaseModel):
    """Point-in-time snapshot of scan counters."""

    files_scanned: int = 0
    duplicate_groups_found: int = 0
    errors_encountered: int = 0
    files_skipped: int = 0

    model_config = {"frozen": True}


class ScanResult(BaseModel):
    """Final scan result."""

    scan_date: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    root_path: Path
    mode: ComparisonMode
    workers: int
    total_scanned: int = 0
    duplicate_groups_count: int = 0
    total_errors: int = 0
    total_skipped: int = 0
    total_duplicates: int = 0
    space_reclaimable_bytes: int = 0
    elapsed_seconds: float = 0.0
    groups: list[DuplicateGroup] = Field(default_factory=list)
