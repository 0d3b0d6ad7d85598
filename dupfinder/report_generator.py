"""
Report generation for duplicate scan results.

Formats:
- CSV with header statistics as ``#`` comment lines
- Plain-text console summary
- JSON (full ScanResult)
"""

from __future__ import annotations

import csv
import io
from pathlib import Path
from typing import TextIO

import structlog

from dupfinder.config.exceptions import ReportError
from dupfinder.models import DuplicateGroup, ScanResult

logger = structlog.get_logger(__name__)


def format_size(size_bytes: int) -> str:
    """Format a byte count in human-readable units."""
    size = float(size_bytes)
    for unit in ("B", "KB", "MB", "GB"):
        if size < 1024 or unit == "GB":
            break
        size /= 1024
    if unit == "B":
        return f"{int(size)} B"
    return f"{size:.1f} {unit}"


def group_key_label(group: DuplicateGroup) -> str:
    """Readable key of a group: name, size and/or short digest."""
    parts = []
    if group.name is not None:
        parts.append(group.name)
    if group.size is not None:
        parts.append(f"{group.size} B")
    if group.content_digest is not None:
        parts.append(group.content_digest[:12])
    return " | ".join(parts)


class ReportGenerator:
    """Render scan results for people (summary) and tools (CSV, JSON)."""

    CSV_COLUMNS = [
        "group_id",
        "key",
        "file_path",
        "name",
        "size_bytes",
        "content_digest",
    ]

    def generate_csv(self, scan_result: ScanResult, output_path: Path) -> Path:
        """
        Generate CSV report file.

        Args:
            scan_result: Scan result with duplicate groups
            output_path: Where to save the CSV file

        Returns:
            Path to generated CSV file

        Raises:
            ReportError: File cannot be written
        """
        try:
            output_path.parent.mkdir(parents=True, exist_ok=True)
            with open(output_path, "w", newline="", encoding="utf-8") as f:
                self._write_csv(f, scan_result)
        except OSError as e:
            raise ReportError(f"Cannot write report to {output_path}: {e}") from e

        logger.info(
            "dedup_report_generated",
            output_path=str(output_path),
            groups=len(scan_result.groups),
        )

        return output_path

    def generate_csv_string(self, scan_result: ScanResult) -> str:
        """Generate CSV content as string."""
        output = io.StringIO()
        self._write_csv(output, scan_result)
        return output.getvalue()

    def to_json(self, scan_result: ScanResult) -> str:
        return scan_result.model_dump_json(indent=2)

    def format_summary(
        self,
        scan_result: ScanResult,
        *,
        max_groups: int = 20,
        max_files_per_group: int = 10,
    ) -> str:
        """Human-readable summary followed by the first groups."""
        lines = [
            f"Scanned {scan_result.root_path} (mode: {scan_result.mode.value}, "
            f"workers: {scan_result.workers})",
            f"Files scanned: {scan_result.total_scanned}",
            f"Files skipped: {scan_result.total_skipped}",
            f"Errors: {scan_result.total_errors}",
            f"Duplicate groups: {scan_result.duplicate_groups_count}",
        ]

        if not scan_result.groups:
            lines.append("No duplicate files found.")
            return "\n".join(lines)

        lines.append(f"Duplicate files: {scan_result.total_duplicates}")
        lines.append(
            f"Space reclaimable: {format_size(scan_result.space_reclaimable_bytes)}"
        )
        lines.append("")

        for group in scan_result.groups[:max_groups]:
            lines.append(
                f"Group {group.group_id}: {group.count} files "
                f"[{group_key_label(group)}], wasted {format_size(group.wasted_bytes)}"
            )
            for entry in group.files[:max_files_per_group]:
                lines.append(f"  {entry.path}")
            if group.count > max_files_per_group:
                lines.append(f"  ...and {group.count - max_files_per_group} more files")

        if len(scan_result.groups) > max_groups:
            lines.append(f"...and {len(scan_result.groups) - max_groups} more groups")

        return "\n".join(lines)

    def _write_csv(self, f: TextIO, scan_result: ScanResult) -> None:
        self._write_header_stats(f, scan_result)

        writer = csv.DictWriter(f, fieldnames=self.CSV_COLUMNS, lineterminator="\n")
        writer.writeheader()

        for group in scan_result.groups:
            key = group_key_label(group)
            for entry in group.files:
                writer.writerow(
                    {
                        "group_id": group.group_id,
                        "key": key,
                        "file_path": str(entry.path),
                        "name": entry.name,
                        "size_bytes": entry.size,
                        "content_digest": entry.content_digest or "",
                    }
                )

    @staticmethod
    def _write_header_stats(f: TextIO, scan_result: ScanResult) -> None:
        """Write header statistics as CSV comments."""
        f.write(f"# Scan Date: {scan_result.scan_date.strftime('%Y-%m-%d %H:%M:%S')}\n")
        f.write(f"# Root: {scan_result.root_path}\n")
        f.write(f"# Mode: {scan_result.mode.value}\n")
        f.write(f"# Total Files Scanned: {scan_result.total_scanned:,}\n")
        f.write(f"# Errors: {scan_result.total_errors:,}\n")
        f.write(f"# Duplicate Groups: {scan_result.duplicate_groups_count:,}\n")
        f.write(
            f"# Space Reclaimable: {format_size(scan_result.space_reclaimable_bytes)}\n"
        )
