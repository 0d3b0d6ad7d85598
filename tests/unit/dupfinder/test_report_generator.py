"""
Unit tests for ReportGenerator.

Tests:
- CSV generation with header statistics and all columns
- UTF-8 encoding (accents in filenames)
- Console summary and JSON output
"""

import csv
import io
import json
from datetime import datetime
from pathlib import Path
from unittest.mock import patch

import pytest

from dupfinder.config.exceptions import ReportError
from dupfinder.models import ComparisonMode, DuplicateGroup, FileRecord, ScanResult
from dupfinder.report_generator import ReportGenerator, format_size, group_key_label

DIGEST = "abc123def456" + "0" * 52


@pytest.fixture
def generator():
    return ReportGenerator()


@pytest.fixture
def sample_result():
    """Sample scan result with 2 groups."""
    return ScanResult(
        scan_date=datetime(2026, 2, 16, 14, 35, 22),
        root_path=Path("/data"),
        mode=ComparisonMode.hash,
        workers=4,
        total_scanned=45328,
        duplicate_groups_count=2,
        total_errors=3,
        total_duplicates=3,
        space_reclaimable_bytes=3 * 1024 * 1024,
        groups=[
            DuplicateGroup(
                group_id=1,
                size=1024 * 1024,
                content_digest=DIGEST,
                files=[
                    FileRecord(
                        path=Path(f"/data/photos/vacances_été_{i}.jpg"),
                        name=f"vacances_été_{i}.jpg",
                        size=1024 * 1024,
                        content_digest=DIGEST,
                    )
                    for i in range(3)
                ],
            ),
            DuplicateGroup(
                group_id=2,
                size=1024 * 1024,
                content_digest="f" * 64,
                files=[
                    FileRecord(
                        path=Path(f"/data/docs/{n}"),
                        name=n,
                        size=1024 * 1024,
                        content_digest="f" * 64,
                    )
                    for n in ("a.pdf", "b.pdf")
                ],
            ),
        ],
    )


def _csv_rows(text: str):
    body = "\n".join(line for line in text.splitlines() if not line.startswith("#"))
    return list(csv.DictReader(io.StringIO(body)))


class TestCsv:
    def test_generate_csv_file(self, generator, sample_result, tmp_path):
        output = tmp_path / "reports" / "dupes.csv"

        path = generator.generate_csv(sample_result, output)

        assert path == output
        text = output.read_text(encoding="utf-8")
        assert "# Total Files Scanned: 45,328" in text
        assert "# Duplicate Groups: 2" in text
        assert "# Mode: hash" in text
        assert "# Scan Date: 2026-02-16 14:35:22" in text

        rows = _csv_rows(text)
        assert len(rows) == 5
        assert list(rows[0]) == ReportGenerator.CSV_COLUMNS
        assert rows[0]["group_id"] == "1"
        assert rows[0]["content_digest"] == DIGEST
        assert "vacances_été_0.jpg" in rows[0]["file_path"]

    def test_csv_string_matches_file(self, generator, sample_result, tmp_path):
        output = generator.generate_csv(sample_result, tmp_path / "out.csv")

        assert generator.generate_csv_string(sample_result) == output.read_text(encoding="utf-8")

    def test_csv_line_endings_consistent(self, generator, sample_result, tmp_path):
        """Header comments and data rows all end with a bare newline."""
        output = generator.generate_csv(sample_result, tmp_path / "out.csv")

        raw = output.read_bytes().decode("utf-8")

        assert "\r" not in raw
        assert raw == generator.generate_csv_string(sample_result)

    def test_unwritable_output_raises_report_error(self, generator, sample_result, tmp_path):
        with patch("builtins.open", side_effect=PermissionError("Permission denied")):
            with pytest.raises(ReportError):
                generator.generate_csv(sample_result, tmp_path / "out.csv")

    def test_empty_result(self, generator):
        result = ScanResult(root_path=Path("/empty"), mode=ComparisonMode.name_size, workers=1)

        rows = _csv_rows(generator.generate_csv_string(result))

        assert rows == []


class TestSummary:
    def test_summary_lists_groups(self, generator, sample_result):
        text = generator.format_summary(sample_result)

        assert "Files scanned: 45328" in text
        assert "Errors: 3" in text
        assert "Duplicate groups: 2" in text
        assert "Space reclaimable: 3.0 MB" in text
        assert "Group 1: 3 files" in text
        assert "/data/docs/a.pdf" in text

    def test_summary_truncates(self, generator, sample_result):
        text = generator.format_summary(sample_result, max_groups=1, max_files_per_group=2)

        assert "Group 2" not in text
        assert "...and 1 more groups" in text
        assert "...and 1 more files" in text

    def test_summary_no_duplicates(self, generator):
        result = ScanResult(root_path=Path("/x"), mode=ComparisonMode.hash, workers=1, total_scanned=4)

        assert "No duplicate files found." in generator.format_summary(result)


class TestJson:
    def test_json_round_trips_counts(self, generator, sample_result):
        data = json.loads(generator.to_json(sample_result))

        assert data["mode"] == "hash"
        assert data["duplicate_groups_count"] == 2
        assert len(data["groups"][0]["files"]) == 3


class TestHelpers:
    @pytest.mark.parametrize(
        "size,expected",
        [(0, "0 B"), (1023, "1023 B"), (2048, "2.0 KB"), (5 * 1024**3, "5.0 GB")],
    )
    def test_format_size(self, size, expected):
        assert format_size(size) == expected

    def test_group_key_label(self):
        group = DuplicateGroup(group_id=1, name="a.txt", size=10, content_digest=DIGEST)
        assert group_key_label(group) == "a.txt | 10 B | abc123def456"
