"""Tests for report loading and path resolution."""

import json
import os

import pytest

from lh_audit.errors import ReportLoadError, ReportNotFoundError
from lh_audit.loader import NOT_FOUND_HINT, load_report, resolve_report_path


class TestLoadReport:

    def test_loads_json_object(self, report_file):
        lhr = load_report(report_file)
        assert lhr["lighthouseVersion"] == "12.2.1"
        assert "server-response-time" in lhr["audits"]

    def test_accepts_string_path(self, report_file):
        assert load_report(str(report_file))["requestedUrl"] == "https://example.com/"

    def test_missing_file(self, tmp_path):
        with pytest.raises(ReportNotFoundError) as exc_info:
            load_report(tmp_path / "nope.json")
        assert exc_info.value.hint == NOT_FOUND_HINT

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(ReportLoadError, match="Failed to load report"):
            load_report(path)

    def test_directory_is_unreadable(self, tmp_path):
        with pytest.raises(ReportLoadError):
            load_report(tmp_path)

    def test_top_level_must_be_object(self, tmp_path):
        path = tmp_path / "list.json"
        path.write_text("[1, 2, 3]", encoding="utf-8")
        with pytest.raises(ReportLoadError, match="not an object"):
            load_report(path)

    def test_no_schema_validation(self, tmp_path):
        path = tmp_path / "empty.json"
        path.write_text("{}", encoding="utf-8")
        assert load_report(path) == {}


class TestResolveReportPath:

    def test_explicit_path(self, report_file, tmp_path):
        assert resolve_report_path(report_file, tmp_path / "reports") == report_file

    def test_explicit_path_missing(self, tmp_path):
        with pytest.raises(ReportNotFoundError, match="missing.json"):
            resolve_report_path(tmp_path / "missing.json", tmp_path)

    def test_prefers_latest_json(self, tmp_path):
        reports = tmp_path / "reports"
        reports.mkdir()
        (reports / "latest.json").write_text("{}")
        newer = reports / "newer.json"
        newer.write_text("{}")
        os.utime(reports / "latest.json", (1_000, 1_000))
        assert resolve_report_path(None, reports) == reports / "latest.json"

    def test_falls_back_to_most_recent(self, tmp_path):
        reports = tmp_path / "reports"
        reports.mkdir()
        for name, mtime in [("a.json", 3_000), ("b.json", 9_000), ("c.json", 5_000)]:
            path = reports / name
            path.write_text(json.dumps({"name": name}))
            os.utime(path, (mtime, mtime))
        (reports / "notes.txt").write_text("ignored")
        assert resolve_report_path(None, reports) == reports / "b.json"

    def test_nothing_found(self, tmp_path):
        with pytest.raises(ReportNotFoundError) as exc_info:
            resolve_report_path(None, tmp_path / "reports")
        assert "lighthouse <url> --output json" in exc_info.value.hint

    def test_empty_reports_dir(self, tmp_path):
        with pytest.raises(ReportNotFoundError):
            resolve_report_path(None, tmp_path)
