"""Locate and load Lighthouse JSON reports."""

import json
import logging
from pathlib import Path
from typing import Any, Optional, Union

from .errors import ReportLoadError, ReportNotFoundError

logger = logging.getLogger(__name__)

DEFAULT_REPORTS_DIR = Path(".lighthouse") / "reports"

NOT_FOUND_HINT = (
    "Run: lighthouse <url> --output json "
    "--output-path .lighthouse/reports/latest.json"
)


def resolve_report_path(
    report: Optional[Union[str, Path]] = None,
    reports_dir: Union[str, Path] = DEFAULT_REPORTS_DIR,
) -> Path:
    """Find the report to analyze.

    An explicit path wins. Otherwise `latest.json` in the reports directory,
    then the most recently modified `*.json` file there.
    """
    if report:
        path = Path(report)
        if not path.is_file():
            raise ReportNotFoundError(f"Lighthouse report not found: {path}", hint=NOT_FOUND_HINT)
        return path

    reports_dir = Path(reports_dir)
    latest = reports_dir / "latest.json"
    if latest.is_file():
        return latest

    if reports_dir.is_dir():
        candidates = sorted(
            (p for p in reports_dir.glob("*.json") if p.is_file()),
            key=lambda p: p.stat().st_mtime,
            reverse=True,
        )
        if candidates:
            logger.info("Using latest report: %s", candidates[0].name)
            return candidates[0]

    raise ReportNotFoundError("Lighthouse report not found", hint=NOT_FOUND_HINT)


def load_report(path: Union[str, Path]) -> dict[str, Any]:
    """Read a Lighthouse JSON report.

    No schema validation is done; callers treat every field as optional.
    """
    path = Path(path)
    if not path.exists():
        raise ReportNotFoundError(f"Lighthouse report not found: {path}", hint=NOT_FOUND_HINT)

    try:
        content = path.read_text(encoding="utf-8")
        data = json.loads(content)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        raise ReportLoadError(f"Failed to load report: {e}") from e

    if not isinstance(data, dict):
        raise ReportLoadError("Failed to load report: top-level JSON value is not an object")

    logger.debug("Loaded report %s (Lighthouse %s)", path, data.get("lighthouseVersion"))
    return data
