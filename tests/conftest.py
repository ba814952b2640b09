"""Pytest fixtures for lh-audit tests."""

import json
import os
from collections.abc import Generator
from pathlib import Path
from typing import Any, Optional

import pytest


def make_audit(audit_id: str, score: Optional[float], **fields: Any) -> dict[str, Any]:
    """Build a minimal LHR audit entry."""
    audit = {
        "id": audit_id,
        "title": fields.pop("title", f"{audit_id} title"),
        "description": fields.pop("description", f"{audit_id} description"),
        "score": score,
        "scoreDisplayMode": fields.pop("scoreDisplayMode", "binary" if score in (0, 1) else "numeric"),
    }
    audit.update(fields)
    return audit


def make_lhr(
    audits: list[dict[str, Any]],
    categories: Optional[dict[str, list[str]]] = None,
    category_scores: Optional[dict[str, Optional[float]]] = None,
) -> dict[str, Any]:
    """Build an LHR with the given audits and category -> audit id refs."""
    categories = categories or {}
    category_scores = category_scores or {}
    return {
        "requestedUrl": "https://example.com/",
        "finalUrl": "https://example.com/home",
        "lighthouseVersion": "12.2.1",
        "fetchTime": "2024-05-01T12:30:45.123Z",
        "categories": {
            category_id: {
                "id": category_id,
                "title": category_id.replace("-", " ").title(),
                "score": category_scores.get(category_id, 0.5),
                "auditRefs": [{"id": ref} for ref in refs],
            }
            for category_id, refs in categories.items()
        },
        "audits": {audit["id"]: audit for audit in audits},
    }


@pytest.fixture(autouse=True)
def clean_env() -> Generator[None, None, None]:
    """Keep LH_AUDIT_* variables (including ones loaded from .env) out of other tests."""
    saved = {k: v for k, v in os.environ.items() if k.startswith("LH_AUDIT_")}
    for key in saved:
        del os.environ[key]
    yield
    for key in [k for k in os.environ if k.startswith("LH_AUDIT_")]:
        del os.environ[key]
    os.environ.update(saved)


@pytest.fixture
def sample_lhr() -> dict[str, Any]:
    """A small but realistic report with failures in every category."""
    audits = [
        # performance
        make_audit("first-contentful-paint", 0.42, numericValue=2800.5, numericUnit="millisecond",
                   displayValue="2.8 s", rating="average", title="First Contentful Paint"),
        make_audit("largest-contentful-paint", 0.12, numericValue=5200, numericUnit="millisecond",
                   displayValue="5.2 s", rating="fail", title="Largest Contentful Paint"),
        make_audit("cumulative-layout-shift", 1, numericValue=0.01, numericUnit="unitless",
                   displayValue="0.01", rating="pass", title="Cumulative Layout Shift"),
        make_audit("total-blocking-time", 0.3, numericValue=640, numericUnit="millisecond",
                   displayValue="640 ms", rating="fail", title="Total Blocking Time"),
        make_audit("server-response-time", 0, numericValue=1200, numericUnit="millisecond",
                   displayValue="Root document took 1,200 ms"),
        make_audit("render-blocking-resources", 0.3, details={
            "type": "opportunity",
            "overallSavingsMs": 1510,
            "overallSavingsBytes": 0,
            "items": [{"url": "https://example.com/css/main.css", "wastedMs": 1510}],
        }),
        make_audit("unused-javascript", 0.2, details={
            "type": "opportunity",
            "overallSavingsMs": 450,
            "overallSavingsBytes": 204800,
            "items": [
                {"url": "https://example.com/_next/static/chunks/main-abc.js",
                 "wastedBytes": 102400, "totalBytes": 204800},
                {"url": "chrome-extension://abcdef/content.js",
                 "wastedBytes": 51200, "totalBytes": 60000},
            ],
        }),
        make_audit("uses-long-cache-ttl", 0.4, details={"type": "table", "items": []}),
        make_audit("dom-size", 0.7, displayValue="1,900 elements"),
        make_audit("bootup-time", 0.5, displayValue="2.1 s"),
        # accessibility
        make_audit("color-contrast", 0, details={
            "type": "table",
            "items": [{"node": {"nodeLabel": "Read more", "selector": "a.more"}}],
        }),
        make_audit("aria-allowed-attr", None, scoreDisplayMode="notApplicable"),
        # seo
        make_audit("meta-description", 0),
        make_audit("structured-data", None, scoreDisplayMode="manual"),
        # best practices
        make_audit("valid-source-maps", 0, details={
            "type": "table",
            "items": [{"scriptUrl": "https://example.com/app.js"}],
        }),
    ]
    categories = {
        "performance": [
            "first-contentful-paint", "largest-contentful-paint", "cumulative-layout-shift",
            "total-blocking-time", "server-response-time", "render-blocking-resources",
            "unused-javascript", "uses-long-cache-ttl", "dom-size", "bootup-time",
        ],
        "accessibility": ["color-contrast", "aria-allowed-attr"],
        "best-practices": ["valid-source-maps"],
        "seo": ["meta-description", "structured-data"],
    }
    return make_lhr(
        audits,
        categories,
        {"performance": 0.384, "accessibility": 0.91, "best-practices": 0.96, "seo": None},
    )


@pytest.fixture
def report_file(tmp_path: Path, sample_lhr: dict[str, Any]) -> Path:
    path = tmp_path / "report.json"
    path.write_text(json.dumps(sample_lhr), encoding="utf-8")
    return path
