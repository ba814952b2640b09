"""Read-only queries over a loaded Lighthouse report."""

import logging
from typing import Any, Optional

from .lhr import (
    get_audit,
    get_audit_refs,
    get_audits,
    get_categories,
    get_details,
    get_items,
    get_number,
    get_numeric_value,
    get_score,
    get_text,
    round_half_up,
)
from .models import CategoryScore, Diagnostic, Opportunity, Summary, Vital
from .presenter import render_analysis

logger = logging.getLogger(__name__)

DIAGNOSTIC_AUDITS = (
    "bootup-time",
    "mainthread-work-breakdown",
    "long-tasks",
    "dom-size",
    "network-requests",
    "total-byte-weight",
)

# (key, audit id) in display order
VITAL_AUDITS = (
    ("lcp", "largest-contentful-paint"),
    ("fid", "max-potential-fid"),
    ("cls", "cumulative-layout-shift"),
    ("fcp", "first-contentful-paint"),
    ("tbt", "total-blocking-time"),
    ("si", "speed-index"),
)

SKIPPED_DISPLAY_MODES = {"manual", "notApplicable"}


def _below_one(audit: dict[str, Any]) -> bool:
    # null scores count as below 1, a missing score key does not
    if "score" not in audit:
        return False
    score = get_score(audit)
    return score is None or score < 1


class Analyzer:
    """Queries a parsed LHR without modifying it.

    Args:
        lhr: The parsed report
        category: Default category filter for failed audits
        min_score: Default failure threshold for failed audits
    """

    def __init__(self, lhr: dict[str, Any], category: Optional[str] = None, min_score: float = 0.5):
        self.lhr = lhr
        self.category = category
        self.min_score = min_score

    def summary(self) -> Summary:
        return Summary(
            url=self.lhr.get("requestedUrl"),
            final_url=self.lhr.get("finalUrl"),
            timestamp=self.lhr.get("fetchTime"),
            version=self.lhr.get("lighthouseVersion"),
            scores=self.category_scores(),
        )

    def category_scores(self) -> list[CategoryScore]:
        scores = []
        for category_id, category in get_categories(self.lhr).items():
            if not isinstance(category, dict):
                continue
            score = get_score(category)
            scores.append(CategoryScore(
                id=category_id,
                title=get_text(category, "title", category_id),
                score=round_half_up(score * 100) if score is not None else None,
            ))
        return scores

    def failed_audits(
        self,
        category: Optional[str] = None,
        min_score: Optional[float] = None,
    ) -> list[dict[str, Any]]:
        """Audits scoring below `min_score`, de-duplicated across categories.

        Audits without a score, and manual or not-applicable ones, are never
        reported.
        """
        category = category if category is not None else self.category
        min_score = min_score if min_score is not None else self.min_score

        if category:
            audit_ids = get_audit_refs(self.lhr, category)
        else:
            audit_ids = []
            for category_id in get_categories(self.lhr):
                audit_ids.extend(get_audit_refs(self.lhr, category_id))

        seen: set[str] = set()
        failed = []
        for audit_id in audit_ids:
            if audit_id in seen:
                continue
            seen.add(audit_id)

            audit = get_audit(self.lhr, audit_id)
            if audit is None:
                logger.debug("Audit ref %s has no audit entry", audit_id)
                continue
            score = get_score(audit)
            if score is None or score >= min_score:
                continue
            if audit.get("scoreDisplayMode") in SKIPPED_DISPLAY_MODES:
                continue
            failed.append(audit)
        return failed

    def opportunities(self) -> list[Opportunity]:
        """Opportunity audits, largest time savings first."""
        found = []
        for audit_id, audit in get_audits(self.lhr).items():
            if not isinstance(audit, dict):
                continue
            details = get_details(audit)
            if details.get("type") != "opportunity" or not _below_one(audit):
                continue
            found.append(Opportunity(
                id=get_text(audit, "id", audit_id),
                title=get_text(audit, "title", audit_id),
                description=get_text(audit, "description"),
                score=get_score(audit),
                wasted_ms=get_number(details, "overallSavingsMs"),
                wasted_bytes=get_number(details, "overallSavingsBytes"),
                item_count=len(get_items(details)),
            ))
        # sorted() is stable, ties keep report order
        return sorted(found, key=lambda o: o.wasted_ms, reverse=True)

    def diagnostics(self) -> list[Diagnostic]:
        found = []
        for audit_id in DIAGNOSTIC_AUDITS:
            audit = get_audit(self.lhr, audit_id)
            if audit is None or not _below_one(audit):
                continue
            found.append(Diagnostic(
                id=audit_id,
                title=get_text(audit, "title", audit_id),
                description=get_text(audit, "description"),
                score=get_score(audit),
                display_value=audit.get("displayValue"),
            ))
        return found

    def core_web_vitals(self) -> list[Vital]:
        vitals = []
        for key, audit_id in VITAL_AUDITS:
            audit = get_audit(self.lhr, audit_id)
            if audit is None:
                continue
            vitals.append(Vital(
                key=key,
                name=get_text(audit, "title", audit_id),
                value=get_numeric_value(audit),
                unit=audit.get("numericUnit"),
                display_value=audit.get("displayValue"),
                rating=audit.get("rating"),
            ))
        return vitals

    def render_markdown(self) -> str:
        return render_analysis(self)
