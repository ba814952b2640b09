"""Map failing Lighthouse audits to fix suggestions."""

import logging
from typing import Any, Optional

from .lhr import get_audit, get_audit_refs, get_score
from .models import Fix
from .rules import CATEGORY_ORDER, RULES, check_framework

logger = logging.getLogger(__name__)

FIX_THRESHOLD = 0.9


class FixRuleEngine:
    """Runs the per-audit fix rules over one report.

    Args:
        lhr: The parsed report
        category: Only scan this category (default: all four)
    """

    def __init__(self, lhr: dict[str, Any], category: Optional[str] = None):
        self.lhr = lhr
        self.category = category
        self._fixes: list[Fix] = []
        self._fixed: set[str] = set()

    def run(self) -> list[Fix]:
        """Scan categories in fixed order and collect fixes in emission order."""
        self._fixes = []
        self._fixed = set()

        for category_id in CATEGORY_ORDER:
            if self.category and category_id != self.category:
                continue
            self._scan_category(category_id)
            if category_id == "performance":
                framework_fix = check_framework(self.lhr, FIX_THRESHOLD)
                if framework_fix is not None:
                    logger.debug("Next.js chunks found in unused-javascript")
                    self._add_fix(framework_fix)

        logger.debug("Generated %d fixes", len(self._fixes))
        return list(self._fixes)

    def _scan_category(self, category_id: str) -> None:
        skipped = 0
        for audit_id in get_audit_refs(self.lhr, category_id):
            # audits shared between categories only fix once
            if audit_id in self._fixed:
                continue
            audit = get_audit(self.lhr, audit_id)
            if audit is None:
                continue
            score = get_score(audit)
            if score is None or score >= FIX_THRESHOLD:
                continue

            rule = RULES.get(audit_id)
            if rule is None:
                skipped += 1
                continue

            logger.debug("Applying rule %s (score %.2f)", audit_id, score)
            self._add_fix(rule(audit))
            self._fixed.add(audit_id)

        if skipped:
            logger.debug("%s: %d failing audits have no fix rule", category_id, skipped)

    def _add_fix(self, fix: Fix) -> None:
        self._fixes.append(fix)
