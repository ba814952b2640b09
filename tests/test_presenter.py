"""Tests for markdown rendering."""

import re

from lh_audit.analyzer import Analyzer
from lh_audit.engine import FixRuleEngine
from lh_audit.models import Fix, Priority, Snippet, Vital
from lh_audit.presenter import format_timestamp, render_analysis, render_fixes, score_emoji, vital_display

from conftest import make_audit, make_lhr


def _fix(title, priority, **kwargs):
    return Fix(title=title, priority=priority, impact="Impact", description="Desc", **kwargs)


class TestRenderFixes:

    def test_no_issues(self):
        assert render_fixes([]) == "# Lighthouse Fix Suggestions\n\nNo issues found! Great job!\n"

    def test_empty_engine_run(self):
        lhr = make_lhr([make_audit("canonical", 1)], {"seo": ["canonical"]})
        output = render_fixes(FixRuleEngine(lhr).run())
        assert output.splitlines()[-1] == "No issues found! Great job!"

    def test_priority_grouping(self):
        fixes = [
            _fix("Low fix", Priority.LOW),
            _fix("High fix", Priority.HIGH),
            _fix("Medium fix", Priority.MEDIUM),
        ]
        output = render_fixes(fixes)
        positions = [
            output.index("## 🔴 High Priority"),
            output.index("### High fix"),
            output.index("## 🟡 Medium Priority"),
            output.index("### Medium fix"),
            output.index("## 🟢 Low Priority"),
            output.index("### Low fix"),
        ]
        assert positions == sorted(positions)

    def test_emission_order_kept_within_bucket(self):
        fixes = [
            _fix("High one", Priority.HIGH),
            _fix("Low", Priority.LOW),
            _fix("High two", Priority.HIGH),
            _fix("High three", Priority.HIGH),
        ]
        headings = re.findall(r"^### (.+)$", render_fixes(fixes), re.MULTILINE)
        assert headings == ["High one", "High two", "High three", "Low"]

    def test_empty_buckets_omitted(self):
        output = render_fixes([_fix("Only", Priority.MEDIUM)])
        assert "High Priority" not in output
        assert "Low Priority" not in output
        assert "## 🟡 Medium Priority" in output

    def test_does_not_reorder_input(self):
        fixes = [_fix("Low", Priority.LOW), _fix("High", Priority.HIGH)]
        render_fixes(fixes)
        assert [f.title for f in fixes] == ["Low", "High"]

    def test_fix_layout(self):
        fix = _fix(
            "Add Meta Description",
            Priority.HIGH,
            diagnosis="Missing",
            snippets=[Snippet(type="html", title="Add tag", code="<meta>")],
        )
        output = render_fixes([fix])
        assert (
            "### Add Meta Description\n\n"
            "**Impact**: Impact\n\n"
            "Desc\n\n"
            "**🔍 Diagnosis**: Missing\n\n"
            "#### Add tag\n\n"
            "```html\n<meta>\n```\n\n"
            "---\n\n"
        ) in output

    def test_diagnosis_optional(self):
        assert "Diagnosis" not in render_fixes([_fix("No diagnosis", Priority.LOW)])

    def test_unused_javascript_blocks(self, sample_lhr):
        output = render_fixes(FixRuleEngine(sample_lhr).run())
        assert "#### Unused JavaScript Analysis\n\n```markdown\n" in output
        assert "#### Browser Extensions Detected (Can Ignore)\n\n```text\n" in output


class TestRenderAnalysis:

    def test_sections(self, sample_lhr):
        output = render_analysis(Analyzer(sample_lhr))
        sections = re.findall(r"^## (.+)$", output, re.MULTILINE)
        assert sections == [
            "Summary",
            "Category Scores",
            "Core Web Vitals",
            "Opportunities (Sorted by Impact)",
            "Failed Audits",
        ]
        assert "- **URL**: https://example.com/" in output
        assert "- **Timestamp**: 2024-05-01T12:30:45.123Z" in output
        assert "- **Lighthouse Version**: 12.2.1" in output

    def test_category_scores(self, sample_lhr):
        output = render_analysis(Analyzer(sample_lhr))
        assert "- **Performance**: 🔴 38/100" in output
        assert "- **Accessibility**: 🟢 91/100" in output
        assert "- **Seo**: ⚪ N/A/100" in output

    def test_vitals_table(self, sample_lhr):
        output = render_analysis(Analyzer(sample_lhr))
        assert "| Largest Contentful Paint | 5.2 s | ❌ Fail |" in output
        assert "| Cumulative Layout Shift | 0.01 | ✅ Pass |" in output

    def test_opportunity_seconds_round_trip(self):
        savings = [1510, 499, 2500, 12345.6, 0]
        audits = [
            make_audit(f"opp-{i}", 0.3, title=f"Opportunity {i}",
                       details={"type": "opportunity", "overallSavingsMs": ms})
            for i, ms in enumerate(savings)
        ]
        analyzer = Analyzer(make_lhr(audits))
        output = render_analysis(analyzer)

        parsed = {
            title: int(seconds)
            for title, seconds in re.findall(r"^### (Opportunity \d) - \*\*(\d+)s saved\*\*$", output, re.MULTILINE)
        }
        for opp in analyzer.opportunities():
            if opp.wasted_ms > 0:
                assert parsed[opp.title] == int(opp.wasted_ms / 1000 + 0.5)
            else:
                assert opp.title not in parsed
                assert f"### {opp.title}\n" in output
        assert parsed["Opportunity 2"] == 3
        assert parsed["Opportunity 1"] == 0

    def test_failed_audit_scores(self, sample_lhr):
        output = render_analysis(Analyzer(sample_lhr, category="accessibility"))
        assert "### color-contrast title\n- **Score**: 0\n- color-contrast description" in output

    def test_no_opportunities_or_failures(self):
        lhr = make_lhr([make_audit("canonical", 1)], {"seo": ["canonical"]}, {"seo": 1})
        output = Analyzer(lhr).render_markdown()
        assert "Opportunities" not in output
        assert "Failed Audits" not in output

    def test_empty_report(self):
        output = render_analysis(Analyzer({}))
        assert "- **URL**: N/A" in output
        assert "- **Timestamp**: N/A" in output


class TestHelpers:

    def test_score_emoji(self):
        assert score_emoji(None) == "⚪"
        assert score_emoji(90) == "🟢"
        assert score_emoji(89) == "🟡"
        assert score_emoji(50) == "🟡"
        assert score_emoji(49) == "🔴"

    def test_format_timestamp(self):
        assert format_timestamp("2024-05-01T12:30:45Z") == "2024-05-01T12:30:45.000Z"
        assert format_timestamp("2024-05-01T14:30:45.500+02:00") == "2024-05-01T12:30:45.500Z"
        assert format_timestamp("yesterday") == "yesterday"
        assert format_timestamp(None) == "N/A"

    def test_vital_display_fallback(self):
        vital = Vital(key="tbt", name="Total Blocking Time", value=640.4, unit="millisecond",
                      display_value=None, rating=None)
        assert vital_display(vital) == "640millisecond"
        vital.unit = "unitless"
        assert vital_display(vital) == "640"
        vital.value = None
        assert vital_display(vital) == "N/A"
