"""Markdown rendering for fix suggestions and report analysis."""

from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any, Optional

from .lhr import get_score, get_text, round_half_up
from .models import PRIORITY_ORDER, Fix, Priority, Vital

if TYPE_CHECKING:
    from .analyzer import Analyzer


PRIORITY_EMOJI = {
    Priority.HIGH: "🔴",
    Priority.MEDIUM: "🟡",
    Priority.LOW: "🟢",
}

NO_ISSUES = "No issues found! Great job!"


def score_emoji(score: Optional[int]) -> str:
    """Emoji for a 0-100 category score."""
    if score is None:
        return "⚪"
    if score >= 90:
        return "🟢"
    if score >= 50:
        return "🟡"
    return "🔴"


def format_timestamp(value: Any) -> str:
    """Normalize a fetchTime to ISO 8601 UTC with milliseconds."""
    if not value:
        return "N/A"
    if not isinstance(value, str):
        return str(value)
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return value
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    parsed = parsed.astimezone(timezone.utc)
    return parsed.strftime("%Y-%m-%dT%H:%M:%S.") + f"{parsed.microsecond // 1000:03d}Z"


def vital_display(vital: Vital) -> str:
    if vital.display_value:
        return vital.display_value
    if vital.value is None:
        return "N/A"
    unit = vital.unit if vital.unit and vital.unit != "unitless" else ""
    return f"{round_half_up(vital.value)}{unit}"


def seconds_saved(wasted_ms: float) -> int:
    return round_half_up(wasted_ms / 1000)


def render_fixes(fixes: list[Fix]) -> str:
    """Render fixes as markdown grouped into high, medium and low sections.

    Order inside a section is the order the fixes were generated in.
    """
    output = "# Lighthouse Fix Suggestions\n\n"

    if not fixes:
        return output + NO_ISSUES + "\n"

    ordered = sorted(fixes, key=lambda f: Priority(f.priority).rank)

    for priority in PRIORITY_ORDER:
        bucket = [f for f in ordered if f.priority == priority]
        if not bucket:
            continue

        output += f"## {PRIORITY_EMOJI[priority]} {priority.label} Priority\n\n"

        for fix in bucket:
            output += f"### {fix.title}\n\n"
            output += f"**Impact**: {fix.impact}\n\n"
            output += f"{fix.description}\n\n"

            if fix.diagnosis:
                output += f"**🔍 Diagnosis**: {fix.diagnosis}\n\n"

            for snippet in fix.snippets:
                output += f"#### {snippet.title}\n\n"
                output += f"```{snippet.type}\n{snippet.code}\n```\n\n"

            output += "---\n\n"

    return output


def render_analysis(analyzer: "Analyzer") -> str:
    """Render the full analysis of a report as markdown."""
    summary = analyzer.summary()
    vitals = analyzer.core_web_vitals()
    opportunities = analyzer.opportunities()
    failed = analyzer.failed_audits()

    lines = ["# Lighthouse Report Analysis", ""]

    lines += [
        "## Summary",
        "",
        f"- **URL**: {summary.url or 'N/A'}",
        f"- **Timestamp**: {format_timestamp(summary.timestamp)}",
        f"- **Lighthouse Version**: {summary.version or 'N/A'}",
        "",
    ]

    lines += ["## Category Scores", ""]
    for score in summary.scores:
        display = score.score if score.score is not None else "N/A"
        lines.append(f"- **{score.title}**: {score_emoji(score.score)} {display}/100")
    lines.append("")

    lines += [
        "## Core Web Vitals",
        "",
        "| Metric | Value | Rating |",
        "|--------|-------|--------|",
    ]
    for vital in vitals:
        status = "✅ Pass" if vital.passed else "❌ Fail"
        lines.append(f"| {vital.name} | {vital_display(vital)} | {status} |")
    lines.append("")

    if opportunities:
        lines += ["## Opportunities (Sorted by Impact)", ""]
        for opp in opportunities:
            saved = f" - **{seconds_saved(opp.wasted_ms)}s saved**" if opp.wasted_ms > 0 else ""
            lines.append(f"### {opp.title}{saved}")
            lines.append(opp.description)
            lines.append("")

    if failed:
        lines += ["## Failed Audits", ""]
        for audit in failed:
            score = get_score(audit) or 0
            lines.append(f"### {get_text(audit, 'title', get_text(audit, 'id'))}")
            lines.append(f"- **Score**: {round_half_up(score * 100)}")
            lines.append(f"- {get_text(audit, 'description')}")
            lines.append("")

    return "\n".join(lines) + "\n"
