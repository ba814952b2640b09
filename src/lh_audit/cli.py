"""CLI interface for lh-audit."""

import json
import logging
import re
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.markdown import Markdown
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich import box

from . import __version__
from .analyzer import Analyzer
from .config import Settings, load_settings
from .engine import FixRuleEngine
from .errors import LhAuditError, ReportNotFoundError, WriteError
from .lhr import get_score, round_half_up
from .loader import load_report, resolve_report_path
from .presenter import format_timestamp, render_fixes, score_emoji, seconds_saved, vital_display


console = Console()
err_console = Console(stderr=True)

logger = logging.getLogger(__name__)

TOP_N = 5


def score_color(score: Optional[int]) -> str:
    """Get color for a 0-100 score value."""
    if score is None:
        return "grey50"
    elif score >= 90:
        return "green"
    elif score >= 50:
        return "yellow"
    else:
        return "red"


def setup_logging(level: str) -> None:
    """Route library logging through rich on stderr."""
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


def fail(error: LhAuditError) -> None:
    """Print an error and exit non-zero."""
    err_console.print(f"[red]Error:[/red] {escape(str(error))}")
    if isinstance(error, ReportNotFoundError) and error.hint:
        err_console.print(f"\n[dim]{error.hint}[/dim]")
    sys.exit(1)


def today() -> str:
    return datetime.now(timezone.utc).date().isoformat()


def save_output(path: Path, content: str) -> None:
    """Write rendered output, creating the parent directory."""
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    except OSError as e:
        raise WriteError(f"Could not save output to {path}: {e}") from e


def load_for_command(report: Optional[str], settings: Settings) -> tuple[Path, dict[str, Any]]:
    report_path = resolve_report_path(report, settings.reports_dir)
    logger.debug("Report: %s", report_path)
    if not report and report_path.name != "latest.json":
        console.print(f"[yellow]Using latest report: {escape(report_path.name)}[/yellow]\n")
    return report_path, load_report(report_path)


def short_metric_name(name: str) -> str:
    """First two words of a metric title."""
    return re.sub(r"(\w+ \w+).*", r"\1", name)


def analysis_payload(analyzer: Analyzer) -> dict[str, Any]:
    """JSON-serializable analysis."""
    summary = analyzer.summary()
    return {
        "summary": {
            "url": summary.url,
            "finalUrl": summary.final_url,
            "timestamp": summary.timestamp,
            "version": summary.version,
            "scores": {s.id: {"title": s.title, "score": s.score} for s in summary.scores},
        },
        "coreWebVitals": {
            v.key: {
                "name": v.name,
                "value": v.value,
                "unit": v.unit,
                "displayValue": v.display_value,
                "rating": v.rating,
                "passed": v.passed,
            }
            for v in analyzer.core_web_vitals()
        },
        "opportunities": [
            {
                "id": o.id,
                "title": o.title,
                "description": o.description,
                "score": o.score,
                "wastedMs": o.wasted_ms,
                "wastedBytes": o.wasted_bytes,
                "items": o.item_count,
            }
            for o in analyzer.opportunities()
        ],
        "diagnostics": [
            {
                "id": d.id,
                "title": d.title,
                "description": d.description,
                "score": d.score,
                "displayValue": d.display_value,
            }
            for d in analyzer.diagnostics()
        ],
        "failedAudits": analyzer.failed_audits(),
    }


def print_analysis(analyzer: Analyzer, report_path: Path, verbose: bool = False) -> None:
    """Print analysis to console."""
    summary = analyzer.summary()
    vitals = analyzer.core_web_vitals()
    opportunities = analyzer.opportunities()
    failed = analyzer.failed_audits()

    console.print()
    console.print(Panel(
        f"[bold]{escape(summary.url or 'N/A')}[/bold]\n"
        f"[dim]Lighthouse {summary.version or '?'} • {format_timestamp(summary.timestamp)}[/dim]",
        title="📊 Lighthouse Analysis",
        border_style="cyan"
    ))

    # Category scores
    table = Table(box=box.SIMPLE, show_header=True, header_style="bold", title="Category Scores")
    table.add_column("Category", style="cyan")
    table.add_column("Score", justify="right")
    for score in summary.scores:
        display = str(score.score) if score.score is not None else "N/A"
        table.add_row(
            f"{score_emoji(score.score)} {escape(score.id)}",
            f"[{score_color(score.score)}]{display}[/]/100",
        )
    console.print(table)

    # Core Web Vitals
    if vitals:
        table = Table(box=box.SIMPLE, show_header=True, header_style="bold", title="Core Web Vitals")
        table.add_column("Metric")
        table.add_column("Value", justify="right")
        table.add_column("Rating")
        for vital in vitals:
            status = "[green]✅ Pass[/green]" if vital.passed else "[red]❌ Fail[/red]"
            table.add_row(escape(short_metric_name(vital.name)), escape(vital_display(vital)), status)
        console.print(table)

    if opportunities:
        console.print("\n[bold]Opportunities (Sorted by Impact)[/bold]\n")
        for i, opp in enumerate(opportunities[:TOP_N], 1):
            saved = f" [yellow]~{seconds_saved(opp.wasted_ms)}s saved[/yellow]" if opp.wasted_ms > 0 else ""
            console.print(f"  [cyan]{i}.[/cyan] [bold]{escape(opp.title)}[/bold]{saved}")
            if verbose and opp.description:
                console.print(f"      [dim]{escape(opp.description[:100])}...[/dim]")
        if len(opportunities) > TOP_N:
            console.print(f"  [dim]... and {len(opportunities) - TOP_N} more opportunities[/dim]")

    if failed:
        console.print("\n[bold]Failed Audits[/bold]\n")
        for i, audit in enumerate(failed[:TOP_N], 1):
            score = round_half_up((get_score(audit) or 0) * 100)
            console.print(f"  [cyan]{i}.[/cyan] [bold]{escape(str(audit.get('title', audit.get('id'))))}[/bold] [red]Score: {score}[/red]")
            if verbose and audit.get("description"):
                console.print(f"      [dim]{escape(str(audit['description'])[:100])}...[/dim]")
        if len(failed) > TOP_N:
            console.print(f"  [dim]... and {len(failed) - TOP_N} more failed audits[/dim]")

    # Quick actions
    console.print("\n[bold]🎯 Quick Actions:[/bold]\n")
    if opportunities:
        console.print(f"  [cyan]•[/cyan] Run [cyan]lh-audit fixes {escape(str(report_path))}[/cyan] to generate code fix suggestions")
    performance = summary.score_for("performance")
    if performance is not None and performance < 90:
        console.print("  [cyan]•[/cyan] Focus on: Core Web Vitals (LCP, FID, CLS)")
    accessibility = summary.score_for("accessibility")
    if accessibility is not None and accessibility < 90:
        console.print("  [cyan]•[/cyan] Fix: Alt text, color contrast, form labels")
    seo = summary.score_for("seo")
    if seo is not None and seo < 90:
        console.print("  [cyan]•[/cyan] Add: Meta descriptions, structured data, canonical URLs")
    console.print()


@click.group(invoke_without_command=True)
@click.pass_context
@click.version_option(version=__version__)
def cli(ctx):
    """lh-audit - Lighthouse report analysis and fix suggestions.

    \b
    Quick start:
        lighthouse https://example.com --output json \\
            --output-path .lighthouse/reports/latest.json
        lh-audit analyze
        lh-audit fixes

    \b
    Commands:
        analyze  Summarize scores, vitals, opportunities and failed audits
        fixes    Generate code fix suggestions for failing audits
    """
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


@cli.command()
@click.argument("report", required=False)
@click.option("-c", "--category", help="Filter by category (performance, accessibility, seo, best-practices)")
@click.option("-s", "--min-score", type=click.FloatRange(0, 1), default=None,
              help="Minimum score threshold (0-1)  [default: 0.5]")
@click.option("-f", "--format", "output_format", type=click.Choice(["markdown", "json"]),
              default="markdown", show_default=True, help="Output format")
@click.option("-v", "--verbose", is_flag=True, help="Show detailed information")
def analyze(report: Optional[str], category: Optional[str], min_score: Optional[float],
            output_format: str, verbose: bool):
    """Analyze a Lighthouse JSON report.

    \b
    Examples:
        lh-audit analyze
        lh-audit analyze report.json --category performance
        lh-audit analyze report.json --format json
    """
    try:
        settings = load_settings()
        setup_logging("DEBUG" if verbose else settings.log_level)

        report_path, lhr = load_for_command(report, settings)

        with console.status("[bold blue]Analyzing Lighthouse report...[/bold blue]"):
            analyzer = Analyzer(
                lhr,
                category=category,
                min_score=min_score if min_score is not None else settings.min_score,
            )
            if output_format == "json":
                content = json.dumps(analysis_payload(analyzer), indent=2, ensure_ascii=False)
            else:
                content = analyzer.render_markdown()

        print_analysis(analyzer, report_path, verbose=verbose)

        ext = "json" if output_format == "json" else "md"
        output_path = settings.analysis_dir / f"analysis-{today()}.{ext}"
        save_output(output_path, content)
        console.print(f"[dim]Analysis saved to: {escape(str(output_path))}[/dim]\n")
    except LhAuditError as e:
        fail(e)


@cli.command()
@click.argument("report", required=False)
@click.option("-c", "--category", help="Filter by category")
@click.option("-o", "--output", type=click.Path(dir_okay=False),
              help="Write output to file (default: .lighthouse/fixes/fixes-<date>.md)")
def fixes(report: Optional[str], category: Optional[str], output: Optional[str]):
    """Generate fix suggestions from a Lighthouse report.

    \b
    Examples:
        lh-audit fixes
        lh-audit fixes report.json -o FIXES.md
        lh-audit fixes report.json --category accessibility
    """
    try:
        settings = load_settings()
        setup_logging(settings.log_level)

        _, lhr = load_for_command(report, settings)

        with console.status("[bold blue]Generating fix suggestions...[/bold blue]"):
            content = render_fixes(FixRuleEngine(lhr, category=category).run())

        console.print("\n[bold cyan]🔧 Fix Suggestions[/bold cyan]\n")
        console.print(Markdown(content))

        output_path = Path(output) if output else settings.fixes_dir / f"fixes-{today()}.md"
        save_output(output_path, content)
        console.print(f"\n[dim]Fixes saved to: {escape(str(output_path))}[/dim]\n")
    except LhAuditError as e:
        fail(e)


# Convenience: allow `lh-audit report.json` as shortcut for `lh-audit analyze report.json`
def main():
    """Entry point that handles both `lh-audit REPORT` and `lh-audit analyze REPORT`."""
    args = sys.argv[1:]

    if args and not args[0].startswith("-") and args[0] not in ["analyze", "fixes"]:
        if args[0].endswith(".json"):
            sys.argv.insert(1, "analyze")

    cli()


if __name__ == "__main__":
    main()
