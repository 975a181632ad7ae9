"""CLI interface for Ad Insight.

Usage:
    ad-insight analyze report.txt                      # Stats, keywords, themes, formats
    ad-insight analyze report.txt --save --format html # Also write a report file
    ad-insight scripts report.txt --topic "Reiki"      # Three script concepts
    ad-insight expand report.txt -t "Reiki" -i 2 -L Hindi
    cat report.txt | ad-insight analyze -              # Read the report from stdin
"""

from __future__ import annotations

import asyncio
import sys
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from ad_insight.errors import AdInsightError, ConceptIndexError
from ad_insight.models import ParsedData, ScriptConcept, ScriptLanguage
from ad_insight.utils.config import load_config
from ad_insight.utils.logging import setup_logging

app = typer.Typer(
    name="ad-insight",
    help="Analyze pasted ad-performance reports and generate ad scripts from them.",
    add_completion=False,
)
console = Console()


def _read_report(report_file: Path) -> str:
    if str(report_file) == "-":
        return sys.stdin.read()
    if not report_file.exists():
        console.print(f"[red]File not found: {report_file}[/]")
        raise typer.Exit(1)
    return report_file.read_text(encoding="utf-8")


def _analyze(report_file: Path) -> ParsedData:
    from ad_insight.analyzer import ReportAnalyzer

    text = _read_report(report_file)
    try:
        return ReportAnalyzer().analyze(text)
    except AdInsightError as e:
        console.print(f"[red]{e}[/]")
        raise typer.Exit(1)


def _concepts(parsed: ParsedData, topic: str) -> list[ScriptConcept]:
    from ad_insight.generator import generate_concepts

    try:
        return generate_concepts(parsed, topic)
    except AdInsightError as e:
        console.print(f"[red]{e}[/]")
        raise typer.Exit(1)


def _display_summary(parsed: ParsedData) -> None:
    s = parsed.stats
    console.print("\n[bold]═══ Report Summary ═══[/]")
    console.print(f"Date range: [cyan]{escape(s.date_range)}[/]")
    console.print(f"Winning ads: [green]{s.total_winning}[/]")
    console.print(f"Underperforming ads: [red]{s.total_losing}[/]")
    console.print(f"Win rate: [yellow]{s.win_rate}%[/]")


def _display_tables(parsed: ParsedData) -> None:
    if parsed.keywords:
        table = Table(title="Top Keywords")
        table.add_column("Keyword", style="green")
        table.add_column("Count", justify="right", style="yellow")
        table.add_column("Weight", justify="right", style="magenta")
        for k in parsed.keywords:
            table.add_row(k.word, str(k.count), f"{k.normalized_count:.2f}")
        console.print(table)

    if parsed.formats:
        table = Table(title="Winning Formats")
        table.add_column("Format", style="cyan")
        table.add_column("Count", justify="right", style="yellow")
        for f in parsed.formats:
            table.add_row(f.name, str(f.count))
        console.print(table)

    if parsed.themes:
        table = Table(title="Theme Scores")
        table.add_column("Theme", style="cyan")
        table.add_column("Score", justify="right")
        for t in parsed.themes:
            style = "green" if t.count > 0 else "red"
            table.add_row(t.name, f"[{style}]{t.count:g}[/]")
        console.print(table)

    table = Table(title="Audience Mix (placeholder)")
    table.add_column("Audience", style="cyan")
    table.add_column("Share", justify="right", style="blue")
    for a in parsed.audiences:
        table.add_row(a.name, f"{a.count}%")
    console.print(table)

    for label, ads, style in (
        ("Winning Ads", parsed.winning_ads, "green"),
        ("Underperforming Ads", parsed.losing_ads, "red"),
    ):
        if ads:
            console.print(f"\n[bold]{label}:[/]")
            for ad in ads:
                console.print(f"  [{style}]•[/] {escape(ad)}", highlight=False)


@app.command()
def analyze(
    report_file: Path = typer.Argument(..., help="Report text file, or - for stdin"),
    save: bool = typer.Option(False, "--save", "-s", help="Save the report to the output dir"),
    report_format: Optional[str] = typer.Option(
        None, "--format", "-f", help="Saved report format: markdown, json, html"
    ),
    json_output: bool = typer.Option(False, "--json", help="Print the parsed data as JSON"),
    config_path: Optional[Path] = typer.Option(
        None, "--config", "-c", help="Path to config TOML file"
    ),
    log_level: str = typer.Option("WARNING", "--log-level", "-l", help="Log level"),
):
    """Parse a pasted ad report into stats, keywords, themes and formats."""
    setup_logging(log_level)
    config = load_config(config_path)
    if report_format:
        config.setdefault("reporting", {})["format"] = report_format

    parsed = _analyze(report_file)

    if json_output:
        console.print_json(data=parsed.to_json_dict())
    else:
        _display_summary(parsed)
        _display_tables(parsed)

    if save:
        from ad_insight.reporter.output import ReportWriter

        name = report_file.stem if str(report_file) != "-" else "stdin"
        path = ReportWriter(config).save_report(parsed, name=name)
        console.print(f"\n[bold green]✓[/] Report saved: {path}")


@app.command()
def scripts(
    report_file: Path = typer.Argument(..., help="Report text file, or - for stdin"),
    topic: str = typer.Option(..., "--topic", "-t", help="What the ads are about"),
    log_level: str = typer.Option("WARNING", "--log-level", "-l", help="Log level"),
):
    """Generate three script concepts from the report's winning keywords."""
    setup_logging(log_level)

    parsed = _analyze(report_file)
    concepts = _concepts(parsed, topic)

    for i, concept in enumerate(concepts, 1):
        console.print(
            Panel(
                f"[bold]Hook:[/] {escape(concept.hook)}\n\n{escape(concept.script)}",
                title=f"{i}. {escape(concept.title)}",
                subtitle=concept.format,
                border_style="magenta",
            )
        )


@app.command()
def expand(
    report_file: Path = typer.Argument(..., help="Report text file, or - for stdin"),
    topic: str = typer.Option(..., "--topic", "-t", help="What the ads are about"),
    index: int = typer.Option(1, "--index", "-i", help="Concept number to expand (1-3)"),
    language: Optional[ScriptLanguage] = typer.Option(
        None, "--language", "-L", help="Script language (default: generator.default_language)"
    ),
    config_path: Optional[Path] = typer.Option(
        None, "--config", "-c", help="Path to config TOML file"
    ),
    log_level: str = typer.Option("INFO", "--log-level", "-l", help="Log level"),
):
    """Expand one script concept into a full production script with Claude."""
    setup_logging(log_level)
    config = load_config(config_path)

    parsed = _analyze(report_file)
    concepts = _concepts(parsed, topic)
    if not 1 <= index <= len(concepts):
        console.print(f"[red]{ConceptIndexError(index, len(concepts))}[/]")
        raise typer.Exit(1)
    concept = concepts[index - 1]

    from ad_insight.generator.script_writer import ScriptWriter

    writer = ScriptWriter(config)
    language = language or writer.default_language
    console.print(f"\n[bold]Expanding:[/] [cyan]{escape(concept.title)}[/] ({language.value})")
    result = asyncio.run(writer.expand(concept, parsed, topic, language))

    console.print()
    console.print(result.text, markup=False, highlight=False)
    if not result.ok:
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
