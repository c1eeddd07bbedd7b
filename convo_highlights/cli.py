"""Command-line interface for Conversation Highlights."""

import json
import logging
import sys
from pathlib import Path
from typing import Optional

import structlog
import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from convo_highlights.config import get_settings
from convo_highlights.models import AnalysisReport
from convo_highlights.parsing import detect_source
from convo_highlights.pipeline import HighlightClassifier, analyze_text

# Configure structlog for CLI
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.JSONRenderer(),
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)

app = typer.Typer(
    name="highlighter",
    help="Conversation Highlights - reconstruct AI chat transcripts and extract highlights",
    add_completion=False,
)
console = Console()


@app.command()
def analyze(
    transcript_path: Path = typer.Argument(
        ...,
        help="Path to a plain-text conversation transcript",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
    ),
    output: Path = typer.Option(
        None,
        "--output",
        "-o",
        help="Output file path for the JSON report (default: <name>_highlights.json)",
    ),
    pretty: bool = typer.Option(
        True,
        "--pretty/--compact",
        help="Pretty-print JSON output",
    ),
    oracle: Optional[bool] = typer.Option(
        None,
        "--oracle/--no-oracle",
        help="Force the classification oracle on or off (default: from settings)",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose logging",
    ),
) -> None:
    """Analyze a transcript and write its highlights as JSON."""
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING)

    settings = get_settings()
    if oracle is not None:
        settings = settings.model_copy(update={"oracle_enabled": oracle})

    if output is None:
        output = transcript_path.with_name(f"{transcript_path.stem}_highlights.json")

    console.print(f"[dim]Input:[/dim] {transcript_path}")
    console.print(f"[dim]Output:[/dim] {output}\n")

    try:
        raw_text = transcript_path.read_text(encoding="utf-8", errors="replace")
        report = analyze_text(raw_text, HighlightClassifier.from_settings(settings), settings)

        with open(output, "w", encoding="utf-8") as f:
            json.dump(
                report.model_dump(mode="json"),
                f,
                indent=2 if pretty else None,
                ensure_ascii=False,
            )

        _display_summary(report)
        console.print(f"\n[green]Report saved to:[/green] {output}")

    except OSError as e:
        console.print(f"\n[red]Error:[/red] {e}")
        if verbose:
            console.print_exception()
        sys.exit(1)


@app.command()
def detect(
    transcript_path: Path = typer.Argument(
        ...,
        help="Path to a plain-text conversation transcript",
        exists=True,
        dir_okay=False,
        readable=True,
    ),
) -> None:
    """Print the detected dialect of a transcript."""
    raw_text = transcript_path.read_text(encoding="utf-8", errors="replace")
    console.print(detect_source(raw_text).value)


@app.command()
def info() -> None:
    """Display system information and configuration."""
    from convo_highlights import __version__

    settings = get_settings()

    console.print(
        Panel.fit(
            "[bold blue]Conversation Highlights[/bold blue]",
            border_style="blue",
        )
    )

    table = Table(show_header=False, box=None)
    table.add_column("Setting", style="dim")
    table.add_column("Value")

    table.add_row("Version", __version__)
    table.add_row("Oracle Enabled", str(settings.oracle_enabled))
    table.add_row("LLM Model", settings.llm_model_name)
    table.add_row("Ollama URL", settings.llm_ollama_base_url)
    table.add_row("Temperature", str(settings.llm_temperature))
    table.add_row("Oracle Timeout", f"{settings.oracle_timeout_seconds}s")
    table.add_row("Extraction Roles", ", ".join(r.value for r in settings.extraction_roles))

    console.print(table)


def _display_summary(report: AnalysisReport) -> None:
    """Display a summary of the analysis results."""
    conversation = report.conversation
    analysis = report.analysis

    console.print("[bold]Analysis Summary[/bold]")
    console.print("-" * 40)
    console.print(f"[dim]Title:[/dim] {conversation.title}")
    console.print(f"[dim]Source:[/dim] {conversation.source.value}")
    console.print(f"[dim]Category:[/dim] {conversation.category}")
    console.print(f"[dim]Summary:[/dim] {analysis.summary}")

    table = Table(show_header=False, box=None)
    table.add_column("Metric", style="dim")
    table.add_column("Count", justify="right")

    table.add_row("Messages", str(len(conversation.messages)))
    table.add_row("Highlights", str(len(analysis.highlights)))
    table.add_row("Action Items", str(len(analysis.action_items)))
    table.add_row("Questions", str(len(analysis.questions)))
    table.add_row("Resources", str(len(analysis.resources)))

    console.print(table)

    if analysis.key_topics:
        console.print("\n[bold]Key Topics[/bold]")
        for i, topic in enumerate(analysis.key_topics, 1):
            console.print(f"  {i}. {topic}")

    path = "oracle" if analysis.used_oracle else "deterministic fallback"
    console.print(f"\n[dim]Classified via {path}[/dim]")


if __name__ == "__main__":
    app()
