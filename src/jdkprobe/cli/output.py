"""Rich output formatting helpers for the jdkprobe CLI.

Valid runtimes are listed first with their reported home, version and
vendor; broken candidates follow with the failure kind and message.
"""

from __future__ import annotations

from typing import Any

from rich.console import Console
from rich.table import Table
from rich.text import Text

from jdkprobe.discovery.models import (
    Candidate,
    DiscoveryReport,
    SourceTag,
    sorted_tags,
)

console = Console()


def format_tags(tags: frozenset[SourceTag]) -> str:
    """Render source tags as a comma-separated list of wire names."""
    return ", ".join(tag.value for tag in sorted_tags(tags)) or "-"


def print_report(report: DiscoveryReport) -> None:
    """Print the runtime inventory as a table, followed by a summary line.

    Args:
        report: The discovery report to render.
    """
    if not report.inventory:
        console.print("[dim]No Java hints found in the environment.[/dim]")
        return

    table = Table(title="Java Runtimes", show_header=True, header_style="bold")
    table.add_column("Status", justify="center")
    table.add_column("Path", style="bold")
    table.add_column("Version")
    table.add_column("Vendor")
    table.add_column("Sources", style="dim")

    for record in report.valid:
        table.add_row(
            Text("OK", style="bold green"), record.home, record.version,
            record.vendor, format_tags(record.sources),
        )
    for record in report.broken:
        table.add_row(
            Text("BROKEN", style="bold red"), record.path,
            Text(record.error.kind.value, style="yellow"),
            record.error.message, format_tags(record.sources),
        )

    console.print(table)
    _print_summary(report)


def _print_summary(report: DiscoveryReport) -> None:
    valid = len(report.valid)
    broken = len(report.broken)
    parts = [f"[bold]{len(report.inventory)}[/bold] candidates probed"]
    if valid > 0:
        parts.append(f"[green]{valid} valid[/green]")
    if broken > 0:
        parts.append(f"[red]{broken} broken[/red]")
    console.print(" | ".join(parts))


def print_candidates(candidates: list[Candidate]) -> None:
    """Print deduplicated candidates without probing them."""
    if not candidates:
        console.print("[dim]No Java hints found in the environment.[/dim]")
        return

    table = Table(title="Java Candidates", show_header=True, header_style="bold")
    table.add_column("Path", style="bold")
    table.add_column("Canonical", style="dim")
    table.add_column("Sources")
    for candidate in candidates:
        table.add_row(
            candidate.path, candidate.canonical, format_tags(candidate.sources),
        )
    console.print(table)


def candidates_to_json(candidates: list[Candidate]) -> list[dict[str, Any]]:
    """Convert candidates to JSON-serializable dicts."""
    return [
        {
            "path": c.path,
            "canonical": c.canonical,
            "sources": [tag.value for tag in sorted_tags(c.sources)],
        }
        for c in candidates
    ]
