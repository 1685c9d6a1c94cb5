"""Rich terminal reporter — colour, severity pills."""

from __future__ import annotations

from typing import Optional

from rich.console import Console
from rich.table import Table
from rich.text import Text

from repoguard.findings.models import ScanResult
from repoguard.findings.redactor import redact

_SEVERITY_STYLE = {
    "critical": "bold white on red",
    "high": "bold white on dark_orange",
    "medium": "bold black on yellow",
    "low": "bold black on bright_cyan",
}


def _severity_pill(severity: str) -> Text:
    return Text(f" {severity.upper()} ", style=_SEVERITY_STYLE.get(severity, ""))


def render(
    result: ScanResult,
    *,
    ci_mode: bool = False,
    show_summary: bool = True,
    console: Optional[Console] = None,
) -> None:
    """Print scan results to stderr."""
    console = console or Console(stderr=True)

    if not result.findings:
        console.print()
        console.print("[bold green]✓ No secrets detected.[/bold green]")
        if show_summary:
            _print_summary(console, result)
        return

    console.print()
    table = Table(title="repoguard findings", show_lines=True, title_style="bold", border_style="dim")
    table.add_column("Severity", justify="center", width=12)
    table.add_column("Pattern", style="cyan", min_width=14)
    table.add_column("File", style="magenta")
    table.add_column("Line", justify="right", style="green")
    table.add_column("Match", min_width=12)

    for finding in result.findings:
        table.add_row(
            _severity_pill(finding.severity),
            Text(finding.label),
            Text(finding.file),
            f"{finding.line_no}:{finding.column}",
            Text(redact(finding.matched_value, ci_mode=ci_mode)),
        )
    console.print(table)

    if show_summary:
        _print_summary(console, result)

    console.print()
    if result.blocked:
        console.print(
            "[bold red]✗ BLOCKED — secret patterns found at or above the fail threshold.[/bold red]"
        )
    else:
        console.print("[bold yellow]! Findings below the fail threshold; not blocking.[/bold yellow]")


def _print_summary(console: Console, result: ScanResult) -> None:
    console.print()
    console.print(f"[dim]Files scanned:[/dim] {result.scanned_files}")
    console.print(f"[dim]Findings:[/dim]      {result.total_findings}")
    console.print(f"[dim]Blocking:[/dim]      {len(result.blocking_findings)}")
    console.print(f"[dim]Suppressed:[/dim]    {len(result.suppressed)}")
    console.print(f"[dim]Skipped:[/dim]       {len(result.skipped_files)}")
    if result.truncated:
        console.print("[dim]Stopped early at ci.max_findings.[/dim]")
    console.print(f"[dim]Duration:[/dim]      {result.scan_duration_ms:.0f}ms")
