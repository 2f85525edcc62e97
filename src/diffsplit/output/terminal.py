"""Rich terminal reporter — written files table and run summary."""

from __future__ import annotations

from pathlib import Path

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from diffsplit.splitter.models import SplitResult


def render(
    result: SplitResult,
    target_dir: Path,
    *,
    show_summary: bool = True,
    dry_run: bool = False,
) -> None:
    """Print split results to the terminal using Rich."""
    console = Console(stderr=True)

    if result.files:
        console.print()
        table = Table(
            title="Dry run: files that would be written" if dry_run else "Split files",
            show_lines=False,
            title_style="bold",
            border_style="dim",
        )
        table.add_column("File", style="magenta")
        table.add_column("Source", style="cyan")
        table.add_column("Strip", justify="right", style="green")
        table.add_column("Hunks", justify="right")
        for f in result.files:
            table.add_row(escape(f.path), escape(f.source_path), str(f.strip_level), str(f.hunks))
        console.print(table)
    else:
        console.print("[yellow]No file diffs found in input.[/yellow]")

    if result.skipped:
        console.print()
        for s in result.skipped:
            console.print(f"[dim]skipped[/dim] {escape(s.path)} [dim]({s.reason})[/dim]")

    if show_summary:
        _print_summary(console, result)

    console.print()
    if dry_run:
        console.print(f"[bold]Dry run complete. Nothing written to '{escape(str(target_dir))}'.[/bold]")
    else:
        console.print(
            f"[bold green]Processing complete. Files created in '{escape(str(target_dir))}'.[/bold green]"
        )


def _print_summary(console: Console, result: SplitResult) -> None:
    console.print()
    console.print(f"[dim]Files written:[/dim]  {result.total_files}")
    console.print(f"[dim]Hunks:[/dim]          {result.total_hunks}")
    console.print(f"[dim]Binary files:[/dim]   {len(result.binary_markers)}")
    console.print(f"[dim]Skipped:[/dim]        {len(result.skipped)}")
    console.print(f"[dim]Dropped:[/dim]        {result.dropped}")
    console.print(f"[dim]Duration:[/dim]       {result.duration_ms:.0f}ms")
