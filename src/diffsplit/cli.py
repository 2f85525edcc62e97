"""diffsplit CLI — Typer application with split and init commands."""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.markup import escape

from diffsplit import __version__

app = typer.Typer(
    name="diffsplit",
    help="Split a unified diff into one file per touched path.",
    add_completion=False,
    no_args_is_help=True,
)

console = Console(stderr=True)


# ── split ─────────────────────────────────────────────────────────────────────


@app.command()
def split(
    target: Path = typer.Argument(..., help="Directory to write the split diffs into"),
    input_file: typer.FileBinaryRead = typer.Argument("-", help="Diff to read ('-' for stdin)"),
    strip: Optional[str] = typer.Option(None, "--strip", "-p", help="Leading path components to drop: auto | N"),
    hide_linenum: bool = typer.Option(False, "--hide-linenum", help="Mask start line numbers in hunk headers"),
    skip_header: bool = typer.Option(False, "--skip-header", help="Omit diff/index/---/+++ lines from output"),
    extended_headers: bool = typer.Option(
        False, "--extended-headers", help="Accept git mode/rename/copy header lines"
    ),
    exclude: Optional[List[str]] = typer.Option(None, "--exclude", "-x", help="Glob of paths not to write"),
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to .diffsplit.toml"),
    format: Optional[str] = typer.Option(None, "--format", "-f", help="Report format: terminal | json"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Parse and report without writing files"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
) -> None:
    """Split a diff from INPUT_FILE (or stdin) into TARGET."""
    from diffsplit.config.loader import ConfigError, load_config
    from diffsplit.config.schema import OUTPUT_FORMATS, parse_strip
    from diffsplit.diff.classifier import DiffFormatError
    from diffsplit.diff.reader import read_lines
    from diffsplit.output import json_report, terminal
    from diffsplit.output.sink import FileSystemSink, MemorySink
    from diffsplit.splitter.engine import split_diff
    from diffsplit.splitter.models import SplitOptions

    # --- Load config ---
    try:
        cfg = load_config(Path.cwd(), config)
    except ConfigError as exc:
        console.print(f"[bold red]Config error:[/bold red] {escape(str(exc))}")
        raise typer.Exit(code=2) from exc

    # --- CLI overrides ---
    if strip is not None:
        try:
            parse_strip(strip)
        except ValueError as exc:
            console.print(f"[bold red]Invalid strip level:[/bold red] {escape(strip)}")
            raise typer.Exit(code=2) from exc
        cfg.split.strip = strip
    if format:
        if format not in OUTPUT_FORMATS:
            console.print(f"[bold red]Invalid format:[/bold red] {escape(format)}")
            raise typer.Exit(code=2)
        cfg.output.format = format  # type: ignore[assignment]
    if exclude:
        cfg.split.exclude.extend(exclude)

    options = SplitOptions(
        strip=cfg.strip_level,
        hide_linenum=hide_linenum or cfg.split.hide_linenum,
        skip_header=skip_header or cfg.split.skip_header,
        extended_headers=extended_headers or cfg.parse.extended_headers,
        exclude=list(cfg.split.exclude),
        binary_list_name=cfg.split.binary_list,
    )

    if verbose:
        level = "auto" if options.strip is None else str(options.strip)
        console.print(f"[dim]Target: {escape(str(target))}[/dim]")
        console.print(f"[dim]Strip level: {level}[/dim]")
        console.print(f"[dim]Hide line numbers: {options.hide_linenum}[/dim]")
        console.print(f"[dim]Skip header: {options.skip_header}[/dim]")

    sink = MemorySink(target) if dry_run else FileSystemSink(target)

    # --- Run split ---
    try:
        result = split_diff(read_lines(input_file), options, sink)
    except DiffFormatError as exc:
        console.print(f"[bold red]Diff format error:[/bold red] {escape(str(exc))}")
        raise typer.Exit(code=1) from exc
    except OSError as exc:
        console.print(f"[bold red]I/O error:[/bold red] {escape(str(exc))}")
        raise typer.Exit(code=2) from exc

    if verbose:
        for f in result.files:
            console.print(
                f"[dim]{escape(f.source_path)} -> {escape(f.path)} (strip {f.strip_level})[/dim]"
            )
        for s in result.skipped:
            console.print(f"[dim]Not written: {escape(s.path)} ({s.reason})[/dim]")
        if result.dropped:
            console.print(f"[dim]Dropped {result.dropped} record(s) without a destination path[/dim]")

    # --- Output ---
    if cfg.output.format == "json":
        print(json_report.render(result, target, dry_run=dry_run))
    else:
        terminal.render(result, target, show_summary=cfg.output.show_summary, dry_run=dry_run)

    raise typer.Exit(code=0)


# ── init ──────────────────────────────────────────────────────────────────────


@app.command()
def init(
    force: bool = typer.Option(False, "--force", help="Overwrite an existing .diffsplit.toml"),
) -> None:
    """Generate a starter .diffsplit.toml in the current directory."""
    from diffsplit.config.defaults import DEFAULT_TOML
    from diffsplit.config.loader import CONFIG_FILENAME

    config_path = Path.cwd() / CONFIG_FILENAME

    if config_path.exists() and not force:
        console.print(f"[yellow]⚠[/yellow]  {CONFIG_FILENAME} already exists at {escape(str(config_path))}")
        raise typer.Exit(code=1)

    config_path.write_text(DEFAULT_TOML, encoding="utf-8")
    console.print(f"[green]✓[/green] Created {escape(str(config_path))}")


# ── version ───────────────────────────────────────────────────────────────────


def _version_callback(value: bool) -> None:
    if value:
        print(f"diffsplit {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False, "--version", "-V", callback=_version_callback,
        is_eager=True, help="Show version and exit",
    ),
) -> None:
    """diffsplit — Split a unified diff into one file per touched path."""
