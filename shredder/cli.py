"""CLI entry point: ``shredder inspect`` and ``shredder shred``."""

from __future__ import annotations

import mimetypes
import sys
from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from shredder import __version__
from shredder.config.settings import Settings
from shredder.engine.engine import build_shredder
from shredder.engine.exceptions import ShredderError
from shredder.engine.models import FileBuffer, Finding, RiskLevel
from shredder.logging.logger import Log
from shredder.session.formatting import format_bytes
from shredder.session.session import LogKind, ProcessingSession

console = Console()

_RISK_COLORS = {
    RiskLevel.HIGH: "red",
    RiskLevel.MEDIUM: "yellow",
    RiskLevel.LOW: "blue",
    RiskLevel.NONE: "green",
}

_LOG_COLORS = {
    LogKind.INFO: "white",
    LogKind.SUCCESS: "green",
    LogKind.WARNING: "yellow",
    LogKind.ERROR: "red",
    LogKind.PROCESS: "cyan",
    LogKind.ACTION: "magenta",
}


def load_file(path: Path) -> FileBuffer:
    """Read *path* into a FileBuffer, guessing its media type from the name."""
    mime_type, _ = mimetypes.guess_type(path.name)
    return FileBuffer(name=path.name, mime_type=mime_type or "", data=path.read_bytes())


@click.group()
@click.version_option(version=__version__, prog_name="shredder")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
@click.pass_context
def main(ctx: click.Context, verbose: bool) -> None:
    """Shredder: strip metadata and secrets from files without uploading them."""
    settings = Settings()
    Log.configure("DEBUG" if verbose else settings.log_level)
    ctx.ensure_object(dict)
    ctx.obj["settings"] = settings


@main.command()
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.pass_context
def inspect(ctx: click.Context, path: Path) -> None:
    """Show the metadata and secrets found in PATH."""
    session = _new_session(ctx)
    try:
        findings = session.select_file(load_file(path))
    except ShredderError as exc:
        _print_log(session)
        console.print(f"[red]{escape(str(exc))}[/red]")
        sys.exit(1)

    _print_log(session)
    _print_findings(path, session.category.value, findings)


@main.command()
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--output-dir",
    "-o",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Directory for the cleaned file (defaults to the input's directory).",
)
@click.option("--yes", "-y", is_flag=True, help="Shred without asking for confirmation.")
@click.pass_context
def shred(ctx: click.Context, path: Path, output_dir: Path | None, yes: bool) -> None:
    """Inspect PATH, then write a cleaned copy named CLEAN_<name>."""
    session = _new_session(ctx)
    try:
        findings = session.select_file(load_file(path))
    except ShredderError as exc:
        _print_log(session)
        console.print(f"[red]{escape(str(exc))}[/red]")
        sys.exit(1)

    _print_findings(path, session.category.value, findings)
    if not yes:
        click.confirm(f"Shred {path.name}?", abort=True)

    try:
        session.shred()
    except ShredderError as exc:
        _print_log(session)
        console.print(f"[red]{escape(str(exc))}[/red]")
        sys.exit(1)

    target_dir = output_dir if output_dir is not None else path.parent
    target_dir.mkdir(parents=True, exist_ok=True)
    saved = session.save(target_dir)
    _print_log(session)
    console.print(f"[green]Cleaned file written to[/green] [cyan]{escape(str(saved))}[/cyan]")


def _new_session(ctx: click.Context) -> ProcessingSession:
    settings: Settings = ctx.obj["settings"]
    return ProcessingSession(build_shredder(settings), output_prefix=settings.output_prefix)


def _print_findings(path: Path, category: str, findings: list[Finding]) -> None:
    table = Table(
        title=escape(f"{path.name} ({format_bytes(path.stat().st_size)}, {category.upper()})"),
        show_lines=False,
    )
    table.add_column("Risk", style="bold", width=8)
    table.add_column("Key", style="cyan")
    table.add_column("Value", max_width=60)

    for finding in findings:
        color = _RISK_COLORS[finding.risk_level]
        table.add_row(
            f"[{color}]{finding.risk_level.value}[/{color}]",
            escape(finding.key),
            escape(finding.display_value),
        )
    console.print(table)


def _print_log(session: ProcessingSession) -> None:
    for entry in session.logs:
        color = _LOG_COLORS[entry.kind]
        console.print(
            f"[dim]{entry.timestamp}[/dim] [{color}]{escape(entry.message)}[/{color}]",
            highlight=False,
        )
