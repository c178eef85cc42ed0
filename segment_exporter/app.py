"""Typer CLI entrypoint for the segment exporter."""

from __future__ import annotations

import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import typer
from rich import box
from rich.console import Console
from rich.table import Table

from .config import ConfigRepository, ExporterConfig, load_credentials
from .engine import Fetcher, PlayFabAdminClient
from .errors import ConfigurationError, ExportError
from .logging_conf import available_logs, configure_logging, exporter_log_path, tail_log
from .orchestrator import ExportOrchestrator

app = typer.Typer(
    help="Export PlayFab segments into a single merged file.",
    no_args_is_help=True,
    rich_markup_mode=None,
)
log_app = typer.Typer(
    name="log",
    help="Inspect exporter log files.",
    no_args_is_help=True,
    rich_markup_mode=None,
)

console = Console()
err_console = Console(stderr=True)


@dataclass
class AppState:
    repository: ConfigRepository
    config: ExporterConfig


def build_state(verbose: bool) -> AppState:
    try:
        configure_logging(verbose=verbose)
        repository = ConfigRepository()
        return AppState(repository=repository, config=repository.load_config())
    except OSError as exc:
        raise ConfigurationError(f"Cannot prepare exporter home directory: {exc}") from exc


def build_orchestrator(state: AppState, title: Optional[str]) -> ExportOrchestrator:
    credentials = load_credentials(title)
    admin_client = PlayFabAdminClient(credentials, state.config)
    return ExportOrchestrator(state.config, admin_client, Fetcher(state.config))


def _get_state(ctx: typer.Context) -> AppState:
    state = ctx.obj
    if state is None:
        state = build_state(verbose=False)
        ctx.obj = state
    return state


# Progress rendering only makes sense on an interactive terminal
def _progress_default_enabled() -> bool:
    return bool(getattr(sys.stdout, "isatty", lambda: False)())


def _report_failure(exc: ExportError) -> None:
    if isinstance(exc, ConfigurationError):
        message = str(exc)
    else:
        message = f"Error while exporting segment: {exc}"
    err_console.print(message, style="red", markup=False, highlight=False, soft_wrap=True)


def _render_summary(summary: dict) -> Table:
    table = Table(title="Segment download complete", box=box.SIMPLE_HEAD)
    table.add_column("Field", style="cyan")
    table.add_column("Value", style="green", overflow="fold")
    table.add_row("Export", str(summary["export_id"]))
    table.add_row("Index URL", str(summary["index_url"]))
    table.add_row("Files", str(summary["shards"]))
    table.add_row("Rows", str(summary["rows"]))
    table.add_row("Output", str(summary["output"]))
    return table


app.add_typer(log_app, name="log", help="View exporter logs.")


@app.callback()
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", help="Enable debug logging."),
) -> None:
    try:
        ctx.obj = build_state(verbose)
    except ExportError as exc:
        _report_failure(exc)
        raise typer.Exit(code=1)


@app.command("download", help="Export a segment (or resume an export) and merge its files.")
def download(
    ctx: typer.Context,
    title: Optional[str] = typer.Option(
        None, "--title", "-t", help="The title ID (defaults to $PLAYFAB_TITLE_ID)."
    ),
    segment: Optional[str] = typer.Option(None, "--segment", "-s", help="The segment to download."),
    export: Optional[str] = typer.Option(
        None, "--export", "-e", help="The already-started export to download."
    ),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="The output file."),
    quiet: bool = typer.Option(False, "--quiet", help="Only print a one-line result."),
) -> None:
    state = _get_state(ctx)
    progress_flag = state.config.enable_progress_bar and not quiet and _progress_default_enabled()
    try:
        orchestrator = build_orchestrator(state, title)
        try:
            summary = orchestrator.run(
                output, segment_id=segment, export_id=export, progress_enabled=progress_flag
            )
        finally:
            orchestrator.close()
    except ExportError as exc:
        _report_failure(exc)
        raise typer.Exit(code=1)

    if quiet:
        console.print(
            f"Downloaded {summary['shards']} files, {summary['rows']} rows -> {summary['output']}",
            markup=False,
            highlight=False,
            soft_wrap=True,
        )
        return
    console.print(_render_summary(summary))


@app.command("status", help="Show the state of an export job.")
def status(
    ctx: typer.Context,
    title: Optional[str] = typer.Option(
        None, "--title", "-t", help="The title ID (defaults to $PLAYFAB_TITLE_ID)."
    ),
    export: Optional[str] = typer.Option(None, "--export", "-e", help="The export to inspect."),
) -> None:
    state = _get_state(ctx)
    try:
        orchestrator = build_orchestrator(state, title)
        try:
            job = orchestrator.check_status(export)
        finally:
            orchestrator.close()
    except ExportError as exc:
        _report_failure(exc)
        raise typer.Exit(code=1)
    console.print(f"Export {job.export_id}: {job.state or 'Unknown'}", markup=False, highlight=False)
    if job.index_url:
        console.print(f"Index URL: {job.index_url}", markup=False, highlight=False, soft_wrap=True)


@log_app.command("list", help="List available log files.")
def log_list() -> None:
    paths = list(available_logs())
    if not paths:
        console.print("No log files yet.", style="dim")
        return
    table = Table(box=box.SIMPLE)
    table.add_column("File", style="cyan")
    table.add_column("Size", style="green", justify="right")
    for path in paths:
        table.add_row(path.name, f"{path.stat().st_size} B")
    console.print(table)


@log_app.command("show", help="Print the tail of the exporter log.")
def log_show(
    lines: int = typer.Option(100, "--lines", "-n", min=1, help="Number of lines to print."),
) -> None:
    entries = tail_log(exporter_log_path(), lines)
    if not entries:
        console.print("No log entries yet.", style="dim")
        raise typer.Exit(code=0)
    console.print("".join(entries), markup=False, highlight=False, end="")


def cli() -> None:
    app()


if __name__ == "__main__":  # pragma: no cover
    cli()
