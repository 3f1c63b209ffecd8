"""pagebinder CLI: bind a set of web pages into a single PDF.

Usage:
    pagebinder --help
    python -m pagebinder --help

Commands:
    links   → capture the URLs listed in a file (optionally with their sublinks)
    crawl   → capture every page linked from a base URL's navigation
"""

from __future__ import annotations

from dataclasses import replace
from pathlib import Path
from typing import Optional

import typer
from loguru import logger

from pagebinder.capture.errors import PageBinderError
from pagebinder.capture.models import RunReport
from pagebinder.capture.pipeline import bind_base_url, bind_seed_file
from pagebinder.capture.store import ArtifactStore
from pagebinder.config import settings
from pagebinder.logger_config import configure_logging

app = typer.Typer(
    name="pagebinder",
    help="Capture web pages as PDFs and merge them into one document.",
    no_args_is_help=True,
)


# ---------------------------------------------------------------------------
# Shared helpers
# ---------------------------------------------------------------------------

def _require_pdf_name(output: str) -> str:
    if not output.endswith(".pdf"):
        typer.echo("❌ Output PDF name must end with .pdf", err=True)
        raise typer.Exit(code=1)
    return output


def _store_for(temp_dir: Optional[Path]) -> ArtifactStore:
    return ArtifactStore(temp_dir or settings.temp_dir)


def _resolve_scratch(store: ArtifactStore, delete: Optional[bool]) -> None:
    """Ask (unless told) whether to delete the scratch PDFs, then do it.

    A failed deletion, or a prompt that cannot be answered (stdin closed),
    is reported but does not fail the run; the files are then kept.
    """
    if delete is None:
        try:
            delete = typer.confirm("Delete temporary PDF files?", default=False)
        except typer.Abort:
            typer.echo("")
            logger.warning("No answer to the delete prompt; keeping temporary PDF files.")
            delete = False

    if not delete:
        typer.echo(f"Temporary PDF files kept in {store.root}.")
        return

    try:
        store.dispose()
    except OSError as exc:
        logger.error(f"Could not delete {store.root}: {exc}")
        typer.echo(f"⚠️  Temporary PDF files could not be deleted: {exc}")
        return
    typer.echo("Temporary PDF files deleted.")


def _finish(report: RunReport, store: ArtifactStore, delete: Optional[bool]) -> None:
    typer.echo(
        f"✅ Merged PDF saved to: {report.output_path}  "
        f"({len(report.captured)} captured, {len(report.failed)} failed)"
    )
    _resolve_scratch(store, delete)


# ---------------------------------------------------------------------------
# Global options
# ---------------------------------------------------------------------------

@app.callback()
def main(
    log_level: str = typer.Option(settings.log_level, "--log-level", help="Console log level."),
    log_dir: Optional[Path] = typer.Option(
        settings.log_dir, "--log-dir", help="Also write DEBUG logs to files in this directory."
    ),
) -> None:
    """Capture web pages as PDFs and merge them into one document."""
    configure_logging(log_level, log_dir)


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------

@app.command("links")
def links(
    input_file: Path = typer.Argument(..., help="Text file with one URL per line."),
    output: str = typer.Argument(..., help="Output PDF name (must end with .pdf)."),
    sublinks: bool = typer.Option(
        False, "-s", "--sublinks", help="Also capture every link found on each listed page."
    ),
    temp_dir: Optional[Path] = typer.Option(None, "--temp-dir", help="Scratch directory for page PDFs."),
    delete: Optional[bool] = typer.Option(
        None, "--delete/--keep", help="Delete or keep the scratch PDFs without asking."
    ),
) -> None:
    """Capture the URLs listed in INPUT_FILE and merge them into OUTPUT."""
    _require_pdf_name(output)
    store = _store_for(temp_dir)
    try:
        report = bind_seed_file(input_file, output, expand=sublinks, store=store)
    except PageBinderError as exc:
        typer.echo(f"❌ {exc}", err=True)
        raise typer.Exit(code=1)
    _finish(report, store, delete)


@app.command("crawl")
def crawl(
    base_url: str = typer.Argument(..., help="Docs root; only links under it are captured."),
    output: str = typer.Argument(..., help="Output PDF name (must end with .pdf)."),
    nav_selector: Optional[str] = typer.Option(
        None, "--nav-selector", help="CSS selector for navigation links (default: nav a)."
    ),
    temp_dir: Optional[Path] = typer.Option(None, "--temp-dir", help="Scratch directory for page PDFs."),
    delete: Optional[bool] = typer.Option(
        None, "--delete/--keep", help="Delete or keep the scratch PDFs without asking."
    ),
) -> None:
    """Capture every page linked from BASE_URL's navigation into OUTPUT.

    Only `.cloud-site-container` is widened here (CRAWL_WIDEN_SELECTOR);
    the `links` command also widens `body` (WIDEN_SELECTOR).
    """
    _require_pdf_name(output)
    cfg = replace(settings, nav_selector=nav_selector) if nav_selector else settings
    store = _store_for(temp_dir)
    try:
        report = bind_base_url(base_url, output, store=store, cfg=cfg)
    except PageBinderError as exc:
        typer.echo(f"❌ {exc}", err=True)
        raise typer.Exit(code=1)
    _finish(report, store, delete)

