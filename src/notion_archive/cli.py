"""Command-line interface for notion-archive."""

import asyncio
from dataclasses import replace
from pathlib import Path
from typing import Annotated

import typer
from loguru import logger

from notion_archive.api import NotionApi
from notion_archive.config import BackupConfig
from notion_archive.logging_config import configure_logging
from notion_archive.orchestrator import BackupOrchestrator, BackupResult
from notion_archive.writer import ArtifactWriter

app = typer.Typer(help="Back up every page and database of a Notion workspace to JSON.")


def run_backup(config: BackupConfig, *, dry_run: bool = False) -> BackupResult:
    """Execute the backup pipeline.

    Args:
        config: Resolved settings for this run.
        dry_run: If True, do not write anything.
    """
    writer = ArtifactWriter(config.output_dir, dry_run=dry_run)
    api = NotionApi(config)
    orchestrator = BackupOrchestrator(api, writer, config)
    return asyncio.run(orchestrator.run())


@app.command()
def backup(
    output_dir: Annotated[
        Path | None,
        typer.Option("--output-dir", "-o", help="Base directory for run directories"),
    ] = None,
    dry_run: bool = typer.Option(False, "--dry-run", help="Do not write anything"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Print debug messages"),
) -> None:
    """Download all pages, page contents and databases into a new directory."""
    try:
        config = BackupConfig.from_env()
    except ValueError as e:
        configure_logging(verbose=verbose)
        logger.error("Bad configuration: {}", e)
        raise typer.Exit(2) from None

    if output_dir is not None:
        config = replace(config, output_dir=output_dir.expanduser())
    configure_logging(verbose=verbose or config.verbose)

    logger.info("Begin backup task")
    if config.proxy:
        logger.info("using proxy {}", config.proxy)

    result = run_backup(config, dry_run=dry_run)
    raise typer.Exit(result.exit_code)


def main() -> None:
    """Run the notion-archive CLI."""
    app()
