#!/usr/bin/env python3
"""Command line entry point: ``cp-docs SOURCE DESTINATION``."""

from pathlib import Path
from typing import Optional

import typer
from loguru import logger
from rich.console import Console
from rich.markup import escape

from cp_docs.config import load_config
from cp_docs.copier import CopyStats
from cp_docs.errors import CopyError, TraversalError
from cp_docs.log import setup_logging
from cp_docs.merge import merge_docs
from cp_docs.walker import DocsMatch

app = typer.Typer(
    help="Collect every docs directory of a source tree into a single destination tree.",
    add_completion=False,
)
console = Console(soft_wrap=True, highlight=False)


@app.command()
def copy(
    source: Path = typer.Argument(..., help="Directory tree to scan for docs directories"),
    destination: Path = typer.Argument(..., help="Directory the merged docs are written to"),
    clean: bool = typer.Option(False, "--clean", help="Remove the destination before copying"),
    ignore_case: bool = typer.Option(False, "--ignore-case", help="Match the docs name ignoring case"),
    no_ignore: bool = typer.Option(False, "--no-ignore", help="Also search venv, node_modules, build, ..."),
    include_hidden: bool = typer.Option(False, "--include-hidden", help="Also search directories starting with . or _"),
    name: Optional[str] = typer.Option(None, "--name", help="Directory name to look for (default: docs)"),
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Show debug logging"),
    quiet: bool = typer.Option(False, "-q", "--quiet", help="Only report warnings and errors"),
):
    """Copy the contents of every docs directory under SOURCE into DESTINATION."""
    try:
        config = load_config()
    except ValueError as e:
        console.print(f"[red]❌ Invalid configuration: {escape(str(e))}[/red]")
        raise typer.Exit(code=2)

    if verbose:
        level = "DEBUG"
    elif quiet:
        level = "WARNING"
    else:
        level = config["log_level"]
    setup_logging(level, config["log_file"])

    def report_progress(index: int, total: int, match: DocsMatch, stats: CopyStats):
        if quiet:
            return
        width = len(str(total))
        console.print(f"({index:0{width}d}/{total:0{width}d}) finished copying {escape(str(match.relative_path))}")

    try:
        report = merge_docs(
            source,
            destination,
            clean=clean,
            name=name or config["docs_name"],
            ignore_case=ignore_case or config["ignore_case"],
            ignore_patterns=() if no_ignore else config["ignore_patterns"],
            skip_hidden=config["skip_hidden"] and not include_hidden,
            on_copied=report_progress,
        )
    except (TraversalError, CopyError) as e:
        logger.error(str(e))
        console.print(f"[red]❌ {escape(str(e))}[/red]")
        raise typer.Exit(code=1)

    if not quiet:
        if report.total == 0:
            console.print(f"[yellow]⚠️  No docs directories found under {escape(str(report.source))}[/yellow]")
        else:
            console.print(
                f"[green]✅ All docs directories copied successfully.[/green] "
                f"{report.total} directories, {report.stats.files} files -> {escape(str(report.destination))}"
            )


def main():
    """Main entry point for the cp-docs CLI."""
    app()


if __name__ == "__main__":
    main()
