"""CLI entry point for golden-diff."""

from __future__ import annotations

import json
import sys

import click
from rich.console import Console

from golden_diff.golden.fetcher import GoldenFileError
from golden_diff.logging_setup import setup_logging
from golden_diff.models.config import ScreenshotConfig
from golden_diff.pipeline import GoldenPipeline, diff_source_table
from golden_diff.resolver.diff_source_resolver import DiffBaseResolutionError
from golden_diff.vcs.git_repo import GitCommandError

console = Console()


def _load_config(config: str | None) -> ScreenshotConfig:
    if config is None:
        return ScreenshotConfig()
    try:
        return ScreenshotConfig.load(config)
    except FileNotFoundError:
        console.print(f"[red]Config file not found: {config}[/red]")
        sys.exit(1)


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def cli(verbose: bool) -> None:
    """Resolve screenshot-test diff bases and load their golden files."""
    setup_logging(verbose)


@cli.command()
@click.argument("diff_base", required=False)
@click.option("--config", "-c", default=None, help="Config file path")
@click.option("--as-json", is_flag=True, help="Print the diff source as JSON")
def resolve(diff_base: str | None, config: str | None, as_json: bool) -> None:
    """Resolve DIFF_BASE (default: the configured diff base) to a diff source."""
    pipeline = GoldenPipeline(_load_config(config))
    try:
        source = pipeline.resolve_diff_source(diff_base)
    except (DiffBaseResolutionError, GitCommandError) as e:
        console.print(f"[red]{e}[/red]")
        sys.exit(1)

    if as_json:
        click.echo(json.dumps(source.to_dict(), indent=2))
    else:
        console.print(diff_source_table(source))


@cli.command()
@click.argument("diff_base", required=False)
@click.option("--config", "-c", default=None, help="Config file path")
def fetch(diff_base: str | None, config: str | None) -> None:
    """Load the golden file DIFF_BASE points at and summarize it."""
    pipeline = GoldenPipeline(_load_config(config))
    try:
        source, golden = pipeline.load_golden(diff_base)
    except (DiffBaseResolutionError, GitCommandError, GoldenFileError) as e:
        console.print(f"[red]{e}[/red]")
        sys.exit(1)

    console.print(diff_source_table(source))
    console.print(f"[green]Golden file loaded:[/green] {len(golden)} entries")


@cli.command()
@click.option("--url", "urls", multiple=True, help="Test page URL to check (repeatable)")
@click.option("--browser", "browsers", multiple=True, help="Browser alias to check (repeatable)")
@click.option("--config", "-c", default=None, help="Config file path")
def select(urls: tuple[str, ...], browsers: tuple[str, ...], config: str | None) -> None:
    """Show which URLs and browsers the configured patterns select."""
    pipeline = GoldenPipeline(_load_config(config))
    for url in pipeline.select_urls(urls):
        console.print(f"  url: [blue]{url}[/blue]")
    for alias in pipeline.select_browsers(browsers):
        console.print(f"  browser: {alias}")


if __name__ == "__main__":
    cli()
