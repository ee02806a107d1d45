"""Golden pipeline — wires config, diff-base resolution and golden-file loading."""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Any, Iterable

from rich.table import Table

from golden_diff.golden.fetcher import GoldenFileFetcher
from golden_diff.models.config import ScreenshotConfig
from golden_diff.models.diff_source import DiffSource, DiffSourceKind
from golden_diff.patterns import select_browsers, select_urls
from golden_diff.resolver.diff_source_resolver import DiffSourceResolver
from golden_diff.vcs.base import FileSystem, VersionControlClient
from golden_diff.vcs.filesystem import LocalFileSystem
from golden_diff.vcs.git_repo import GitRepo

logger = logging.getLogger(__name__)


class GoldenPipeline:
    """Synchronous entry point for resolving a diff base and loading its golden file."""

    def __init__(
        self,
        config: ScreenshotConfig,
        vcs: VersionControlClient | None = None,
        fs: FileSystem | None = None,
    ):
        self.config = config
        self.vcs = vcs or GitRepo(working_dir=config.repo_dir)
        self.fs = fs or LocalFileSystem()
        self.resolver = DiffSourceResolver(self.vcs, self.fs)
        self.fetcher = GoldenFileFetcher(self.vcs, self.fs)

    def select_urls(self, urls: Iterable[str]) -> list[str]:
        """Test page URLs that pass the configured include/exclude patterns."""
        selected = select_urls(urls, self.config)
        logger.debug("Selected %d test URLs", len(selected))
        return selected

    def select_browsers(self, aliases: Iterable[str]) -> list[str]:
        """Browser aliases that pass the configured include/exclude patterns."""
        selected = select_browsers(aliases, self.config)
        logger.debug("Selected %d browsers", len(selected))
        return selected

    def resolve_diff_source(self, raw_diff_base: str | None = None) -> DiffSource:
        """Resolve ``raw_diff_base`` (default: the configured diff base)."""
        return asyncio.run(self._resolve(raw_diff_base))

    async def _resolve(self, raw_diff_base: str | None = None) -> DiffSource:
        raw = raw_diff_base if raw_diff_base is not None else self.config.diff_base
        start = time.time()
        source = await self.resolver.resolve(raw, self.config.golden_path)
        logger.debug("Resolved diff base '%s' in %.1fs", raw, time.time() - start)
        return source

    def load_golden(self, raw_diff_base: str | None = None) -> tuple[DiffSource, dict[str, Any]]:
        """Resolve the diff base and fetch the golden file it points at."""
        return asyncio.run(self._load_golden(raw_diff_base))

    async def _load_golden(self, raw_diff_base: str | None) -> tuple[DiffSource, dict[str, Any]]:
        source = await self._resolve(raw_diff_base)
        golden = await self.fetcher.fetch(source)
        logger.info("Golden file has %d entries", len(golden))
        return source, golden


def diff_source_table(source: DiffSource) -> Table:
    """Render a DiffSource as a two-column rich table."""
    table = Table(title="Diff Base")
    table.add_column("Field", style="bold")
    table.add_column("Value")
    table.add_row("Kind", source.kind.value)
    if source.kind is DiffSourceKind.PUBLIC_URL:
        table.add_row("URL", f"[blue]{source.public_url}[/blue]")
    elif source.kind is DiffSourceKind.LOCAL_FILE:
        table.add_row("Path", source.local_file_path)
    else:
        revision = source.git_revision
        table.add_row("Commit", revision.commit)
        table.add_row("Golden path", revision.snapshot_file_path)
        table.add_row("Remote", revision.remote or "-")
        table.add_row("Branch", revision.branch or "-")
        table.add_row("Tag", revision.tag or "-")
    return table
