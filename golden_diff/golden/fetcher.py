"""Golden file fetching — loads the baseline manifest a DiffSource points at."""

from __future__ import annotations

import json
import logging
from typing import Any

import httpx

from golden_diff.models.diff_source import DiffSource, DiffSourceKind
from golden_diff.vcs.base import FileSystem, VersionControlClient
from golden_diff.vcs.filesystem import LocalFileSystem

logger = logging.getLogger(__name__)


class GoldenFileError(RuntimeError):
    """The golden file was fetched but is not a JSON object."""


class GoldenFileFetcher:
    """Reads golden files from a URL, the local disk, or git history."""

    HTTP_TIMEOUT_SECONDS = 30.0

    def __init__(
        self,
        vcs: VersionControlClient,
        fs: FileSystem | None = None,
        http_client: httpx.AsyncClient | None = None,
    ):
        self.vcs = vcs
        self.fs = fs or LocalFileSystem()
        self.http_client = http_client

    async def fetch(self, source: DiffSource) -> dict[str, Any]:
        kind = source.kind
        try:
            if kind is DiffSourceKind.PUBLIC_URL:
                text = await self._fetch_url(source.public_url)
            elif kind is DiffSourceKind.LOCAL_FILE:
                text = await self.fs.read_text(source.local_file_path)
            else:
                revision = source.git_revision
                text = await self.vcs.show_file(revision.commit, revision.snapshot_file_path)
        except UnicodeDecodeError as e:
            raise GoldenFileError(f"Golden file at {source.describe()} is not UTF-8 text: {e}") from e
        logger.info("Loaded golden file from %s", source.describe())
        return self._decode(text, source)

    async def _fetch_url(self, url: str) -> str:
        if self.http_client is not None:
            return await self._get(self.http_client, url)
        async with httpx.AsyncClient(timeout=self.HTTP_TIMEOUT_SECONDS) as client:
            return await self._get(client, url)

    @staticmethod
    async def _get(client: httpx.AsyncClient, url: str) -> str:
        response = await client.get(url, follow_redirects=True)
        response.raise_for_status()
        return response.text

    @staticmethod
    def _decode(text: str, source: DiffSource) -> dict[str, Any]:
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise GoldenFileError(f"Golden file at {source.describe()} is not valid JSON: {e}") from e
        if not isinstance(data, dict):
            raise GoldenFileError(
                f"Golden file at {source.describe()} must contain a JSON object, "
                f"got {type(data).__name__}"
            )
        return data
