"""Local filesystem adapter."""

from __future__ import annotations

import asyncio
import os
from pathlib import Path


class LocalFileSystem:
    """Runs blocking path checks in a worker thread so the event loop stays free."""

    async def exists(self, path: str) -> bool:
        # Literal path check: URLs and ref names are just paths that usually don't exist.
        # os.path.exists is False for "" (Path("") would mean the cwd).
        return await asyncio.to_thread(os.path.exists, path)

    async def read_text(self, path: str) -> str:
        return await asyncio.to_thread(Path(path).read_text, encoding="utf-8")
