"""Capability contracts the diff-base resolver depends on."""

from __future__ import annotations

from typing import Optional, Protocol


class VersionControlClient(Protocol):
    """Version-control primitives needed to classify a diff base."""

    async def refresh_remotes(self) -> None:
        """Update remote-tracking branches and tags. Raises on network/auth failure."""
        ...

    async def resolve_symbolic_name(self, ref: str) -> Optional[str]:
        """Return the fully-qualified name of ``ref`` (e.g. ``refs/heads/master``).

        Returns None when ``ref`` has no symbolic name, which includes raw commit
        hashes and refs that do not exist. Never raises for "not found".
        """
        ...

    async def list_remote_names(self) -> list[str]:
        ...

    async def resolve_short_commit_hash(self, ref: str) -> str:
        ...

    async def show_file(self, commit: str, path: str) -> str:
        """Return the contents of ``path`` as of ``commit``."""
        ...


class FileSystem(Protocol):
    async def exists(self, path: str) -> bool:
        ...

    async def read_text(self, path: str) -> str:
        ...
