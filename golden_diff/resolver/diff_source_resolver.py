"""Diff-base resolution — turns a raw ``--diff-base`` value into a DiffSource.

Checks run in a fixed order and the first match wins:

1. ``http://`` / ``https://`` URL
2. existing local file
3. git ref, optionally suffixed with ``:path/to/golden.json``

Git refs are further classified by namespace: remote-tracking branch, tag,
local branch, or (when git has no symbolic name for it) a bare commit.
"""

from __future__ import annotations

import logging
import re

from golden_diff.models.diff_source import DiffSource, GitRevision, RefType
from golden_diff.vcs.base import FileSystem, VersionControlClient
from golden_diff.vcs.filesystem import LocalFileSystem

logger = logging.getLogger(__name__)

HTTP_URL_REGEX = re.compile(r"^https?://")
FULL_REF_REGEX = re.compile(r"^refs/(remote|head|tag)s/(.+)$")


class DiffBaseResolutionError(ValueError):
    """The diff base looks like a git ref but cannot be classified."""


def get_ref_type(full_ref: str) -> RefType:
    """Split a fully-qualified ref into its namespace and short name.

    ``refs/remotes/origin/master`` -> ``RefType(remote_ref="origin/master")``.
    Refs outside the three namespaces (e.g. ``HEAD`` when detached) yield an
    empty RefType.
    """
    match = FULL_REF_REGEX.match(full_ref)
    if not match:
        return RefType()
    namespace, short_ref = match.groups()
    if namespace == "remote":
        return RefType(remote_ref=short_ref)
    if namespace == "head":
        return RefType(local_ref=short_ref)
    return RefType(tag_ref=short_ref)


def split_diff_base(raw_diff_base: str, default_snapshot_path: str) -> tuple[str, str]:
    """Split ``ref[:path]`` on the first colon. An empty path keeps the default."""
    ref_part, _, path_part = raw_diff_base.partition(":")
    return ref_part, path_part or default_snapshot_path


class DiffSourceResolver:
    """Resolves diff bases against a version-control client and a filesystem.

    Holds no per-call state, so concurrent ``resolve`` calls are safe.
    """

    def __init__(self, vcs: VersionControlClient, fs: FileSystem | None = None):
        self.vcs = vcs
        self.fs = fs or LocalFileSystem()

    async def resolve(self, raw_diff_base: str, default_snapshot_path: str) -> DiffSource:
        await self.vcs.refresh_remotes()

        # E.g.: https://storage.googleapis.com/.../golden.json
        if HTTP_URL_REGEX.match(raw_diff_base):
            logger.info("Diff base '%s' is a public URL", raw_diff_base)
            return DiffSource.from_public_url(raw_diff_base)

        # E.g.: /tmp/golden.json
        if await self.fs.exists(raw_diff_base):
            logger.info("Diff base '%s' is a local file", raw_diff_base)
            return DiffSource.from_local_file(raw_diff_base)

        ref_part, snapshot_file_path = split_diff_base(raw_diff_base, default_snapshot_path)
        if not ref_part:
            raise DiffBaseResolutionError(f"Diff base '{raw_diff_base}' has an empty git ref")

        full_ref = await self.vcs.resolve_symbolic_name(ref_part)

        # E.g.: abcd1234 or fad7ed3:path/to/golden.json
        if not full_ref:
            logger.info("Diff base '%s' is a commit", ref_part)
            revision = GitRevision.for_commit(ref_part, snapshot_file_path)
            return DiffSource.from_git_revision(revision)

        logger.debug("Resolved '%s' to %s", ref_part, full_ref)
        ref_type = get_ref_type(full_ref)

        # E.g.: origin/master or origin/feat/button/my-fancy-feature
        if ref_type.remote_ref:
            revision = await self._remote_branch_revision(
                ref_part, ref_type.remote_ref, snapshot_file_path,
            )
        # E.g.: v0.34.1
        elif ref_type.tag_ref:
            commit = await self.vcs.resolve_short_commit_hash(ref_part)
            revision = GitRevision.for_tag(commit, snapshot_file_path, tag=ref_type.tag_ref)
        # E.g.: master or HEAD
        elif ref_type.local_ref:
            commit = await self.vcs.resolve_short_commit_hash(ref_type.local_ref)
            revision = GitRevision.for_local_branch(commit, snapshot_file_path, ref_type.local_ref)
        else:
            logger.debug("'%s' is outside the branch/tag namespaces, treating as a commit", full_ref)
            commit = await self.vcs.resolve_short_commit_hash(ref_part)
            revision = GitRevision.for_commit(commit, snapshot_file_path)

        logger.info(
            "Diff base '%s' is a %s (%s)",
            ref_part, revision.revision_kind.value.replace("_", " "), revision.describe(),
        )
        return DiffSource.from_git_revision(revision)

    async def _remote_branch_revision(
        self, ref_part: str, remote_ref: str, snapshot_file_path: str,
    ) -> GitRevision:
        remote_names = await self.vcs.list_remote_names()
        matching = [name for name in remote_names if remote_ref.startswith(name + "/")]
        if not matching:
            raise DiffBaseResolutionError(
                f"Remote-tracking ref '{remote_ref}' does not belong to any configured "
                f"remote ({', '.join(remote_names) or 'none'})"
            )
        # "origin" and "origin/feat" may both prefix "origin/feat/x"; the longer remote is the owner.
        remote = max(matching, key=len)
        branch = remote_ref[len(remote) + 1:]
        commit = await self.vcs.resolve_short_commit_hash(ref_part)
        return GitRevision.for_remote_branch(commit, snapshot_file_path, remote, branch)
