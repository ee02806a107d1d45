"""Diff source data structures — where the golden file to diff against lives."""

from __future__ import annotations

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, model_validator

DEFAULT_TAG_REMOTE = "origin"


class DiffSourceKind(str, Enum):
    PUBLIC_URL = "public_url"
    LOCAL_FILE = "local_file"
    GIT_REVISION = "git_revision"


class RevisionKind(str, Enum):
    COMMIT = "commit"
    REMOTE_BRANCH = "remote_branch"
    LOCAL_BRANCH = "local_branch"
    TAG = "tag"


class GitRevision(BaseModel):
    """A golden file pinned to a point in version-control history.

    ``commit`` is the authoritative locator. ``remote``, ``branch`` and ``tag``
    describe how the commit was reached and are only used for display.
    """

    model_config = ConfigDict(frozen=True)

    commit: str
    snapshot_file_path: str
    remote: Optional[str] = None
    branch: Optional[str] = None
    tag: Optional[str] = None

    @model_validator(mode="after")
    def _check_ref_fields(self) -> "GitRevision":
        if not self.commit:
            raise ValueError("commit must not be empty")
        if self.branch and self.tag:
            raise ValueError("a revision cannot be both a branch and a tag")
        if self.remote and not (self.branch or self.tag):
            raise ValueError("remote requires a branch or a tag")
        return self

    @property
    def revision_kind(self) -> RevisionKind:
        if self.tag:
            return RevisionKind.TAG
        if self.branch and self.remote:
            return RevisionKind.REMOTE_BRANCH
        if self.branch:
            return RevisionKind.LOCAL_BRANCH
        return RevisionKind.COMMIT

    @classmethod
    def for_commit(cls, commit: str, snapshot_file_path: str) -> "GitRevision":
        return cls(commit=commit, snapshot_file_path=snapshot_file_path)

    @classmethod
    def for_remote_branch(
        cls, commit: str, snapshot_file_path: str, remote: str, branch: str,
    ) -> "GitRevision":
        return cls(
            commit=commit,
            snapshot_file_path=snapshot_file_path,
            remote=remote,
            branch=branch,
        )

    @classmethod
    def for_tag(
        cls, commit: str, snapshot_file_path: str, tag: str,
        remote: str = DEFAULT_TAG_REMOTE,
    ) -> "GitRevision":
        return cls(
            commit=commit,
            snapshot_file_path=snapshot_file_path,
            remote=remote,
            tag=tag,
        )

    @classmethod
    def for_local_branch(cls, commit: str, snapshot_file_path: str, branch: str) -> "GitRevision":
        return cls(commit=commit, snapshot_file_path=snapshot_file_path, branch=branch)

    def describe(self) -> str:
        """Human-readable label, e.g. ``origin/master@abc1234``."""
        kind = self.revision_kind
        if kind is RevisionKind.REMOTE_BRANCH:
            return f"{self.remote}/{self.branch}@{self.commit}"
        if kind is RevisionKind.TAG:
            return f"{self.tag}@{self.commit}"
        if kind is RevisionKind.LOCAL_BRANCH:
            return f"{self.branch}@{self.commit}"
        return self.commit


class DiffSource(BaseModel):
    """Exactly one of ``public_url``, ``local_file_path`` or ``git_revision`` is set."""

    model_config = ConfigDict(frozen=True)

    public_url: Optional[str] = None
    local_file_path: Optional[str] = None
    git_revision: Optional[GitRevision] = None

    @model_validator(mode="after")
    def _check_single_locator(self) -> "DiffSource":
        populated = [
            v for v in (self.public_url, self.local_file_path, self.git_revision)
            if v is not None
        ]
        if len(populated) != 1:
            raise ValueError(
                f"DiffSource must have exactly one locator, got {len(populated)}"
            )
        return self

    @property
    def kind(self) -> DiffSourceKind:
        if self.public_url is not None:
            return DiffSourceKind.PUBLIC_URL
        if self.local_file_path is not None:
            return DiffSourceKind.LOCAL_FILE
        return DiffSourceKind.GIT_REVISION

    @classmethod
    def from_public_url(cls, url: str) -> "DiffSource":
        return cls(public_url=url)

    @classmethod
    def from_local_file(cls, path: str) -> "DiffSource":
        return cls(local_file_path=path)

    @classmethod
    def from_git_revision(cls, revision: GitRevision) -> "DiffSource":
        return cls(git_revision=revision)

    def describe(self) -> str:
        if self.kind is DiffSourceKind.PUBLIC_URL:
            return self.public_url
        if self.kind is DiffSourceKind.LOCAL_FILE:
            return self.local_file_path
        return f"{self.git_revision.describe()}:{self.git_revision.snapshot_file_path}"

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the camelCase shape consumed by golden-file tooling."""
        revision = None
        if self.git_revision is not None:
            revision = {
                "commit": self.git_revision.commit,
                "snapshotFilePath": self.git_revision.snapshot_file_path,
                "remote": self.git_revision.remote,
                "branch": self.git_revision.branch,
                "tag": self.git_revision.tag,
            }
        return {
            "publicUrl": self.public_url,
            "localFilePath": self.local_file_path,
            "gitRevision": revision,
        }


class RefType(BaseModel):
    """Namespace decomposition of a fully-qualified ref. At most one field is set."""

    model_config = ConfigDict(frozen=True)

    remote_ref: Optional[str] = None
    local_ref: Optional[str] = None
    tag_ref: Optional[str] = None
