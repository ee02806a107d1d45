"""Pytest configuration and shared fixtures."""

from pathlib import Path
from unittest.mock import AsyncMock

import pytest

from golden_diff.models.config import ScreenshotConfig
from golden_diff.resolver.diff_source_resolver import DiffSourceResolver
from golden_diff.vcs.git_repo import GitCommandError, GitRepo


# ============================================================================
# Fake repository state
# ============================================================================

# Short ref -> fully-qualified symbolic name
SYMBOLIC_NAMES = {
    "origin/master": "refs/remotes/origin/master",
    "origin/feat/button/my-fancy-feature": "refs/remotes/origin/feat/button/my-fancy-feature",
    "upstream/release": "refs/remotes/upstream/release",
    "master": "refs/heads/master",
    "HEAD": "refs/heads/master",
    "feat/foo/bar": "refs/heads/feat/foo/bar",
    "v1.2.3": "refs/tags/v1.2.3",
    "v0.34.1": "refs/tags/v0.34.1",
}

# Ref -> short commit hash
SHORT_HASHES = {
    "origin/master": "1a2b3c4",
    "origin/feat/button/my-fancy-feature": "5d6e7f8",
    "upstream/release": "9a8b7c6",
    "master": "0f0f0f0",
    "HEAD": "0f0f0f0",
    "feat/foo/bar": "b4r0000",
    "v1.2.3": "7ag1230",
    "v0.34.1": "7ag0341",
}


def _resolve_short_hash(ref: str) -> str:
    if ref not in SHORT_HASHES:
        raise GitCommandError(("rev-parse", "--short", ref), 128, f"unknown revision {ref}")
    return SHORT_HASHES[ref]


@pytest.fixture
def mock_vcs() -> AsyncMock:
    """Create a mock version-control client backed by the fake repository state."""
    vcs = AsyncMock(spec=GitRepo)
    vcs.refresh_remotes.return_value = None
    vcs.resolve_symbolic_name.side_effect = lambda ref: SYMBOLIC_NAMES.get(ref)
    vcs.list_remote_names.return_value = ["origin", "upstream"]
    vcs.resolve_short_commit_hash.side_effect = _resolve_short_hash
    vcs.show_file.return_value = '{"index.html": {}}'
    return vcs


@pytest.fixture
def mock_fs() -> AsyncMock:
    """Create a mock filesystem where no path exists."""
    fs = AsyncMock()
    fs.exists.return_value = False
    return fs


@pytest.fixture
def resolver(mock_vcs: AsyncMock, mock_fs: AsyncMock) -> DiffSourceResolver:
    return DiffSourceResolver(mock_vcs, mock_fs)


# ============================================================================
# Configuration Fixtures
# ============================================================================


@pytest.fixture
def screenshot_config() -> ScreenshotConfig:
    """Create a test screenshot configuration."""
    return ScreenshotConfig(
        include_url_patterns=[r"mdc-button/"],
        exclude_url_patterns=[r"mdc-button/.*rtl"],
        include_browser_patterns=[r"^desktop_"],
        exclude_browser_patterns=[r"_ie_"],
        golden_path="test/screenshot/golden.json",
        diff_base="origin/master",
    )


@pytest.fixture
def temp_config_file(screenshot_config: ScreenshotConfig, tmp_path: Path) -> Path:
    """Create a temporary config file."""
    config_file = tmp_path / "screenshot-config.json"
    screenshot_config.save(config_file)
    return config_file
