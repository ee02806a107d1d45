"""Configuration models for screenshot diffing."""

from __future__ import annotations

import json
import os
import re
from pathlib import Path

from pydantic import BaseModel, Field, field_validator

DEFAULT_TEST_DIR = "test/screenshot/"
DEFAULT_GOLDEN_PATH = "test/screenshot/golden.json"
DEFAULT_DIFF_BASE = "origin/master"


class ScreenshotConfig(BaseModel):
    # Test selection: regexes, OR-ed together; excludes win over includes
    include_url_patterns: list[str] = Field(default_factory=list)
    exclude_url_patterns: list[str] = Field(default_factory=list)
    include_browser_patterns: list[str] = Field(default_factory=list)
    exclude_browser_patterns: list[str] = Field(default_factory=list)

    # Static test assets (HTML/CSS/JS), relative to the working directory
    test_dir: str = DEFAULT_TEST_DIR

    # Golden file written when screenshots are approved, relative to the working directory
    golden_path: str = DEFAULT_GOLDEN_PATH

    # File path, URL, or git ref (optionally "ref:path/to/golden.json") to diff against
    diff_base: str = DEFAULT_DIFF_BASE

    # Repository the git refs are resolved in
    repo_dir: str = "."

    @field_validator(
        "include_url_patterns", "exclude_url_patterns",
        "include_browser_patterns", "exclude_browser_patterns",
    )
    @classmethod
    def validate_patterns(cls, v: list[str]) -> list[str]:
        for pattern in v:
            try:
                re.compile(pattern)
            except re.error as e:
                raise ValueError(f"Invalid regular expression '{pattern}': {e}") from e
        return v

    @field_validator("diff_base", mode="before")
    @classmethod
    def resolve_env_diff_base(cls, v: str) -> str:
        if isinstance(v, str) and v.startswith("env:"):
            env_var = v[4:]
            resolved = os.environ.get(env_var)
            if resolved is None:
                raise ValueError(f"Environment variable '{env_var}' not set")
            return resolved
        return v

    @property
    def include_url_regexes(self) -> list[re.Pattern]:
        return [re.compile(p) for p in self.include_url_patterns]

    @property
    def exclude_url_regexes(self) -> list[re.Pattern]:
        return [re.compile(p) for p in self.exclude_url_patterns]

    @property
    def include_browser_regexes(self) -> list[re.Pattern]:
        return [re.compile(p) for p in self.include_browser_patterns]

    @property
    def exclude_browser_regexes(self) -> list[re.Pattern]:
        return [re.compile(p) for p in self.exclude_browser_patterns]

    @classmethod
    def load(cls, path: str | Path) -> "ScreenshotConfig":
        """Load config from a JSON file."""
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")
        with open(path) as f:
            data = json.load(f)
        return cls(**data)

    def save(self, path: str | Path) -> None:
        """Save config to a JSON file."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w") as f:
            json.dump(self.model_dump(), f, indent=2)
