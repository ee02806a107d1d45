"""Include/exclude regex filtering for test URLs and browser aliases."""

from __future__ import annotations

import re
from typing import Iterable

from golden_diff.models.config import ScreenshotConfig


def is_selected(value: str, include: Iterable[re.Pattern], exclude: Iterable[re.Pattern]) -> bool:
    """Return True if ``value`` passes the filters.

    An empty include list selects everything. Exclude patterns take precedence.
    """
    if any(p.search(value) for p in exclude):
        return False
    include = list(include)
    return not include or any(p.search(value) for p in include)


def select_urls(urls: Iterable[str], config: ScreenshotConfig) -> list[str]:
    include = config.include_url_regexes
    exclude = config.exclude_url_regexes
    return [u for u in urls if is_selected(u, include, exclude)]


def select_browsers(aliases: Iterable[str], config: ScreenshotConfig) -> list[str]:
    include = config.include_browser_regexes
    exclude = config.exclude_browser_regexes
    return [a for a in aliases if is_selected(a, include, exclude)]
