"""Centralised settings for page2md.

All runtime configuration is resolved here in one place.  Values can be
overridden via environment variables or a `.env` file in the current working
directory (loaded automatically when this module is imported).  CLI flags
take precedence over both for a single invocation.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

from page2md.errors import ConfigError

load_dotenv(Path.cwd() / ".env", override=False)

_DEFAULT_ICONS = "information=note,check=tip,warning=warning,forbidden=danger"


def _split_list(value: str) -> list[str]:
    """Split a comma-separated value, dropping empty items."""
    return [item.strip() for item in value.split(",") if item.strip()]


def _parse_icon_map(value: str) -> dict[str, str]:
    """Parse ``icon=kind`` pairs, e.g. ``information=note,check=tip``.

    Raises:
        ConfigError: If an item is not an ``icon=kind`` pair.
    """
    icons: dict[str, str] = {}
    for item in _split_list(value):
        icon, sep, kind = item.partition("=")
        if not sep or not icon.strip() or not kind.strip():
            raise ConfigError(f"ADMONITION_ICONS: invalid icon mapping {item!r}")
        icons[icon.strip()] = kind.strip()
    return icons


@dataclass
class Settings:
    # ------------------------------------------------------------------
    # Selection
    # ------------------------------------------------------------------
    content_selector: str = field(
        default_factory=lambda: os.environ.get("CONTENT_SELECTOR", "#main-content")
    )
    title_selector: str = field(
        default_factory=lambda: os.environ.get("TITLE_SELECTOR", "#title-text a")
    )
    exclude_selectors: list[str] = field(
        default_factory=lambda: _split_list(
            os.environ.get("EXCLUDE_SELECTORS", "#comments-section")
        )
    )

    # ------------------------------------------------------------------
    # Fetching
    # ------------------------------------------------------------------
    request_timeout_setting: str = field(
        default_factory=lambda: os.environ.get("REQUEST_TIMEOUT", "30.0")
    )
    user_agent: str = field(
        default_factory=lambda: os.environ.get(
            "USER_AGENT", "Mozilla/5.0 (compatible; page2md/1.0)"
        )
    )

    # ------------------------------------------------------------------
    # Conversion
    # ------------------------------------------------------------------
    markdown_converter: str = field(
        default_factory=lambda: os.environ.get("MARKDOWN_CONVERTER", "markdownify")
    )
    admonition_icons_setting: str = field(
        default_factory=lambda: os.environ.get("ADMONITION_ICONS", _DEFAULT_ICONS)
    )

    # Parsed on access; a bad value raises ConfigError.
    @property
    def request_timeout(self) -> float:
        message = (
            f"REQUEST_TIMEOUT: expected a positive number of seconds, "
            f"got {self.request_timeout_setting!r}"
        )
        try:
            timeout = float(self.request_timeout_setting)
        except ValueError as exc:
            raise ConfigError(message) from exc
        if not timeout > 0:
            raise ConfigError(message)
        return timeout

    @property
    def admonition_icons(self) -> dict[str, str]:
        return _parse_icon_map(self.admonition_icons_setting)


# Module-level singleton: import this everywhere:
#   from page2md.config import settings
settings = Settings()
