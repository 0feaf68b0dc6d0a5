"""Fetch raw HTML from a URL (``httpx``) or from a local file.

There is no retry logic: the first failure is final.  Request options come
in as one opaque, curl-style string (``-H "Cookie: x" -m 10 -k``) that is
translated into ``httpx.Client`` arguments.
"""

from __future__ import annotations

import logging
import shlex
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import httpx

from page2md.config import settings
from page2md.errors import FetchFailed, LocalFileNotFound
from page2md.scraper.models import RawPage

logger = logging.getLogger(__name__)

_URL_PREFIXES = ("http://", "https://")
_FILE_PREFIX = "file://"

# Flags that take no value and change nothing for httpx (redirects are
# always followed, output is never printed).
_NOOP_FLAGS = {"-L", "--location", "-s", "--silent", "-S", "--show-error", "--compressed"}
_VALUE_FLAGS = {
    "-H", "--header", "-A", "--user-agent", "-e", "--referer",
    "-m", "--max-time", "--connect-timeout", "-u", "--user",
    "-b", "--cookie", "-x", "--proxy",
}


@dataclass
class FetchOptions:
    """``httpx.Client`` settings parsed from a fetch options string."""

    headers: dict[str, str] = field(default_factory=dict)
    cookies: dict[str, str] = field(default_factory=dict)
    timeout: Optional[float] = None
    connect_timeout: Optional[float] = None
    verify: bool = True
    auth: Optional[tuple[str, str]] = None
    proxy: Optional[str] = None

    def client_kwargs(self) -> dict:
        """Return keyword arguments for :class:`httpx.Client`."""
        headers = {"User-Agent": settings.user_agent}
        headers.update(self.headers)

        total = self.timeout if self.timeout is not None else settings.request_timeout
        timeout = httpx.Timeout(total, connect=self.connect_timeout or total)

        kwargs: dict = {
            "headers": headers,
            "cookies": self.cookies,
            "timeout": timeout,
            "verify": self.verify,
            "follow_redirects": True,
        }
        if self.auth:
            kwargs["auth"] = self.auth
        if self.proxy:
            kwargs["proxy"] = self.proxy
        return kwargs


def _parse_header(value: str) -> tuple[str, str]:
    name, sep, content = value.partition(":")
    if not sep or not name.strip():
        raise ValueError(f"Malformed header {value!r}; expected 'Name: value'")
    return name.strip(), content.strip()


def _parse_cookies(value: str) -> dict[str, str]:
    cookies: dict[str, str] = {}
    for part in value.split(";"):
        name, sep, content = part.strip().partition("=")
        if sep and name:
            cookies[name] = content
    return cookies


def parse_fetch_options(options: str) -> FetchOptions:
    """Translate a curl-style option string into :class:`FetchOptions`.

    Understood flags: ``-H/--header``, ``-A/--user-agent``, ``-e/--referer``,
    ``-m/--max-time``, ``--connect-timeout``, ``-k/--insecure``,
    ``-u/--user``, ``-b/--cookie`` and ``-x/--proxy``.  Anything else is
    skipped with a warning.

    Raises:
        ValueError: If a flag is missing its value or the value is malformed.
    """
    parsed = FetchOptions()
    tokens = shlex.split(options or "")
    i = 0
    while i < len(tokens):
        flag = tokens[i]
        i += 1

        if flag in _NOOP_FLAGS:
            continue
        if flag in ("-k", "--insecure"):
            parsed.verify = False
            continue

        if flag not in _VALUE_FLAGS:
            logger.warning("Ignoring unsupported fetch option %r", flag)
            continue
        if i >= len(tokens):
            raise ValueError(f"Fetch option {flag} requires a value")
        value = tokens[i]
        i += 1

        if flag in ("-H", "--header"):
            name, content = _parse_header(value)
            parsed.headers[name] = content
        elif flag in ("-A", "--user-agent"):
            parsed.headers["User-Agent"] = value
        elif flag in ("-e", "--referer"):
            parsed.headers["Referer"] = value
        elif flag in ("-m", "--max-time"):
            parsed.timeout = float(value)
        elif flag == "--connect-timeout":
            parsed.connect_timeout = float(value)
        elif flag in ("-u", "--user"):
            user, _, password = value.partition(":")
            parsed.auth = (user, password)
        elif flag in ("-b", "--cookie"):
            parsed.cookies.update(_parse_cookies(value))
        else:
            parsed.proxy = value
    return parsed


def is_url(location: str) -> bool:
    """Return ``True`` if *location* should be fetched over HTTP."""
    return location.lower().startswith(_URL_PREFIXES)


def fetch_url(url: str, options: str = "") -> RawPage:
    """Fetch *url* with a single GET and return a :class:`RawPage`.

    Raises:
        FetchFailed: On an unusable option string, a transport error or a
            4xx/5xx status code.
    """
    try:
        client_kwargs = parse_fetch_options(options).client_kwargs()
    except ValueError as exc:
        raise FetchFailed(f"Invalid fetch options: {exc}") from exc

    logger.info("Fetching %s", url)
    try:
        with httpx.Client(**client_kwargs) as client:
            response = client.get(url)
            response.raise_for_status()
            content = response.content
            encoding = response.charset_encoding
            status_code = response.status_code
    except httpx.HTTPError as exc:
        raise FetchFailed(f"Failed to fetch {url}: {exc}") from exc

    logger.info("HTTP %d, %d bytes", status_code, len(content))
    return RawPage(
        location=url, content=content, status_code=status_code, encoding=encoding
    )


def load_file(path: str) -> RawPage:
    """Read a saved HTML page from disk.

    Raises:
        LocalFileNotFound: If *path* does not exist.
        FetchFailed: If the file exists but cannot be read.
    """
    file_path = Path(path[len(_FILE_PREFIX):] if path.startswith(_FILE_PREFIX) else path)
    logger.info("Reading %s", file_path)
    try:
        content = file_path.read_bytes()
    except FileNotFoundError as exc:
        raise LocalFileNotFound(f"Local file not found: {file_path}") from exc
    except OSError as exc:
        raise FetchFailed(f"Failed to read {file_path}: {exc}") from exc
    return RawPage(location=path, content=content)


def fetch_page(location: str, options: str = "") -> RawPage:
    """Fetch *location* over HTTP if it is a URL, otherwise read it from disk."""
    if is_url(location):
        return fetch_url(location, options)
    return load_file(location)
