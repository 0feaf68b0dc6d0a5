"""Data models for the scraper stages."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass
class RawPage:
    """The unmodified document bytes, as fetched or read from disk.

    Decoding is left to the parser so a charset declared in the document
    itself is honoured.
    """

    location: str
    content: bytes
    # None for local files.
    status_code: Optional[int] = None
    # Charset from the Content-Type header, if the server sent one.
    encoding: Optional[str] = None


@dataclass
class SelectedPage:
    """Title text and content inner HTML picked out of a :class:`RawPage`."""

    title: str
    content_html: str
