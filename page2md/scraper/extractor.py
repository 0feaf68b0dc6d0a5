"""Normalise a :class:`RawPage` and select its title and content.

BeautifulSoup parses (and thereby balances) the document, excluded subtrees
are dropped, then two independent CSS selector queries pick the title text
and the content element's inner HTML.
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional

from bs4 import BeautifulSoup
from soupsieve import SelectorSyntaxError

from page2md.errors import ContentElementMissing, SelectorFailed
from page2md.scraper.models import RawPage, SelectedPage

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _select_one(soup: BeautifulSoup, selector: str):
    try:
        return soup.select_one(selector)
    except SelectorSyntaxError as exc:
        raise SelectorFailed(f"Invalid selector {selector!r}: {exc}") from exc


def _normalize(
    content: bytes, encoding: Optional[str], exclude_selectors: Iterable[str]
) -> BeautifulSoup:
    """Parse *content* and remove every subtree matching *exclude_selectors*.

    Without an *encoding* BeautifulSoup sniffs the byte order mark and any
    ``<meta charset>`` declaration.
    """
    soup = BeautifulSoup(content, "html.parser", from_encoding=encoding)
    for selector in exclude_selectors:
        try:
            matches = soup.select(selector)
        except SelectorSyntaxError as exc:
            raise SelectorFailed(f"Invalid selector {selector!r}: {exc}") from exc
        for node in matches:
            node.decompose()
    return soup


def _select_text(soup: BeautifulSoup, selector: str) -> str:
    """Return the whitespace-collapsed text of the first match, or ``""``."""
    element = _select_one(soup, selector)
    if element is None:
        return ""
    return " ".join(element.get_text(" ").split())


def _select_inner_html(soup: BeautifulSoup, selector: str) -> str:
    """Return the inner HTML of the first match, or ``""``."""
    element = _select_one(soup, selector)
    if element is None:
        return ""
    return element.decode_contents()


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def extract_page(
    raw: RawPage,
    title_selector: str,
    content_selector: str,
    exclude_selectors: Optional[Iterable[str]] = None,
) -> SelectedPage:
    """Select the title text and content inner HTML from *raw*.

    A missing title is not an error; the title is simply empty.

    Raises:
        SelectorFailed: If any selector is not valid CSS.
        ContentElementMissing: If the content selection is empty or
            whitespace-only.
    """
    soup = _normalize(raw.content, raw.encoding, exclude_selectors or ())

    title = _select_text(soup, title_selector)
    content_html = _select_inner_html(soup, content_selector)

    if not content_html.strip():
        raise ContentElementMissing(
            f"No content found for selector {content_selector!r} in {raw.location}"
        )

    logger.info("Title %r, %d characters of content", title, len(content_html))
    return SelectedPage(title=title, content_html=content_html)
