"""Page conversion pipeline.

``convert_page`` runs every stage in order and stops at the first failure:

    fetch → normalise/select → HTML rewrites → convert → Markdown rewrites
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Mapping, Optional

from page2md.config import settings
from page2md.convert.converters import MarkdownConverter, get_converter
from page2md.convert.html_rules import rewrite_html
from page2md.convert.markdown_rules import rewrite_markdown
from page2md.scraper.extractor import extract_page
from page2md.scraper.fetcher import fetch_page

logger = logging.getLogger(__name__)


@dataclass
class ConversionResult:
    """Cleaned Markdown for one page, plus the title used to name it."""

    location: str
    title: str
    markdown: str


def convert_page(
    location: str,
    *,
    content_selector: Optional[str] = None,
    title_selector: Optional[str] = None,
    exclude_selectors: Optional[Iterable[str]] = None,
    fetch_options: str = "",
    converter: Optional[MarkdownConverter] = None,
    converter_options: str = "",
    icon_kinds: Optional[Mapping[str, str]] = None,
) -> ConversionResult:
    """Fetch *location* and return its content as cleaned Markdown.

    Pipeline:
        1. :func:`~page2md.scraper.fetcher.fetch_page`: HTTP GET or file read.
        2. :func:`~page2md.scraper.extractor.extract_page`: normalise the
           document, select title text and content inner HTML.
        3. :func:`~page2md.convert.html_rules.rewrite_html`: HTML fixes.
        4. ``converter.convert``: HTML to Markdown.
        5. :func:`~page2md.convert.markdown_rules.rewrite_markdown`:
           Markdown cleanup, title heading and admonitions.

    Selectors, converter and icon mapping default to :data:`settings`.
    *converter_options* only applies when *converter* is not given.

    Raises:
        page2md.errors.Page2MdError: Subclass naming the failed stage.
    """
    if converter is None:
        converter = get_converter(settings.markdown_converter, converter_options)

    raw = fetch_page(location, fetch_options)
    page = extract_page(
        raw,
        title_selector=title_selector or settings.title_selector,
        content_selector=content_selector or settings.content_selector,
        exclude_selectors=(
            settings.exclude_selectors if exclude_selectors is None else exclude_selectors
        ),
    )

    content_html = rewrite_html(page.content_html)
    markdown = converter.convert(content_html)
    markdown = rewrite_markdown(
        markdown,
        title=page.title,
        icon_kinds=icon_kinds or settings.admonition_icons,
    )

    logger.info("Converted %s: %d characters of Markdown", location, len(markdown))
    return ConversionResult(location=location, title=page.title, markdown=markdown)
