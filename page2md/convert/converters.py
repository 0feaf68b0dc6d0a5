"""HTML-to-Markdown converter backends.

The pipeline only needs ``convert(html) -> markdown``; the library doing the
work sits behind :class:`MarkdownConverter` so it can be swapped without
touching any rewrite rule.

Backends:
  * ``markdownify``: default; ATX headings, ``-`` bullets, and wiki macro
    tables laid out as icon rows that the admonition rule picks up.
  * ``html2text``: alternative; no line wrapping, no macro table handling.
"""

from __future__ import annotations

import logging
import shlex
from abc import ABC, abstractmethod
from typing import Any

import html2text
from markdownify import ATX
from markdownify import MarkdownConverter as BaseMarkdownify

from page2md.errors import ConverterFailed

logger = logging.getLogger(__name__)


def _coerce(value: str) -> Any:
    """Turn an option value into ``bool``/``int``/``float`` where it looks like one."""
    lowered = value.lower()
    if lowered in ("true", "yes", "on"):
        return True
    if lowered in ("false", "no", "off"):
        return False
    for cast in (int, float):
        try:
            return cast(value)
        except ValueError:
            continue
    return value


def parse_converter_options(options: str) -> dict[str, Any]:
    """Parse ``key=value`` tokens (shell quoting allowed) into a dict.

    Raises:
        ConverterFailed: If a token has no ``=``.
    """
    parsed: dict[str, Any] = {}
    try:
        tokens = shlex.split(options or "")
    except ValueError as exc:
        raise ConverterFailed(f"Invalid converter options: {exc}") from exc
    for token in tokens:
        key, sep, value = token.partition("=")
        if not sep or not key:
            raise ConverterFailed(f"Invalid converter option {token!r}; expected key=value")
        parsed[key.replace("-", "_")] = _coerce(value)
    return parsed


# ---------------------------------------------------------------------------
# Abstract base
# ---------------------------------------------------------------------------

class MarkdownConverter(ABC):
    """Abstract base class for an HTML-to-Markdown backend."""

    def __init__(self, **options: Any) -> None:
        self.options = options

    @property
    @abstractmethod
    def name(self) -> str:
        """Backend name as used on the command line."""

    @abstractmethod
    def _convert(self, html: str) -> str:
        """Run the backend library."""

    def convert(self, html: str) -> str:
        """Convert *html* to Markdown.

        Raises:
            ConverterFailed: If the backend raises for any reason.
        """
        logger.info("Converting %d characters with %s", len(html), self.name)
        try:
            markdown = self._convert(html)
        except Exception as exc:
            raise ConverterFailed(f"{self.name} failed: {exc}") from exc
        return markdown.strip()


# ---------------------------------------------------------------------------
# Backends
# ---------------------------------------------------------------------------

class MacroTableMarkdownify(BaseMarkdownify):
    """markdownify with wiki macro tables kept as multi-line icon rows.

    A table whose class contains ``macro`` and whose first cell holds an
    icon image comes out as::

        | ![](/images/icons/emoticons/warning.gif) | **Title**
        body lines...
        |

    Every other table is left to markdownify.
    """

    def _convert_fragment(self, html: str) -> str:
        return type(self)(**self.options).convert(html).strip()

    def convert_table(self, el, text, *args, **kwargs):
        if "macro" not in " ".join(el.get("class", [])).lower():
            return super().convert_table(el, text, *args, **kwargs)

        row = el.find("tr")
        cells = row.find_all(["td", "th"], recursive=False) if row else []
        if len(cells) < 2 or cells[0].find("img") is None:
            return super().convert_table(el, text, *args, **kwargs)

        icon = self._convert_fragment(cells[0].decode_contents())
        body = "\n\n".join(
            self._convert_fragment(cell.decode_contents()) for cell in cells[1:]
        ).strip()
        head, _, rest = body.partition("\n")
        lines = [f"| {icon} | {head}".rstrip()]
        if rest:
            lines.append(rest)
        lines.append("|")
        return "\n\n" + "\n".join(lines) + "\n\n"


class MarkdownifyConverter(MarkdownConverter):
    defaults = {
        "heading_style": ATX,
        "bullets": "-",
        "keep_inline_images_in": ["td", "th"],
    }

    @property
    def name(self) -> str:
        return "markdownify"

    def _convert(self, html: str) -> str:
        return MacroTableMarkdownify(**{**self.defaults, **self.options}).convert(html)


class Html2TextConverter(MarkdownConverter):
    defaults = {"body_width": 0}

    @property
    def name(self) -> str:
        return "html2text"

    def _convert(self, html: str) -> str:
        handler = html2text.HTML2Text()
        for key, value in {**self.defaults, **self.options}.items():
            if not hasattr(handler, key):
                raise ValueError(f"unknown html2text option {key!r}")
            setattr(handler, key, value)
        return handler.handle(html)


_CONVERTERS: dict[str, type[MarkdownConverter]] = {
    "markdownify": MarkdownifyConverter,
    "html2text": Html2TextConverter,
}


def available_converters() -> list[str]:
    return sorted(_CONVERTERS)


def get_converter(name: str, options: str = "") -> MarkdownConverter:
    """Instantiate the backend called *name* with parsed *options*.

    Raises:
        ConverterFailed: For an unknown backend or malformed options.
    """
    try:
        converter_cls = _CONVERTERS[name]
    except KeyError:
        raise ConverterFailed(
            f"Unknown converter {name!r}; choose from {', '.join(available_converters())}"
        ) from None
    return converter_cls(**parse_converter_options(options))
