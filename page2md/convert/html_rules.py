"""HTML-level fixes applied to the content before Markdown conversion.

Wiki exports wrap code in syntax-highlighter ``<script>`` blocks and nest
``<p>``/``<div>`` inside list items and table cells, which Markdown
converters render badly.  Each rule below fixes one such idiom.
"""

from __future__ import annotations

import re
from typing import Callable, Iterator

from page2md.convert.rules import CallableRule, RegexRule, Rule, apply_rules

_BLOCK_TAG = re.compile(r"</?(?:p|div)\b[^>]*>", re.IGNORECASE)
_MACRO_CLASS = re.compile(r"""\bclass\s*=\s*(["'])[^"']*macro[^"']*\1""", re.IGNORECASE)


def _outer_elements(html: str, tag: str) -> Iterator[tuple[int, int]]:
    """Yield ``(start, end)`` spans of the outermost *tag* elements in *html*.

    Nested elements of the same tag are part of their ancestor's span.
    Stray closing tags are ignored.
    """
    token = re.compile(rf"<(/?){tag}\b[^>]*>", re.IGNORECASE)
    depth = 0
    start = 0
    for match in token.finditer(html):
        if match.group(0).endswith("/>"):
            continue
        if not match.group(1):
            if depth == 0:
                start = match.start()
            depth += 1
        elif depth:
            depth -= 1
            if depth == 0:
                yield start, match.end()


def _rewrite_elements(html: str, tag: str, rewrite: Callable[[str], str]) -> str:
    """Replace each outermost *tag* element of *html* with ``rewrite(element)``."""
    parts: list[str] = []
    last = 0
    for start, end in _outer_elements(html, tag):
        parts.append(html[last:start])
        parts.append(rewrite(html[start:end]))
        last = end
    parts.append(html[last:])
    return "".join(parts)


def _strip_block_tags(html: str) -> str:
    return _BLOCK_TAG.sub("", html)


def strip_blocks_in_list_items(html: str) -> str:
    """Drop ``<p>``/``<div>`` tags (not their content) inside ``<li>`` elements."""
    return _rewrite_elements(html, "li", _strip_block_tags)


def strip_blocks_in_tables(html: str) -> str:
    """Drop ``<p>``/``<div>`` tags inside tables that are not ``macro`` tables.

    Macro tables hold admonitions and keep their block structure, but any
    plain table nested inside one is still flattened.
    """

    def rewrite(element: str) -> str:
        head_end = element.index(">") + 1
        if not _MACRO_CLASS.search(element[:head_end]):
            return _strip_block_tags(element)
        tail_start = element.rindex("<")
        inner = element[head_end:tail_start]
        return element[:head_end] + strip_blocks_in_tables(inner) + element[tail_start:]

    return _rewrite_elements(html, "table", rewrite)


HTML_RULES: list[Rule] = [
    RegexRule(
        "syntaxhighlighter-to-pre",
        r"""<script\b[^>]*\btype\s*=\s*["']syntaxhighlighter["'][^>]*>\s*"""
        r"""<!\[CDATA\[(.*?)\]\]>\s*</script>""",
        r"<pre>\1</pre>",
        re.IGNORECASE | re.DOTALL,
    ),
    CallableRule("strip-blocks-in-list-items", strip_blocks_in_list_items),
    CallableRule("strip-blocks-in-tables", strip_blocks_in_tables),
    RegexRule("strong-to-b", r"<(/?)strong\b([^>]*)>", r"<\1b\2>", re.IGNORECASE),
    RegexRule("em-to-i", r"<(/?)em\b([^>]*)>", r"<\1i\2>", re.IGNORECASE),
    RegexRule("drop-spans", r"</?span\b[^>]*>", "", re.IGNORECASE),
    RegexRule("nbsp-to-space", r"&nbsp;|&#160;|&#x[aA]0;|\xa0", " "),
]


def rewrite_html(html: str) -> str:
    """Apply :data:`HTML_RULES` to content inner HTML."""
    return apply_rules(HTML_RULES, html)
