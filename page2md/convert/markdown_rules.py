"""Markdown-level cleanup applied to converter output.

Rules run in a fixed order; several depend on earlier ones (headings lose
their ``{#id}`` suffix before numbering is stripped, trailing whitespace is
gone before admonition rows are matched).
"""

from __future__ import annotations

import re
from typing import Mapping, Optional

from page2md.convert.admonitions import AdmonitionRule
from page2md.convert.rules import CallableRule, RegexRule, Rule, apply_rules

_LIST_ITEM_INDENT = re.compile(r"^( +)(?=(?:[*+-]|\d+[.)])[ \t])", re.MULTILINE)


def _prepend_title(title: str):
    def prepend(text: str) -> str:
        if not title.strip():
            return text
        return f"# {title.strip()}\n\n{text}"

    return prepend


def _double_list_indent(text: str) -> str:
    """Widen nested list indentation so each level is four spaces deep."""
    return _LIST_ITEM_INDENT.sub(lambda m: m.group(1) * 2, text)


def _collapse_blank_lines(text: str) -> str:
    """Squeeze runs of blank lines to one, except inside fenced code blocks."""
    out: list[str] = []
    in_fence = False
    for line in text.split("\n"):
        if line.lstrip().startswith(("```", "~~~")):
            in_fence = not in_fence
        elif not in_fence and not line.strip() and out and not out[-1].strip():
            continue
        out.append(line)
    return "\n".join(out)


def _strip_blank_edges(text: str) -> str:
    return text.strip("\n")


def _trailing_whitespace_rule(name: str) -> Rule:
    return RegexRule(name, r"[ \t]+$", "", re.MULTILINE)


def markdown_rules(title: str = "", icon_kinds: Optional[Mapping[str, str]] = None) -> list[Rule]:
    """Build the ordered Markdown cleanup rules for a page titled *title*."""
    return [
        CallableRule("prepend-title", _prepend_title(title)),
        RegexRule("unescape-wiki-characters", r"\\([`~#$^*_<>])", r"\1"),
        CallableRule("double-list-indent", _double_list_indent),
        RegexRule("unordered-markers", r"^([ \t]*)- ", r"\1* ", re.MULTILINE),
        RegexRule("ordered-markers", r"^([ \t]*)\d+\. ", r"\g<1>1. ", re.MULTILINE),
        RegexRule("heading-ids", r"^(#+ .*?)[ \t]*\{#[^}]*\}[ \t]*$", r"\1", re.MULTILINE),
        RegexRule("nbsp-to-space", r"&nbsp;|\xa0", " "),
        _trailing_whitespace_rule("trailing-whitespace"),
        AdmonitionRule(icon_kinds),
        RegexRule(
            "heading-numbering",
            r"^(#+) [A-Za-z0-9]{1,2}[.)] (.*)$",
            r"\1 \2",
            re.MULTILINE,
        ),
        RegexRule("bold-underscore-spacing", r"^__ +| +__$", "__", re.MULTILINE),
        _trailing_whitespace_rule("final-trailing-whitespace"),
        CallableRule("collapse-blank-lines", _collapse_blank_lines),
        CallableRule("strip-blank-edges", _strip_blank_edges),
    ]


def rewrite_markdown(
    markdown: str,
    title: str = "",
    icon_kinds: Optional[Mapping[str, str]] = None,
) -> str:
    """Clean up converter output and put the page title on top."""
    return apply_rules(markdown_rules(title, icon_kinds), markdown)
