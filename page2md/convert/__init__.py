"""Conversion package: HTML/Markdown rewrite rules and converter backends."""

from page2md.convert.admonitions import AdmonitionRule
from page2md.convert.converters import (
    MarkdownConverter,
    get_converter,
    parse_converter_options,
)
from page2md.convert.html_rules import HTML_RULES, rewrite_html
from page2md.convert.markdown_rules import markdown_rules, rewrite_markdown
from page2md.convert.rules import CallableRule, RegexRule, Rule, apply_rules

__all__ = [
    "AdmonitionRule",
    "CallableRule",
    "HTML_RULES",
    "MarkdownConverter",
    "RegexRule",
    "Rule",
    "apply_rules",
    "get_converter",
    "markdown_rules",
    "parse_converter_options",
    "rewrite_html",
    "rewrite_markdown",
]
