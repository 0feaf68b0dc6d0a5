"""Tests for the Markdown cleanup rules and admonition translation."""

from __future__ import annotations

import pytest

from page2md.convert.admonitions import AdmonitionRule
from page2md.convert.markdown_rules import markdown_rules, rewrite_markdown
from page2md.convert.rules import CallableRule, RegexRule, apply_rules

_ICON = "![](/confluence/images/icons/emoticons/{}.png)"


# ---------------------------------------------------------------------------
# Rule primitives
# ---------------------------------------------------------------------------

class TestRulePrimitives:
    def test_apply_rules_runs_in_order(self) -> None:
        rules = [
            RegexRule("a-to-b", "a", "b"),
            CallableRule("upper", str.upper),
        ]
        assert apply_rules(rules, "banana") == "BBNBNB"

    def test_rule_repr_names_rule(self) -> None:
        assert "a-to-b" in repr(RegexRule("a-to-b", "a", "b"))

    def test_rule_names_are_unique(self) -> None:
        names = [rule.name for rule in markdown_rules("T")]
        assert len(names) == len(set(names))


# ---------------------------------------------------------------------------
# Title, escapes, lists, headings
# ---------------------------------------------------------------------------

class TestTitle:
    def test_title_prepended(self) -> None:
        assert rewrite_markdown("Body", title="My Page") == "# My Page\n\nBody"

    @pytest.mark.parametrize("title", ["", "   ", "\t\n"])
    def test_blank_title_not_prepended(self, title: str) -> None:
        assert rewrite_markdown("Body", title=title) == "Body"


class TestUnescape:
    def test_wiki_escapes_removed(self) -> None:
        text = r"\` \~ \# \$ \^ \* \_ \< \>"
        assert rewrite_markdown(text) == "` ~ # $ ^ * _ < >"

    def test_other_escapes_kept(self) -> None:
        assert rewrite_markdown(r"a\[b\]") == r"a\[b\]"


class TestLists:
    def test_unordered_markers(self) -> None:
        assert rewrite_markdown("- one\n- two") == "* one\n* two"

    def test_ordered_markers(self) -> None:
        assert rewrite_markdown("3. item\n10. other") == "1. item\n1. other"

    def test_nested_indent_doubled(self) -> None:
        text = "- top\n  - nested\n    1. deeper"
        assert rewrite_markdown(text) == "* top\n    * nested\n        1. deeper"

    def test_indent_of_non_list_lines_kept(self) -> None:
        assert rewrite_markdown("para\n  continued") == "para\n  continued"

    def test_horizontal_rule_untouched(self) -> None:
        assert rewrite_markdown("above\n\n---\n\nbelow") == "above\n\n---\n\nbelow"


class TestHeadings:
    def test_id_and_numbering_removed(self) -> None:
        assert rewrite_markdown("## 1. Introduction {#intro}") == "## Introduction"

    @pytest.mark.parametrize(
        "heading, expected",
        [
            ("### a) Scope", "### Scope"),
            ("# 12. Twelve", "# Twelve"),
            ("## 2.1 Not a prefix", "## 2.1 Not a prefix"),
            ("## 123. Too long", "## 123. Too long"),
        ],
    )
    def test_numbering_prefixes(self, heading: str, expected: str) -> None:
        assert rewrite_markdown(heading) == expected

    def test_heading_id_only_on_headings(self) -> None:
        assert rewrite_markdown("text {#keep}") == "text {#keep}"


class TestWhitespace:
    def test_non_breaking_spaces(self) -> None:
        assert rewrite_markdown("a\xa0b&nbsp;c") == "a b c"

    def test_trailing_whitespace_stripped(self) -> None:
        assert rewrite_markdown("line one   \nline two\t") == "line one\nline two"

    def test_blank_line_runs_collapsed(self) -> None:
        assert rewrite_markdown("\n\na\n\n\n\nb\n\n") == "a\n\nb"

    def test_blank_lines_inside_fenced_code_kept(self) -> None:
        code = "```\nimport os\n\n\ndef main():\n    pass\n```"
        assert rewrite_markdown(f"intro\n\n\n{code}\n\n\nafter") == (
            f"intro\n\n{code}\n\nafter"
        )

    def test_bold_underscore_spacing(self) -> None:
        assert rewrite_markdown("__ bold__\n__also __") == "__bold__\n__also__"


# ---------------------------------------------------------------------------
# Admonitions
# ---------------------------------------------------------------------------

class TestAdmonitions:
    def test_titled_warning(self) -> None:
        text = "\n".join([
            f"| {_ICON.format('warning')} | **Heads up**",
            "Body one",
            "",
            "Body two",
            "| ",
            "After",
        ])
        assert AdmonitionRule().apply(text) == "\n".join([
            '!!! warning "Heads up"',
            "    Body one",
            "",
            "    Body two",
            "After",
        ])

    def test_blank_lines_around_body_dropped(self) -> None:
        text = f"| {_ICON.format('warning')} | **Heads up**\n\nBody one\n\nBody two\n\n|"
        assert AdmonitionRule().apply(text) == (
            '!!! warning "Heads up"\n    Body one\n\n    Body two'
        )

    def test_untitled_note_moves_text_into_body(self) -> None:
        text = f"| {_ICON.format('information')} | Plain text\nmore\n|"
        assert AdmonitionRule().apply(text) == "!!! note\n    Plain text\n    more"

    def test_empty_head_row(self) -> None:
        text = f"| {_ICON.format('check')} |\nDo this\n|"
        assert AdmonitionRule().apply(text) == "!!! tip\n    Do this"

    def test_title_followed_by_text(self) -> None:
        text = f"| {_ICON.format('forbidden')} | **Stop** do not run\n|"
        assert AdmonitionRule().apply(text) == '!!! danger "Stop"\n    do not run'

    def test_trailing_cell_pipe_ignored(self) -> None:
        text = f"| {_ICON.format('warning')} | **Careful** |\nx\n|"
        assert AdmonitionRule().apply(text) == '!!! warning "Careful"\n    x'

    def test_unknown_icon_untouched(self) -> None:
        text = f"| {_ICON.format('smile')} | **Hi**\nbody\n|"
        assert AdmonitionRule().apply(text) == text

    def test_without_closing_row_untouched(self) -> None:
        text = f"| {_ICON.format('warning')} | **Heads up**\nbody"
        assert AdmonitionRule().apply(text) == text

    def test_custom_icon_mapping(self) -> None:
        rule = AdmonitionRule({"lightbulb": "hint"})
        text = "| ![](/icons/lightbulb.gif) | **Idea**\nbody\n|"
        assert rule.apply(text) == '!!! hint "Idea"\n    body'

    def test_two_admonitions(self) -> None:
        text = "\n".join([
            f"| {_ICON.format('information')} | **One**",
            "a",
            "|",
            "",
            f"| {_ICON.format('check')} | **Two**",
            "b",
            "|",
        ])
        assert AdmonitionRule().apply(text) == (
            '!!! note "One"\n    a\n\n!!! tip "Two"\n    b'
        )

    def test_full_pipeline_with_lists_in_body(self) -> None:
        text = "\n".join([
            f"| {_ICON.format('warning')} | **Heads up**   ",
            "- first",
            "- second",
            "| ",
        ])
        assert rewrite_markdown(text, title="Page") == "\n".join([
            "# Page",
            "",
            '!!! warning "Heads up"',
            "    * first",
            "    * second",
        ])
