"""Tests for the HTML-to-Markdown converter backends."""

from __future__ import annotations

import pytest

from page2md.convert.converters import (
    Html2TextConverter,
    MarkdownifyConverter,
    available_converters,
    get_converter,
    parse_converter_options,
)
from page2md.errors import ConverterFailed


class TestParseConverterOptions:
    def test_empty(self) -> None:
        assert parse_converter_options("") == {}

    def test_values_are_coerced(self) -> None:
        opts = parse_converter_options("wrap=true wrap-width=80 ratio=0.5 bullets=*")
        assert opts == {"wrap": True, "wrap_width": 80, "ratio": 0.5, "bullets": "*"}

    def test_quoted_value(self) -> None:
        assert parse_converter_options('strong_em_symbol="_"') == {"strong_em_symbol": "_"}

    def test_token_without_equals_raises(self) -> None:
        with pytest.raises(ConverterFailed):
            parse_converter_options("wrap")

    def test_unbalanced_quote_raises(self) -> None:
        with pytest.raises(ConverterFailed):
            parse_converter_options('bullets="*')


class TestGetConverter:
    def test_known_backends(self) -> None:
        assert available_converters() == ["html2text", "markdownify"]
        assert isinstance(get_converter("markdownify"), MarkdownifyConverter)
        assert isinstance(get_converter("html2text"), Html2TextConverter)

    def test_options_are_passed(self) -> None:
        converter = get_converter("markdownify", "wrap=true")
        assert converter.options == {"wrap": True}

    def test_unknown_backend_raises(self) -> None:
        with pytest.raises(ConverterFailed):
            get_converter("pandoc")


class TestMarkdownify:
    def test_atx_headings_and_dash_bullets(self) -> None:
        markdown = MarkdownifyConverter().convert(
            "<h2>Intro</h2><p>Hello <b>world</b></p><ul><li>one</li><li>two</li></ul>"
        )
        assert "## Intro" in markdown
        assert "**world**" in markdown
        assert "- one" in markdown
        assert markdown == markdown.strip()

    def test_pre_becomes_fenced_code(self) -> None:
        markdown = MarkdownifyConverter().convert("<pre>make install</pre>")
        assert "```" in markdown
        assert "make install" in markdown

    def test_macro_table_keeps_icon_row_shape(self) -> None:
        markdown = MarkdownifyConverter().convert(
            '<table class="confluenceTable warningMacro"><tr>'
            '<td><img src="/images/icons/emoticons/warning.gif"/></td>'
            "<td><b>Heads up</b><p>Body one</p></td>"
            "</tr></table>"
        )
        assert markdown.splitlines() == [
            "| ![](/images/icons/emoticons/warning.gif) | **Heads up**",
            "",
            "Body one",
            "|",
        ]

    def test_plain_table_is_not_rewritten(self) -> None:
        markdown = MarkdownifyConverter().convert(
            "<table><tr><th>a</th><th>b</th></tr><tr><td>1</td><td>2</td></tr></table>"
        )
        assert "| a | b |" in markdown
        assert "| 1 | 2 |" in markdown


class TestHtml2Text:
    def test_converts_heading(self) -> None:
        markdown = Html2TextConverter().convert("<h1>Title</h1><p>Text</p>")
        assert "# Title" in markdown
        assert "Text" in markdown

    def test_unknown_option_fails(self) -> None:
        converter = Html2TextConverter(no_such_option=True)
        with pytest.raises(ConverterFailed):
            converter.convert("<p>x</p>")

    def test_library_failure_is_wrapped(self, monkeypatch) -> None:
        def boom(self, html):
            raise RuntimeError("boom")

        monkeypatch.setattr(Html2TextConverter, "_convert", boom)
        with pytest.raises(ConverterFailed, match="boom"):
            Html2TextConverter().convert("<p>x</p>")
