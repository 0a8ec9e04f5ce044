"""Tests for the color-span HTML adapter."""

from pathlib import Path

import pytest

from trace_window.adapters.span_markup import (
    html_file_loader,
    load_plain_source,
    parse_highlighted_html,
    parse_line,
    render_line_html,
)
from trace_window.core.source_window import SourceWindowExtractor
from trace_window.models.markup import MarkupToken, RepairedLine, visible_text
from trace_window.utils.errors import MarkupParseError


class TestParseLine:
    """Test tokenizing a single line of markup."""

    def test_spans_and_text(self) -> None:
        """Test that spans become open and close tokens."""
        tokens = parse_line('<span style="color: #0000BB">$a&nbsp;</span>=')

        assert tokens == (
            MarkupToken.open("#0000BB"),
            MarkupToken.plain("$a "),
            MarkupToken.close(),
            MarkupToken.plain("="),
        )

    def test_entities_decoded(self) -> None:
        """Test that HTML entities are decoded in text."""
        assert parse_line("&lt;?php&nbsp;&amp;") == (MarkupToken.plain("<?php &"),)

    def test_other_tags_dropped(self) -> None:
        """Test that tags other than spans are ignored."""
        assert parse_line("<b>bold</b>") == (MarkupToken.plain("bold"),)

    def test_class_span_uses_class_as_color(self) -> None:
        """Test that class-based spans keep their class as color identifier."""
        assert parse_line('<span class="kw">def</span>')[0] == MarkupToken.open("kw")


class TestParseHighlightedHtml:
    """Test splitting a highlighted file into lines."""

    def test_highlight_file_output(self, highlighted_php: str) -> None:
        """Test a file as emitted by PHP's highlight_file()."""
        lines = parse_highlighted_html(highlighted_php)

        assert [visible_text(line) for line in lines] == [
            "<?php",
            "/**",
            " * Example & test",
            " */",
            "$a = 1;",
            "throw new Exception('boom');",
            "",
        ]
        assert lines[0] == (MarkupToken.open("#0000BB"), MarkupToken.plain("<?php"))
        assert lines[2] == (MarkupToken.plain(" * Example & test"),)

    def test_newline_separated_markup(self) -> None:
        """Test markup that separates lines with newlines instead of <br />."""
        lines = parse_highlighted_html('<span style="color: #f00">a\nb</span>\nc')

        assert [visible_text(line) for line in lines] == ["a", "b", "c"]
        assert lines[1] == (MarkupToken.plain("b"), MarkupToken.close())

    def test_code_wrapper_without_outer_span(self) -> None:
        """Test that a trailing close is kept when no wrapping span was stripped."""
        lines = parse_highlighted_html('<code><span style="color: #f00">a</span></code>')

        assert lines == ((MarkupToken.open("#f00"), MarkupToken.plain("a"), MarkupToken.close()),)

    def test_empty_markup(self) -> None:
        """Test that empty input gives no lines."""
        assert parse_highlighted_html("") == ()

    def test_bytes_accepted(self) -> None:
        """Test that UTF-8 bytes are decoded."""
        assert parse_highlighted_html(b"x<br />y") == (
            (MarkupToken.plain("x"),),
            (MarkupToken.plain("y"),),
        )

    def test_non_text_rejected(self) -> None:
        """Test that non-text input raises MarkupParseError."""
        with pytest.raises(MarkupParseError):
            parse_highlighted_html(42)  # type: ignore[arg-type]

    def test_window_of_highlighted_file(self, highlighted_php: str) -> None:
        """Test repairing the doc comment of a highlighted file."""
        lines = parse_highlighted_html(highlighted_php)

        window = SourceWindowExtractor().extract(lines, error_line=6)

        assert window[2].tokens == (
            MarkupToken.open("#FF8000"),
            MarkupToken.plain(" * Example & test"),
            MarkupToken.close(),
        )
        assert window[5].is_error_line
        assert window[5].opens == 0
        assert all(line.opens == line.closes for line in window)


class TestRenderLineHtml:
    """Test rendering repaired lines back to HTML."""

    def test_render_escapes_text(self) -> None:
        """Test that text is escaped and spans are rendered."""
        line = RepairedLine(
            1,
            (MarkupToken.open("#0000BB"), MarkupToken.plain("<?php"), MarkupToken.close()),
        )

        assert render_line_html(line) == '<span style="color: #0000BB">&lt;?php</span>'

    def test_render_round_trips_a_line(self) -> None:
        """Test that parsing rendered markup gives the same tokens."""
        tokens = parse_line('<span style="color: #007700">=&nbsp;</span>1')

        assert parse_line(render_line_html(RepairedLine(1, tokens))) == tokens


class TestLoaders:
    """Test file loaders."""

    def test_load_plain_source(self, tmp_path: Path) -> None:
        """Test that plain files become uncolored lines."""
        source = tmp_path / "a.py"
        source.write_text("a = 1\n\nb = 2\n")

        assert load_plain_source(str(source)) == (
            (MarkupToken.plain("a = 1"),),
            (),
            (MarkupToken.plain("b = 2"),),
        )

    def test_load_plain_source_missing(self, tmp_path: Path) -> None:
        """Test that a missing file raises OSError."""
        with pytest.raises(OSError):
            load_plain_source(str(tmp_path / "missing.py"))

    def test_html_file_loader(self, fixtures_dir: Path) -> None:
        """Test loading a highlighted dump from disk."""
        lines = html_file_loader(str(fixtures_dir / "highlighted.php.html"))

        assert len(lines) == 7
