"""Tests for the root <svg> tag parser."""

import pytest

from svg_sheet.exceptions import SvgParseError
from svg_sheet.svg.parsing import parse_svg, preprocess_svg_content


class TestPreprocessSvgContent:
    """Test stripping of the byte order mark and prolog."""

    def test_plain_content_unchanged(self) -> None:
        """Test that content starting with <svg is returned as-is."""
        assert preprocess_svg_content("<svg ></svg>") == "<svg ></svg>"

    def test_strips_bom_declaration_and_comments(self) -> None:
        """Test interleaved declarations, comments, and whitespace are removed."""
        text = "\ufeff<?xml version=\"1.0\"?>\n<!-- icon -->\n  <!-- more --><svg ></svg>"
        assert preprocess_svg_content(text) == "<svg ></svg>"

    def test_unterminated_comment_is_kept(self) -> None:
        """Test that an unterminated comment stops stripping."""
        assert preprocess_svg_content("  <!-- open <svg >") == "<!-- open <svg >"


class TestParseSvg:
    """Test parsing of the opening tag and content location."""

    def test_attributes_in_source_order(self) -> None:
        """Test attributes are returned in order with both quote styles."""
        parsed = parse_svg("<svg width=\"24\" height='12' fill=\"none\"><path/></svg>")

        assert parsed.attributes == [("width", "24"), ("height", "12"), ("fill", "none")]
        assert parsed.content == "<path/>"

    def test_whitespace_around_equals(self) -> None:
        """Test whitespace is allowed around the equals sign."""
        parsed = parse_svg('<svg\n  viewBox = "0 0 1 1"\n>x</svg>')
        assert parsed.attributes == [("viewBox", "0 0 1 1")]

    def test_boolean_attribute_takes_key_as_value(self) -> None:
        """Test a bare attribute gets its key as value."""
        parsed = parse_svg('<svg focusable id="a"></svg>')
        assert parsed.attributes == [("focusable", "focusable"), ("id", "a")]

    def test_namespaced_attribute_keys(self) -> None:
        """Test keys may contain colons, dashes, and underscores."""
        parsed = parse_svg('<svg xmlns:xlink="x" data-name_1="y"></svg>')
        assert [key for key, _ in parsed.attributes] == ["xmlns:xlink", "data-name_1"]

    def test_content_ends_at_first_closing_tag(self) -> None:
        """Test nested <svg> content is opaque and the first </svg> ends it."""
        parsed = parse_svg('<svg ><svg x="1"><g/></svg><rect/></svg>')
        assert parsed.content == '<svg x="1"><g/>'

    def test_prolog_before_root(self) -> None:
        """Test the root tag is found after a declaration and comment."""
        parsed = parse_svg('<?xml version="1.0"?><!-- c --><svg id="x"><g/></svg>')
        assert parsed.attributes == [("id", "x")]
        assert parsed.content == "<g/>"

    @pytest.mark.parametrize(
        ("text", "reason"),
        [
            ("<g></g>", "expected root <svg> tag"),
            ("<!DOCTYPE svg><svg ></svg>", "expected root <svg> tag"),
            ("<svg></svg>", "expected whitespace after <svg"),
            ("<svg width=24></svg>", "expected quoted value for attribute 'width'"),
            ('<svg width="24></svg>', "unterminated quote in attribute 'width'"),
            ('<svg width="24"/>', "expected '>' to close the opening <svg> tag"),
            ('<svg width="24"><g/>', "missing closing </svg>"),
        ],
    )
    def test_parse_errors(self, text: str, reason: str) -> None:
        """Test malformed input raises SvgParseError with the reason."""
        with pytest.raises(SvgParseError) as exc_info:
            parse_svg(text, "icons/bad.svg")

        assert exc_info.value.message == f"failed to parse svg (icons/bad.svg): {reason}"
        assert exc_info.value.details["path"] == "icons/bad.svg"
        assert exc_info.value.details["reason"] == reason
