"""Root <svg> tag parser.

Parses only the opening tag of a file's root ``<svg>`` element into an
attribute list and locates the raw inner content. The content itself is never
parsed: nested ``<svg>`` elements and all child markup pass through as opaque
text up to the first ``</svg>``.
"""

import re
from typing import NamedTuple

from svg_sheet.constants import SVG_CLOSE_TOKEN, SVG_OPEN_TOKEN
from svg_sheet.exceptions import SvgParseError
from svg_sheet.models.sprite import Attribute

BYTE_ORDER_MARK = "\ufeff"

# Whitespace accepted between tokens of the opening tag
_SPACE_RE = re.compile(r"[ \t\r\n]*")
_SPACE1_RE = re.compile(r"[ \t\r\n]+")
_KEY_RE = re.compile(r"[A-Za-z0-9_:-]+")
_EQUALS_RE = re.compile(r"[ \t\r\n]*=[ \t\r\n]*")

_QUOTES = ("'", '"')


class ParsedSvg(NamedTuple):
    """Attributes and content location of one root <svg> element."""

    attributes: list[Attribute]
    source: str  # Preprocessed text the offsets refer to
    content_start: int
    content_end: int

    @property
    def content(self) -> str:
        """Raw inner markup between the opening tag and the first </svg>."""
        return self.source[self.content_start : self.content_end]


def preprocess_svg_content(text: str) -> str:
    """Strip a byte order mark and any leading XML declarations or comments.

    Declarations and comments may be interleaved with whitespace in any order;
    stripping repeats until neither appears at the current position.

    Args:
        text: Full file content.

    Returns:
        The text starting at the first non-prolog token.
    """
    remaining = text.lstrip(BYTE_ORDER_MARK)
    while True:
        trimmed = remaining.lstrip()
        if trimmed.startswith("<?"):
            end = trimmed.find("?>", 2)
            if end != -1:
                remaining = trimmed[end + 2 :]
                continue
        elif trimmed.startswith("<!--"):
            end = trimmed.find("-->", 4)
            if end != -1:
                remaining = trimmed[end + 3 :]
                continue
        return trimmed


def parse_svg(text: str, path: str = "<string>") -> ParsedSvg:
    """Parse the root <svg> opening tag of a file.

    Args:
        text: Full file content; it is preprocessed before parsing.
        path: File path used in error messages.

    Returns:
        The parsed attributes and the location of the raw content.

    Raises:
        SvgParseError: If the root tag is missing or malformed, an attribute
            value is unquoted or unterminated, or no closing </svg> exists.
    """
    source = preprocess_svg_content(text)

    if not source.startswith(SVG_OPEN_TOKEN):
        raise _parse_error(path, "expected root <svg> tag", 0)
    pos = len(SVG_OPEN_TOKEN)
    separator = _SPACE1_RE.match(source, pos)
    if separator is None:
        raise _parse_error(path, "expected whitespace after <svg", pos)
    pos = separator.end()

    attributes: list[Attribute] = []
    attribute = _parse_attribute(source, pos, path)
    if attribute is not None:
        key, value, pos = attribute
        attributes.append((key, value))
        while True:
            separator = _SPACE1_RE.match(source, pos)
            if separator is None:
                break
            attribute = _parse_attribute(source, separator.end(), path)
            if attribute is None:
                break
            key, value, pos = attribute
            attributes.append((key, value))

    pos = _SPACE_RE.match(source, pos).end()  # type: ignore[union-attr]
    if not source.startswith(">", pos):
        raise _parse_error(path, "expected '>' to close the opening <svg> tag", pos)
    content_start = pos + 1

    content_end = source.find(SVG_CLOSE_TOKEN, content_start)
    if content_end == -1:
        raise _parse_error(path, f"missing closing {SVG_CLOSE_TOKEN}", content_start)

    return ParsedSvg(attributes, source, content_start, content_end)


def _parse_attribute(source: str, pos: int, path: str) -> tuple[str, str, int] | None:
    """Parse one attribute starting at ``pos``.

    Args:
        source: Preprocessed file text.
        pos: Offset of the attribute key.
        path: File path used in error messages.

    Returns:
        ``(key, value, end)`` or None when no key starts at ``pos``. A bare
        boolean attribute takes its key as value.

    Raises:
        SvgParseError: If the value after ``=`` is unquoted or unterminated.
    """
    key_match = _KEY_RE.match(source, pos)
    if key_match is None:
        return None
    key = key_match.group()

    equals = _EQUALS_RE.match(source, key_match.end())
    if equals is None:
        return key, key, key_match.end()

    value_start = equals.end()
    quote = source[value_start : value_start + 1]
    if quote not in _QUOTES:
        raise _parse_error(path, f"expected quoted value for attribute '{key}'", value_start)
    value_end = source.find(quote, value_start + 1)
    if value_end == -1:
        raise _parse_error(path, f"unterminated quote in attribute '{key}'", value_start)
    return key, source[value_start + 1 : value_end], value_end + 1


def _parse_error(path: str, reason: str, offset: int) -> SvgParseError:
    return SvgParseError(
        f"failed to parse svg ({path}): {reason}",
        {"path": path, "reason": reason, "offset": offset},
    )
