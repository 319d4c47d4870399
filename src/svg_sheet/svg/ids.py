"""Identifier rewriting and reference detection for inner SVG content.

Content is scanned textually; it is never parsed as markup. Every standalone
``id="..."`` attribute becomes ``data-id="..."`` so ids from different files
cannot clash once merged into one document.
"""

from svg_sheet.constants import DATA_ID_ATTRIBUTE, FALLBACK_ID, FIRST_DUPLICATE_SUFFIX
from svg_sheet.svg.sanitize import sanitize_id

ID_TOKEN = "id="
_QUOTES = ("'", '"')


def is_name_char(ch: str) -> bool:
    """Return whether a character can be part of an attribute name."""
    return (ch.isascii() and ch.isalnum()) or ch in "-_:"


def references_id(content: str, id_value: str) -> bool:
    """Detect whether content refers to an id.

    Only the literal forms ``href="#id"``, ``xlink:href="#id"`` (either quote
    style) and ``url(#id)`` are recognized. Quoted ``url("#id")`` is not.

    Args:
        content: Inner SVG markup.
        id_value: The id to look for, matched literally.

    Returns:
        True if any reference form is present.
    """
    patterns = (
        f'href="#{id_value}"',
        f'xlink:href="#{id_value}"',
        f"href='#{id_value}'",
        f"xlink:href='#{id_value}'",
        f"url(#{id_value})",
    )
    return any(pattern in content for pattern in patterns)


class _IdAllocator:
    """Hands out ids unique within one file, in first-seen order."""

    def __init__(self) -> None:
        self._seen: set[str] = set()
        self._next_suffix: dict[str, int] = {}

    def allocate(self, base: str) -> str:
        if base not in self._seen:
            self._seen.add(base)
            return base
        suffix = self._next_suffix.get(base, FIRST_DUPLICATE_SUFFIX)
        candidate = f"{base}-{suffix}"
        while candidate in self._seen:
            suffix += 1
            candidate = f"{base}-{suffix}"
        self._next_suffix[base] = suffix + 1
        self._seen.add(candidate)
        return candidate


def rewrite_ids_to_data_ids(content: str) -> tuple[str, list[str]]:
    """Rewrite standalone id attributes to data-id.

    An occurrence is standalone when the character before ``id=`` is not a
    name character, so ``data-id`` and ``xlink:id`` are left alone. Values are
    sanitized; an empty result becomes the fallback id. Repeated values within
    the content get ``-2``, ``-3``, ... suffixes. If a quote is never closed,
    the rest of the content is copied unchanged.

    Args:
        content: Inner SVG markup of one file.

    Returns:
        The rewritten content and the data-id values emitted, in order.

    Example:
        >>> rewrite_ids_to_data_ids('<g id="a"/><g id="a"/>')
        ('<g data-id="a"/><g data-id="a-2"/>', ['a', 'a-2'])
    """
    allocator = _IdAllocator()
    pieces: list[str] = []
    emitted: list[str] = []
    copied = 0
    pos = 0

    while True:
        start = content.find(ID_TOKEN, pos)
        if start == -1:
            break
        if start > 0 and is_name_char(content[start - 1]):
            pos = start + 1
            continue

        value_start = start + len(ID_TOKEN)
        quote = content[value_start : value_start + 1]
        if quote not in _QUOTES:
            pos = value_start
            continue
        value_end = content.find(quote, value_start + 1)
        if value_end == -1:
            break

        final = allocator.allocate(sanitize_id(content[value_start + 1 : value_end]) or FALLBACK_ID)
        emitted.append(final)
        pieces.append(content[copied:start])
        pieces.append(f"{DATA_ID_ATTRIBUTE}={quote}{final}{quote}")
        copied = pos = value_end + 1

    pieces.append(content[copied:])
    return "".join(pieces), emitted
