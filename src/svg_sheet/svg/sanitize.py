"""Identifier sanitization.

Valid identifiers match ``[A-Za-z_][A-Za-z0-9._-]*`` and never contain ``--``.
"""


def is_valid_id_start(ch: str) -> bool:
    """Return whether a character may start an identifier."""
    return ch == "_" or ("a" <= ch <= "z") or ("A" <= ch <= "Z")


def is_valid_id_continue(ch: str) -> bool:
    """Return whether a character may follow the first identifier character."""
    return is_valid_id_start(ch) or ("0" <= ch <= "9") or ch in ".-"


def sanitize_id(raw: str) -> str:
    """Map an arbitrary string to a valid identifier.

    Leading characters are dropped up to the first valid start character, each
    run of invalid characters after that becomes a single ``-``, and dashes are
    trimmed from both ends and collapsed.

    Args:
        raw: The original id value.

    Returns:
        The sanitized identifier. May be empty, e.g. for ``"123"``.

    Example:
        >>> sanitize_id("data icon@1.5x")
        'data-icon-1.5x'
    """
    start = 0
    while start < len(raw) and not is_valid_id_start(raw[start]):
        start += 1

    chars: list[str] = []
    in_invalid_run = False
    for ch in raw[start:]:
        if is_valid_id_continue(ch):
            chars.append(ch)
            in_invalid_run = False
        elif not in_invalid_run:
            chars.append("-")
            in_invalid_run = True

    out = "".join(chars).strip("-")
    while "--" in out:
        out = out.replace("--", "-")
    return out
