"""Normalization of root width, height, and viewBox values.

Each function returns the canonical string form of a value, or None when the
value is not supported. Canonical output is stable under re-normalization.
"""

import math
from decimal import Decimal

UNSUPPORTED_UNITS = ("%", "em", "rem")
PX_SUFFIX = "px"
VIEWBOX_PARTS = 4


def _parse_number(token: str) -> float | None:
    """Parse a plain ASCII decimal number, rejecting Python-only literal forms."""
    if "_" in token or not token.isascii():
        return None
    try:
        return float(token)
    except ValueError:
        return None


def normalize_number(value: float) -> str:
    """Render a finite number in canonical form.

    Integral values drop the decimal point; others use the shortest decimal
    representation without an exponent.

    Args:
        value: A finite number.

    Returns:
        The canonical string.
    """
    if value.is_integer():
        return f"{value:.0f}"
    return format(Decimal(repr(value)), "f")


def normalize_length(value: str) -> str | None:
    """Normalize a width or height value.

    Accepts a positive number with an optional ``px`` suffix and surrounding
    whitespace. Percentages, ``em`` and ``rem`` are rejected.

    Args:
        value: The raw attribute value.

    Returns:
        The canonical number, e.g. ``"24"`` for ``"24.0px"``, or None.
    """
    number = value.strip()
    if number.endswith(PX_SUFFIX):
        number = number[: -len(PX_SUFFIX)].strip()
    if number.endswith(UNSUPPORTED_UNITS):
        return None

    parsed = _parse_number(number)
    if parsed is None or not math.isfinite(parsed) or parsed <= 0:
        return None
    return normalize_number(parsed)


def normalize_viewbox(value: str) -> str | None:
    """Normalize a viewBox value.

    Commas and whitespace are both accepted as separators. Exactly four finite
    numbers are required and the width and height must be positive.

    Args:
        value: The raw attribute value.

    Returns:
        Four canonical numbers joined by single spaces, or None.
    """
    parts = value.replace(",", " ").split()
    if len(parts) != VIEWBOX_PARTS:
        return None

    numbers: list[float] = []
    for part in parts:
        number = _parse_number(part)
        if number is None or not math.isfinite(number):
            return None
        numbers.append(number)

    _, _, width, height = numbers
    if width <= 0 or height <= 0:
        return None

    return " ".join(normalize_number(n) for n in numbers)
