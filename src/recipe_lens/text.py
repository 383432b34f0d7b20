"""Shared text helpers: rounding and markup escaping.

These helpers are pure string functions used by the converter, the recipe
card and the printable page renderer.
"""

from __future__ import annotations

import math
import re
from decimal import ROUND_HALF_UP, Decimal
from typing import Any

# Any whitespace, including no-break and thin spaces; usable under re.ASCII
WHITESPACE = r"[\s\u00a0\u1680\u2000-\u200a\u2028\u2029\u202f\u205f\u3000\ufeff]"

# Decimal literals with three or more fractional digits, as whole words
LONG_DECIMAL_PATTERN = re.compile(r"\b(\d+\.\d{3,})\b", re.ASCII)

HTML_ESCAPES = {
    "&": "&amp;",
    "<": "&lt;",
    ">": "&gt;",
    '"': "&quot;",
    "'": "&#39;",
}

_HTML_ESCAPE_PATTERN = re.compile(r"[&<>\"']")


def round_half_away(value: float) -> int:
    """Round to the nearest integer, halves away from zero.

    Python's built-in ``round`` uses banker's rounding (``round(0.5) == 0``),
    which is not what a cook expects from "2.5 ml".

    Args:
        value: Finite number to round

    Returns:
        Nearest integer, with .5 rounded away from zero

    Raises:
        ValueError: If value is nan
        OverflowError: If value is infinite

    Example:
        >>> round_half_away(2.5), round_half_away(-2.5), round_half_away(176.67)
        (3, -3, 177)
    """
    magnitude = math.floor(abs(value) + 0.5)
    return -magnitude if value < 0 else magnitude


def format_rounded(value: float) -> str:
    """Format a number as a rounded integer for display.

    Non-finite values are rendered as ``Infinity``, ``-Infinity`` or ``NaN``
    instead of raising, so that callers on the conversion path stay total.
    """
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "-Infinity" if value < 0 else "Infinity"
    return str(round_half_away(value))


def _round_literal(match: re.Match[str]) -> str:
    literal = Decimal(match.group(1))
    return str(literal.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


def round_decimals_in_text(text: str) -> str:
    """Round long decimals in text to two decimal places.

    Only literals with three or more fractional digits are touched; integers
    and decimals with one or two fractional digits are left exactly as they
    are. Rounding is half-up on the literal's decimal value.

    Args:
        text: Ingredient or other display text

    Returns:
        Text with long decimals rewritten

    Example:
        >>> round_decimals_in_text("1.333333 cups flour")
        '1.33 cups flour'
    """
    return LONG_DECIMAL_PATTERN.sub(_round_literal, text)


def escape_html(value: Any) -> str:
    """Escape the five markup-significant characters ``& < > " '``.

    Args:
        value: Value to escape; non-strings are converted with ``str()``

    Returns:
        Escaped string safe for element content and quoted attributes
    """
    return _HTML_ESCAPE_PATTERN.sub(lambda m: HTML_ESCAPES[m.group(0)], str(value))
