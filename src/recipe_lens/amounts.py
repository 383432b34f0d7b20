"""Numeric-literal parsing for ingredient quantities.

Quantities in recipe text come in three shapes: plain decimals ("2.5"),
simple fractions ("3/4") and mixed numbers ("1 1/2"). All of them resolve to
a float.

The parser does not validate its input. A zero denominator gives ``inf``
(or ``nan`` for ``0/0``) and text without a leading number gives ``nan``;
both flow through the unit formulas unchanged. Callers only ever pass text
that a quantity pattern has already matched, so these cases are left as
documented undefined output rather than errors.
"""

from __future__ import annotations

import math
import re

from .text import WHITESPACE

MIXED_NUMBER_PATTERN = re.compile(r"^(\d+)" + WHITESPACE + r"+(\d+)/(\d+)$", re.ASCII)
FRACTION_PATTERN = re.compile(r"^(\d+)/(\d+)$", re.ASCII)
LEADING_DECIMAL_PATTERN = re.compile(r"^[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?", re.ASCII)


def _divide(numerator: float, denominator: float) -> float:
    # IEEE semantics: n/0 is inf and 0/0 is nan instead of ZeroDivisionError
    if denominator == 0:
        return math.nan if numerator == 0 else math.copysign(math.inf, numerator)
    return numerator / denominator


def parse_decimal(text: str) -> float:
    """Read the leading decimal literal of text.

    Trailing garbage is ignored ("12abc" reads as 12.0); text with no leading
    number reads as nan.
    """
    match = LEADING_DECIMAL_PATTERN.match(text.strip())
    if not match:
        return math.nan
    return float(match.group(0))


def parse_amount(text: str) -> float:
    """Parse a quantity that may be a decimal, fraction or mixed number.

    Args:
        text: Quantity text, e.g. "1/2", "1 1/2", "2.5" or "3"

    Returns:
        The quantity as a float (possibly inf or nan, see module docs)

    Example:
        >>> parse_amount("1 1/2"), parse_amount("3/4"), parse_amount("2.5")
        (1.5, 0.75, 2.5)
    """
    text = text.strip()

    mixed = MIXED_NUMBER_PATTERN.match(text)
    if mixed:
        whole, numerator, denominator = (float(part) for part in mixed.groups())
        return whole + _divide(numerator, denominator)

    fraction = FRACTION_PATTERN.match(text)
    if fraction:
        numerator, denominator = (float(part) for part in fraction.groups())
        return _divide(numerator, denominator)

    return parse_decimal(text)
