"""US customary to metric conversion over free-text ingredient lines.

Conversion is table driven: ``CONVERSION_RULES`` is an ordered tuple of
``ConversionRule`` entries, each pairing a quantity+unit pattern with a
transform and a target unit. ``convert_to_metric`` applies every rule in
order, each one rewriting all of its matches in the output of the previous
rule. Text that no rule matches passes through untouched.

Results are rounded to whole numbers, so conversion is lossy: the original
lines must be kept by the caller to switch back to US units.

Example:
    >>> convert_to_metric("1 1/2 cups milk, warmed to 110°F")
    '360 ml milk, warmed to 43°C'
"""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

from .amounts import parse_amount
from .text import WHITESPACE, format_rounded

# Mixed number, decimal or integer; or a bare fraction
AMOUNT = r"(\d+(?:" + WHITESPACE + r"+\d+/\d+|\.\d+)?|\d+/\d+)"


class UnitCategory(Enum):
    """Physical quantity a conversion rule deals with."""

    VOLUME = "volume"
    MASS = "mass"
    TEMPERATURE = "temperature"


@dataclass(frozen=True)
class ConversionRule:
    """One quantity rewrite: pattern, category and transform.

    The pattern's first group must capture the quantity text; the whole match
    is replaced by the transformed, rounded value and the target unit.

    Attributes:
        name: Short label of the source unit
        pattern: Compiled, case-insensitive pattern for quantity + unit
        category: Kind of quantity being converted
        transform: Maps the source amount to the target amount
        unit: Target unit suffix
        separator: Text between the number and the unit suffix
    """

    name: str
    pattern: re.Pattern[str]
    category: UnitCategory
    transform: Callable[[float], float]
    unit: str
    separator: str = " "

    def render(self, amount: float) -> str:
        """Render a source amount as converted text, e.g. ``"240 ml"``."""
        return f"{format_rounded(self.transform(amount))}{self.separator}{self.unit}"

    def apply(self, line: str) -> str:
        """Rewrite every match of this rule in line."""
        return self.pattern.sub(lambda m: self.render(parse_amount(m.group(1))), line)


def _scale(factor: float) -> Callable[[float], float]:
    return lambda amount: amount * factor


def _fahrenheit_to_celsius(fahrenheit: float) -> float:
    return (fahrenheit - 32) * 5 / 9


def _rule(
    name: str,
    unit_pattern: str,
    category: UnitCategory,
    transform: Callable[[float], float],
    unit: str,
    *,
    amount: str = AMOUNT,
    separator: str = " ",
) -> ConversionRule:
    pattern = re.compile(amount + WHITESPACE + "*" + unit_pattern, re.IGNORECASE | re.ASCII)
    return ConversionRule(name, pattern, category, transform, unit, separator)


CONVERSION_RULES: tuple[ConversionRule, ...] = (
    _rule("cup", r"cups?", UnitCategory.VOLUME, _scale(240), "ml"),
    _rule("tablespoon", r"(?:tablespoons?|tbsp?s?|T)\b", UnitCategory.VOLUME, _scale(15), "ml"),
    _rule("teaspoon", r"(?:teaspoons?|tsps?|t)\b", UnitCategory.VOLUME, _scale(5), "ml"),
    _rule(
        "fluid ounce",
        rf"(?:fluid{WHITESPACE}*ounces?|fl\.?{WHITESPACE}*oz\.?)",
        UnitCategory.VOLUME,
        _scale(30),
        "ml",
    ),
    _rule(
        "ounce",
        rf"(?:ounces?|oz\.?)(?!{WHITESPACE}*fluid)",
        UnitCategory.MASS,
        _scale(28),
        "g",
    ),
    _rule("pound", r"(?:pounds?|lbs?\.?)", UnitCategory.MASS, _scale(454), "g"),
    _rule(
        "fahrenheit",
        r"°?F\b",
        UnitCategory.TEMPERATURE,
        _fahrenheit_to_celsius,
        "°C",
        amount=r"(\d+)",
        separator="",
    ),
)


def convert_to_metric(line: str, rules: tuple[ConversionRule, ...] = CONVERSION_RULES) -> str:
    """Convert US customary quantities in an ingredient line to metric.

    Volumes become millilitres, masses grams and Fahrenheit temperatures
    Celsius. Every rule runs, in order, over the cumulative output, so a line
    with several different units has all of them converted. This never fails:
    a line without a recognised unit is returned unchanged.

    Args:
        line: Ingredient line in US customary phrasing
        rules: Ordered conversion table (defaults to CONVERSION_RULES)

    Returns:
        The line with quantities rewritten as ``<rounded value> <unit>``

    Example:
        >>> convert_to_metric("2 tbsp sugar")
        '30 ml sugar'
    """
    converted = line
    for rule in rules:
        converted = rule.apply(converted)
    return converted
