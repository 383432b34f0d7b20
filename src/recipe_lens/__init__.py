"""Recipe Lens - Extract schema.org recipes from web pages.

This package finds the Recipe described in a page's JSON-LD metadata,
normalizes it into a ``RecipeDocument`` and converts ingredient lines between
US customary and metric units.
"""

__version__ = "0.1.0"

from .amounts import parse_amount
from .card import RecipeCard
from .extractor import RecipeExtractor, extract_recipe
from .models import RecipeDocument, UnitSystem
from .text import escape_html, round_decimals_in_text
from .units import CONVERSION_RULES, ConversionRule, convert_to_metric

__all__ = [
    "CONVERSION_RULES",
    "ConversionRule",
    "RecipeCard",
    "RecipeDocument",
    "RecipeExtractor",
    "UnitSystem",
    "convert_to_metric",
    "escape_html",
    "extract_recipe",
    "parse_amount",
    "round_decimals_in_text",
]
