"""Recipe card state: an extracted recipe plus the unit system it is shown in.

The card never replaces the original ingredient lines. Metric lines are
derived from the originals on demand, so switching back to US units always
restores the source text exactly instead of converting metric back.
"""

from __future__ import annotations

import logging

from .models import RecipeDocument, UnitSystem
from .text import round_decimals_in_text
from .units import convert_to_metric

logger = logging.getLogger(__name__)

TOGGLE_LABELS = {
    UnitSystem.US: "Convert to Metric",
    UnitSystem.METRIC: "Convert to US",
}

DEFAULT_SITE_LINK_TEXT = "View Original Recipe"


class RecipeCard:
    """Display state for one extracted recipe.

    Attributes:
        document: The extracted recipe (immutable)
        unit_system: Unit system ingredients are currently shown in

    Example:
        >>> card = RecipeCard(document)
        >>> card.toggle_units()
        <UnitSystem.METRIC: 'Metric'>
        >>> card.current_ingredients()
        ['240 ml milk']
    """

    def __init__(
        self, document: RecipeDocument, unit_system: UnitSystem = UnitSystem.US
    ) -> None:
        self.document = document
        self.unit_system = UnitSystem(unit_system)

    @property
    def original_ingredients(self) -> list[str]:
        """The ingredient lines exactly as extracted."""
        return list(self.document.ingredients)

    def current_ingredients(self) -> list[str]:
        """Ingredient lines in the current unit system, e.g. for printing."""
        if self.unit_system is UnitSystem.US:
            return self.original_ingredients
        return [convert_to_metric(line) for line in self.document.ingredients]

    def display_ingredients(self) -> list[str]:
        """Ingredient lines for on-screen display.

        US lines get their long decimals rounded to two places; metric lines
        are already whole numbers from the converter.
        """
        if self.unit_system is UnitSystem.US:
            return [round_decimals_in_text(line) for line in self.document.ingredients]
        return self.current_ingredients()

    def toggle_units(self) -> UnitSystem:
        """Switch between US and metric and return the new unit system."""
        if self.unit_system is UnitSystem.US:
            self.unit_system = UnitSystem.METRIC
        else:
            self.unit_system = UnitSystem.US
        logger.debug(f"Unit system is now {self.unit_system.value}")
        return self.unit_system

    @property
    def toggle_label(self) -> str:
        """Label for the control that switches unit systems."""
        return TOGGLE_LABELS[self.unit_system]

    @property
    def byline(self) -> str:
        """Author line, e.g. "By Jane Doe", or "" without an author."""
        return f"By {self.document.author}" if self.document.author else ""

    @property
    def site_link_text(self) -> str:
        """Text for the source link: the publisher, or a generic label."""
        return self.document.publisher or DEFAULT_SITE_LINK_TEXT
