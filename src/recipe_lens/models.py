"""Data models for extracted recipes.

``RecipeDocument`` is the normalized projection of a schema.org Recipe found
in a page's JSON-LD. It is frozen: built once per extraction and never
modified. Field names are snake_case in Python and camelCase on the wire
(``imageUrl``, ``siteUrl``) to match the embedding convention.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator


class UnitSystem(str, Enum):
    """Unit system in which ingredient lines are shown."""

    US = "US"
    METRIC = "Metric"


class RecipeDocument(BaseModel):
    """A recipe extracted from structured data on a web page."""

    name: str = Field(default="", description="Recipe title, possibly empty")
    ingredients: list[str] = Field(
        default_factory=list,
        description="Raw ingredient lines in source order",
        examples=[["1 cup milk", "2 tbsp sugar"]],
    )
    instructions: list[str] = Field(
        default_factory=list,
        description="Instruction steps in source order; never contains empty strings",
        examples=[["Preheat oven to 350°F.", "Mix"]],
    )
    image_url: str = Field(default="", alias="imageUrl")
    author: str = ""
    publisher: str = ""
    site_url: str = Field(
        ...,
        alias="siteUrl",
        min_length=1,
        description="Canonical source address; falls back to the page address",
    )

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)

    @field_validator("instructions")
    @classmethod
    def _no_empty_steps(cls, steps: list[str]) -> list[str]:
        if any(not step for step in steps):
            raise ValueError("instructions must not contain empty steps")
        return steps

    def to_json_dict(self) -> dict[str, object]:
        """Return the document keyed by its camelCase wire names."""
        return self.model_dump(by_alias=True)
