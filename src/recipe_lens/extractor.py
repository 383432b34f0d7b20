"""Recipe extraction from JSON-LD structured data.

Recipe sites describe their recipes with schema.org metadata embedded in
``<script type="application/ld+json">`` blocks. The same property can take
several legal shapes (a string, an object, or a list of either), so each
``RecipeDocument`` field has its own resolver that enumerates the shapes it
accepts.

Extraction is a single ordered search: blocks in page order, entities in
array order (followed, optionally, by their ``@graph`` members). The first
Recipe-typed entity is projected and the search stops. Undecodable blocks
are skipped; a page with no Recipe yields ``None``.

Example:
    >>> block = '{"@type": "Recipe", "name": "Pancakes", "recipeIngredient": ["1 cup milk"]}'
    >>> doc = extract_recipe([block], "https://example.com/pancakes")
    >>> doc.name, doc.ingredients, doc.site_url
    ('Pancakes', ['1 cup milk'], 'https://example.com/pancakes')
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Iterator
from enum import Enum
from typing import Any

from .config import LensConfig
from .exceptions import ExtractionError
from .models import RecipeDocument

logger = logging.getLogger(__name__)

RECIPE_TYPE = "Recipe"


class FieldShape(Enum):
    """Shape of a JSON-LD property value."""

    TEXT = "text"
    LIST = "list"
    OBJECT = "object"
    OTHER = "other"  # null, numbers, booleans


def shape_of(value: Any) -> FieldShape:
    """Classify a decoded JSON value by shape."""
    if isinstance(value, str):
        return FieldShape.TEXT
    if isinstance(value, list):
        return FieldShape.LIST
    if isinstance(value, dict):
        return FieldShape.OBJECT
    return FieldShape.OTHER


def _text_field(entity: dict[str, Any], *keys: str) -> str:
    """Return the first non-empty string among entity[key] for keys."""
    for key in keys:
        value = entity.get(key)
        if isinstance(value, str) and value:
            return value
    return ""


def _is_set(value: Any) -> bool:
    """Whether a property counts as present.

    Objects and lists are present even when empty; scalars are present when
    truthy (null, false, 0, NaN and "" are absent).
    """
    if isinstance(value, (dict, list)):
        return True
    return bool(value) and value == value


# ============================================================================
# Block decoding and entity search
# ============================================================================


def decode_block(block: str) -> list[Any]:
    """Decode one raw JSON-LD block into its list of entities.

    Args:
        block: Raw script text taken from the page

    Returns:
        The decoded entities in order; an empty list if the block is not
        valid JSON
    """
    try:
        payload = json.loads(block.strip())
    except (json.JSONDecodeError, TypeError, AttributeError) as e:
        logger.debug(f"Skipping undecodable JSON-LD block: {e}")
        return []

    if isinstance(payload, list):
        return payload
    return [payload]


def iter_entities(raw_blocks: Iterable[str], follow_graph: bool = True) -> Iterator[Any]:
    """Yield every entity on the page in search order.

    Blocks are visited in order and entities in array order. With
    ``follow_graph`` the ``@graph`` members of a block are yielded after all
    of that block's top-level entities, so a top-level recipe always wins
    over one nested in the same block.

    Args:
        raw_blocks: Raw JSON-LD blocks in page order
        follow_graph: Whether to descend into ``@graph`` lists

    Yields:
        Decoded entities (of any JSON type) in search order
    """
    for index, block in enumerate(raw_blocks):
        entities = decode_block(block)
        logger.debug(f"Block {index}: {len(entities)} entities")
        yield from entities
        if not follow_graph:
            continue
        for entity in entities:
            graph = entity.get("@graph") if isinstance(entity, dict) else None
            if isinstance(graph, list):
                yield from graph


def is_recipe_entity(entity: Any, recipe_type: str = RECIPE_TYPE) -> bool:
    """Check whether an entity's @type marks it as a recipe.

    The type may be a single string or a list of strings; only an exact
    match counts ("RecipeCollection" is not a recipe).
    """
    if not isinstance(entity, dict):
        return False
    entity_type = entity.get("@type")
    if isinstance(entity_type, str):
        return entity_type == recipe_type
    if isinstance(entity_type, list):
        return recipe_type in entity_type
    return False


def find_recipe_entity(
    raw_blocks: Iterable[str],
    recipe_type: str = RECIPE_TYPE,
    follow_graph: bool = True,
) -> dict[str, Any] | None:
    """Return the first recipe entity on the page, or None."""
    return next(
        (e for e in iter_entities(raw_blocks, follow_graph) if is_recipe_entity(e, recipe_type)),
        None,
    )


# ============================================================================
# Field resolvers
# ============================================================================


def resolve_name(value: Any) -> str:
    """Resolve the ``name`` property."""
    return value if shape_of(value) is FieldShape.TEXT else ""


def resolve_ingredients(value: Any) -> list[str]:
    """Resolve ``recipeIngredient``: the string lines of a list, in order."""
    if shape_of(value) is not FieldShape.LIST:
        return []
    return [line for line in value if isinstance(line, str)]


def resolve_instruction(step: Any) -> str:
    """Resolve one instruction step to text ("" if it has none).

    A step is either plain text or a HowToStep-like object, whose ``text``
    is preferred over its ``name``.
    """
    shape = shape_of(step)
    if shape is FieldShape.TEXT:
        return step
    if shape is FieldShape.OBJECT:
        return _text_field(step, "text", "name")
    return ""


def resolve_instructions(value: Any) -> list[str]:
    """Resolve ``recipeInstructions`` to non-empty steps in source order."""
    if value is None:
        return []
    steps = value if shape_of(value) is FieldShape.LIST else [value]
    resolved = (resolve_instruction(step) for step in steps)
    return [text for text in resolved if text]


def _resolve_single_image(value: Any) -> str:
    shape = shape_of(value)
    if shape is FieldShape.TEXT:
        return value
    if shape is FieldShape.OBJECT:
        return _text_field(value, "url", "contentUrl")
    return ""


def resolve_image_url(value: Any) -> str:
    """Resolve ``image``: a URL string, an ImageObject, or a list of either.

    For a list only the first element is considered.
    """
    if shape_of(value) is FieldShape.LIST:
        return _resolve_single_image(value[0]) if value else ""
    return _resolve_single_image(value)


def resolve_author(value: Any) -> str:
    """Resolve ``author``: a name, a Person object, or a list (first wins)."""
    shape = shape_of(value)
    if shape is FieldShape.LIST:
        return resolve_author(value[0]) if value else ""
    if shape is FieldShape.TEXT:
        return value
    if shape is FieldShape.OBJECT:
        return _text_field(value, "name")
    return ""


def resolve_publisher(value: Any) -> tuple[str, str]:
    """Resolve ``publisher`` to ``(publisher_name, site_url_candidate)``.

    A plain string names the publisher but contributes no URL; an
    Organization object contributes both its name and its url.
    """
    shape = shape_of(value)
    if shape is FieldShape.LIST:
        return resolve_publisher(value[0]) if value else ("", "")
    if shape is FieldShape.TEXT:
        return value, ""
    if shape is FieldShape.OBJECT:
        return _text_field(value, "name"), _text_field(value, "url")
    return "", ""


def resolve_main_entity_of_page(value: Any) -> str:
    """Resolve ``mainEntityOfPage``: a URL string or a WebPage's ``@id``."""
    shape = shape_of(value)
    if shape is FieldShape.TEXT:
        return value
    if shape is FieldShape.OBJECT:
        return _text_field(value, "@id")
    return ""


def resolve_site_url(entity: dict[str, Any], publisher_url: str, page_url: str) -> str:
    """Pick the canonical source address for a recipe entity.

    Precedence: publisher url, mainEntityOfPage, the entity's own url, and
    finally the page address, so the result is never empty. The entity's url
    is only consulted when mainEntityOfPage is absent; a mainEntityOfPage
    without an address goes straight to the page address.
    """
    main_entity = entity.get("mainEntityOfPage")
    if _is_set(main_entity):
        entity_url = resolve_main_entity_of_page(main_entity)
    else:
        entity_url = resolve_name(entity.get("url"))
    return next(url for url in (publisher_url, entity_url, page_url) if url)


def project_recipe(entity: dict[str, Any], page_url: str) -> RecipeDocument:
    """Project a recipe entity into a RecipeDocument.

    Args:
        entity: Decoded Recipe-typed JSON-LD object
        page_url: Address of the page, used as the last site URL fallback

    Returns:
        The normalized recipe document
    """
    publisher, publisher_url = resolve_publisher(entity.get("publisher"))
    return RecipeDocument(
        name=resolve_name(entity.get("name")),
        ingredients=resolve_ingredients(entity.get("recipeIngredient")),
        instructions=resolve_instructions(entity.get("recipeInstructions")),
        image_url=resolve_image_url(entity.get("image")),
        author=resolve_author(entity.get("author")),
        publisher=publisher,
        site_url=resolve_site_url(entity, publisher_url, page_url),
    )


# ============================================================================
# Public API
# ============================================================================


def extract_recipe(
    raw_blocks: Iterable[str],
    page_url: str,
    *,
    recipe_type: str = RECIPE_TYPE,
    follow_graph: bool = True,
) -> RecipeDocument | None:
    """Extract the first recipe found in a page's JSON-LD blocks.

    Args:
        raw_blocks: Raw JSON-LD script texts in page order
        page_url: Address of the page (site URL fallback); must not be empty
        recipe_type: The @type value that marks a recipe
        follow_graph: Whether to search ``@graph`` members too

    Returns:
        The extracted document, or None when the page has no recipe

    Raises:
        ExtractionError: If page_url is empty
    """
    if not page_url:
        raise ExtractionError("page_url must be a non-empty string", page_url=page_url)

    entity = find_recipe_entity(raw_blocks, recipe_type, follow_graph)
    if entity is None:
        logger.info(f"No {recipe_type} entity found on {page_url}")
        return None

    document = project_recipe(entity, page_url)
    logger.info(
        f"Extracted recipe {document.name!r}: {len(document.ingredients)} ingredients, "
        f"{len(document.instructions)} instructions"
    )
    return document


class RecipeExtractor:
    """Configured recipe extractor.

    Example:
        >>> extractor = RecipeExtractor(LensConfig(follow_graph=False))
        >>> document = extractor.extract(blocks, "https://example.com/stew")
    """

    def __init__(self, config: LensConfig | None = None) -> None:
        """Initialize the extractor.

        Args:
            config: Configuration; defaults to LensConfig()
        """
        self.config = config or LensConfig()

    def extract(self, raw_blocks: Iterable[str], page_url: str) -> RecipeDocument | None:
        """Extract the first recipe using the configured recipe type."""
        return extract_recipe(
            raw_blocks,
            page_url,
            recipe_type=self.config.recipe_type,
            follow_graph=self.config.follow_graph,
        )
