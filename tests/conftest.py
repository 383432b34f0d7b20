"""Pytest configuration and fixtures for recipe_lens tests.

This module provides shared fixtures for testing the recipe_lens package:
- JSON-LD payloads in the shapes recipe sites actually publish
- HTML pages written to tmp_path
- Environment cleanup via monkeypatch
"""

import json
import sys
from pathlib import Path
from typing import Any

import pytest

# Add src directory to Python path for imports
src_path = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_path))


PAGE_URL = "https://example.com/recipes/pancakes"


# ============================================================================
# Configuration Fixtures
# ============================================================================


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Remove RECIPE_LENS_* variables and keep log files out of the repo."""
    import os

    for key in list(os.environ.keys()):
        if key.startswith("RECIPE_LENS_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def mock_env(monkeypatch: pytest.MonkeyPatch) -> dict[str, str]:
    """Provide a helper to set RECIPE_LENS_* environment variables.

    Example:
        def test_env_loading(mock_env):
            mock_env["UNIT_SYSTEM"] = "Metric"
            # RECIPE_LENS_UNIT_SYSTEM is now set
    """

    class EnvSetter(dict[str, str]):
        def __setitem__(self, key: str, value: str) -> None:
            super().__setitem__(key, value)
            monkeypatch.setenv(f"RECIPE_LENS_{key}", value)

    return EnvSetter()


# ============================================================================
# JSON-LD Fixtures
# ============================================================================


@pytest.fixture
def page_url() -> str:
    """Address of the page the blocks came from."""
    return PAGE_URL


@pytest.fixture
def minimal_recipe() -> dict[str, Any]:
    """The smallest useful Recipe entity."""
    return {
        "@type": "Recipe",
        "name": "X",
        "recipeIngredient": ["1 cup milk"],
        "recipeInstructions": [{"text": "Mix"}],
    }


@pytest.fixture
def full_recipe() -> dict[str, Any]:
    """A Recipe entity with every supported property populated."""
    return {
        "@context": "https://schema.org",
        "@type": "Recipe",
        "name": "Buttermilk Pancakes",
        "image": [
            {"@type": "ImageObject", "url": "https://example.com/img/pancakes.jpg"},
            "https://example.com/img/other.jpg",
        ],
        "author": [{"@type": "Person", "name": "Jane Doe"}, {"@type": "Person", "name": "Sam"}],
        "publisher": {
            "@type": "Organization",
            "name": "Example Kitchen",
            "url": "https://example.com",
        },
        "mainEntityOfPage": {"@type": "WebPage", "@id": "https://example.com/pancakes"},
        "recipeIngredient": [
            "1 1/2 cups buttermilk",
            "2 tbsp sugar",
            "1.333333 tsp baking powder",
        ],
        "recipeInstructions": [
            {"@type": "HowToStep", "text": "Whisk the dry ingredients."},
            "Add the buttermilk.",
            {"@type": "HowToStep", "name": "Cook on a hot griddle."},
            {"@type": "HowToStep"},
            "",
        ],
    }


@pytest.fixture
def as_block():
    """Serialize a payload into a raw JSON-LD block string."""

    def _as_block(payload: Any) -> str:
        return json.dumps(payload)

    return _as_block


@pytest.fixture
def recipe_document(full_recipe: dict[str, Any], as_block, page_url: str):
    """A RecipeDocument extracted from the full recipe fixture."""
    from recipe_lens.extractor import extract_recipe

    return extract_recipe([as_block(full_recipe)], page_url)


# ============================================================================
# HTML Page Fixtures
# ============================================================================


@pytest.fixture
def html_page(tmp_path: Path, full_recipe: dict[str, Any]) -> Path:
    """Write an HTML page with a breadcrumb block and a recipe block."""
    breadcrumb = {"@type": "BreadcrumbList", "itemListElement": []}
    html = f"""<!doctype html>
<html>
  <head>
    <title>Pancakes</title>
    <script type="text/javascript">var x = {{"@type": "Recipe"}};</script>
    <script type="application/ld+json">{json.dumps(breadcrumb)}</script>
    <script type="application/ld+json">
      {json.dumps(full_recipe)}
    </script>
  </head>
  <body><h1>Pancakes</h1></body>
</html>
"""
    path = tmp_path / "pancakes.html"
    path.write_text(html, encoding="utf-8")
    return path


@pytest.fixture
def empty_page(tmp_path: Path) -> Path:
    """Write an HTML page without any JSON-LD."""
    path = tmp_path / "empty.html"
    path.write_text("<html><body><p>No recipe here</p></body></html>", encoding="utf-8")
    return path
