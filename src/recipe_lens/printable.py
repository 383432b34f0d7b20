"""Printable HTML rendering of a recipe.

Produces a standalone page with the title, attribution, image, ingredients
and instructions. Every interpolated value is passed through ``escape_html``;
recipe text comes from arbitrary third-party pages.
"""

from __future__ import annotations

from .models import RecipeDocument
from .text import escape_html

DEFAULT_TITLE = "Recipe"

PRINT_STYLES = """
      body {
        font-family: system-ui, -apple-system, BlinkMacSystemFont, "Segoe UI", sans-serif;
        margin: 24px;
        line-height: 1.4;
      }
      h1 { font-size: 24px; margin-top: 0; margin-bottom: 8px; }
      .recipe-meta { font-size: 14px; color: #666; margin-bottom: 8px; }
      .recipe-meta a { color: #0066cc; text-decoration: none; }
      img { max-width: 200px; height: auto; display: block; margin-bottom: 16px; border-radius: 4px; }
      h2 { font-size: 18px; margin-top: 20px; margin-bottom: 8px; }
      ul, ol { margin-left: 22px; }"""


def _list_items(lines: list[str]) -> str:
    return "".join(f"<li>{escape_html(line)}</li>" for line in lines)


def _source_line(document: RecipeDocument) -> str:
    link_text = document.publisher or "View Original"
    return (
        '<div class="recipe-meta">Source: '
        f'<a href="{escape_html(document.site_url)}" target="_blank">'
        f"{escape_html(link_text)}</a></div>"
    )


def render_printable_html(
    document: RecipeDocument, ingredients: list[str] | None = None
) -> str:
    """Render a recipe as a printable HTML page.

    Args:
        document: The recipe to render
        ingredients: Ingredient lines to show (e.g. a card's metric lines);
            defaults to the document's own lines

    Returns:
        A complete HTML5 document
    """
    if ingredients is None:
        ingredients = document.ingredients

    title = escape_html(document.name or DEFAULT_TITLE)
    byline = (
        f'<div class="recipe-meta">By {escape_html(document.author)}</div>'
        if document.author
        else ""
    )
    image = f'<img src="{escape_html(document.image_url)}" alt="">' if document.image_url else ""

    return f"""<!doctype html>
<html>
  <head>
    <meta charset="utf-8" />
    <title>{title}</title>
    <style>{PRINT_STYLES}
    </style>
  </head>
  <body>
    <h1>{title}</h1>
    {byline}
    {_source_line(document)}
    {image}
    <h2>Ingredients</h2>
    <ul>{_list_items(ingredients)}</ul>
    <h2>Instructions</h2>
    <ol>{_list_items(document.instructions)}</ol>
  </body>
</html>
"""
