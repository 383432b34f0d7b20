#!/usr/bin/env python3
"""CLI for recipe-lens: show the recipe embedded in a saved web page.

This module provides the command-line interface. It is responsible for:
- Argument parsing
- Recipe display (Rich UI)
- Error presentation
- Calling the extractor, recipe card and printable renderer

Example:
    $ recipe-lens pancakes.html --metric
    $ recipe-lens pancakes.html --url https://example.com/pancakes --print-html out.html
    $ curl -s https://example.com/pancakes | recipe-lens - --json
"""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from .card import RecipeCard
from .config import LensConfig
from .exceptions import PageReadError, RecipeLensError
from .extractor import RecipeExtractor
from .models import UnitSystem
from .page import default_page_url, read_page
from .printable import render_printable_html

NOT_FOUND_MESSAGE = "No recipe JSON-LD found on this page."

# Create global Rich console for styled output
console = Console()


def setup_logging(log_file: str | Path = "recipe_lens.log", level: int = logging.INFO) -> None:
    """Set up logging configuration for the application.

    Detailed logs go to a file only; console output is handled separately
    via Rich.

    Args:
        log_file: Path to the log file. Defaults to "recipe_lens.log".
        level: Logging level. Defaults to INFO.
    """
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        handlers=[logging.FileHandler(log_file, mode="w")],
    )


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments.

    Args:
        argv: Argument list; defaults to sys.argv[1:]

    Returns:
        Parsed command-line arguments.
    """
    parser = argparse.ArgumentParser(
        description="Extract the schema.org recipe embedded in a saved web page",
        prog="recipe-lens",
    )
    parser.add_argument("page", type=str, help="Path to a saved HTML page ('-' for stdin)")
    parser.add_argument(
        "--url",
        type=str,
        default=None,
        help="Address of the page, used when the recipe names no source "
        "(default: the file's file:// URI)",
    )
    parser.add_argument(
        "--metric", action="store_true", help="Show ingredients in metric units"
    )
    parser.add_argument(
        "--json", action="store_true", help="Print the extracted recipe as JSON"
    )
    parser.add_argument(
        "--print-html",
        type=str,
        default=None,
        metavar="PATH",
        help="Write a printable HTML page to PATH",
    )
    parser.add_argument(
        "--config", type=str, default=None, help="Path to a recipe-lens TOML config file"
    )
    return parser.parse_args(argv)


def display_recipe(card: RecipeCard) -> None:
    """Display a recipe card as Rich panels and tables."""
    document = card.document

    header_lines = [f"[bold cyan]{escape(document.name or 'Recipe')}[/bold cyan]"]
    if card.byline:
        header_lines.append(escape(card.byline))
    header_lines.append(f"[dim]{escape(card.site_link_text)}: {escape(document.site_url)}[/dim]")
    if document.image_url:
        header_lines.append(f"[dim]Image: {escape(document.image_url)}[/dim]")

    console.print()
    console.print(
        Panel.fit("\n".join(header_lines), title="[bold]Recipe Lens[/bold]", border_style="cyan")
    )

    ingredients_table = Table(
        title=f"[bold]Ingredients[/bold] ({card.unit_system.value})",
        show_header=False,
        box=None,
    )
    ingredients_table.add_column("Ingredient", style="green")
    for line in card.display_ingredients():
        ingredients_table.add_row(f"• {escape(line)}")
    console.print(ingredients_table)

    instructions_table = Table(title="[bold]Instructions[/bold]", show_header=False, box=None)
    instructions_table.add_column("Step", style="cyan", justify="right")
    instructions_table.add_column("Instruction")
    for number, step in enumerate(document.instructions, 1):
        instructions_table.add_row(f"{number}.", escape(step))
    console.print(instructions_table)
    console.print()


def display_not_found(page: str) -> None:
    """Display the "nothing found" panel."""
    console.print()
    console.print(
        Panel(
            f"{NOT_FOUND_MESSAGE}\n\n[dim]{escape(page)}[/dim]",
            title="[bold yellow]No Recipe[/bold yellow]",
            border_style="yellow",
        )
    )
    console.print()


def display_error(title: str, message: str) -> None:
    """Display an error panel."""
    console.print()
    console.print(
        Panel(
            message,
            title=f"[bold red]{title}[/bold red]",
            border_style="red",
        )
    )
    console.print()


def run(args: argparse.Namespace) -> int:
    """Extract and present the recipe for parsed arguments.

    Returns:
        Process exit code: 0 when a recipe was shown, 1 otherwise
    """
    config = LensConfig.load(args.config)
    if args.metric:
        config.update(unit_system=UnitSystem.METRIC.value)

    setup_logging(config.log_file, config.logging_level)

    if args.page != "-" and not Path(args.page).exists():
        raise PageReadError("File not found", path=args.page)

    blocks = read_page(args.page)
    page_url = args.url or default_page_url(args.page)
    document = RecipeExtractor(config).extract(blocks, page_url)

    if document is None:
        display_not_found(args.page)
        return 1

    card = RecipeCard(document, config.units)

    if args.json:
        payload = document.to_json_dict()
        payload["ingredients"] = card.current_ingredients()
        payload["unitSystem"] = card.unit_system.value
        console.print_json(json.dumps(payload, ensure_ascii=False))
    else:
        display_recipe(card)

    if args.print_html:
        output_path = Path(args.print_html)
        try:
            output_path.write_text(
                render_printable_html(document, card.current_ingredients()), encoding="utf-8"
            )
        except OSError as e:
            raise RecipeLensError(
                "Could not write printable page", path=str(output_path), error=str(e)
            ) from e
        logging.info(f"Wrote printable page: {output_path}")
        console.print(f"[green]✓[/green] Wrote printable page: [cyan]{output_path}[/cyan]")

    return 0


def main(argv: list[str] | None = None) -> int:
    """Entry point for the recipe-lens CLI command.

    Returns:
        Process exit code
    """
    args = parse_args(argv)
    try:
        return run(args)
    except RecipeLensError as e:
        display_error(
            "Error", f"[bold red]{escape(e.message)}[/bold red]\n\n[dim]{escape(str(e))}[/dim]"
        )
        return 1
    except Exception as e:  # Intentional catch-all for CLI entry point
        display_error(
            "Error",
            f"[bold red]An unexpected error occurred:[/bold red]\n\n"
            f"{escape(str(e))}\n\n"
            f"[dim]Check the log file for detailed error information.[/dim]",
        )
        logging.exception("Unexpected error during processing")
        raise


if __name__ == "__main__":
    raise SystemExit(main())
