"""Collect JSON-LD blocks from saved HTML pages.

Only ``<script type="application/ld+json">`` elements are looked at; the rest
of the markup is never interpreted.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

from bs4 import BeautifulSoup

from .exceptions import PageReadError

logger = logging.getLogger(__name__)

JSON_LD_MIME_TYPE = "application/ld+json"

STDIN_PATH = "-"


def collect_json_ld_blocks(html: str) -> list[str]:
    """Return the raw text of every JSON-LD script in document order.

    Args:
        html: HTML document text

    Returns:
        Raw script payloads, verbatim; empty scripts are left out
    """
    soup = BeautifulSoup(html, "html.parser")
    blocks: list[str] = []
    for script in soup.find_all("script"):
        script_type = str(script.get("type") or "").split(";")[0].strip().lower()
        if script_type != JSON_LD_MIME_TYPE:
            continue
        text = script.string or script.get_text()
        if text and text.strip():
            blocks.append(text)

    logger.debug(f"Found {len(blocks)} JSON-LD blocks")
    return blocks


def read_html(path: str | Path) -> str:
    """Read an HTML document from a file path, or from stdin for ``-``.

    Raises:
        PageReadError: If the page cannot be read or decoded
    """
    if str(path) == STDIN_PATH:
        return sys.stdin.read()
    try:
        return Path(path).read_text(encoding="utf-8", errors="replace")
    except OSError as e:
        raise PageReadError("Could not read page", path=str(path), error=str(e)) from e


def read_page(path: str | Path) -> list[str]:
    """Read an HTML page and collect its JSON-LD blocks.

    Args:
        path: Path to a saved HTML page, or ``-`` for stdin

    Returns:
        Raw JSON-LD payloads in document order

    Raises:
        PageReadError: If the page cannot be read
    """
    logger.info(f"Reading page: {path}")
    return collect_json_ld_blocks(read_html(path))


def default_page_url(path: str | Path) -> str:
    """Address used as the site URL fallback for a local page."""
    if str(path) == STDIN_PATH:
        return "about:blank"
    return Path(path).resolve().as_uri()
