"""Markdown to HTML rendering."""

from __future__ import annotations

import logging
from typing import Callable

from markdown_it import MarkdownIt

LOGGER = logging.getLogger(__name__)

Renderer = Callable[[str], str]


class MarkdownRenderer:
    """Render Markdown bodies into HTML content strings."""

    def __init__(self, *, html: bool = False) -> None:
        self.html = html
        self._md = MarkdownIt("commonmark", {"html": html})

    def render(self, body: str) -> str:
        """Render ``body``; input the parser cannot handle comes back unchanged."""
        try:
            return self._md.render(body)
        except Exception as exc:  # pragma: no cover - defensive
            LOGGER.warning("Markdown rendering failed, using raw body: %s", exc)
            return body

    def __call__(self, body: str) -> str:
        return self.render(body)
