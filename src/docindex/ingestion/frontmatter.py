"""YAML front-matter extraction.

A front-matter block is a YAML mapping fenced by ``---`` lines at the very
top of a document. Everything after the closing fence is the body.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Tuple

import yaml

LOGGER = logging.getLogger(__name__)

FENCE = "---"
BOM = "\ufeff"


class FrontMatterError(ValueError):
    """The front-matter block exists but cannot be parsed as a YAML mapping."""


def split_front_matter(raw: str) -> Tuple[Dict[str, Any], str]:
    """Split ``raw`` into metadata and body, raising on a malformed block."""
    raw = raw.removeprefix(BOM)
    lines = raw.splitlines(keepends=True)
    if not lines or lines[0].strip() != FENCE:
        return {}, raw

    for idx in range(1, len(lines)):
        if lines[idx].strip() == FENCE:
            header = "".join(lines[1:idx])
            body = "".join(lines[idx + 1 :])
            try:
                data = yaml.safe_load(header)
            except yaml.YAMLError as exc:
                raise FrontMatterError(f"Invalid YAML front matter: {exc}") from exc
            if data is None:
                return {}, body
            if not isinstance(data, dict):
                raise FrontMatterError(
                    f"Front matter must be a mapping, got {type(data).__name__}"
                )
            return data, body

    # Opening fence without a closing one is plain content
    return {}, raw


def extract(raw: str, *, source: str = "<string>") -> Tuple[Dict[str, Any], str]:
    """Return ``(metadata, body)`` for a raw document.

    A malformed block never fails the caller: the document is treated as
    having no metadata and its whole text as body.
    """
    try:
        return split_front_matter(raw)
    except FrontMatterError as exc:
        LOGGER.warning("Ignoring front matter of %s: %s", source, exc)
        return {}, raw
