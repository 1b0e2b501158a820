"""Text helpers used for ordering and matching."""

from __future__ import annotations

import re

_LEADING_DIGITS = re.compile(r"\s*(\d+)")


def leading_number(text: str) -> int:
    """Parse the leading digits of ``text`` as an integer, 0 when absent."""
    match = _LEADING_DIGITS.match(text or "")
    return int(match.group(1)) if match else 0


def fold(text: str) -> str:
    """Normalize text for case-insensitive comparison."""
    return (text or "").casefold()
