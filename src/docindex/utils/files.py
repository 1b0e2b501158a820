"""Utility helpers for working with documentation files."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, Iterator, Sequence


def iter_doc_paths(inputs: Iterable[Path], extensions: Sequence[str] = (".md",)) -> Iterator[Path]:
    """Yield documentation paths from input paths, descending into directories."""
    suffixes = {ext.lower() for ext in extensions}
    for item in inputs:
        if item.is_dir():
            yield from iter_doc_paths(
                sorted(child for child in item.rglob("*") if child.is_file()), extensions
            )
        elif item.is_file() and item.suffix.lower() in suffixes:
            yield item


def relative_doc_path(root: Path, path: Path) -> str:
    """Return the normalized identifier of ``path``: relative, slashes only, no extension."""
    relative = path.relative_to(root).with_suffix("")
    return "/".join(relative.parts)
