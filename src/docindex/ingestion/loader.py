"""Documentation file discovery and parsing."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Sequence

from docindex.ingestion.frontmatter import extract
from docindex.ingestion.renderer import Renderer
from docindex.models import DocumentMetadata, SourceFile, SourceRecord
from docindex.utils.files import iter_doc_paths, relative_doc_path

LOGGER = logging.getLogger(__name__)


class SourceDiscoveryError(RuntimeError):
    """The documentation root cannot be enumerated."""


def find_sources(root: Path, extensions: Sequence[str] = (".md",)) -> List[Path]:
    """Find all documentation files under ``root``, sorted by path."""
    if not root.is_dir():
        raise SourceDiscoveryError(f"Documentation root not found: {root}")
    try:
        return list(iter_doc_paths([root], extensions))
    except OSError as exc:
        raise SourceDiscoveryError(f"Unable to scan {root}: {exc}") from exc


def read_source(root: Path, path: Path) -> SourceFile:
    """Read one documentation file into a :class:`SourceFile`."""
    return SourceFile(
        path=relative_doc_path(root, path),
        text=path.read_text(encoding="utf-8-sig"),
    )


def parse_source(source: SourceFile, renderer: Renderer) -> SourceRecord:
    """Split front matter, validate metadata and render the body.

    Raises whatever the metadata validation or the renderer raises; the
    caller decides whether a single bad file is fatal.
    """
    data, body = extract(source.text, source=source.path)
    metadata = DocumentMetadata.from_mapping(data)
    return SourceRecord(
        path=source.path,
        metadata=metadata,
        rendered_content=renderer(body),
    )
