"""Documentation indexing pipeline."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional

from docindex.config import AppConfig
from docindex.index.tree import TreeBuilder
from docindex.ingestion.loader import find_sources, parse_source, read_source
from docindex.ingestion.renderer import MarkdownRenderer, Renderer
from docindex.models import DocumentNode
from docindex.utils.files import relative_doc_path

LOGGER = logging.getLogger(__name__)


@dataclass(slots=True)
class IndexStats:
    loaded: int = 0
    skipped: int = 0
    failed: int = 0
    processed_files: list[str] = field(default_factory=list)
    failures: Dict[str, str] = field(default_factory=dict)

    def increment(self, status: str, path: str, error: Optional[str] = None) -> None:
        if status == "loaded":
            self.loaded += 1
        elif status == "skipped":
            self.skipped += 1
        else:
            self.failed += 1
            self.failures[path] = error or status
        self.processed_files.append(path)


@dataclass(slots=True)
class BuildResult:
    roots: List[DocumentNode]
    stats: IndexStats


class Indexer:
    """Coordinates discovery, parsing and tree assembly."""

    def __init__(
        self,
        config: AppConfig,
        renderer: Renderer | None = None,
        *,
        base_dir: Path | None = None,
    ) -> None:
        self.config = config
        self.renderer = renderer or MarkdownRenderer()
        self.base_dir = base_dir

    def build(self) -> BuildResult:
        """Build the document tree from every file under the docs root.

        A file that cannot be read, parsed or rendered is left out and
        recorded in the stats. Failing to enumerate the root is fatal.
        """
        root = self.config.resolve_docs_root(self.base_dir)
        paths = find_sources(root, self.config.extensions)
        if not paths:
            LOGGER.warning("No documentation files found under %s", root)

        stats = IndexStats()
        builder = TreeBuilder(
            entry_point=self.config.entry_point,
            landing_prefix=self.config.landing_prefix,
            landing_names=self.config.landing_names,
        )

        for path in paths:
            try:
                LOGGER.info(f"Processing: {path}")
                source = read_source(root, path)
                record = parse_source(source, self.renderer)
            except Exception as e:
                LOGGER.error(f"Failed to process {path}: {e}")
                stats.increment("failed", relative_doc_path(root, path), str(e))
                continue

            if not record.metadata.published and not self.config.include_unpublished:
                LOGGER.debug("Skipping unpublished document %s", record.path)
                stats.increment("skipped", record.path)
                continue

            builder.add(record)
            stats.increment("loaded", record.path)

        return BuildResult(roots=builder.build(), stats=stats)
