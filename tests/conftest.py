"""Shared fixtures for docindex tests."""

from __future__ import annotations

from pathlib import Path
from typing import Dict

import pytest

from docindex.index.indexer import BuildResult, IndexStats
from docindex.models import DocumentMetadata, DocumentNode, SourceRecord


def write_docs(root: Path, files: Dict[str, str]) -> Path:
    """Create documentation files under ``root`` from a path -> text mapping."""
    for relative, text in files.items():
        target = root / relative
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(text, encoding="utf-8")
    return root


def make_record(path: str, content: str = "", **metadata) -> SourceRecord:
    return SourceRecord(
        path=path,
        metadata=DocumentMetadata(**metadata),
        rendered_content=content,
    )


@pytest.fixture
def docs_root(tmp_path: Path) -> Path:
    """A small documentation tree with a landing page and nested children."""
    return write_docs(
        tmp_path / "docs",
        {
            "getting-started.md": "---\ntitle: Getting Started\nicon: rocket\n---\n# Welcome\n",
            "api.md": "---\ntitle: API\n---\nThe REST API.\n",
            "database/01-overview.md": "---\ntitle: Database\ndescription: Storage adapters\n---\nPick an adapter.\n",
            "database/mongo.md": "---\ntitle: 2 MongoDB Adapter\n---\nSupports GridFS uploads.\n",
            "database/postgres.md": "---\ntitle: 1 Postgres Adapter\n---\nUses pg.\n",
        },
    )


@pytest.fixture
def sample_roots() -> list[DocumentNode]:
    mongo = DocumentNode(path="database/mongo", title="MongoDB Adapter", content="<p>GridFS storage</p>")
    postgres = DocumentNode(path="database/postgres", title="Postgres Adapter", content="<p>SQL</p>")
    database = DocumentNode(path="database", title="Database", content="", children=(mongo, postgres))
    start = DocumentNode(path="getting-started", title="Getting Started", content="<p>Install it</p>")
    return [start, database]


@pytest.fixture
def build_result(sample_roots) -> BuildResult:
    stats = IndexStats()
    for root in sample_roots:
        stats.increment("loaded", root.path)
    return BuildResult(roots=sample_roots, stats=stats)
