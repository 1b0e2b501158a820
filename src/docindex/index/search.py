"""Substring search over the documentation hierarchy."""

from __future__ import annotations

from dataclasses import replace
from typing import Iterable, List, Optional, Tuple

from docindex.index.cache import DocumentIndex
from docindex.models import DocumentNode
from docindex.utils.text import fold


class InvalidQueryError(TypeError):
    """The search query is not a string."""


def _prune(node: DocumentNode, needle: str, parent_title: str) -> Tuple[Optional[DocumentNode], bool]:
    # Ancestor titles are part of the searchable title, so "database mongo"
    # finds a "Mongo" page filed under "Database".
    full_title = f"{parent_title} {fold(node.title)}".strip()
    children = []
    for child in node.children:
        pruned, matched = _prune(child, needle, full_title)
        if matched:
            children.append(pruned)

    if children or needle in full_title or needle in fold(node.content):
        return replace(node, children=tuple(children)), True
    return None, False


def filter_tree(nodes: Iterable[DocumentNode], query: str) -> List[DocumentNode]:
    """Return a pruned copy of ``nodes`` keeping only matching branches.

    A node survives when it matches itself or has a matching descendant.
    A blank query keeps everything.
    """
    if not isinstance(query, str):
        raise InvalidQueryError(f"Query must be a string, got {type(query).__name__}")

    needle = fold(query.strip())
    if not needle:
        return list(nodes)

    results: List[DocumentNode] = []
    for node in nodes:
        pruned, matched = _prune(node, needle, "")
        if matched:
            results.append(pruned)
    return results


class Searcher:
    """High-level API to query the documentation index."""

    def __init__(self, index: DocumentIndex) -> None:
        self.index = index

    def search(self, query: str) -> List[DocumentNode]:
        if not isinstance(query, str):
            raise InvalidQueryError(f"Query must be a string, got {type(query).__name__}")
        self.index.ensure_ready()
        return filter_tree(self.index.roots, query)
