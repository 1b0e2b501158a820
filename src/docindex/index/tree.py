"""Assembly of parsed documents into an ordered hierarchy."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Sequence, Set

from docindex.config import DEFAULT_ENTRY_POINT, DEFAULT_LANDING_PREFIX
from docindex.index.paths import classify
from docindex.models import DocumentNode, SourceRecord
from docindex.utils.text import fold, leading_number

LOGGER = logging.getLogger(__name__)


@dataclass(slots=True)
class _Draft:
    path: str
    title: str
    icon: str = ""
    description: str = ""
    content: str = ""
    order: Optional[int] = None
    children: List[str] = field(default_factory=list)

    def freeze(self, nodes: Dict[str, "_Draft"]) -> DocumentNode:
        children = [nodes[key].freeze(nodes) for key in self.children]
        return DocumentNode(
            path=self.path,
            title=self.title,
            icon=self.icon,
            description=self.description,
            content=self.content,
            order=self.order,
            children=tuple(sort_children(children)),
        )


def sibling_key(node: DocumentNode) -> int:
    """Position of a node among its siblings: declared order, else title prefix."""
    if node.order is not None:
        return node.order
    return leading_number(node.title)


def sort_children(children: Iterable[DocumentNode]) -> List[DocumentNode]:
    return sorted(children, key=sibling_key)


def sort_roots(roots: Iterable[DocumentNode], entry_point: str = DEFAULT_ENTRY_POINT) -> List[DocumentNode]:
    """Sort roots by title, keeping the entry point page first."""
    return sorted(roots, key=lambda node: (node.path != entry_point, fold(node.title)))


class TreeBuilder:
    """Accumulates source records into draft nodes keyed by path."""

    def __init__(
        self,
        *,
        entry_point: str = DEFAULT_ENTRY_POINT,
        landing_prefix: str = DEFAULT_LANDING_PREFIX,
        landing_names: Sequence[str] = ("readme", "index"),
    ) -> None:
        self.entry_point = entry_point
        self.landing_prefix = landing_prefix
        self.landing_names = tuple(landing_names)
        self._nodes: Dict[str, _Draft] = {}
        self._roots: List[str] = []
        self._claimed: Set[str] = set()

    def _ensure(self, key: str) -> _Draft:
        draft = self._nodes.get(key)
        if draft is not None:
            return draft

        # Implicit parents get placeholder metadata until a document claims them
        draft = _Draft(path=key, title=key.rsplit("/", 1)[-1])
        self._nodes[key] = draft
        if "/" in key:
            parent = self._ensure(key.rsplit("/", 1)[0])
            parent.children.append(key)
        else:
            self._roots.append(key)
        return draft

    def add(self, record: SourceRecord) -> None:
        info = classify(
            record.path,
            landing_prefix=self.landing_prefix,
            landing_names=self.landing_names,
        )
        key = info.node_key
        if key in self._claimed:
            LOGGER.warning("%s replaces an earlier document for %s", record.path, key)
        self._claimed.add(key)
        draft = self._ensure(key)

        metadata = record.metadata
        draft.title = metadata.title or info.segments[-1]
        draft.icon = metadata.icon or ""
        draft.description = metadata.description or ""
        draft.content = record.rendered_content
        draft.order = metadata.order

    def build(self) -> List[DocumentNode]:
        roots = [self._nodes[key].freeze(self._nodes) for key in self._roots]
        return sort_roots(roots, self.entry_point)


def build_tree(
    records: Iterable[SourceRecord],
    *,
    entry_point: str = DEFAULT_ENTRY_POINT,
    landing_prefix: str = DEFAULT_LANDING_PREFIX,
    landing_names: Sequence[str] = ("readme", "index"),
) -> List[DocumentNode]:
    """Build the ordered root list from records in encounter order.

    When several documents populate the same node, the last one wins.
    """
    builder = TreeBuilder(
        entry_point=entry_point,
        landing_prefix=landing_prefix,
        landing_names=landing_names,
    )
    for record in records:
        builder.add(record)
    return builder.build()
