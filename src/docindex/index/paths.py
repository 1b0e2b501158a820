"""Classification of documentation paths into tree positions."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

from docindex.config import DEFAULT_LANDING_PREFIX


@dataclass(slots=True, frozen=True)
class PathInfo:
    segments: Tuple[str, ...]
    is_section_landing: bool
    parent_key: Optional[str]

    @property
    def is_root(self) -> bool:
        return len(self.segments) == 1

    @property
    def node_key(self) -> str:
        """Key of the node this document populates."""
        if self.is_section_landing and self.parent_key is not None:
            return self.parent_key
        return "/".join(self.segments)


def classify(
    path: str,
    *,
    landing_prefix: str = DEFAULT_LANDING_PREFIX,
    landing_names: Sequence[str] = ("readme", "index"),
) -> PathInfo:
    """Decide where the document at ``path`` belongs in the tree.

    Single-segment paths are roots. A deeper path whose file name starts
    with ``landing_prefix`` (or is one of ``landing_names``) is the landing
    document of its parent, otherwise it is a child of its parent.
    """
    segments = tuple(segment for segment in path.strip("/").split("/") if segment)
    if not segments:
        raise ValueError(f"Empty document path: {path!r}")
    if len(segments) == 1:
        return PathInfo(segments=segments, is_section_landing=False, parent_key=None)

    name = segments[-1].lower()
    is_landing = name in landing_names or (
        bool(landing_prefix) and name.startswith(landing_prefix.lower())
    )
    return PathInfo(
        segments=segments,
        is_section_landing=is_landing,
        parent_key="/".join(segments[:-1]),
    )
