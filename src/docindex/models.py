"""Core docindex data models."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Tuple

# Front-matter keys mapped onto named DocumentMetadata fields
_STRING_FIELDS = {
    "title": "title",
    "icon": "icon",
    "description": "description",
    "section": "section",
    "type": "doc_type",
}


class MetadataError(ValueError):
    """A known front-matter field holds a value of an unusable type."""


def _as_text(key: str, value: Any) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, (dict, list, tuple, set)):
        raise MetadataError(f"'{key}' must be a scalar, got {type(value).__name__}")
    return str(value)


def _as_order(value: Any) -> Optional[int]:
    if value is None:
        return None
    # bool is an int subclass but never a meaningful position
    if isinstance(value, bool):
        raise MetadataError("'order' must be an integer, got bool")
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.strip().removeprefix("-").isdecimal():
        return int(value.strip())
    raise MetadataError(f"'order' must be an integer, got {value!r}")


def _as_flag(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, bool):
        return value
    raise MetadataError(f"'published' must be a boolean, got {value!r}")


@dataclass(slots=True)
class DocumentMetadata:
    """Front-matter of a single document.

    Recognised keys become named fields, everything else is kept in ``extra``
    so that unknown keys survive a round trip through the index.
    """

    title: Optional[str] = None
    icon: Optional[str] = None
    description: Optional[str] = None
    published: bool = True
    order: Optional[int] = None
    section: Optional[str] = None
    doc_type: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "DocumentMetadata":
        """Build metadata from a parsed front-matter mapping.

        Raises:
            MetadataError: if a recognised key holds an unusable value.
        """
        values: Dict[str, Any] = {}
        extra: Dict[str, Any] = {}
        for key, value in data.items():
            key = str(key)
            if key in _STRING_FIELDS:
                values[_STRING_FIELDS[key]] = _as_text(key, value)
            elif key == "order":
                values["order"] = _as_order(value)
            elif key == "published":
                values["published"] = _as_flag(value)
            else:
                extra[key] = value
        return cls(extra=extra, **values)


@dataclass(slots=True)
class SourceFile:
    """Raw documentation file as found by discovery."""

    path: str
    text: str


@dataclass(slots=True)
class SourceRecord:
    """Parsed and rendered documentation file, ready for tree building."""

    path: str
    metadata: DocumentMetadata
    rendered_content: str


@dataclass(slots=True, frozen=True)
class DocumentNode:
    """Immutable node of the documentation hierarchy."""

    path: str
    title: str
    icon: str = ""
    description: str = ""
    content: str = ""
    order: Optional[int] = None
    children: Tuple["DocumentNode", ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "path": self.path,
            "title": self.title,
            "icon": self.icon,
            "description": self.description,
            "content": self.content,
            "children": [child.to_dict() for child in self.children],
        }

    def walk(self):
        """Yield this node and all of its descendants depth-first."""
        yield self
        for child in self.children:
            yield from child.walk()
