"""Application configuration defaults."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

DEFAULT_ENTRY_POINT = "getting-started"
DEFAULT_LANDING_PREFIX = "01-"


def _get_default_docs_root() -> Path:
    """Get the default documentation root for the current working directory."""
    # A docs/ folder next to the project is the common layout
    local_docs = Path("docs")
    if local_docs.is_dir():
        return local_docs

    # Sites generated from a routes tree keep their pages here
    routed_docs = Path("src/routes/docs")
    if routed_docs.is_dir():
        return routed_docs

    return local_docs


@dataclass(slots=True)
class AppConfig:
    docs_root: Path | None = None
    extensions: tuple[str, ...] = (".md",)
    landing_prefix: str = DEFAULT_LANDING_PREFIX
    landing_names: tuple[str, ...] = ("readme", "index")
    entry_point: str = DEFAULT_ENTRY_POINT
    include_unpublished: bool = False
    build_timeout: float | None = 30.0

    def __post_init__(self) -> None:
        if self.docs_root is None:
            self.docs_root = _get_default_docs_root()
        self.extensions = tuple(ext.lower() for ext in self.extensions)
        self.landing_names = tuple(name.lower() for name in self.landing_names)

    def resolve_docs_root(self, base_dir: Path | None = None) -> Path:
        if self.docs_root is None:
            self.docs_root = _get_default_docs_root()
        if Path(self.docs_root).is_absolute() or base_dir is None:
            return Path(self.docs_root)
        return base_dir / self.docs_root
