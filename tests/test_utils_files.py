"""Tests for file utility functions."""

from __future__ import annotations

from pathlib import Path

from docindex.utils.files import iter_doc_paths, relative_doc_path


class TestIterDocPaths:
    """Test iter_doc_paths function."""

    def test_single_markdown_file(self, tmp_path: Path) -> None:
        """Should yield single Markdown file."""
        doc = tmp_path / "intro.md"
        doc.write_text("# Intro")

        assert list(iter_doc_paths([doc])) == [doc]

    def test_directory_filters_extensions(self, tmp_path: Path) -> None:
        """Should only yield files with a documentation suffix."""
        (tmp_path / "a.md").write_text("a")
        (tmp_path / "b.MD").write_text("b")
        (tmp_path / "notes.txt").write_text("text")

        paths = list(iter_doc_paths([tmp_path]))

        assert [p.name for p in paths] == ["a.md", "b.MD"]

    def test_nested_directories_sorted(self, tmp_path: Path) -> None:
        """Should descend into subdirectories in sorted order."""
        (tmp_path / "z").mkdir()
        (tmp_path / "a").mkdir()
        (tmp_path / "z" / "last.md").write_text("z")
        (tmp_path / "a" / "first.md").write_text("a")
        (tmp_path / "root.md").write_text("r")

        paths = list(iter_doc_paths([tmp_path]))

        assert [p.relative_to(tmp_path).as_posix() for p in paths] == [
            "a/first.md",
            "root.md",
            "z/last.md",
        ]

    def test_custom_extensions(self, tmp_path: Path) -> None:
        """Should honour the given extensions."""
        (tmp_path / "a.md").write_text("a")
        (tmp_path / "b.markdown").write_text("b")

        paths = list(iter_doc_paths([tmp_path], extensions=(".markdown",)))

        assert [p.name for p in paths] == ["b.markdown"]

    def test_empty_directory(self, tmp_path: Path) -> None:
        """Should yield nothing for an empty directory."""
        assert list(iter_doc_paths([tmp_path])) == []


class TestRelativeDocPath:
    """Test relative_doc_path function."""

    def test_strips_extension(self, tmp_path: Path) -> None:
        assert relative_doc_path(tmp_path, tmp_path / "api.md") == "api"

    def test_nested_uses_slashes(self, tmp_path: Path) -> None:
        path = tmp_path / "database" / "01-overview.md"

        assert relative_doc_path(tmp_path, path) == "database/01-overview"
