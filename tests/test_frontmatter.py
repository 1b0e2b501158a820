"""Tests for front-matter extraction."""

from __future__ import annotations

import logging

import pytest

from docindex.ingestion.frontmatter import FrontMatterError, extract, split_front_matter


class TestSplitFrontMatter:
    """Test the strict parser."""

    def test_metadata_and_body(self) -> None:
        """Should split a fenced YAML block from the body."""
        raw = "---\ntitle: Install\norder: 2\n---\n# Install\n\nRun it.\n"

        metadata, body = split_front_matter(raw)

        assert metadata == {"title": "Install", "order": 2}
        assert body == "# Install\n\nRun it.\n"

    def test_no_front_matter(self) -> None:
        """Should return the raw text unchanged."""
        raw = "# Just content\n"

        assert split_front_matter(raw) == ({}, raw)

    def test_unclosed_fence_is_content(self) -> None:
        """An opening fence without a closing one is not front matter."""
        raw = "---\ntitle: Oops\n# Heading\n"

        assert split_front_matter(raw) == ({}, raw)

    def test_empty_block(self) -> None:
        """An empty block yields empty metadata."""
        assert split_front_matter("---\n---\nBody") == ({}, "Body")

    def test_invalid_yaml_raises(self) -> None:
        """Broken YAML should raise FrontMatterError."""
        with pytest.raises(FrontMatterError):
            split_front_matter("---\ntitle: [unclosed\n---\nBody")

    def test_non_mapping_raises(self) -> None:
        """A YAML list is not valid front matter."""
        with pytest.raises(FrontMatterError):
            split_front_matter("---\n- a\n- b\n---\nBody")


class TestExtract:
    """Test the fail-soft extractor."""

    def test_valid(self) -> None:
        metadata, body = extract("---\ntitle: A\n---\nBody")

        assert metadata == {"title": "A"}
        assert body == "Body"

    def test_malformed_falls_back_to_raw(self, caplog: pytest.LogCaptureFixture) -> None:
        """A malformed block yields empty metadata and the whole text as body."""
        raw = "---\ntitle: [unclosed\n---\nBody"

        with caplog.at_level(logging.WARNING):
            metadata, body = extract(raw, source="broken")

        assert metadata == {}
        assert body == raw
        assert "broken" in caplog.text


class TestByteOrderMark:
    """Front matter behind a UTF-8 byte order mark."""

    def test_bom_is_ignored(self) -> None:
        metadata, body = split_front_matter("\ufeff---\ntitle: API\n---\nBody")

        assert metadata == {"title": "API"}
        assert body == "Body"

    def test_bom_without_front_matter(self) -> None:
        assert split_front_matter("\ufeff# Heading\n") == ({}, "# Heading\n")
