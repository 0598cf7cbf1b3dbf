"""Tests for the read-only category index."""

import pytest

from SmartCombo.core.categories import CategoryIndex
from SmartCombo.core.similarity import EmbeddedText
from SmartCombo.utils.errors import ConfigurationError

from conftest import FakeEmbedder


class TestCategoryIndexBuild:
    """Test building the index at startup."""

    def test_build_embeds_every_label(self, index):
        """Every label is embedded once, in order."""
        assert index.labels == ["Rent", "Gas", "Dining Out"]
        assert len(index) == 3
        assert index.dimension == 3

    def test_categories_are_immutable(self, index):
        """The category collection cannot be mutated in place."""
        assert isinstance(index.categories, tuple)
        with pytest.raises(AttributeError):
            index.categories[0].text = "Other"  # type: ignore[misc]

    def test_labels_are_stripped(self, embedder):
        """Surrounding whitespace is removed from labels."""
        index = CategoryIndex.build(embedder, ["  Rent ", "Gas"])
        assert index.labels == ["Rent", "Gas"]

    def test_blank_label_rejected(self, embedder):
        """Blank labels are a configuration error."""
        with pytest.raises(ConfigurationError):
            CategoryIndex.build(embedder, ["Rent", "   "])

    def test_duplicate_label_rejected(self, embedder):
        """Duplicate labels are a configuration error."""
        with pytest.raises(ConfigurationError):
            CategoryIndex.build(embedder, ["Rent", "Gas", "Rent"])

    def test_inconsistent_dimensions_rejected(self):
        """All category embeddings must share one length."""
        with pytest.raises(ConfigurationError):
            CategoryIndex(FakeEmbedder(), [EmbeddedText("a", [1.0, 0.0]), EmbeddedText("b", [1.0])])

    def test_empty_index(self, embedder):
        """An empty label list builds an empty index."""
        index = CategoryIndex.build(embedder, [])
        assert len(index) == 0
        assert index.dimension is None
        assert index.suggest("rent", 5) == []


class TestCategoryIndexSuggest:
    """Test per-request suggestions."""

    def test_suggest_ranks_categories(self, index):
        """The closest category comes first."""
        results = index.suggest("mortgage payment", 2)
        assert [r.text for r in results] == ["Rent", "Gas"]

    def test_suggest_with_threshold(self, index):
        """The threshold is passed through to the ranker."""
        results = index.suggest("mortgage payment", 3, min_similarity=0.5)
        assert [r.text for r in results] == ["Rent"]

    def test_blank_search_text_skips_embedding(self, index, embedder):
        """Blank input returns nothing and never reaches the model."""
        assert index.suggest("   ", 5) == []
        assert embedder.calls == []

    def test_zero_results_requested(self, index, embedder):
        """max_results=0 returns nothing."""
        assert index.suggest("mortgage payment", 0) == []
        assert embedder.calls == []

    def test_search_text_is_stripped(self, index, embedder):
        """The query is embedded without surrounding whitespace."""
        index.suggest("  fuel  ", 1)
        assert embedder.calls == ["fuel"]


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
