"""Tests for the sentence-transformer embedding module."""

import sys
import types
from unittest.mock import MagicMock, patch

import numpy as np
import pytest

from SmartCombo.config.settings import EmbeddingConfig
from SmartCombo.core.embedding import EmbeddingModule
from SmartCombo.core.similarity import EmbeddedText
from SmartCombo.utils.errors import EmbeddingError


def _fake_sentence_transformers(model):
    module = types.ModuleType("sentence_transformers")
    module.SentenceTransformer = MagicMock(return_value=model)  # type: ignore[attr-defined]
    return module


@pytest.fixture
def model():
    model = MagicMock()
    model.encode.side_effect = lambda texts, **kwargs: (
        np.array([[3.0, 4.0]] * len(texts)) if isinstance(texts, list) else np.array([3.0, 4.0])
    )
    return model


class TestEmbeddingModule:
    """Test EmbeddingModule."""

    def test_config_is_applied(self):
        """Model settings come from EmbeddingConfig."""
        module = EmbeddingModule(EmbeddingConfig(model_name="m", device="cuda", batch_size=8, normalize=False))
        assert module.model_name == "m"
        assert module.device == "cuda"
        assert module.batch_size == 8
        assert module.normalize is False

    def test_model_loads_lazily(self, model):
        """The model is only loaded on first use."""
        fake = _fake_sentence_transformers(model)
        with patch.dict(sys.modules, {"sentence_transformers": fake}):
            module = EmbeddingModule()
            assert not module.is_loaded
            module.embed("rent")
            assert module.is_loaded
            fake.SentenceTransformer.assert_called_once_with("all-MiniLM-L6-v2", device="cpu")

    def test_embed_normalizes(self, model):
        """Embeddings are L2-normalized by default."""
        with patch.dict(sys.modules, {"sentence_transformers": _fake_sentence_transformers(model)}):
            vec = EmbeddingModule().embed("rent")
        assert np.allclose(vec, [0.6, 0.8])

    def test_embed_without_normalization(self, model):
        """Raw model output is returned when normalization is off."""
        with patch.dict(sys.modules, {"sentence_transformers": _fake_sentence_transformers(model)}):
            vec = EmbeddingModule(EmbeddingConfig(normalize=False)).embed("rent")
        assert np.allclose(vec, [3.0, 4.0])

    def test_zero_vector_left_alone(self):
        """A zero embedding is not divided by its norm."""
        model = MagicMock()
        model.encode.return_value = np.array([0.0, 0.0])
        with patch.dict(sys.modules, {"sentence_transformers": _fake_sentence_transformers(model)}):
            vec = EmbeddingModule().embed("nothing")
        assert np.allclose(vec, [0.0, 0.0])

    def test_embed_range_pairs_texts(self, model):
        """embed_range pairs each input with its vector, in order."""
        with patch.dict(sys.modules, {"sentence_transformers": _fake_sentence_transformers(model)}):
            results = EmbeddingModule().embed_range(["Rent", "Gas"])
        assert [r.text for r in results] == ["Rent", "Gas"]
        assert all(isinstance(r, EmbeddedText) for r in results)
        assert np.allclose(results[1].embedding, [0.6, 0.8])
        model.encode.assert_called_once_with(["Rent", "Gas"], batch_size=32, show_progress_bar=False)

    def test_embed_range_empty(self):
        """An empty batch does not load the model."""
        module = EmbeddingModule()
        assert module.embed_range([]) == []
        assert not module.is_loaded

    def test_load_failure_raises_embedding_error(self):
        """Model load failures surface as EmbeddingError."""
        module_stub = types.ModuleType("sentence_transformers")
        module_stub.SentenceTransformer = MagicMock(side_effect=OSError("model not found"))  # type: ignore[attr-defined]
        with patch.dict(sys.modules, {"sentence_transformers": module_stub}):
            with pytest.raises(EmbeddingError) as exc_info:
                EmbeddingModule(EmbeddingConfig(model_name="missing")).embed("rent")
        assert exc_info.value.context["model"] == "missing"

    def test_encode_failure_raises_embedding_error(self):
        """Unexpected encode failures are wrapped with context."""
        model = MagicMock()
        model.encode.side_effect = RuntimeError("CUDA out of memory")
        with patch.dict(sys.modules, {"sentence_transformers": _fake_sentence_transformers(model)}):
            with pytest.raises(EmbeddingError) as exc_info:
                EmbeddingModule().embed("rent")
        assert exc_info.value.context["operation"] == "embed"


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
