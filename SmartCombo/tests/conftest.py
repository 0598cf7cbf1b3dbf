"""Shared fixtures for SmartCombo tests."""

import numpy as np
import pytest

from SmartCombo.config.settings import Settings
from SmartCombo.core.categories import CategoryIndex
from SmartCombo.core.similarity import EmbeddedText

# Hand-picked 3-d vectors: "mortgage payment" is closest to Rent and
# furthest from Dining Out.
VECTORS = {
    "Rent": [1.0, 0.2, 0.0],
    "Gas": [0.1, 1.0, 0.0],
    "Dining Out": [-0.3, 0.1, 1.0],
    "mortgage payment": [0.9, 0.3, -0.1],
    "fuel": [0.0, 1.0, 0.05],
}
FALLBACK = [0.0, 0.0, 1.0]


class FakeEmbedder:
    """Deterministic stand-in for the sentence-transformer embedder."""

    model_name = "fake-embedder"
    is_loaded = True

    def __init__(self, vectors=None):
        self.vectors = vectors if vectors is not None else VECTORS
        self.calls = []

    def embed(self, text):
        self.calls.append(text)
        return np.asarray(self.vectors.get(text, FALLBACK), dtype=np.float32)

    def embed_range(self, texts):
        return [EmbeddedText(t, np.asarray(self.vectors.get(t, FALLBACK), dtype=np.float32)) for t in texts]


@pytest.fixture
def embedder():
    return FakeEmbedder()


@pytest.fixture
def index(embedder):
    return CategoryIndex.build(embedder, ["Rent", "Gas", "Dining Out"])


@pytest.fixture
def settings():
    config = Settings()
    config.inference.api_key = "test-key"
    config.inference.deployment_name = "gpt-test"
    config.suggestions.categories = ["Rent", "Gas", "Dining Out"]
    return config
