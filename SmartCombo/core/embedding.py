"""Embedding module.

Uses SentenceTransformers locally and normalizes embeddings once (cosine-by-contract).
"""

from __future__ import annotations

import contextlib
import io
import logging
import warnings
from typing import Iterable, List, Optional

import numpy as np

from ..config.settings import EmbeddingConfig
from ..utils.errors import EmbeddingError, with_error_context
from .similarity import EmbeddedText

logger = logging.getLogger("SMARTCOMBO.Embedding")


def _normalize(vec: np.ndarray) -> np.ndarray:
    norm = np.linalg.norm(vec)
    if norm == 0 or np.isnan(norm):
        return vec
    return vec / norm


class EmbeddingModule:
    def __init__(self, config: Optional[EmbeddingConfig] = None):
        config = config or EmbeddingConfig()
        self._model = None
        self.model_name = config.model_name
        self.device = config.device
        self.batch_size = config.batch_size
        self.normalize = config.normalize

    @property
    def is_loaded(self) -> bool:
        return self._model is not None

    def _ensure_loaded(self) -> None:
        if self._model is not None:
            return

        with warnings.catch_warnings():
            warnings.filterwarnings("ignore")
            logging.getLogger("transformers").setLevel(logging.ERROR)
            logging.getLogger("transformers.modeling_utils").setLevel(logging.ERROR)
            logging.getLogger("huggingface_hub").setLevel(logging.ERROR)

            # HF Hub writes download progress to stderr
            stderr_capture = io.StringIO()
            try:
                with contextlib.redirect_stderr(stderr_capture):
                    from sentence_transformers import SentenceTransformer
                    self._model = SentenceTransformer(self.model_name, device=self.device)
            except Exception as e:
                raise EmbeddingError(
                    f"Failed to load embedding model '{self.model_name}': {e}",
                    context={"model": self.model_name, "device": self.device},
                ) from e

        logger.info(f"Embedding model loaded: {self.model_name} ({self.device})")

    @with_error_context("embedding", "embed")
    def embed(self, text: str) -> np.ndarray:
        self._ensure_loaded()
        vec = np.asarray(self._model.encode(text, batch_size=self.batch_size, show_progress_bar=False))
        if not self.normalize:
            return vec
        return _normalize(vec)

    @with_error_context("embedding", "embed_range")
    def embed_range(self, texts: Iterable[str]) -> List[EmbeddedText]:
        """Embed a batch of texts, pairing each text with its vector in input order."""
        items = list(texts)
        if not items:
            return []
        self._ensure_loaded()
        vecs = self._model.encode(items, batch_size=self.batch_size, show_progress_bar=False)
        results = []
        for text, vec in zip(items, vecs):
            vec = np.asarray(vec)
            results.append(EmbeddedText(text, _normalize(vec) if self.normalize else vec))
        return results


__all__ = ["EmbeddingModule"]
