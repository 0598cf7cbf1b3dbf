"""Read-only category index shared by every suggestion request."""

from __future__ import annotations

import logging
from typing import Any, Iterable, List, Optional, Tuple

from ..utils.errors import ConfigurationError
from .similarity import EmbeddedText, RankedResult, find_closest

logger = logging.getLogger("SMARTCOMBO.Categories")


class CategoryIndex:
    """Categories embedded once at startup, plus the embedder used for queries.

    Built before the app serves traffic and never mutated afterwards, so one
    instance can be shared across request threads.
    """

    def __init__(self, embedder: Any, categories: Iterable[EmbeddedText]):
        self.embedder = embedder
        self._categories: Tuple[EmbeddedText, ...] = tuple(categories)
        dims = {len(c.embedding) for c in self._categories}
        if len(dims) > 1:
            raise ConfigurationError(
                "Category embeddings have inconsistent dimensions",
                context={"dimensions": sorted(dims)},
            )
        self._dimension: Optional[int] = dims.pop() if dims else None

    @classmethod
    def build(cls, embedder: Any, labels: Iterable[str]) -> CategoryIndex:
        """Embed ``labels`` once and wrap them in an index.

        Raises:
            ConfigurationError: If a label is blank or repeated.
        """
        cleaned: List[str] = []
        seen = set()
        for label in labels:
            text = label.strip() if isinstance(label, str) else ""
            if not text:
                raise ConfigurationError("Category labels cannot be empty")
            if text in seen:
                raise ConfigurationError(f"Duplicate category label: {text}")
            seen.add(text)
            cleaned.append(text)

        categories = embedder.embed_range(cleaned)
        index = cls(embedder, categories)
        logger.info(f"Category index built: {len(index)} categories, dimension={index.dimension}")
        return index

    @property
    def categories(self) -> Tuple[EmbeddedText, ...]:
        return self._categories

    @property
    def labels(self) -> List[str]:
        return [c.text for c in self._categories]

    @property
    def dimension(self) -> Optional[int]:
        return self._dimension

    def __len__(self) -> int:
        return len(self._categories)

    def suggest(
        self,
        search_text: str,
        max_results: int,
        min_similarity: Optional[float] = None,
    ) -> List[RankedResult]:
        """Rank the categories against ``search_text``."""
        text = (search_text or "").strip()
        if not text or max_results <= 0 or not self._categories:
            return []
        query = self.embedder.embed(text)
        results = find_closest(query, self._categories, max_results, min_similarity)
        logger.debug(f"Suggestions for '{text}': {[r.text for r in results]}")
        return results


__all__ = ["CategoryIndex"]
