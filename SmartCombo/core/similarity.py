"""Exact nearest-neighbour ranking over a small, fixed candidate set.

Scores are cosine similarities, so inputs do not need to be normalized.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, NamedTuple, Optional, Sequence

import numpy as np

from ..utils.errors import DimensionMismatchError


class EmbeddedText(NamedTuple):
    """A piece of text paired with its embedding."""
    text: str
    embedding: Any


@dataclass(frozen=True)
class RankedResult:
    """A candidate and its similarity to the query."""
    text: str
    similarity: float

    def to_dict(self) -> Dict[str, Any]:
        return {"text": self.text, "similarity": self.similarity}


def _as_vector(embedding: Any) -> np.ndarray:
    return np.asarray(embedding, dtype=np.float64).ravel()


def _unit(vec: np.ndarray) -> np.ndarray:
    """Scale ``vec`` to unit length; zero or non-finite vectors become all zeros.

    Dividing by the largest component first keeps the norm from
    overflowing or underflowing for very large or very small values.
    """
    if vec.size == 0 or not np.all(np.isfinite(vec)):
        return np.zeros_like(vec)
    peak = np.max(np.abs(vec))
    if peak == 0.0:
        return np.zeros_like(vec)
    scaled = vec / peak
    return scaled / np.linalg.norm(scaled)


def cosine_similarity(a: Any, b: Any) -> float:
    """Cosine similarity between two vectors of equal length.

    A zero-magnitude vector scores 0.0 against anything.
    """
    va = _as_vector(a)
    vb = _as_vector(b)
    if va.shape[0] != vb.shape[0]:
        raise DimensionMismatchError(va.shape[0], vb.shape[0])
    return float(np.clip(np.dot(_unit(va), _unit(vb)), -1.0, 1.0))


def find_closest(
    query: Any,
    candidates: Sequence[EmbeddedText],
    k: int,
    min_similarity: Optional[float] = None,
) -> List[RankedResult]:
    """Return up to ``k`` candidates ranked by descending cosine similarity.

    Args:
        query: Query embedding
        candidates: Ordered (text, embedding) pairs
        k: Maximum number of results
        min_similarity: Candidates scoring below this are dropped

    Returns:
        Ranked results; ties keep the original candidate order.

    Raises:
        DimensionMismatchError: If any candidate differs in length from the query.
    """
    if k <= 0 or not candidates:
        return []

    qvec = _as_vector(query)
    dim = qvec.shape[0]

    vectors = []
    for text, embedding in candidates:
        vec = _as_vector(embedding)
        if vec.shape[0] != dim:
            raise DimensionMismatchError(dim, vec.shape[0], candidate=text)
        vectors.append(_unit(vec))

    matrix = np.vstack(vectors)
    scores = np.clip(matrix @ _unit(qvec), -1.0, 1.0)

    # Stable sort on the negated scores keeps candidate order for ties
    order = np.argsort(-scores, kind="stable")

    results: List[RankedResult] = []
    for idx in order:
        score = float(scores[idx])
        if min_similarity is not None and score < min_similarity:
            continue
        results.append(RankedResult(text=candidates[idx][0], similarity=score))
        if len(results) >= k:
            break
    return results


__all__ = ["EmbeddedText", "RankedResult", "cosine_similarity", "find_closest"]
