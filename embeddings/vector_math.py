"""Vector math over embedding vectors."""

from typing import List, Sequence

import numpy as np

from shared.errors import DimensionMismatchError, EmptyInputError


def cosine_similarity(a: Sequence[float], b: Sequence[float]) -> float:
    """
    Cosine of the angle between two vectors.

    Returns 0.0 when either vector has zero norm.

    Raises:
        DimensionMismatchError: If the vectors differ in length
    """
    if len(a) != len(b):
        raise DimensionMismatchError(
            f"Vectors must have the same length ({len(a)} != {len(b)})"
        )

    va = np.asarray(a, dtype=np.float64)
    vb = np.asarray(b, dtype=np.float64)

    norm_a = np.linalg.norm(va)
    norm_b = np.linalg.norm(vb)
    if norm_a == 0 or norm_b == 0:
        return 0.0

    return float(np.dot(va, vb) / (norm_a * norm_b))


def average_embeddings(embeddings: Sequence[Sequence[float]]) -> List[float]:
    """
    Elementwise mean of a list of vectors.

    Raises:
        EmptyInputError: If the list is empty
        DimensionMismatchError: If the vectors differ in length
    """
    if len(embeddings) == 0:
        raise EmptyInputError("Cannot average empty embeddings array")

    dimension = len(embeddings[0])
    if any(len(e) != dimension for e in embeddings):
        raise DimensionMismatchError("Cannot average vectors of different lengths")

    return np.mean(np.asarray(embeddings, dtype=np.float64), axis=0).tolist()
