"""
Similarity search over small candidate sets.

`find_similar_texts` embeds the query and all candidates in one batch call.
`find_similar_chunks` ranks candidates whose embeddings are already known.
Ties keep their input order.
"""

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

from shared.errors import EmptyInputError, ProviderError

from .client import EmbeddingClient
from .vector_math import cosine_similarity

logger = logging.getLogger(__name__)


@dataclass
class SimilarText:
    """A candidate scored against the query."""

    text: str
    similarity: float
    index: int


def _rank(
    results: List[SimilarText], threshold: float, top_k: Optional[int]
) -> List[SimilarText]:
    ranked = [r for r in results if r.similarity >= threshold]
    ranked.sort(key=lambda r: r.similarity, reverse=True)
    if top_k is not None:
        ranked = ranked[:top_k]
    return ranked


def find_similar_texts(
    client: EmbeddingClient,
    query: str,
    candidates: Sequence[str],
    threshold: float = 0.7,
    top_k: Optional[int] = None,
    model: Optional[str] = None,
) -> List[SimilarText]:
    """
    Rank candidate texts by cosine similarity to the query.

    Args:
        client: Embedding client
        query: Query text
        candidates: Texts to score
        threshold: Minimum similarity to keep
        top_k: Keep at most this many results
        model: Embedding model (client default if None)

    Returns:
        Results sorted by descending similarity

    Raises:
        EmptyInputError: If the query is blank
        ProviderError: If the query embedding is missing from the response
    """
    if not query.strip():
        raise EmptyInputError("Query text cannot be empty")

    batch = client.embed_batch([query, *candidates], model=model)
    query_embedding = batch.vector_for(0)
    if query_embedding is None:
        raise ProviderError("Failed to generate query embedding")

    vectors = batch.aligned(len(candidates) + 1)
    results = []
    for i, text in enumerate(candidates):
        candidate_embedding = vectors[i + 1]
        similarity = (
            cosine_similarity(query_embedding, candidate_embedding)
            if candidate_embedding is not None
            else 0.0
        )
        results.append(SimilarText(text=text, similarity=similarity, index=i))

    ranked = _rank(results, threshold, top_k)
    logger.debug(f"{len(ranked)}/{len(candidates)} candidates above {threshold}")
    return ranked


def find_similar_chunks(
    query_embedding: Sequence[float],
    chunks: Sequence[Dict],
    top_k: Optional[int] = None,
    threshold: float = 0.0,
) -> List[SimilarText]:
    """
    Rank precomputed chunk embeddings against a query vector.

    Args:
        query_embedding: Query vector
        chunks: Dicts with "text" and "embedding"
        top_k: Keep at most this many results
        threshold: Minimum similarity to keep

    Returns:
        Results sorted by descending similarity
    """
    results = [
        SimilarText(
            text=chunk["text"],
            similarity=cosine_similarity(query_embedding, chunk["embedding"]),
            index=i,
        )
        for i, chunk in enumerate(chunks)
    ]
    return _rank(results, threshold, top_k)
