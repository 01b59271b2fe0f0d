"""
Merge adjacent structural chunks whose embeddings are similar.

A single greedy left-to-right sweep. The result depends on chunk order and
is not globally optimal.
"""

import dataclasses
import logging
from typing import List, Optional, Sequence, Tuple

from embeddings.vector_math import average_embeddings, cosine_similarity

from .text_chunk import TextChunk, finalize_chunks

logger = logging.getLogger(__name__)

# Merged chunks may grow to this multiple of max_chunk_size
MERGE_SIZE_FACTOR = 1.5


def _merge_pair(current: TextChunk, following: TextChunk) -> TextChunk:
    meta = current.metadata
    other = following.metadata
    return dataclasses.replace(
        current,
        content=current.content + "\n\n" + following.content,
        end_index=following.end_index,
        metadata=dataclasses.replace(
            meta,
            word_count=meta.word_count + other.word_count,
            character_count=meta.character_count + other.character_count,
            sentence_count=meta.sentence_count + other.sentence_count,
        ),
    )


def merge_with_embeddings(
    chunks: Sequence[TextChunk],
    embeddings: Sequence[Optional[Sequence[float]]],
    threshold: float,
    max_chunk_size: int,
) -> Tuple[List[TextChunk], List[Optional[Sequence[float]]]]:
    """
    Merge adjacent chunks and report which results kept their own vector.

    A chunk with no embedding is never merged with its neighbours.

    Args:
        chunks: Structural chunks in document order
        embeddings: One vector per chunk (None where unavailable)
        threshold: Minimum cosine similarity to merge
        max_chunk_size: Merged content may reach 1.5x this length

    Returns:
        Finalized merged chunks, and per chunk the embedding of its unchanged
        content. Merged chunks get None: the running average is only a
        comparison key, not an embedding of the joined text.
    """
    if not chunks:
        return [], []

    def embedding_at(i: int) -> Optional[Sequence[float]]:
        return embeddings[i] if i < len(embeddings) else None

    size_limit = max_chunk_size * MERGE_SIZE_FACTOR
    merged: List[TextChunk] = []
    vectors: List[Optional[Sequence[float]]] = []
    current = chunks[0]
    current_embedding = embedding_at(0)
    current_is_merged = False

    for i in range(1, len(chunks)):
        following = chunks[i]
        following_embedding = embedding_at(i)

        if (
            current_embedding is not None
            and following_embedding is not None
            and cosine_similarity(current_embedding, following_embedding) >= threshold
            and len(current.content) + len(following.content) <= size_limit
        ):
            current = _merge_pair(current, following)
            current_embedding = average_embeddings(
                [current_embedding, following_embedding]
            )
            current_is_merged = True
        else:
            merged.append(current)
            vectors.append(None if current_is_merged else current_embedding)
            current = following
            current_embedding = following_embedding
            current_is_merged = False

    merged.append(current)
    vectors.append(None if current_is_merged else current_embedding)

    logger.debug(f"Semantic merge: {len(chunks)} -> {len(merged)} chunks")
    return finalize_chunks(merged), vectors


def merge_similar_chunks(
    chunks: Sequence[TextChunk],
    embeddings: Sequence[Optional[Sequence[float]]],
    threshold: float,
    max_chunk_size: int,
) -> List[TextChunk]:
    """Merge adjacent chunks that are similar enough and stay bounded in size."""
    merged, _ = merge_with_embeddings(chunks, embeddings, threshold, max_chunk_size)
    return merged
