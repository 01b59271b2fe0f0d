"""
Embeddings Module.

This module handles:
- Embedding requests through a pluggable provider (OpenAI, local model)
- Sequential batching with a delay between batches
- Cosine similarity and vector averaging
- Similarity search over small candidate sets

Usage:
    from embeddings import EmbeddingClient

    client = EmbeddingClient.from_settings()
    result = client.embed_batch(["text1", "text2"])
"""

from .client import (
    BatchEmbeddingResult,
    EmbeddingClient,
    EmbeddingResult,
    IndexedEmbedding,
    TokenUsage,
)
from .providers import EmbeddingProvider, OpenAIEmbeddingProvider, SentenceTransformerProvider
from .similarity import SimilarText, find_similar_chunks, find_similar_texts
from .vector_math import average_embeddings, cosine_similarity

__all__ = [
    "EmbeddingClient",
    "EmbeddingResult",
    "BatchEmbeddingResult",
    "IndexedEmbedding",
    "TokenUsage",
    "EmbeddingProvider",
    "OpenAIEmbeddingProvider",
    "SentenceTransformerProvider",
    "cosine_similarity",
    "average_embeddings",
    "find_similar_texts",
    "find_similar_chunks",
    "SimilarText",
]
