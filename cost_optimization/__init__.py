"""
Cost Optimization Module.

Token and cost estimates for embedding calls.

Usage:
    from cost_optimization import estimate_token_count, estimate_embedding_cost

    tokens = estimate_token_count(text)
    cost = estimate_embedding_cost(tokens, "text-embedding-3-small")
"""

from .cost_estimator import (
    EMBEDDING_DIMENSIONS,
    EMBEDDING_PRICING,
    EmbeddingCostTracker,
    count_tokens,
    estimate_embedding_cost,
    estimate_token_count,
    get_embedding_dimensions,
)

__all__ = [
    "EMBEDDING_DIMENSIONS",
    "EMBEDDING_PRICING",
    "EmbeddingCostTracker",
    "count_tokens",
    "estimate_embedding_cost",
    "estimate_token_count",
    "get_embedding_dimensions",
]
