"""
Token and cost estimation for embedding calls.

Heuristics only: `estimate_token_count` assumes ~4 characters per token of
English text. Use `count_tokens` for an exact cl100k_base count.
"""

import logging
import math
from dataclasses import dataclass, field
from typing import Dict

import tiktoken

logger = logging.getLogger(__name__)

DEFAULT_EMBEDDING_MODEL = "text-embedding-3-small"

# USD per 1M tokens (update with actual rates)
EMBEDDING_PRICING: Dict[str, float] = {
    "text-embedding-3-small": 0.02,
    "text-embedding-3-large": 0.13,
    "text-embedding-ada-002": 0.10,
}
DEFAULT_PRICE_PER_MILLION = 0.02

EMBEDDING_DIMENSIONS: Dict[str, int] = {
    "text-embedding-3-small": 1536,
    "text-embedding-3-large": 3072,
    "text-embedding-ada-002": 1536,
}
DEFAULT_DIMENSION = 1536

_enc = None


def count_tokens(text: str) -> int:
    """Count tokens using cl100k_base encoding."""
    global _enc
    if _enc is None:
        _enc = tiktoken.get_encoding("cl100k_base")
    return len(_enc.encode(text))


def estimate_token_count(text: str) -> int:
    """Rough token count: 1 token per 4 characters, rounded up."""
    return math.ceil(len(text) / 4)


def get_price_per_million(model: str = DEFAULT_EMBEDDING_MODEL) -> float:
    return EMBEDDING_PRICING.get(model, DEFAULT_PRICE_PER_MILLION)


def get_embedding_dimensions(model: str = DEFAULT_EMBEDDING_MODEL) -> int:
    return EMBEDDING_DIMENSIONS.get(model, DEFAULT_DIMENSION)


def estimate_embedding_cost(
    token_count: int, model: str = DEFAULT_EMBEDDING_MODEL
) -> float:
    """
    Estimated USD cost of embedding `token_count` tokens.

    Unknown models are priced at DEFAULT_PRICE_PER_MILLION.
    """
    return (token_count / 1_000_000) * get_price_per_million(model)


@dataclass
class ModelUsage:
    """Accumulated usage for one model."""

    requests: int = 0
    prompt_tokens: int = 0
    total_tokens: int = 0


@dataclass
class EmbeddingCostTracker:
    """
    Accumulate embedding usage across calls and report estimated spend.

    Usage:
        tracker = EmbeddingCostTracker()
        result = client.embed_batch(texts)
        tracker.record(result.model, result.total_usage)
        tracker.get_stats()
    """

    usage_by_model: Dict[str, ModelUsage] = field(default_factory=dict)

    def record(self, model: str, usage) -> float:
        """
        Record one call's usage.

        Args:
            model: Model name
            usage: Object with `prompt_tokens` and `total_tokens`

        Returns:
            Estimated cost of this call
        """
        entry = self.usage_by_model.setdefault(model, ModelUsage())
        entry.requests += 1
        entry.prompt_tokens += usage.prompt_tokens
        entry.total_tokens += usage.total_tokens

        cost = estimate_embedding_cost(usage.total_tokens, model)
        logger.debug(f"Embedding usage: {usage.total_tokens} tokens on {model} (${cost:.6f})")
        return cost

    def cost_for(self, model: str) -> float:
        entry = self.usage_by_model.get(model)
        if entry is None:
            return 0.0
        return estimate_embedding_cost(entry.total_tokens, model)

    @property
    def total_tokens(self) -> int:
        return sum(u.total_tokens for u in self.usage_by_model.values())

    @property
    def total_cost(self) -> float:
        return sum(self.cost_for(model) for model in self.usage_by_model)

    def get_stats(self) -> Dict:
        """Get usage and cost statistics per model."""
        return {
            "total_tokens": self.total_tokens,
            "total_cost": self.total_cost,
            "models": {
                model: {
                    "requests": u.requests,
                    "prompt_tokens": u.prompt_tokens,
                    "total_tokens": u.total_tokens,
                    "cost": self.cost_for(model),
                }
                for model, u in self.usage_by_model.items()
            },
        }

    def reset(self) -> None:
        self.usage_by_model = {}
