"""Tests for token and cost estimation."""

from unittest.mock import patch

import pytest

from cost_optimization.cost_estimator import (
    EmbeddingCostTracker,
    count_tokens,
    estimate_embedding_cost,
    estimate_token_count,
    get_embedding_dimensions,
)
from embeddings.client import TokenUsage


class TestEstimates:
    def test_token_count_rounds_up(self):
        assert estimate_token_count("") == 0
        assert estimate_token_count("abcd") == 1
        assert estimate_token_count("abcde") == 2

    def test_cost_per_million_is_exact(self):
        assert estimate_embedding_cost(1_000_000, "text-embedding-3-small") == 0.02
        assert estimate_embedding_cost(1_000_000, "text-embedding-3-large") == 0.13

    def test_unknown_model_uses_fallback_price(self):
        assert estimate_embedding_cost(1_000_000, "unknown-model") == 0.02

    def test_dimensions(self):
        assert get_embedding_dimensions("text-embedding-3-small") == 1536
        assert get_embedding_dimensions("text-embedding-3-large") == 3072
        assert get_embedding_dimensions("unknown-model") == 1536

    def test_count_tokens_uses_encoder(self):
        with patch("cost_optimization.cost_estimator._enc") as enc:
            enc.encode.return_value = [1, 2, 3]
            assert count_tokens("three tokens here") == 3
            enc.encode.assert_called_once_with("three tokens here")


class TestEmbeddingCostTracker:
    def test_accumulates_per_model(self):
        tracker = EmbeddingCostTracker()

        tracker.record("text-embedding-3-small", TokenUsage(500_000, 500_000))
        tracker.record("text-embedding-3-small", TokenUsage(500_000, 500_000))
        cost = tracker.record("text-embedding-3-large", TokenUsage(1_000_000, 1_000_000))

        assert cost == pytest.approx(0.13)
        assert tracker.total_tokens == 2_000_000
        assert tracker.cost_for("text-embedding-3-small") == pytest.approx(0.02)
        assert tracker.total_cost == pytest.approx(0.15)

        stats = tracker.get_stats()
        assert stats["models"]["text-embedding-3-small"]["requests"] == 2

    def test_reset(self):
        tracker = EmbeddingCostTracker()
        tracker.record("text-embedding-3-small", TokenUsage(10, 10))
        tracker.reset()
        assert tracker.total_tokens == 0
        assert tracker.cost_for("text-embedding-3-small") == 0.0
