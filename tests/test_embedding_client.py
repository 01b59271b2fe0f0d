"""
Tests for the embedding client.

Covers:
- Single embeddings and validation
- Sequential batching and usage accounting
- Blank input filtering
- Provider failures
"""

import logging
from unittest.mock import patch

import pytest

from embeddings.client import EmbeddingClient, TokenUsage
from shared.config import Settings
from shared.errors import DimensionMismatchError, EmptyInputError, ProviderError
from tests.conftest import EmptyProvider, FailingProvider, FakeProvider


class TestEmbed:
    def test_returns_vector_and_usage(self, client, fake_provider):
        result = client.embed("grant eligibility")

        assert result.embedding == [1.0, 0.0, 0.0]
        assert result.model == "text-embedding-3-small"
        assert result.usage == TokenUsage(prompt_tokens=1, total_tokens=1)
        assert fake_provider.calls == [["grant eligibility"]]

    def test_explicit_model(self, client):
        assert client.embed("text", model="text-embedding-3-large").model == (
            "text-embedding-3-large"
        )

    def test_blank_text(self, client, fake_provider):
        with pytest.raises(EmptyInputError):
            client.embed("   ")
        assert fake_provider.calls == []

    def test_empty_response(self):
        client = EmbeddingClient(EmptyProvider())
        with pytest.raises(ProviderError, match="No embedding"):
            client.embed("text")

    def test_provider_error_propagates(self):
        client = EmbeddingClient(FailingProvider(ConnectionError("Network error")))
        with pytest.raises(ConnectionError, match="Network error"):
            client.embed("text")


class TestEmbedBatch:
    def test_batches_sequentially(self):
        provider = FakeProvider(tokens_per_text=2)
        client = EmbeddingClient(provider, batch_size=100, batch_delay=0.1)
        texts = [f"text {i}" for i in range(250)]

        with patch("embeddings.client.time.sleep") as sleep:
            result = client.embed_batch(texts)

        assert [len(call) for call in provider.calls] == [100, 100, 50]
        assert [e.index for e in result.embeddings] == list(range(250))
        assert result.total_usage.total_tokens == 500
        assert result.total_usage.prompt_tokens == 500
        # Delay only between batches
        assert sleep.call_count == 2
        sleep.assert_called_with(0.1)

    def test_single_batch_has_no_delay(self, fake_provider):
        client = EmbeddingClient(fake_provider, batch_delay=5)
        with patch("embeddings.client.time.sleep") as sleep:
            client.embed_batch(["a", "b"])
        sleep.assert_not_called()

    def test_blank_texts_filtered_with_warning(self, client, fake_provider, caplog):
        with caplog.at_level(logging.WARNING):
            result = client.embed_batch(["first", "  ", "third", ""])

        assert "Filtered out 2 empty texts" in caplog.text
        assert fake_provider.calls == [["first", "third"]]
        assert [e.index for e in result.embeddings] == [0, 2]
        assert result.vector_for(1) is None
        assert result.aligned(4)[1] is None
        assert result.aligned(4)[2] == [1.0, 0.0, 0.0]

    def test_all_blank_texts(self, client, fake_provider):
        result = client.embed_batch(["", " "])
        assert result.embeddings == []
        assert fake_provider.calls == []

    def test_no_texts(self, client):
        with pytest.raises(EmptyInputError, match="No texts provided"):
            client.embed_batch([])

    def test_empty_batch_response_fails_whole_call(self):
        client = EmbeddingClient(EmptyProvider())
        with pytest.raises(ProviderError, match="batch starting at index 0"):
            client.embed_batch(["a", "b"])

    def test_short_batch_response_is_logged_and_rejected(self, caplog):
        provider = FakeProvider()
        original = provider.create_embeddings

        def truncated(model, input):
            response = original(model, input)
            return response.model_copy(update={"data": response.data[:1]})

        provider.create_embeddings = truncated
        client = EmbeddingClient(provider, batch_delay=0)

        with caplog.at_level(logging.ERROR):
            with pytest.raises(ProviderError, match="1 embeddings for a batch of 3"):
                client.embed_batch(["a", "b", "c"])
        assert "1 embeddings for a batch of 3 at index 0" in caplog.text

    def test_failure_in_later_batch_aborts(self):
        provider = FakeProvider()
        calls = {"n": 0}
        original = provider.create_embeddings

        def flaky(model, input):
            calls["n"] += 1
            if calls["n"] == 2:
                raise RuntimeError("rate limited")
            return original(model, input)

        provider.create_embeddings = flaky
        client = EmbeddingClient(provider, batch_size=2, batch_delay=0)

        with pytest.raises(RuntimeError, match="rate limited"):
            client.embed_batch(["a", "b", "c", "d", "e"])
        assert calls["n"] == 2

    def test_invalid_batch_size(self, fake_provider):
        with pytest.raises(ValueError):
            EmbeddingClient(fake_provider, batch_size=0)


class TestDimensions:
    def test_known_models(self, client):
        assert client.get_embedding_dimensions() == 1536
        assert client.get_embedding_dimensions("text-embedding-3-large") == 3072

    def test_unknown_model_falls_back(self, client):
        assert client.get_embedding_dimensions("custom-model") == 1536

    def test_validate_embedding(self, client):
        client.validate_embedding([0.1] * 1536)
        with pytest.raises(DimensionMismatchError):
            client.validate_embedding([1.0, 2.0])


class TestFromSettings:
    def test_builds_openai_client(self):
        settings = Settings(
            OPENAI_API_KEY="test-key",
            EMBEDDING_MODEL="text-embedding-3-large",
            EMBEDDING_BATCH_SIZE=50,
            EMBEDDING_BATCH_DELAY=0.5,
            EMBEDDING_TIMEOUT=10.0,
        )

        client = EmbeddingClient.from_settings(settings)

        assert client.default_model == "text-embedding-3-large"
        assert client.batch_size == 50
        assert client.batch_delay == 0.5
        assert client.provider.api_key == "test-key"
        assert client.provider.timeout == 10.0
