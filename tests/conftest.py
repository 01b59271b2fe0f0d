"""Shared fixtures: fake embedding providers."""

from typing import Callable, List, Optional, Union

import pytest

from embeddings.client import EmbeddingClient
from shared.schemas import EmbeddingData, EmbeddingResponse, EmbeddingUsage


class FakeProvider:
    """Records requests and returns vectors from `vector_fn`."""

    def __init__(
        self,
        vector_fn: Optional[Callable[[str], List[float]]] = None,
        tokens_per_text: int = 1,
    ):
        self.vector_fn = vector_fn or (lambda text: [1.0, 0.0, 0.0])
        self.tokens_per_text = tokens_per_text
        self.calls: List[List[str]] = []

    def create_embeddings(self, model: str, input: Union[str, List[str]]) -> EmbeddingResponse:
        texts = [input] if isinstance(input, str) else list(input)
        self.calls.append(texts)
        tokens = self.tokens_per_text * len(texts)
        return EmbeddingResponse(
            data=[
                EmbeddingData(embedding=self.vector_fn(t), index=i)
                for i, t in enumerate(texts)
            ],
            model=model,
            usage=EmbeddingUsage(prompt_tokens=tokens, total_tokens=tokens),
        )


class FailingProvider:
    """Raises on every request."""

    def __init__(self, error: Exception = None):
        self.error = error or ConnectionError("provider unreachable")
        self.calls = 0

    def create_embeddings(self, model, input):
        self.calls += 1
        raise self.error


class EmptyProvider:
    """Returns responses with no data."""

    def create_embeddings(self, model, input):
        return EmbeddingResponse(data=[], model=model)


@pytest.fixture
def fake_provider():
    return FakeProvider()


@pytest.fixture
def client(fake_provider):
    return EmbeddingClient(fake_provider, batch_delay=0)


@pytest.fixture
def sample_document():
    paragraphs = []
    for p in range(6):
        sentences = [
            f"Paragraph {p} sentence {s} describes the eligibility rules for applicants."
            for s in range(4)
        ]
        paragraphs.append(" ".join(sentences))
    return "\n\n".join(paragraphs)
