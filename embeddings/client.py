"""
Embedding client with batching and rate-limit throttling.

The client is constructed explicitly and passed to callers; there is no
module-level instance.

Batching rules:
- Blank inputs are dropped with a warning, not an error
- Batches are sent strictly one after another, with a short delay between
  them to stay under provider rate limits
- An empty response for any batch fails the whole call
"""

import logging
import time
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from cost_optimization.cost_estimator import DEFAULT_EMBEDDING_MODEL, get_embedding_dimensions
from shared.config import Settings, get_settings
from shared.errors import DimensionMismatchError, EmptyInputError, ProviderError

from .providers import EmbeddingProvider, OpenAIEmbeddingProvider

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TokenUsage:
    """Token counters reported by the provider."""

    prompt_tokens: int = 0
    total_tokens: int = 0

    def __add__(self, other: "TokenUsage") -> "TokenUsage":
        return TokenUsage(
            prompt_tokens=self.prompt_tokens + other.prompt_tokens,
            total_tokens=self.total_tokens + other.total_tokens,
        )


@dataclass
class EmbeddingResult:
    """A single embedding."""

    embedding: List[float]
    model: str
    usage: TokenUsage


@dataclass
class IndexedEmbedding:
    """An embedding and the position of its text in the caller's input."""

    embedding: List[float]
    index: int


@dataclass
class BatchEmbeddingResult:
    """Embeddings for a list of texts, with usage summed over all batches."""

    embeddings: List[IndexedEmbedding]
    model: str
    total_usage: TokenUsage = field(default_factory=TokenUsage)

    def vector_for(self, index: int) -> Optional[List[float]]:
        """Vector for input position `index`, or None if it was filtered."""
        for item in self.embeddings:
            if item.index == index:
                return item.embedding
        return None

    def aligned(self, count: int) -> List[Optional[List[float]]]:
        """Vectors aligned with the first `count` inputs (None where missing)."""
        vectors: List[Optional[List[float]]] = [None] * count
        for item in self.embeddings:
            if 0 <= item.index < count:
                vectors[item.index] = item.embedding
        return vectors


class EmbeddingClient:
    """
    Embedding client over an `EmbeddingProvider`.

    Usage:
        client = EmbeddingClient(OpenAIEmbeddingProvider(api_key="sk-..."))
        result = client.embed("grant eligibility criteria")
        batch = client.embed_batch(chunk_texts)

        # From environment settings
        client = EmbeddingClient.from_settings()
    """

    def __init__(
        self,
        provider: EmbeddingProvider,
        default_model: str = DEFAULT_EMBEDDING_MODEL,
        batch_size: int = 100,
        batch_delay: float = 0.1,
    ):
        """
        Args:
            provider: Performs individual embedding requests
            default_model: Model used when a call does not name one
            batch_size: Maximum texts per provider request
            batch_delay: Seconds to wait between batches
        """
        if batch_size <= 0:
            raise ValueError(f"batch_size must be positive, got {batch_size}")
        self.provider = provider
        self.default_model = default_model
        self.batch_size = batch_size
        self.batch_delay = batch_delay

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "EmbeddingClient":
        """Build an OpenAI-backed client from settings."""
        settings = settings or get_settings()
        provider = OpenAIEmbeddingProvider(
            api_key=settings.OPENAI_API_KEY,
            timeout=settings.EMBEDDING_TIMEOUT,
        )
        return cls(
            provider=provider,
            default_model=settings.EMBEDDING_MODEL,
            batch_size=settings.EMBEDDING_BATCH_SIZE,
            batch_delay=settings.EMBEDDING_BATCH_DELAY,
        )

    def embed(self, text: str, model: Optional[str] = None) -> EmbeddingResult:
        """
        Embed a single text.

        Raises:
            EmptyInputError: If text is blank
            ProviderError: If the provider fails or returns no data
        """
        model = model or self.default_model
        if not text.strip():
            raise EmptyInputError("Text cannot be empty")

        try:
            response = self.provider.create_embeddings(model=model, input=text)
        except Exception as e:
            logger.error(f"Error generating embedding: {e}")
            raise

        if not response.data:
            logger.error("No embedding returned from provider")
            raise ProviderError("No embedding returned from provider")

        return EmbeddingResult(
            embedding=response.data[0].embedding,
            model=model,
            usage=TokenUsage(
                prompt_tokens=response.usage.prompt_tokens,
                total_tokens=response.usage.total_tokens,
            ),
        )

    def embed_batch(
        self, texts: Sequence[str], model: Optional[str] = None
    ) -> BatchEmbeddingResult:
        """
        Embed many texts in sequential batches.

        Each returned `IndexedEmbedding.index` is the position of the text in
        `texts`. Blank texts are skipped, so their positions have no vector.

        Raises:
            EmptyInputError: If `texts` is empty
            ProviderError: If any batch response is empty or misaligned
        """
        model = model or self.default_model
        if not texts:
            raise EmptyInputError("No texts provided")

        valid = [(i, t) for i, t in enumerate(texts) if t.strip()]
        dropped = len(texts) - len(valid)
        if dropped:
            logger.warning(f"Filtered out {dropped} empty texts")

        embeddings: List[IndexedEmbedding] = []
        usage = TokenUsage()

        for offset in range(0, len(valid), self.batch_size):
            batch = valid[offset : offset + self.batch_size]

            try:
                response = self.provider.create_embeddings(
                    model=model, input=[t for _, t in batch]
                )
            except Exception as e:
                logger.error(f"Error generating batch embeddings at offset {offset}: {e}")
                raise

            if not response.data:
                logger.error(f"No embeddings returned for batch starting at index {offset}")
                raise ProviderError(
                    f"No embeddings returned for batch starting at index {offset}"
                )
            if len(response.data) != len(batch):
                message = (
                    f"Provider returned {len(response.data)} embeddings "
                    f"for a batch of {len(batch)} at index {offset}"
                )
                logger.error(message)
                raise ProviderError(message)

            ordered = sorted(response.data, key=lambda d: d.index)
            embeddings.extend(
                IndexedEmbedding(embedding=item.embedding, index=original_index)
                for item, (original_index, _) in zip(ordered, batch)
            )
            usage = usage + TokenUsage(
                prompt_tokens=response.usage.prompt_tokens,
                total_tokens=response.usage.total_tokens,
            )

            logger.debug(
                f"Embedded batch {offset // self.batch_size + 1} "
                f"({len(batch)} texts, {response.usage.total_tokens} tokens)"
            )

            if offset + self.batch_size < len(valid):
                time.sleep(self.batch_delay)

        return BatchEmbeddingResult(embeddings=embeddings, model=model, total_usage=usage)

    def get_embedding_dimensions(self, model: Optional[str] = None) -> int:
        return get_embedding_dimensions(model or self.default_model)

    def validate_embedding(
        self, embedding: Sequence[float], model: Optional[str] = None
    ) -> None:
        """
        Check a vector's length against the model's dimension.

        Raises:
            DimensionMismatchError: If the lengths differ
        """
        expected = self.get_embedding_dimensions(model)
        if len(embedding) != expected:
            raise DimensionMismatchError(
                f"Expected {expected}-dimension embedding, got {len(embedding)}"
            )
