"""
Embedding providers.

A provider turns `{model, input}` into `{data: [{embedding}], usage}`.
The client in `embeddings.client` owns batching and validation; providers
only perform a single request.
"""

import logging
from typing import List, Optional, Protocol, Union

from shared.errors import ProviderError
from shared.schemas import EmbeddingData, EmbeddingRequest, EmbeddingResponse, EmbeddingUsage

logger = logging.getLogger(__name__)


class EmbeddingProvider(Protocol):
    """Performs one embedding request."""

    def create_embeddings(
        self, model: str, input: Union[str, List[str]]
    ) -> EmbeddingResponse:
        ...


class OpenAIEmbeddingProvider:
    """
    OpenAI embeddings endpoint.

    Usage:
        provider = OpenAIEmbeddingProvider(api_key="sk-...")
        response = provider.create_embeddings("text-embedding-3-small", ["a", "b"])
    """

    def __init__(self, api_key: str, timeout: Optional[float] = None):
        self.api_key = api_key
        self.timeout = timeout
        self._client = None

    @property
    def client(self):
        """Lazy load OpenAI client."""
        if self._client is None:
            from openai import OpenAI

            kwargs = {"api_key": self.api_key}
            if self.timeout is not None:
                kwargs["timeout"] = self.timeout
            self._client = OpenAI(**kwargs)
        return self._client

    def create_embeddings(
        self, model: str, input: Union[str, List[str]]
    ) -> EmbeddingResponse:
        from openai import OpenAIError

        request = EmbeddingRequest(model=model, input=input)
        try:
            response = self.client.embeddings.create(
                model=request.model, input=request.input
            )
        except OpenAIError as e:
            raise ProviderError(f"OpenAI embeddings request failed: {e}") from e

        usage = response.usage
        return EmbeddingResponse(
            data=[
                EmbeddingData(embedding=item.embedding, index=item.index)
                for item in (response.data or [])
            ],
            model=response.model or model,
            usage=EmbeddingUsage(
                prompt_tokens=getattr(usage, "prompt_tokens", 0) or 0,
                total_tokens=getattr(usage, "total_tokens", 0) or 0,
            ),
        )


class SentenceTransformerProvider:
    """
    Local embedding model via sentence-transformers.

    The `model` argument of each request is ignored; the loaded model is
    fixed at construction. Usage is counted with tiktoken so cost reports
    stay comparable with hosted models.
    """

    def __init__(self, model_name: str = "all-MiniLM-L6-v2", normalize: bool = True):
        self.model_name = model_name
        self.normalize = normalize
        self._model = None

    @property
    def model(self):
        """Lazy load the model."""
        if self._model is None:
            from sentence_transformers import SentenceTransformer

            logger.info(f"Loading embedding model: {self.model_name}")
            self._model = SentenceTransformer(self.model_name)
        return self._model

    def create_embeddings(
        self, model: str, input: Union[str, List[str]]
    ) -> EmbeddingResponse:
        from cost_optimization.cost_estimator import count_tokens

        texts = EmbeddingRequest(model=model, input=input).as_list()
        vectors = self.model.encode(
            texts,
            convert_to_numpy=True,
            normalize_embeddings=self.normalize,
        )
        tokens = sum(count_tokens(t) for t in texts)

        return EmbeddingResponse(
            data=[
                EmbeddingData(embedding=vector.tolist(), index=i)
                for i, vector in enumerate(vectors)
            ],
            model=self.model_name,
            usage=EmbeddingUsage(prompt_tokens=tokens, total_tokens=tokens),
        )
