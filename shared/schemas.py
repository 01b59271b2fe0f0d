"""
Pydantic models for the embedding provider wire format.

Request:  {model, input}
Response: {data: [{embedding}], usage: {prompt_tokens, total_tokens}}
"""

from typing import List, Union

from pydantic import BaseModel, Field


class EmbeddingRequest(BaseModel):
    """Request sent to an embedding provider."""

    model: str = Field(..., description="Embedding model name")
    input: Union[str, List[str]] = Field(..., description="Text or batch of texts")

    def as_list(self) -> List[str]:
        """Input normalized to a list."""
        return [self.input] if isinstance(self.input, str) else list(self.input)


class EmbeddingData(BaseModel):
    """A single embedding vector in a provider response."""

    embedding: List[float]
    index: int = 0


class EmbeddingUsage(BaseModel):
    """Token usage reported by the provider."""

    prompt_tokens: int = 0
    total_tokens: int = 0


class EmbeddingResponse(BaseModel):
    """Provider response. Empty `data` is treated as a hard failure."""

    data: List[EmbeddingData] = Field(default_factory=list)
    model: str = ""
    usage: EmbeddingUsage = Field(default_factory=EmbeddingUsage)
