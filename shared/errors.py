"""
Error taxonomy for the chunking and embedding pipeline.

Validation errors fail fast for a single call. Provider errors propagate
from the embedding client without retry.
"""


class PipelineError(Exception):
    """Base class for pipeline errors."""

    pass


class EmptyInputError(PipelineError, ValueError):
    """Raised when text or a vector list is empty."""

    pass


class DimensionMismatchError(PipelineError, ValueError):
    """Raised when two vectors (or a vector and a model) disagree on length."""

    pass


class ProviderError(PipelineError):
    """Raised when the embedding provider fails or returns no data."""

    pass
