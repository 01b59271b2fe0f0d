"""
Shared configuration, errors, logging and wire schemas.

Usage:
    from shared import get_settings, configure_logging
    from shared.errors import ProviderError
"""

from .config import ChunkingDefaults, Settings, get_settings
from .errors import (
    DimensionMismatchError,
    EmptyInputError,
    PipelineError,
    ProviderError,
)
from .logging_config import configure_logging
from .schemas import EmbeddingData, EmbeddingRequest, EmbeddingResponse, EmbeddingUsage

__all__ = [
    "Settings",
    "ChunkingDefaults",
    "get_settings",
    "configure_logging",
    "PipelineError",
    "EmptyInputError",
    "DimensionMismatchError",
    "ProviderError",
    "EmbeddingRequest",
    "EmbeddingResponse",
    "EmbeddingData",
    "EmbeddingUsage",
]
