"""
Configuration module for the chunking and embedding pipeline.
Reads environment variables once; clients are built explicitly from it.
"""

import os
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Optional


def _optional_float(name: str) -> Optional[float]:
    value = os.getenv(name)
    return float(value) if value else None


@dataclass(frozen=True)
class ChunkingDefaults:
    """Chunk size defaults, in characters."""

    max_chunk_size: int = field(
        default_factory=lambda: int(os.getenv("CHUNK_MAX_SIZE", "1000"))
    )
    chunk_overlap: int = field(
        default_factory=lambda: int(os.getenv("CHUNK_OVERLAP", "200"))
    )
    min_chunk_size: int = field(
        default_factory=lambda: int(os.getenv("CHUNK_MIN_SIZE", "100"))
    )


@dataclass(frozen=True)
class Settings:
    """Main settings loaded from environment."""

    # OpenAI settings
    OPENAI_API_KEY: str = field(default_factory=lambda: os.getenv("OPENAI_API_KEY", ""))

    # Embedding settings
    EMBEDDING_MODEL: str = field(
        default_factory=lambda: os.getenv("EMBEDDING_MODEL", "text-embedding-3-small")
    )
    EMBEDDING_BATCH_SIZE: int = field(
        default_factory=lambda: int(os.getenv("EMBEDDING_BATCH_SIZE", "100"))
    )
    EMBEDDING_BATCH_DELAY: float = field(
        default_factory=lambda: float(os.getenv("EMBEDDING_BATCH_DELAY", "0.1"))
    )
    EMBEDDING_TIMEOUT: Optional[float] = field(
        default_factory=lambda: _optional_float("EMBEDDING_TIMEOUT")
    )

    # Application settings
    LOG_LEVEL: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO"))

    chunking: ChunkingDefaults = field(default_factory=ChunkingDefaults)


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
