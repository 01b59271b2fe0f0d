"""
Semantic chunking.

Structural chunks are embedded in one batch and adjacent similar chunks are
merged. Semantic enhancement never blocks the baseline: if it fails, the
outcome carries the structural chunks and the error.

Usage:
    client = EmbeddingClient.from_settings()
    outcome = semantic_chunking(text, client)
    if outcome.is_semantic:
        ...
    chunks = outcome.chunks
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from embeddings.client import EmbeddingClient, TokenUsage

from .boundaries import BoundaryDetector
from .options import SemanticChunkingOptions
from .semantic_merger import merge_with_embeddings
from .splitters import chunk_text
from .text_chunk import TextChunk

logger = logging.getLogger(__name__)


class ChunkingKind(str, Enum):
    STRUCTURAL = "structural"
    SEMANTIC = "semantic"


@dataclass
class ChunkingOutcome:
    """Chunks tagged with how they were produced."""

    kind: ChunkingKind
    chunks: List[TextChunk]
    error: Optional[str] = None
    usage: Optional[TokenUsage] = None
    # Per chunk, the embedding of its unchanged content (None if merged)
    embeddings: Optional[List[Optional[List[float]]]] = None

    @property
    def is_semantic(self) -> bool:
        return self.kind == ChunkingKind.SEMANTIC

    @property
    def fell_back(self) -> bool:
        """True when semantic merging was attempted and failed."""
        return self.error is not None


def semantic_chunking(
    text: str,
    client: EmbeddingClient,
    options: Optional[SemanticChunkingOptions] = None,
    model: Optional[str] = None,
    detector: Optional[BoundaryDetector] = None,
) -> ChunkingOutcome:
    """
    Chunk text structurally, then merge semantically similar neighbours.

    Args:
        text: Document text
        client: Embedding client used for the chunk batch
        options: Semantic chunking options (defaults if None)
        model: Embedding model (client default if None)
        detector: Boundary detector for the structural pass

    Returns:
        SEMANTIC outcome on success, STRUCTURAL when merging is disabled,
        pointless (one chunk or fewer) or failed
    """
    options = options or SemanticChunkingOptions()
    structural = chunk_text(text, options, detector)

    if not options.use_semantic_boundaries or len(structural) <= 1:
        return ChunkingOutcome(kind=ChunkingKind.STRUCTURAL, chunks=structural)

    try:
        batch = client.embed_batch([c.content for c in structural], model=model)
        merged, vectors = merge_with_embeddings(
            structural,
            batch.aligned(len(structural)),
            threshold=options.similarity_threshold,
            max_chunk_size=options.max_chunk_size,
        )
    except Exception as e:
        logger.error(
            f"Error in semantic chunking, falling back to structural chunking: {e}"
        )
        return ChunkingOutcome(
            kind=ChunkingKind.STRUCTURAL, chunks=structural, error=str(e)
        )

    logger.info(
        f"Semantic chunking merged {len(structural)} structural chunks "
        f"into {len(merged)}"
    )
    return ChunkingOutcome(
        kind=ChunkingKind.SEMANTIC,
        chunks=merged,
        usage=batch.total_usage,
        embeddings=vectors,
    )
