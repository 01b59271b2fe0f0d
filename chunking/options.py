"""
Chunking options.

Every option is enumerated and defaulted here. Override individual values
with `with_overrides()` instead of merging partial dicts.
"""

import dataclasses
from dataclasses import dataclass
from enum import Enum


class ChunkingStrategy(str, Enum):
    PARAGRAPH = "paragraph"
    SENTENCE = "sentence"
    CHARACTER = "character"


@dataclass(frozen=True)
class ChunkingOptions:
    """Structural chunking configuration. Sizes are in characters."""

    max_chunk_size: int = 1000
    chunk_overlap: int = 200
    preserve_sentences: bool = True
    preserve_paragraphs: bool = True
    min_chunk_size: int = 100
    respect_word_boundaries: bool = True

    def __post_init__(self):
        if self.max_chunk_size <= 0:
            raise ValueError(f"max_chunk_size must be positive, got {self.max_chunk_size}")
        if self.chunk_overlap < 0:
            raise ValueError(f"chunk_overlap must be >= 0, got {self.chunk_overlap}")
        if self.min_chunk_size < 0:
            raise ValueError(f"min_chunk_size must be >= 0, got {self.min_chunk_size}")

    @property
    def strategy(self) -> ChunkingStrategy:
        """Paragraphs win over sentences, sentences over raw characters."""
        if self.preserve_paragraphs:
            return ChunkingStrategy.PARAGRAPH
        if self.preserve_sentences:
            return ChunkingStrategy.SENTENCE
        return ChunkingStrategy.CHARACTER

    def with_overrides(self, **overrides) -> "ChunkingOptions":
        """Return a copy with the given fields replaced (validated again)."""
        return dataclasses.replace(self, **overrides)


@dataclass(frozen=True)
class SemanticChunkingOptions(ChunkingOptions):
    """
    Options for semantic chunking.

    Starts from sentence-level structure, so paragraphs are not preserved
    by default.
    """

    preserve_paragraphs: bool = False
    similarity_threshold: float = 0.8
    # Accepted but not used: merging always sweeps every adjacent pair.
    max_chunks_to_compare: int = 5
    use_semantic_boundaries: bool = True
