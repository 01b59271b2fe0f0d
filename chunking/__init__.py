"""
Chunking Module.

Splits text into bounded, overlapping chunks for embedding and retrieval:
- Paragraph, sentence and character splitting strategies
- Sentence-aware overlap between consecutive chunks
- Semantic merging of similar adjacent chunks

Usage:
    from chunking import ChunkingOptions, chunk_text

    chunks = chunk_text(text, ChunkingOptions(max_chunk_size=800))

    from chunking import semantic_chunking
    outcome = semantic_chunking(text, client)
"""

from .boundaries import BoundaryDetector, RegexBoundaryDetector, Segment
from .options import ChunkingOptions, ChunkingStrategy, SemanticChunkingOptions
from .overlap import get_overlap_sentences, get_overlap_text
from .semantic_chunker import ChunkingKind, ChunkingOutcome, semantic_chunking
from .semantic_merger import merge_similar_chunks, merge_with_embeddings
from .splitters import (
    CharacterSplitter,
    ParagraphSplitter,
    SentenceSplitter,
    chunk_text,
    get_splitter,
)
from .text_chunk import ChunkMetadata, TextChunk, create_text_chunk, finalize_chunks

__all__ = [
    "ChunkingOptions",
    "SemanticChunkingOptions",
    "ChunkingStrategy",
    "BoundaryDetector",
    "RegexBoundaryDetector",
    "Segment",
    "TextChunk",
    "ChunkMetadata",
    "create_text_chunk",
    "finalize_chunks",
    "get_overlap_text",
    "get_overlap_sentences",
    "ParagraphSplitter",
    "SentenceSplitter",
    "CharacterSplitter",
    "get_splitter",
    "chunk_text",
    "merge_similar_chunks",
    "merge_with_embeddings",
    "semantic_chunking",
    "ChunkingOutcome",
    "ChunkingKind",
]
