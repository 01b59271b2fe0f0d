"""
Ingestion Module.

Chunk documents and embed the final chunks into vector store records.

Usage:
    from ingestion import DocumentEmbeddingPipeline

    pipeline = DocumentEmbeddingPipeline(client)
    records = pipeline.process_document("doc_001", text)
"""

from .ingest_pipeline import (
    DocumentEmbeddingPipeline,
    EmbeddedChunk,
    PipelineConfig,
    PipelineStats,
)

__all__ = [
    "DocumentEmbeddingPipeline",
    "EmbeddedChunk",
    "PipelineConfig",
    "PipelineStats",
]
