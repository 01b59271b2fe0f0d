"""
Document embedding pipeline.

Orchestrates the chunk-and-embed workflow:
Raw text -> Structural chunks -> (optional) Semantic merge -> Embeddings -> Records

The records pair each final chunk with its vector and are ready to be
upserted into a vector store, which lives outside this package.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from chunking.options import SemanticChunkingOptions
from chunking.semantic_chunker import ChunkingOutcome, semantic_chunking
from chunking.text_chunk import TextChunk
from cost_optimization.cost_estimator import EmbeddingCostTracker
from embeddings.client import EmbeddingClient

logger = logging.getLogger(__name__)


@dataclass
class EmbeddedChunk:
    """A final chunk with its embedding."""

    id: str
    doc_id: str
    chunk: TextChunk
    embedding: List[float]

    def to_record(self, extra_metadata: Optional[Dict] = None) -> Dict:
        """Flat record for a vector store upsert."""
        chunk = self.chunk.to_dict()
        return {
            "id": self.id,
            "values": self.embedding,
            "metadata": {
                "documentId": self.doc_id,
                "content": chunk["content"],
                "startIndex": chunk["startIndex"],
                "endIndex": chunk["endIndex"],
                **chunk["metadata"],
                **(extra_metadata or {}),
            },
        }


@dataclass
class PipelineStats:
    """Statistics from pipeline runs."""

    documents: int = 0
    chunks: int = 0
    semantic_documents: int = 0
    fallbacks: int = 0
    skipped_empty: int = 0
    total_chars_processed: int = 0


@dataclass
class PipelineConfig:
    """Configuration for the embedding pipeline."""

    chunking: SemanticChunkingOptions = field(default_factory=SemanticChunkingOptions)
    model: Optional[str] = None


class DocumentEmbeddingPipeline:
    """
    Chunk documents and embed the final chunks.

    Usage:
        client = EmbeddingClient.from_settings()
        pipeline = DocumentEmbeddingPipeline(client)

        records = pipeline.process_document("grant_123", text)
        stats = pipeline.get_stats()
    """

    def __init__(
        self,
        client: EmbeddingClient,
        config: Optional[PipelineConfig] = None,
        cost_tracker: Optional[EmbeddingCostTracker] = None,
    ):
        """
        Args:
            client: Embedding client
            config: Pipeline configuration
            cost_tracker: Accumulates usage across documents
        """
        self.client = client
        self.config = config or PipelineConfig()
        self.cost_tracker = cost_tracker or EmbeddingCostTracker()
        self.stats = PipelineStats()

    def chunk_document(self, text: str) -> ChunkingOutcome:
        """Chunk a document, merging semantically when possible."""
        outcome = semantic_chunking(
            text, self.client, self.config.chunking, model=self.config.model
        )
        if outcome.usage is not None:
            self.cost_tracker.record(self._model, outcome.usage)
        if outcome.is_semantic:
            self.stats.semantic_documents += 1
        if outcome.fell_back:
            self.stats.fallbacks += 1
        return outcome

    def process_document(self, doc_id: str, text: str) -> List[EmbeddedChunk]:
        """
        Chunk and embed one document.

        Args:
            doc_id: Document identifier
            text: Document text

        Returns:
            Embedded chunks in document order (empty for blank text)

        Raises:
            ProviderError: If embedding the final chunks fails
        """
        self.stats.documents += 1
        self.stats.total_chars_processed += len(text)

        outcome = self.chunk_document(text)
        chunks = outcome.chunks
        if not chunks:
            self.stats.skipped_empty += 1
            logger.warning(f"Document {doc_id} produced no chunks")
            return []

        vectors = self._embed_missing(chunks, outcome.embeddings)
        embedded = [
            EmbeddedChunk(
                id=f"{doc_id}_chunk_{i}",
                doc_id=doc_id,
                chunk=chunk,
                embedding=vector,
            )
            for i, (chunk, vector) in enumerate(zip(chunks, vectors))
            if vector is not None
        ]

        self.stats.chunks += len(embedded)
        logger.info(
            f"Document {doc_id} chunked into {len(embedded)} chunks "
            f"({outcome.kind.value})"
        )
        return embedded

    def _embed_missing(
        self,
        chunks: List[TextChunk],
        known: Optional[List[Optional[List[float]]]],
    ) -> List[Optional[List[float]]]:
        """Reuse vectors from semantic chunking; embed only chunks without one."""
        vectors = list(known) if known is not None else [None] * len(chunks)
        missing = [i for i, vector in enumerate(vectors) if vector is None]
        if not missing:
            return vectors

        batch = self.client.embed_batch(
            [chunks[i].content for i in missing], model=self.config.model
        )
        self.cost_tracker.record(self._model, batch.total_usage)

        for i, vector in zip(missing, batch.aligned(len(missing))):
            vectors[i] = vector

        reused = len(chunks) - len(missing)
        if reused:
            logger.debug(f"Reused {reused} embeddings from semantic chunking")
        return vectors

    def process_batch(self, documents: Dict[str, str]) -> Dict[str, List[EmbeddedChunk]]:
        """Process several documents, keyed by document id."""
        return {
            doc_id: self.process_document(doc_id, text)
            for doc_id, text in documents.items()
        }

    @property
    def _model(self) -> str:
        return self.config.model or self.client.default_model

    def get_stats(self) -> Dict:
        """Get pipeline statistics."""
        return {
            "documents": self.stats.documents,
            "chunks": self.stats.chunks,
            "semantic_documents": self.stats.semantic_documents,
            "fallbacks": self.stats.fallbacks,
            "skipped_empty": self.stats.skipped_empty,
            "total_chars_processed": self.stats.total_chars_processed,
            "cost": self.cost_tracker.get_stats(),
        }

    def reset_stats(self) -> None:
        """Reset statistics for a new run."""
        self.stats = PipelineStats()
        self.cost_tracker.reset()


if __name__ == "__main__":
    import argparse
    import json
    from pathlib import Path

    from shared.logging_config import configure_logging

    parser = argparse.ArgumentParser(description="Chunk and embed a text document")
    parser.add_argument("--input", required=True, help="Input text file")
    parser.add_argument("--doc-id", default=None, help="Document ID")
    parser.add_argument("--no-semantic", action="store_true", help="Skip semantic merge")

    args = parser.parse_args()
    configure_logging()

    path = Path(args.input)
    config = PipelineConfig(
        chunking=SemanticChunkingOptions(use_semantic_boundaries=not args.no_semantic)
    )
    pipeline = DocumentEmbeddingPipeline(EmbeddingClient.from_settings(), config)
    results = pipeline.process_document(args.doc_id or path.stem, path.read_text())

    print(
        json.dumps(
            {
                "chunks": [r.chunk.to_dict() for r in results],
                "stats": pipeline.get_stats(),
            },
            indent=2,
        )
    )
