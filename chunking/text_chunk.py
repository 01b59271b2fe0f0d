"""
Text chunk model and metadata finalization.

Chunks are created with a placeholder `total_chunks` of 0. Once splitting
is complete, `finalize_chunks` patches the total and renumbers indices.
"""

import dataclasses
from dataclasses import dataclass
from typing import Dict, List

from .boundaries import count_sentences, count_words


@dataclass
class ChunkMetadata:
    """Per-chunk counts and position in the final sequence."""

    chunk_index: int
    total_chunks: int
    word_count: int
    character_count: int
    sentence_count: int


@dataclass
class TextChunk:
    """A bounded span of source text with metadata."""

    content: str
    start_index: int
    end_index: int
    metadata: ChunkMetadata

    @property
    def id(self) -> str:
        return f"chunk_{self.metadata.chunk_index}_{self.start_index}_{self.end_index}"

    def to_dict(self) -> Dict:
        """Record shape stored alongside vectors."""
        return {
            "id": self.id,
            "content": self.content,
            "startIndex": self.start_index,
            "endIndex": self.end_index,
            "metadata": {
                "chunkIndex": self.metadata.chunk_index,
                "totalChunks": self.metadata.total_chunks,
                "wordCount": self.metadata.word_count,
                "characterCount": self.metadata.character_count,
                "sentenceCount": self.metadata.sentence_count,
            },
        }


def create_text_chunk(
    content: str, start_index: int, end_index: int, chunk_index: int
) -> TextChunk:
    """Create a chunk with counts computed and a placeholder total."""
    content = content.strip()
    return TextChunk(
        content=content,
        start_index=start_index,
        end_index=end_index,
        metadata=ChunkMetadata(
            chunk_index=chunk_index,
            total_chunks=0,
            word_count=count_words(content),
            character_count=len(content),
            sentence_count=count_sentences(content),
        ),
    )


def finalize_chunks(chunks: List[TextChunk]) -> List[TextChunk]:
    """Return copies with `chunk_index` = position and `total_chunks` = len."""
    total = len(chunks)
    return [
        dataclasses.replace(
            chunk,
            metadata=dataclasses.replace(
                chunk.metadata, chunk_index=i, total_chunks=total
            ),
        )
        for i, chunk in enumerate(chunks)
    ]
