"""
Structural text splitting.

Three interchangeable strategies turn raw text into an ordered list of
chunks:
- ParagraphSplitter: greedy accumulation of blank-line separated paragraphs
- SentenceSplitter: greedy accumulation of sentences
- CharacterSplitter: fixed-size sliding window

The paragraph and sentence strategies emit a trailing buffer only when it
reaches `min_chunk_size`; shorter trailing text is dropped.
"""

import logging
from typing import Dict, List, Optional, Type

from .boundaries import BoundaryDetector, RegexBoundaryDetector, Segment
from .options import ChunkingOptions, ChunkingStrategy
from .overlap import get_overlap_sentences, get_overlap_text
from .text_chunk import TextChunk, create_text_chunk, finalize_chunks

logger = logging.getLogger(__name__)


class BaseSplitter:
    """Splits text into chunks with a placeholder `total_chunks`."""

    def __init__(self, detector: Optional[BoundaryDetector] = None):
        self.detector = detector or RegexBoundaryDetector()

    def split(self, text: str, options: ChunkingOptions) -> List[TextChunk]:
        raise NotImplementedError


class ParagraphSplitter(BaseSplitter):
    """Accumulate paragraphs until the next one would exceed the size limit."""

    separator = "\n\n"

    def split(self, text: str, options: ChunkingOptions) -> List[TextChunk]:
        paragraphs = self.detector.paragraphs(text)
        chunks: List[TextChunk] = []
        if not paragraphs:
            return chunks

        current = ""
        start_index = paragraphs[0].start
        end_index = paragraphs[0].start

        for para in paragraphs:
            candidate = current + (self.separator if current else "") + para.text

            if len(candidate) > options.max_chunk_size and current:
                chunks.append(
                    create_text_chunk(current, start_index, end_index, len(chunks))
                )

                overlap = get_overlap_text(current, options.chunk_overlap)
                current = overlap + (self.separator if overlap else "") + para.text
                start_index = _locate_overlap(text, overlap, start_index, para.start)
            else:
                current = candidate
            end_index = para.end

        if current.strip() and len(current) >= options.min_chunk_size:
            chunks.append(create_text_chunk(current, start_index, end_index, len(chunks)))

        return chunks


class SentenceSplitter(BaseSplitter):
    """
    Accumulate sentences until the next one would exceed the size limit.

    Sentences are re-joined with ". " so the original punctuation and
    whitespace are only approximated.
    """

    def split(self, text: str, options: ChunkingOptions) -> List[TextChunk]:
        sentences = self.detector.sentences(text)
        chunks: List[TextChunk] = []
        if not sentences:
            return chunks

        current = ""
        buffered: List[Segment] = []
        last = len(sentences) - 1

        for i, sentence in enumerate(sentences):
            piece = sentence.text + (". " if i < last else "")
            candidate = current + piece

            if len(candidate) > options.max_chunk_size and current:
                chunks.append(self._emit(current, buffered, len(chunks)))

                overlap = get_overlap_sentences(
                    current, options.chunk_overlap, self.detector
                )
                carried = len(self.detector.sentences(overlap)) if overlap else 0
                buffered = buffered[len(buffered) - carried :] if carried else []
                current = overlap + piece
            else:
                current = candidate
            buffered.append(sentence)

        if current.strip() and len(current) >= options.min_chunk_size:
            chunks.append(self._emit(current, buffered, len(chunks)))

        return chunks

    @staticmethod
    def _emit(current: str, buffered: List[Segment], index: int) -> TextChunk:
        return create_text_chunk(current, buffered[0].start, buffered[-1].end, index)


class CharacterSplitter(BaseSplitter):
    """Fixed-size sliding window, optionally snapped back to a space."""

    def split(self, text: str, options: ChunkingOptions) -> List[TextChunk]:
        chunks: List[TextChunk] = []
        start_index = 0
        length = len(text)

        while start_index < length:
            end_index = min(start_index + options.max_chunk_size, length)

            if options.respect_word_boundaries and end_index < length:
                last_space = text.rfind(" ", 0, end_index + 1)
                if last_space > start_index:
                    end_index = last_space

            content = text[start_index:end_index].strip()
            if content and len(content) >= options.min_chunk_size:
                chunks.append(
                    create_text_chunk(content, start_index, end_index, len(chunks))
                )

            if end_index >= length:
                break

            # The +1 floor guarantees progress when overlap >= window size
            start_index = max(end_index - options.chunk_overlap, start_index + 1)

        return chunks


def _locate_overlap(text: str, overlap: str, previous_start: int, para_start: int) -> int:
    """
    Offset of the carried-over overlap, searched backwards from `para_start`.

    Overlap that spans a re-joined paragraph break does not occur verbatim in
    the source. The previous chunk's start is used then, so the span still
    covers all of the content.
    """
    if not overlap:
        return para_start
    found = text.rfind(overlap, previous_start, para_start)
    return found if found >= 0 else previous_start


SPLITTERS: Dict[ChunkingStrategy, Type[BaseSplitter]] = {
    ChunkingStrategy.PARAGRAPH: ParagraphSplitter,
    ChunkingStrategy.SENTENCE: SentenceSplitter,
    ChunkingStrategy.CHARACTER: CharacterSplitter,
}


def get_splitter(
    options: ChunkingOptions, detector: Optional[BoundaryDetector] = None
) -> BaseSplitter:
    """Splitter for the strategy selected by the options' priority chain."""
    return SPLITTERS[options.strategy](detector)


def chunk_text(
    text: str,
    options: Optional[ChunkingOptions] = None,
    detector: Optional[BoundaryDetector] = None,
) -> List[TextChunk]:
    """
    Split text into finalized chunks.

    Args:
        text: Document text
        options: Chunking options (defaults if None)
        detector: Boundary detector (regex heuristic if None)

    Returns:
        Chunks with `chunk_index` 0..n-1 and `total_chunks` == n
    """
    options = options or ChunkingOptions()
    if not text.strip():
        return []

    splitter = get_splitter(options, detector)
    chunks = finalize_chunks(splitter.split(text, options))

    logger.debug(
        f"Split {len(text)} chars into {len(chunks)} chunks "
        f"(strategy={options.strategy.value})"
    )
    return chunks
