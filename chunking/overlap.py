"""
Overlap between consecutive chunks.

The tail of an emitted chunk seeds the next one so that context carries
across the boundary. Both helpers snap to sentence boundaries.
"""

from typing import Optional

from .boundaries import BoundaryDetector, RegexBoundaryDetector

_default_detector = RegexBoundaryDetector()


def get_overlap_text(text: str, overlap_size: int) -> str:
    """
    Trailing `overlap_size` characters of text.

    If the tail contains a `.`, everything up to and including the last one
    is dropped so the next chunk does not open on a sentence fragment.
    """
    if overlap_size <= 0:
        return ""
    if len(text) <= overlap_size:
        return text

    tail = text[-overlap_size:]
    last_period = tail.rfind(".")
    if last_period > 0:
        return tail[last_period + 1 :].strip()

    return tail


def get_overlap_sentences(
    text: str,
    overlap_size: int,
    detector: Optional[BoundaryDetector] = None,
) -> str:
    """
    Whole trailing sentences of text fitting in `overlap_size` characters.

    Sentences are re-joined with ". ". A sentence is never truncated.
    """
    detector = detector or _default_detector
    sentences = detector.sentences(text)

    overlap = ""
    length = 0
    for sentence in reversed(sentences):
        piece = sentence.text + ". "
        if length + len(piece) > overlap_size:
            break
        overlap = piece + overlap
        length += len(piece)

    return overlap
