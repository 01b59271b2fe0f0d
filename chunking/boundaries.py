"""
Paragraph and sentence boundary detection.

The regex detector is a heuristic. It splits on every `.`, `!` and `?`, so
abbreviations ("Dr."), decimals ("3.5") and code blocks produce spurious
sentence breaks. Swap in another `BoundaryDetector` when that matters.
"""

import re
from dataclasses import dataclass
from typing import List, Protocol

PARAGRAPH_SEPARATOR = re.compile(r"\n\s*\n")
SENTENCE_TERMINATOR = re.compile(r"[.!?]+")
WHITESPACE = re.compile(r"\s+")


@dataclass(frozen=True)
class Segment:
    """A trimmed span of the source text."""

    text: str
    start: int
    end: int


def split_spans(text: str, separator: "re.Pattern") -> List[Segment]:
    """
    Split text on a separator pattern, keeping offsets.

    Segments are stripped and whitespace-only segments are dropped.
    """
    segments = []
    pos = 0
    pieces = []
    for match in separator.finditer(text):
        pieces.append((pos, match.start()))
        pos = match.end()
    pieces.append((pos, len(text)))

    for start, end in pieces:
        raw = text[start:end]
        stripped = raw.strip()
        if not stripped:
            continue
        offset = start + (len(raw) - len(raw.lstrip()))
        segments.append(Segment(text=stripped, start=offset, end=offset + len(stripped)))

    return segments


class BoundaryDetector(Protocol):
    """Finds paragraph and sentence boundaries in text."""

    def paragraphs(self, text: str) -> List[Segment]:
        ...

    def sentences(self, text: str) -> List[Segment]:
        ...


class RegexBoundaryDetector:
    """Blank lines separate paragraphs; runs of `.!?` end sentences."""

    def paragraphs(self, text: str) -> List[Segment]:
        return split_spans(text, PARAGRAPH_SEPARATOR)

    def sentences(self, text: str) -> List[Segment]:
        return split_spans(text, SENTENCE_TERMINATOR)


def count_words(text: str) -> int:
    return len([w for w in WHITESPACE.split(text) if w.strip()])


def count_sentences(text: str) -> int:
    return len([s for s in SENTENCE_TERMINATOR.split(text) if s.strip()])
