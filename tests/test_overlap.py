"""Tests for overlap computation."""

from chunking.boundaries import RegexBoundaryDetector, count_sentences, count_words
from chunking.overlap import get_overlap_sentences, get_overlap_text


class TestOverlapText:
    def test_short_text_returned_whole(self):
        assert get_overlap_text("short", 10) == "short"

    def test_snaps_past_last_period(self):
        text = "One sentence. Two sentence. Three words here"
        assert get_overlap_text(text, 20) == "Three words here"

    def test_no_period_returns_raw_tail(self):
        assert get_overlap_text("abcdefghij", 4) == "ghij"

    def test_zero_overlap(self):
        assert get_overlap_text("anything at all", 0) == ""


class TestOverlapSentences:
    def test_accumulates_whole_sentences(self):
        text = "First one. Second one. Third one."
        assert get_overlap_sentences(text, 30) == "Second one. Third one. "

    def test_never_truncates_a_sentence(self):
        assert get_overlap_sentences("A rather long sentence.", 5) == ""


class TestBoundaries:
    def test_paragraph_offsets(self):
        text = "  First block.\n\n \nSecond block.  "
        segments = RegexBoundaryDetector().paragraphs(text)

        assert [s.text for s in segments] == ["First block.", "Second block."]
        for segment in segments:
            assert text[segment.start : segment.end] == segment.text

    def test_sentence_heuristic_splits_decimals(self):
        # Documented limitation of the regex detector
        segments = RegexBoundaryDetector().sentences("The rate is 3.5 percent.")
        assert [s.text for s in segments] == ["The rate is 3", "5 percent"]

    def test_counts(self):
        assert count_words("  grant   application\nform ") == 3
        assert count_sentences("Apply now! Deadline soon? Yes.") == 3
