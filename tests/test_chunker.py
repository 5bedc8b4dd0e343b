"""Tests for src.chunker: boundary finding and transcript splitting."""

import pytest

from src.chunker import (
    Chunk,
    LOOKAHEAD_CHARS,
    find_boundary,
    make_chunks,
    split_lines,
    split_text,
)


def _sentences(count):
    return "".join(f"Sentence number {i:04d} is here. " for i in range(count))


SAMPLE_TEXTS = [
    "a" * 25000,
    _sentences(1000),
    "".join(f"Host: line {i}\n" for i in range(3000)),
    "こんにちは。今日はいい天気ですね。" * 1500,
    ("word " * 200 + ".\n") * 40,
]


class TestFindBoundary:
    def test_returns_index_after_period(self):
        """The cut lands right after the first terminator."""
        text = "Hello world. Next sentence"
        assert find_boundary(text, 3) == 12

    def test_full_width_period(self):
        text = "こんにちは。世界"
        assert find_boundary(text, 0) == 6

    def test_newline_is_a_boundary(self):
        text = "Host: hi\nGuest: hello"
        assert find_boundary(text, 2) == 9

    def test_never_moves_backward(self):
        """A terminator before the target is ignored."""
        text = "Done. and then some more words"
        assert find_boundary(text, 10) == 10

    def test_terminator_at_target_position(self):
        text = "abc.def"
        assert find_boundary(text, 3) == 4

    def test_last_position_inside_window(self):
        """A terminator on the 500th scanned character is still found."""
        text = "a" * (LOOKAHEAD_CHARS - 1) + "."
        assert find_boundary(text, 0) == LOOKAHEAD_CHARS

    def test_no_terminator_within_window(self):
        """Target is returned unchanged when the window has no terminator."""
        text = "a" * LOOKAHEAD_CHARS + ". tail"
        assert find_boundary(text, 0) == 0

    def test_target_at_end_of_text(self):
        text = "no terminator here"
        assert find_boundary(text, len(text)) == len(text)

    def test_out_of_range_target(self):
        with pytest.raises(ValueError):
            find_boundary("abc", 4)
        with pytest.raises(ValueError):
            find_boundary("abc", -1)

    def test_monotonic_over_positions(self):
        text = _sentences(50)
        for position in range(0, len(text) + 1, 37):
            assert find_boundary(text, position) >= position


class TestSplitText:
    def test_short_text_single_chunk(self):
        """Text under the threshold is returned whole."""
        text = "Hello world."
        assert split_text(text, 100) == [text]

    def test_exact_threshold(self):
        text = "a" * 100
        assert split_text(text, 100) == [text]

    def test_empty_text(self):
        assert split_text("", 100) == [""]

    def test_invalid_threshold(self):
        with pytest.raises(ValueError):
            split_text("abc", 0)

    def test_chunk_count(self):
        """25,000 chars at a 12,000 threshold give 3 chunks."""
        chunks = split_text("a" * 25000, 12000)
        assert len(chunks) == 3
        assert [len(c) for c in chunks] == [8334, 8334, 8332]

    def test_lossless_partition(self):
        for text in SAMPLE_TEXTS:
            chunks = split_text(text, 12000)
            assert "".join(chunks) == text

    def test_no_empty_chunks(self):
        for text in SAMPLE_TEXTS:
            assert all(len(chunk) > 0 for chunk in split_text(text, 5000))

    def test_chunks_end_on_sentences(self):
        """Every chunk except the last ends on a sentence terminator."""
        chunks = split_text(_sentences(1000), 12000)
        assert len(chunks) == 3
        for chunk in chunks[:-1]:
            assert chunk.endswith(".")

    def test_boundary_reaching_end_stops_early(self):
        """A boundary that lands on the end of text never leaves an empty chunk."""
        text = "a" * 11 + "."
        chunks = split_text(text, 10)
        assert chunks == [text]

    def test_chunks_stay_near_target_size(self):
        chunks = split_text(_sentences(1000), 12000)
        for chunk in chunks:
            assert len(chunk) <= 10000 + LOOKAHEAD_CHARS


class TestSplitLines:
    def test_short_text_single_chunk(self):
        text = "line one\nline two\n"
        assert split_lines(text, 100) == [text]

    def test_lossless_partition(self):
        for text in SAMPLE_TEXTS:
            assert "".join(split_lines(text, 10000)) == text

    def test_never_splits_a_line(self):
        lines = [f"Guest A: this is line number {i}\n" for i in range(500)]
        text = "".join(lines)
        for chunk in split_lines(text, 1000):
            assert chunk.endswith("\n")
            assert len(chunk) <= 1000

    def test_oversized_line_is_its_own_chunk(self):
        long_line = "x" * 300 + "\n"
        text = "short\n" + long_line + "short again\n"
        chunks = split_lines(text, 100)
        assert chunks == ["short\n", long_line, "short again\n"]

    def test_text_without_trailing_newline(self):
        text = "\n".join(f"line {i}" for i in range(100))
        chunks = split_lines(text, 120)
        assert "".join(chunks) == text
        assert not chunks[-1].endswith("\n")

    def test_invalid_target(self):
        with pytest.raises(ValueError):
            split_lines("abc", 0)


class TestMakeChunks:
    def test_positions_and_labels(self):
        chunks = make_chunks(["a", "b", "c"])
        assert chunks[0] == Chunk(text="a", index=0, total=3)
        assert [c.label for c in chunks] == [
            "part 1 of 3",
            "part 2 of 3",
            "part 3 of 3",
        ]
