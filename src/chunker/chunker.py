import logging
import math

from dataclasses import dataclass


# Sentence terminators a chunk may end on: full-width period, ASCII period, newline
SENTENCE_TERMINATORS = ("。", ".", "\n")
LOOKAHEAD_CHARS = 500


@dataclass(frozen=True)
class Chunk:
    """A contiguous slice of a parent text with its position in the split."""

    text: str
    index: int
    total: int

    @property
    def label(self) -> str:
        return f"part {self.index + 1} of {self.total}"


def find_boundary(
    text: str, target_position: int, lookahead: int = LOOKAHEAD_CHARS
) -> int:
    """
    Find the nearest safe cut point at or after a target offset.

    Scans forward from `target_position` for at most `lookahead` characters and
    returns the index right after the first sentence terminator. Never moves
    backward.

    Parameters:
        text (str): Text being split.
        target_position (int): Naive cut offset, within [0, len(text)].
        lookahead (int): Maximum number of characters to scan. Defaults to 500.

    Returns:
        int: Index right after the terminator, or `target_position` unchanged if
        no terminator is found inside the window.

    Raises:
        ValueError: If `target_position` is outside [0, len(text)].
    """
    if not 0 <= target_position <= len(text):
        raise ValueError(
            f"target_position {target_position} outside [0, {len(text)}]"
        )

    window_end = min(target_position + lookahead, len(text))
    for i in range(target_position, window_end):
        if text[i] in SENTENCE_TERMINATORS:
            return i + 1
    return target_position


def split_text(text: str, threshold_chars: int) -> list[str]:
    """
    Split text into evenly sized chunks ending on sentence boundaries.

    Parameters:
        text (str): Text to split.
        threshold_chars (int): Maximum size of an unsplit text, also the target chunk size.

    Returns:
        list[str]: Chunks in order; joining them reproduces `text` exactly. A
        single-item list containing the original text if it fits within the threshold.
    """
    logger = logging.getLogger("chunker")

    if threshold_chars < 1:
        raise ValueError("threshold_chars must be at least 1")

    text_len = len(text)
    if text_len <= threshold_chars:
        return [text]

    num_chunks = math.ceil(text_len / threshold_chars)
    chunk_size = math.ceil(text_len / num_chunks)

    chunks: list[str] = []
    current_pos = 0
    for i in range(num_chunks):
        if current_pos >= text_len:
            break
        if i == num_chunks - 1:
            end = text_len
        else:
            end = find_boundary(text, min(current_pos + chunk_size, text_len))
        chunks.append(text[current_pos:end])
        current_pos = end

    logger.info(
        f"Split {text_len} chars into {len(chunks)} chunks "
        f"(threshold {threshold_chars}, target size {chunk_size})"
    )
    return chunks


def split_lines(text: str, target_chars: int) -> list[str]:
    """
    Split text into chunks made of whole lines.

    Lines are accumulated until adding the next one would exceed `target_chars`.
    A line longer than the target becomes a chunk on its own; no line is ever cut.

    Parameters:
        text (str): Text to split.
        target_chars (int): Target maximum chunk size in characters.

    Returns:
        list[str]: Chunks in order, line endings preserved.
    """
    if target_chars < 1:
        raise ValueError("target_chars must be at least 1")

    if len(text) <= target_chars:
        return [text]

    chunks: list[str] = []
    current = ""
    for line in text.splitlines(keepends=True):
        if current and len(current) + len(line) > target_chars:
            chunks.append(current)
            current = ""
        current += line
    if current:
        chunks.append(current)

    logging.getLogger("chunker").info(
        f"Split {len(text)} chars into {len(chunks)} line chunks (target {target_chars})"
    )
    return chunks


def make_chunks(pieces: list[str]) -> list[Chunk]:
    """Attach positional context to split pieces."""
    total = len(pieces)
    return [Chunk(text=piece, index=i, total=total) for i, piece in enumerate(pieces)]
