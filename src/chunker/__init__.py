from .chunker import (
    Chunk,
    find_boundary,
    make_chunks,
    split_lines,
    split_text,
    LOOKAHEAD_CHARS,
    SENTENCE_TERMINATORS,
)


__all__ = [
    # Chunk model
    "Chunk",
    "make_chunks",
    # Splitting functions
    "find_boundary",
    "split_text",
    "split_lines",
    # Constants
    "LOOKAHEAD_CHARS",
    "SENTENCE_TERMINATORS",
]
