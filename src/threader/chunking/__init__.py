"""
Threader chunking package.

Splits free-form text into length-bounded chunks for character-limited
social platforms, honoring paragraph and sentence boundaries, with
optional `(i/N)` enumeration and per-chunk statistics.
"""

from .boundaries import (
    build_sentences,
    classify_abbreviation,
    extract_paragraphs,
    is_sentence_end,
    normalize_text,
    split_into_words,
)
from .engine import (
    build_base_chunks,
    chunk_by_length,
    enumerate_chunk,
    enumeration_overhead,
    get_chunks,
)
from .richtext import (
    build_chunk_segments,
    create_placeholder_token,
    extract_plain_text,
)
from .statistics import calculate_statistics, format_statistics

__all__ = [
    "build_base_chunks",
    "build_chunk_segments",
    "build_sentences",
    "calculate_statistics",
    "chunk_by_length",
    "classify_abbreviation",
    "create_placeholder_token",
    "enumerate_chunk",
    "enumeration_overhead",
    "extract_paragraphs",
    "extract_plain_text",
    "format_statistics",
    "get_chunks",
    "is_sentence_end",
    "normalize_text",
    "split_into_words",
]
