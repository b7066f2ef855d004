"""
Text statistics for chunks and whole inputs.
"""

from ..core.config import DEFAULT_STATS_TEMPLATE
from ..core.models import ChunkStatistics
from ..core.templates import interpolate
from .boundaries import build_sentences, extract_paragraphs, split_into_words


def calculate_statistics(text: str) -> ChunkStatistics:
    """Count characters, words, sentences and paragraphs in text.

    Characters are counted on the raw text; the other counts reuse the
    chunking tokenizer and boundary detection with sentence breaking on.
    """
    words = split_into_words(text)
    paragraphs = extract_paragraphs(text) if text.strip() else []

    return ChunkStatistics(
        characters=len(text),
        words=len(words),
        sentences=len(build_sentences(words, True)),
        paragraphs=len(paragraphs),
    )


def format_statistics(
    statistics: ChunkStatistics, template: str = DEFAULT_STATS_TEMPLATE
) -> str:
    """Render statistics into a one-line summary."""
    return interpolate(template, statistics.to_dict())
