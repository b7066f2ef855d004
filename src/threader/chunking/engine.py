"""
Length-bounded chunking engine.

Sentences are packed greedily into chunks no longer than the maximum
length. A sentence that cannot fit on its own is cut on the nearest space
or punctuation, falling back to a hard cut at the cap.
"""

from __future__ import annotations

import re
from typing import List

from ..core.config import DEFAULT_ENUMERATION_TEMPLATE
from ..core.logging import log
from ..core.models import ThreadingOptions
from ..core.templates import interpolate
from .boundaries import build_sentences, extract_paragraphs, split_into_words

BREAK_CHARACTERS = " .,!?;"
_WHITESPACE = re.compile(r"\s+")


def chunk_by_length(text: str, maximum_length: int) -> List[str]:
    """
    Cut oversized text into pieces of at most maximum_length characters.

    Each piece ends just before the last space or `.,!?;` at or below the
    cap. When the only candidate sits at index 0 there is no clean break
    and the text is cut exactly at the cap.

    Args:
        text: Text to cut; whitespace is collapsed first
        maximum_length: Character cap per piece (clamped to >= 1)

    Returns:
        Ordered list of non-empty pieces
    """
    cap = max(1, maximum_length)
    pieces: List[str] = []
    remaining = _WHITESPACE.sub(" ", text).strip()

    while remaining:
        if len(remaining) <= cap:
            pieces.append(remaining)
            break

        break_index = -1
        for index in range(cap, -1, -1):
            if remaining[index] in BREAK_CHARACTERS:
                break_index = index
                break

        if break_index > 0:
            pieces.append(remaining[:break_index].strip())
            remaining = remaining[break_index:].strip()
        else:
            pieces.append(remaining[:cap])
            remaining = remaining[cap:].strip()

    return pieces


def pack_span(text: str, options: ThreadingOptions) -> List[str]:
    """Greedily pack the sentences of one span into bounded chunks."""
    available_length = options.available_length

    words = split_into_words(text)
    if not words:
        return []

    chunks: List[str] = []
    current = ""

    for sentence in build_sentences(words, options.break_on_sentences):
        if len(sentence) > available_length:
            if current:
                chunks.append(current)
                current = ""
            chunks.extend(chunk_by_length(sentence, available_length))
            continue

        candidate = f"{current} {sentence}" if current else sentence
        if len(candidate) <= available_length:
            current = candidate
        else:
            if current:
                chunks.append(current)
            current = sentence

    if current:
        chunks.append(current)

    return chunks


def pack_paragraphs(text: str, options: ThreadingOptions) -> List[str]:
    """Pack each paragraph on its own so no chunk spans a paragraph break."""
    chunks: List[str] = []
    for paragraph in extract_paragraphs(text):
        if paragraph:
            chunks.extend(pack_span(paragraph, options))
    return chunks


def build_base_chunks(text: str, options: ThreadingOptions) -> List[str]:
    """Chunks before enumeration, honoring the paragraph flag."""
    if options.break_on_paragraphs:
        chunks = pack_paragraphs(text, options)
    else:
        chunks = pack_span(text, options)

    log.debug(
        "chunking.pack.complete",
        chunks=len(chunks),
        maximum_length=options.available_length,
        paragraphs=options.break_on_paragraphs,
        sentences=options.break_on_sentences,
    )
    return chunks


def enumerate_chunk(
    text: str,
    index: int,
    total: int,
    template: str = DEFAULT_ENUMERATION_TEMPLATE,
) -> str:
    """Label a chunk with its 1-based position, e.g. `text (2/5)`."""
    # text goes in last so placeholders inside it are left alone
    return interpolate(
        template, {"current": index + 1, "total": total, "text": text}
    )


def enumeration_overhead(
    total: int, template: str = DEFAULT_ENUMERATION_TEMPLATE
) -> int:
    """Characters the label adds to the chunk with the widest index."""
    if total <= 0:
        return 0
    return len(enumerate_chunk("", total - 1, total, template))


def get_chunks(
    text: str,
    options: ThreadingOptions,
    template: str = DEFAULT_ENUMERATION_TEMPLATE,
) -> List[str]:
    """
    Split text into chunks for posting.

    With enumeration on, the packing budget shrinks by the label overhead
    and packing repeats until the budget stops changing, so every
    labelled chunk fits within maximum_length.

    Args:
        text: Raw user text
        options: Threading configuration
        template: Enumeration label with {text}, {current} and {total}

    Returns:
        Ordered list of chunk strings, labelled when options.enumerate is set
    """
    if not options.enumerate:
        return build_base_chunks(text, options)

    maximum_length = options.available_length
    effective_length = maximum_length
    # Overhead depends only on the digit count of the total, so this is small
    iteration_cap = maximum_length + 1

    for iteration in range(1, iteration_cap + 1):
        chunks = build_base_chunks(
            text, options.model_copy(update={"maximum_length": effective_length})
        )
        if not chunks:
            return []

        overhead = enumeration_overhead(len(chunks), template)
        next_length = max(1, maximum_length - overhead)
        if next_length == effective_length:
            log.debug(
                "chunking.enumerate.converged",
                iterations=iteration,
                effective_length=effective_length,
                chunks=len(chunks),
            )
            break

        effective_length = next_length
    else:
        log.warning(
            "chunking.enumerate.iteration_cap",
            iterations=iteration_cap,
            effective_length=effective_length,
        )

    total = len(chunks)
    return [
        enumerate_chunk(chunk, index, total, template)
        for index, chunk in enumerate(chunks)
    ]
