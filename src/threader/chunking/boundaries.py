"""
Boundary detection for chunking: line normalization, paragraphs, words
and sentences.

Sentence detection is heuristic. A token ending in `.`, `!` or `?` closes a
sentence unless it looks like an abbreviation, a decimal number or a lone
leading ordinal. An ellipsis always closes a sentence.
"""

import re
from typing import List, Optional

from ..core.models import AbbreviationClass

LINE_SEPARATOR_PATTERN = re.compile(r"\r\n|\r|\n|\u2028|\u2029|\u0085|\u000b|\u000c")
EMBEDDED_WHITESPACE_BETWEEN_BREAKS = re.compile(r"\n[^\S\n]+\n")
MULTIPLE_WHITESPACE_PATTERN = re.compile(r"\s+")
TAB_CHARACTER_PATTERN = re.compile(r"\t+")

TRAILING_WRAPPING_CHARACTERS = "\"')]}"
LEADING_PUNCTUATION_TO_IGNORE = "\"'([{“”‘’`"
SENTENCE_TERMINATORS = ".!?"

LIST_MARKER_PATTERN = re.compile(r"^(?:[-*+•‣◦]|[0-9]+[.)]|[a-zA-Z][.)])\s+")
MULTI_INITIAL_PATTERN = re.compile(r"(?:[a-z]\.){2,}", re.IGNORECASE)
SINGLE_INITIAL_PATTERN = re.compile(r"[a-z]\.", re.IGNORECASE)
ORDINAL_NUMBER_PATTERN = re.compile(r"[0-9]+(?:st|nd|rd|th)?\.", re.IGNORECASE)
ELLIPSIS_PATTERN = re.compile(r"\u2026|\.\.\.$")
DECIMAL_LIKE_PATTERN = re.compile(r"[0-9]+\.[0-9]+")

STRICT_NON_TERMINATING_ABBREVIATIONS = frozenset(
    {
        "capt.",
        "dr.",
        "gov.",
        "hon.",
        "jr.",
        "lt.",
        "mr.",
        "mrs.",
        "ms.",
        "prof.",
        "sr.",
        "st.",
    }
)

FLEXIBLE_ABBREVIATIONS = frozenset(
    {
        "approx.",
        "appt.",
        "ave.",
        "corp.",
        "etc.",
        "fig.",
        "inc.",
        "vs.",
        "i.e.",
        "e.g.",
        "u.s.",
        "u.k.",
        "a.m.",
        "p.m.",
        "no.",
        "vol.",
    }
)


def normalize_text(text: str) -> str:
    """Canonicalize line breaks and non-breaking spaces.

    Every recognized line separator becomes `\\n`, U+00A0 becomes a plain
    space, and a line holding only inline whitespace collapses into a
    paragraph break.
    """
    text = text.replace("\u00a0", " ")
    text = LINE_SEPARATOR_PATTERN.sub("\n", text)
    return EMBEDDED_WHITESPACE_BETWEEN_BREAKS.sub("\n\n", text)


def _sanitize_line(line: str) -> str:
    return TAB_CHARACTER_PATTERN.sub(" ", line).strip()


def strip_trailing_wrapping_characters(token: str) -> str:
    """Remove closing quotes and brackets from the end of a token."""
    return token.rstrip(TRAILING_WRAPPING_CHARACTERS)


def first_significant_character(value: str) -> str:
    """First character that is not a leading quote or bracket, or ''."""
    for character in value:
        if character not in LEADING_PUNCTUATION_TO_IGNORE:
            return character
    return ""


def _ends_with_terminator(value: str) -> bool:
    return bool(value) and value[-1] in SENTENCE_TERMINATORS


def should_start_new_paragraph(previous_line: str, current_line: str) -> bool:
    """Decide whether current_line opens a paragraph with no blank line before it.

    A list marker always starts a paragraph. Otherwise the previous line
    must end a sentence and the current line must open with an uppercase
    letter or a digit.
    """
    if LIST_MARKER_PATTERN.match(current_line):
        return True

    stripped_previous = strip_trailing_wrapping_characters(previous_line)
    if not _ends_with_terminator(stripped_previous):
        return False

    first = first_significant_character(current_line)
    if not first or not first.isascii() or not first.isalnum():
        return False

    return first.upper() == first


def extract_paragraphs(text: str) -> List[str]:
    """Split text into trimmed, non-empty paragraphs."""
    if not text.strip():
        return []

    lines = normalize_text(text).split("\n")

    paragraphs: List[str] = []
    current: List[str] = []

    for raw_line in lines:
        line = _sanitize_line(raw_line)

        if not line:
            # Blank line closes the current paragraph
            if current:
                paragraphs.append(" ".join(current).strip())
                current = []
            continue

        if current and should_start_new_paragraph(current[-1], line):
            paragraphs.append(" ".join(current).strip())
            current = [line]
            continue

        current.append(line)

    if current:
        paragraphs.append(" ".join(current).strip())

    return paragraphs


def split_into_words(text: str) -> List[str]:
    """Split text into words, keeping punctuation attached to its word.

    Double quotes toggle a quoted span; spaces inside a quoted span do not
    separate words, so `"two words"` is one token. An unmatched quote runs
    to the end of the text.
    """
    normalized = LINE_SEPARATOR_PATTERN.sub(" ", text).replace("\u00a0", " ")
    normalized = MULTIPLE_WHITESPACE_PATTERN.sub(" ", normalized).strip()
    if not normalized:
        return []

    words: List[str] = []
    current = []
    inside_quote = False

    for character in normalized:
        if character == " " and not inside_quote:
            if current:
                words.append("".join(current))
                current = []
            continue

        if character == '"':
            inside_quote = not inside_quote

        current.append(character)

    if current:
        words.append("".join(current))

    return words


def classify_abbreviation(token: str) -> Optional[AbbreviationClass]:
    """Classify a token as a strict or flexible abbreviation, or None."""
    normalized = strip_trailing_wrapping_characters(token).lower()
    if not normalized:
        return None

    if normalized in STRICT_NON_TERMINATING_ABBREVIATIONS:
        return AbbreviationClass.STRICT

    # Initials are checked before the flexible table, so "e.g." is strict
    if MULTI_INITIAL_PATTERN.fullmatch(normalized):
        return AbbreviationClass.STRICT

    if SINGLE_INITIAL_PATTERN.fullmatch(normalized):
        return AbbreviationClass.STRICT

    if normalized in FLEXIBLE_ABBREVIATIONS:
        return AbbreviationClass.FLEXIBLE

    return None


def is_decimal_notation(token: str) -> bool:
    """True for a stripped token like `3.14` whose period is not a terminator."""
    return DECIMAL_LIKE_PATTERN.fullmatch(token) is not None


def is_sentence_end(
    word: str, next_word: Optional[str], current_sentence_length: int
) -> bool:
    """
    Decide whether word closes the sentence being built.

    Checks run in a fixed order: ellipsis wins over the decimal, ordinal
    and abbreviation exceptions.

    Args:
        word: Token just appended to the sentence
        next_word: Following token, or None at the end of the stream
        current_sentence_length: Tokens in the sentence including word

    Returns:
        True when the sentence ends after word
    """
    stripped = strip_trailing_wrapping_characters(word)
    if not stripped:
        return False

    if not _ends_with_terminator(stripped):
        return False

    if ELLIPSIS_PATTERN.search(stripped):
        return True

    if is_decimal_notation(stripped):
        return False

    # A lone leading number like "1." or "2nd." is a list marker, not a sentence
    if ORDINAL_NUMBER_PATTERN.fullmatch(stripped) and current_sentence_length <= 1:
        return False

    abbreviation = classify_abbreviation(stripped)
    if abbreviation is AbbreviationClass.STRICT:
        return False

    if abbreviation is AbbreviationClass.FLEXIBLE:
        lead = first_significant_character((next_word or "").strip())
        if not lead:
            return True
        return lead.lower() != lead

    return True


def build_sentences(words: List[str], break_on_sentences: bool) -> List[str]:
    """Group words into sentences.

    With break_on_sentences off, all words form a single sentence.
    """
    if not words:
        return []

    if not break_on_sentences:
        return [" ".join(words)]

    sentences: List[str] = []
    current: List[str] = []

    for index, word in enumerate(words):
        current.append(word)
        next_word = words[index + 1] if index + 1 < len(words) else None
        if is_sentence_end(word, next_word, len(current)):
            sentences.append(" ".join(current))
            current = []

    if current:
        sentences.append(" ".join(current))

    return sentences
