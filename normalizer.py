"""
phrasemeter.normalizer

Text canonicalization and the two tokenizers used by the meter:
- similarity_tokens(text): content words for quote matching (stop words removed)
- word_segments(text): every alphanumeric run, used to charge entropy per word
"""

import re
from typing import List

STOP_WORDS = frozenset({
    "the", "of", "and", "to", "a", "in", "that", "it", "is", "for",
    "on", "with", "as", "was", "at", "by", "be", "this", "not", "are",
})

_QUOTE_MAP = str.maketrans({
    "‘": "'", "’": "'", "‚": "'", "‛": "'",
    "“": '"', "”": '"', "„": '"', "‟": '"',
})

_WHITESPACE_RE = re.compile(r"\s+")
_NON_PRINTABLE_RE = re.compile(r"[^\x20-\x7e]")
_NON_WORD_RE = re.compile(r"[^\w\s]")
_SEGMENT_SPLIT_RE = re.compile(r"[\W_]+")


def normalize_text(text: str) -> str:
    """
    Canonical form of a phrase:
    1. curly quotes -> straight quotes
    2. whitespace runs -> single space
    3. drop characters outside printable ASCII
    4. trim, lowercase
    """
    text = text.translate(_QUOTE_MAP)
    text = _WHITESPACE_RE.sub(" ", text)
    text = _NON_PRINTABLE_RE.sub("", text)
    return text.strip().lower()


def similarity_tokens(text: str) -> List[str]:
    """Normalized, punctuation-free, stop-word-filtered tokens (order and duplicates kept)."""
    stripped = _NON_WORD_RE.sub("", normalize_text(text))
    return [tok for tok in stripped.split() if tok not in STOP_WORDS]


def word_segments(text: str) -> List[str]:
    """Split on runs of non-alphanumeric characters. Stop words are kept."""
    return [seg for seg in _SEGMENT_SPLIT_RE.split(text) if seg]


def count_words(text: str) -> int:
    return len(word_segments(text))
