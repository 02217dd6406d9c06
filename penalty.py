"""
phrasemeter.penalty

Predictability penalty for passphrases (bits subtracted from theoretical entropy).

Each signal is an independent function returning a fixed contribution:
- template_penalty, quote_penalty, title_case_penalty, stop_word_penalty,
  grammar_penalty, repetition_penalty: >= 0, the phrase reads like natural or
  templated language
- symbol_bonus, digit_letter_bonus, case_mix_bonus, leet_bonus: <= 0, the
  phrase carries non-natural structure

estimate_penalty() sums them and clamps the total at zero.
"""

import re
import string
from collections import Counter
from typing import Dict, Iterable, List, Optional

from .corpus import CorpusIndex
from .normalizer import STOP_WORDS, similarity_tokens, word_segments
from .similarity import DEFAULT_QUOTE_THRESHOLD, is_quote_like
from .templates import strip_placeholders

# (minimum template match ratio, penalty), checked top-down
TEMPLATE_BANDS = ((0.9, 25), (0.7, 15), (0.5, 10))
QUOTE_PENALTY = 25
TITLE_CASE_PENALTY = 5
TITLE_CASE_RATIO = 0.75
STOP_WORD_PENALTY = 10
STOP_WORD_RATIO = 0.40
GRAMMAR_PENALTY = 10
REPETITION_BASE = 5
REPETITION_STEP = 5
REPETITION_CAP = 15

SYMBOL_BONUS = -5
DIGIT_LETTER_BONUS = -3
CASE_MIX_BONUS = -2
LEET_MULTI_BONUS = -3
LEET_SINGLE_BONUS = -1

TITLE_WORD_RE = re.compile(r"[A-Z][a-z]+")
SYMBOL_RE = re.compile(r"[\[\]{}()<>@#$%^&*_+=|\\/~`]")
CASE_TRANSITION_RE = re.compile(r"[a-z][A-Z]")

# common subject opener ... later an auxiliary or modal verb
GRAMMAR_RE = re.compile(
    r"^\s*(?:i|you|he|she|it|we|they|this|that|there|my|our|your|the)\b"
    r".*\b(?:am|is|are|was|were|be|been|have|has|had|do|does|did|"
    r"will|would|shall|should|can|could|may|might|must)\b",
    re.IGNORECASE,
)

# leet character standing in for a letter, i.e. touching a letter on either side
_LEET_CHARS = {"4": "a", "@": "a", "3": "e", "1": "i", "0": "o", "5": "s", "$": "s", "7": "t"}
LEET_PATTERNS = {
    char: re.compile(rf"(?<=[A-Za-z]){re.escape(char)}|{re.escape(char)}(?=[A-Za-z])")
    for char in _LEET_CHARS
}


def _plain_words(phrase: str) -> List[str]:
    """Whitespace-split words, lowercased, with surrounding punctuation removed."""
    words = (w.strip(string.punctuation).lower() for w in phrase.split())
    return [w for w in words if w]


def template_match_ratio(phrase: str, templates: Iterable[str]) -> float:
    """
    Highest fraction of a template's literal words (placeholders removed) that
    appear anywhere in the phrase.
    """
    phrase_words = {w.lower() for w in word_segments(phrase)}
    best = 0.0
    for template in templates:
        template_words = [w.lower() for w in word_segments(strip_placeholders(template))]
        if not template_words:
            continue
        present = sum(1 for w in template_words if w in phrase_words)
        best = max(best, present / len(template_words))
    return best


def template_penalty(phrase: str, templates: Iterable[str]) -> int:
    ratio = template_match_ratio(phrase, templates)
    for minimum, penalty in TEMPLATE_BANDS:
        if ratio >= minimum:
            return penalty
    return 0


def quote_penalty(phrase: str, index: Optional[CorpusIndex], threshold: float = DEFAULT_QUOTE_THRESHOLD) -> int:
    matched, _ = is_quote_like(similarity_tokens(phrase), index, threshold)
    return QUOTE_PENALTY if matched else 0


def title_case_penalty(phrase: str) -> int:
    words = phrase.split()
    if not words:
        return 0
    titled = sum(1 for w in words if TITLE_WORD_RE.fullmatch(w.strip(string.punctuation)))
    return TITLE_CASE_PENALTY if titled / len(words) >= TITLE_CASE_RATIO else 0


def stop_word_penalty(phrase: str) -> int:
    words = phrase.split()
    if not words:
        return 0
    stops = sum(1 for w in words if w.strip(string.punctuation).lower() in STOP_WORDS)
    return STOP_WORD_PENALTY if stops / len(words) >= STOP_WORD_RATIO else 0


def grammar_penalty(phrase: str) -> int:
    return GRAMMAR_PENALTY if GRAMMAR_RE.search(phrase) else 0


def repetition_penalty(phrase: str) -> int:
    counts = Counter(_plain_words(phrase))
    duplicates = sum(1 for c in counts.values() if c > 1)
    if not duplicates:
        return 0
    return min(REPETITION_BASE + REPETITION_STEP * duplicates, REPETITION_CAP)


def symbol_bonus(phrase: str) -> int:
    return SYMBOL_BONUS if SYMBOL_RE.search(phrase) else 0


def digit_letter_bonus(phrase: str) -> int:
    has_digit = any(c.isdigit() for c in phrase)
    has_alpha = any(c.isalpha() for c in phrase)
    return DIGIT_LETTER_BONUS if has_digit and has_alpha else 0


def case_mix_bonus(phrase: str) -> int:
    return CASE_MIX_BONUS if CASE_TRANSITION_RE.search(phrase) else 0


def detect_leet(phrase: str) -> List[str]:
    """Leet characters used as letter substitutes in the phrase."""
    return [char for char, pattern in LEET_PATTERNS.items() if pattern.search(phrase)]


def leet_bonus(phrase: str) -> int:
    found = len(detect_leet(phrase))
    if found >= 2:
        return LEET_MULTI_BONUS
    if found == 1:
        return LEET_SINGLE_BONUS
    return 0


def penalty_breakdown(
    phrase: str,
    templates: Iterable[str] = (),
    index: Optional[CorpusIndex] = None,
    quote_threshold: float = DEFAULT_QUOTE_THRESHOLD,
) -> Dict[str, int]:
    """Every signal's contribution, keyed by signal name."""
    return {
        "template": template_penalty(phrase, templates),
        "quote": quote_penalty(phrase, index, quote_threshold),
        "title_case": title_case_penalty(phrase),
        "stop_words": stop_word_penalty(phrase),
        "grammar": grammar_penalty(phrase),
        "repetition": repetition_penalty(phrase),
        "symbols": symbol_bonus(phrase),
        "digits": digit_letter_bonus(phrase),
        "case_mix": case_mix_bonus(phrase),
        "leet": leet_bonus(phrase),
    }


def total_penalty(signals: Dict[str, int]) -> int:
    return max(0, sum(signals.values()))


def estimate_penalty(
    phrase: str,
    templates: Iterable[str] = (),
    index: Optional[CorpusIndex] = None,
    quote_threshold: float = DEFAULT_QUOTE_THRESHOLD,
) -> int:
    return total_penalty(penalty_breakdown(phrase, templates, index, quote_threshold))
