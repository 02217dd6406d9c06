"""
phrasemeter.evaluator

Passphrase strength evaluator:
- theoretical_entropy(word_count, pool_size): bits if every word were drawn
  uniformly from a pool of `pool_size` words
- crack_seconds(bits, rate) / format_duration(seconds): time to exhaust
  2**bits guesses and its human-readable form
- score_phrase(phrase, ...): StrengthResult with adjusted entropy (theoretical
  minus predictability penalty, floored at 0) and offline/online crack times
"""

import logging
import math
import random
from dataclasses import asdict, dataclass, field
from typing import Dict, Iterable, Optional

from .corpus import CorpusIndex
from .errors import InvalidPhrase
from .flair import DAY, DEFAULT_FLAIR, HOUR, MINUTE, YEAR, Chooser, FlairTable
from .normalizer import count_words
from .penalty import penalty_breakdown, total_penalty
from .similarity import DEFAULT_QUOTE_THRESHOLD

logger = logging.getLogger(__name__)

DEFAULT_WORD_POOL_SIZE = 7776
DEFAULT_OFFLINE_RATE = 1e12  # guesses per second, fast offline hash cracking
DEFAULT_ONLINE_RATE = 10.0  # guesses per second, throttled online login

YEAR_UNITS = (
    "", "thousand", "million", "billion", "trillion", "quadrillion",
    "quintillion", "sextillion", "septillion", "octillion", "nonillion", "decillion",
)


@dataclass(frozen=True)
class CrackTime:
    seconds: float
    formatted: str
    flair: str


@dataclass(frozen=True)
class StrengthResult:
    phrase: str
    word_count: int
    entropy_bits: float
    penalty: float
    adjusted_entropy_bits: float
    offline_crack_time: CrackTime
    online_crack_time: CrackTime
    signals: Dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> Dict:
        data = asdict(self)
        for key in ("offline_crack_time", "online_crack_time"):
            # inf is not valid JSON
            if math.isinf(data[key]["seconds"]):
                data[key]["seconds"] = None
        return data


def theoretical_entropy(word_count: int, word_pool_size: int) -> float:
    """word_count * log2(word_pool_size), rounded to 0.1 bit."""
    if word_pool_size < 1:
        raise ValueError("word_pool_size must be >= 1")
    return round(word_count * math.log2(word_pool_size), 1)


def crack_seconds(bits: float, guesses_per_second: float) -> float:
    """Seconds to try all 2**bits guesses; inf when 2**bits overflows a float."""
    if guesses_per_second <= 0:
        raise ValueError("guesses_per_second must be > 0")
    try:
        return 2.0 ** bits / guesses_per_second
    except OverflowError:
        return math.inf


def format_duration(seconds: float) -> str:
    """
    Human-readable duration with one decimal place. Each boundary belongs to
    the larger unit (60s -> "1.0 minutes"). From one year up, years are scaled
    by 1000 through YEAR_UNITS until below 1000 or out of units.
    """
    if seconds < MINUTE:
        return f"{seconds:.1f} seconds"
    if seconds < HOUR:
        return f"{seconds / MINUTE:.1f} minutes"
    if seconds < DAY:
        return f"{seconds / HOUR:.1f} hours"
    if seconds < YEAR:
        return f"{seconds / DAY:.1f} days"

    years = seconds / YEAR
    unit = 0
    while years >= 1000 and unit < len(YEAR_UNITS) - 1:
        years /= 1000
        unit += 1
    if YEAR_UNITS[unit]:
        return f"{years:.1f} {YEAR_UNITS[unit]} years"
    return f"{years:.1f} years"


def _crack_time(bits: float, rate: float, flair: FlairTable, choose: Optional[Chooser]) -> CrackTime:
    seconds = crack_seconds(bits, rate)
    return CrackTime(seconds=seconds, formatted=format_duration(seconds), flair=flair.select(seconds, choose))


def score_phrase(
    phrase: str,
    word_pool_size: int = DEFAULT_WORD_POOL_SIZE,
    penalty: Optional[float] = None,
    offline_rate: float = DEFAULT_OFFLINE_RATE,
    online_rate: float = DEFAULT_ONLINE_RATE,
    templates: Iterable[str] = (),
    index: Optional[CorpusIndex] = None,
    flair: FlairTable = DEFAULT_FLAIR,
    choose: Optional[Chooser] = random.choice,
    quote_threshold: float = DEFAULT_QUOTE_THRESHOLD,
) -> StrengthResult:
    """
    Score a passphrase.

    A non-negative `penalty` is used as-is and the heuristic penalty model is
    not run; otherwise the penalty is estimated from `templates` and `index`.
    `index=None` (no corpus) disables the quote signal only.
    """
    if not phrase or not phrase.strip():
        raise InvalidPhrase("phrase is empty")
    word_count = count_words(phrase)
    if word_count == 0:
        raise InvalidPhrase(f"phrase {phrase!r} contains no words")
    if offline_rate <= 0 or online_rate <= 0:
        raise ValueError("guess rates must be > 0")

    entropy = theoretical_entropy(word_count, word_pool_size)

    signals: Dict[str, int] = {}
    if penalty is None or penalty < 0:
        signals = penalty_breakdown(phrase, templates, index, quote_threshold)
        penalty = total_penalty(signals)

    adjusted = round(max(0.0, entropy - penalty), 1)
    logger.debug(f"{word_count} words, {entropy} bits, penalty {penalty} -> {adjusted} bits")

    return StrengthResult(
        phrase=phrase,
        word_count=word_count,
        entropy_bits=entropy,
        penalty=penalty,
        adjusted_entropy_bits=adjusted,
        offline_crack_time=_crack_time(adjusted, offline_rate, flair, choose),
        online_crack_time=_crack_time(adjusted, online_rate, flair, choose),
        signals=signals,
    )
