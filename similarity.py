"""
phrasemeter.similarity

Quote-likeness check against a CorpusIndex.

Candidates are the quotes sharing at least one token with the phrase (union of
posting sets). They are scanned in ascending id order and the scan stops at the
first quote whose Jaccard similarity reaches the threshold, so the reported
match is deterministic for a given index.
"""

import json
import logging
import time
from dataclasses import dataclass
from typing import Iterable, List, Optional, Set, Tuple

from .corpus import CorpusIndex, Quote

logger = logging.getLogger(__name__)
# one JSON line per comparison when enabled at DEBUG
diagnostics = logging.getLogger(__name__ + ".diagnostics")

DEFAULT_QUOTE_THRESHOLD = 0.6
SIMILARITY_PRECISION = 3


@dataclass(frozen=True)
class QuoteMatch:
    matched: bool
    similarity: float
    best_similarity: float = 0.0
    best_quote: Optional[Quote] = None
    candidates_scanned: int = 0


NO_MATCH = QuoteMatch(matched=False, similarity=0.0)


def _token_set(tokens: Iterable[object]) -> Set[str]:
    return {t for t in tokens if isinstance(t, str) and t}


def jaccard_similarity(a: Iterable[str], b: Iterable[str]) -> float:
    """
    |A & B| / |A | B| over the token sets of a and b, rounded to 3 places.
    Non-string and empty tokens are ignored; an empty union gives 0.0.
    """
    set_a, set_b = _token_set(a), _token_set(b)
    union = set_a | set_b
    if not union:
        return 0.0
    return round(len(set_a & set_b) / len(union), SIMILARITY_PRECISION)


def candidate_ids(tokens: Iterable[str], index: CorpusIndex) -> List[int]:
    """Ids of quotes sharing at least one token with `tokens`, ascending."""
    ids: Set[int] = set()
    for token in _token_set(tokens):
        ids |= index.postings(token)
    return sorted(ids)


def _log_comparison(quote_id: int, similarity: float, phrase_tokens: Set[str], quote: Quote) -> None:
    diagnostics.debug(json.dumps({
        "timestamp": time.time(),
        "candidate": quote_id,
        "similarity": similarity,
        "phrase_tokens": sorted(phrase_tokens),
        "quote_tokens": sorted(set(quote.tokens)),
    }))


def match_quote(
    tokens: Iterable[str],
    index: Optional[CorpusIndex],
    threshold: float = DEFAULT_QUOTE_THRESHOLD,
) -> QuoteMatch:
    """
    Find the first indexed quote (by id) whose similarity to `tokens` is >= threshold.

    On a miss, `similarity` is 0.0 and `best_similarity` / `best_quote` describe
    the closest quote seen, for diagnostics only.
    """
    phrase_tokens = _token_set(tokens)
    if index is None or not phrase_tokens:
        return NO_MATCH

    trace = diagnostics.isEnabledFor(logging.DEBUG)
    best_similarity = 0.0
    best_quote: Optional[Quote] = None
    scanned = 0

    for quote_id in candidate_ids(phrase_tokens, index):
        quote = index.quote(quote_id)
        similarity = jaccard_similarity(phrase_tokens, quote.tokens)
        scanned += 1
        if trace:
            _log_comparison(quote_id, similarity, phrase_tokens, quote)
        if similarity > best_similarity:
            best_similarity, best_quote = similarity, quote
        if similarity >= threshold:
            logger.debug(f"quote match #{quote_id} at {similarity} after {scanned} candidate(s)")
            return QuoteMatch(True, similarity, similarity, quote, scanned)

    return QuoteMatch(False, 0.0, best_similarity, best_quote, scanned)


def is_quote_like(
    tokens: Iterable[str],
    index: Optional[CorpusIndex],
    threshold: float = DEFAULT_QUOTE_THRESHOLD,
) -> Tuple[bool, float]:
    """(matched, similarity); similarity is 0.0 when nothing reaches the threshold."""
    result = match_quote(tokens, index, threshold)
    return result.matched, result.similarity
