"""
phrasemeter.corpus

Reference quote corpus and its inverted index.

- load_corpus(path): raw quote records from a JSON file
- build_index(records, popularity_floor): filter, tokenize and index the quotes
- load_index(path, popularity_floor): both of the above

The index maps each similarity token to the frozenset of quote ids whose text
contains it. Ids are positions in the filtered, order-preserving sequence of
quotes. The index is immutable once built; rebuild it to refresh.
"""

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Dict, FrozenSet, Iterable, List, Mapping, Optional, Set, Tuple

from .errors import CorpusUnavailable
from .normalizer import similarity_tokens
from .storage import read_json_file

logger = logging.getLogger(__name__)

DEFAULT_POPULARITY_FLOOR = 0.01

_EMPTY_POSTINGS: FrozenSet[int] = frozenset()


@dataclass(frozen=True)
class Quote:
    id: int
    text: str
    author: str
    popularity: float
    tokens: Tuple[str, ...]


class CorpusIndex:
    """Read-only collection of quotes plus a token -> quote-id inverted index."""

    __slots__ = ("_quotes", "_postings")

    def __init__(self, quotes: Iterable[Quote], postings: Mapping[str, FrozenSet[int]]):
        self._quotes: Tuple[Quote, ...] = tuple(quotes)
        self._postings = MappingProxyType(dict(postings))

    def __len__(self) -> int:
        return len(self._quotes)

    def __repr__(self) -> str:
        return f"CorpusIndex(quotes={len(self._quotes)}, vocabulary={len(self._postings)})"

    @property
    def quotes(self) -> Tuple[Quote, ...]:
        return self._quotes

    @property
    def vocabulary_size(self) -> int:
        return len(self._postings)

    def postings(self, token: str) -> FrozenSet[int]:
        """Ids of quotes containing `token`; empty if the token is unknown."""
        return self._postings.get(token, _EMPTY_POSTINGS)

    def quote(self, quote_id: int) -> Quote:
        return self._quotes[quote_id]


def _validate_record(position: int, record: Any) -> Dict[str, Any]:
    """Return a cleaned copy of one corpus record or raise CorpusUnavailable."""
    if not isinstance(record, Mapping):
        raise CorpusUnavailable(f"corpus record #{position} is not an object")

    text = record.get("text")
    if not isinstance(text, str):
        raise CorpusUnavailable(f"corpus record #{position} has no string 'text'")

    author = record.get("author") or ""
    if not isinstance(author, str):
        raise CorpusUnavailable(f"corpus record #{position} has a non-string 'author'")

    popularity = record.get("popularity")
    # bool is an int subclass but never a meaningful popularity
    if isinstance(popularity, bool) or not isinstance(popularity, (int, float)):
        raise CorpusUnavailable(f"corpus record #{position} has no numeric 'popularity'")
    if not 0.0 <= popularity <= 1.0:
        raise CorpusUnavailable(f"corpus record #{position} popularity {popularity!r} is outside [0, 1]")

    tokens = record.get("tokens", [])
    if not isinstance(tokens, list) or not all(isinstance(t, str) for t in tokens):
        raise CorpusUnavailable(f"corpus record #{position} 'tokens' must be a list of strings")

    return {"text": text, "author": author, "popularity": float(popularity)}


def build_index(records: Iterable[Any], popularity_floor: float = DEFAULT_POPULARITY_FLOOR) -> CorpusIndex:
    """
    Build an inverted index over every record with popularity > popularity_floor.

    Each record must carry `text` and `popularity`; `author` and the
    pre-tokenized `tokens` field are optional. Quote tokens are always derived
    from `text` with the same tokenizer used for queries, so both sides of a
    comparison agree. Malformed records raise CorpusUnavailable.
    """
    quotes: List[Quote] = []
    postings: Dict[str, Set[int]] = {}
    discarded = 0

    for position, record in enumerate(records):
        clean = _validate_record(position, record)
        if clean["popularity"] <= popularity_floor:
            discarded += 1
            continue
        quote_id = len(quotes)
        tokens = tuple(similarity_tokens(clean["text"]))
        quotes.append(Quote(id=quote_id, tokens=tokens, **clean))
        for token in tokens:
            postings.setdefault(token, set()).add(quote_id)

    logger.debug(f"indexed {len(quotes)} quotes ({discarded} at or below popularity {popularity_floor})")
    return CorpusIndex(quotes, {tok: frozenset(ids) for tok, ids in postings.items()})


def load_corpus(path: str) -> List[Any]:
    """
    Read quote records from a JSON file: either a bare array of records or an
    object holding them under "quotes".
    """
    try:
        data = read_json_file(path)
    except (OSError, ValueError) as e:
        raise CorpusUnavailable(f"cannot read corpus {path}: {e}") from e

    if isinstance(data, dict):
        data = data.get("quotes")
    if not isinstance(data, list):
        raise CorpusUnavailable(f"corpus {path} does not contain a list of quotes")
    return data


def load_index(path: str, popularity_floor: Optional[float] = None) -> CorpusIndex:
    if popularity_floor is None:
        popularity_floor = DEFAULT_POPULARITY_FLOOR
    index = build_index(load_corpus(path), popularity_floor)
    logger.info(f"loaded corpus {path}: {len(index)} quotes, {index.vocabulary_size} distinct tokens")
    return index
