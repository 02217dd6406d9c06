"""phrasemeter: passphrase strength estimation.

Scores a passphrase by theoretical word entropy minus a predictability penalty
(template and famous-quote matches, natural-language cues) and reports how long
offline and online attackers would need to exhaust it.
"""

from .corpus import CorpusIndex, Quote, build_index, load_index
from .errors import (
    CorpusUnavailable,
    FlairSourceMalformed,
    InvalidPhrase,
    PhraseMeterError,
    TemplateSourceUnavailable,
)
from .evaluator import CrackTime, StrengthResult, format_duration, score_phrase
from .flair import DEFAULT_FLAIR, NO_FLAIR, FlairTable, load_flair
from .penalty import estimate_penalty
from .similarity import is_quote_like, jaccard_similarity

__all__ = [
    "CorpusIndex", "Quote", "build_index", "load_index",
    "PhraseMeterError", "CorpusUnavailable", "TemplateSourceUnavailable",
    "InvalidPhrase", "FlairSourceMalformed",
    "CrackTime", "StrengthResult", "format_duration", "score_phrase",
    "FlairTable", "DEFAULT_FLAIR", "NO_FLAIR", "load_flair",
    "estimate_penalty", "is_quote_like", "jaccard_similarity",
]
