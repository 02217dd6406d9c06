"""
phrasemeter.resources

One-shot loading of the read-only structures the scorer needs: corpus index,
templates and flair table. Corpus and template failures are logged and the
corresponding signal is disabled; scoring itself still works.
"""

import logging
from typing import Any, Dict, NamedTuple, Optional, Tuple

from .corpus import CorpusIndex, load_index
from .errors import CorpusUnavailable, TemplateSourceUnavailable
from .flair import FlairTable, load_flair
from .storage import data_path
from .templates import load_templates

logger = logging.getLogger(__name__)


class Resources(NamedTuple):
    index: Optional[CorpusIndex]
    templates: Tuple[str, ...]
    flair: FlairTable


def load_resources(cfg: Dict[str, Any]) -> Resources:
    corpus_path = cfg.get("corpus_path") or data_path("quotes.json")
    templates_path = cfg.get("templates_path") or data_path("templates.json")
    flair_path = cfg.get("flair_path") or data_path("flair.json")

    index: Optional[CorpusIndex] = None
    try:
        index = load_index(corpus_path, cfg.get("popularity_floor"))
    except CorpusUnavailable as e:
        logger.warning(f"quote matching disabled: {e}")

    templates: Tuple[str, ...] = ()
    try:
        templates = load_templates(templates_path)
    except TemplateSourceUnavailable as e:
        logger.warning(f"template matching disabled: {e}")

    return Resources(index=index, templates=templates, flair=load_flair(flair_path))
