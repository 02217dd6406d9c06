"""
phrasemeter.templates

Phrase templates used by the template-match penalty. A template is a phrase
with positional placeholders, e.g. "The {0} of {1} is {2}".
"""

import logging
import re
from typing import Any, Tuple

from .errors import TemplateSourceUnavailable
from .storage import read_json_file

logger = logging.getLogger(__name__)

PLACEHOLDER_RE = re.compile(r"\{[^{}]*\}")


def strip_placeholders(template: str) -> str:
    return PLACEHOLDER_RE.sub(" ", template)


def parse_templates(data: Any) -> Tuple[str, ...]:
    if isinstance(data, dict):
        data = data.get("templates")
    if not isinstance(data, list) or not all(isinstance(t, str) for t in data):
        raise TemplateSourceUnavailable("template source must be a list of strings")
    return tuple(data)


def load_templates(path: str) -> Tuple[str, ...]:
    """Read templates from a JSON array (or {"templates": [...]})."""
    try:
        data = read_json_file(path)
    except (OSError, ValueError) as e:
        raise TemplateSourceUnavailable(f"cannot read templates {path}: {e}") from e
    templates = parse_templates(data)
    logger.info(f"loaded {len(templates)} templates from {path}")
    return templates
