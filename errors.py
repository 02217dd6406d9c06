"""
phrasemeter.errors

Exceptions raised by the loaders and the scoring entry point.
"""


class PhraseMeterError(Exception):
    """Base class for phrasemeter errors."""


class CorpusUnavailable(PhraseMeterError):
    """The quote corpus could not be read, parsed or validated."""


class TemplateSourceUnavailable(PhraseMeterError):
    """The phrase template source could not be read or parsed."""


class FlairSourceMalformed(PhraseMeterError):
    """The flair table source is not a mapping of threshold -> list of strings."""


class InvalidPhrase(PhraseMeterError, ValueError):
    """The phrase is empty, whitespace-only or contains no words."""
