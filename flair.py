"""
phrasemeter.flair

Commentary strings keyed by crack-time band.

A FlairTable holds ascending (threshold_seconds, candidates) bands. For a crack
time T the band used is the first one whose threshold is strictly greater than
T; one of its candidates is picked with an injectable chooser. Past the last
band there is no flair.
"""

import logging
import math
import random
from dataclasses import dataclass
from typing import Any, Callable, Optional, Sequence, Tuple

from .errors import FlairSourceMalformed
from .storage import read_json_file

logger = logging.getLogger(__name__)

NO_FLAIR = "no flair available"

MINUTE = 60
HOUR = 3600
DAY = 86400
YEAR = 31556952  # Julian year

Chooser = Callable[[Sequence[str]], str]


@dataclass(frozen=True)
class FlairTable:
    bands: Tuple[Tuple[float, Tuple[str, ...]], ...]

    def select(self, seconds: float, choose: Optional[Chooser] = None) -> str:
        choose = choose or random.choice
        for threshold, candidates in self.bands:
            if threshold > seconds:
                return choose(candidates)
        return NO_FLAIR


def parse_flair(data: Any) -> FlairTable:
    """
    Build a FlairTable from {"<seconds>": ["comment", ...], ...}.
    Raises FlairSourceMalformed on anything else.
    """
    if not isinstance(data, dict) or not data:
        raise FlairSourceMalformed("flair source must be a non-empty object")
    bands = []
    for key, candidates in data.items():
        try:
            threshold = float(key)
        except (TypeError, ValueError):
            raise FlairSourceMalformed(f"flair threshold {key!r} is not a number") from None
        if math.isnan(threshold):
            raise FlairSourceMalformed(f"flair threshold {key!r} is not a number")
        if (not isinstance(candidates, list) or not candidates
                or not all(isinstance(c, str) for c in candidates)):
            raise FlairSourceMalformed(f"flair band {key!r} must be a non-empty list of strings")
        bands.append((threshold, tuple(candidates)))
    bands.sort(key=lambda band: band[0])
    return FlairTable(tuple(bands))


DEFAULT_FLAIR = parse_flair({
    "1": ["Blink and it's gone.", "Faster than you can say 'password'."],
    str(MINUTE): ["Not even enough time to make a coffee.", "A script kiddie's warm-up."],
    str(HOUR): ["Lunch break for an attacker.", "Gone before the meeting ends."],
    str(DAY): ["One bad afternoon.", "Cracked before you get home from work."],
    str(30 * DAY): ["A long weekend project for someone motivated.", "Within a billing cycle."],
    str(YEAR): ["A patient attacker will get there.", "Less than a year of GPU time."],
    str(100 * YEAR): ["Your grandchildren might see it fall.", "Outlives your password policy."],
    str(10 ** 6 * YEAR): ["Civilizations rise and fall first.", "Longer than recorded history."],
    str(10 ** 9 * YEAR): ["Continents drift noticeably first.", "Dinosaurs would have had time."],
    str(1.38 * 10 ** 10 * YEAR): ["Older than the universe is today.", "Heat death is a closer threat."],
    str(10 ** 20 * YEAR): ["The stars will burn out first.", "Protons may decay before this falls."],
})


def load_flair(path: Optional[str]) -> FlairTable:
    """
    Flair table from a JSON file; DEFAULT_FLAIR when `path` is None or the file
    is missing or malformed (logged as a warning, never raised).
    """
    if not path:
        return DEFAULT_FLAIR
    try:
        table = parse_flair(read_json_file(path))
    except (OSError, ValueError, FlairSourceMalformed) as e:
        logger.warning(f"flair source {path} unusable ({e}); using built-in flair")
        return DEFAULT_FLAIR
    logger.info(f"loaded {len(table.bands)} flair bands from {path}")
    return table
