import json
import logging
import math
import os
import tempfile

import pytest

from phrasemeter.errors import FlairSourceMalformed
from phrasemeter.flair import DEFAULT_FLAIR, NO_FLAIR, load_flair, parse_flair
from phrasemeter.storage import data_path

TABLE = parse_flair({"100": ["slow"], "10": ["fast", "quick"]})

def test_bands_sorted_and_threshold_strictly_greater():
    assert [t for t, _ in TABLE.bands] == [10.0, 100.0]
    assert TABLE.select(9.99, lambda c: c[0]) == "fast"
    assert TABLE.select(10, lambda c: c[0]) == "slow"
    assert TABLE.select(100) == NO_FLAIR
    assert TABLE.select(math.inf) == NO_FLAIR

def test_default_chooser_picks_from_band():
    for _ in range(20):
        assert TABLE.select(0) in ("fast", "quick")

@pytest.mark.parametrize("data", [
    [],
    {},
    {"ten": ["a"]},
    {"10": []},
    {"10": "a"},
    {"10": [1, 2]},
    {"nan": ["never"]},
    {"NaN": ["never"]},
])
def test_malformed_sources(data):
    with pytest.raises(FlairSourceMalformed):
        parse_flair(data)

def test_load_flair_falls_back_to_default(caplog):
    assert load_flair(None) is DEFAULT_FLAIR
    with tempfile.TemporaryDirectory() as td:
        with caplog.at_level(logging.WARNING):
            assert load_flair(os.path.join(td, "missing.json")) is DEFAULT_FLAIR
        assert "using built-in flair" in caplog.text

        bad = os.path.join(td, "flair.json")
        with open(bad, "w", encoding="utf-8") as f:
            json.dump({"10": "not a list"}, f)
        assert load_flair(bad) is DEFAULT_FLAIR

        good = os.path.join(td, "good.json")
        with open(good, "w", encoding="utf-8") as f:
            json.dump({"5": ["five"]}, f)
        assert load_flair(good).select(1) == "five"

def test_bundled_flair_file_loads():
    table = load_flair(data_path("flair.json"))
    assert table is not DEFAULT_FLAIR
    assert len(table.bands) == len(DEFAULT_FLAIR.bands)
