import json
import os
import tempfile

import pytest

from phrasemeter.corpus import CorpusIndex, build_index, load_corpus, load_index
from phrasemeter.errors import CorpusUnavailable
from phrasemeter.storage import data_path

RECORDS = [
    {"text": "The only thing we have to fear is fear itself.", "author": "FDR", "popularity": 0.9,
     "tokens": ["only", "thing", "we", "have", "fear", "fear", "itself"]},
    {"text": "Obscure words nobody remembers.", "author": "Nobody", "popularity": 0.01},
    {"text": "I have a dream.", "author": "MLK", "popularity": 0.5},
]

def test_popularity_floor_is_exclusive_and_ids_are_positions():
    index = build_index(RECORDS, popularity_floor=0.01)
    assert isinstance(index, CorpusIndex)
    assert len(index) == 2
    assert [q.id for q in index.quotes] == [0, 1]
    assert index.quote(1).author == "MLK"

def test_postings_are_deduplicated_sets():
    index = build_index(RECORDS)
    assert index.postings("fear") == frozenset({0})
    assert index.postings("have") == frozenset({0, 1})
    assert index.postings("unknown") == frozenset()
    # stop words never reach the index
    assert index.postings("the") == frozenset()

def test_quote_tokens_come_from_text():
    index = build_index([{"text": "Stay hungry, stay foolish.", "popularity": 0.5, "tokens": ["ignored"]}])
    assert index.quote(0).tokens == ("stay", "hungry", "stay", "foolish")
    assert index.quote(0).author == ""

@pytest.mark.parametrize("record", [
    "not a mapping",
    {"author": "x", "popularity": 0.5},
    {"text": "hello", "popularity": "high"},
    {"text": "hello", "popularity": True},
    {"text": "hello", "popularity": 1.5},
    {"text": "hello", "popularity": 0.5, "tokens": "hello"},
    {"text": "hello", "popularity": 0.5, "author": 7},
])
def test_malformed_records_rejected(record):
    with pytest.raises(CorpusUnavailable):
        build_index([record])

def test_load_corpus_missing_and_invalid_files():
    with tempfile.TemporaryDirectory() as td:
        try:
            load_corpus(os.path.join(td, "missing.json"))
            raised = False
        except CorpusUnavailable:
            raised = True
        assert raised

        bad = os.path.join(td, "bad.json")
        with open(bad, "w", encoding="utf-8") as f:
            f.write("{not json")
        with pytest.raises(CorpusUnavailable):
            load_corpus(bad)

        scalar = os.path.join(td, "scalar.json")
        with open(scalar, "w", encoding="utf-8") as f:
            f.write("42")
        with pytest.raises(CorpusUnavailable):
            load_corpus(scalar)

def test_load_corpus_accepts_wrapped_object():
    with tempfile.TemporaryDirectory() as td:
        path = os.path.join(td, "quotes.json")
        with open(path, "w", encoding="utf-8") as f:
            json.dump({"quotes": RECORDS}, f)
        assert load_corpus(path) == RECORDS
        assert len(load_index(path, popularity_floor=0.6)) == 1

def test_bundled_corpus_filters_unpopular_quotes():
    index = load_index(data_path("quotes.json"))
    assert len(index) > 20
    assert all(q.popularity > 0.01 for q in index.quotes)
    assert index.postings("doughnut") == frozenset()
