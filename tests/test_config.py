import json
import logging
import os
import tempfile

from phrasemeter.config import DEFAULTS, load_config, save_config
from phrasemeter.evaluator import score_phrase
from phrasemeter.resources import load_resources

def test_missing_config_gives_defaults():
    with tempfile.TemporaryDirectory() as td:
        cfg = load_config(os.path.join(td, "config.json"))
        assert cfg == DEFAULTS
        cfg["word_pool_size"] = 1
        assert DEFAULTS["word_pool_size"] == 7776

def test_save_and_merge():
    with tempfile.TemporaryDirectory() as td:
        path = os.path.join(td, "nested", "config.json")
        save_config({"word_pool_size": 2048}, path)
        cfg = load_config(path)
        assert cfg["word_pool_size"] == 2048
        assert cfg["online_rate"] == DEFAULTS["online_rate"]

def test_env_var_selects_config(monkeypatch):
    with tempfile.TemporaryDirectory() as td:
        path = os.path.join(td, "custom.json")
        with open(path, "w", encoding="utf-8") as f:
            json.dump({"quote_threshold": 0.8}, f)
        monkeypatch.setenv("PHRASEMETER_CONFIG", path)
        assert load_config()["quote_threshold"] == 0.8

def test_unreadable_config_gives_defaults(caplog):
    with tempfile.TemporaryDirectory() as td:
        path = os.path.join(td, "config.json")
        with open(path, "w", encoding="utf-8") as f:
            f.write("[1, 2")
        with caplog.at_level(logging.WARNING):
            assert load_config(path) == DEFAULTS
        assert "unreadable config" in caplog.text

def test_bundled_resources_load():
    res = load_resources(dict(DEFAULTS))
    assert res.index is not None and len(res.index) > 0
    assert res.templates
    assert res.flair.bands

def test_broken_sources_degrade(caplog):
    with tempfile.TemporaryDirectory() as td:
        cfg = dict(DEFAULTS)
        cfg["corpus_path"] = os.path.join(td, "missing-quotes.json")
        cfg["templates_path"] = os.path.join(td, "missing-templates.json")
        with caplog.at_level(logging.WARNING):
            res = load_resources(cfg)
        assert res.index is None
        assert res.templates == ()
        assert "quote matching disabled" in caplog.text
        assert "template matching disabled" in caplog.text

        result = score_phrase("The only thing we have to fear is fear itself.", index=res.index, templates=res.templates)
        assert result.signals["quote"] == 0
        assert result.signals["template"] == 0
        assert result.adjusted_entropy_bits > 0
