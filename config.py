# phrasemeter/config.py
"""
Settings persistence for phrasemeter.
Settings saved as JSON in %APPDATA%/PhraseMeter/config.json (Windows) or ~/.phrasemeter/config.json (fallback).
PHRASEMETER_CONFIG points at an explicit file instead.
"""

import os
import logging
from typing import Dict, Any, Optional

from .storage import atomic_write_bytes, dump_json_bytes, read_json_file

logger = logging.getLogger(__name__)

DEFAULTS: Dict[str, Any] = {
    "word_pool_size": 7776,
    "offline_rate": 1e12,
    "online_rate": 10,
    "popularity_floor": 0.01,
    "quote_threshold": 0.6,
    # None -> the files bundled in data/
    "corpus_path": None,
    "templates_path": None,
    "flair_path": None,
}

def _appdata_dir() -> str:
    appdata = os.getenv("APPDATA")
    if appdata:
        return os.path.join(appdata, "PhraseMeter")
    return os.path.join(os.path.expanduser("~"), ".phrasemeter")

def config_path() -> str:
    return os.getenv("PHRASEMETER_CONFIG") or os.path.join(_appdata_dir(), "config.json")

def load_config(path: Optional[str] = None) -> Dict[str, Any]:
    p = path or config_path()
    if not os.path.exists(p):
        return DEFAULTS.copy()
    try:
        data = read_json_file(p)
    except (OSError, ValueError) as e:
        logger.warning(f"ignoring unreadable config {p}: {e}")
        return DEFAULTS.copy()
    if not isinstance(data, dict):
        logger.warning(f"ignoring config {p}: expected a JSON object")
        return DEFAULTS.copy()
    # merge defaults
    out = DEFAULTS.copy()
    out.update(data)
    return out

def save_config(cfg: Dict[str, Any], path: Optional[str] = None) -> None:
    atomic_write_bytes(path or config_path(), dump_json_bytes(cfg))
