import os
import json
from typing import Any

DATA_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), "data")


def ensure_dir_exists(path: str) -> None:
    d = os.path.dirname(path)
    if d and not os.path.exists(d):
        os.makedirs(d, exist_ok=True)

def atomic_write_bytes(path: str, data: bytes) -> None:
    """
    Atomically write bytes to 'path' by writing to a temp file and renaming.
    """
    ensure_dir_exists(path)
    tmp = path + ".tmp"
    with open(tmp, "wb") as f:
        f.write(data)
        f.flush()
        os.fsync(f.fileno())
    # atomic replace
    os.replace(tmp, path)

def atomic_read_bytes(path: str) -> bytes:
    with open(path, "rb") as f:
        return f.read()


def data_path(name: str) -> str:
    """Path of a file shipped in the package's data/ directory."""
    return os.path.join(DATA_DIR, name)

def read_json_bytes(b: bytes) -> Any:
    return json.loads(b.decode("utf-8"))

def dump_json_bytes(obj: Any) -> bytes:
    return json.dumps(obj, ensure_ascii=False, indent=2).encode("utf-8")

def read_json_file(path: str) -> Any:
    """
    Read and decode a UTF-8 JSON file.
    Raises OSError if unreadable, ValueError if it is not valid JSON.
    """
    return read_json_bytes(atomic_read_bytes(path))
