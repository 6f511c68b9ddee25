# bookstore/storage.py
"""
Flat-file persistence for the bookstore collections.

Each collection lives in one pretty-printed JSON document under
``settings.data_dir``.  Access to a given file is serialised with a
process-wide re-entrant lock, so a handler that holds
:func:`locked` for a read-modify-write cycle cannot interleave with
another writer of the same file.
"""

from __future__ import annotations

import json
import logging
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Dict, Iterator, List

from .config import settings


logger = logging.getLogger(__name__)

_locks: Dict[str, threading.RLock] = {}
_locks_guard = threading.Lock()


def data_path(filename: str) -> Path:
    return Path(settings.data_dir) / filename


def _lock_for(filename: str) -> threading.RLock:
    with _locks_guard:
        lock = _locks.get(filename)
        if lock is None:
            lock = _locks[filename] = threading.RLock()
        return lock


@contextmanager
def locked(filename: str) -> Iterator[None]:
    """Hold the lock of ``filename`` for the duration of the block."""
    with _lock_for(filename):
        yield


def read_json_file(filename: str) -> Dict[str, Any]:
    """Load and parse one data file.

    Raises
    ------
    OSError
        The file is missing or unreadable.
    ValueError
        The file is not valid JSON (``json.JSONDecodeError``) or its top
        level is not an object.
    """
    path = data_path(filename)
    try:
        with locked(filename), path.open("r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as exc:
        logger.error("Error reading %s: %s", filename, exc)
        raise
    if not isinstance(data, dict):
        logger.error("Error reading %s: top-level value is not an object", filename)
        raise ValueError(f"{filename} must contain a JSON object")
    return data


def write_json_file(filename: str, data: Dict[str, Any]) -> None:
    """Serialise ``data`` back to ``filename`` with two-space indentation."""
    path = data_path(filename)
    try:
        with locked(filename), path.open("w", encoding="utf-8") as f:
            json.dump(data, f, ensure_ascii=False, indent=2)
            f.write("\n")
    except (OSError, TypeError, ValueError) as exc:
        logger.error("Error writing to %s: %s", filename, exc)
        raise


def read_collection(filename: str, key: str) -> List[Dict[str, Any]]:
    """Return the record list stored under ``key`` in ``filename``."""
    records = read_json_file(filename).get(key)
    if not isinstance(records, list):
        raise ValueError(f"{filename} has no '{key}' list")
    return records


def write_collection(filename: str, key: str, records: List[Dict[str, Any]]) -> None:
    write_json_file(filename, {key: records})
