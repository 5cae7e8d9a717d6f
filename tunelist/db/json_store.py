# ============================================================================
# FILE: tunelist/db/json_store.py
# Whole-file JSON persistence with per-key write serialization
# ============================================================================
import json
import os
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Dict, Iterator
import logging

logger = logging.getLogger(__name__)


class JsonStore:
    """
    Reads and atomically replaces JSON documents on disk.

    Every read-modify-write cycle on a document must run inside
    ``locked(key)`` for the key that owns the document, otherwise two
    requests for the same user can overwrite each other's changes.
    """

    def __init__(self):
        self._locks: Dict[str, threading.Lock] = {}
        self._registry_lock = threading.Lock()

    def _lock_for(self, key: str) -> threading.Lock:
        with self._registry_lock:
            lock = self._locks.get(key)
            if lock is None:
                lock = threading.Lock()
                self._locks[key] = lock
            return lock

    @contextmanager
    def locked(self, key: str) -> Iterator[None]:
        lock = self._lock_for(key)
        with lock:
            yield

    def exists(self, path: Path) -> bool:
        return path.is_file()

    def read(self, path: Path, default: Any) -> Any:
        """Load a document, falling back to ``default`` when missing or corrupt"""
        try:
            with open(path, "r", encoding="utf-8") as f:
                return json.load(f)
        except FileNotFoundError:
            return default
        except (OSError, ValueError) as e:
            logger.warning(f"Unreadable JSON document {path}: {e}")
            return default

    def write(self, path: Path, data: Any) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        tmp = path.with_name(path.name + ".tmp")
        with open(tmp, "w", encoding="utf-8") as f:
            json.dump(data, f, ensure_ascii=False, indent=2)
        os.replace(tmp, path)


# Singleton instance shared by all services in the process
json_store = JsonStore()
