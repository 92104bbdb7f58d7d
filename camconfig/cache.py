"""
In-memory result cache for capability queries

Entries are inserted once per key and kept for the life of the process;
hardware capabilities do not change while it runs.
"""
import threading
from typing import Callable, Dict, Hashable, Iterable, List, Optional, Tuple

from .logger import app_logger
from .camera.interface import describe_key


class ResultCache:
    """
    Thread-safe key -> tuple store with one lock per key.

    get_or_compute() runs the compute callable under the key's lock, so two
    threads asking for the same key trigger a single backend query while
    threads on different keys proceed independently.
    """

    def __init__(self, name: str):
        self.name = name
        self._entries: Dict[Hashable, Tuple] = {}
        self._key_locks: Dict[Hashable, threading.Lock] = {}
        self._guard = threading.Lock()

    def _lock_for(self, key: Hashable) -> threading.Lock:
        with self._guard:
            lock = self._key_locks.get(key)
            if lock is None:
                lock = threading.Lock()
                self._key_locks[key] = lock
            return lock

    def get(self, key: Hashable) -> Optional[Tuple]:
        """Cached result for key, or None"""
        return self._entries.get(key)

    def put(self, key: Hashable, value: Iterable) -> Tuple:
        """Store a result (frozen to a tuple) and return the stored value"""
        stored = tuple(value)
        with self._lock_for(key):
            self._entries[key] = stored
        return stored

    def get_or_compute(self, key: Hashable, compute: Callable[[], Iterable]) -> Tuple:
        """
        Return the cached result for key, computing and storing it on a miss.

        Exceptions from compute propagate and leave the key empty.
        """
        cached = self._entries.get(key)
        if cached is not None:
            app_logger.debug(f"{self.name} cache hit: {describe_key(key)}")
            return cached

        with self._lock_for(key):
            # Another thread may have filled the slot while we waited
            cached = self._entries.get(key)
            if cached is not None:
                app_logger.debug(f"{self.name} cache hit: {describe_key(key)}")
                return cached

            app_logger.debug(f"{self.name} cache miss: {describe_key(key)}")
            stored = tuple(compute())
            self._entries[key] = stored
            return stored

    def clear(self) -> None:
        with self._guard:
            self._entries.clear()
            self._key_locks.clear()

    def keys(self) -> List[Hashable]:
        return list(self._entries.keys())

    def __contains__(self, key: Hashable) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)
