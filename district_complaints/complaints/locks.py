import threading
from contextlib import contextmanager


class KeyedLock:
    """One mutex per key, created on demand and dropped once nobody holds it.

    Callers working on different keys never wait on each other.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._entries = {}

    @contextmanager
    def hold(self, key):
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                entry = self._entries[key] = [threading.Lock(), 0]
            entry[1] += 1
        try:
            with entry[0]:
                yield
        finally:
            with self._lock:
                entry[1] -= 1
                if entry[1] == 0:
                    del self._entries[key]

    def __len__(self):
        with self._lock:
            return len(self._entries)
