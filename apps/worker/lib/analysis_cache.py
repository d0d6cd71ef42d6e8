from __future__ import annotations

import threading
from collections import OrderedDict

from packages.shared.models import AnalyzedNote


class AnalysisCache:
    """
    Bounded LRU of analyzed notes keyed by raw note text.

    Owned by the caller: build one per batch (or share it across batches
    analyzed with the same settings) and close it when done. Thread safe so
    parallel analysis can share it.
    """

    def __init__(self, max_entries: int = 2048):
        if max_entries < 1:
            raise ValueError("max_entries must be >= 1")
        self.max_entries = max_entries
        self._entries: OrderedDict[str, AnalyzedNote] = OrderedDict()
        self._lock = threading.Lock()
        self.hits = 0
        self.misses = 0

    def get(self, key: str) -> AnalyzedNote | None:
        with self._lock:
            note = self._entries.get(key)
            if note is None:
                self.misses += 1
                return None
            self._entries.move_to_end(key)
            self.hits += 1
            return note

    def put(self, key: str, note: AnalyzedNote) -> None:
        with self._lock:
            self._entries[key] = note
            self._entries.move_to_end(key)
            while len(self._entries) > self.max_entries:
                self._entries.popitem(last=False)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
            self.hits = 0
            self.misses = 0

    def close(self) -> None:
        self.clear()

    def __len__(self) -> int:
        return len(self._entries)

    def __enter__(self) -> "AnalysisCache":
        return self

    def __exit__(self, *exc) -> None:
        self.close()
