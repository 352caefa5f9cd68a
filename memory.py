# memory.py — process-lifetime query cache
"""
Memoises ranked results per normalised query. Entries expire `ttl` seconds
after creation (checked lazily on lookup); beyond `capacity` entries the
oldest *inserted* one is dropped. Reads never reorder: FIFO, not LRU.

This is the only structure shared between concurrent queries, so every
access goes through one lock.
"""

from __future__ import annotations

import threading, time
from collections import OrderedDict
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional

import config
from utils import normalize_query

Result = Dict[str, str]          # {title, url, snippet}


@dataclass(frozen=True)
class CacheEntry:
    query: str
    results: List[Result]
    timestamp: float
    stats: Dict[str, int] = field(default_factory=dict)


class QueryCache:
    """TTL + bounded FIFO cache of ranked results."""

    def __init__(self,
                 ttl: float | None = None,
                 capacity: int | None = None,
                 clock: Callable[[], float] = time.monotonic) -> None:
        self.ttl = config.QUERY_CACHE_TTL if ttl is None else ttl
        self.capacity = config.QUERY_CACHE_SIZE if capacity is None else capacity
        self._clock = clock
        self._entries: "OrderedDict[str, CacheEntry]" = OrderedDict()
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def get(self, query: str) -> Optional[CacheEntry]:
        key = normalize_query(query)
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            if self._clock() - entry.timestamp >= self.ttl:
                del self._entries[key]            # lazy expiry
                return None
            return entry

    def put(self, query: str, results: List[Result],
            stats: Dict[str, int] | None = None) -> CacheEntry:
        key = normalize_query(query)
        entry = CacheEntry(query=key, results=list(results),
                           timestamp=self._clock(), stats=dict(stats or {}))
        with self._lock:
            self._entries.pop(key, None)          # re-insert as newest
            self._entries[key] = entry
            while len(self._entries) > self.capacity:
                self._entries.popitem(last=False)
        return entry

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
