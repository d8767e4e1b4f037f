"""Result Cache — bounded LRU memo of whole-pipeline results.

Invariants:
    - size() <= max_size at all times
    - Keys are SHA-256 hex digests of whitespace-normalized text (plus option
      suffixes), so "a  b" and " a b " share an entry
    - get() counts exactly one hit or one miss and refreshes last_access on hit
    - set() on a new key at capacity evicts exactly the entry with the oldest
      last_access (linear scan: O(n) per eviction)
    - Stored and returned values are deep copies; callers cannot mutate entries
    - Every public operation holds one threading.Lock

Design Decisions:
    - last_access comes from a monotonic counter, not wall-clock time, so
      eviction order is deterministic even within one clock tick
"""

import copy
import hashlib
import itertools
import json
import threading
from dataclasses import dataclass
from typing import Any

from ruliad.core.domain_types import CacheKey
from ruliad.core.errors import ContractViolationError
from ruliad.core.scoring_constants import CACHE_DEFAULT_MAX_SIZE
from ruliad.core.tokenize_clause import normalize_clause


@dataclass
class CacheEntry:
    key: CacheKey
    value: Any
    last_access: int


def make_cache_key(text: str, with_rewrite: bool = False, clauses: list | None = None) -> CacheKey:
    """Digest of normalized text plus the options that change the result."""
    material = normalize_clause(text)
    if with_rewrite:
        material += ":rewrite"
    if clauses:
        canonical = json.dumps(clauses, sort_keys=True, ensure_ascii=False, default=str)
        material += ":clauses:" + hashlib.sha256(canonical.encode("utf-8")).hexdigest()
    return CacheKey(hashlib.sha256(material.encode("utf-8")).hexdigest())


class ResultCache:
    """Thread-safe LRU cache keyed by CacheKey."""

    def __init__(self, max_size: int = CACHE_DEFAULT_MAX_SIZE):
        if not isinstance(max_size, int) or max_size <= 0:
            raise ContractViolationError(f"max_size must be a positive int, got {max_size!r}", "ResultCache")
        self._max_size = max_size
        self._entries: dict[str, CacheEntry] = {}
        self._clock = itertools.count(1)
        self._lock = threading.Lock()
        self._hits = 0
        self._misses = 0

    @property
    def max_size(self) -> int:
        return self._max_size

    def get(self, key: str) -> Any | None:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                self._misses += 1
                return None
            self._hits += 1
            entry.last_access = next(self._clock)
            return copy.deepcopy(entry.value)

    def set(self, key: str, value: Any) -> None:
        with self._lock:
            if key not in self._entries and len(self._entries) >= self._max_size:
                self._evict_oldest()
            self._entries[key] = CacheEntry(
                key=CacheKey(key), value=copy.deepcopy(value), last_access=next(self._clock),
            )

    def has(self, key: str) -> bool:
        """Membership test; touches neither counters nor recency."""
        with self._lock:
            return key in self._entries

    def keys(self) -> list[str]:
        with self._lock:
            return list(self._entries)

    def size(self) -> int:
        with self._lock:
            return len(self._entries)

    def clear(self) -> None:
        """Drop every entry and reset hit/miss counters."""
        with self._lock:
            self._entries.clear()
            self._hits = 0
            self._misses = 0

    def warm(self, items: dict[str, Any]) -> int:
        """Preload entries for keys not yet cached; returns how many were inserted.

        Existing entries keep their value and their recency.
        """
        inserted = 0
        with self._lock:
            for key, value in items.items():
                if key in self._entries:
                    continue
                if len(self._entries) >= self._max_size:
                    self._evict_oldest()
                self._entries[key] = CacheEntry(
                    key=CacheKey(key), value=copy.deepcopy(value), last_access=next(self._clock),
                )
                inserted += 1
        return inserted

    def stats(self) -> dict:
        with self._lock:
            total = self._hits + self._misses
            size = len(self._entries)
            return {
                "hits": self._hits,
                "misses": self._misses,
                "total_requests": total,
                "hit_rate": round(self._hits / total, 4) if total else 0.0,
                "size": size,
                "max_size": self._max_size,
                "utilization": round(size / self._max_size, 4),
            }

    def _evict_oldest(self) -> None:
        oldest = min(self._entries.values(), key=lambda e: e.last_access)
        del self._entries[oldest.key]
