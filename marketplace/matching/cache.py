from __future__ import annotations

import hashlib
import json
import time
from typing import Any, NamedTuple

_DEFAULT_TTL = 300  # seconds


class _Entry(NamedTuple):
    value: Any
    stored_at: float


_entries: dict[str, _Entry] = {}
_stats = {"hits": 0, "misses": 0}


def _key_for(request_dict: dict) -> str:
    """Stable digest of a request; key order and value types don't matter."""
    payload = json.dumps(request_dict, sort_keys=True, default=str)
    return hashlib.sha256(payload.encode()).hexdigest()[:16]


def cache_get(request_dict: dict, ttl: float = _DEFAULT_TTL) -> Any | None:
    """Return the stored response for an identical request, or ``None``.

    Stale entries are evicted on lookup and counted as misses.
    """
    key = _key_for(request_dict)
    entry = _entries.get(key)
    if entry is not None and time.time() - entry.stored_at < ttl:
        _stats["hits"] += 1
        return entry.value
    if entry is not None:
        # a concurrent lookup may already have evicted it
        _entries.pop(key, None)
    _stats["misses"] += 1
    return None


def cache_set(request_dict: dict, value: Any) -> None:
    _entries[_key_for(request_dict)] = _Entry(value, time.time())


def get_cache_stats() -> dict:
    hits, misses = _stats["hits"], _stats["misses"]
    lookups = hits + misses
    return {
        "size": len(_entries),
        "hits": hits,
        "misses": misses,
        "hit_rate": round(hits / lookups * 100, 1) if lookups else 0.0,
    }


def clear_cache(reset_stats: bool = False) -> None:
    """Drop every cached response. Hit/miss counters survive unless ``reset_stats``."""
    _entries.clear()
    if reset_stats:
        _stats.update(hits=0, misses=0)
