from __future__ import annotations

from collections import Counter
from typing import Any


def _rate(part: int, whole: int) -> float:
    return round(part / whole * 100, 1) if whole else 0.0


def compute_analytics(events: list[dict[str, Any]]) -> dict[str, Any]:
    searches = [e for e in events if e["type"] == "search"]
    total = len(searches)

    times = [s["response_time_ms"] for s in searches if "response_time_ms" in s]
    avg_time = round(sum(times) / len(times), 1) if times else 0.0

    service_counter: Counter[str] = Counter(s.get("service_type", "unknown") for s in searches)
    city_counter: Counter[str] = Counter(s.get("city", "unknown") for s in searches)
    kind_counter: Counter[str] = Counter(s.get("kind", "unknown") for s in searches)

    empty = sum(1 for s in searches if s.get("total_candidates", 0) == 0)
    cache_hits = sum(1 for s in searches if s.get("cache_hit"))
    transitions: Counter[str] = Counter(
        e.get("action", "unknown") for e in events if e["type"] == "transition"
    )

    return {
        "total_searches": total,
        "avg_response_time_ms": avg_time,
        "searches_by_service": dict(service_counter),
        "searches_by_city": [{"name": n, "count": c} for n, c in city_counter.most_common()],
        "searches_by_kind": dict(kind_counter),
        "empty_result_rate": _rate(empty, total),
        "provider_transitions": dict(transitions),
        "provider_registrations": sum(1 for e in events if e["type"] == "registration"),
        "cache_stats": {
            "hits": cache_hits,
            "misses": total - cache_hits,
            "hit_rate": _rate(cache_hits, total),
        },
    }
