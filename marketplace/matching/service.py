from __future__ import annotations

import dataclasses
import time
from collections.abc import Callable
from typing import Any

from pydantic import BaseModel

from ..analytics.store import record_event
from ..formatting import format_currency, format_match_score
from ..pricing.calculators import deposit_amount, remaining_amount
from ..pricing.models import PriceBreakdown
from .cache import cache_get, cache_set
from .config import DEFAULT_MATCHING_CONFIG, MatchingConfig
from .data_store import query_providers
from .engine import rank_providers, take_top, top_by_tier
from .eligibility import filter_eligible
from .models import (
    City,
    MatchQuery,
    MatchRequest,
    MatchResponse,
    OffersResponse,
    PricingTier,
    ServiceType,
    TierOffer,
)

PriceCalculator = Callable[[Any, PricingTier], PriceBreakdown]


def _record_search(
    kind: str,
    service_type: ServiceType,
    city: City,
    total_candidates: int,
    results_returned: int,
    start_time: float,
    cache_hit: bool,
) -> None:
    record_event("search", {
        "kind": kind,
        "service_type": service_type.value,
        "city": city.value,
        "total_candidates": total_candidates,
        "results_returned": results_returned,
        "response_time_ms": round((time.time() - start_time) * 1000, 1),
        "cache_hit": cache_hit,
    })


def _candidate_pool(service_type: ServiceType, city: City) -> MatchRequest:
    # The store query narrows by containment; the engine re-checks everything.
    return MatchRequest(
        service_type=service_type,
        city=city,
        providers=query_providers(service_type=service_type, city=city),
    )


def get_matches(
    query: MatchQuery, config: MatchingConfig = DEFAULT_MATCHING_CONFIG,
) -> MatchResponse:
    start_time = time.time()

    request_dict = {
        "kind": "matches",
        **query.model_dump(mode="json"),
        "config": dataclasses.asdict(config),
    }
    cached = cache_get(request_dict)
    if cached is not None:
        _record_search(
            "matches", query.service_type, query.city,
            cached.total_candidates, len(cached.matches), start_time, True,
        )
        return cached

    pool = _candidate_pool(query.service_type, query.city)
    eligible = filter_eligible(pool.service_type, pool.city, pool.providers)
    ranked = rank_providers(eligible, config)

    response = MatchResponse(
        matches=take_top(ranked, query.limit),
        total_candidates=len(eligible),
    )
    cache_set(request_dict, response)
    _record_search(
        "matches", query.service_type, query.city,
        response.total_candidates, len(response.matches), start_time, False,
    )
    return response


def get_offers(
    service_type: ServiceType,
    city: City,
    quote: BaseModel,
    calculate: PriceCalculator,
    config: MatchingConfig = DEFAULT_MATCHING_CONFIG,
) -> OffersResponse:
    """One offer per pricing tier: the tier's best provider and its price.

    Tiers without an eligible provider are left out rather than priced.
    """
    start_time = time.time()

    request_dict = {
        "kind": "offers",
        "service_type": service_type.value,
        "city": city.value,
        "quote": quote.model_dump(mode="json"),
        "config": dataclasses.asdict(config),
    }
    cached = cache_get(request_dict)
    if cached is not None:
        _record_search(
            "offers", service_type, city,
            cached.total_candidates, len(cached.offers), start_time, True,
        )
        return cached

    pool = _candidate_pool(service_type, city)
    total_candidates = len(filter_eligible(service_type, city, pool.providers))

    offers: list[TierOffer] = []
    for tier, provider in top_by_tier(pool, config).items():
        if provider is None:
            continue
        price = calculate(quote, tier)
        offers.append(TierOffer(
            tier=tier,
            provider=provider,
            match_label=format_match_score(provider.match_score),
            total_price=price.total,
            price_label=format_currency(price.total),
            deposit_amount=deposit_amount(price.total),
            remaining_amount=remaining_amount(price.total),
        ))

    response = OffersResponse(
        service_type=service_type,
        city=city,
        offers=offers,
        total_candidates=total_candidates,
    )
    cache_set(request_dict, response)
    _record_search(
        "offers", service_type, city,
        total_candidates, len(offers), start_time, False,
    )
    return response
