"""
Scoring & ranking engine.

Every eligible provider gets a 0-100 match score built from five capped
factors (city match, rating, experience, review volume, insurance) plus a
set of badges derived from its own fields. Scores are only used for
ordering and display, never for pricing.
"""
from __future__ import annotations

from collections.abc import Iterable
from decimal import ROUND_HALF_UP, Decimal

from .config import (
    BEST_VALUE,
    DEFAULT_MATCHING_CONFIG,
    MOST_RELIABLE,
    TOP_RATED,
    MatchingConfig,
)
from .eligibility import filter_eligible
from .models import (
    MatchedProvider,
    MatchRequest,
    PricingTier,
    Provider,
    ProviderStatus,
    ScoreBreakdown,
)


def _round_half_away(value: float) -> int:
    # Trim float noise first so 4.9 / 5 * 25 still lands on an exact .5
    return int(Decimal(repr(round(value, 6))).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def score_provider(
    provider: Provider, config: MatchingConfig = DEFAULT_MATCHING_CONFIG,
) -> ScoreBreakdown:
    """Compute the unrounded points for each factor. Missing numbers count as zero."""
    w = config.weights
    rating = provider.rating or 0.0
    reviews = provider.total_reviews or 0

    return ScoreBreakdown(
        city_match=w.city_match,
        rating=(rating / config.rating_scale) * w.rating,
        experience=min(provider.years_experience / config.experience_saturation_years, 1.0)
        * w.experience,
        reviews=min(reviews / config.review_saturation_count, 1.0) * w.reviews,
        insurance=w.insurance if provider.insurance_verified else 0.0,
    )


def compute_match_score(
    breakdown: ScoreBreakdown, config: MatchingConfig = DEFAULT_MATCHING_CONFIG,
) -> int:
    score = _round_half_away(breakdown.total)
    return max(0, min(config.max_score, score))


def derive_badges(
    provider: Provider, config: MatchingConfig = DEFAULT_MATCHING_CONFIG,
) -> list[str]:
    """Badges in display order. Depends only on the provider's own fields."""
    badges: list[str] = []
    rating = provider.rating
    reviews = provider.total_reviews or 0

    if rating is not None and rating >= config.top_rated_min_rating:
        badges.append(TOP_RATED)
    if provider.pricing_tier == PricingTier.budget:
        badges.append(BEST_VALUE)
    if (
        rating is not None
        and reviews >= config.reliable_min_reviews
        and rating >= config.reliable_min_rating
    ):
        badges.append(MOST_RELIABLE)
    return badges


def match_provider(
    provider: Provider, config: MatchingConfig = DEFAULT_MATCHING_CONFIG,
) -> MatchedProvider:
    breakdown = score_provider(provider, config)
    return MatchedProvider(
        **provider.model_dump(include=set(Provider.model_fields)),
        match_score=compute_match_score(breakdown, config),
        badges=derive_badges(provider, config),
        score_breakdown=breakdown,
    )


def _rank_key(matched: MatchedProvider) -> tuple[int, int, str]:
    # Score desc, then review count desc, then id asc.
    return (-matched.match_score, -(matched.total_reviews or 0), matched.id)


def rank_providers(
    providers: Iterable[Provider], config: MatchingConfig = DEFAULT_MATCHING_CONFIG,
) -> list[MatchedProvider]:
    """Score every approved provider and return them best first.

    Eligibility is assumed to have been applied already; records that are
    not approved are still skipped here.
    """
    scored = [
        match_provider(p, config)
        for p in providers
        if p.status == ProviderStatus.approved
    ]
    return sorted(scored, key=_rank_key)


def take_top(ranked: list[MatchedProvider], limit: int) -> list[MatchedProvider]:
    """First ``limit`` entries of an already ranked list. Never raises."""
    return ranked[: max(limit, 0)]


def match_providers(
    request: MatchRequest, config: MatchingConfig = DEFAULT_MATCHING_CONFIG,
) -> list[MatchedProvider]:
    eligible = filter_eligible(request.service_type, request.city, request.providers)
    return rank_providers(eligible, config)


def get_top_providers(
    request: MatchRequest,
    limit: int = DEFAULT_MATCHING_CONFIG.default_limit,
    config: MatchingConfig = DEFAULT_MATCHING_CONFIG,
) -> list[MatchedProvider]:
    return take_top(match_providers(request, config), limit)


def top_by_tier(
    request: MatchRequest, config: MatchingConfig = DEFAULT_MATCHING_CONFIG,
) -> dict[PricingTier, MatchedProvider | None]:
    """Best provider per pricing tier, or ``None`` for an empty tier.

    The pool is split by tier before ranking so the offers always come
    from different tiers.
    """
    result: dict[PricingTier, MatchedProvider | None] = {}
    for tier in PricingTier:
        bucket = MatchRequest(
            service_type=request.service_type,
            city=request.city,
            providers=[p for p in request.providers if p.pricing_tier == tier],
        )
        top = get_top_providers(bucket, 1, config)
        result[tier] = top[0] if top else None
    return result
