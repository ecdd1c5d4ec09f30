from __future__ import annotations

import pytest

from marketplace.matching.config import MatchingConfig, ScoringWeights
from marketplace.matching.engine import (
    compute_match_score,
    derive_badges,
    get_top_providers,
    match_provider,
    rank_providers,
    score_provider,
    take_top,
    top_by_tier,
)
from marketplace.matching.models import (
    City,
    MatchRequest,
    PricingTier,
    Provider,
    ProviderStatus,
    ServiceType,
)


def _provider(**overrides) -> Provider:
    fields = {
        "id": "p-1",
        "business_name": "Test Co",
        "services": [ServiceType.cleaning],
        "cities": [City.gilbert],
        "pricing_tier": PricingTier.standard,
        "years_experience": 0,
        "insurance_verified": False,
        "rating": None,
        "total_reviews": None,
        "status": ProviderStatus.approved,
    }
    fields.update(overrides)
    return Provider(**fields)


def _request(providers: list[Provider]) -> MatchRequest:
    return MatchRequest(service_type=ServiceType.cleaning, city=City.gilbert, providers=providers)


# ── Scenarios ────────────────────────────────────────────────────────────


def test_highly_rated_veteran_rounds_up_to_100():
    a = _provider(
        id="a", rating=4.9, years_experience=12, total_reviews=210, insurance_verified=True,
    )
    matched = match_provider(a)
    assert matched.score_breakdown.rating == pytest.approx(24.5)
    assert matched.match_score == 100
    assert matched.badges == ["Top Rated", "Most Reliable"]


def test_new_budget_provider_gets_only_city_points():
    b = _provider(id="b", pricing_tier=PricingTier.budget)
    matched = match_provider(b)
    assert matched.match_score == 30
    assert matched.badges == ["Best Value"]


def test_mid_career_premium_provider():
    e = _provider(
        id="e", rating=4.5, total_reviews=25, years_experience=5,
        pricing_tier=PricingTier.premium,
    )
    breakdown = score_provider(e)
    assert breakdown.rating == pytest.approx(22.5)
    assert breakdown.experience == pytest.approx(10.0)
    assert breakdown.reviews == pytest.approx(7.5)
    assert breakdown.insurance == 0.0
    matched = match_provider(e)
    assert matched.match_score == 70
    assert matched.badges == ["Most Reliable"]


def test_ranking_orders_by_score_descending():
    a = _provider(id="a", rating=4.9, years_experience=12, total_reviews=210, insurance_verified=True)
    b = _provider(id="b")
    d = _provider(id="d", rating=4.0, years_experience=5, total_reviews=10, insurance_verified=True)
    ranked = rank_providers([a, b, d])
    assert [m.id for m in ranked] == ["a", "d", "b"]
    assert [m.match_score for m in ranked] == [100, 73, 30]


def test_top_providers_on_empty_pool():
    assert get_top_providers(_request([]), 1) == []


# ── Properties ───────────────────────────────────────────────────────────


def test_missing_data_defaults_to_city_points_only():
    breakdown = score_provider(_provider())
    assert breakdown.city_match == 30.0
    assert breakdown.rating == 0.0
    assert breakdown.experience == 0.0
    assert breakdown.reviews == 0.0
    assert breakdown.insurance == 0.0
    assert compute_match_score(breakdown) == 30


def test_score_bounds_at_extremes():
    best = _provider(rating=5.0, years_experience=40, total_reviews=10_000, insurance_verified=True)
    worst = _provider(rating=0.0, years_experience=0, total_reviews=0)
    assert match_provider(best).match_score == 100
    assert match_provider(worst).match_score == 30


@pytest.mark.parametrize("field,low,high", [
    ("rating", 3.0, 4.0),
    ("years_experience", 2, 6),
    ("total_reviews", 5, 40),
    ("insurance_verified", False, True),
])
def test_score_is_monotonic(field, low, high):
    lower = match_provider(_provider(**{field: low}))
    higher = match_provider(_provider(**{field: high}))
    assert higher.match_score >= lower.match_score


def test_experience_saturates_at_ten_years():
    ten = score_provider(_provider(years_experience=10))
    twenty_five = score_provider(_provider(years_experience=25))
    assert ten.experience == twenty_five.experience == 20.0


def test_reviews_saturate_at_fifty():
    fifty = score_provider(_provider(total_reviews=50))
    five_hundred = score_provider(_provider(total_reviews=500))
    assert fifty.reviews == five_hundred.reviews == 15.0


def test_ranked_scores_never_increase():
    pool = [
        _provider(id=f"p{i}", rating=r, years_experience=y, total_reviews=n)
        for i, (r, y, n) in enumerate([(3.1, 1, 4), (4.7, 9, 80), (None, 0, None), (4.2, 3, 20)])
    ]
    scores = [m.match_score for m in rank_providers(pool)]
    assert scores == sorted(scores, reverse=True)


def test_take_top_is_safe():
    ranked = rank_providers([_provider(id="a"), _provider(id="b")])
    assert len(take_top(ranked, 10)) == 2
    assert take_top(ranked, 0) == []
    assert take_top(ranked, -1) == []


def test_badges_ignore_other_providers():
    target = _provider(id="t", rating=4.8, total_reviews=30, pricing_tier=PricingTier.budget)
    alone = rank_providers([target])[0].badges
    crowd = rank_providers([
        target,
        _provider(id="x", rating=5.0, total_reviews=900),
        _provider(id="y", rating=1.0),
    ])
    in_crowd = next(m for m in crowd if m.id == "t").badges
    assert alone == in_crowd == ["Top Rated", "Best Value", "Most Reliable"]


def test_missing_rating_never_earns_rating_badges():
    assert derive_badges(_provider(rating=None, total_reviews=500)) == []


def test_badges_do_not_change_score():
    plain = _provider(id="a", pricing_tier=PricingTier.standard)
    budget = _provider(id="b", pricing_tier=PricingTier.budget)
    assert match_provider(plain).match_score == match_provider(budget).match_score


# ── Ranking details ──────────────────────────────────────────────────────


def test_ties_break_on_reviews_then_id():
    # 30.0 and 30.3 both round to 30.
    few = _provider(id="a", total_reviews=0)
    many = _provider(id="b", total_reviews=1)
    assert match_provider(few).match_score == match_provider(many).match_score
    assert [m.id for m in rank_providers([few, many])] == ["b", "a"]

    twin_z = _provider(id="z")
    twin_m = _provider(id="m")
    assert [m.id for m in rank_providers([twin_z, twin_m])] == ["m", "z"]


def test_rank_skips_unapproved_records():
    pending = _provider(id="pending", status=ProviderStatus.pending)
    suspended = _provider(id="suspended", status=ProviderStatus.suspended)
    ok = _provider(id="ok")
    assert [m.id for m in rank_providers([pending, suspended, ok])] == ["ok"]


def test_rank_does_not_mutate_input():
    provider = _provider(rating=4.0)
    rank_providers([provider])
    assert not hasattr(provider, "match_score")
    assert provider.rating == 4.0


def test_get_top_providers_filters_before_ranking():
    pool = [
        _provider(id="good", rating=4.0),
        _provider(id="wrong-city", cities=[City.mesa], rating=5.0),
        _provider(id="wrong-service", services=[ServiceType.pool], rating=5.0),
        _provider(id="pending", status=ProviderStatus.pending, rating=5.0),
    ]
    assert [m.id for m in get_top_providers(_request(pool), 3)] == ["good"]


def test_top_by_tier_picks_one_per_tier():
    pool = [
        _provider(id="b1", pricing_tier=PricingTier.budget, rating=3.0),
        _provider(id="b2", pricing_tier=PricingTier.budget, rating=4.0),
        _provider(id="s1", pricing_tier=PricingTier.standard, rating=4.9, total_reviews=100),
        _provider(
            id="s2", pricing_tier=PricingTier.standard, rating=4.9, total_reviews=100,
            years_experience=5,
        ),
    ]
    result = top_by_tier(_request(pool))
    assert list(result) == [PricingTier.budget, PricingTier.standard, PricingTier.premium]
    assert result[PricingTier.budget].id == "b2"
    assert result[PricingTier.standard].id == "s2"
    assert result[PricingTier.premium] is None


def test_alternate_weights_can_be_injected():
    config = MatchingConfig(
        weights=ScoringWeights(city_match=0.0, rating=100.0, experience=0.0, reviews=0.0, insurance=0.0),
        top_rated_min_rating=4.0,
    )
    matched = match_provider(_provider(rating=4.0, insurance_verified=True), config)
    assert matched.match_score == 80
    assert matched.badges == ["Top Rated"]


def test_lower_score_ceiling_clamps():
    config = MatchingConfig(max_score=90)
    best = _provider(rating=5.0, years_experience=40, total_reviews=10_000, insurance_verified=True)
    assert match_provider(best, config).match_score == 90


@pytest.mark.parametrize("max_score", [101, -1])
def test_score_ceiling_must_stay_within_percent_range(max_score):
    with pytest.raises(ValueError):
        MatchingConfig(max_score=max_score)
