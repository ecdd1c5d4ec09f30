from __future__ import annotations

from dataclasses import dataclass, field

TOP_RATED = "Top Rated"
BEST_VALUE = "Best Value"
MOST_RELIABLE = "Most Reliable"


@dataclass(frozen=True)
class ScoringWeights:
    """Maximum points each factor can contribute. Sums to 100."""

    # Always fully awarded: eligibility already guarantees city membership.
    city_match: float = 30.0
    rating: float = 25.0
    experience: float = 20.0
    reviews: float = 15.0
    insurance: float = 10.0

    @property
    def total(self) -> float:
        return self.city_match + self.rating + self.experience + self.reviews + self.insurance


@dataclass(frozen=True)
class MatchingConfig:
    weights: ScoringWeights = field(default_factory=ScoringWeights)
    rating_scale: float = 5.0
    experience_saturation_years: int = 10
    review_saturation_count: int = 50
    max_score: int = 100
    top_rated_min_rating: float = 4.8
    reliable_min_rating: float = 4.5
    reliable_min_reviews: int = 25
    default_limit: int = 3

    def __post_init__(self) -> None:
        if not 0 <= self.max_score <= 100:
            raise ValueError(f"max_score must be within [0, 100], got {self.max_score}")


DEFAULT_MATCHING_CONFIG = MatchingConfig()
