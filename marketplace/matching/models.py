from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class ServiceType(str, Enum):
    cleaning = "cleaning"
    landscaping = "landscaping"
    pool = "pool"


class City(str, Enum):
    gilbert = "Gilbert"
    mesa = "Mesa"
    chandler = "Chandler"


class PricingTier(str, Enum):
    budget = "budget"
    standard = "standard"
    premium = "premium"


class ProviderStatus(str, Enum):
    pending = "pending"
    approved = "approved"
    suspended = "suspended"


class Provider(BaseModel):
    """A provider record as read from the data source. Never mutated in place."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1)
    business_name: str = Field(..., min_length=1)
    services: list[ServiceType] = Field(default_factory=list)
    cities: list[City] = Field(default_factory=list)
    pricing_tier: PricingTier = PricingTier.standard
    years_experience: int = Field(default=0, ge=0)
    insurance_verified: bool = False
    rating: float | None = Field(default=None, ge=0.0, le=5.0)
    total_reviews: int | None = Field(default=None, ge=0)
    status: ProviderStatus = ProviderStatus.pending


class ProviderApplication(BaseModel):
    """Self-registration body. Any status, rating or review count sent is ignored."""

    id: str = Field(..., min_length=1)
    business_name: str = Field(..., min_length=1)
    services: list[ServiceType] = Field(..., min_length=1)
    cities: list[City] = Field(..., min_length=1)
    pricing_tier: PricingTier = PricingTier.standard
    years_experience: int = Field(default=0, ge=0)
    insurance_verified: bool = False


class MatchRequest(BaseModel):
    service_type: ServiceType
    city: City
    providers: list[Provider] = Field(default_factory=list)


class ScoreBreakdown(BaseModel):
    """Unrounded points per scoring factor."""

    city_match: float
    rating: float
    experience: float
    reviews: float
    insurance: float

    @property
    def total(self) -> float:
        return self.city_match + self.rating + self.experience + self.reviews + self.insurance


class MatchedProvider(Provider):
    # MatchingConfig caps max_score at 100, so this bound holds for any config.
    match_score: int = Field(..., ge=0, le=100)
    badges: list[str] = Field(default_factory=list)
    score_breakdown: ScoreBreakdown


# ── API payloads ─────────────────────────────────────────────────────────


class MatchQuery(BaseModel):
    service_type: ServiceType
    city: City
    limit: int = Field(default=3, ge=0, le=50)


class MatchResponse(BaseModel):
    matches: list[MatchedProvider]
    total_candidates: int


class TierOffer(BaseModel):
    tier: PricingTier
    provider: MatchedProvider
    match_label: str
    total_price: float
    price_label: str
    deposit_amount: float
    remaining_amount: float


class OffersResponse(BaseModel):
    service_type: ServiceType
    city: City
    offers: list[TierOffer]
    total_candidates: int
