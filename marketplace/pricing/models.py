from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field

from ..matching.models import City, PricingTier


class CleaningFrequency(str, Enum):
    one_time = "one-time"
    weekly = "weekly"
    bi_weekly = "bi-weekly"
    monthly = "monthly"


class Terrain(str, Enum):
    flat = "flat"
    sloped = "sloped"
    very_sloped = "very_sloped"


class PoolType(str, Enum):
    in_ground = "in-ground"
    above_ground = "above-ground"


class PoolSize(str, Enum):
    small = "small"
    medium = "medium"
    large = "large"


class PoolFrequency(str, Enum):
    weekly = "weekly"
    bi_weekly = "bi-weekly"


# ── Quote inputs ─────────────────────────────────────────────────────────


class CleaningAddOns(BaseModel):
    windows: bool = False
    fridge: bool = False
    oven: bool = False


class CleaningQuote(BaseModel):
    square_feet: int = Field(..., gt=0, le=50_000)
    bedrooms: int = Field(default=1, ge=0)
    bathrooms: int = Field(default=1, ge=0)
    frequency: CleaningFrequency = CleaningFrequency.bi_weekly
    deep_clean: bool = False
    add_ons: CleaningAddOns = Field(default_factory=CleaningAddOns)


class LandscapingServices(BaseModel):
    mowing: bool = True
    edging: bool = False
    trimming: bool = False
    leaf_removal: bool = False
    debris: bool = False


class LandscapingQuote(BaseModel):
    lot_size: int = Field(..., gt=0, description="Lot size in square feet")
    terrain: Terrain = Terrain.flat
    services: LandscapingServices = Field(default_factory=LandscapingServices)


class PoolServices(BaseModel):
    chemical_balancing: bool = False
    equipment_check: bool = False


class PoolQuote(BaseModel):
    pool_type: PoolType = PoolType.in_ground
    pool_size: PoolSize = PoolSize.medium
    frequency: PoolFrequency = PoolFrequency.weekly
    services: PoolServices = Field(default_factory=PoolServices)


class CleaningOffersRequest(BaseModel):
    city: City
    quote: CleaningQuote


class LandscapingOffersRequest(BaseModel):
    city: City
    quote: LandscapingQuote


class PoolOffersRequest(BaseModel):
    city: City
    quote: PoolQuote


# ── Breakdowns ───────────────────────────────────────────────────────────


class PriceBreakdown(BaseModel):
    tier: PricingTier
    base_price: float
    tier_multiplier: float
    subtotal: float
    total: float


class CleaningPriceBreakdown(PriceBreakdown):
    frequency_adjustment: float
    deep_clean_fee: float
    add_ons_fee: float


class LandscapingPriceBreakdown(PriceBreakdown):
    terrain_adjustment: float
    services_fee: float


class PoolPriceBreakdown(PriceBreakdown):
    frequency_adjustment: float
    services_fee: float
