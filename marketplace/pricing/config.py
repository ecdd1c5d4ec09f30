from __future__ import annotations

from dataclasses import dataclass, field

from ..matching.models import PricingTier
from .models import (
    CleaningFrequency,
    PoolFrequency,
    PoolSize,
    PoolType,
    Terrain,
)


def _tiers(budget: float, standard: float, premium: float) -> dict[PricingTier, float]:
    return {
        PricingTier.budget: budget,
        PricingTier.standard: standard,
        PricingTier.premium: premium,
    }


@dataclass(frozen=True)
class CleaningRates:
    base_rate_per_sqft: float = 0.15
    frequency_multipliers: dict[CleaningFrequency, float] = field(
        default_factory=lambda: {
            CleaningFrequency.one_time: 1.5,
            CleaningFrequency.weekly: 0.8,
            CleaningFrequency.bi_weekly: 1.0,
            CleaningFrequency.monthly: 1.2,
        }
    )
    deep_clean_multiplier: float = 1.5
    add_on_fees: dict[str, float] = field(
        default_factory=lambda: {"windows": 50.0, "fridge": 30.0, "oven": 40.0}
    )
    tier_multipliers: dict[PricingTier, float] = field(
        default_factory=lambda: _tiers(0.85, 1.0, 1.25)
    )


@dataclass(frozen=True)
class LandscapingRates:
    base_price_per_sqft: float = 0.02
    terrain_multipliers: dict[Terrain, float] = field(
        default_factory=lambda: {
            Terrain.flat: 1.0,
            Terrain.sloped: 1.3,
            Terrain.very_sloped: 1.6,
        }
    )
    service_multipliers: dict[str, float] = field(
        default_factory=lambda: {
            "mowing": 1.0,
            "edging": 0.3,
            "trimming": 0.4,
            "leaf_removal": 0.5,
            "debris": 0.6,
        }
    )
    tier_multipliers: dict[PricingTier, float] = field(
        default_factory=lambda: _tiers(0.8, 1.0, 1.3)
    )


@dataclass(frozen=True)
class PoolRates:
    base_prices: dict[PoolType, dict[PoolSize, float]] = field(
        default_factory=lambda: {
            PoolType.in_ground: {PoolSize.small: 80.0, PoolSize.medium: 100.0, PoolSize.large: 130.0},
            PoolType.above_ground: {PoolSize.small: 60.0, PoolSize.medium: 75.0, PoolSize.large: 95.0},
        }
    )
    frequency_multipliers: dict[PoolFrequency, float] = field(
        default_factory=lambda: {PoolFrequency.weekly: 1.0, PoolFrequency.bi_weekly: 1.3}
    )
    service_fees: dict[str, float] = field(
        default_factory=lambda: {"chemical_balancing": 15.0, "equipment_check": 25.0}
    )
    tier_multipliers: dict[PricingTier, float] = field(
        default_factory=lambda: _tiers(0.85, 1.0, 1.2)
    )


@dataclass(frozen=True)
class PricingConfig:
    cleaning: CleaningRates = field(default_factory=CleaningRates)
    landscaping: LandscapingRates = field(default_factory=LandscapingRates)
    pool: PoolRates = field(default_factory=PoolRates)
    deposit_fraction: float = 0.5


DEFAULT_PRICING_CONFIG = PricingConfig()
