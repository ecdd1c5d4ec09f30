from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

from ..matching.models import PricingTier
from .config import (
    DEFAULT_PRICING_CONFIG,
    CleaningRates,
    LandscapingRates,
    PoolRates,
    PricingConfig,
)
from .models import (
    CleaningPriceBreakdown,
    CleaningQuote,
    LandscapingPriceBreakdown,
    LandscapingQuote,
    PoolPriceBreakdown,
    PoolQuote,
)


def round_currency(amount: float) -> float:
    """Round to whole cents, halves away from zero."""
    return float(Decimal(repr(amount)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


def calculate_cleaning_price(
    quote: CleaningQuote,
    tier: PricingTier,
    rates: CleaningRates = DEFAULT_PRICING_CONFIG.cleaning,
) -> CleaningPriceBreakdown:
    base_price = quote.square_feet * rates.base_rate_per_sqft
    frequency_adjustment = base_price * rates.frequency_multipliers[quote.frequency]
    deep_clean_fee = base_price * rates.deep_clean_multiplier if quote.deep_clean else 0.0

    selected = quote.add_ons.model_dump()
    add_ons_fee = sum(fee for name, fee in rates.add_on_fees.items() if selected.get(name))

    subtotal = frequency_adjustment + deep_clean_fee + add_ons_fee
    multiplier = rates.tier_multipliers[tier]
    return CleaningPriceBreakdown(
        tier=tier,
        base_price=base_price,
        frequency_adjustment=frequency_adjustment,
        deep_clean_fee=deep_clean_fee,
        add_ons_fee=add_ons_fee,
        tier_multiplier=multiplier,
        subtotal=subtotal,
        total=round_currency(subtotal * multiplier),
    )


def calculate_landscaping_price(
    quote: LandscapingQuote,
    tier: PricingTier,
    rates: LandscapingRates = DEFAULT_PRICING_CONFIG.landscaping,
) -> LandscapingPriceBreakdown:
    base_price = quote.lot_size * rates.base_price_per_sqft
    terrain_adjustment = base_price * rates.terrain_multipliers[quote.terrain]

    # Selected services scale the terrain-adjusted price, they are not flat fees.
    selected = quote.services.model_dump()
    services_multiplier = sum(
        m for name, m in rates.service_multipliers.items() if selected.get(name)
    )
    services_fee = terrain_adjustment * services_multiplier

    subtotal = terrain_adjustment + services_fee
    multiplier = rates.tier_multipliers[tier]
    return LandscapingPriceBreakdown(
        tier=tier,
        base_price=base_price,
        terrain_adjustment=terrain_adjustment,
        services_fee=services_fee,
        tier_multiplier=multiplier,
        subtotal=subtotal,
        total=round_currency(subtotal * multiplier),
    )


def calculate_pool_price(
    quote: PoolQuote,
    tier: PricingTier,
    rates: PoolRates = DEFAULT_PRICING_CONFIG.pool,
) -> PoolPriceBreakdown:
    base_price = rates.base_prices[quote.pool_type][quote.pool_size]
    frequency_adjustment = base_price * rates.frequency_multipliers[quote.frequency]

    selected = quote.services.model_dump()
    services_fee = sum(fee for name, fee in rates.service_fees.items() if selected.get(name))

    subtotal = frequency_adjustment + services_fee
    multiplier = rates.tier_multipliers[tier]
    return PoolPriceBreakdown(
        tier=tier,
        base_price=base_price,
        frequency_adjustment=frequency_adjustment,
        services_fee=services_fee,
        tier_multiplier=multiplier,
        subtotal=subtotal,
        total=round_currency(subtotal * multiplier),
    )


def deposit_amount(total: float, config: PricingConfig = DEFAULT_PRICING_CONFIG) -> float:
    """Upfront deposit charged at booking."""
    return round_currency(total * config.deposit_fraction)


def remaining_amount(total: float, config: PricingConfig = DEFAULT_PRICING_CONFIG) -> float:
    """Balance charged once the job is completed."""
    return round_currency(total - deposit_amount(total, config))
