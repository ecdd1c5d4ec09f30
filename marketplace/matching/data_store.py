from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any

import pandas as pd
from pydantic import ValidationError

from .cache import clear_cache
from .models import City, Provider, ProviderStatus, ServiceType

logger = logging.getLogger(__name__)

_DEFAULT_CSV = Path(__file__).resolve().parent.parent / "data" / "providers.csv"

_providers: dict[str, Provider] | None = None

_LIST_SEPARATOR = ";"
_TRUE_VALUES = {"true", "1", "yes", "y"}


def _split_tags(value: Any) -> list[str]:
    if pd.isna(value):
        return []
    return [t.strip() for t in str(value).split(_LIST_SEPARATOR) if t.strip()]


def _optional_number(value: Any) -> Any:
    if pd.isna(value):
        return None
    # numpy scalars -> native Python so pydantic applies its own int/float rules
    return value.item() if hasattr(value, "item") else value


def _optional_text(value: Any) -> str | None:
    return None if pd.isna(value) else str(value).strip()


def _row_to_record(row: pd.Series) -> dict[str, Any]:
    years = _optional_number(row.get("years_experience"))
    return {
        "id": _optional_text(row.get("id")),
        "business_name": _optional_text(row.get("business_name")),
        "services": _split_tags(row.get("services")),
        "cities": _split_tags(row.get("cities")),
        "pricing_tier": _optional_text(row.get("pricing_tier")) or "standard",
        "years_experience": years if years is not None else 0,
        "insurance_verified": str(row.get("insurance_verified", "")).strip().lower() in _TRUE_VALUES,
        "rating": _optional_number(row.get("rating")),
        "total_reviews": _optional_number(row.get("total_reviews")),
        "status": _optional_text(row.get("status")) or "pending",
    }


def load_providers(path: Path) -> list[Provider]:
    """Read provider rows from CSV, validating every row.

    Rows carrying values outside the closed enumerations (or otherwise
    malformed) are skipped with a warning so the matching engine only ever
    sees well-formed records. When an id repeats, the first row wins.
    """
    df = pd.read_csv(path, dtype={"id": str}, keep_default_na=True)

    providers: list[Provider] = []
    seen: set[str] = set()
    for idx, row in df.iterrows():
        try:
            provider = Provider.model_validate(_row_to_record(row))
        except (ValidationError, ValueError, TypeError):
            logger.warning("Skipping invalid provider row %s in %s", idx, path, exc_info=True)
            continue
        if provider.id in seen:
            logger.warning("Skipping duplicate provider id %r at row %s in %s", provider.id, idx, path)
            continue
        seen.add(provider.id)
        providers.append(provider)
    return providers


def _csv_path() -> Path:
    override = os.getenv("MARKETPLACE_PROVIDERS_CSV")
    return Path(override) if override else _DEFAULT_CSV


def _store() -> dict[str, Provider]:
    global _providers
    if _providers is None:
        _providers = {p.id: p for p in load_providers(_csv_path())}
        logger.info("Loaded %d providers", len(_providers))
    return _providers


def get_providers() -> list[Provider]:
    """Return every stored provider, loading the CSV on first call."""
    return list(_store().values())


def get_provider(provider_id: str) -> Provider | None:
    return _store().get(provider_id)


def query_providers(
    service_type: ServiceType | None = None,
    city: City | None = None,
    status: ProviderStatus | None = None,
    search: str | None = None,
) -> list[Provider]:
    """Containment query over the stored providers; ``None`` means any.

    ``search`` is a case-insensitive substring match on id or business name.
    """
    needle = search.strip().lower() if search else ""
    return [
        p
        for p in _store().values()
        if (service_type is None or service_type in p.services)
        and (city is None or city in p.cities)
        and (status is None or p.status == status)
        and (not needle or needle in p.id.lower() or needle in p.business_name.lower())
    ]


def replace_provider(provider: Provider) -> None:
    """Insert or overwrite the stored record with the same id."""
    _store()[provider.id] = provider


def reload_providers() -> None:
    """Drop the in-memory pool and cached results; the next access re-reads the CSV."""
    global _providers
    _providers = None
    clear_cache()
