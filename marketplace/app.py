from __future__ import annotations

import logging

from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse
from starlette.middleware.sessions import SessionMiddleware

from .analytics.aggregator import compute_analytics
from .analytics.store import get_events
from .auth.config import DEFAULT_AUTH_CONFIG
from .auth.dependencies import require_admin, require_user
from .auth.users import LoginRequest, authenticate
from .matching.cache import get_cache_stats
from .matching.data_store import query_providers
from .matching.lifecycle import (
    DuplicateProviderError,
    InvalidTransitionError,
    LifecycleAction,
    ProviderNotFoundError,
    register_provider,
    transition_provider,
)
from .matching.models import (
    City,
    MatchQuery,
    MatchResponse,
    OffersResponse,
    PricingTier,
    Provider,
    ProviderApplication,
    ProviderStatus,
    ServiceType,
)
from .matching.service import get_matches, get_offers
from .pricing.calculators import (
    calculate_cleaning_price,
    calculate_landscaping_price,
    calculate_pool_price,
)
from .pricing.models import (
    CleaningOffersRequest,
    LandscapingOffersRequest,
    PoolOffersRequest,
)

logger = logging.getLogger(__name__)

app = FastAPI(title="Local Services Marketplace API", version="1.0.0")
app.add_middleware(SessionMiddleware, secret_key=DEFAULT_AUTH_CONFIG.session_secret)


@app.exception_handler(ProviderNotFoundError)
def _provider_not_found(request: Request, exc: ProviderNotFoundError) -> JSONResponse:
    return JSONResponse(status_code=404, content={"detail": str(exc)})


@app.exception_handler(InvalidTransitionError)
def _invalid_transition(request: Request, exc: InvalidTransitionError) -> JSONResponse:
    return JSONResponse(status_code=409, content={"detail": str(exc)})


@app.exception_handler(DuplicateProviderError)
def _duplicate_provider(request: Request, exc: DuplicateProviderError) -> JSONResponse:
    return JSONResponse(status_code=409, content={"detail": str(exc)})


# ── Public endpoints ─────────────────────────────────────────────────────


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/metadata")
def metadata() -> dict:
    return {
        "services": [s.value for s in ServiceType],
        "cities": [c.value for c in City],
        "pricing_tiers": [t.value for t in PricingTier],
    }


@app.post("/providers", response_model=Provider, status_code=201)
def register(body: ProviderApplication) -> Provider:
    return register_provider(body)


# ── Auth endpoints ───────────────────────────────────────────────────────


@app.post("/auth/login")
def login(body: LoginRequest, request: Request) -> dict:
    user = authenticate(body.username, body.password)
    if not user:
        raise HTTPException(status_code=401, detail="Invalid credentials")
    request.session["user"] = user
    return {"status": "ok", "user": user}


@app.post("/auth/logout")
def logout(request: Request) -> dict:
    request.session.clear()
    return {"status": "logged_out"}


@app.get("/auth/me")
def auth_me(user: dict = Depends(require_user)) -> dict:
    return user


# ── Customer endpoints ───────────────────────────────────────────────────


@app.post("/matches", response_model=MatchResponse)
def matches(body: MatchQuery, user: dict = Depends(require_user)) -> MatchResponse:
    return get_matches(body)


@app.post("/offers/cleaning", response_model=OffersResponse)
def cleaning_offers(
    body: CleaningOffersRequest, user: dict = Depends(require_user),
) -> OffersResponse:
    return get_offers(ServiceType.cleaning, body.city, body.quote, calculate_cleaning_price)


@app.post("/offers/landscaping", response_model=OffersResponse)
def landscaping_offers(
    body: LandscapingOffersRequest, user: dict = Depends(require_user),
) -> OffersResponse:
    return get_offers(ServiceType.landscaping, body.city, body.quote, calculate_landscaping_price)


@app.post("/offers/pool", response_model=OffersResponse)
def pool_offers(
    body: PoolOffersRequest, user: dict = Depends(require_user),
) -> OffersResponse:
    return get_offers(ServiceType.pool, body.city, body.quote, calculate_pool_price)


# ── Admin endpoints ──────────────────────────────────────────────────────


@app.get("/admin/providers", response_model=list[Provider])
def admin_providers(
    status: ProviderStatus | None = None,
    city: City | None = None,
    q: str | None = None,
    user: dict = Depends(require_admin),
) -> list[Provider]:
    providers = query_providers(city=city, status=status, search=q)
    return sorted(providers, key=lambda p: p.id)


@app.post("/admin/providers/{provider_id}/{action}", response_model=Provider)
def admin_transition(
    provider_id: str,
    action: LifecycleAction,
    user: dict = Depends(require_admin),
) -> Provider:
    logger.info("Admin %s requested %s on provider %s", user["username"], action.value, provider_id)
    return transition_provider(provider_id, action)


@app.get("/analytics")
def analytics(user: dict = Depends(require_admin)) -> dict:
    return compute_analytics(get_events())


@app.get("/cache/stats")
def cache_stats(user: dict = Depends(require_admin)) -> dict:
    return get_cache_stats()
