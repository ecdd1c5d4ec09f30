from __future__ import annotations

from fastapi import HTTPException, Request

from .users import Role


def require_user(request: Request) -> dict:
    """Any signed-in account; 401 otherwise."""
    user = request.session.get("user")
    if not user:
        raise HTTPException(status_code=401, detail="Not authenticated")
    return user


def require_admin(request: Request) -> dict:
    user = require_user(request)
    if user.get("role") != Role.admin.value:
        raise HTTPException(status_code=403, detail="Admin access required")
    return user
