from __future__ import annotations

from enum import Enum
from typing import Any

import bcrypt
from pydantic import BaseModel, Field

from .config import DEFAULT_AUTH_CONFIG, AuthConfig


class Role(str, Enum):
    customer = "customer"
    admin = "admin"


class LoginRequest(BaseModel):
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


_accounts: dict[str, dict[str, Any]] = {}


def _hash_password(plain: str) -> str:
    return bcrypt.hashpw(plain.encode(), bcrypt.gensalt()).decode()


def _verify_password(plain: str, hashed: str) -> bool:
    return bcrypt.checkpw(plain.encode(), hashed.encode())


def register_account(username: str, password: str, role: Role) -> None:
    _accounts[username] = {"password_hash": _hash_password(password), "role": role}


def seed_demo_accounts(config: AuthConfig = DEFAULT_AUTH_CONFIG) -> None:
    register_account("customer", config.customer_password, Role.customer)
    register_account("admin", config.admin_password, Role.admin)


def authenticate(username: str, password: str) -> dict[str, str] | None:
    """Verify credentials. Returns ``{username, role}`` or ``None``."""
    account = _accounts.get(username)
    if account and _verify_password(password, account["password_hash"]):
        return {"username": username, "role": account["role"].value}
    return None


seed_demo_accounts()
