from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")


@dataclass(frozen=True)
class AuthConfig:
    session_secret: str = os.getenv("SESSION_SECRET", "marketplace-secret-change-in-production")
    customer_password: str = os.getenv("DEMO_CUSTOMER_PASSWORD", "customer123")
    admin_password: str = os.getenv("DEMO_ADMIN_PASSWORD", "admin123")


DEFAULT_AUTH_CONFIG = AuthConfig()
