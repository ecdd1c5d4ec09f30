from __future__ import annotations


def format_currency(amount: float) -> str:
    """``1234.5`` -> ``"$1,234.50"``."""
    sign = "-" if amount < 0 else ""
    return f"{sign}${abs(amount):,.2f}"


def format_match_score(score: int) -> str:
    return f"{score}% match"
