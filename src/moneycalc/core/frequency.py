"""Contribution, compounding and pay-period frequency tables."""

from __future__ import annotations

from typing import Literal

ContributionFrequency = Literal["weekly", "biweekly", "monthly", "quarterly", "yearly"]
CompoundingFrequency = Literal["daily", "monthly", "quarterly", "yearly"]
PayFrequency = Literal["weekly", "bi-weekly", "semi-monthly", "monthly", "yearly"]

# Monthly-equivalent multipliers. 4.33 weeks and 2.17 bi-weekly periods per
# month are the calculator's published approximations; keep them exact.
MONTHLY_EQUIVALENT: dict[str, float] = {
    "weekly": 4.33,
    "biweekly": 2.17,
    "monthly": 1.0,
    "quarterly": 1.0 / 3.0,
    "yearly": 1.0 / 12.0,
}

COMPOUNDING_PERIODS_PER_YEAR: dict[str, int] = {
    "daily": 365,
    "monthly": 12,
    "quarterly": 4,
    "yearly": 1,
}

PAY_PERIODS_PER_YEAR: dict[str, int] = {
    "weekly": 52,
    "bi-weekly": 26,
    "semi-monthly": 24,
    "monthly": 12,
    "yearly": 1,
}


def monthly_equivalent(amount: float, frequency: str) -> float:
    """Convert a per-``frequency`` contribution into a monthly amount."""
    if frequency == "quarterly":
        return amount / 3
    if frequency == "yearly":
        return amount / 12
    return amount * MONTHLY_EQUIVALENT[frequency]


def periodic_rate(annual_rate_pct: float, periods_per_year: int) -> float:
    """Per-period rate from an annual percentage rate (``6`` means 6%)."""
    return annual_rate_pct / 100 / periods_per_year
