"""Display formatting for calculator results.

Currency is rendered with 2 decimals and percentages with 1, rounding half away
from zero on the exact binary value (the rule of JavaScript's ``toFixed``), so
published outputs reproduce digit for digit. Undefined ratios are ``None`` in
raw results and render as ``"N/A"``.
"""

from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Context, Decimal

NOT_AVAILABLE = "N/A"
INFINITE = "∞"

# Wide enough for any finite float plus its decimals.
_WIDE = Context(prec=400)


def format_fixed(value: float | None, digits: int) -> str:
    """Format ``value`` with a fixed number of decimals."""
    if value is None or math.isnan(value):
        return NOT_AVAILABLE
    if math.isinf(value):
        return INFINITE if value > 0 else f"-{INFINITE}"
    if value == 0:
        value = 0.0  # no "-0.00"
    quantum = Decimal(1).scaleb(-digits)
    return str(Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP, context=_WIDE))


def format_currency(value: float | None) -> str:
    return format_fixed(value, 2)


def format_percent(value: float | None) -> str:
    return format_fixed(value, 1)


def safe_ratio(numerator: float, denominator: float, scale: float = 100.0) -> float | None:
    """``numerator / denominator * scale``, or ``None`` when undefined."""
    if denominator == 0:
        return None
    return numerator / denominator * scale
