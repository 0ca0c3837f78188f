"""
Money helpers.

Rule tables store amounts in minor units (cents). Breakdowns carry euros
rounded to two decimals. Display is always nl-NL: € 1.234,56
"""

import math
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP


def _normalize_numeric_string(raw: str) -> str:
    """Strip currency noise. Both separators present means nl-NL (dot = thousands)."""
    s = "".join(ch for ch in raw.strip() if ch.isdigit() or ch in ",.-")
    has_dot = "." in s
    has_comma = "," in s
    if has_dot and has_comma:
        return s.replace(".", "").replace(",", ".")
    if has_comma:
        return s.replace(",", ".")
    return s


def to_cents(amount) -> int:
    """Convert euros (number or formatted string) to integer cents. Invalid input → 0."""
    if amount is None or isinstance(amount, bool):
        return 0
    if isinstance(amount, (int, float)):
        if isinstance(amount, float) and not math.isfinite(amount):
            return 0
        value = Decimal(str(amount))
    else:
        normalized = _normalize_numeric_string(str(amount))
        if not normalized:
            return 0
        try:
            value = Decimal(normalized)
        except InvalidOperation:
            return 0
    return int((value * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def from_cents(cents) -> float:
    """Integer cents to euros."""
    if cents is None or isinstance(cents, bool):
        return 0.0
    try:
        value = float(cents)
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(value):
        return 0.0
    return round(value / 100.0, 2)


def format_eur(amount: float, cents: bool = False) -> str:
    """Format as nl-NL euros, e.g. 1234.5 → '€ 1.234,50'."""
    value = from_cents(amount) if cents else float(amount or 0.0)
    if not math.isfinite(value):
        value = 0.0
    sign = "-" if value < 0 else ""
    text = f"{abs(value):,.2f}"
    # 1,234.56 → 1.234,56
    text = text.replace(",", "_").replace(".", ",").replace("_", ".")
    return f"€ {sign}{text}"
