"""
Quantity normalization for cart and configurator inputs.

Free-form input (form field strings, numbers, junk) always becomes an
integer in [min, max]. Invalid input is silently corrected to min, not
reported. The field simply snaps back.
"""

import math
import re

DEFAULT_QUANTITY = 1
MIN_QUANTITY = 1
MAX_QUANTITY = 99

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def _parse(value):
    """Leading-integer parse for strings, truncation for numbers. None when unusable."""
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if not math.isfinite(value):
            return None
        return math.trunc(value)
    if isinstance(value, str):
        match = _LEADING_INT.match(value)
        return int(match.group(1)) if match else None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return math.trunc(number) if math.isfinite(number) else None


def normalize_quantity(value, min: int = MIN_QUANTITY, max: int = MAX_QUANTITY) -> int:
    """
    Sanitize a raw quantity into an integer within [min, max].

    "12abc" → 12, "3.9" → 3, 4.7 → 4, "-5" → min, "150" → max,
    None / NaN / "abc" → min. Idempotent: normalizing twice changes nothing.
    """
    parsed = _parse(value)
    if parsed is None:
        return min
    if parsed < min:
        return min
    if parsed > max:
        return max
    return parsed
