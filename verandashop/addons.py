"""
LED spot addon — width normalization and spot quantity lookup.

Supported widths form one arithmetic sequence (306, 406, ... 1206 cm), each
mapped to a spot count (4, 6, ... 22). Any width within half a step of a
supported width snaps to it; exact midpoints go to the LOWER neighbour.
Widths outside [min - step/2, max + step/2] are out of range: quantity 0 with
an explicit status, never a silent zero.

This is a table lookup with tolerance, not an interpolation.
"""

import logging
import math
import re
from typing import List, Optional

from .rules import LedAddonRules, get_rules
from .schemas import AddonResolution, AddonStatus, DraftConfiguration

logger = logging.getLogger(__name__)

# aluminium-veranda-706-x-400-cm
_HANDLE_SIZE = re.compile(r"(\d{3,4})-x-(\d{3,4})", re.IGNORECASE)
# 706x400, 706 x 400, 706 × 400
_TEXT_SIZE = re.compile(r"(\d{3,4})\s*[x×]\s*(\d{3,4})", re.IGNORECASE)


def _led_rules(rules: Optional[LedAddonRules]) -> LedAddonRules:
    return rules if rules is not None else get_rules().led_addon


def _as_width(value) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    try:
        width = float(str(value).strip())
    except (TypeError, ValueError):
        return None
    return width if math.isfinite(width) else None


def snap_width(width, widths: List[int]) -> Optional[int]:
    """
    Snap onto an evenly spaced list of widths (sorted ascending).

    Shared by the LED table and the by-width option price tables.
    """
    value = _as_width(width)
    if value is None or not widths:
        return None
    if len(widths) == 1:
        return widths[0] if value == widths[0] else None

    half_step = (widths[1] - widths[0]) / 2.0
    if value < widths[0] - half_step or value > widths[-1] + half_step:
        return None

    # (distance, width) ordering resolves exact midpoints to the lower width
    nearest = min(widths, key=lambda w: (abs(w - value), w))
    if abs(nearest - value) > half_step:
        return None
    return nearest


def normalize_width(width, rules: Optional[LedAddonRules] = None) -> Optional[int]:
    """Nearest supported LED width, or None when outside the tolerance band."""
    return snap_width(width, _led_rules(rules).supported_widths)


def resolve_addon(width, rules: Optional[LedAddonRules] = None) -> AddonResolution:
    """Snap the width and return its spot quantity and total price."""
    led = _led_rules(rules)
    snapped = normalize_width(width, led)
    if snapped is None:
        logger.debug("LED width %r outside supported band, no spots", width)
        return AddonResolution(
            width=None,
            quantity=0,
            status=AddonStatus.OUT_OF_RANGE,
            unit_price=led.unit_price,
            total=0.0,
        )

    quantity = led.widths[snapped]
    return AddonResolution(
        width=snapped,
        quantity=quantity,
        status=AddonStatus.MATCHED,
        unit_price=led.unit_price,
        total=round(quantity * led.unit_price, 2),
    )


def not_selected(rules: Optional[LedAddonRules] = None) -> AddonResolution:
    """Resolution for a draft where the addon is switched off."""
    led = _led_rules(rules)
    return AddonResolution(
        width=None,
        quantity=0,
        status=AddonStatus.NOT_SELECTED,
        unit_price=led.unit_price,
        total=0.0,
    )


def extract_width(text: str) -> Optional[int]:
    """
    Width from a handle or size string.

    'aluminium-veranda-706-x-400-cm' → 706, '606x300' → 606, 'geen maat' → None
    """
    if not text:
        return None
    match = _HANDLE_SIZE.search(text) or _TEXT_SIZE.search(text)
    return int(match.group(1)) if match else None


def extract_depth(text: str) -> Optional[int]:
    """Depth counterpart of extract_width()."""
    if not text:
        return None
    match = _HANDLE_SIZE.search(text) or _TEXT_SIZE.search(text)
    return int(match.group(2)) if match else None


def draft_width(draft: DraftConfiguration, handle: str = "") -> Optional[float]:
    """
    Width of a veranda draft, trying in order:
    width_cm, size.width, selected_size ("706x400"), then the product handle.
    """
    fields = draft.fields
    width = _as_width(fields.get("width_cm"))
    if width:
        return width
    size = fields.get("size")
    if isinstance(size, dict):
        width = _as_width(size.get("width"))
        if width:
            return width
    selected = fields.get("selected_size")
    if selected:
        width = extract_width(str(selected))
        if width:
            return float(width)
    width = extract_width(handle)
    return float(width) if width else None


def draft_depth(draft: DraftConfiguration, handle: str = "") -> Optional[float]:
    """Depth of a veranda draft, same lookup order as draft_width()."""
    fields = draft.fields
    depth = _as_width(fields.get("depth_cm"))
    if depth:
        return depth
    size = fields.get("size")
    if isinstance(size, dict):
        depth = _as_width(size.get("depth"))
        if depth:
            return depth
    selected = fields.get("selected_size")
    if selected:
        depth = extract_depth(str(selected))
        if depth:
            return float(depth)
    depth = extract_depth(handle)
    return float(depth) if depth else None
