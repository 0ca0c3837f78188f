"""
Shipping classification — cart + destination → tier and cost, or blocked.

Order of rules:
1. Blocked region (Wadden islands) → blocked, no cost. Beats everything.
2. Any veranda line → veranda rules for the WHOLE cart:
   distance <= radius free, beyond it one flat rate.
3. Otherwise every line ships as an accessory: one flat rate, distance ignored.

Costs are minor units (cents). Pure; distances come from the checkout form.
"""

import logging
import re
from typing import Iterable, Optional

from .products import resolve_product_type
from .rules import ShippingRules, get_rules
from .schemas import CartItem, Destination, ProductType, ShippingClassificationResult, ShippingTier

logger = logging.getLogger(__name__)

# Checkout adds its own shipping line to the cart; it is not a product
SHIPPING_LINE_ID = "__shipping_line__"

_POSTCODE_DIGITS = re.compile(r"^(\d{4})")


def _shipping_rules(rules: Optional[ShippingRules]) -> ShippingRules:
    return rules if rules is not None else get_rules().shipping


def block_reason(destination: Destination, rules: Optional[ShippingRules] = None) -> Optional[str]:
    """Why the destination cannot be delivered to, or None."""
    shipping = _shipping_rules(rules)
    if destination.island:
        return "island"

    postcode = (destination.postal_code or "").replace(" ", "").upper()
    match = _POSTCODE_DIGITS.match(postcode)
    if match and match.group(1) in shipping.blocked_postcodes:
        return f"postcode {match.group(1)}"

    city = (destination.city or "").strip().lower()
    if city:
        for place in shipping.blocked_places:
            if place in city:
                return f"place {place}"
    return None


def is_blocked_region(destination: Destination, rules: Optional[ShippingRules] = None) -> bool:
    return block_reason(destination, rules) is not None


def line_type(line) -> ProductType:
    """Product type of a cart line: a CartItem, a ProductType or a category/type string."""
    if isinstance(line, CartItem):
        return line.product_type
    if isinstance(line, ProductType):
        return line
    try:
        return ProductType(str(line))
    except ValueError:
        return resolve_product_type(category=str(line))


def classify_cart(lines: Iterable) -> dict:
    """Split a cart into veranda and non-veranda lines. The shipping line is skipped."""
    veranda_lines = []
    accessory_lines = []
    for line in lines or []:
        if isinstance(line, CartItem) and line.id == SHIPPING_LINE_ID:
            continue
        if line_type(line) == ProductType.VERANDA:
            veranda_lines.append(line)
        else:
            accessory_lines.append(line)
    return {
        "has_veranda": len(veranda_lines) > 0,
        "has_accessories": len(accessory_lines) > 0,
        "veranda_lines": veranda_lines,
        "accessory_lines": accessory_lines,
    }


def classify_shipping(lines: Iterable, destination: Destination,
                      rules: Optional[ShippingRules] = None) -> ShippingClassificationResult:
    """Classify a whole cart for one destination. Never raises for a blocked region."""
    shipping = _shipping_rules(rules)
    distance = destination.distance_km

    reason = block_reason(destination, shipping)
    if reason is not None:
        logger.info("Shipping blocked for %s %s (%s)",
                    destination.postal_code, destination.city, reason)
        return ShippingClassificationResult(
            blocked=True,
            tier=ShippingTier.BLOCKED,
            cost=None,
            distance_km=distance,
            description="Wij leveren helaas niet op de Waddeneilanden.",
            block_reason=reason,
        )

    cart = classify_cart(lines)

    if cart["has_veranda"]:
        if distance is None:
            return ShippingClassificationResult(
                blocked=False,
                tier=ShippingTier.DISTANCE_REQUIRED,
                cost=None,
                description="Vul je adres in om de bezorgkosten te berekenen.",
            )
        if distance <= shipping.radius_km:
            return ShippingClassificationResult(
                blocked=False,
                tier=ShippingTier.FREE,
                cost=0,
                distance_km=distance,
                description=f"Gratis bezorging binnen {shipping.radius_km:g} km.",
            )
        return ShippingClassificationResult(
            blocked=False,
            tier=ShippingTier.VERANDA_FLAT,
            cost=shipping.veranda_flat_rate_minor_units,
            distance_km=distance,
            description=f"Bezorging buiten {shipping.radius_km:g} km.",
        )

    if cart["has_accessories"]:
        return ShippingClassificationResult(
            blocked=False,
            tier=ShippingTier.ACCESSORIES,
            cost=shipping.accessories_flat_rate_minor_units,
            distance_km=distance,
            description="Verzendkosten accessoires.",
        )

    return ShippingClassificationResult(
        blocked=False,
        tier=ShippingTier.EMPTY,
        cost=0,
        distance_km=distance,
        description="Winkelwagen is leeg.",
    )
