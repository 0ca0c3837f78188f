"""
Cart helpers — committing a validated draft, subtotals, LED spot roll-up.

A line only reaches the cart through build_cart_item(): configurable products
are validated first, quantities are normalized, and the line carries the
breakdown it was priced with.
"""

import logging
import uuid
from typing import Iterable, List, Optional

from .addons import draft_width, resolve_addon
from .calculators.registry import get_strategy
from .products import requires_configuration
from .quantity import normalize_quantity
from .rules import RuleBook, get_rules
from .schemas import AddonStatus, CartCommit, CartItem, DraftConfiguration, ProductDescriptor, ProductType
from .validation import TYPE_TO_CATEGORY, validate_config

logger = logging.getLogger(__name__)

LED_GROUP_ID = "extras"
LED_CHOICE_ID = "led_verlichting"


def build_cart_item(descriptor: ProductDescriptor, draft: Optional[DraftConfiguration] = None,
                    quantity=1, rules: Optional[RuleBook] = None) -> CartCommit:
    """Validate, price and wrap one product as a cart line."""
    rules = rules if rules is not None else get_rules()
    product_type = descriptor.product_type

    if requires_configuration(product_type):
        category = TYPE_TO_CATEGORY[product_type]
        result = validate_config(category, draft, rules)
        if not result.ok:
            logger.info("Add to cart refused for %s: %s", descriptor.handle, result.errors)
            return CartCommit(ok=False, errors=result.errors)

    calculator_class, _ = get_strategy(product_type)
    breakdown = calculator_class(rules).price(descriptor.base_price, draft, descriptor.handle)
    qty = normalize_quantity(quantity)

    item = CartItem(
        id=str(uuid.uuid4()),
        handle=descriptor.handle,
        title=descriptor.title,
        product_type=product_type,
        category=descriptor.category,
        quantity=qty,
        unit_price=breakdown.total,
        line_total=round(breakdown.total * qty, 2),
        config=draft,
        breakdown=breakdown,
    )
    return CartCommit(ok=True, item=item)


def cart_subtotal(items: Iterable[CartItem]) -> float:
    return round(sum(item.line_total for item in items or []), 2)


def _has_led(draft: Optional[DraftConfiguration]) -> bool:
    if draft is None:
        return False
    selection = draft.fields.get(LED_GROUP_ID)
    if isinstance(selection, dict):
        return bool(selection.get(LED_CHOICE_ID))
    if isinstance(selection, (list, tuple, set)):
        return LED_CHOICE_ID in selection
    return selection == LED_CHOICE_ID


def led_spot_totals(items: Iterable[CartItem], rules: Optional[RuleBook] = None) -> dict:
    """
    LED spots needed across all veranda lines that selected LED lighting.

    Returns {"handle", "label", "quantity", "unit_price", "total", "parent_items"},
    naming the LED spot product from the rule book; quantity is 0
    when nothing qualifies. Lines whose width is out of range add no spots.
    The amount is already part of each veranda breakdown; this is the pick
    list for the separate LED spot product, not an extra charge.
    """
    led = (rules if rules is not None else get_rules()).led_addon
    parents: List[dict] = []
    quantity = 0

    for item in items or []:
        if item.product_type != ProductType.VERANDA or not _has_led(item.config):
            continue
        width = draft_width(item.config, item.handle)
        resolution = resolve_addon(width, led)
        if resolution.status != AddonStatus.MATCHED:
            logger.warning("LED selected on %s but width %r is out of range", item.handle, width)
            continue
        line_qty = resolution.quantity * item.quantity
        quantity += line_qty
        parents.append({
            "handle": item.handle,
            "width_cm": resolution.width,
            "item_quantity": item.quantity,
            "led_quantity": line_qty,
        })

    return {
        "handle": led.product_handle,
        "label": led.label,
        "quantity": quantity,
        "unit_price": led.unit_price,
        "total": round(quantity * led.unit_price, 2),
        "parent_items": parents,
    }
