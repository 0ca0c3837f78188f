"""
Configurator engine — the one object the storefront talks to.

draft → validate → price (live, on every change) → add_to_cart → quote_shipping.
Pure math over the rule book. No I/O after the rules are loaded.

Input: ProductDescriptor + DraftConfiguration (+ Destination at checkout)
Output: PricingBreakdown / ValidationResult / CartCommit / ShippingClassificationResult
"""

import logging
from typing import Iterable, Optional

from .addons import resolve_addon
from .calculators.registry import get_strategy
from .cart import build_cart_item, cart_subtotal, led_spot_totals
from .products import requires_configuration
from .rules import RuleBook, get_rules
from .schemas import (
    AddonResolution, CartCommit, CartItem, Destination, DraftConfiguration,
    PricingBreakdown, ProductDescriptor, ShippingClassificationResult, ValidationResult,
)
from .shipping import classify_shipping
from .validation import TYPE_TO_CATEGORY, validate_config

logger = logging.getLogger(__name__)


class PricingEngine:
    """
    Prices, validates and commits configured products.
    Every method is safe to call on an incomplete draft.
    """

    def __init__(self, rules: Optional[RuleBook] = None):
        self.rules = rules if rules is not None else get_rules()

    def price(self, descriptor: ProductDescriptor,
              draft: Optional[DraftConfiguration] = None) -> PricingBreakdown:
        """
        Running total for the current draft.

        Required-but-unset groups do not stop pricing; that is validate()'s job.
        """
        calculator_class, _ = get_strategy(descriptor.product_type)
        breakdown = calculator_class(self.rules).price(
            descriptor.base_price, draft, descriptor.handle,
        )
        logger.debug("Priced %s: %.2f (%d items)",
                     descriptor.handle, breakdown.total, len(breakdown.items))
        return breakdown

    def validate(self, descriptor: ProductDescriptor,
                 draft: Optional[DraftConfiguration]) -> ValidationResult:
        """Can this draft be committed? Non-configurable products always can."""
        if not requires_configuration(descriptor.product_type):
            return ValidationResult(ok=True)
        return validate_config(TYPE_TO_CATEGORY[descriptor.product_type], draft, self.rules)

    def add_to_cart(self, descriptor: ProductDescriptor,
                    draft: Optional[DraftConfiguration] = None, quantity=1) -> CartCommit:
        return build_cart_item(descriptor, draft, quantity, self.rules)

    def resolve_led(self, width) -> AddonResolution:
        return resolve_addon(width, self.rules.led_addon)

    def cart_summary(self, items: Iterable[CartItem]) -> dict:
        """Subtotal plus the LED spot pick list for a cart."""
        items = list(items or [])
        return {
            "subtotal": cart_subtotal(items),
            "led_spots": led_spot_totals(items, self.rules),
            "line_count": len(items),
        }

    def quote_shipping(self, items: Iterable, destination: Destination) -> ShippingClassificationResult:
        """Shipping for the whole cart. A blocked result must stop checkout."""
        return classify_shipping(items, destination, self.rules.shipping)
