"""
Abstract base class for all product-type price calculators.

Input: base price + DraftConfiguration
Output: PricingBreakdown (total == base_price + sum of line items)
"""

import logging
import math
from abc import ABC, abstractmethod
from typing import List, Optional

from ..rules import RuleBook, get_rules
from ..schemas import DraftConfiguration, PriceLineItem, PricingBreakdown, ProductType

logger = logging.getLogger(__name__)


class BasePricingCalculator(ABC):
    """All product-type calculators inherit from this."""

    product_type: ProductType = ProductType.ACCESSORY

    def __init__(self, rules: Optional[RuleBook] = None):
        self.rules = rules if rules is not None else get_rules()

    @abstractmethod
    def price(self, base_price: float, draft: Optional[DraftConfiguration],
              handle: str = "") -> PricingBreakdown:
        """
        Takes the product's base price, the current draft and the product
        handle (some calculators read dimensions from it).
        Returns a PricingBreakdown. Never raises on odd draft values.
        """
        pass

    # --- Helper methods for all calculators ---

    def parse_int(self, value, default: int = 0) -> int:
        """Parse an integer from user input."""
        if value is None or isinstance(value, bool):
            return default
        try:
            return int(float(str(value).strip()))
        except (ValueError, TypeError, OverflowError):
            return default

    def parse_number(self, value, default: float = 0.0) -> float:
        """Parse a numeric value from user input. NaN and infinities fall back to default."""
        if value is None or isinstance(value, bool):
            return default
        try:
            number = float(str(value).strip().replace(",", "."))
        except (ValueError, TypeError):
            return default
        return number if math.isfinite(number) else default

    def make_line_item(self, label: str, amount: float, group_id: str = None,
                       choice_id: str = None) -> PriceLineItem:
        return PriceLineItem(
            label=label,
            amount=round(amount, 2),
            group_id=group_id,
            choice_id=choice_id,
        )

    def make_breakdown(self, base_price: float, items: List[PriceLineItem],
                       notes: List[str] = None) -> PricingBreakdown:
        """Build the breakdown. Total is always recomputed from the items."""
        base = round(self.parse_number(base_price), 2)
        extras_total = round(sum(item.amount for item in items), 2)
        return PricingBreakdown(
            product_type=self.product_type,
            base_price=base,
            items=items,
            extras_total=extras_total,
            total=round(base + extras_total, 2),
            notes=notes or [],
        )
