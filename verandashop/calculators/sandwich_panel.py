"""
Sandwich panel calculator.

Panels carry one optional extra: U-profiles, priced per running meter.
    extras = {"u_profiles": {"enabled": True, "meters": 3}}
Meters round half up to a whole meter and never drop below 1.
"""

import logging
import math

from .base import BasePricingCalculator
from ..schemas import ProductType

logger = logging.getLogger(__name__)


class SandwichPanelCalculator(BasePricingCalculator):

    product_type = ProductType.SANDWICH_PANEL

    EXTRA_KEY = "u_profiles"
    MIN_METERS = 1

    def price(self, base_price, draft=None, handle=""):
        panel_rules = self.rules.sandwich_panel
        extras = draft.extras if draft is not None else {}
        u_profiles = extras.get(self.EXTRA_KEY) or {}
        if isinstance(u_profiles, bool):
            u_profiles = {"enabled": u_profiles}
        elif not isinstance(u_profiles, dict):
            u_profiles = {}

        items = []
        if u_profiles.get("enabled") is True:
            meters = self.coerce_meters(u_profiles.get("meters"))
            amount = meters * panel_rules.per_meter_rate
            items.append(self.make_line_item(
                f"{panel_rules.u_profile_label}: {meters} m",
                amount,
                group_id=self.EXTRA_KEY,
            ))
            logger.debug("U-profiles: %d m × %.2f", meters, panel_rules.per_meter_rate)

        return self.make_breakdown(base_price, items)

    def coerce_meters(self, value) -> int:
        """2.5 → 3, 2.4 → 2, 0 / -4 / 'abc' / None → 1."""
        meters = self.parse_number(value, default=self.MIN_METERS)
        return max(self.MIN_METERS, int(math.floor(meters + 0.5)))
