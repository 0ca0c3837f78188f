"""
Veranda calculator — option groups on top of the base price.

Each option group in the rule book is priced from draft.fields[group.id]:
    "poly_opaal"              → that choice
    ["led_verlichting", ...]  → every listed choice (multi groups)
    {"dimmer": True, ...}     → every switched-on choice (multi groups)
    True                      → the group's first choice (toggle)
    None / False / "geen"     → nothing

Required groups never block pricing; a running total is always shown.
Informational groups carry no price.
"""

import logging
import math
from typing import List

from .base import BasePricingCalculator
from ..addons import draft_depth, draft_width, resolve_addon, snap_width
from ..money import format_eur
from ..rules import OptionChoice, OptionGroup
from ..schemas import AddonStatus, ProductType

logger = logging.getLogger(__name__)

NO_SELECTION = ("", "geen", "none")


class VerandaCalculator(BasePricingCalculator):

    product_type = ProductType.VERANDA

    def price(self, base_price, draft=None, handle=""):
        veranda_rules = self.rules.veranda
        fields = draft.fields if draft is not None else {}
        width = draft_width(draft, handle) if draft is not None else None
        depth = draft_depth(draft, handle) if draft is not None else None

        items = []
        notes = []
        for group in veranda_rules.option_groups:
            if group.mode == "info":
                continue
            for choice in self.selected_choices(group, fields.get(group.id)):
                amount, note = self._choice_amount(choice, width, depth)
                if note:
                    notes.append(note)
                if amount:
                    items.append(self.make_line_item(
                        self._line_label(group, choice, width),
                        amount,
                        group_id=group.id,
                        choice_id=choice.id,
                    ))

        return self.make_breakdown(base_price, items, notes)

    def selected_choices(self, group: OptionGroup, value) -> List[OptionChoice]:
        """Turn a raw draft value into the group's selected choices."""
        if value is None or value is False:
            return []
        if value is True:
            return group.choices[:1]

        if isinstance(value, dict):
            ids = [k for k, v in value.items() if v]
        elif isinstance(value, (list, tuple, set)):
            ids = list(value)
        else:
            ids = [value]

        selected = []
        for choice_id in ids:
            key = str(choice_id).strip()
            if key.lower() in NO_SELECTION:
                continue
            choice = group.find_choice(key)
            if choice is None:
                logger.warning("Unknown choice %r for option group %s, ignored", key, group.id)
                continue
            if choice not in selected:
                selected.append(choice)

        if group.mode == "single":
            return selected[:1]
        return selected

    # --- Per-kind pricing ---

    def _choice_amount(self, choice: OptionChoice, width, depth):
        """(amount, note) for one selected choice."""
        pricing = choice.pricing

        if pricing.kind == "fixed":
            return pricing.amount, None

        if pricing.kind == "by_width":
            snapped = snap_width(width, sorted(pricing.table))
            if snapped is None:
                return 0.0, f"{choice.label}: geen prijs voor breedte {self._cm(width)}"
            return pricing.table[snapped], None

        if pricing.kind == "by_depth":
            row = self._depth_row(depth, sorted(pricing.table))
            if row is None:
                return 0.0, f"{choice.label}: diepte onbekend"
            return pricing.table[row], None

        if pricing.kind == "addon":
            resolution = resolve_addon(width, self.rules.led_addon)
            if resolution.status == AddonStatus.OUT_OF_RANGE:
                return 0.0, f"{choice.label}: breedte {self._cm(width)} buiten bereik, geen spots"
            return resolution.total, None

        return 0.0, None

    def _depth_row(self, depth, depths: List[int]):
        """Next listed depth at or above the draft depth, clamped to the deepest."""
        value = self.parse_number(depth, default=math.nan)
        if math.isnan(value) or value <= 0 or not depths:
            return None
        for row in depths:
            if value <= row:
                return row
        return depths[-1]

    def _line_label(self, group: OptionGroup, choice: OptionChoice, width) -> str:
        if choice.pricing.kind == "addon":
            resolution = resolve_addon(width, self.rules.led_addon)
            return (
                f"{choice.label} ({resolution.quantity} × "
                f"{format_eur(resolution.unit_price)})"
            )
        return f"{group.label}: {choice.label}"

    def _cm(self, value) -> str:
        return "onbekend" if value is None else f"{value:g} cm"
