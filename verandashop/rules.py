"""
Rule book — the business constants behind pricing, validation and shipping.

Loaded once from data/rules.json (or settings.RULES_FILE) into frozen models.
Change the JSON, not the code, when a rate, radius or table changes.
"""

import json
import logging
from functools import lru_cache
from pathlib import Path
from typing import Annotated, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, Field, ValidationError, model_validator

from .config import settings
from .money import from_cents

logger = logging.getLogger(__name__)

# Directory where the packaged rule document lives
DATA_DIR = Path(__file__).parent / "data"
DEFAULT_RULES_PATH = DATA_DIR / "rules.json"


class RulesError(ValueError):
    """The rule document exists but does not describe a usable rule set."""


# --- LED addon (width → spot count) ---

class LedAddonRules(BaseModel):
    product_handle: str = "led-spot-per-stuk"
    label: str = "LED spots"
    unit_price_minor_units: int
    widths: Dict[int, int]

    class Config:
        frozen = True

    @model_validator(mode="after")
    def _check_uniform_steps(self):
        widths = sorted(self.widths)
        if len(widths) < 2:
            raise ValueError("LED width table needs at least two rows")
        step = widths[1] - widths[0]
        quantity_step = self.widths[widths[1]] - self.widths[widths[0]]
        for lower, upper in zip(widths, widths[1:]):
            if upper - lower != step:
                raise ValueError(
                    f"LED widths must use one uniform step ({step} cm); "
                    f"got {lower} → {upper}"
                )
            if self.widths[upper] - self.widths[lower] != quantity_step:
                raise ValueError(
                    f"LED quantities must use one uniform step ({quantity_step}); "
                    f"got {self.widths[lower]} → {self.widths[upper]}"
                )
        return self

    @property
    def supported_widths(self) -> List[int]:
        return sorted(self.widths)

    @property
    def step(self) -> int:
        widths = self.supported_widths
        return widths[1] - widths[0]

    @property
    def unit_price(self) -> float:
        return from_cents(self.unit_price_minor_units)


# --- Option group pricing ---

class FixedPricing(BaseModel):
    kind: Literal["fixed"]
    amount: float = 0.0

    class Config:
        frozen = True


class WidthTablePricing(BaseModel):
    """Price per supported width. The draft width is snapped before lookup."""
    kind: Literal["by_width"]
    table: Dict[int, float]

    class Config:
        frozen = True


class DepthTablePricing(BaseModel):
    """Price per listed depth. Depths round up to the next listed row."""
    kind: Literal["by_depth"]
    table: Dict[int, float]

    class Config:
        frozen = True


class AddonPricing(BaseModel):
    """Priced through the LED width table: quantity × unit price."""
    kind: Literal["addon"]

    class Config:
        frozen = True


ChoicePricing = Annotated[
    Union[FixedPricing, WidthTablePricing, DepthTablePricing, AddonPricing],
    Field(discriminator="kind"),
]


class OptionChoice(BaseModel):
    id: str
    label: str
    pricing: ChoicePricing

    class Config:
        frozen = True


class OptionGroup(BaseModel):
    id: str
    label: str
    mode: Literal["single", "multi", "info"] = "single"
    required: bool = False
    choices: List[OptionChoice]

    class Config:
        frozen = True

    def find_choice(self, choice_id: str) -> Optional[OptionChoice]:
        for choice in self.choices:
            if choice.id == choice_id:
                return choice
        return None

    @property
    def choice_ids(self) -> List[str]:
        return [c.id for c in self.choices]


class VerandaRules(BaseModel):
    option_groups: List[OptionGroup]

    class Config:
        frozen = True

    def group(self, group_id: str) -> Optional[OptionGroup]:
        for group in self.option_groups:
            if group.id == group_id:
                return group
        return None


class SandwichPanelRules(BaseModel):
    u_profile_label: str = "U-profielen"
    per_meter_rate_minor_units: int
    lengths_mm: List[int]

    class Config:
        frozen = True

    @property
    def per_meter_rate(self) -> float:
        return from_cents(self.per_meter_rate_minor_units)


class ShippingRules(BaseModel):
    radius_km: float
    veranda_flat_rate_minor_units: int
    accessories_flat_rate_minor_units: int
    blocked_postcodes: List[str] = []
    blocked_places: List[str] = []

    class Config:
        frozen = True


class RuleBook(BaseModel):
    led_addon: LedAddonRules
    sandwich_panel: SandwichPanelRules
    shipping: ShippingRules
    veranda: VerandaRules

    class Config:
        frozen = True


def load_rules(path=None) -> RuleBook:
    """Read and validate a rule document. Missing file → FileNotFoundError."""
    rules_path = Path(path) if path else DEFAULT_RULES_PATH
    if not rules_path.exists():
        raise FileNotFoundError(f"No rule document found at: {rules_path}")

    with open(rules_path, encoding="utf-8") as f:
        try:
            raw = json.load(f)
        except json.JSONDecodeError as e:
            raise RulesError(f"Rule document {rules_path} is not valid JSON: {e}") from e

    try:
        rules = RuleBook.model_validate(raw)
    except ValidationError as e:
        raise RulesError(f"Rule document {rules_path} failed validation: {e}") from e

    logger.info(
        "Loaded rules from %s (%d LED widths, %d veranda option groups)",
        rules_path, len(rules.led_addon.widths), len(rules.veranda.option_groups),
    )
    return rules


@lru_cache(maxsize=1)
def get_rules() -> RuleBook:
    """The rule book configured through settings. Loaded once."""
    return load_rules(settings.RULES_FILE or None)
