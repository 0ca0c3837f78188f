"""
Shared test fixtures — packaged rule book, engine, sample products, fake clock.
"""

import pytest

from verandashop.pricing_engine import PricingEngine
from verandashop.rules import load_rules
from verandashop.schemas import DraftConfiguration, ProductDescriptor, ProductType


@pytest.fixture
def rules():
    """The packaged rule book, loaded fresh (no lru_cache)."""
    return load_rules()


@pytest.fixture
def engine(rules):
    return PricingEngine(rules)


@pytest.fixture
def veranda():
    """A standard 706 × 400 veranda."""
    return ProductDescriptor(
        handle="aluminium-veranda-706-x-400-cm",
        title="Aluminium veranda 706 x 400 cm",
        product_type=ProductType.VERANDA,
        category="verandas",
        base_price=1999.0,
    )


@pytest.fixture
def sandwich_panel():
    return ProductDescriptor(
        handle="sandwichpaneel-ral7016",
        title="Sandwichpaneel antraciet",
        product_type=ProductType.SANDWICH_PANEL,
        category="sandwichpanelen",
        base_price=500.0,
    )


@pytest.fixture
def accessory():
    return ProductDescriptor(
        handle="terras-heater-2000w",
        title="Terrasverwarmer 2000W",
        product_type=ProductType.ACCESSORY,
        category="accessoires",
        base_price=149.95,
    )


@pytest.fixture
def veranda_draft():
    """Complete veranda draft, passes validation."""
    return DraftConfiguration(
        category="verandas",
        fields={
            "color": "ral7016",
            "daktype": "poly_helder",
            "goot": "deluxe",
            "zijwand_links": "geen",
            "zijwand_rechts": "geen",
            "voorzijde": "geen",
            "extras": [],
            "width_cm": 706,
            "depth_cm": 400,
        },
    )


@pytest.fixture
def sandwich_draft():
    return DraftConfiguration(
        category="sandwichpanelen",
        fields={"length_mm": 4000, "color": "ral7016"},
        extras={"u_profiles": {"enabled": False, "meters": 1}},
    )


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()
