"""
Strategy registry — maps product types to (price calculator, validator) pairs.

Adding a product type means one row here, not another branch in the engine.
"""

from typing import Dict, List, Tuple

from .accessory import AccessoryCalculator
from .sandwich_panel import SandwichPanelCalculator
from .veranda import VerandaCalculator
from ..schemas import ProductType
from ..validation import AccessoryValidator, SandwichPanelValidator, VerandaValidator

STRATEGY_REGISTRY: Dict[ProductType, Tuple[type, type]] = {
    ProductType.VERANDA: (VerandaCalculator, VerandaValidator),
    ProductType.SANDWICH_PANEL: (SandwichPanelCalculator, SandwichPanelValidator),
    ProductType.ACCESSORY: (AccessoryCalculator, AccessoryValidator),
}


def get_strategy(product_type) -> Tuple[type, type]:
    """Returns the (calculator class, validator class) pair, or raises ValueError."""
    try:
        key = ProductType(product_type)
    except ValueError:
        key = None
    if key not in STRATEGY_REGISTRY:
        raise ValueError(
            f"No strategy registered for product type: {product_type}. "
            f"Available: {list_strategies()}"
        )
    return STRATEGY_REGISTRY[key]


def has_strategy(product_type) -> bool:
    """Check if a strategy exists for a product type."""
    try:
        return ProductType(product_type) in STRATEGY_REGISTRY
    except ValueError:
        return False


def list_strategies() -> List[str]:
    """List all registered product types."""
    return [t.value for t in STRATEGY_REGISTRY]
