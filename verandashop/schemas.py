import enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class ProductType(str, enum.Enum):
    VERANDA = "veranda"
    SANDWICH_PANEL = "sandwich_panel"
    ACCESSORY = "accessory"


class AddonStatus(str, enum.Enum):
    MATCHED = "matched"
    OUT_OF_RANGE = "out_of_range"
    NOT_SELECTED = "not_selected"


class ShippingTier(str, enum.Enum):
    FREE = "free"
    VERANDA_FLAT = "veranda_flat"
    ACCESSORIES = "accessories"
    BLOCKED = "blocked"
    DISTANCE_REQUIRED = "distance_required"
    EMPTY = "empty"


# --- Catalog boundary ---

class ProductDescriptor(BaseModel):
    """Stable product shape produced once at the catalog boundary."""
    handle: str
    title: str = ""
    product_type: ProductType = ProductType.ACCESSORY
    category: str = ""
    base_price: float = 0.0
    # Raw hints; only the type resolver reads these
    collections: List[str] = []
    tags: List[str] = []
    type_hint: Optional[str] = None
    requires_configuration: Optional[bool] = None

    class Config:
        frozen = True


# --- Configurator state ---

class DraftConfiguration(BaseModel):
    """In-progress option selections. Mutated field by field by the UI."""
    category: str
    fields: Dict[str, Any] = {}
    extras: Dict[str, Any] = {}


class PriceLineItem(BaseModel):
    label: str
    amount: float
    group_id: Optional[str] = None
    choice_id: Optional[str] = None


class PricingBreakdown(BaseModel):
    product_type: ProductType
    base_price: float
    items: List[PriceLineItem] = []
    extras_total: float = 0.0
    total: float
    notes: List[str] = []


class ValidationIssue(BaseModel):
    code: str
    field: Optional[str] = None
    message: str


class ValidationResult(BaseModel):
    ok: bool
    errors: List[str] = []
    issues: List[ValidationIssue] = []

    @classmethod
    def from_issues(cls, issues: List[ValidationIssue]) -> "ValidationResult":
        return cls(
            ok=len(issues) == 0,
            errors=[i.message for i in issues],
            issues=list(issues),
        )


class AddonResolution(BaseModel):
    width: Optional[int] = None
    quantity: int = 0
    status: AddonStatus
    unit_price: float
    total: float = 0.0

    class Config:
        frozen = True


# --- Cart and shipping ---

class CartItem(BaseModel):
    id: str
    handle: str
    title: str = ""
    product_type: ProductType
    category: str = ""
    quantity: int = 1
    unit_price: float = 0.0
    line_total: float = 0.0
    config: Optional[DraftConfiguration] = None
    breakdown: Optional[PricingBreakdown] = None


class CartCommit(BaseModel):
    ok: bool
    errors: List[str] = []
    item: Optional[CartItem] = None


class Destination(BaseModel):
    distance_km: Optional[float] = None
    postal_code: str = ""
    city: str = ""
    country: str = "NL"
    island: bool = False


class ShippingClassificationResult(BaseModel):
    blocked: bool
    tier: ShippingTier
    cost: Optional[int] = Field(default=None, description="Minor units (cents)")
    distance_km: Optional[float] = None
    description: str = ""
    block_reason: Optional[str] = None
