"""
Product type resolver — single source of truth for veranda / sandwich panel / accessory.

Resolution priority (first match wins):
1. Collection handle or category slug (exact)
2. Free-text product type field (synonym table)
3. Tags (keyword substring)
4. Category slug keywords, then the requires_configuration hint
5. Default: accessory

Also home of normalize_product_record(), the one place where raw catalog
records of varying shape become a ProductDescriptor.
"""

import logging
from typing import Iterable, Optional

from .money import from_cents, to_cents
from .schemas import ProductDescriptor, ProductType

logger = logging.getLogger(__name__)

# Collection handles / category slugs → type
CATEGORY_TO_TYPE = {
    "verandas": ProductType.VERANDA,
    "sandwichpanelen": ProductType.SANDWICH_PANEL,
    "accessoires": ProductType.ACCESSORY,
}

# Catalog productType values → type (keys are lower-cased and stripped)
TYPE_SYNONYMS = {
    "veranda": ProductType.VERANDA,
    "verandas": ProductType.VERANDA,
    "overkapping": ProductType.VERANDA,
    "terrasoverkapping": ProductType.VERANDA,
    "sandwichpaneel": ProductType.SANDWICH_PANEL,
    "sandwichpanelen": ProductType.SANDWICH_PANEL,
    "sandwich panel": ProductType.SANDWICH_PANEL,
    "sandwich panels": ProductType.SANDWICH_PANEL,
    "accessoire": ProductType.ACCESSORY,
    "accessoires": ProductType.ACCESSORY,
    "accessory": ProductType.ACCESSORY,
    "accessoires & extra's": ProductType.ACCESSORY,
}

# Tag keywords per type, checked in this order
TYPE_TAGS = (
    (ProductType.VERANDA, ("veranda", "verandas", "overkapping", "terras-overkapping")),
    (ProductType.SANDWICH_PANEL, ("sandwichpaneel", "sandwichpanelen", "sandwich")),
    (ProductType.ACCESSORY, ("accessoire", "accessoires", "accessory", "extra")),
)

# Category slug keywords for categories outside CATEGORY_TO_TYPE
CATEGORY_KEYWORDS = (
    ("overkapping", ProductType.VERANDA),
    ("veranda", ProductType.VERANDA),
    ("tuinkamer", ProductType.VERANDA),
    ("glazen-schuifwand", ProductType.VERANDA),
    ("sandwich", ProductType.SANDWICH_PANEL),
)

CART_ITEM_TYPES = {
    ProductType.VERANDA: "custom_veranda",
    ProductType.SANDWICH_PANEL: "sandwichpanelen",
    ProductType.ACCESSORY: "product",
}


def _lower(values: Optional[Iterable[str]]) -> list:
    return [str(v).strip().lower() for v in (values or []) if v]


def resolve_product_type(
    collections: Optional[Iterable[str]] = None,
    tags: Optional[Iterable[str]] = None,
    type_hint: Optional[str] = None,
    category: Optional[str] = None,
    requires_configuration: Optional[bool] = None,
) -> ProductType:
    """Classify catalog metadata into exactly one ProductType. Never raises."""
    category_slug = (category or "").strip().lower()

    # 1. Collection handles, then the category slug itself
    for handle in _lower(collections):
        if handle in CATEGORY_TO_TYPE:
            return CATEGORY_TO_TYPE[handle]
    if category_slug in CATEGORY_TO_TYPE:
        return CATEGORY_TO_TYPE[category_slug]

    # 2. Free-text type field
    if type_hint:
        normalized = " ".join(str(type_hint).lower().split())
        if normalized in TYPE_SYNONYMS:
            return TYPE_SYNONYMS[normalized]

    # 3. Tags
    for tag in _lower(tags):
        for product_type, keywords in TYPE_TAGS:
            if any(k in tag for k in keywords):
                return product_type

    # 4. Category keywords, then the explicit configuration hint
    for keyword, product_type in CATEGORY_KEYWORDS:
        if keyword in category_slug:
            return product_type
    if requires_configuration:
        return ProductType.VERANDA

    logger.debug(
        "No type signal (category=%r, type=%r), defaulting to accessory",
        category, type_hint,
    )
    return ProductType.ACCESSORY


def resolve_descriptor_type(descriptor: ProductDescriptor) -> ProductType:
    """Resolve from the raw hints carried on a descriptor."""
    return resolve_product_type(
        collections=descriptor.collections,
        tags=descriptor.tags,
        type_hint=descriptor.type_hint,
        category=descriptor.category,
        requires_configuration=descriptor.requires_configuration,
    )


def requires_configuration(product_type: ProductType) -> bool:
    """True if the product must go through a configurator before the cart."""
    return product_type in (ProductType.VERANDA, ProductType.SANDWICH_PANEL)


def cart_item_type(product_type: ProductType) -> str:
    return CART_ITEM_TYPES.get(product_type, "product")


def cta_label(product_type: ProductType) -> str:
    return "Stel samen" if requires_configuration(product_type) else "In winkelwagen"


# --- Catalog boundary normalization ---

def _collection_handles(raw) -> list:
    """Accepts {"nodes": [{"handle": ...}]}, [{"handle": ...}] or ["handle", ...]."""
    if not raw:
        return []
    if isinstance(raw, dict):
        raw = raw.get("nodes") or raw.get("edges") or []
    handles = []
    for entry in raw:
        if isinstance(entry, dict):
            node = entry.get("node", entry)
            handle = node.get("handle")
        else:
            handle = entry
        if handle:
            handles.append(str(handle))
    return handles


def _tag_list(raw) -> list:
    if not raw:
        return []
    if isinstance(raw, str):
        return [t.strip() for t in raw.split(",") if t.strip()]
    return [str(t) for t in raw if t]


def _price(record: dict) -> float:
    """Price from a flat field or a priceRange.minVariantPrice.amount node."""
    raw = record.get("price", record.get("base_price"))
    if raw is None:
        price_range = record.get("priceRange") or {}
        raw = (price_range.get("minVariantPrice") or {}).get("amount")
    if isinstance(raw, dict):
        raw = raw.get("amount")
    return from_cents(to_cents(raw))


def normalize_product_record(record: dict) -> ProductDescriptor:
    """
    Collapse a raw catalog record into a ProductDescriptor.

    Runs once at the system boundary; everything downstream reads the
    descriptor and never reads the raw record again.
    """
    handle = str(record.get("handle") or record.get("slug") or record.get("id") or "")
    flag = record.get("requiresConfiguration", record.get("requires_configuration"))
    descriptor = ProductDescriptor(
        handle=handle,
        title=str(record.get("title") or ""),
        category=str(record.get("category") or ""),
        base_price=_price(record),
        collections=_collection_handles(record.get("collections")),
        tags=_tag_list(record.get("tags")),
        type_hint=record.get("productType") or record.get("product_type"),
        requires_configuration=flag if isinstance(flag, bool) else None,
    )
    product_type = resolve_descriptor_type(descriptor)
    logger.debug("Normalized %s as %s", handle, product_type.value)
    return descriptor.model_copy(update={"product_type": product_type})
