"""
Catalog boundary — raw records in, ProductDescriptors out, memoized by handle.
"""

import logging
from typing import Iterable, List, Optional

from .cache import TTLCache
from .config import settings
from .products import normalize_product_record
from .schemas import ProductDescriptor, ProductType

logger = logging.getLogger(__name__)


class CatalogIndex:
    """
    Normalizes catalog records once per TTL window.

    Pass your own TTLCache to share it or to control its clock;
    by default each index gets a private one using CATALOG_CACHE_TTL_SECONDS.
    """

    def __init__(self, cache: Optional[TTLCache] = None):
        self.cache = cache if cache is not None else TTLCache(settings.CATALOG_CACHE_TTL_SECONDS)

    def describe(self, record: dict) -> ProductDescriptor:
        """Descriptor for a raw record; cached under the record's handle."""
        key = record.get("handle") or record.get("slug") or record.get("id")
        if key:
            cached = self.cache.get(key)
            if cached is not None:
                return cached

        descriptor = normalize_product_record(record)
        if key:
            self.cache.set(key, descriptor)
        else:
            logger.warning("Catalog record without handle, not cached: %r", record.get("title"))
        return descriptor

    def describe_all(self, records: Iterable[dict]) -> List[ProductDescriptor]:
        return [self.describe(r) for r in records or []]

    def of_type(self, records: Iterable[dict], product_type: ProductType) -> List[ProductDescriptor]:
        """Only the descriptors of one product type, in catalog order."""
        return [d for d in self.describe_all(records) if d.product_type == product_type]

    def lookup(self, handle: str) -> Optional[ProductDescriptor]:
        """A previously described product, if still fresh."""
        return self.cache.get(handle)
