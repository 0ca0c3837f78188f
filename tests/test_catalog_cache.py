"""
TTL cache and the catalog boundary index.

Tests:
1-4. TTLCache (get/set, expiry, clear, bad TTL)
5-7. CatalogIndex memoization
"""

import pytest

from verandashop.cache import TTLCache
from verandashop.catalog import CatalogIndex
from verandashop.schemas import ProductType


def _record(handle="aluminium-veranda-606-x-300-cm", **extra):
    record = {"handle": handle, "title": "Veranda 606 x 300", "category": "verandas", "price": "1799"}
    record.update(extra)
    return record


# ============================================================
# 1-4. TTLCache
# ============================================================

def test_cache_get_and_set(clock):
    cache = TTLCache(300, clock=clock)
    assert cache.get("a") is None
    assert cache.get("a", "fallback") == "fallback"
    cache.set("a", 1)
    assert cache.get("a") == 1
    assert "a" in cache
    assert len(cache) == 1


def test_cache_entries_expire(clock):
    """Five minute TTL: valid just before, gone at the boundary."""
    cache = TTLCache(300, clock=clock)
    cache.set("a", 1)
    clock.advance(299.9)
    assert cache.get("a") == 1
    clock.advance(0.1)
    assert cache.get("a") is None
    assert "a" not in cache
    assert len(cache) == 0


def test_cache_set_refreshes_expiry(clock):
    cache = TTLCache(10, clock=clock)
    cache.set("a", 1)
    clock.advance(8)
    cache.set("a", 2)
    clock.advance(8)
    assert cache.get("a") == 2


def test_cache_clear_and_invalid_ttl(clock):
    cache = TTLCache(10, clock=clock)
    cache.set("a", 1)
    cache.set("b", 2)
    cache.clear()
    assert len(cache) == 0
    with pytest.raises(ValueError):
        TTLCache(0)


def test_caches_are_independent(clock):
    first = TTLCache(10, clock=clock)
    second = TTLCache(10, clock=clock)
    first.set("a", 1)
    assert second.get("a") is None


# ============================================================
# 5-7. CatalogIndex
# ============================================================

def test_describe_normalizes_record(clock):
    index = CatalogIndex(TTLCache(300, clock=clock))
    descriptor = index.describe(_record())
    assert descriptor.product_type == ProductType.VERANDA
    assert descriptor.base_price == 1799.0
    assert index.lookup("aluminium-veranda-606-x-300-cm") == descriptor


def test_describe_memoizes_until_expiry(clock):
    """Within the TTL the first descriptor is served; afterwards the record is re-read."""
    index = CatalogIndex(TTLCache(300, clock=clock))
    first = index.describe(_record(price="1799"))
    again = index.describe(_record(price="1899"))
    assert again is first

    clock.advance(300)
    fresh = index.describe(_record(price="1899"))
    assert fresh.base_price == 1899.0


def test_describe_all_and_of_type(clock):
    index = CatalogIndex(TTLCache(300, clock=clock))
    records = [
        _record(),
        {"handle": "sandwichpaneel-ral9005", "category": "sandwichpanelen"},
        {"handle": "led-spot-per-stuk", "tags": ["extra"]},
        {"title": "zonder handle"},
    ]
    assert len(index.describe_all(records)) == 4
    verandas = index.of_type(records, ProductType.VERANDA)
    assert [d.handle for d in verandas] == ["aluminium-veranda-606-x-300-cm"]


def test_default_cache_uses_settings_ttl():
    index = CatalogIndex()
    assert index.cache.ttl_seconds == 300
