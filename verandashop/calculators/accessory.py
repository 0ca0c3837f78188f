"""Accessories are sold at their catalog price; no configurable extras."""

from .base import BasePricingCalculator
from ..schemas import ProductType


class AccessoryCalculator(BasePricingCalculator):

    product_type = ProductType.ACCESSORY

    def price(self, base_price, draft=None, handle=""):
        return self.make_breakdown(base_price, [])
