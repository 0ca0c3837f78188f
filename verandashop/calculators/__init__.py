"""Per-category price calculators and the strategy registry that selects them."""
