"""
Configuration, pricing and shipping engine for the veranda storefront.

Pure functions over already-fetched catalog data. No network, no persistence.
Rule constants live in data/rules.json.
"""
