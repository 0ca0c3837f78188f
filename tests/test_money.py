"""
Money helpers — cents conversion and nl-NL formatting.
"""

import pytest

from verandashop.money import format_eur, from_cents, to_cents


@pytest.mark.parametrize("amount,cents", [
    (29.99, 2999),
    (12.5, 1250),
    ("1.234,56", 123456),
    ("€ 299,99", 29999),
    ("1499.00", 149900),
    (0.005, 1),
    (None, 0),
    ("abc", 0),
    (True, 0),
    (float("nan"), 0),
])
def test_to_cents(amount, cents):
    assert to_cents(amount) == cents


def test_from_cents():
    assert from_cents(29999) == 299.99
    assert from_cents("1250") == 12.5
    assert from_cents(None) == 0.0
    assert from_cents("x") == 0.0


def test_format_eur():
    assert format_eur(1234.5) == "€ 1.234,50"
    assert format_eur(29.99) == "€ 29,99"
    assert format_eur(29999, cents=True) == "€ 299,99"
    assert format_eur(-5) == "€ -5,00"
    assert format_eur(None) == "€ 0,00"
