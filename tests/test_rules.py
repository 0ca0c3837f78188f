"""
Rule book loading and validation.

Tests:
1-3. Packaged rules load with the expected constants
4-6. Missing, malformed and inconsistent rule documents
"""

import json

import pytest

from verandashop.rules import DEFAULT_RULES_PATH, RulesError, load_rules


def _write_rules(tmp_path, mutate):
    raw = json.loads(DEFAULT_RULES_PATH.read_text(encoding="utf-8"))
    mutate(raw)
    path = tmp_path / "rules.json"
    path.write_text(json.dumps(raw), encoding="utf-8")
    return path


# ============================================================
# 1-3. Packaged rules
# ============================================================

def test_packaged_led_table(rules):
    led = rules.led_addon
    assert led.supported_widths[0] == 306
    assert led.supported_widths[-1] == 1206
    assert led.step == 100
    assert led.unit_price == 29.99
    assert led.widths[706] == 12


def test_packaged_shipping_and_panel_rates(rules):
    assert rules.shipping.radius_km == 300
    assert rules.shipping.veranda_flat_rate_minor_units == 29999
    assert rules.shipping.accessories_flat_rate_minor_units == 2999
    assert rules.sandwich_panel.per_meter_rate == 12.5


def test_packaged_option_groups(rules):
    daktype = rules.veranda.group("daktype")
    assert daktype.required is True
    assert daktype.choice_ids == ["poly_helder", "poly_opaal", "glas"]
    assert rules.veranda.group("goot").mode == "info"
    assert rules.veranda.group("extras").find_choice("led_verlichting").pricing.kind == "addon"
    assert rules.veranda.group("dakkapel") is None


# ============================================================
# 4-6. Broken documents
# ============================================================

def test_missing_rules_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_rules(tmp_path / "nope.json")


def test_malformed_json(tmp_path):
    path = tmp_path / "rules.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(RulesError):
        load_rules(path)


def test_uneven_led_widths_rejected(tmp_path):
    def mutate(raw):
        raw["led_addon"]["widths"]["1300"] = 24
    with pytest.raises(RulesError, match="uniform step"):
        load_rules(_write_rules(tmp_path, mutate))


def test_unknown_pricing_kind_rejected(tmp_path):
    def mutate(raw):
        raw["veranda"]["option_groups"][0]["choices"][0]["pricing"] = {"kind": "per_m2", "amount": 5}
    with pytest.raises(RulesError):
        load_rules(_write_rules(tmp_path, mutate))


def test_rules_error_is_a_value_error(tmp_path):
    path = tmp_path / "rules.json"
    path.write_text("[]", encoding="utf-8")
    with pytest.raises(ValueError):
        load_rules(path)
