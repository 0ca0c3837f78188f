"""
Config validation — gates cart insertion.

Pricing always works on an incomplete draft; validation decides whether that
draft may be committed. A category mismatch fails on its own. Otherwise every
rule for the category runs and all failures are collected, in a stable order.
Nothing here raises for bad input: problems come back as ValidationResult.
"""

import logging
import math
from typing import List, Optional

from .rules import RuleBook, get_rules
from .schemas import DraftConfiguration, ProductType, ValidationIssue, ValidationResult

logger = logging.getLogger(__name__)

TYPE_TO_CATEGORY = {
    ProductType.VERANDA: "verandas",
    ProductType.SANDWICH_PANEL: "sandwichpanelen",
    ProductType.ACCESSORY: "accessoires",
}

MESSAGES = {
    "missing_config": "Geen configuratie gevonden.",
    "category_mismatch": "Configuratie categorie mismatch ({received} vs {expected})",
    "missing_color": "Kies een kleur.",
    "missing_roof_type": "Kies een daktype.",
    "invalid_roof_type": "Ongeldig daktype.",
    "missing_gutter": "Kies een goot (Deluxe, Cube of Classic).",
    "invalid_gutter": "Ongeldige goot optie.",
    "missing_option": "Kies een {label}.",
    "invalid_option": "Ongeldige keuze voor {label}.",
    "missing_length": "Kies een lengte.",
    "invalid_length": "Ongeldige lengte.",
}


def _issue(code: str, field: Optional[str] = None, **params) -> ValidationIssue:
    return ValidationIssue(code=code, field=field, message=MESSAGES[code].format(**params))


def _first_set(fields: dict, *keys):
    """First non-empty value among several accepted field names."""
    for key in keys:
        value = fields.get(key)
        if value not in (None, ""):
            return value
    return None


def _is_unset(value) -> bool:
    """None, empty text, False or an empty selection."""
    if value is None or value is False:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, dict):
        return not any(value.values())
    if isinstance(value, (list, tuple, set)):
        return len(value) == 0
    return False


def _selected_ids(value) -> List[str]:
    """Choice ids named by a draft value. A bare True (toggle) names none."""
    if value is True:
        return []
    if isinstance(value, dict):
        return [str(k) for k, v in value.items() if v]
    if isinstance(value, (list, tuple, set)):
        return [str(v) for v in value]
    return [str(value).strip()]


class BaseValidator:
    """Category rule set. Subclasses return every issue they find."""

    def __init__(self, rules: Optional[RuleBook] = None):
        self.rules = rules if rules is not None else get_rules()

    def issues(self, draft: DraftConfiguration) -> List[ValidationIssue]:
        return []


class VerandaValidator(BaseValidator):
    """
    Colour plus every option group the rule book marks required.

    Missing selections are reported first, in rule-book order, then
    selections that are not a choice of their group.
    """

    # Groups whose messages predate the generic ones
    MISSING_CODES = {"daktype": "missing_roof_type", "goot": "missing_gutter"}
    INVALID_CODES = {"daktype": "invalid_roof_type", "goot": "invalid_gutter"}

    def issues(self, draft):
        fields = draft.fields
        found = []

        if not _first_set(fields, "color", "kleur"):
            found.append(_issue("missing_color", "color"))

        required = [g for g in self.rules.veranda.option_groups if g.required]
        invalid = []
        for group in required:
            value = fields.get(group.id)
            if _is_unset(value):
                found.append(self._group_issue(self.MISSING_CODES, "missing_option", group))
            elif any(choice_id not in group.choice_ids for choice_id in _selected_ids(value)):
                invalid.append(self._group_issue(self.INVALID_CODES, "invalid_option", group))

        return found + invalid

    def _group_issue(self, codes: dict, fallback: str, group) -> ValidationIssue:
        code = codes.get(group.id)
        if code is not None:
            return _issue(code, group.id)
        return _issue(fallback, group.id, label=group.label.lower())


class SandwichPanelValidator(BaseValidator):
    """Length (one of the stocked lengths) and colour are required."""

    def issues(self, draft):
        fields = draft.fields
        found = []

        length = _first_set(fields, "length_mm", "lengthMm", "length")
        if length is None:
            found.append(_issue("missing_length", "length_mm"))
        else:
            length_mm = self._as_length(length)
            if length_mm is None:
                found.append(_issue("missing_length", "length_mm"))
            elif length_mm not in self.rules.sandwich_panel.lengths_mm:
                found.append(_issue("invalid_length", "length_mm"))

        color = _first_set(fields, "color", "kleur")
        if not isinstance(color, str):
            found.append(_issue("missing_color", "color"))

        return found

    def _as_length(self, value) -> Optional[float]:
        if isinstance(value, bool):
            return None
        try:
            number = float(str(value).strip())
        except (TypeError, ValueError):
            return None
        if not math.isfinite(number):
            return None
        return number


class AccessoryValidator(BaseValidator):
    """Accessories have no configuration fields."""


def validate_config(category: str, draft: Optional[DraftConfiguration],
                    rules: Optional[RuleBook] = None) -> ValidationResult:
    """Validate a draft against the category it is about to be committed under."""
    if draft is None:
        return ValidationResult.from_issues([_issue("missing_config")])

    expected = (category or "").strip().lower()
    received = (draft.category or "").strip().lower()
    if received != expected:
        logger.info("Config category mismatch: %r vs %r", draft.category, category)
        return ValidationResult.from_issues([
            _issue("category_mismatch", "category",
                   received=draft.category, expected=category),
        ])

    # Registry imports this module for its validator classes
    from .calculators.registry import get_strategy
    from .products import resolve_product_type

    product_type = resolve_product_type(category=expected)
    _, validator_class = get_strategy(product_type)
    issues = validator_class(rules).issues(draft)
    if issues:
        logger.debug("Validation for %s failed: %s", expected, [i.code for i in issues])
    return ValidationResult.from_issues(issues)
