"""
ETFI Engine

Resolution services, leaf first:

- RequirementSetResolver: expand a requirement set
- ModifierResolver: expand a modifier
- ActiveRuleLinkage: active rules and their modifier ids
- PolicyModifierAggregator: resolve, filter, label and dedupe

Usage:
    from etfi.engine import PolicyModifierAggregator

    aggregator = PolicyModifierAggregator(tables, rules_model, composer=locale)
    labels = aggregator.get_display_labels_for_active_rule_modifiers()
"""
from __future__ import annotations

from .aggregator import (
    ALLOWED_REQUIREMENT_TYPES,
    UNKNOWN_MODIFIER_LABEL,
    PolicyModifierAggregator,
    derive_modifier_label,
    derive_rule_label,
    matches_requirement_filter,
)
from .linkage import ActiveRuleLinkage
from .modifiers import ModifierResolver
from .requirement_sets import RequirementSetResolver

__all__ = [
    "ALLOWED_REQUIREMENT_TYPES",
    "UNKNOWN_MODIFIER_LABEL",
    "ActiveRuleLinkage",
    "ModifierResolver",
    "PolicyModifierAggregator",
    "RequirementSetResolver",
    "derive_modifier_label",
    "derive_rule_label",
    "matches_requirement_filter",
]
