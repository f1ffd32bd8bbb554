"""
ETFI Active Rule Linkage

Finds the active policies and the modifier ids each one grants through the
TraditionModifiers join table.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..host import ActiveRulesProvider, GameTables
from ..models import ActiveRule


@dataclass
class ActiveRuleLinkage:
    tables: GameTables
    rules_model: Optional[ActiveRulesProvider] = None

    def get_active_rules(self) -> list[ActiveRule]:
        """
        Refresh the host rules model (if it supports it) and return its
        active rules. No model means no active rules.
        """
        model = self.rules_model
        if model is None:
            return []

        refresh = getattr(model, "refresh", None)
        if callable(refresh):
            refresh()

        return list(getattr(model, "active_rules", None) or [])

    def get_modifier_ids_for_rule(self, rule_id: Optional[str]) -> list[str]:
        """
        Unique modifier ids linked to a rule, in first-seen order.

        Links without a modifier id are dropped.
        """
        links = self.tables.rule_modifiers
        if not rule_id or links is None:
            return []

        ids = dict.fromkeys(
            link.modifier_id
            for link in links.find_all(lambda link: link.rule_id == rule_id)
            if link.modifier_id
        )
        return list(ids)
