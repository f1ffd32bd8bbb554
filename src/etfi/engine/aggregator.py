"""
ETFI Policy Modifier Aggregator

Resolves every modifier granted by the active policies and reduces them to
the "Bonus Yields" labels shown on town focus tooltips.

Pipeline:
    ActiveRuleLinkage        active rules -> linked modifier ids
    ModifierResolver         modifier id  -> ResolvedModifier | ModifierFailure
    requirement filter       keep modifiers whose subject set has an
                             allow-listed requirement type
    label derivation         Tooltip argument -> rule name -> modifier id
                             -> placeholder
    dedupe                   first-insertion order, exact string equality

Both public entry points are failure boundaries: an unexpected exception is
logged and turned into an empty result.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Optional

from ..host import ActiveRulesProvider, GameTables, TextComposer, compose_or_raw, compose_text
from ..models import (
    TOOLTIP_ARGUMENT,
    ActiveRule,
    ActiveRuleResolution,
    ModifierFailure,
    ModifierOutcome,
    ResolvedModifier,
    RuleEntry,
)
from .linkage import ActiveRuleLinkage
from .modifiers import ModifierResolver

logger = logging.getLogger(__name__)


# Requirement types that qualify a modifier for the Bonus Yields list
ALLOWED_REQUIREMENT_TYPES: frozenset[str] = frozenset({
    "REQUIREMENT_CITY_IS_TOWN",
    "REQUIREMENT_REQUIREMENTSET_IS_MET",
    "REQUIREMENT_CITY_HAS_PROJECT",
})

UNKNOWN_MODIFIER_LABEL = "<Unknown Modifier>"


# =============================================================================
# Filter and Labels
# =============================================================================

def matches_requirement_filter(
    modifier: Optional[ModifierOutcome],
    allowed_types: frozenset[str] = ALLOWED_REQUIREMENT_TYPES,
) -> bool:
    """
    True if the modifier's subject requirement set has at least one
    requirement of an allowed type.

    Any single match is enough, whatever the set's own RequirementSetType
    (REQUIREMENTSET_TEST_ALL vs _ANY) says.
    """
    if not isinstance(modifier, ResolvedModifier):
        return False

    subject_set = modifier.subject_requirement_set
    if subject_set is None:
        return False

    return any(
        req.requirement_type in allowed_types
        for req in subject_set.requirements
    )


def derive_rule_label(rule: ActiveRule, composer: Optional[TextComposer] = None) -> Optional[str]:
    """
    Display name for a rule: host-localized name, else the composed name
    tag, else the raw name tag, else None.
    """
    if rule.localized_name:
        return rule.localized_name
    if rule.name_tag:
        return compose_or_raw(composer, rule.name_tag)
    return None


def derive_modifier_label(
    modifier: Optional[ResolvedModifier],
    modifier_id: Optional[str],
    rule_label: Optional[str],
    composer: Optional[TextComposer] = None,
) -> str:
    """
    Display label for one modifier.

    Priority:
        1. Tooltip argument (composed if possible, raw tag otherwise)
        2. Label of the rule granting the modifier
        3. Modifier id
        4. UNKNOWN_MODIFIER_LABEL
    """
    if modifier is not None:
        tooltip = modifier.get_argument(TOOLTIP_ARGUMENT)
        if tooltip is not None and tooltip.value:
            tag = str(tooltip.value)
            return compose_text(composer, tag) or tag

    if rule_label:
        return rule_label

    raw_id = (modifier.modifier_id if modifier is not None else None) or modifier_id
    return raw_id or UNKNOWN_MODIFIER_LABEL


# =============================================================================
# Aggregator
# =============================================================================

@dataclass
class PolicyModifierAggregator:
    """
    Aggregates the modifiers of all active policies.

    Holds only its collaborators; every call re-reads the host tables and
    the rules model.

    Usage:
        aggregator = PolicyModifierAggregator(tables, rules_model, composer=locale)
        labels = aggregator.get_display_labels_for_active_rule_modifiers()
    """
    tables: GameTables
    rules_model: Optional[ActiveRulesProvider] = None
    composer: Optional[TextComposer] = None
    linkage: ActiveRuleLinkage = field(init=False)
    modifiers: ModifierResolver = field(init=False)

    def __post_init__(self) -> None:
        self.linkage = ActiveRuleLinkage(self.tables, self.rules_model)
        self.modifiers = ModifierResolver(self.tables, composer=self.composer)

    @classmethod
    def from_snapshot(cls, snapshot: Any) -> "PolicyModifierAggregator":
        """Build an aggregator over a loaded GameSnapshot."""
        return cls(
            tables=snapshot.tables,
            rules_model=snapshot.rules_model,
            composer=snapshot.locale,
        )

    # -------------------------------------------------------------------------
    # Public entry points
    # -------------------------------------------------------------------------

    def get_resolved_modifiers_for_active_rules(self) -> ActiveRuleResolution:
        """
        Resolve every modifier of every active rule.

        Rules without an id are skipped; modifiers that fail to resolve are
        kept as ModifierFailure so ids and modifiers stay aligned.
        """
        try:
            return self._aggregate()
        except Exception:
            logger.exception("Resolving modifiers for active rules failed")
            return ActiveRuleResolution()

    def get_display_labels_for_active_rule_modifiers(self) -> list[str]:
        """
        Deduplicated display labels for the modifiers of active rules that
        pass the requirement filter.
        """
        try:
            resolution = self._aggregate()
            return self._labels_for(resolution)
        except Exception:
            logger.exception("Building active rule modifier labels failed")
            return []

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _aggregate(self) -> ActiveRuleResolution:
        active_rules = self.linkage.get_active_rules()
        entries = []
        for rule in active_rules:
            entry = self._build_entry(rule)
            if entry is not None:
                entries.append(entry)

        return ActiveRuleResolution(
            active_rule_count=len(active_rules),
            entries=tuple(entries),
        )

    def _build_entry(self, rule: ActiveRule) -> Optional[RuleEntry]:
        if not rule.rule_id:
            return None

        modifier_ids = self.linkage.get_modifier_ids_for_rule(rule.rule_id)
        modifiers: list[ModifierOutcome] = []
        for modifier_id in modifier_ids:
            resolved = self.modifiers.resolve_modifier_by_id(modifier_id)
            modifiers.append(resolved if resolved is not None else ModifierFailure(id=modifier_id))

        return RuleEntry(
            rule_id=rule.rule_id,
            name_tag=rule.name_tag,
            localized_name=derive_rule_label(rule, self.composer),
            modifier_ids=tuple(modifier_ids),
            modifiers=tuple(modifiers),
        )

    def _labels_for(self, resolution: ActiveRuleResolution) -> list[str]:
        labels: dict[str, None] = {}
        for entry in resolution.entries:
            for modifier_id, modifier in zip(entry.modifier_ids, entry.modifiers):
                if not matches_requirement_filter(modifier):
                    continue
                label = derive_modifier_label(
                    modifier,
                    modifier_id,
                    entry.localized_name,
                    self.composer,
                )
                if label:
                    labels.setdefault(label, None)
        return list(labels)
