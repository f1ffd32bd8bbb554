"""
ETFI - Enhanced Town Focus Info

Resolves the modifiers granted by the player's active policies and reduces
them to the "Bonus Yields" labels shown on town focus tooltips.

Quick Start:
    from etfi import load_snapshot, get_display_labels

    snapshot = load_snapshot("snapshot.yaml")
    labels = get_display_labels(snapshot)

    # Or wire the engine to host tables directly
    from etfi.engine import PolicyModifierAggregator

    aggregator = PolicyModifierAggregator(tables, rules_model, composer=locale)
    resolution = aggregator.get_resolved_modifiers_for_active_rules()

Version: 0.1.0
"""
from __future__ import annotations

__version__ = "0.1.0"

from .engine import (
    ALLOWED_REQUIREMENT_TYPES,
    ActiveRuleLinkage,
    ModifierResolver,
    PolicyModifierAggregator,
    RequirementSetResolver,
)
from .exceptions import (
    ConfigurationError,
    EtfiError,
    ModifierNotFoundError,
    RequirementSetNotFoundError,
    SnapshotLoadError,
    SnapshotValidationError,
    SnapshotVersionMismatch,
)
from .host import GameTables, LocaleTable, StaticRulesModel, Table
from .models import ActiveRuleResolution, ResolvedModifier, ResolvedRequirementSet
from .packs import GameSnapshot, load_snapshot, load_snapshot_from_string


# =============================================================================
# Convenience Functions
# =============================================================================

def get_resolved_modifiers(snapshot: GameSnapshot) -> ActiveRuleResolution:
    """Structured resolution of all active rules in a snapshot."""
    return PolicyModifierAggregator.from_snapshot(snapshot).get_resolved_modifiers_for_active_rules()


def get_display_labels(snapshot: GameSnapshot) -> list[str]:
    """Bonus Yields labels for the active rules in a snapshot."""
    return PolicyModifierAggregator.from_snapshot(snapshot).get_display_labels_for_active_rule_modifiers()


__all__ = [
    "__version__",
    # Engine
    "ALLOWED_REQUIREMENT_TYPES",
    "ActiveRuleLinkage",
    "ModifierResolver",
    "PolicyModifierAggregator",
    "RequirementSetResolver",
    # Host
    "GameTables",
    "LocaleTable",
    "StaticRulesModel",
    "Table",
    # Models
    "ActiveRuleResolution",
    "ResolvedModifier",
    "ResolvedRequirementSet",
    # Packs
    "GameSnapshot",
    "load_snapshot",
    "load_snapshot_from_string",
    # Exceptions
    "ConfigurationError",
    "EtfiError",
    "ModifierNotFoundError",
    "RequirementSetNotFoundError",
    "SnapshotLoadError",
    "SnapshotValidationError",
    "SnapshotVersionMismatch",
    # Convenience
    "get_display_labels",
    "get_resolved_modifiers",
]
