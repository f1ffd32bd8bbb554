"""
ETFI Models

Host table rows and the resolved views built from them:

    from etfi.models import (
        # Rows
        ActiveRule, ModifierRow, RequirementRow,
        # Resolved
        Resolution, ResolvedModifier, ResolvedRequirementSet,
        RuleEntry, ActiveRuleResolution,
    )
"""
from __future__ import annotations

from .enums import AgeType, ResolutionStatus, TownFocus
from .resolved import (
    DESCRIPTION_CONTEXT,
    TOOLTIP_ARGUMENT,
    ActiveRuleResolution,
    Argument,
    ModifierFailure,
    ModifierOutcome,
    Resolution,
    ResolvedModifier,
    ResolvedRequirement,
    ResolvedRequirementSet,
    RuleEntry,
)
from .rows import (
    ActiveRule,
    EffectTypeDefinition,
    ModifierArgument,
    ModifierDisplayString,
    ModifierRow,
    RequirementArgument,
    RequirementRow,
    RequirementSetLink,
    RequirementSetRow,
    RuleModifierLink,
)

__all__ = [
    # Enums
    "AgeType",
    "ResolutionStatus",
    "TownFocus",
    # Rows
    "ActiveRule",
    "EffectTypeDefinition",
    "ModifierArgument",
    "ModifierDisplayString",
    "ModifierRow",
    "RequirementArgument",
    "RequirementRow",
    "RequirementSetLink",
    "RequirementSetRow",
    "RuleModifierLink",
    # Resolved
    "DESCRIPTION_CONTEXT",
    "TOOLTIP_ARGUMENT",
    "ActiveRuleResolution",
    "Argument",
    "ModifierFailure",
    "ModifierOutcome",
    "Resolution",
    "ResolvedModifier",
    "ResolvedRequirement",
    "ResolvedRequirementSet",
    "RuleEntry",
]
