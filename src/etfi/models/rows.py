"""
ETFI Host Table Rows

Read-only views over the rows of the host game database. Every row type is a
frozen dataclass; key-casing variants in the host data (ModifierId vs
ModifierID and so on) are normalized before rows are built, so field names
here are the single canonical spelling.

Tables covered:
- TraditionModifiers         -> RuleModifierLink
- Modifiers                  -> ModifierRow
- DynamicModifiers           -> EffectTypeDefinition
- RequirementSets            -> RequirementSetRow
- RequirementSetRequirements -> RequirementSetLink
- Requirements               -> RequirementRow
- RequirementArguments       -> RequirementArgument
- ModifierArguments          -> ModifierArgument
- ModifierStrings            -> ModifierDisplayString
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional


# =============================================================================
# Rules
# =============================================================================

@dataclass(frozen=True)
class ActiveRule:
    """
    A currently active policy (tradition).

    Attributes:
        rule_id: Rule type identifier (e.g. "TRADITION_SALES_AND_TRADE")
        name_tag: Localization tag of the rule name
        localized_name: Display name already resolved by the host, if any
    """
    rule_id: Optional[str]
    name_tag: Optional[str] = None
    localized_name: Optional[str] = None


@dataclass(frozen=True)
class RuleModifierLink:
    """Join row linking a rule to a modifier it grants."""
    rule_id: str
    modifier_id: Optional[str] = None


# =============================================================================
# Modifiers
# =============================================================================

@dataclass(frozen=True)
class ModifierRow:
    """Base modifier definition."""
    modifier_id: str
    modifier_type: Optional[str] = None
    subject_requirement_set_id: Optional[str] = None
    owner_requirement_set_id: Optional[str] = None
    run_once: bool = False
    permanent: bool = False


@dataclass(frozen=True)
class EffectTypeDefinition:
    """Effect type a modifier type maps to (collection + effect)."""
    modifier_type: str
    collection_type: Optional[str] = None
    effect_type: Optional[str] = None


@dataclass(frozen=True)
class ModifierArgument:
    modifier_id: str
    name: str
    value: Any = None


@dataclass(frozen=True)
class ModifierDisplayString:
    modifier_id: str
    context: Optional[str] = None
    text: Optional[str] = None


# =============================================================================
# Requirements
# =============================================================================

@dataclass(frozen=True)
class RequirementSetRow:
    requirement_set_id: str
    requirement_set_type: Optional[str] = None


@dataclass(frozen=True)
class RequirementSetLink:
    requirement_set_id: str
    requirement_id: Optional[str] = None


@dataclass(frozen=True)
class RequirementRow:
    requirement_id: str
    requirement_type: Optional[str] = None
    inverse: bool = False


@dataclass(frozen=True)
class RequirementArgument:
    requirement_id: str
    name: str
    value: Any = None
