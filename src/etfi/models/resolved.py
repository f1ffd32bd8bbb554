"""
ETFI Resolved Models

The joined, fully expanded view of a modifier and the policies that grant it.

Key components:
- Resolution: Result-style wrapper returned by every resolution step
- ResolvedRequirementSet / ResolvedRequirement: an expanded requirement set
- ResolvedModifier: a modifier with its effect type, requirement sets,
  arguments and description
- ModifierFailure: placeholder kept in an entry when a modifier id did not
  resolve, so ids and modifiers stay aligned
- RuleEntry / ActiveRuleResolution: per-rule aggregation result

All objects are built fresh on each call and never cached.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Generic, Optional, TypeVar, Union

from .enums import ResolutionStatus
from .rows import EffectTypeDefinition, ModifierRow

T = TypeVar("T")

TOOLTIP_ARGUMENT = "Tooltip"
DESCRIPTION_CONTEXT = "Description"


# =============================================================================
# Resolution Result
# =============================================================================

@dataclass(frozen=True)
class Resolution(Generic[T]):
    """
    Outcome of one resolution step.

    Either carries a value (status RESOLVED) or a status explaining why there
    is none. Callers that only need the value use `unwrap()`.
    """
    status: ResolutionStatus
    value: Optional[T] = None
    reason: Optional[str] = None

    @classmethod
    def resolved(cls, value: T) -> "Resolution[T]":
        return cls(status=ResolutionStatus.RESOLVED, value=value)

    @classmethod
    def failed(cls, status: ResolutionStatus, reason: str) -> "Resolution[T]":
        return cls(status=status, reason=reason)

    @property
    def ok(self) -> bool:
        return self.status == ResolutionStatus.RESOLVED

    def unwrap(self) -> Optional[T]:
        """Return the value, or None when resolution failed."""
        return self.value if self.ok else None


# =============================================================================
# Requirements
# =============================================================================

@dataclass(frozen=True)
class Argument:
    """A name/value argument attached to a modifier or requirement."""
    name: str
    value: Any = None

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "value": self.value}


@dataclass(frozen=True)
class ResolvedRequirement:
    requirement_id: str
    requirement_type: Optional[str]
    arguments: tuple[Argument, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "requirement_id": self.requirement_id,
            "requirement_type": self.requirement_type,
            "arguments": [a.to_dict() for a in self.arguments],
        }


@dataclass(frozen=True)
class ResolvedRequirementSet:
    """
    A requirement set with its requirements expanded.

    Requirements that failed to resolve are left out; an empty tuple is a
    valid set.
    """
    requirement_set_id: str
    requirement_set_type: Optional[str]
    requirements: tuple[ResolvedRequirement, ...] = ()

    def requirement_types(self) -> list[str]:
        return [r.requirement_type for r in self.requirements if r.requirement_type]

    def to_dict(self) -> dict[str, Any]:
        return {
            "requirement_set_id": self.requirement_set_id,
            "requirement_set_type": self.requirement_set_type,
            "requirements": [r.to_dict() for r in self.requirements],
        }


# =============================================================================
# Modifiers
# =============================================================================

@dataclass(frozen=True)
class ResolvedModifier:
    """
    A modifier joined with everything it references.

    Attributes:
        base: Row from the Modifiers table
        effect_type: Matching DynamicModifiers row, None if missing
        subject_requirement_set: Expanded subject set, None if absent
        owner_requirement_set: Expanded owner set, None if absent
        arguments: ModifierArguments rows for this modifier
        description_tag: Localization tag of the "Description" string
        description_text: Composed description, None if composition failed
    """
    base: ModifierRow
    effect_type: Optional[EffectTypeDefinition] = None
    subject_requirement_set: Optional[ResolvedRequirementSet] = None
    owner_requirement_set: Optional[ResolvedRequirementSet] = None
    arguments: tuple[Argument, ...] = ()
    description_tag: Optional[str] = None
    description_text: Optional[str] = None

    @property
    def modifier_id(self) -> str:
        return self.base.modifier_id

    def get_argument(self, name: str) -> Optional[Argument]:
        """First argument with the given name."""
        for arg in self.arguments:
            if arg.name == name:
                return arg
        return None

    def to_dict(self) -> dict[str, Any]:
        effect = self.effect_type
        return {
            "modifier_id": self.base.modifier_id,
            "modifier_type": self.base.modifier_type,
            "effect_type": None if effect is None else {
                "modifier_type": effect.modifier_type,
                "collection_type": effect.collection_type,
                "effect_type": effect.effect_type,
            },
            "subject_requirement_set": (
                self.subject_requirement_set.to_dict() if self.subject_requirement_set else None
            ),
            "owner_requirement_set": (
                self.owner_requirement_set.to_dict() if self.owner_requirement_set else None
            ),
            "arguments": [a.to_dict() for a in self.arguments],
            "description_tag": self.description_tag,
            "description_text": self.description_text,
        }


@dataclass(frozen=True)
class ModifierFailure:
    """Stand-in for a linked modifier id that could not be resolved."""
    id: str
    error: str = "Modifier not found or failed to resolve"

    def to_dict(self) -> dict[str, Any]:
        return {"error": self.error, "id": self.id}


ModifierOutcome = Union[ResolvedModifier, ModifierFailure]


# =============================================================================
# Aggregation
# =============================================================================

@dataclass(frozen=True)
class RuleEntry:
    """
    One active rule and everything it grants.

    `modifier_ids` and `modifiers` are parallel: modifiers[i] is the
    resolution of modifier_ids[i].
    """
    rule_id: str
    name_tag: Optional[str]
    localized_name: Optional[str]
    modifier_ids: tuple[str, ...] = ()
    modifiers: tuple[ModifierOutcome, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "rule_id": self.rule_id,
            "name_tag": self.name_tag,
            "localized_name": self.localized_name,
            "modifier_ids": list(self.modifier_ids),
            "modifiers": [m.to_dict() for m in self.modifiers],
        }


@dataclass(frozen=True)
class ActiveRuleResolution:
    """Aggregated resolution over the whole active-rule snapshot."""
    active_rule_count: int = 0
    entries: tuple[RuleEntry, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict[str, Any]:
        return {
            "active_rule_count": self.active_rule_count,
            "entries": [e.to_dict() for e in self.entries],
        }
