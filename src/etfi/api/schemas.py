"""Response schemas for the API."""

from typing import Any, Optional

from pydantic import BaseModel


class HealthResponse(BaseModel):
    status: str
    version: str
    schema_version: str
    active_rules: int
    tables: dict[str, int]


class LabelsResponse(BaseModel):
    """Bonus Yields labels for the active rules."""
    labels: list[str]


class ArgumentOut(BaseModel):
    name: str
    value: Any = None


class RequirementOut(BaseModel):
    requirement_id: str
    requirement_type: Optional[str] = None
    arguments: list[ArgumentOut] = []


class RequirementSetOut(BaseModel):
    requirement_set_id: str
    requirement_set_type: Optional[str] = None
    requirements: list[RequirementOut] = []


class EffectTypeOut(BaseModel):
    modifier_type: str
    collection_type: Optional[str] = None
    effect_type: Optional[str] = None


class ModifierOut(BaseModel):
    """A fully resolved modifier."""
    modifier_id: str
    modifier_type: Optional[str] = None
    effect_type: Optional[EffectTypeOut] = None
    subject_requirement_set: Optional[RequirementSetOut] = None
    owner_requirement_set: Optional[RequirementSetOut] = None
    arguments: list[ArgumentOut] = []
    description_tag: Optional[str] = None
    description_text: Optional[str] = None


class RuleEntryOut(BaseModel):
    rule_id: str
    name_tag: Optional[str] = None
    localized_name: Optional[str] = None
    modifier_ids: list[str] = []
    # Resolved modifiers, or {"error", "id"} for ids that did not resolve
    modifiers: list[dict[str, Any]] = []


class RulesResponse(BaseModel):
    active_rule_count: int
    entries: list[RuleEntryOut]


class ImprovementOut(BaseModel):
    constructible_type: str
    display_name: str
    count: int


class ImprovementsResponse(BaseModel):
    """Improvement breakdown for a town focus project."""
    focus: str
    yield_type: str
    current_age: Optional[str] = None
    multiplier: int
    base_count: int
    total: int
    items: list[ImprovementOut]
    html: Optional[str] = None
