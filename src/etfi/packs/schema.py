"""
ETFI Game Data Snapshot Schemas

Pydantic models for validating game data snapshots (YAML/JSON).

A snapshot is a frozen copy of the host state the engine reads: the active
policies, the GameInfo tables it joins over, and the localization strings.
The row schemas are also where host key-casing variants are normalized
(ModifierId / ModifierID, RequirementId / requirementId, ...), so nothing
downstream has to check more than one spelling.

Schema versioning:
- schema_version field tracks breaking changes
- Loaders check major version compatibility
"""
from __future__ import annotations

from typing import Any, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator, model_validator


# =============================================================================
# Schema Version
# =============================================================================

SCHEMA_VERSION = "1.0.0"


def _aliases(*names: str) -> AliasChoices:
    return AliasChoices(*names)


class _RowSchema(BaseModel):
    """Host rows carry many columns the engine does not read."""
    model_config = ConfigDict(extra="ignore", populate_by_name=True, frozen=True)

    @model_validator(mode="before")
    @classmethod
    def drop_null_columns(cls, data: Any) -> Any:
        """A null column never shadows another casing of the same key."""
        if isinstance(data, dict):
            return {k: v for k, v in data.items() if v is not None}
        return data


# =============================================================================
# Rule Schemas
# =============================================================================

class ActiveRuleSchema(_RowSchema):
    """An active policy row from the host rules model."""
    rule_id: Optional[str] = Field(
        None, validation_alias=_aliases("TraditionType", "Tradition", "RuleType", "RuleId", "rule_id")
    )
    name_tag: Optional[str] = Field(
        None, validation_alias=_aliases("Name", "NameTag", "TraditionNameTag", "name_tag")
    )
    localized_name: Optional[str] = Field(
        None, validation_alias=_aliases("LocalizedName", "localizedName", "localized_name")
    )


class RuleModifierLinkSchema(_RowSchema):
    """TraditionModifiers row."""
    rule_id: str = Field(
        ..., validation_alias=_aliases("TraditionType", "Tradition", "RuleType", "RuleId", "rule_id")
    )
    modifier_id: Optional[str] = Field(
        None, validation_alias=_aliases("ModifierId", "ModifierID", "modifier_id")
    )


# =============================================================================
# Modifier Schemas
# =============================================================================

class ModifierSchema(_RowSchema):
    """Modifiers row."""
    modifier_id: str = Field(..., validation_alias=_aliases("ModifierId", "ModifierID", "modifier_id"))
    modifier_type: Optional[str] = Field(
        None, validation_alias=_aliases("ModifierType", "modifier_type")
    )
    subject_requirement_set_id: Optional[str] = Field(
        None,
        validation_alias=_aliases(
            "SubjectRequirementSetId",
            "SubjectRequirementSetID",
            "SubjectRequirementSet",
            "subject_requirement_set_id",
        ),
    )
    owner_requirement_set_id: Optional[str] = Field(
        None,
        validation_alias=_aliases(
            "OwnerRequirementSetId",
            "OwnerRequirementSetID",
            "OwnerRequirementSet",
            "owner_requirement_set_id",
        ),
    )
    run_once: bool = Field(False, validation_alias=_aliases("RunOnce", "run_once"))
    permanent: bool = Field(False, validation_alias=_aliases("Permanent", "permanent"))


class DynamicModifierSchema(_RowSchema):
    """DynamicModifiers row (effect type definition)."""
    modifier_type: str = Field(..., validation_alias=_aliases("ModifierType", "modifier_type"))
    collection_type: Optional[str] = Field(
        None, validation_alias=_aliases("CollectionType", "collection_type")
    )
    effect_type: Optional[str] = Field(None, validation_alias=_aliases("EffectType", "effect_type"))


class ModifierArgumentSchema(_RowSchema):
    """ModifierArguments row."""
    modifier_id: str = Field(..., validation_alias=_aliases("ModifierId", "ModifierID", "modifier_id"))
    name: str = Field(..., validation_alias=_aliases("Name", "name"))
    value: Any = Field(None, validation_alias=_aliases("Value", "value"))


class ModifierStringSchema(_RowSchema):
    """ModifierStrings row."""
    modifier_id: str = Field(..., validation_alias=_aliases("ModifierId", "ModifierID", "modifier_id"))
    context: Optional[str] = Field(None, validation_alias=_aliases("Context", "context"))
    text: Optional[str] = Field(None, validation_alias=_aliases("Text", "String", "text"))


# =============================================================================
# Requirement Schemas
# =============================================================================

class RequirementSetSchema(_RowSchema):
    """RequirementSets row."""
    requirement_set_id: str = Field(
        ..., validation_alias=_aliases("RequirementSetId", "RequirementSetID", "requirement_set_id")
    )
    requirement_set_type: Optional[str] = Field(
        None, validation_alias=_aliases("RequirementSetType", "requirement_set_type")
    )


class RequirementSetRequirementSchema(_RowSchema):
    """RequirementSetRequirements row."""
    requirement_set_id: str = Field(
        ..., validation_alias=_aliases("RequirementSetId", "RequirementSetID", "requirement_set_id")
    )
    requirement_id: Optional[str] = Field(
        None,
        validation_alias=_aliases("RequirementId", "requirementId", "RequirementID", "requirement_id"),
    )


class RequirementSchema(_RowSchema):
    """Requirements row."""
    requirement_id: str = Field(
        ...,
        validation_alias=_aliases("RequirementId", "requirementId", "RequirementID", "requirement_id"),
    )
    requirement_type: Optional[str] = Field(
        None, validation_alias=_aliases("RequirementType", "requirement_type")
    )
    inverse: bool = Field(False, validation_alias=_aliases("Inverse", "inverse"))


class RequirementArgumentSchema(_RowSchema):
    """RequirementArguments row."""
    requirement_id: str = Field(
        ...,
        validation_alias=_aliases("RequirementId", "requirementId", "RequirementID", "requirement_id"),
    )
    name: str = Field(..., validation_alias=_aliases("Name", "name"))
    value: Any = Field(None, validation_alias=_aliases("Value", "value"))


# Host table name -> row schema
TABLE_ROW_SCHEMAS: dict[str, type[_RowSchema]] = {
    "TraditionModifiers": RuleModifierLinkSchema,
    "Modifiers": ModifierSchema,
    "DynamicModifiers": DynamicModifierSchema,
    "RequirementSets": RequirementSetSchema,
    "RequirementSetRequirements": RequirementSetRequirementSchema,
    "Requirements": RequirementSchema,
    "RequirementArguments": RequirementArgumentSchema,
    "ModifierArguments": ModifierArgumentSchema,
    "ModifierStrings": ModifierStringSchema,
}


# =============================================================================
# City Schemas
# =============================================================================

class ImprovementInstanceSchema(_RowSchema):
    """An improvement placed in the selected city."""
    logical_type: str = Field(
        ...,
        validation_alias=_aliases("FreeConstructibleType", "LogicalType", "logical_type"),
        description="Type after warehouse/free constructible mapping",
    )
    instance_type: Optional[str] = Field(
        None, validation_alias=_aliases("ConstructibleType", "InstanceType", "instance_type")
    )
    name: Optional[str] = Field(None, validation_alias=_aliases("Name", "name"))


# =============================================================================
# Snapshot Schema
# =============================================================================

class GameSnapshotSchema(BaseModel):
    """
    Complete game data snapshot.

    `tables` maps host table names to rows. A table missing from the mapping
    is absent from the host; an empty list is a present but empty table.
    Rows are validated against TABLE_ROW_SCHEMAS by the loader.
    """
    schema_version: str = Field(SCHEMA_VERSION, description="Snapshot schema version")
    active_rules: list[ActiveRuleSchema] = Field(default_factory=list)
    tables: dict[str, Optional[list[dict[str, Any]]]] = Field(default_factory=dict)
    locale: dict[str, str] = Field(default_factory=dict)
    current_age: Optional[str] = Field(None, description="AgeType of the current game age")
    city_improvements: list[ImprovementInstanceSchema] = Field(default_factory=list)

    @field_validator("tables")
    @classmethod
    def validate_table_names(cls, v: dict[str, Any]) -> dict[str, Any]:
        """Reject table names the engine does not know about."""
        unknown = sorted(set(v) - set(TABLE_ROW_SCHEMAS))
        if unknown:
            raise ValueError(f"Unknown tables: {', '.join(unknown)}")
        return v

    model_config = {
        "extra": "forbid",
    }


# =============================================================================
# Validation Helpers
# =============================================================================

def validate_snapshot(data: dict[str, Any]) -> GameSnapshotSchema:
    """
    Validate a snapshot dictionary against the schema.

    Raises:
        pydantic.ValidationError: If validation fails
    """
    return GameSnapshotSchema.model_validate(data)


def check_schema_version(data: dict[str, Any]) -> bool:
    """True if the snapshot's major schema version matches ours."""
    snapshot_version = str(data.get("schema_version", SCHEMA_VERSION))
    return snapshot_version.split(".")[0] == SCHEMA_VERSION.split(".")[0]
