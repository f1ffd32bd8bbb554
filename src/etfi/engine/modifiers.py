"""
ETFI Modifier Resolver

Rebuilds the full picture of one modifier from the host tables:

- Modifiers row (base definition)
- DynamicModifiers row matching its ModifierType (effect type)
- Subject and owner requirement sets, expanded
- ModifierArguments rows
- "Description" string from ModifierStrings, composed when possible

Only a missing id, a missing Modifiers table or an unknown modifier id stop
resolution. A missing effect type is logged and left as None.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional

from ..host import GameTables, TextComposer, compose_text
from ..models import (
    DESCRIPTION_CONTEXT,
    Argument,
    EffectTypeDefinition,
    ModifierRow,
    Resolution,
    ResolutionStatus,
    ResolvedModifier,
)
from .requirement_sets import RequirementSetResolver

logger = logging.getLogger(__name__)


@dataclass
class ModifierResolver:
    """
    Resolves modifiers by id.

    Usage:
        resolver = ModifierResolver(tables, composer=locale)
        modifier = resolver.resolve_modifier_by_id("MOD_TRADITION_TOWN_GOLD")
        if modifier and modifier.subject_requirement_set:
            ...
    """
    tables: GameTables
    composer: Optional[TextComposer] = None
    requirement_sets: RequirementSetResolver = field(init=False)

    def __post_init__(self) -> None:
        self.requirement_sets = RequirementSetResolver(self.tables)

    def resolve(self, modifier_id: Optional[str]) -> Resolution[ResolvedModifier]:
        """
        Resolve a modifier, reporting why resolution failed.

        Args:
            modifier_id: ModifierId to expand

        Returns:
            Resolution holding the ResolvedModifier when status is RESOLVED
        """
        if not modifier_id:
            return Resolution.failed(ResolutionStatus.MISSING_ID, "No modifier id")

        if self.tables.modifiers is None:
            return Resolution.failed(
                ResolutionStatus.TABLE_UNAVAILABLE,
                "Modifiers table is not available",
            )

        base = self.tables.modifiers.find_first(lambda m: m.modifier_id == modifier_id)
        if base is None:
            logger.warning(
                "Modifier not found in Modifiers table: %s",
                modifier_id,
                extra={"modifier_id": modifier_id},
            )
            return Resolution.failed(
                ResolutionStatus.NOT_FOUND,
                f"Modifier not found: {modifier_id}",
            )

        description_tag, description_text = self._resolve_description(modifier_id)

        return Resolution.resolved(
            ResolvedModifier(
                base=base,
                effect_type=self._resolve_effect_type(base),
                subject_requirement_set=self.requirement_sets.resolve_requirement_set(
                    base.subject_requirement_set_id
                ),
                owner_requirement_set=self.requirement_sets.resolve_requirement_set(
                    base.owner_requirement_set_id
                ),
                arguments=self._arguments_for(modifier_id),
                description_tag=description_tag,
                description_text=description_text,
            )
        )

    def resolve_modifier_by_id(self, modifier_id: Optional[str]) -> Optional[ResolvedModifier]:
        """Resolve a modifier, or None if it cannot be resolved."""
        return self.resolve(modifier_id).unwrap()

    # -------------------------------------------------------------------------
    # Internal lookups
    # -------------------------------------------------------------------------

    def _resolve_effect_type(self, base: ModifierRow) -> Optional[EffectTypeDefinition]:
        effect_type = None
        if self.tables.effect_types is not None:
            effect_type = self.tables.effect_types.find_first(
                lambda dm: dm.modifier_type == base.modifier_type
            )

        if effect_type is None:
            logger.warning(
                "DynamicModifier not found for ModifierType: %s (ModifierId=%s)",
                base.modifier_type,
                base.modifier_id,
                extra={"modifier_id": base.modifier_id},
            )
        return effect_type

    def _arguments_for(self, modifier_id: str) -> tuple[Argument, ...]:
        table = self.tables.modifier_arguments
        if table is None:
            return ()
        return tuple(
            Argument(name=a.name, value=a.value)
            for a in table.find_all(lambda a: a.modifier_id == modifier_id)
        )

    def _resolve_description(self, modifier_id: str) -> tuple[Optional[str], Optional[str]]:
        """Return (description_tag, description_text) for a modifier."""
        table = self.tables.modifier_strings
        if table is None:
            return None, None

        row = table.find_first(
            lambda ms: ms.modifier_id == modifier_id and ms.context == DESCRIPTION_CONTEXT
        )
        if row is None or not row.text:
            return None, None

        return row.text, compose_text(self.composer, row.text)
