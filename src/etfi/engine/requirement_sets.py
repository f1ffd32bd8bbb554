"""
ETFI Requirement Set Resolver

Expands a RequirementSetId into the set row, its requirements, and each
requirement's arguments.

Resolution never raises:
- no id, or a missing RequirementSets / RequirementSetRequirements /
  Requirements table -> no set
- an id with no RequirementSets row -> diagnostic, no set
- a join row whose requirement is missing -> diagnostic, that requirement is
  left out and its siblings still resolve
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from ..host import GameTables
from ..models import (
    Argument,
    RequirementRow,
    RequirementSetLink,
    Resolution,
    ResolutionStatus,
    ResolvedRequirement,
    ResolvedRequirementSet,
)

logger = logging.getLogger(__name__)


@dataclass
class RequirementSetResolver:
    """
    Resolves requirement sets against the host tables.

    Usage:
        resolver = RequirementSetResolver(tables)
        req_set = resolver.resolve_requirement_set("REQSET_CITY_IS_TOWN")
    """
    tables: GameTables

    def resolve(self, requirement_set_id: Optional[str]) -> Resolution[ResolvedRequirementSet]:
        """
        Resolve a requirement set, reporting why resolution failed.

        Args:
            requirement_set_id: RequirementSetId to expand

        Returns:
            Resolution holding the expanded set when status is RESOLVED
        """
        if not requirement_set_id:
            return Resolution.failed(ResolutionStatus.MISSING_ID, "No requirement set id")

        tables = self.tables
        if (
            tables.requirement_sets is None
            or tables.requirement_set_requirements is None
            or tables.requirements is None
        ):
            return Resolution.failed(
                ResolutionStatus.TABLE_UNAVAILABLE,
                "Requirement set tables are not available",
            )

        set_row = tables.requirement_sets.find_first(
            lambda rs: rs.requirement_set_id == requirement_set_id
        )
        if set_row is None:
            logger.warning(
                "RequirementSet not found: %s",
                requirement_set_id,
                extra={"requirement_set_id": requirement_set_id},
            )
            return Resolution.failed(
                ResolutionStatus.NOT_FOUND,
                f"RequirementSet not found: {requirement_set_id}",
            )

        links = tables.requirement_set_requirements.find_all(
            lambda link: link.requirement_set_id == requirement_set_id
        )

        requirements = []
        for link in links:
            resolved = self._resolve_requirement(link)
            if resolved.ok:
                requirements.append(resolved.value)

        return Resolution.resolved(
            ResolvedRequirementSet(
                requirement_set_id=set_row.requirement_set_id,
                requirement_set_type=set_row.requirement_set_type,
                requirements=tuple(requirements),
            )
        )

    def resolve_requirement_set(
        self, requirement_set_id: Optional[str]
    ) -> Optional[ResolvedRequirementSet]:
        """Resolve a requirement set, or None if it cannot be resolved."""
        return self.resolve(requirement_set_id).unwrap()

    def _resolve_requirement(self, link: RequirementSetLink) -> Resolution[ResolvedRequirement]:
        requirement_id = link.requirement_id
        row: Optional[RequirementRow] = None
        if requirement_id:
            row = self.tables.requirements.find_first(
                lambda r: r.requirement_id == requirement_id
            )

        if row is None:
            logger.warning(
                "Requirement row not found for RequirementSet link: %s -> %s",
                link.requirement_set_id,
                requirement_id,
                extra={
                    "requirement_set_id": link.requirement_set_id,
                    "requirement_id": requirement_id,
                },
            )
            return Resolution.failed(
                ResolutionStatus.NOT_FOUND,
                f"Requirement not found: {requirement_id}",
            )

        return Resolution.resolved(
            ResolvedRequirement(
                requirement_id=row.requirement_id,
                requirement_type=row.requirement_type,
                arguments=self._arguments_for(row.requirement_id),
            )
        )

    def _arguments_for(self, requirement_id: str) -> tuple[Argument, ...]:
        table = self.tables.requirement_arguments
        if table is None:
            return ()
        return tuple(
            Argument(name=a.name, value=a.value)
            for a in table.find_all(lambda a: a.requirement_id == requirement_id)
        )
