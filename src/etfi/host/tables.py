"""
ETFI Host Tables

Read-only, query-by-predicate access to the host game database.

The engine never reads global state: every table it needs is handed to it
through a GameTables instance. A table the host does not provide is None and
is treated as "no rows" by every consumer.
"""
from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Callable, Generic, Iterable, Iterator, Optional, TypeVar

from ..models import (
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

R = TypeVar("R")


class Table(Generic[R]):
    """
    An immutable sequence of rows from one host table.

    Usage:
        modifiers = Table("Modifiers", rows)
        row = modifiers.find_first(lambda m: m.modifier_id == "MOD_X")
    """

    def __init__(self, name: str, rows: Iterable[R] = ()):
        self.name = name
        self._rows: tuple[R, ...] = tuple(rows)

    def __iter__(self) -> Iterator[R]:
        return iter(self._rows)

    def __len__(self) -> int:
        return len(self._rows)

    def __repr__(self) -> str:
        return f"Table({self.name!r}, rows={len(self._rows)})"

    def find_all(self, predicate: Callable[[R], bool]) -> list[R]:
        """All rows matching predicate, in table order."""
        return [row for row in self._rows if predicate(row)]

    def find_first(self, predicate: Callable[[R], bool]) -> Optional[R]:
        """First row matching predicate, or None."""
        for row in self._rows:
            if predicate(row):
                return row
        return None


# Host table name -> GameTables attribute
TABLE_NAMES: dict[str, str] = {
    "TraditionModifiers": "rule_modifiers",
    "Modifiers": "modifiers",
    "DynamicModifiers": "effect_types",
    "RequirementSets": "requirement_sets",
    "RequirementSetRequirements": "requirement_set_requirements",
    "Requirements": "requirements",
    "RequirementArguments": "requirement_arguments",
    "ModifierArguments": "modifier_arguments",
    "ModifierStrings": "modifier_strings",
}


@dataclass(frozen=True)
class GameTables:
    """The set of host tables the resolution engine reads from."""
    rule_modifiers: Optional[Table[RuleModifierLink]] = None
    modifiers: Optional[Table[ModifierRow]] = None
    effect_types: Optional[Table[EffectTypeDefinition]] = None
    requirement_sets: Optional[Table[RequirementSetRow]] = None
    requirement_set_requirements: Optional[Table[RequirementSetLink]] = None
    requirements: Optional[Table[RequirementRow]] = None
    requirement_arguments: Optional[Table[RequirementArgument]] = None
    modifier_arguments: Optional[Table[ModifierArgument]] = None
    modifier_strings: Optional[Table[ModifierDisplayString]] = None

    def available(self) -> list[str]:
        """Host names of the tables that are present."""
        present = {f.name for f in fields(self) if getattr(self, f.name) is not None}
        return [host for host, attr in TABLE_NAMES.items() if attr in present]

    def row_counts(self) -> dict[str, int]:
        """Row count per present table, keyed by host table name."""
        return {
            host: len(getattr(self, attr))
            for host, attr in TABLE_NAMES.items()
            if getattr(self, attr) is not None
        }
