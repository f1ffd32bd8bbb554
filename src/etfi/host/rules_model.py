"""
ETFI Active Rules Model

The host keeps a model of the player's active policies. It may need a
refresh() before its list is current; providers without one are read as-is.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol, Sequence, runtime_checkable

from ..models import ActiveRule


@runtime_checkable
class ActiveRulesProvider(Protocol):
    """Protocol for the host's active-policy model."""

    @property
    def active_rules(self) -> Sequence[ActiveRule]:
        ...


@dataclass
class StaticRulesModel:
    """
    Active rules provider over a fixed list.

    refresh() is idempotent; it only counts calls so callers can check that
    a fresh snapshot was requested.
    """
    rules: list[ActiveRule] = field(default_factory=list)
    refresh_count: int = 0

    def refresh(self) -> None:
        self.refresh_count += 1

    @property
    def active_rules(self) -> Sequence[ActiveRule]:
        return tuple(self.rules)
