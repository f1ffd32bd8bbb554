"""
ETFI Host Interfaces

Boundary to the game host: tables, text composition, and the active-rules
model. The engine depends only on these interfaces.
"""
from __future__ import annotations

from .locale import LocaleTable, TextComposer, compose_or_raw, compose_text
from .rules_model import ActiveRulesProvider, StaticRulesModel
from .tables import TABLE_NAMES, GameTables, Table

__all__ = [
    "TABLE_NAMES",
    "ActiveRulesProvider",
    "GameTables",
    "LocaleTable",
    "StaticRulesModel",
    "Table",
    "TextComposer",
    "compose_or_raw",
    "compose_text",
]
