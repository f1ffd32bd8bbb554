"""
ETFI Game Data Packs

Schema validation and loading for game data snapshots.

Usage:
    from etfi.packs import load_snapshot, GameDataLoader

    snapshot = load_snapshot("path/to/snapshot.yaml")
    snapshot.tables.modifiers.find_first(lambda m: m.modifier_id == "MOD_X")
"""
from __future__ import annotations

from .loader import (
    GameDataLoader,
    GameSnapshot,
    build_game_tables,
    load_snapshot,
    load_snapshot_from_string,
)
from .schema import (
    SCHEMA_VERSION,
    TABLE_ROW_SCHEMAS,
    ActiveRuleSchema,
    GameSnapshotSchema,
    ImprovementInstanceSchema,
    check_schema_version,
    validate_snapshot,
)

__all__ = [
    # Version
    "SCHEMA_VERSION",
    # Loader
    "GameDataLoader",
    "GameSnapshot",
    "build_game_tables",
    "load_snapshot",
    "load_snapshot_from_string",
    # Validation
    "validate_snapshot",
    "check_schema_version",
    # Schemas
    "TABLE_ROW_SCHEMAS",
    "ActiveRuleSchema",
    "GameSnapshotSchema",
    "ImprovementInstanceSchema",
]
