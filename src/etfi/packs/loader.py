"""
ETFI Game Data Loader

Loads game data snapshots from YAML or JSON files and turns them into the
host interfaces the engine consumes (GameTables, a rules model and a locale).

Converts Pydantic schema models to ETFI row dataclasses.
"""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping, Optional, Sequence, Union

import yaml
from pydantic import ValidationError

from ..exceptions import SnapshotLoadError, SnapshotValidationError, SnapshotVersionMismatch
from ..host import TABLE_NAMES, GameTables, LocaleTable, StaticRulesModel, Table
from ..improvements import ImprovementInstance
from ..models import (
    ActiveRule,
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
from .schema import (
    SCHEMA_VERSION,
    TABLE_ROW_SCHEMAS,
    ActiveRuleSchema,
    GameSnapshotSchema,
    check_schema_version,
    validate_snapshot,
)

logger = logging.getLogger(__name__)

# Host table name -> row dataclass
_ROW_TYPES: dict[str, type] = {
    "TraditionModifiers": RuleModifierLink,
    "Modifiers": ModifierRow,
    "DynamicModifiers": EffectTypeDefinition,
    "RequirementSets": RequirementSetRow,
    "RequirementSetRequirements": RequirementSetLink,
    "Requirements": RequirementRow,
    "RequirementArguments": RequirementArgument,
    "ModifierArguments": ModifierArgument,
    "ModifierStrings": ModifierDisplayString,
}


# =============================================================================
# Snapshot
# =============================================================================

@dataclass
class GameSnapshot:
    """Everything the engine and its peripheral helpers read from the host."""
    tables: GameTables
    rules_model: StaticRulesModel = field(default_factory=StaticRulesModel)
    locale: LocaleTable = field(default_factory=LocaleTable)
    current_age: Optional[str] = None
    city_improvements: tuple[ImprovementInstance, ...] = ()
    schema_version: str = SCHEMA_VERSION


# =============================================================================
# Schema to Model Converters
# =============================================================================

def _convert_rows(host_name: str, rows: Sequence[Mapping[str, Any]]) -> Table:
    """
    Validate raw host rows and convert them to row dataclasses.

    A row that does not match its schema is logged and dropped; the rest of
    the table still loads.
    """
    schema = TABLE_ROW_SCHEMAS[host_name]
    row_type = _ROW_TYPES[host_name]
    converted = []
    for index, raw in enumerate(rows):
        try:
            item = schema.model_validate(raw)
        except ValidationError as e:
            logger.warning(
                "Dropping invalid %s row %d: %s",
                host_name,
                index,
                "; ".join(err["msg"] for err in e.errors(include_url=False)),
            )
            continue
        converted.append(row_type(**item.model_dump()))
    return Table(host_name, converted)


def _convert_active_rule(schema: ActiveRuleSchema) -> ActiveRule:
    return ActiveRule(
        rule_id=schema.rule_id,
        name_tag=schema.name_tag,
        localized_name=schema.localized_name,
    )


def build_game_tables(mappings: Mapping[str, Optional[Sequence[Mapping[str, Any]]]]) -> GameTables:
    """
    Build GameTables from raw host rows keyed by host table name.

    Tables missing from `mappings` (or mapped to None) are absent. Rows
    that fail validation are dropped with a warning.

    Raises:
        KeyError: If a table name is unknown
    """
    tables: dict[str, Table] = {}
    for host_name, rows in mappings.items():
        if host_name not in TABLE_NAMES:
            raise KeyError(f"Unknown host table: {host_name}")
        if rows is None:
            continue
        tables[TABLE_NAMES[host_name]] = _convert_rows(host_name, rows)
    return GameTables(**tables)


def _convert_snapshot(schema: GameSnapshotSchema) -> GameSnapshot:
    return GameSnapshot(
        tables=build_game_tables(schema.tables),
        rules_model=StaticRulesModel(rules=[_convert_active_rule(r) for r in schema.active_rules]),
        locale=LocaleTable(schema.locale),
        current_age=schema.current_age,
        city_improvements=tuple(
            ImprovementInstance(
                logical_type=i.logical_type,
                instance_type=i.instance_type,
                name=i.name,
            )
            for i in schema.city_improvements
        ),
        schema_version=schema.schema_version,
    )


# =============================================================================
# Game Data Loader
# =============================================================================

class GameDataLoader:
    """
    Loads game data snapshots from YAML or JSON files.

    Usage:
        loader = GameDataLoader()
        snapshot = loader.load("path/to/snapshot.yaml")
    """

    def __init__(self, strict_version: bool = True):
        """
        Initialize the loader.

        Args:
            strict_version: If True, reject snapshots with another major
                schema version
        """
        self.strict_version = strict_version

    def load(self, path: Union[str, Path]) -> GameSnapshot:
        """
        Load a snapshot from a file.

        Raises:
            SnapshotLoadError: If the file cannot be read or parsed
            SnapshotValidationError: If validation fails
            SnapshotVersionMismatch: If the schema version is incompatible
        """
        path = Path(path)
        try:
            data = self._load_file(path)
        except Exception as e:
            raise SnapshotLoadError(
                message=f"Failed to load snapshot: {e}",
                details={"path": str(path), "error": str(e)},
            )
        return self.load_data(data, source=str(path))

    def load_data(self, data: Any, source: str = "<data>") -> GameSnapshot:
        """Validate and convert an already parsed snapshot."""
        if not isinstance(data, dict):
            raise SnapshotValidationError(
                message="Snapshot must be a mapping",
                details={"path": source, "type": type(data).__name__},
            )

        if self.strict_version and not check_schema_version(data):
            snapshot_version = data.get("schema_version", "unknown")
            raise SnapshotVersionMismatch(
                message=(
                    f"Schema version mismatch: snapshot has {snapshot_version}, "
                    f"expected {SCHEMA_VERSION}"
                ),
                details={
                    "snapshot_version": snapshot_version,
                    "expected_version": SCHEMA_VERSION,
                },
            )

        try:
            schema = validate_snapshot(data)
            return _convert_snapshot(schema)
        except ValidationError as e:
            raise SnapshotValidationError(
                message=f"Snapshot validation failed: {e.error_count()} errors",
                details={"errors": e.errors(include_url=False), "path": source},
            )

    def _load_file(self, path: Path) -> Any:
        """Load data from YAML or JSON file."""
        with open(path, "r", encoding="utf-8") as f:
            if path.suffix.lower() in {".yaml", ".yml"}:
                return yaml.safe_load(f)
            elif path.suffix.lower() == ".json":
                return json.load(f)
            else:
                content = f.read()
                try:
                    return yaml.safe_load(content)
                except yaml.YAMLError:
                    return json.loads(content)


# =============================================================================
# Convenience Functions
# =============================================================================

def load_snapshot(path: Union[str, Path], strict_version: bool = True) -> GameSnapshot:
    """Load a snapshot from a file with a temporary loader."""
    return GameDataLoader(strict_version=strict_version).load(path)


def load_snapshot_from_string(
    content: str,
    format: str = "yaml",
    strict_version: bool = True,
) -> GameSnapshot:
    """
    Load a snapshot from a string.

    Args:
        content: YAML or JSON string
        format: "yaml" or "json"
    """
    try:
        if format.lower() == "json":
            data = json.loads(content)
        else:
            data = yaml.safe_load(content)
    except (ValueError, yaml.YAMLError) as e:
        raise SnapshotLoadError(
            message=f"Failed to parse snapshot: {e}",
            details={"format": format, "error": str(e)},
        )
    return GameDataLoader(strict_version=strict_version).load_data(data, source=f"<{format}>")
