"""
ETFI CLI

Command-line access to the resolution engine over a game data snapshot.

Usage:
    etfi labels --data snapshot.yaml
    etfi resolve --data snapshot.yaml
    etfi modifier MOD_TRADITION_TOWN_GOLD --data snapshot.yaml
    etfi requirement-set REQSET_CITY_IS_TOWN --data snapshot.yaml
    etfi validate --data snapshot.yaml
    etfi bonus-yields --data snapshot.yaml
    etfi serve --data snapshot.yaml --port 8000

--data defaults to $ETFI_DATA_PATH.

Exit Codes:
    0   OK                - Command succeeded
    3   NOT_FOUND         - Requested modifier / requirement set not found
    10  INPUT_INVALID     - Snapshot missing, unreadable or invalid
    11  CONFIG_ERROR      - Invalid ETFI_* environment variable
    20  INTERNAL_ERROR    - Unexpected internal error
"""
from __future__ import annotations

import argparse
import json
import logging
import sys
from enum import IntEnum
from pathlib import Path
from typing import Any, Optional, Sequence

from .config import Settings
from .engine import ModifierResolver, PolicyModifierAggregator, RequirementSetResolver
from .exceptions import (
    ConfigurationError,
    EtfiError,
    ModifierNotFoundError,
    RequirementSetNotFoundError,
    SnapshotLoadError,
)
from .logging_setup import configure_logging
from .packs import GameDataLoader, GameSnapshot
from .render import render_bonus_yields_html

logger = logging.getLogger(__name__)


class ExitCode(IntEnum):
    OK = 0
    NOT_FOUND = 3
    INPUT_INVALID = 10
    CONFIG_ERROR = 11
    INTERNAL_ERROR = 20


def _print_json(payload: Any) -> None:
    print(json.dumps(payload, indent=2, default=str))


def _load(args: argparse.Namespace) -> GameSnapshot:
    settings: Settings = args.settings
    path: Optional[Path] = Path(args.data) if args.data else settings.data_path
    if path is None:
        raise SnapshotLoadError(
            message="No snapshot given: pass --data or set ETFI_DATA_PATH",
        )
    return GameDataLoader(strict_version=settings.strict_version).load(path)


# =============================================================================
# Commands
# =============================================================================

def cmd_labels(args: argparse.Namespace) -> int:
    """Print the Bonus Yields labels for the active rules."""
    snapshot = _load(args)
    labels = PolicyModifierAggregator.from_snapshot(snapshot).get_display_labels_for_active_rule_modifiers()
    if args.json:
        _print_json(labels)
    else:
        for label in labels:
            print(label)
    return ExitCode.OK


def cmd_resolve(args: argparse.Namespace) -> int:
    """Print the full structured resolution as JSON."""
    snapshot = _load(args)
    resolution = PolicyModifierAggregator.from_snapshot(snapshot).get_resolved_modifiers_for_active_rules()
    _print_json(resolution.to_dict())
    return ExitCode.OK


def cmd_modifier(args: argparse.Namespace) -> int:
    snapshot = _load(args)
    resolution = ModifierResolver(snapshot.tables, composer=snapshot.locale).resolve(args.modifier_id)
    if not resolution.ok:
        raise ModifierNotFoundError(
            message=resolution.reason or "Modifier not found",
            details={"status": resolution.status.value},
            subject_id=args.modifier_id,
        )
    _print_json(resolution.value.to_dict())
    return ExitCode.OK


def cmd_requirement_set(args: argparse.Namespace) -> int:
    snapshot = _load(args)
    resolution = RequirementSetResolver(snapshot.tables).resolve(args.set_id)
    if not resolution.ok:
        raise RequirementSetNotFoundError(
            message=resolution.reason or "Requirement set not found",
            details={"status": resolution.status.value},
            subject_id=args.set_id,
        )
    _print_json(resolution.value.to_dict())
    return ExitCode.OK


def cmd_validate(args: argparse.Namespace) -> int:
    """Validate a snapshot and print what it contains."""
    snapshot = _load(args)
    _print_json({
        "valid": True,
        "schema_version": snapshot.schema_version,
        "active_rules": len(snapshot.rules_model.rules),
        "tables": snapshot.tables.row_counts(),
        "locale_entries": len(snapshot.locale),
    })
    return ExitCode.OK


def cmd_bonus_yields(args: argparse.Namespace) -> int:
    snapshot = _load(args)
    labels = PolicyModifierAggregator.from_snapshot(snapshot).get_display_labels_for_active_rule_modifiers()
    print(render_bonus_yields_html(labels, snapshot.locale))
    return ExitCode.OK


def cmd_serve(args: argparse.Namespace) -> int:
    """Serve the HTTP API over a snapshot."""
    import uvicorn

    from .api import create_app

    app = create_app(_load(args), args.settings)
    uvicorn.run(app, host=args.host, port=args.port)
    return ExitCode.OK


# =============================================================================
# Entry Point
# =============================================================================

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="etfi",
        description="ETFI - resolve active policy modifiers into town focus labels",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Exit Codes:
  0   OK              Command succeeded
  3   NOT_FOUND       Modifier / requirement set not found
  10  INPUT_INVALID   Snapshot missing, unreadable or invalid
  11  CONFIG_ERROR    Invalid ETFI_* environment variable
  20  INTERNAL_ERROR  Unexpected internal error
        """,
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    def add_command(name: str, func, help_text: str) -> argparse.ArgumentParser:
        sub = subparsers.add_parser(name, help=help_text)
        sub.add_argument("--data", "-d", help="Game data snapshot (YAML or JSON)")
        sub.set_defaults(func=func)
        return sub

    labels_parser = add_command("labels", cmd_labels, "List Bonus Yields labels")
    labels_parser.add_argument("--json", action="store_true", help="Print labels as a JSON array")

    add_command("resolve", cmd_resolve, "Resolve all modifiers of the active rules")

    modifier_parser = add_command("modifier", cmd_modifier, "Resolve one modifier")
    modifier_parser.add_argument("modifier_id", help="ModifierId to resolve")

    set_parser = add_command("requirement-set", cmd_requirement_set, "Resolve one requirement set")
    set_parser.add_argument("set_id", help="RequirementSetId to resolve")

    add_command("validate", cmd_validate, "Validate a snapshot")
    add_command("bonus-yields", cmd_bonus_yields, "Render the Bonus Yields HTML fragment")

    serve_parser = add_command("serve", cmd_serve, "Serve the HTTP API")
    serve_parser.add_argument("--host", default="127.0.0.1")
    serve_parser.add_argument("--port", type=int, default=8000)

    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    try:
        args.settings = Settings.from_env()
    except ConfigurationError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return ExitCode.CONFIG_ERROR
    configure_logging(args.settings)

    try:
        return int(args.func(args))
    except (ModifierNotFoundError, RequirementSetNotFoundError) as e:
        print(f"Not found: {e}", file=sys.stderr)
        return ExitCode.NOT_FOUND
    except ConfigurationError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return ExitCode.CONFIG_ERROR
    except EtfiError as e:
        print(f"Invalid snapshot: {e}", file=sys.stderr)
        return ExitCode.INPUT_INVALID
    except Exception as e:
        logger.exception("Unexpected error")
        print(f"Unexpected error: {e}", file=sys.stderr)
        return ExitCode.INTERNAL_ERROR


if __name__ == "__main__":
    sys.exit(main())
