"""
ETFI Configuration

Settings are read from ETFI_* environment variables:

    ETFI_LOG_LEVEL       log level for the "etfi" logger (default INFO)
    ETFI_LOG_FORMAT      "text" or "json" (default text)
    ETFI_DATA_PATH       default game data snapshot for the CLI and API
    ETFI_DOCS_ENABLED    expose OpenAPI docs in the HTTP API (default true)
    ETFI_STRICT_VERSION  reject snapshots with another major schema version
"""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from .exceptions import ConfigurationError

LOG_FORMATS = frozenset({"text", "json"})

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


def _parse_bool(name: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ConfigurationError(
        message=f"{name} must be a boolean, got {raw!r}",
        details={"variable": name, "value": raw},
    )


@dataclass(frozen=True)
class Settings:
    """Resolved runtime settings."""
    log_level: str = "INFO"
    log_format: str = "text"
    data_path: Optional[Path] = None
    docs_enabled: bool = True
    strict_version: bool = True

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """
        Build settings from environment variables.

        Args:
            environ: Mapping to read from (defaults to os.environ)

        Raises:
            ConfigurationError: If a variable holds an invalid value
        """
        env = os.environ if environ is None else environ

        log_level = env.get("ETFI_LOG_LEVEL", "INFO").strip().upper()
        if not isinstance(logging.getLevelName(log_level), int):
            raise ConfigurationError(
                message=f"Unknown log level: {log_level}",
                details={"variable": "ETFI_LOG_LEVEL", "value": log_level},
            )

        log_format = env.get("ETFI_LOG_FORMAT", "text").strip().lower()
        if log_format not in LOG_FORMATS:
            raise ConfigurationError(
                message=f"ETFI_LOG_FORMAT must be one of {sorted(LOG_FORMATS)}",
                details={"variable": "ETFI_LOG_FORMAT", "value": log_format},
            )

        data_path = env.get("ETFI_DATA_PATH")

        return cls(
            log_level=log_level,
            log_format=log_format,
            data_path=Path(data_path) if data_path else None,
            docs_enabled=_parse_bool("ETFI_DOCS_ENABLED", env.get("ETFI_DOCS_ENABLED", "true")),
            strict_version=_parse_bool("ETFI_STRICT_VERSION", env.get("ETFI_STRICT_VERSION", "true")),
        )
