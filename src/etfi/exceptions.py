"""
ETFI Exception Hierarchy

Exceptions raised at the edges of the package: configuration, snapshot
loading, and the CLI/API lookups. The resolution engine itself never raises
these; it degrades to empty data and logs a diagnostic instead.

Exception codes follow the pattern: ETFI_<CATEGORY>_<SPECIFIC>
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional


@dataclass
class EtfiError(Exception):
    """
    Base exception for all ETFI errors.

    Attributes:
        message: Human-readable error description
        code: Machine-readable error code (ETFI_*)
        details: Additional context about the error
        subject_id: Id of the row the error is about, if any
    """
    message: str
    code: str = "ETFI_INTERNAL_ERROR"
    details: dict[str, Any] = field(default_factory=dict)
    subject_id: Optional[str] = None

    def __post_init__(self) -> None:
        super().__init__(self.message)

    def __str__(self) -> str:
        parts = [f"[{self.code}] {self.message}"]
        if self.subject_id:
            parts.append(f"(id: {self.subject_id})")
        return " ".join(parts)

    def to_dict(self) -> dict[str, Any]:
        """Serialize exception for logging/API responses."""
        result: dict[str, Any] = {
            "code": self.code,
            "message": self.message,
        }
        if self.details:
            result["details"] = self.details
        if self.subject_id:
            result["subject_id"] = self.subject_id
        return result


# =============================================================================
# Configuration Errors
# =============================================================================

@dataclass
class ConfigurationError(EtfiError):
    """An ETFI_* environment variable holds an unusable value."""
    code: str = "ETFI_CONFIG_ERROR"


# =============================================================================
# Snapshot Errors
# =============================================================================

@dataclass
class SnapshotLoadError(EtfiError):
    """Failed to read a game data snapshot file."""
    code: str = "ETFI_SNAPSHOT_LOAD_ERROR"


@dataclass
class SnapshotValidationError(EtfiError):
    """Snapshot contents do not match the expected shape."""
    code: str = "ETFI_SNAPSHOT_VALIDATION_ERROR"


@dataclass
class SnapshotVersionMismatch(EtfiError):
    """Snapshot schema version is not compatible with this package."""
    code: str = "ETFI_SNAPSHOT_VERSION_MISMATCH"


# =============================================================================
# Lookup Errors
# =============================================================================

@dataclass
class ModifierNotFoundError(EtfiError):
    """Requested modifier could not be resolved."""
    code: str = "ETFI_MODIFIER_NOT_FOUND"


@dataclass
class RequirementSetNotFoundError(EtfiError):
    """Requested requirement set could not be resolved."""
    code: str = "ETFI_REQUIREMENT_SET_NOT_FOUND"
