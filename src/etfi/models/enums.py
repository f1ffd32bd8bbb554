"""
ETFI Enumerations

All enums inherit from (str, Enum) for JSON serialization compatibility.
"""
from __future__ import annotations

from enum import Enum


class ResolutionStatus(str, Enum):
    """Outcome of a single resolution step."""
    RESOLVED = "resolved"
    MISSING_ID = "missing_id"                # No id was supplied
    TABLE_UNAVAILABLE = "table_unavailable"  # A required host table is absent
    NOT_FOUND = "not_found"                  # The id has no matching base row


class TownFocus(str, Enum):
    """Town focus projects with an improvement breakdown."""
    FOOD = "food"
    PRODUCTION = "production"


class AgeType(str, Enum):
    """Game ages that scale town focus yields."""
    ANTIQUITY = "AGE_ANTIQUITY"
    EXPLORATION = "AGE_EXPLORATION"
    MODERN = "AGE_MODERN"
