"""
ETFI Improvement Summary

Counts the improvements in a city that feed a town focus project (Farming
Town, Mining Town, ...) and scales the count by the current age.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Mapping, Optional

from .host import TextComposer, compose_or_raw
from .models import AgeType, TownFocus

IMPROVEMENT_DISPLAY_NAMES: dict[str, str] = {
    "IMPROVEMENT_WOODCUTTER": "LOC_MOD_ETFI_IMPROVEMENT_WOODCUTTER",
    "IMPROVEMENT_WOODCUTTER_RESOURCE": "LOC_MOD_ETFI_IMPROVEMENT_WOODCUTTER",
    "IMPROVEMENT_MINE": "LOC_MOD_ETFI_IMPROVEMENT_MINE",
    "IMPROVEMENT_MINE_RESOURCE": "LOC_MOD_ETFI_IMPROVEMENT_MINE",
    "IMPROVEMENT_FISHING_BOAT": "LOC_MOD_ETFI_IMPROVEMENT_FISHING_BOAT",
    "IMPROVEMENT_FISHING_BOAT_RESOURCE": "LOC_MOD_ETFI_IMPROVEMENT_FISHING_BOAT",
    "IMPROVEMENT_FARM": "LOC_MOD_ETFI_IMPROVEMENT_FARM",
    "IMPROVEMENT_PASTURE": "LOC_MOD_ETFI_IMPROVEMENT_PASTURE",
    "IMPROVEMENT_PLANTATION": "LOC_MOD_ETFI_IMPROVEMENT_PLANTATION",
    "IMPROVEMENT_CAMP": "LOC_MOD_ETFI_IMPROVEMENT_CAMP",
    "IMPROVEMENT_CLAY_PIT": "LOC_MOD_ETFI_IMPROVEMENT_CLAY_PIT",
    "IMPROVEMENT_QUARRY": "LOC_MOD_ETFI_IMPROVEMENT_QUARRY",
}

FOCUS_IMPROVEMENTS: dict[TownFocus, frozenset[str]] = {
    TownFocus.FOOD: frozenset({
        "IMPROVEMENT_FARM",
        "IMPROVEMENT_PASTURE",
        "IMPROVEMENT_PLANTATION",
        "IMPROVEMENT_FISHING_BOAT",
        "IMPROVEMENT_FISHING_BOAT_RESOURCE",
    }),
    TownFocus.PRODUCTION: frozenset({
        "IMPROVEMENT_CAMP",
        "IMPROVEMENT_WOODCUTTER",
        "IMPROVEMENT_WOODCUTTER_RESOURCE",
        "IMPROVEMENT_CLAY_PIT",
        "IMPROVEMENT_MINE",
        "IMPROVEMENT_MINE_RESOURCE",
        "IMPROVEMENT_QUARRY",
    }),
}

FOCUS_YIELDS: dict[TownFocus, str] = {
    TownFocus.FOOD: "YIELD_FOOD",
    TownFocus.PRODUCTION: "YIELD_PRODUCTION",
}

_AGE_BONUS: dict[str, int] = {
    AgeType.EXPLORATION.value: 1,
    AgeType.MODERN.value: 2,
}


@dataclass(frozen=True)
class ImprovementInstance:
    """
    One improvement in a city.

    Attributes:
        logical_type: Constructible type after the free-constructible
            (warehouse) mapping; this is what town focus bonuses count
        instance_type: Constructible type of the placed instance
        name: Localization tag of the instance's name
    """
    logical_type: str
    instance_type: Optional[str] = None
    name: Optional[str] = None


@dataclass
class ImprovementCount:
    key: str
    constructible_type: str
    display_name: str
    count: int = 0

    @property
    def icon_id(self) -> str:
        return self.constructible_type


@dataclass(frozen=True)
class ImprovementSummary:
    items: tuple[ImprovementCount, ...] = field(default_factory=tuple)
    total: int = 0
    multiplier: int = 1
    base_count: int = 0


def format_yield(x: float) -> str:
    """Round to one decimal place, dropping ".0" for whole numbers."""
    v = round(x * 10) / 10
    if abs(v - round(v)) < 1e-9:
        return str(int(round(v)))
    return f"{v:.1f}"


def get_era_multiplier(age_type: Optional[str], base: int = 1) -> int:
    """Base multiplier plus one per age after Antiquity."""
    if not age_type:
        return base
    return base + _AGE_BONUS.get(age_type.strip(), 0)


def summarize_improvements(
    improvements: Iterable[ImprovementInstance],
    target_types: Iterable[str],
    display_names: Optional[Mapping[str, str]] = None,
    composer: Optional[TextComposer] = None,
    age_type: Optional[str] = None,
    base_multiplier: int = 1,
) -> Optional[ImprovementSummary]:
    """
    Count targeted improvements, grouped by display name.

    Args:
        improvements: Improvements placed in the city
        target_types: Logical constructible types the focus counts
        display_names: Constructible type -> localization tag
        composer: Text composer for display names
        age_type: Current AgeType
        base_multiplier: Yield per improvement before the age bonus

    Returns:
        ImprovementSummary, or None if no improvement matched
    """
    targets = frozenset(target_types)
    if not targets:
        return None

    display_names = IMPROVEMENT_DISPLAY_NAMES if display_names is None else display_names
    by_key: dict[str, ImprovementCount] = {}

    for improvement in improvements:
        if improvement.logical_type not in targets:
            continue

        ctype = improvement.instance_type or improvement.logical_type
        display_key = display_names.get(ctype) or improvement.name or ctype

        item = by_key.get(display_key)
        if item is None:
            item = ImprovementCount(
                key=display_key,
                constructible_type=ctype,
                display_name=compose_or_raw(composer, display_key),
            )
            by_key[display_key] = item
        item.count += 1

    if not by_key:
        return None

    base_count = sum(item.count for item in by_key.values())
    multiplier = get_era_multiplier(age_type, base_multiplier)
    return ImprovementSummary(
        items=tuple(by_key.values()),
        total=base_count * multiplier,
        multiplier=multiplier,
        base_count=base_count,
    )


def summarize_town_focus(
    focus: TownFocus,
    improvements: Iterable[ImprovementInstance],
    composer: Optional[TextComposer] = None,
    age_type: Optional[str] = None,
) -> Optional[ImprovementSummary]:
    """Improvement summary for one of the town focus projects."""
    return summarize_improvements(
        improvements,
        FOCUS_IMPROVEMENTS[focus],
        composer=composer,
        age_type=age_type,
    )
