"""
ETFI HTML Fragments

Markup for the town focus tooltip additions: the "Bonus Yields" list of
active policy modifiers, yield header chips, and the per-improvement
breakdown. Every function is a pure function of its arguments and returns a
string; nothing here keeps a reference to tooltip elements.
"""
from __future__ import annotations

from html import escape
from typing import Mapping, Optional, Sequence

from .host import TextComposer, compose_text
from .improvements import ImprovementSummary, format_yield

HEADER_YIELD_COLORS: dict[str, str] = {
    "YIELD_FOOD": "rgba(128, 179, 77, 0.50)",
    "YIELD_PRODUCTION": "rgba(163, 61, 41, 0.50)",
    "YIELD_GOLD": "rgba(246, 206, 85, 0.50)",
    "YIELD_SCIENCE": "rgba(108, 166, 224, 0.50)",
    "YIELD_CULTURE": "rgba(92, 92, 214, 0.50)",
    "YIELD_HAPPINESS": "rgba(245, 153, 61, 0.50)",
    "YIELD_DIPLOMACY": "rgba(175, 183, 207, 0.50)",
}
DEFAULT_CHIP_COLOR = "rgba(255, 255, 255, 0.25)"

BONUS_YIELDS_TAG = "LOC_MOD_ETFI_BONUS_YIELDS"
TOTAL_IMPROVEMENTS_TAG = "LOC_MOD_ETFI_TOTAL_IMPROVEMENTS"


def _text(composer: Optional[TextComposer], tag: str, fallback: str) -> str:
    return compose_text(composer, tag) or fallback


def render_bonus_yields_html(
    labels: Sequence[str],
    composer: Optional[TextComposer] = None,
) -> str:
    """Bonus Yields section: one row per label, or a dimmed "None"."""
    heading = escape(_text(composer, BONUS_YIELDS_TAG, "Bonus Yields"))

    if labels:
        body = "".join(
            f'<div class="flex items-center mt-1"><span>{escape(label)}</span></div>'
            for label in labels
        )
    else:
        body = '<div class="mt-1 opacity-60" style="font-size: 0.8em;">None</div>'

    return (
        '<div class="mt-3 text-accent-2" style="font-size: 0.8em; line-height: 1.4;">'
        '<div class="flex justify-between mb-1">'
        f"<span>{heading}</span><span></span>"
        "</div>"
        '<div class="mt-1 border-t border-white/10"></div>'
        f'<div class="mt-1">{body}</div>'
        "</div>"
    )


def render_header_chips(
    yield_order: Optional[Sequence[str]],
    totals: Optional[Mapping[str, object]],
) -> str:
    """
    One coloured pill per yield in `yield_order`.

    Yields whose total is not a number are skipped; zero and negative
    totals still render.
    """
    if not yield_order or not totals:
        return ""

    chips = []
    for yield_type in yield_order:
        value = totals.get(yield_type)
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            continue

        color = HEADER_YIELD_COLORS.get(yield_type, DEFAULT_CHIP_COLOR)
        chips.append(
            '<div class="flex items-center mr-1">'
            '<div class="flex items-center justify-center gap-1" style="'
            "padding: 0.5px 4px 0.5px 8px; min-height: 0.5rem; border-radius: 9999px; "
            f"background-color: {color}; border: 1px solid {color}; "
            'color: #f2f2f2; font-size: 0.9em;">'
            f'<span class="font-semibold">+{format_yield(value)}</span>'
            f'<fxs-icon data-icon-id="{escape(yield_type)}" class="size-7"></fxs-icon>'
            "</div>"
            "</div>"
        )
    return "".join(chips)


def _badge(chips_html: str) -> str:
    return (
        '<div class="flex items-center justify-center gap-2 mb-2 rounded-md px-3 py-2 flex-wrap" '
        'style="background-color: rgba(10, 10, 20, 0.25); color:#f5f5f5; text-align:center;">'
        f"{chips_html}"
        "</div>"
    )


def render_header_badge(icon_id: str, value: float) -> str:
    return _badge(render_header_chips([icon_id], {icon_id: value}))


def render_improvement_details_html(
    summary: Optional[ImprovementSummary],
    yield_icon_id: str,
    composer: Optional[TextComposer] = None,
) -> Optional[str]:
    """
    Improvement breakdown for a town focus tooltip.

    Returns None when there is nothing to show.
    """
    if summary is None:
        return None

    label_total = escape(_text(composer, TOTAL_IMPROVEMENTS_TAG, "Total Improvements"))
    icon = escape(yield_icon_id)

    rows = []
    for item in summary.items:
        per_improvement = item.count * summary.multiplier
        rows.append(
            '<div class="flex justify-between items-center mt-1">'
            '<div class="flex items-center gap-2">'
            f'<fxs-icon data-icon-id="{escape(item.icon_id)}" class="size-5"></fxs-icon>'
            '<span class="opacity-60">| </span>'
            f"<span>{escape(item.display_name)}</span>"
            f'<span class="opacity-70 ml-1">x{item.count}</span>'
            "</div>"
            '<div class="flex items-center gap-1">'
            f'<fxs-icon data-icon-id="{icon}" class="size-4"></fxs-icon>'
            f'<span class="font-semibold">+{per_improvement}</span>'
            "</div>"
            "</div>"
        )

    return (
        '<div class="flex flex-col w-full">'
        f"{_badge(render_header_chips([yield_icon_id], {yield_icon_id: summary.total}))}"
        '<div class="mt-1 text-accent-2" style="font-size: 0.8em; line-height: 1.4;">'
        '<div class="flex justify-between mb-1">'
        f"<span>{label_total}</span><span>{summary.base_count}</span>"
        "</div>"
        '<div class="mt-1 border-t border-white/10"></div>'
        f"{''.join(rows)}"
        "</div>"
        "</div>"
    )
