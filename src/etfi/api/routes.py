"""Resolution endpoints."""

from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import HTMLResponse

from .. import __version__
from ..engine import ModifierResolver, PolicyModifierAggregator, RequirementSetResolver
from ..improvements import FOCUS_YIELDS, summarize_town_focus
from ..models import TownFocus
from ..packs import GameSnapshot
from ..render import render_bonus_yields_html, render_improvement_details_html
from .schemas import (
    HealthResponse,
    ImprovementOut,
    ImprovementsResponse,
    LabelsResponse,
    ModifierOut,
    RequirementSetOut,
    RulesResponse,
)

router = APIRouter()


def _snapshot(request: Request) -> GameSnapshot:
    return request.app.state.snapshot


def _aggregator(request: Request) -> PolicyModifierAggregator:
    return request.app.state.aggregator


@router.get("/health", response_model=HealthResponse, tags=["Health"])
async def health(request: Request):
    snapshot = _snapshot(request)
    return HealthResponse(
        status="healthy",
        version=__version__,
        schema_version=snapshot.schema_version,
        active_rules=len(snapshot.rules_model.rules),
        tables=snapshot.tables.row_counts(),
    )


@router.get("/labels", response_model=LabelsResponse, tags=["Labels"])
async def get_labels(request: Request):
    """Bonus Yields labels for the modifiers of the active policies."""
    labels = _aggregator(request).get_display_labels_for_active_rule_modifiers()
    return LabelsResponse(labels=labels)


@router.get("/bonus-yields", response_class=HTMLResponse, tags=["Labels"])
async def get_bonus_yields(request: Request):
    """Bonus Yields tooltip section as an HTML fragment."""
    labels = _aggregator(request).get_display_labels_for_active_rule_modifiers()
    return HTMLResponse(content=render_bonus_yields_html(labels, _snapshot(request).locale))


@router.get("/rules", response_model=RulesResponse, tags=["Rules"])
async def get_rules(request: Request):
    """Every active rule with its resolved modifiers."""
    return _aggregator(request).get_resolved_modifiers_for_active_rules().to_dict()


@router.get("/modifiers/{modifier_id}", response_model=ModifierOut, tags=["Modifiers"])
async def get_modifier(modifier_id: str, request: Request):
    snapshot = _snapshot(request)
    resolution = ModifierResolver(snapshot.tables, composer=snapshot.locale).resolve(modifier_id)
    if not resolution.ok:
        raise HTTPException(
            status_code=404,
            detail=f"Modifier '{modifier_id}' not found ({resolution.status.value})",
        )
    return resolution.value.to_dict()


@router.get("/requirement-sets/{set_id}", response_model=RequirementSetOut, tags=["Modifiers"])
async def get_requirement_set(set_id: str, request: Request):
    resolution = RequirementSetResolver(_snapshot(request).tables).resolve(set_id)
    if not resolution.ok:
        raise HTTPException(
            status_code=404,
            detail=f"Requirement set '{set_id}' not found ({resolution.status.value})",
        )
    return resolution.value.to_dict()


@router.get("/improvements/{focus}", response_model=ImprovementsResponse, tags=["Improvements"])
async def get_improvements(focus: TownFocus, request: Request):
    """
    Improvement breakdown for the food or production town focus.

    Returns 404 when the city has no improvement the focus counts.
    """
    snapshot = _snapshot(request)
    summary = summarize_town_focus(
        focus,
        snapshot.city_improvements,
        composer=snapshot.locale,
        age_type=snapshot.current_age,
    )
    if summary is None:
        raise HTTPException(status_code=404, detail=f"No {focus.value} improvements in city")

    yield_type = FOCUS_YIELDS[focus]
    return ImprovementsResponse(
        focus=focus.value,
        yield_type=yield_type,
        current_age=snapshot.current_age,
        multiplier=summary.multiplier,
        base_count=summary.base_count,
        total=summary.total,
        items=[
            ImprovementOut(
                constructible_type=item.constructible_type,
                display_name=item.display_name,
                count=item.count,
            )
            for item in summary.items
        ],
        html=render_improvement_details_html(summary, yield_type, snapshot.locale),
    )
