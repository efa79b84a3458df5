"""Valuation API router for depreciation, unit values, and assessed values."""

from __future__ import annotations

from decimal import Decimal
from typing import Any

from fastapi import APIRouter, HTTPException, Request
from pydantic import BaseModel, Field

from predial.core.errors import PredialError
from predial.valuation.models import FloorSpec
from predial.web.errors import to_http_exception


router = APIRouter()


# ---------------------------------------------------------------------------
# Request models
# ---------------------------------------------------------------------------


class UnitValueRequest(BaseModel):
    """Request body for composing a unit value."""

    year: int
    selections: dict[str, str | None] = Field(default_factory=dict)


class AssessedValueRequest(BaseModel):
    """Request body for valuing one construction."""

    year: int
    selections: dict[str, str | None] = Field(default_factory=dict)
    material: str
    age_bracket: str
    conservation_state: str
    built_area_m2: Decimal
    increment_pct: Decimal | None = None


class PropertyAssessmentRequest(BaseModel):
    """Request body for valuing every floor of a property."""

    year: int
    floors: list[FloorSpec]
    include_tax: bool = True
    increment_pct: Decimal | None = None


# ---------------------------------------------------------------------------
# Helpers to get services from app state
# ---------------------------------------------------------------------------


def _get_valuation_engine(request: Request):
    engine = getattr(request.app.state, "valuation_engine", None)
    if engine is None:
        raise HTTPException(status_code=503, detail="Valuation engine not available")
    return engine


def _get_depreciation_engine(request: Request):
    engine = getattr(request.app.state, "depreciation_engine", None)
    if engine is None:
        raise HTTPException(status_code=503, detail="Depreciation engine not available")
    return engine


def _get_unit_value_engine(request: Request):
    engine = getattr(request.app.state, "unit_value_engine", None)
    if engine is None:
        raise HTTPException(status_code=503, detail="Unit value engine not available")
    return engine


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------


@router.get("/api/depreciation/{year}/{material}/{age_bracket}/{conservation_state}")
async def api_lookup_depreciation(
    year: int,
    material: str,
    age_bracket: str,
    conservation_state: str,
    request: Request,
) -> dict[str, Any]:
    """Look up the depreciation percentage for a construction."""
    engine = _get_depreciation_engine(request)
    try:
        pct = engine.lookup(year, material, age_bracket, conservation_state)
    except PredialError as e:
        raise to_http_exception(e)
    return {
        "year": year,
        "material": material,
        "age_bracket": age_bracket,
        "conservation_state": conservation_state,
        "depreciation_pct": str(pct),
    }


@router.post("/api/valuation/unit-value")
async def api_compose_unit_value(body: UnitValueRequest, request: Request) -> dict[str, Any]:
    """Sum the unit cost of the selected construction components."""
    engine = _get_unit_value_engine(request)
    try:
        breakdown = engine.compose(body.year, body.selections)
    except PredialError as e:
        raise to_http_exception(e)
    return breakdown.model_dump(mode="json")


@router.post("/api/valuation/assessed-value")
async def api_assessed_value(body: AssessedValueRequest, request: Request) -> dict[str, Any]:
    """Value one construction: compose, increment, depreciate, scale by area."""
    engine = _get_valuation_engine(request)
    try:
        valuation = engine.compute_assessed_value(
            body.year,
            body.selections,
            body.material,
            body.age_bracket,
            body.conservation_state,
            body.built_area_m2,
            increment_pct=body.increment_pct,
        )
    except PredialError as e:
        raise to_http_exception(e)
    return valuation.model_dump(mode="json")


@router.post("/api/valuation/property")
async def api_assess_property(
    body: PropertyAssessmentRequest, request: Request
) -> dict[str, Any]:
    """Value every floor of a property and compute the tax on the total."""
    engine = _get_valuation_engine(request)
    try:
        assessment = engine.assess_property(
            body.year,
            body.floors,
            include_tax=body.include_tax,
            increment_pct=body.increment_pct,
        )
    except PredialError as e:
        raise to_http_exception(e)
    return assessment.model_dump(mode="json")
