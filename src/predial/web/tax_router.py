"""Tax API router for UIT resolution, progressive tax, and alcabala."""

from __future__ import annotations

from decimal import Decimal
from typing import Any

from fastapi import APIRouter, HTTPException, Request
from pydantic import BaseModel

from predial.core.errors import PredialError
from predial.web.errors import to_http_exception


router = APIRouter()


# ---------------------------------------------------------------------------
# Request models
# ---------------------------------------------------------------------------


class TaxComputeRequest(BaseModel):
    """Request body for a progressive tax computation."""

    year: int
    amount: Decimal


class AlcabalaComputeRequest(BaseModel):
    """Request body for an alcabala computation."""

    year: int
    sale_value: Decimal


# ---------------------------------------------------------------------------
# Helpers to get services from app state
# ---------------------------------------------------------------------------


def _get_tax_engine(request: Request):
    engine = getattr(request.app.state, "tax_engine", None)
    if engine is None:
        raise HTTPException(status_code=503, detail="Tax engine not available")
    return engine


def _get_alcabala_engine(request: Request):
    engine = getattr(request.app.state, "alcabala_engine", None)
    if engine is None:
        raise HTTPException(status_code=503, detail="Alcabala engine not available")
    return engine


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------


@router.get("/api/uit/{year}")
async def api_get_uit(year: int, request: Request) -> dict[str, Any]:
    """Resolve the UIT published for a fiscal year."""
    tax_engine = _get_tax_engine(request)
    try:
        uit = tax_engine.uit_resolver.resolve(year)
    except PredialError as e:
        raise to_http_exception(e)
    return uit.model_dump(mode="json")


@router.get("/api/uit/{year}/amount")
async def api_uit_amount(year: int, multiples: Decimal, request: Request) -> dict[str, Any]:
    """Convert a number of UITs into money for a fiscal year."""
    tax_engine = _get_tax_engine(request)
    try:
        amount = tax_engine.uit_resolver.to_amount(multiples, year)
    except PredialError as e:
        raise to_http_exception(e)
    return {"year": year, "multiples": str(multiples), "amount": str(amount)}


@router.get("/api/brackets/{year}")
async def api_get_brackets(year: int, request: Request) -> list[dict[str, Any]]:
    """List the bracket table for a fiscal year in ascending order."""
    tax_engine = _get_tax_engine(request)
    try:
        brackets = tax_engine.get_brackets(year)
    except PredialError as e:
        raise to_http_exception(e)
    return [b.model_dump(mode="json") for b in brackets]


@router.post("/api/tax/compute")
async def api_compute_tax(body: TaxComputeRequest, request: Request) -> dict[str, Any]:
    """Compute the progressive property tax on an assessed amount."""
    tax_engine = _get_tax_engine(request)
    try:
        result = tax_engine.estimate(body.year, body.amount)
    except PredialError as e:
        raise to_http_exception(e)
    return result.model_dump(mode="json")


@router.post("/api/alcabala/compute")
async def api_compute_alcabala(
    body: AlcabalaComputeRequest, request: Request
) -> dict[str, Any]:
    """Compute the alcabala owed on a property transfer."""
    alcabala_engine = _get_alcabala_engine(request)
    try:
        result = alcabala_engine.compute(body.sale_value, body.year)
    except PredialError as e:
        raise to_http_exception(e)
    return result.model_dump(mode="json")
