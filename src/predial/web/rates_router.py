"""Administrative API router for publishing rate-table rows."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, HTTPException, Request

from predial.core.config import TaxConfig
from predial.core.errors import PredialError
from predial.finance.models import AlcabalaRate, TaxBracket, UitValue
from predial.finance.uit import validate_year
from predial.valuation.models import DepreciationEntry, UnitValueEntry
from predial.web.errors import to_http_exception

logger = logging.getLogger(__name__)

router = APIRouter()


def _get_rate_store(request: Request):
    store = getattr(request.app.state, "rate_store", None)
    if store is None:
        raise HTTPException(status_code=503, detail="Rate table store not available")
    return store


def _check_year(request: Request, year: int) -> None:
    """Reject rows for years the engines would refuse to resolve."""
    settings = getattr(request.app.state, "settings", None)
    config = settings.tax if settings is not None else TaxConfig()
    try:
        validate_year(year, config)
    except PredialError as e:
        raise to_http_exception(e)


@router.get("/api/rates/uit")
async def api_list_uit(request: Request) -> list[dict[str, Any]]:
    """List every published UIT value."""
    store = _get_rate_store(request)
    return [u.model_dump(mode="json") for u in store.list_uit_values()]


@router.put("/api/rates/uit")
async def api_put_uit(body: UitValue, request: Request) -> dict[str, Any]:
    """Publish (or supersede) the UIT for a year."""
    store = _get_rate_store(request)
    _check_year(request, body.year)
    store.put_uit_value(body)
    return body.model_dump(mode="json")


@router.put("/api/rates/brackets/{year}")
async def api_put_brackets(
    year: int, body: list[TaxBracket], request: Request
) -> list[dict[str, Any]]:
    """Replace the bracket table for a year. Inconsistent tables are rejected."""
    store = _get_rate_store(request)
    _check_year(request, year)
    try:
        ordered = store.set_tax_brackets(year, body)
    except PredialError as e:
        raise to_http_exception(e, configuration_status=409)
    logger.info("Published %d brackets for year %s", len(ordered), year)
    return [b.model_dump(mode="json") for b in ordered]


@router.put("/api/rates/depreciation")
async def api_put_depreciation(body: DepreciationEntry, request: Request) -> dict[str, Any]:
    """Publish a depreciation row for (year, material, age bracket)."""
    store = _get_rate_store(request)
    _check_year(request, body.year)
    try:
        store.put_depreciation_entry(body)
    except PredialError as e:
        raise to_http_exception(e, configuration_status=409)
    return body.model_dump(mode="json")


@router.get("/api/rates/depreciation/{year}")
async def api_list_depreciation(year: int, request: Request) -> list[dict[str, Any]]:
    store = _get_rate_store(request)
    return [e.model_dump(mode="json") for e in store.list_depreciation_entries(year)]


@router.put("/api/rates/unit-values")
async def api_put_unit_values(
    body: list[UnitValueEntry], request: Request
) -> dict[str, Any]:
    """Publish a batch of unit-value rows."""
    store = _get_rate_store(request)
    for entry in body:
        _check_year(request, entry.year)
    for entry in body:
        store.put_unit_value_entry(entry)
    return {"published": len(body)}


@router.get("/api/rates/unit-values/{year}")
async def api_list_unit_values(year: int, request: Request) -> list[dict[str, Any]]:
    store = _get_rate_store(request)
    return [e.model_dump(mode="json") for e in store.list_unit_value_entries(year)]


@router.put("/api/rates/alcabala")
async def api_put_alcabala(body: AlcabalaRate, request: Request) -> dict[str, Any]:
    """Publish (or supersede) the alcabala rate for a year."""
    store = _get_rate_store(request)
    _check_year(request, body.year)
    store.put_alcabala_rate(body)
    return body.model_dump(mode="json")
