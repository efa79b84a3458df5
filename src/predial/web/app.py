"""FastAPI application for the Predial tax and valuation engines.

Exposes the UIT, progressive-tax, alcabala, and construction valuation
engines to the municipal screens, plus an administrative surface for
publishing rate-table rows.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from predial.core.config import Settings
from predial.finance.alcabala import AlcabalaEngine
from predial.finance.taxes import TaxEngine
from predial.repositories.loader import load_rate_tables
from predial.repositories.memory import RateTableStore
from predial.valuation.depreciation import DepreciationEngine
from predial.valuation.pipeline import ValuationEngine
from predial.valuation.unit_values import UnitValueEngine
from predial.web.rates_router import router as rates_router
from predial.web.tax_router import router as tax_router
from predial.web.valuation_router import router as valuation_router

logger = logging.getLogger(__name__)

_PROJECT_ROOT = Path(__file__).resolve().parents[3]


def _resolve_rates_path(settings: Settings) -> Path:
    path = Path(settings.rates.path)
    return path if path.is_absolute() else _PROJECT_ROOT / path


def _build_store(settings: Settings) -> RateTableStore:
    enforce = settings.valuation.enforce_monotonic_depreciation
    path = _resolve_rates_path(settings)
    if not path.exists():
        logger.warning("Rate table file %s not found; starting with empty tables", path)
        return RateTableStore(enforce_monotonic_depreciation=enforce)
    return load_rate_tables(path, enforce_monotonic_depreciation=enforce)


# --- Application factory ---


def create_app(
    settings: Settings | None = None,
    store: RateTableStore | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Uses the factory pattern so tests can create isolated app instances
    with their own rate tables.

    Args:
        settings: Application settings. Defaults to Settings().
        store: Optional pre-built rate table store. When omitted the
            tables are loaded from ``settings.rates.path``.

    Returns:
        A configured FastAPI instance.
    """
    if settings is None:
        settings = Settings()

    logging.getLogger("predial").setLevel(settings.log_level.upper())

    app = FastAPI(
        title="Predial",
        description="Municipal property-tax calculation engines",
        version="0.1.0",
        debug=settings.debug,
    )

    # CORS for development
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    if store is None:
        store = _build_store(settings)

    tax_engine = TaxEngine(store, settings.tax)

    # Store on app state for access in route handlers
    app.state.settings = settings
    app.state.rate_store = store
    app.state.tax_engine = tax_engine
    app.state.alcabala_engine = AlcabalaEngine(store, settings.tax)
    app.state.depreciation_engine = DepreciationEngine(store, settings.tax)
    app.state.unit_value_engine = UnitValueEngine(store, settings.tax)
    app.state.valuation_engine = ValuationEngine(store, settings, tax_engine=tax_engine)

    app.include_router(tax_router)
    app.include_router(valuation_router)
    app.include_router(rates_router)

    @app.get("/api/health")
    async def health() -> dict[str, Any]:
        return {
            "status": "ok",
            "environment": settings.environment,
            "uit_years": [u.year for u in store.list_uit_values()],
        }

    return app
