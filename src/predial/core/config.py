"""Application configuration loaded from environment and config files."""

from __future__ import annotations

from datetime import date
from decimal import Decimal

from pydantic import Field
from pydantic_settings import BaseSettings


class TaxConfig(BaseSettings):
    """Fiscal-year bounds accepted by the tax engines."""

    model_config = {"env_prefix": "PREDIAL_TAX_"}

    min_year: int = 1991
    max_year: int = Field(default_factory=lambda: date.today().year + 5)


class ValuationConfig(BaseSettings):
    """Construction valuation policy."""

    model_config = {"env_prefix": "PREDIAL_VALUATION_"}

    # Fraction applied to the composed unit cost before depreciation.
    increment_pct: Decimal = Decimal("0.05")
    enforce_monotonic_depreciation: bool = True


class RateTableConfig(BaseSettings):
    """Location of the administrative rate tables."""

    model_config = {"env_prefix": "PREDIAL_RATES_"}

    path: str = "config/rate_tables.yml"


class Settings(BaseSettings):
    """Root application settings."""

    model_config = {"env_prefix": "PREDIAL_"}

    environment: str = "development"
    debug: bool = False
    log_level: str = "INFO"

    tax: TaxConfig = Field(default_factory=TaxConfig)
    valuation: ValuationConfig = Field(default_factory=ValuationConfig)
    rates: RateTableConfig = Field(default_factory=RateTableConfig)
