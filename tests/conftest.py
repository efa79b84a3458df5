"""Shared test fixtures and helpers."""

from __future__ import annotations

from decimal import Decimal

import pytest

from predial.core.config import Settings, TaxConfig
from predial.core.types import AgeBracket, Material, QualityLetter, UnitValueSubcategory
from predial.finance.models import AlcabalaRate, TaxBracket, UitValue
from predial.repositories.memory import RateTableStore
from predial.valuation.models import DepreciationEntry, UnitValueEntry


YEAR = 2025


def make_brackets() -> list[TaxBracket]:
    """0-15 UIT @20%, 15-60 UIT @60%, over 60 UIT @100%."""
    return [
        TaxBracket(id="b1", lower_bound_uit=Decimal("0"), upper_bound_uit=Decimal("15"),
                   rate=Decimal("0.20"), description="Hasta 15 UIT"),
        TaxBracket(id="b2", lower_bound_uit=Decimal("15"), upper_bound_uit=Decimal("60"),
                   rate=Decimal("0.60"), description="Más de 15 UIT y hasta 60 UIT"),
        TaxBracket(id="b3", lower_bound_uit=Decimal("60"), upper_bound_uit=None,
                   rate=Decimal("1.00"), description="Más de 60 UIT"),
    ]


@pytest.fixture
def brackets() -> list[TaxBracket]:
    return make_brackets()


@pytest.fixture
def tax_config() -> TaxConfig:
    return TaxConfig(min_year=1991, max_year=2035)


@pytest.fixture
def settings(tax_config) -> Settings:
    return Settings(tax=tax_config)


@pytest.fixture
def store() -> RateTableStore:
    store = RateTableStore()
    store.put_uit_value(UitValue(year=YEAR, amount=Decimal("5350")))
    store.set_tax_brackets(YEAR, make_brackets())
    store.put_alcabala_rate(AlcabalaRate(year=YEAR, rate=Decimal("3")))
    store.put_depreciation_entry(DepreciationEntry(
        year=YEAR,
        material=Material.CONCRETO,
        age_bracket=AgeBracket.HASTA_10,
        pct_muy_bueno=Decimal("10"),
        pct_bueno=Decimal("20"),
        pct_regular=Decimal("30"),
        pct_malo=Decimal("60"),
    ))
    store.put_unit_value_entry(UnitValueEntry(
        year=YEAR,
        subcategory=UnitValueSubcategory.MUROS_Y_COLUMNAS,
        letter=QualityLetter.A,
        cost=Decimal("100"),
    ))
    store.put_unit_value_entry(UnitValueEntry(
        year=YEAR,
        subcategory=UnitValueSubcategory.TECHOS,
        letter=QualityLetter.A,
        cost=Decimal("50"),
    ))
    return store
