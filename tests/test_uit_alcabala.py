"""Tests for UitResolver and AlcabalaEngine."""

from __future__ import annotations

from decimal import Decimal

import pytest
from pydantic import ValidationError

from predial.core.config import TaxConfig
from predial.core.errors import InvalidArgumentError, NotFoundError
from predial.finance.alcabala import AlcabalaEngine
from predial.finance.models import AlcabalaRate, UitValue
from predial.finance.uit import UitResolver, validate_year


# ---------------------------------------------------------------------------
# UitResolver tests
# ---------------------------------------------------------------------------


@pytest.fixture
def resolver(store, tax_config):
    return UitResolver(store, tax_config)


class TestUitResolver:
    def test_resolve_published_year(self, resolver):
        uit = resolver.resolve(2025)
        assert uit == UitValue(year=2025, amount=Decimal("5350"))

    def test_no_fallback_to_previous_year(self, resolver):
        with pytest.raises(NotFoundError, match="No UIT published for year 2026"):
            resolver.resolve(2026)

    def test_superseded_value_is_returned(self, store, resolver):
        store.put_uit_value(UitValue(year=2025, amount=Decimal("5400")))
        assert resolver.resolve(2025).amount == Decimal("5400")
        assert len(store.list_uit_values()) == 1

    def test_to_amount(self, resolver):
        assert resolver.to_amount(15, 2025) == Decimal("80250")
        assert resolver.to_amount("0.5", 2025) == Decimal("2675.0")

    def test_to_amount_negative(self, resolver):
        with pytest.raises(InvalidArgumentError):
            resolver.to_amount(-1, 2025)

    def test_default_config(self, store):
        resolver = UitResolver(store)
        assert resolver.config.min_year == 1991

    def test_uit_value_immutable(self):
        uit = UitValue(year=2025, amount=Decimal("5350"))
        with pytest.raises(ValidationError):
            uit.amount = Decimal("1")

    def test_uit_amount_positive(self):
        with pytest.raises(ValidationError):
            UitValue(year=2025, amount=Decimal("0"))


class TestValidateYear:
    @pytest.mark.parametrize("year", [1991, 2025, 2035])
    def test_in_range(self, year, tax_config):
        assert validate_year(year, tax_config) == year

    @pytest.mark.parametrize("year", [1990, 2036, 0, -2025])
    def test_out_of_range(self, year, tax_config):
        with pytest.raises(InvalidArgumentError):
            validate_year(year, tax_config)

    @pytest.mark.parametrize("year", ["2025", 2025.0, True])
    def test_not_an_int(self, year, tax_config):
        with pytest.raises(InvalidArgumentError, match="integer"):
            validate_year(year, tax_config)

    def test_configurable_range(self):
        config = TaxConfig(min_year=2000, max_year=2010)
        with pytest.raises(InvalidArgumentError, match=r"\[2000, 2010\]"):
            validate_year(2011, config)


# ---------------------------------------------------------------------------
# AlcabalaEngine tests
# ---------------------------------------------------------------------------


@pytest.fixture
def alcabala_engine(store, tax_config):
    return AlcabalaEngine(store, tax_config)


class TestAlcabalaEngine:
    def test_flat_rate(self, alcabala_engine):
        result = alcabala_engine.compute(250_000, 2025)
        assert result.rate == Decimal("3")
        assert result.tax == Decimal("7500.00")

    def test_rounds_half_up(self, store, alcabala_engine):
        store.put_alcabala_rate(AlcabalaRate(year=2025, rate=Decimal("2.5")))
        # 100.1 * 2.5 / 100 = 2.5025 -> 2.50; 100.3 -> 2.5075 -> 2.51
        assert alcabala_engine.compute("100.1", 2025).tax == Decimal("2.50")
        assert alcabala_engine.compute("100.3", 2025).tax == Decimal("2.51")

    def test_missing_rate(self, alcabala_engine):
        with pytest.raises(NotFoundError, match="No alcabala rate published for year 2024"):
            alcabala_engine.compute(100, 2024)

    def test_negative_sale_value(self, alcabala_engine):
        with pytest.raises(InvalidArgumentError):
            alcabala_engine.compute(-5, 2025)

    def test_rate_bounded(self):
        with pytest.raises(ValidationError):
            AlcabalaRate(year=2025, rate=Decimal("101"))
