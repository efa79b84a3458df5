"""Alcabala (property transfer tax) at a flat yearly rate."""

from __future__ import annotations

from decimal import Decimal

from predial.core.config import TaxConfig
from predial.core.errors import InvalidArgumentError, NotFoundError
from predial.core.types import round_money, to_decimal
from predial.finance.models import AlcabalaRate, AlcabalaResult
from predial.finance.uit import validate_year
from predial.repositories.protocols import RateTableRepository


class AlcabalaEngine:
    """Applies the published alcabala rate for a year to a sale value."""

    def __init__(
        self,
        repository: RateTableRepository,
        config: TaxConfig | None = None,
    ) -> None:
        self._repository = repository
        self._config = config if config is not None else TaxConfig()

    def get_rate(self, year: int) -> AlcabalaRate:
        validate_year(year, self._config)
        rate = self._repository.get_alcabala_rate(year)
        if rate is None:
            raise NotFoundError(f"No alcabala rate published for year {year}")
        return rate

    def compute(self, sale_value: Decimal | int | float | str, year: int) -> AlcabalaResult:
        value = to_decimal(sale_value, "sale_value")
        if value < 0:
            raise InvalidArgumentError(f"Sale value must be >= 0, got {value}")

        rate = self.get_rate(year)
        return AlcabalaResult(
            year=year,
            sale_value=value,
            rate=rate.rate,
            tax=round_money(value * rate.rate / 100),
        )
