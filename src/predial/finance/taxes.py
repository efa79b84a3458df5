"""Deterministic progressive property-tax engine."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from decimal import Decimal

from predial.core.config import TaxConfig
from predial.core.errors import InvalidArgumentError, NotFoundError
from predial.core.types import round_money, to_decimal
from predial.finance.brackets import validate_brackets
from predial.finance.models import BracketTax, TaxBracket, TaxResult
from predial.finance.uit import UitResolver, validate_year
from predial.repositories.protocols import RateTableRepository

logger = logging.getLogger(__name__)


def compute_tax(
    amount: Decimal | int | float | str,
    brackets: Iterable[TaxBracket],
    uit_amount: Decimal | int | float | str,
    year: int | None = None,
) -> TaxResult:
    """Walk the bracket table and compute the marginal tax per bracket.

    An amount exactly on a boundary belongs to the lower bracket, so a
    bracket only contributes when ``amount > lower``. Per-bracket figures
    keep full precision; only ``total_tax`` is rounded (half-up, cents).
    """
    value = to_decimal(amount, "amount")
    if value < 0:
        raise InvalidArgumentError(f"Taxable amount must be >= 0, got {value}")
    uit = to_decimal(uit_amount, "uit_amount")
    if uit <= 0:
        raise InvalidArgumentError(f"UIT amount must be > 0, got {uit}")

    ordered = validate_brackets(brackets)

    rows: list[BracketTax] = []
    cumulative = Decimal("0")
    for bracket in ordered:
        lo = bracket.lower_bound_uit * uit
        hi = None if bracket.upper_bound_uit is None else bracket.upper_bound_uit * uit

        if value > lo:
            taxable = (value if hi is None else min(value, hi)) - lo
        else:
            taxable = Decimal("0")
        owed = taxable * bracket.rate
        cumulative += owed

        rows.append(BracketTax(
            bracket_id=bracket.id,
            lower_bound=lo,
            upper_bound=hi,
            rate=bracket.rate,
            taxable_in_bracket=taxable,
            tax_owed=owed,
            cumulative_tax=cumulative,
        ))

    return TaxResult(
        year=year,
        amount=value,
        uit_amount=uit,
        per_bracket=rows,
        total_tax=round_money(cumulative),
    )


class TaxEngine:
    """Computes property tax for a fiscal year from the published rate tables."""

    def __init__(
        self,
        repository: RateTableRepository,
        config: TaxConfig | None = None,
    ) -> None:
        self._repository = repository
        self._uit_resolver = UitResolver(repository, config)

    @property
    def uit_resolver(self) -> UitResolver:
        return self._uit_resolver

    def get_brackets(self, year: int) -> list[TaxBracket]:
        validate_year(year, self._uit_resolver.config)
        brackets = self._repository.get_tax_brackets(year)
        if not brackets:
            logger.debug("Bracket table lookup miss for year %s", year)
            raise NotFoundError(f"No tax brackets published for year {year}")
        return validate_brackets(brackets)

    def estimate(self, year: int, amount: Decimal | int | float | str) -> TaxResult:
        uit = self._uit_resolver.resolve(year)
        brackets = self.get_brackets(year)
        result = compute_tax(amount, brackets, uit.amount, year=year)
        logger.debug(
            "Computed tax for year %s: amount=%s total=%s",
            year, result.amount, result.total_tax,
        )
        return result
