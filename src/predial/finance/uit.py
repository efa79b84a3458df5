"""UIT resolution by fiscal year."""

from __future__ import annotations

import logging
from decimal import Decimal

from predial.core.config import TaxConfig
from predial.core.errors import InvalidArgumentError, NotFoundError
from predial.core.types import to_decimal
from predial.finance.models import UitValue
from predial.repositories.protocols import RateTableRepository

logger = logging.getLogger(__name__)


def validate_year(year: int, config: TaxConfig) -> int:
    """Check that a fiscal year falls inside the configured range."""
    if isinstance(year, bool) or not isinstance(year, int):
        raise InvalidArgumentError(f"Fiscal year must be an integer, got {year!r}")
    if not config.min_year <= year <= config.max_year:
        raise InvalidArgumentError(
            f"Fiscal year {year} outside supported range "
            f"[{config.min_year}, {config.max_year}]"
        )
    return year


class UitResolver:
    """Resolves the published UIT for a fiscal year.

    There is no fallback to a previous year or a built-in constant: a year
    without a published UIT is an error the caller has to surface.
    """

    def __init__(
        self,
        repository: RateTableRepository,
        config: TaxConfig | None = None,
    ) -> None:
        self._repository = repository
        self._config = config if config is not None else TaxConfig()

    @property
    def config(self) -> TaxConfig:
        return self._config

    def resolve(self, year: int) -> UitValue:
        validate_year(year, self._config)
        uit = self._repository.get_uit_value(year)
        if uit is None:
            logger.debug("UIT lookup miss for year %s", year)
            raise NotFoundError(f"No UIT published for year {year}")
        return uit

    def to_amount(self, multiples: Decimal | int | float | str, year: int) -> Decimal:
        """Convert a number of UITs into money for the given year."""
        count = to_decimal(multiples, "multiples")
        if count < 0:
            raise InvalidArgumentError(f"UIT multiples must be >= 0, got {count}")
        return count * self.resolve(year).amount
