"""Depreciation lookup by material, age band, and conservation state."""

from __future__ import annotations

import logging
from decimal import Decimal

from predial.core.config import TaxConfig
from predial.core.errors import ConfigurationError, NotFoundError
from predial.core.types import AgeBracket, ConservationState, Material, parse_enum
from predial.finance.uit import validate_year
from predial.repositories.protocols import RateTableRepository
from predial.valuation.models import DepreciationEntry

logger = logging.getLogger(__name__)


def check_monotonic(entry: DepreciationEntry) -> DepreciationEntry:
    """Reject rows where a better state depreciates more than a worse one."""
    if not entry.is_monotonic:
        raise ConfigurationError(
            f"Depreciation for {entry.year}/{entry.material}/{entry.age_bracket} "
            f"is not non-decreasing from MUY_BUENO to MALO: "
            f"{entry.pct_muy_bueno}, {entry.pct_bueno}, {entry.pct_regular}, {entry.pct_malo}"
        )
    return entry


class DepreciationEngine:
    """Exact-match depreciation lookup.

    Age bands are discrete buckets; there is no interpolation between
    neighbouring bands, and a missing row is never read as 0%.
    """

    def __init__(
        self,
        repository: RateTableRepository,
        config: TaxConfig | None = None,
    ) -> None:
        self._repository = repository
        self._config = config if config is not None else TaxConfig()

    def get_entry(
        self,
        year: int,
        material: Material | str,
        age_bracket: AgeBracket | str,
    ) -> DepreciationEntry:
        validate_year(year, self._config)
        material = parse_enum(Material, material)
        age_bracket = parse_enum(AgeBracket, age_bracket)

        entry = self._repository.get_depreciation_entry(year, material, age_bracket)
        if entry is None:
            logger.debug("Depreciation lookup miss: %s/%s/%s", year, material, age_bracket)
            raise NotFoundError(
                f"No depreciation published for year {year}, material {material.value}, "
                f"age bracket {age_bracket.label!r}"
            )
        return entry

    def lookup(
        self,
        year: int,
        material: Material | str,
        age_bracket: AgeBracket | str,
        conservation_state: ConservationState | str,
    ) -> Decimal:
        state = parse_enum(ConservationState, conservation_state)
        return self.get_entry(year, material, age_bracket).pct_for(state)
