"""Unit value composition from per-component quality letters."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from decimal import Decimal

from predial.core.config import TaxConfig
from predial.core.errors import NotFoundError
from predial.core.types import QualityLetter, UnitValueSubcategory, parse_enum
from predial.finance.uit import validate_year
from predial.repositories.protocols import RateTableRepository
from predial.valuation.models import ComponentCost, UnitValueBreakdown

logger = logging.getLogger(__name__)

Selections = Mapping[UnitValueSubcategory | str, QualityLetter | str | None]


def normalize_selections(
    selections: Selections,
) -> dict[UnitValueSubcategory, QualityLetter | None]:
    """Coerce subcategory keys and letters to their enums, in taxonomy order."""
    parsed = {
        parse_enum(UnitValueSubcategory, sub): (
            None if letter is None else parse_enum(QualityLetter, letter)
        )
        for sub, letter in selections.items()
    }
    return {sub: parsed[sub] for sub in UnitValueSubcategory if sub in parsed}


class UnitValueEngine:
    """Sums the unit cost of every selected construction component."""

    def __init__(
        self,
        repository: RateTableRepository,
        config: TaxConfig | None = None,
    ) -> None:
        self._repository = repository
        self._config = config if config is not None else TaxConfig()

    def compose(self, year: int, selections: Selections) -> UnitValueBreakdown:
        validate_year(year, self._config)

        components: list[ComponentCost] = []
        total = Decimal("0")
        for subcategory, letter in normalize_selections(selections).items():
            if letter is None:
                continue
            entry = self._repository.get_unit_value_entry(year, subcategory, letter)
            if entry is None:
                logger.debug("Unit value lookup miss: %s/%s/%s", year, subcategory, letter)
                raise NotFoundError(
                    f"No unit value published for year {year}, "
                    f"subcategory {subcategory.value}, letter {letter.value}"
                )
            components.append(ComponentCost(
                subcategory=subcategory,
                category=subcategory.category,
                letter=letter,
                cost=entry.cost,
            ))
            total += entry.cost

        return UnitValueBreakdown(year=year, components=components, total_cost=total)
