"""Construction valuation pipeline.

Combines the composed unit cost, the fixed increment, and the depreciation
percentage, then scales by built area::

    base         = sum(unit values of selected components)
    incremented  = base * (1 + increment_pct)
    depreciated  = incremented * (1 - depreciation_pct / 100)
    assessed     = depreciated * built_area_m2

Intermediate figures keep full precision; only the assessed value is
rounded. Any missing rate-table row aborts the whole valuation.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from decimal import Decimal

from predial.core.config import Settings
from predial.core.errors import InvalidArgumentError
from predial.core.types import (
    AgeBracket,
    ConservationState,
    Material,
    parse_enum,
    round_money,
    to_decimal,
)
from predial.finance.taxes import TaxEngine
from predial.repositories.protocols import RateTableRepository
from predial.valuation.depreciation import DepreciationEngine
from predial.valuation.models import (
    FloorSpec,
    FloorValuation,
    PropertyAssessment,
    PropertyValuation,
)
from predial.valuation.unit_values import Selections, UnitValueEngine

logger = logging.getLogger(__name__)


class ValuationEngine:
    """Computes assessed construction values from the published rate tables."""

    def __init__(
        self,
        repository: RateTableRepository,
        settings: Settings | None = None,
        tax_engine: TaxEngine | None = None,
    ) -> None:
        settings = settings if settings is not None else Settings()
        self._increment_pct = settings.valuation.increment_pct
        self._unit_values = UnitValueEngine(repository, settings.tax)
        self._depreciation = DepreciationEngine(repository, settings.tax)
        self._tax_engine = tax_engine

    @property
    def increment_pct(self) -> Decimal:
        return self._increment_pct

    def compute_assessed_value(
        self,
        year: int,
        selections: Selections,
        material: Material | str,
        age_bracket: AgeBracket | str,
        conservation_state: ConservationState | str,
        built_area_m2: Decimal | int | float | str,
        increment_pct: Decimal | int | float | str | None = None,
    ) -> PropertyValuation:
        area = to_decimal(built_area_m2, "built_area_m2")
        if area <= 0:
            raise InvalidArgumentError(f"Built area must be > 0, got {area}")
        increment = (
            self._increment_pct if increment_pct is None
            else to_decimal(increment_pct, "increment_pct")
        )
        if increment < 0:
            raise InvalidArgumentError(f"Increment must be >= 0, got {increment}")
        material = parse_enum(Material, material)
        age_bracket = parse_enum(AgeBracket, age_bracket)
        state = parse_enum(ConservationState, conservation_state)

        breakdown = self._unit_values.compose(year, selections)
        incremented = breakdown.total_cost * (1 + increment)
        depreciation_pct = self._depreciation.lookup(year, material, age_bracket, state)
        depreciated = incremented * (1 - depreciation_pct / 100)

        return PropertyValuation(
            year=year,
            built_area_m2=area,
            material=material,
            age_bracket=age_bracket,
            conservation_state=state,
            components=breakdown.components,
            total_unit_cost=breakdown.total_cost,
            increment_pct=increment,
            incremented_unit_cost=incremented,
            depreciation_pct=depreciation_pct,
            depreciated_unit_cost=depreciated,
            assessed_value=round_money(depreciated * area),
        )

    def assess_property(
        self,
        year: int,
        floors: Iterable[FloorSpec],
        include_tax: bool = True,
        increment_pct: Decimal | int | float | str | None = None,
    ) -> PropertyAssessment:
        """Value every floor of a property and, optionally, tax the total."""
        valued: list[FloorValuation] = []
        for item, floor in enumerate(floors, start=1):
            valuation = self.compute_assessed_value(
                year,
                floor.selections,
                floor.material,
                floor.age_bracket,
                floor.conservation_state,
                floor.built_area_m2,
                increment_pct=increment_pct,
            )
            valued.append(FloorValuation(
                item=item,
                description=floor.description,
                valuation=valuation,
            ))

        if not valued:
            raise InvalidArgumentError("A property assessment needs at least one floor")

        total = sum((f.valuation.assessed_value for f in valued), Decimal("0"))
        tax = None
        if include_tax and self._tax_engine is not None:
            tax = self._tax_engine.estimate(year, total)

        logger.info(
            "Assessed %d floor(s) for year %s: total=%s", len(valued), year, total,
        )
        return PropertyAssessment(
            year=year,
            floors=valued,
            total_assessed_value=total,
            tax=tax,
        )
