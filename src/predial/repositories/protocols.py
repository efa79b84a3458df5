"""Protocol definition for the rate-table data-access collaborator.

The engines only read through this interface. Missing rows come back as
``None`` (or an empty list for bracket tables); turning a miss into a
``NotFoundError`` is the engines' job, so a repository never invents
default values.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from predial.core.types import AgeBracket, Material, QualityLetter, UnitValueSubcategory
from predial.finance.models import AlcabalaRate, TaxBracket, UitValue
from predial.valuation.models import DepreciationEntry, UnitValueEntry


@runtime_checkable
class RateTableRepository(Protocol):
    """Protocol for read access to the administrative rate tables."""

    def get_uit_value(self, year: int) -> UitValue | None: ...

    def get_tax_brackets(self, year: int) -> list[TaxBracket]: ...

    def get_depreciation_entry(
        self, year: int, material: Material, age_bracket: AgeBracket
    ) -> DepreciationEntry | None: ...

    def get_unit_value_entry(
        self, year: int, subcategory: UnitValueSubcategory, letter: QualityLetter
    ) -> UnitValueEntry | None: ...

    def get_alcabala_rate(self, year: int) -> AlcabalaRate | None: ...
