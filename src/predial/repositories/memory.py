"""In-memory store for the administrative rate tables."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from predial.core.types import AgeBracket, Material, QualityLetter, UnitValueSubcategory
from predial.finance.brackets import validate_brackets
from predial.finance.models import AlcabalaRate, TaxBracket, UitValue
from predial.valuation.depreciation import check_monotonic
from predial.valuation.models import DepreciationEntry, UnitValueEntry

logger = logging.getLogger(__name__)


class RateTableStore:
    """In-memory dict store for UIT values, brackets, and valuation tables.

    Each table is keyed by its natural unique key, so publishing a row for
    an existing key supersedes it instead of adding a duplicate. Bracket
    sets and depreciation rows are validated on write.
    """

    def __init__(self, enforce_monotonic_depreciation: bool = True) -> None:
        self._enforce_monotonic = enforce_monotonic_depreciation
        self._uit_values: dict[int, UitValue] = {}
        self._brackets: dict[int, list[TaxBracket]] = {}
        self._depreciation: dict[tuple[int, Material, AgeBracket], DepreciationEntry] = {}
        self._unit_values: dict[tuple[int, UnitValueSubcategory, QualityLetter], UnitValueEntry] = {}
        self._alcabala: dict[int, AlcabalaRate] = {}

    @property
    def enforce_monotonic_depreciation(self) -> bool:
        return self._enforce_monotonic

    def update_from(self, other: RateTableStore) -> None:
        """Publish every row of another store into this one."""
        for uit in other.list_uit_values():
            self.put_uit_value(uit)
        for year in other.list_bracket_years():
            self.set_tax_brackets(year, other.get_tax_brackets(year))
        for entry in other.list_depreciation_entries():
            self.put_depreciation_entry(entry)
        for entry in other.list_unit_value_entries():
            self.put_unit_value_entry(entry)
        for rate in other.list_alcabala_rates():
            self.put_alcabala_rate(rate)

    # -- UIT --

    def put_uit_value(self, uit: UitValue) -> UitValue:
        if uit.year in self._uit_values:
            logger.info("Superseding UIT for year %s: %s -> %s",
                        uit.year, self._uit_values[uit.year].amount, uit.amount)
        self._uit_values[uit.year] = uit
        return uit

    def get_uit_value(self, year: int) -> UitValue | None:
        return self._uit_values.get(year)

    def list_uit_values(self) -> list[UitValue]:
        return [self._uit_values[y] for y in sorted(self._uit_values)]

    # -- Tax brackets --

    def set_tax_brackets(self, year: int, brackets: Iterable[TaxBracket]) -> list[TaxBracket]:
        ordered = validate_brackets(brackets)
        self._brackets[year] = ordered
        return list(ordered)

    def get_tax_brackets(self, year: int) -> list[TaxBracket]:
        return list(self._brackets.get(year, []))

    def list_bracket_years(self) -> list[int]:
        return sorted(self._brackets)

    # -- Depreciation --

    def put_depreciation_entry(self, entry: DepreciationEntry) -> DepreciationEntry:
        if self._enforce_monotonic:
            check_monotonic(entry)
        self._depreciation[(entry.year, entry.material, entry.age_bracket)] = entry
        return entry

    def get_depreciation_entry(
        self, year: int, material: Material, age_bracket: AgeBracket
    ) -> DepreciationEntry | None:
        return self._depreciation.get((year, material, age_bracket))

    def list_depreciation_entries(self, year: int | None = None) -> list[DepreciationEntry]:
        return [
            e for e in self._depreciation.values()
            if year is None or e.year == year
        ]

    # -- Unit values --

    def put_unit_value_entry(self, entry: UnitValueEntry) -> UnitValueEntry:
        self._unit_values[(entry.year, entry.subcategory, entry.letter)] = entry
        return entry

    def get_unit_value_entry(
        self, year: int, subcategory: UnitValueSubcategory, letter: QualityLetter
    ) -> UnitValueEntry | None:
        return self._unit_values.get((year, subcategory, letter))

    def list_unit_value_entries(self, year: int | None = None) -> list[UnitValueEntry]:
        return [
            e for e in self._unit_values.values()
            if year is None or e.year == year
        ]

    # -- Alcabala --

    def put_alcabala_rate(self, rate: AlcabalaRate) -> AlcabalaRate:
        self._alcabala[rate.year] = rate
        return rate

    def get_alcabala_rate(self, year: int) -> AlcabalaRate | None:
        return self._alcabala.get(year)

    def list_alcabala_rates(self) -> list[AlcabalaRate]:
        return [self._alcabala[y] for y in sorted(self._alcabala)]
