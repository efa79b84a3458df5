"""Valuation data models: rate-table rows and derived valuations."""

from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from predial.core.types import (
    AgeBracket,
    ConservationState,
    Material,
    QualityLetter,
    UnitValueCategory,
    UnitValueSubcategory,
)
from predial.finance.models import TaxResult


class DepreciationEntry(BaseModel):
    """Depreciation percentages for one (year, material, age band)."""

    model_config = ConfigDict(frozen=True)

    year: int = Field(gt=0)
    material: Material
    age_bracket: AgeBracket
    pct_muy_bueno: Decimal = Field(ge=0, le=100)
    pct_bueno: Decimal = Field(ge=0, le=100)
    pct_regular: Decimal = Field(ge=0, le=100)
    pct_malo: Decimal = Field(ge=0, le=100)

    def pct_for(self, state: ConservationState) -> Decimal:
        return {
            ConservationState.MUY_BUENO: self.pct_muy_bueno,
            ConservationState.BUENO: self.pct_bueno,
            ConservationState.REGULAR: self.pct_regular,
            ConservationState.MALO: self.pct_malo,
        }[state]

    @property
    def is_monotonic(self) -> bool:
        """Better condition never depreciates more than worse condition."""
        return self.pct_muy_bueno <= self.pct_bueno <= self.pct_regular <= self.pct_malo


class UnitValueEntry(BaseModel):
    """Cost per square meter of a component at a quality letter."""

    model_config = ConfigDict(frozen=True)

    year: int = Field(gt=0)
    subcategory: UnitValueSubcategory
    letter: QualityLetter
    cost: Decimal = Field(ge=0)

    @property
    def category(self) -> UnitValueCategory:
        return self.subcategory.category


class ComponentCost(BaseModel):
    """A resolved component of a unit-value composition."""

    subcategory: UnitValueSubcategory
    category: UnitValueCategory
    letter: QualityLetter
    cost: Decimal


class UnitValueBreakdown(BaseModel):
    """Per-component costs and their sum for one construction."""

    year: int
    components: list[ComponentCost] = Field(default_factory=list)
    total_cost: Decimal


class PropertyValuation(BaseModel):
    """Assessed value of one construction. Derived, never persisted."""

    year: int
    built_area_m2: Decimal
    material: Material
    age_bracket: AgeBracket
    conservation_state: ConservationState
    components: list[ComponentCost] = Field(default_factory=list)
    total_unit_cost: Decimal
    increment_pct: Decimal
    incremented_unit_cost: Decimal
    depreciation_pct: Decimal
    depreciated_unit_cost: Decimal
    assessed_value: Decimal


class FloorSpec(BaseModel):
    """One floor or unit of a property to be valued."""

    description: str = ""
    selections: dict[UnitValueSubcategory, QualityLetter | None]
    material: Material
    age_bracket: AgeBracket
    conservation_state: ConservationState
    built_area_m2: Decimal = Field(gt=0)


class FloorValuation(BaseModel):
    """Valuation of a single floor within a property assessment."""

    item: int
    description: str = ""
    valuation: PropertyValuation


class PropertyAssessment(BaseModel):
    """Valuation of all floors of a property and the tax on the total."""

    year: int
    floors: list[FloorValuation] = Field(default_factory=list)
    total_assessed_value: Decimal
    tax: TaxResult | None = None
