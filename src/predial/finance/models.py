"""Finance data models for UIT values, tax brackets, and tax results."""

from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, model_validator


class UitValue(BaseModel):
    """Published value of one UIT for a fiscal year."""

    model_config = ConfigDict(frozen=True)

    year: int = Field(gt=0)
    amount: Decimal = Field(gt=0)


class TaxBracket(BaseModel):
    """A single alícuota: a range in UIT multiples and its marginal rate.

    ``upper_bound_uit`` of ``None`` marks the unbounded top bracket.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    lower_bound_uit: Decimal = Field(ge=0)
    upper_bound_uit: Decimal | None = None
    rate: Decimal = Field(ge=0, le=1)
    description: str = ""

    @model_validator(mode="after")
    def _check_range(self) -> TaxBracket:
        if self.upper_bound_uit is not None and self.upper_bound_uit <= self.lower_bound_uit:
            raise ValueError(
                f"Bracket {self.id!r}: upper bound {self.upper_bound_uit} "
                f"must exceed lower bound {self.lower_bound_uit}"
            )
        return self

    @property
    def is_unbounded(self) -> bool:
        return self.upper_bound_uit is None


class BracketTax(BaseModel):
    """Tax contributed by one bracket, at full precision."""

    bracket_id: str
    lower_bound: Decimal
    upper_bound: Decimal | None
    rate: Decimal
    taxable_in_bracket: Decimal
    tax_owed: Decimal
    cumulative_tax: Decimal


class TaxResult(BaseModel):
    """Outcome of a progressive tax computation."""

    year: int | None = None
    amount: Decimal
    uit_amount: Decimal
    per_bracket: list[BracketTax] = Field(default_factory=list)
    total_tax: Decimal

    @property
    def effective_rate(self) -> Decimal:
        if self.amount == 0:
            return Decimal("0")
        return self.total_tax / self.amount


class AlcabalaRate(BaseModel):
    """Flat transfer-tax rate, in percent, for a fiscal year."""

    model_config = ConfigDict(frozen=True)

    year: int = Field(gt=0)
    rate: Decimal = Field(ge=0, le=100)


class AlcabalaResult(BaseModel):
    """Alcabala owed on a property transfer."""

    year: int
    sale_value: Decimal
    rate: Decimal
    tax: Decimal
