"""Core type definitions shared across all Predial modules."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from enum import StrEnum
from typing import TypeVar

from predial.core.errors import InvalidArgumentError

E = TypeVar("E", bound=StrEnum)

CENTS = Decimal("0.01")


class Material(StrEnum):
    """Predominant building material."""

    CONCRETO = "CONCRETO"
    LADRILLO = "LADRILLO"
    ADOBE = "ADOBE"


class AgeBracket(StrEnum):
    """Construction age bands. Each band is a discrete bucket."""

    HASTA_5 = "HASTA_5"
    HASTA_10 = "HASTA_10"
    HASTA_15 = "HASTA_15"
    HASTA_20 = "HASTA_20"
    HASTA_25 = "HASTA_25"
    HASTA_30 = "HASTA_30"
    HASTA_35 = "HASTA_35"
    HASTA_40 = "HASTA_40"
    HASTA_45 = "HASTA_45"
    HASTA_50 = "HASTA_50"
    MAS_50 = "MAS_50"

    @property
    def label(self) -> str:
        if self is AgeBracket.MAS_50:
            return "Más de 50 años"
        return f"Hasta {self.value.split('_')[1]} años"


class ConservationState(StrEnum):
    """Conservation state, ordered from best to worst."""

    MUY_BUENO = "MUY_BUENO"
    BUENO = "BUENO"
    REGULAR = "REGULAR"
    MALO = "MALO"


class UnitValueCategory(StrEnum):
    """Top-level grouping of construction components."""

    ESTRUCTURAS = "ESTRUCTURAS"
    ACABADOS = "ACABADOS"
    INSTALACIONES = "INSTALACIONES"


class UnitValueSubcategory(StrEnum):
    """Construction component priced by the unit-value table."""

    MUROS_Y_COLUMNAS = "MUROS_Y_COLUMNAS"
    TECHOS = "TECHOS"
    PISOS = "PISOS"
    PUERTAS_Y_VENTANAS = "PUERTAS_Y_VENTANAS"
    REVESTIMIENTOS = "REVESTIMIENTOS"
    BANOS = "BANOS"
    INSTALACIONES_ELECTRICAS_Y_SANITARIAS = "INSTALACIONES_ELECTRICAS_Y_SANITARIAS"

    @property
    def category(self) -> UnitValueCategory:
        return _CATEGORY_BY_SUBCATEGORY[self]


class QualityLetter(StrEnum):
    """Quality letter of a component, A (best) through I."""

    A = "A"
    B = "B"
    C = "C"
    D = "D"
    E = "E"
    F = "F"
    G = "G"
    H = "H"
    I = "I"  # noqa: E741


# Closed taxonomy, not user-editable.
SUBCATEGORIES_BY_CATEGORY: dict[UnitValueCategory, tuple[UnitValueSubcategory, ...]] = {
    UnitValueCategory.ESTRUCTURAS: (
        UnitValueSubcategory.MUROS_Y_COLUMNAS,
        UnitValueSubcategory.TECHOS,
    ),
    UnitValueCategory.ACABADOS: (
        UnitValueSubcategory.PISOS,
        UnitValueSubcategory.PUERTAS_Y_VENTANAS,
        UnitValueSubcategory.REVESTIMIENTOS,
        UnitValueSubcategory.BANOS,
    ),
    UnitValueCategory.INSTALACIONES: (
        UnitValueSubcategory.INSTALACIONES_ELECTRICAS_Y_SANITARIAS,
    ),
}

_CATEGORY_BY_SUBCATEGORY: dict[UnitValueSubcategory, UnitValueCategory] = {
    sub: category
    for category, subs in SUBCATEGORIES_BY_CATEGORY.items()
    for sub in subs
}


def parse_enum(enum_cls: type[E], value: E | str) -> E:
    """Coerce a canonical enum value, raising InvalidArgumentError otherwise.

    Only the canonical member values are accepted. Normalizing labels,
    casing or translations belongs to the boundary adapters.
    """
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError:
        raise InvalidArgumentError(
            f"Invalid {enum_cls.__name__} {value!r}. "
            f"Available: {[m.value for m in enum_cls]}"
        ) from None


def to_decimal(value: Decimal | int | float | str, field: str = "value") -> Decimal:
    """Convert a numeric input to Decimal without binary float drift."""
    if isinstance(value, bool):
        raise InvalidArgumentError(f"{field} must be numeric, got {value!r}")
    if isinstance(value, Decimal):
        result = value
    else:
        try:
            result = Decimal(str(value))
        except (InvalidOperation, ValueError):
            raise InvalidArgumentError(f"{field} must be numeric, got {value!r}") from None
    if not result.is_finite():
        raise InvalidArgumentError(f"{field} must be finite, got {value!r}")
    return result


def round_money(value: Decimal) -> Decimal:
    """Round to cents using round-half-up.

    Raises InvalidArgumentError when the value has more digits than the
    decimal context can hold at cents precision.
    """
    try:
        return value.quantize(CENTS, rounding=ROUND_HALF_UP)
    except InvalidOperation:
        raise InvalidArgumentError(
            f"Amount {value} exceeds the supported magnitude"
        ) from None
