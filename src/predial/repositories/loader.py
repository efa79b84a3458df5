"""Loads administrative rate tables from YAML into a RateTableStore.

Expected layout::

    uit:
      2025: 5350
    alcabala:
      2025: 3.0
    brackets:
      2025:
        - {id: tramo-1, lower_bound_uit: 0, upper_bound_uit: 15, rate: 0.002}
        - {id: tramo-2, lower_bound_uit: 15, upper_bound_uit: 60, rate: 0.006}
        - {id: tramo-3, lower_bound_uit: 60, rate: 0.010}
    depreciation:
      - year: 2025
        material: CONCRETO
        age_bracket: HASTA_5
        pct: [0, 5, 10, 55]        # MUY_BUENO, BUENO, REGULAR, MALO
    unit_values:
      2025:
        MUROS_Y_COLUMNAS: {A: 587.68, B: 426.38}
"""

from __future__ import annotations

import logging
from decimal import Decimal
from pathlib import Path
from typing import Any

import yaml

from predial.core.errors import ConfigurationError
from predial.core.types import to_decimal
from predial.finance.models import AlcabalaRate, TaxBracket, UitValue
from predial.repositories.memory import RateTableStore
from predial.valuation.models import DepreciationEntry, UnitValueEntry

logger = logging.getLogger(__name__)


def _num(value: Any, field: str) -> Decimal | None:
    # YAML floats go through str() so 0.002 stays 0.002.
    return None if value is None else to_decimal(value, field)


def _mapping(value: Any, where: str, optional: bool = True) -> dict[Any, Any]:
    if value is None and optional:
        return {}
    if not isinstance(value, dict):
        raise ConfigurationError(f"{where} must be a mapping, got {type(value).__name__}")
    return value


def _sequence(value: Any, where: str) -> list[Any]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise ConfigurationError(f"{where} must be a list, got {type(value).__name__}")
    return value


def load_rate_tables(
    path: str | Path,
    store: RateTableStore | None = None,
    enforce_monotonic_depreciation: bool = True,
) -> RateTableStore:
    """Read a YAML rate-table file into a (new or given) store.

    The whole file is validated in a staging store first. A given store is
    only updated once every table in the file has been accepted.
    """
    with open(path) as fh:
        raw = yaml.safe_load(fh)

    if store is not None:
        enforce_monotonic_depreciation = store.enforce_monotonic_depreciation
    staged = RateTableStore(enforce_monotonic_depreciation=enforce_monotonic_depreciation)

    try:
        populate_store(staged, _mapping(raw, "rate table file"))
    except (ConfigurationError, ValueError, KeyError, TypeError) as exc:
        raise ConfigurationError(f"Invalid rate table file {str(path)!r}: {exc}") from exc

    if store is None:
        store = staged
    else:
        store.update_from(staged)

    logger.info(
        "Loaded rate tables from %s: %d UIT values, %d depreciation rows, %d unit values",
        path,
        len(staged.list_uit_values()),
        len(staged.list_depreciation_entries()),
        len(staged.list_unit_value_entries()),
    )
    return store


def populate_store(store: RateTableStore, raw: dict[str, Any]) -> RateTableStore:
    """Publish every table found in a parsed rate-table mapping."""
    # YAML may parse year keys as int or str; normalize to int.
    for year, amount in _mapping(raw.get("uit"), "uit").items():
        store.put_uit_value(UitValue(year=int(year), amount=_num(amount, "uit")))

    for year, rate in _mapping(raw.get("alcabala"), "alcabala").items():
        store.put_alcabala_rate(AlcabalaRate(year=int(year), rate=_num(rate, "alcabala")))

    for year, rows in _mapping(raw.get("brackets"), "brackets").items():
        brackets = []
        for row in _sequence(rows, f"brackets.{year}"):
            row = _mapping(row, f"brackets.{year} row", optional=False)
            brackets.append(TaxBracket(
                id=str(row["id"]),
                lower_bound_uit=_num(row["lower_bound_uit"], "lower_bound_uit"),
                upper_bound_uit=_num(row.get("upper_bound_uit"), "upper_bound_uit"),
                rate=_num(row["rate"], "rate"),
                description=row.get("description", ""),
            ))
        store.set_tax_brackets(int(year), brackets)

    for row in _sequence(raw.get("depreciation"), "depreciation"):
        row = _mapping(row, "depreciation row", optional=False)
        muy_bueno, bueno, regular, malo = row["pct"]
        store.put_depreciation_entry(DepreciationEntry(
            year=int(row["year"]),
            material=row["material"],
            age_bracket=row["age_bracket"],
            pct_muy_bueno=_num(muy_bueno, "pct"),
            pct_bueno=_num(bueno, "pct"),
            pct_regular=_num(regular, "pct"),
            pct_malo=_num(malo, "pct"),
        ))

    for year, subcategories in _mapping(raw.get("unit_values"), "unit_values").items():
        where = f"unit_values.{year}"
        for subcategory, letters in _mapping(subcategories, where, optional=False).items():
            letters = _mapping(letters, f"{where}.{subcategory}", optional=False)
            for letter, cost in letters.items():
                store.put_unit_value_entry(UnitValueEntry(
                    year=int(year),
                    subcategory=subcategory,
                    letter=str(letter),
                    cost=_num(cost, "cost"),
                ))

    return store
