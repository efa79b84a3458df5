"""Validation of progressive bracket tables."""

from __future__ import annotations

from collections.abc import Iterable

from predial.core.errors import ConfigurationError
from predial.finance.models import TaxBracket


def validate_brackets(brackets: Iterable[TaxBracket]) -> list[TaxBracket]:
    """Return the brackets in ascending order, or raise ConfigurationError.

    A valid table starts at 0 UIT, has no gaps or overlaps between
    consecutive brackets, and ends with exactly one unbounded bracket.
    """
    ordered = sorted(brackets, key=lambda b: b.lower_bound_uit)
    if not ordered:
        raise ConfigurationError("Bracket table is empty")

    unbounded = [b.id for b in ordered if b.is_unbounded]
    if len(unbounded) != 1:
        raise ConfigurationError(
            f"Bracket table must have exactly one unbounded bracket, found {len(unbounded)}"
            + (f": {unbounded}" if unbounded else "")
        )

    if ordered[0].lower_bound_uit != 0:
        raise ConfigurationError(
            f"First bracket {ordered[0].id!r} starts at {ordered[0].lower_bound_uit} UIT, expected 0"
        )

    if not ordered[-1].is_unbounded:
        raise ConfigurationError(
            f"Unbounded bracket {unbounded[0]!r} is not the highest bracket"
        )

    for current, following in zip(ordered, ordered[1:]):
        if current.upper_bound_uit != following.lower_bound_uit:
            raise ConfigurationError(
                f"Brackets {current.id!r} and {following.id!r} are not contiguous: "
                f"{current.upper_bound_uit} != {following.lower_bound_uit}"
            )

    return ordered
