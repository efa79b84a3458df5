"""Tests for bracket table validation."""

from __future__ import annotations

from decimal import Decimal

import pytest
from pydantic import ValidationError

from predial.core.errors import ConfigurationError
from predial.finance.brackets import validate_brackets
from predial.finance.models import TaxBracket


def _bracket(id: str, lo: str, hi: str | None, rate: str = "0.1") -> TaxBracket:
    return TaxBracket(
        id=id,
        lower_bound_uit=Decimal(lo),
        upper_bound_uit=None if hi is None else Decimal(hi),
        rate=Decimal(rate),
    )


class TestValidateBrackets:
    def test_valid_table_is_contiguous(self, brackets):
        ordered = validate_brackets(brackets)
        assert ordered[0].lower_bound_uit == 0
        for current, following in zip(ordered, ordered[1:]):
            assert current.upper_bound_uit == following.lower_bound_uit
        assert [b.is_unbounded for b in ordered] == [False, False, True]

    def test_single_unbounded_bracket(self):
        ordered = validate_brackets([_bracket("flat", "0", None)])
        assert len(ordered) == 1

    def test_empty(self):
        with pytest.raises(ConfigurationError, match="empty"):
            validate_brackets([])

    def test_missing_unbounded(self):
        with pytest.raises(ConfigurationError, match="exactly one unbounded"):
            validate_brackets([_bracket("a", "0", "15"), _bracket("b", "15", "60")])

    def test_two_unbounded(self):
        with pytest.raises(ConfigurationError, match="found 2"):
            validate_brackets([_bracket("a", "0", None), _bracket("b", "15", None)])

    def test_first_not_zero(self):
        with pytest.raises(ConfigurationError, match="expected 0"):
            validate_brackets([_bracket("a", "5", "15"), _bracket("b", "15", None)])

    def test_overlap(self):
        with pytest.raises(ConfigurationError, match="not contiguous"):
            validate_brackets([
                _bracket("a", "0", "20"),
                _bracket("b", "15", "60"),
                _bracket("c", "60", None),
            ])

    def test_unbounded_not_last(self):
        with pytest.raises(ConfigurationError):
            validate_brackets([_bracket("a", "0", None), _bracket("b", "15", "60")])


class TestTaxBracketModel:
    def test_upper_must_exceed_lower(self):
        with pytest.raises(ValidationError):
            _bracket("bad", "15", "10")

    def test_rate_bounded(self):
        with pytest.raises(ValidationError):
            _bracket("bad", "0", None, rate="1.5")

    def test_negative_lower_rejected(self):
        with pytest.raises(ValidationError):
            _bracket("bad", "-1", None)
