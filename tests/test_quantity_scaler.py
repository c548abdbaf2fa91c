"""Quantity scaler tests."""

from decimal import Decimal

import pytest

from src.services.quantity_scaler import parse_quantity, scale, scale_factor, validate_yield


@pytest.mark.parametrize(
    "servings,expected",
    [(2, Decimal(2)), (8, Decimal(8)), (1, Decimal(1)), (6, Decimal(6))],
)
def test_scales_quantity_equal_to_yield(servings, expected):
    """Test scaling "4" from a yield of 4."""
    assert scale("4", 4, servings) == expected


def test_scales_to_fractional_results():
    assert scale("3", 4, 6) == Decimal("4.5")
    assert scale("5", 4, 6) == Decimal("7.5")
    assert scale("1.5", 4, 2) == Decimal("0.75")


def test_no_target_or_no_yield_is_a_no_op():
    """Test that missing servings or yield keep the original quantity."""
    assert scale("3", 4, None) == Decimal(3)
    assert scale("3", None, 8) == Decimal(3)
    assert scale("3", 4, 4) == Decimal(3)
    assert scale_factor(4, 4) == 1


@pytest.mark.parametrize("raw", [None, "", "1/2", "en nypa", "2-3", "abc", "1,5", "-2"])
def test_unparseable_quantities_default_to_one(raw):
    assert parse_quantity(raw) == Decimal(1)


@pytest.mark.parametrize("raw,expected", [("2", "2"), ("1.5", "1.5"), (".5", "0.5"), (" 3 ", "3")])
def test_parses_plain_decimals(raw, expected):
    assert parse_quantity(raw) == Decimal(expected)


def test_unparseable_quantity_still_scales():
    assert scale("en nypa", 4, 8) == Decimal(2)


def test_scaling_is_linear():
    """Test that doubling the servings doubles the quantity."""
    for servings in (1, 2, 3, 5, 7):
        assert scale("3", 4, servings * 2) == scale("3", 4, servings) * 2


@pytest.mark.parametrize("bad_yield", [0, -1, Decimal("-0.5")])
def test_validate_yield_rejects_non_positive(bad_yield):
    with pytest.raises(ValueError):
        validate_yield(bad_yield)


def test_validate_yield_accepts_positive_or_missing():
    validate_yield(4)
    validate_yield(None)
