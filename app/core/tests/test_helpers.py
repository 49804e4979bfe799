"""
Tests for money and pagination helpers.
"""

from decimal import Decimal

import pytest

from core.helpers import (
    calculate_pagination,
    format_minor_units,
    parse_major_amount,
    to_minor_units,
)


class TestParseMajorAmount:
    @pytest.mark.parametrize(
        "value, expected",
        [
            ("25.00", Decimal("25.00")),
            (" 25 ", Decimal("25")),
            (25, Decimal("25")),
            (0.1, Decimal("0.1")),
            (Decimal("7.5"), Decimal("7.5")),
        ],
    )
    def test_valid(self, value, expected):
        assert parse_major_amount(value) == expected

    @pytest.mark.parametrize("value", [None, True, "", "abc", "Infinity", "NaN"])
    def test_invalid(self, value):
        with pytest.raises(ValueError):
            parse_major_amount(value)


class TestToMinorUnits:
    @pytest.mark.parametrize(
        "value, expected",
        [
            ("500", 50_000),
            ("25.5", 2_550),
            ("10.005", 1_001),
            ("10.004", 1_000),
            (0.29, 29),
        ],
    )
    def test_rounds_half_up(self, value, expected):
        assert to_minor_units(value) == expected


class TestFormatMinorUnits:
    @pytest.mark.parametrize(
        "value, expected",
        [(50_000, "500.00"), (5, "0.05"), (0, "0.00"), (None, "0.00")],
    )
    def test_format(self, value, expected):
        assert format_minor_units(value) == expected


class TestCalculatePagination:
    def test_middle_page(self):
        pagination = calculate_pagination(total=45, page=2, per_page=20)

        assert pagination == {
            "total": 45,
            "page": 2,
            "limit": 20,
            "total_pages": 3,
            "offset": 20,
            "has_next": True,
            "has_previous": True,
        }

    def test_empty(self):
        pagination = calculate_pagination(total=0, page=1, per_page=20)

        assert pagination["total_pages"] == 0
        assert pagination["has_next"] is False
        assert pagination["has_previous"] is False
