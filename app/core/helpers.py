"""
Helper functions for common infrastructure operations.

This module provides domain-agnostic utility functions for:
- Money conversion between major units and integer minor units
- Pagination helpers

Amounts are stored and computed as integer minor units (paise, cents)
to avoid floating-point drift. Major-unit decimals only appear at the
API edge, as 2-fraction-digit strings.

Usage:
    from core.helpers import to_minor_units, format_minor_units

    paise = to_minor_units("25.00")  # 2500
    display = format_minor_units(2500)  # "25.00"
"""

from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

MINOR_UNITS_PER_MAJOR = 100

_TWO_PLACES = Decimal("0.01")


def parse_major_amount(value) -> Decimal:
    """
    Parse a major-unit amount (e.g. "25.00", 25, Decimal("25")) into a Decimal.

    Floats are converted through their string form so 0.1 stays 0.1.

    Raises:
        ValueError: If the value is missing, not numeric, or not finite
    """
    if value is None or isinstance(value, bool):
        raise ValueError("Amount is required")
    try:
        amount = Decimal(str(value).strip())
    except (InvalidOperation, ValueError) as e:
        raise ValueError(f"Invalid amount: {value!r}") from e
    if not amount.is_finite():
        raise ValueError(f"Invalid amount: {value!r}")
    return amount


def to_minor_units(value) -> int:
    """
    Convert a major-unit amount to integer minor units.

    Rounds half-up to the nearest minor unit.

    Example:
        to_minor_units("500")     # 50000
        to_minor_units("10.005")  # 1001
    """
    amount = parse_major_amount(value).quantize(_TWO_PLACES, rounding=ROUND_HALF_UP)
    return int(amount * MINOR_UNITS_PER_MAJOR)


def format_minor_units(amount_minor: int | None) -> str:
    """
    Render integer minor units as a major-unit string with 2 fraction digits.

    Example:
        format_minor_units(50000)  # "500.00"
    """
    value = Decimal(amount_minor or 0) / MINOR_UNITS_PER_MAJOR
    return str(value.quantize(_TWO_PLACES))


def calculate_pagination(total: int, page: int, per_page: int) -> dict:
    """
    Calculate pagination metadata.

    Args:
        total: Total number of items
        page: Current page number (1-indexed)
        per_page: Items per page

    Returns:
        Dict with pagination metadata

    Example:
        pagination = calculate_pagination(total=45, page=2, per_page=20)
        # {"total": 45, "page": 2, "limit": 20, "total_pages": 3, "offset": 20, ...}
    """
    total_pages = math.ceil(total / per_page) if per_page > 0 else 0
    page = max(1, page)

    has_next = page < total_pages
    has_previous = page > 1

    return {
        "total": total,
        "page": page,
        "limit": per_page,
        "total_pages": total_pages,
        "offset": (page - 1) * per_page,
        "has_next": has_next,
        "has_previous": has_previous,
    }
