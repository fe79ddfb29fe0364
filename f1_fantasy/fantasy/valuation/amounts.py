"""
Integer rounding and value update arithmetic.

All rounding in the game sends exact halves toward positive infinity
(2.5 -> 3, -2.5 -> -2), matching how the default valuation table is seeded.
"""

import math
from decimal import Decimal
from fractions import Fraction


def round_half_ceiling(number):
    """Round to the nearest integer, exact halves rounding up"""
    if isinstance(number, Decimal):
        return math.floor(number + Decimal('0.5'))
    return math.floor(Fraction(number) + Fraction(1, 2))


def valuation_amount(value, percent):
    """
    Credits an asset gains (or loses) at the given percentage.

    >>> valuation_amount(200, 8)
    16
    """
    if percent is None:
        return 0
    return round_half_ceiling(Decimal(value) * Decimal(percent) / Decimal(100))


def apply_to_value(value, percent):
    """New value after applying a percentage change. No floor or ceiling."""
    return value + valuation_amount(value, percent)
