"""Numeric helpers for percentages and display rounding"""

import math
from decimal import Decimal, ROUND_FLOOR
from typing import Union

Number = Union[int, float, Decimal]


def clamp(value: Number, low: Number = 0, high: Number = 100) -> Number:
    return max(low, min(value, high))


def round_half_up(value: Number) -> int:
    """Round to nearest integer, ties toward +infinity (2.5 -> 3, -2.5 -> -2)"""
    if isinstance(value, Decimal):
        return int((value + Decimal("0.5")).to_integral_value(rounding=ROUND_FLOOR))
    return int(math.floor(value + 0.5))


def safe_ratio(numerator: Decimal, denominator: Decimal) -> Decimal:
    """numerator / denominator, or 0 when the denominator is not positive"""
    if denominator <= 0:
        return Decimal("0")
    return numerator / denominator
