"""Numeric helpers shared by the scoring and amortization engines"""

import math


def lerp(x: float, x0: float, x1: float, y0: float, y1: float) -> float:
    """Linear interpolation of x over [x0, x1] onto [y0, y1], clamped at both ends"""
    if x <= x0:
        return y0
    if x >= x1:
        return y1
    return y0 + ((x - x0) / (x1 - x0)) * (y1 - y0)


def round_half_up(value: float, ndigits: int = 0) -> float:
    """Round with halves going up (2.5 -> 3), unlike round() which rounds half to even"""
    factor = 10 ** ndigits
    return math.floor(value * factor + 0.5) / factor


def round_to_int(value: float) -> int:
    """Half-up rounding to the nearest integer"""
    return int(math.floor(value + 0.5))


def round_currency(value: float) -> float:
    """Round a currency amount to cents"""
    return round_half_up(value, 2)


def format_number(value: float) -> str:
    """Shortest display form of a number; integral floats drop the decimal point"""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)
