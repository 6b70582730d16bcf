"""Unit tests for interpolation and rounding helpers"""

from lending_engine.utils.math_utils import (
    format_number,
    lerp,
    round_currency,
    round_half_up,
    round_to_int,
)


def test_lerp_interpolates_inside_band():
    assert lerp(5, 0, 10, 0, 100) == 50
    assert lerp(5, 0, 10, 100, 0) == 50


def test_lerp_clamps_outside_band():
    """Test values beyond the band edges pin to the edge outputs"""
    assert lerp(-1, 0, 10, 20, 30) == 20
    assert lerp(0, 0, 10, 20, 30) == 20
    assert lerp(10, 0, 10, 20, 30) == 30
    assert lerp(99, 0, 10, 20, 30) == 30


def test_halves_round_up():
    """Test .5 rounds up rather than to even"""
    assert round_to_int(0.5) == 1
    assert round_to_int(2.5) == 3
    assert round_to_int(2.4999) == 2
    assert round_half_up(12.5) == 13


def test_round_currency():
    assert round_currency(0.125) == 0.13
    assert round_currency(10.125) == 10.13
    assert round_currency(599.5505251) == 599.55
    assert round_currency(0.0) == 0.0


def test_format_number_drops_integral_decimal():
    assert format_number(600.0) == "600"
    assert format_number(0.0) == "0"
    assert format_number(599.55) == "599.55"
    assert format_number(12) == "12"
