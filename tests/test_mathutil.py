import math

import pytest

from enginekit.mathutil import (
    PI,
    PI_D,
    interpolate,
    is_power_of_two,
    safe_add,
    sq,
    to_rad,
    wrap_angle,
)


@pytest.mark.parametrize("n", [1, 2, 4, 64, 256, 1 << 20])
def test_powers_of_two(n):
    assert is_power_of_two(n) is True


@pytest.mark.parametrize("n", [0, 3, 6, 100, 255])
def test_not_powers_of_two(n):
    assert is_power_of_two(n) is False


def test_safe_add_within_range():
    top = (1 << 31) - 1
    assert safe_add(top - 1, 1) == top


def test_safe_add_signed_overflow():
    top = (1 << 31) - 1
    with pytest.raises(OverflowError):
        safe_add(top, 1)
    with pytest.raises(OverflowError):
        safe_add(-(1 << 31), -1)


def test_safe_add_unsigned_overflow():
    with pytest.raises(OverflowError):
        safe_add((1 << 8) - 1, 1, bits=8, signed=False)


def test_sq_is_even():
    assert sq(-4) == sq(4)
    assert sq(3) == 9


@pytest.mark.parametrize("theta", [0.0, 1.0, 3.0, 5.0, 10.0, 100.0])
def test_wrap_angle_bounds(theta):
    wrapped = wrap_angle(theta)
    assert -PI_D <= wrapped <= PI_D
    assert math.isclose(math.cos(wrapped), math.cos(theta), abs_tol=1e-9)


def test_wrap_angle_periodic():
    for theta in (0.2, 1.5, 2.9):
        assert math.isclose(wrap_angle(theta + 2 * PI_D), wrap_angle(theta), abs_tol=1e-9)


def test_to_rad_half_turn():
    assert math.isclose(to_rad(180.0), PI)
    assert to_rad(0.0) == 0.0


def test_interpolate_endpoints():
    assert interpolate(2.0, 10.0, 0.0) == 2.0
    assert interpolate(2.0, 10.0, 1.0) == 10.0
    assert 2.0 < interpolate(2.0, 10.0, 0.3) < interpolate(2.0, 10.0, 0.7) < 10.0