"""Small numeric helpers."""

from __future__ import annotations

import math

PI = 3.14159265
PI_D = 3.1415926535897932


def is_power_of_two(n: int) -> bool:
    return n != 0 and (n & (n - 1)) == 0


def safe_add(lhs: int, rhs: int, bits: int = 32, signed: bool = True) -> int:
    """Return ``lhs + rhs``, raising OverflowError if it leaves the integer range."""
    if signed:
        low, high = -(1 << (bits - 1)), (1 << (bits - 1)) - 1
    else:
        low, high = 0, (1 << bits) - 1
    total = lhs + rhs
    if total < low or total > high:
        raise OverflowError(f"{lhs} + {rhs} does not fit in {bits} bits")
    return total


def sq(x):
    return x * x


def wrap_angle(theta: float) -> float:
    """Reduce ``theta`` by whole turns so that it does not exceed pi."""
    modded = math.fmod(theta, 2.0 * PI_D)
    return modded - 2.0 * PI_D if modded > PI_D else modded


def interpolate(src, dst, alpha: float):
    return src + (dst - src) * alpha


def to_rad(deg: float) -> float:
    return deg * PI / 180.0