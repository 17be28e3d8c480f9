"""A bit set whose bits are named by the members of an enumeration."""

from __future__ import annotations

import enum
import functools
from typing import Optional


@functools.total_ordering
class EnumSet:
    """Flags drawn from ``enum_type`` stored as an unsigned integer of ``bits`` width.

    Arithmetic and shifting wrap around modulo ``2 ** bits``, like the
    unsigned storage integer it models.
    """

    __hash__ = None  # mutable

    def __init__(self, enum_type: type[enum.Enum], *args: enum.Enum, bits: int = 32) -> None:
        if bits <= 0:
            raise ValueError("bits must be positive")
        self._enum_type = enum_type
        self._bits = bits
        self._mask = (1 << bits) - 1
        self._value = self._combine(args)

    def _combine(self, members) -> int:
        value = 0
        for member in members:
            if not isinstance(member, self._enum_type):
                raise TypeError(
                    f"expected a member of {self._enum_type.__name__}, got {member!r}"
                )
            value |= int(member.value)
        return value & self._mask

    def _require(self, members) -> int:
        if not members:
            raise TypeError("at least one flag is required")
        return self._combine(members)

    def _coerce(self, other) -> Optional[int]:
        if isinstance(other, EnumSet) and other._enum_type is self._enum_type:
            return other._value
        if isinstance(other, self._enum_type):
            return int(other.value) & self._mask
        return None

    def _with_value(self, value: int) -> EnumSet:
        result = EnumSet(self._enum_type, bits=self._bits)
        result._value = value & self._mask
        return result

    @property
    def enum_type(self) -> type[enum.Enum]:
        return self._enum_type

    @property
    def bits(self) -> int:
        return self._bits

    def get(self) -> enum.Enum:
        """Return the stored bits as a value of the enumeration."""
        try:
            return self._enum_type(self._value)
        except ValueError as exc:
            raise ValueError(
                f"{self._value:#x} is not representable as {self._enum_type.__name__}"
            ) from exc

    def underlying(self) -> int:
        return self._value

    def set(self, *args: enum.Enum) -> EnumSet:
        self._value |= self._combine(args)
        return self

    def set_to(self, enabled: bool, *args: enum.Enum) -> EnumSet:
        """Set the given flags when ``enabled`` is true, clear them otherwise."""
        mask = self._combine(args)
        if enabled:
            self._value |= mask
        else:
            self._value &= ~mask & self._mask
        return self

    def reset(self, *args: enum.Enum) -> EnumSet:
        """Clear the given flags, or every flag when none is given."""
        if not args:
            self._value = 0
        else:
            self._value &= ~self._combine(args) & self._mask
        return self

    def any(self, *args: enum.Enum) -> bool:
        return (self._value & self._require(args)) != 0

    def all(self, *args: enum.Enum) -> bool:
        mask = self._require(args)
        return (self._value & mask) == mask

    def none(self, *args: enum.Enum) -> bool:
        return (self._value & self._require(args)) == 0

    def __bool__(self) -> bool:
        return self._value != 0

    def __eq__(self, other) -> bool:
        value = self._coerce(other)
        if value is None:
            return NotImplemented
        return self._value == value

    def __lt__(self, other) -> bool:
        value = self._coerce(other)
        if value is None:
            return NotImplemented
        return self._value < value

    def _binary(self, other, op, reflected: bool = False):
        value = self._coerce(other)
        if value is None:
            return NotImplemented
        if reflected:
            return self._with_value(op(value, self._value))
        return self._with_value(op(self._value, value))

    def __and__(self, other):
        return self._binary(other, lambda a, b: a & b)

    def __rand__(self, other):
        return self._binary(other, lambda a, b: a & b, reflected=True)

    def __or__(self, other):
        return self._binary(other, lambda a, b: a | b)

    def __ror__(self, other):
        return self._binary(other, lambda a, b: a | b, reflected=True)

    def __xor__(self, other):
        return self._binary(other, lambda a, b: a ^ b)

    def __rxor__(self, other):
        return self._binary(other, lambda a, b: a ^ b, reflected=True)

    def __add__(self, other):
        return self._binary(other, lambda a, b: a + b)

    def __radd__(self, other):
        return self._binary(other, lambda a, b: a + b, reflected=True)

    def __sub__(self, other):
        return self._binary(other, lambda a, b: a - b)

    def __rsub__(self, other):
        return self._binary(other, lambda a, b: a - b, reflected=True)

    def __lshift__(self, other):
        return self._binary(other, lambda a, b: a << b)

    def __rlshift__(self, other):
        return self._binary(other, lambda a, b: a << b, reflected=True)

    def __rshift__(self, other):
        return self._binary(other, lambda a, b: a >> b)

    def __rrshift__(self, other):
        return self._binary(other, lambda a, b: a >> b, reflected=True)

    def __invert__(self) -> EnumSet:
        return self._with_value(~self._value)

    def __repr__(self) -> str:
        return f"EnumSet({self._enum_type.__name__}, {self._value:#x}, bits={self._bits})"