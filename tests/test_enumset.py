import enum

import pytest

from enginekit.enumset import EnumSet


class F(enum.IntFlag):
    A = 1
    B = 2
    C = 4
    D = 8


class Other(enum.IntFlag):
    X = 1


def test_empty_set_is_false():
    assert not EnumSet(F)
    assert EnumSet(F).underlying() == 0


def test_constructor_combines_members():
    s = EnumSet(F, F.A, F.C)
    assert s.underlying() == int(F.A | F.C)
    assert s.get() == F.A | F.C


def test_set_and_queries():
    s = EnumSet(F)
    s.set(F.A, F.B)
    assert s.all(F.A, F.B)
    assert s.any(F.B, F.C)
    assert s.none(F.C, F.D)
    assert not s.all(F.A, F.C)


def test_set_returns_self():
    s = EnumSet(F)
    assert s.set(F.A) is s


def test_reset_specific_and_all():
    s = EnumSet(F, F.A, F.B, F.C)
    s.reset(F.B)
    assert s == EnumSet(F, F.A, F.C)
    s.reset()
    assert not s


def test_set_to_enables_and_clears():
    s = EnumSet(F, F.A)
    s.set_to(True, F.C)
    assert s.all(F.A, F.C)
    s.set_to(False, F.A)
    assert s == F.C


def test_queries_need_arguments():
    with pytest.raises(TypeError):
        EnumSet(F).any()


def test_rejects_foreign_members():
    with pytest.raises(TypeError):
        EnumSet(F, Other.X)


def test_equality_with_member_both_ways():
    s = EnumSet(F, F.B)
    assert s == F.B
    assert F.B == s
    assert s != F.A


def test_or_and_xor():
    a = EnumSet(F, F.A)
    assert a | F.B == EnumSet(F, F.A, F.B)
    assert F.B | a == EnumSet(F, F.A, F.B)
    assert (EnumSet(F, F.A, F.B) & F.B) == F.B
    assert not (a ^ a)


def test_ordering():
    assert EnumSet(F, F.A) < EnumSet(F, F.B)
    assert EnumSet(F, F.C) > F.B
    assert EnumSet(F, F.A) <= F.A


def test_add_sub_round_trip():
    s = EnumSet(F, F.B)
    assert (s + F.A) - F.A == s


def test_shift_moves_bits():
    s = EnumSet(F, F.A)
    assert (s << F.A) == F.B
    assert (EnumSet(F, F.D) >> F.A) == F.C


def test_subtraction_wraps_at_bit_width():
    s = EnumSet(F, bits=8)
    assert (s - F.A).underlying() == 255


def test_invert_is_involution():
    s = EnumSet(F, F.A, F.D, bits=8)
    assert ~~s == s
    assert not (~s & s)
    assert (~s | s).underlying() == (1 << 8) - 1


def test_not_hashable():
    with pytest.raises(TypeError):
        hash(EnumSet(F))


def test_invalid_bits():
    with pytest.raises(ValueError):
        EnumSet(F, bits=0)