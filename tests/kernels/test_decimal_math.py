# [TESTER] v1

from __future__ import annotations

import pytest

from anonswap.errors import ArithmeticOverflowError, DegenerateStateError
from anonswap.kernels.python.decimal_math import DECIMAL_FRACTIONAL, Decimal


def test_from_str_matches_from_ratio() -> None:
    assert Decimal.from_str("0.01") == Decimal.percent(1)
    assert Decimal.from_str("3") == Decimal.from_ratio(3, 1)
    assert Decimal.from_str(".5") == Decimal.from_ratio(1, 2)


def test_from_str_rejects_garbage() -> None:
    for text in ("", "abc", "1.2.3", "-1", "0." + "1" * 19):
        with pytest.raises(ValueError):
            Decimal.from_str(text)


def test_str_is_minimal() -> None:
    assert str(Decimal.from_str("1.5")) == "1.5"
    assert str(Decimal.one()) == "1"
    assert str(Decimal.from_ratio(3, 1000)) == "0.003"


def test_reverse_floors() -> None:
    r = Decimal.from_ratio(997, 1000).reverse()
    assert r.atomics == DECIMAL_FRACTIONAL * DECIMAL_FRACTIONAL // (997 * 10**15)


def test_mul_int_floors() -> None:
    assert Decimal.from_ratio(3, 1000).mul_int(9900) == 29


def test_multiply_and_ordering() -> None:
    a = Decimal.from_ratio(101, 100)
    b = Decimal.from_ratio(99, 100)
    assert a.multiply(b) == Decimal.from_ratio(9999, 10000)
    assert b < a
    assert a >= b


def test_zero_divisors_are_degenerate() -> None:
    with pytest.raises(DegenerateStateError):
        Decimal.from_ratio(1, 0)
    with pytest.raises(DegenerateStateError):
        Decimal.zero().reverse()


def test_subtract_underflow_fails() -> None:
    assert Decimal.one().subtract(Decimal.percent(1)) == Decimal.from_ratio(99, 100)
    with pytest.raises(ArithmeticOverflowError, match="underflow"):
        Decimal.percent(1).subtract(Decimal.one())


def test_negative_atomics_rejected() -> None:
    with pytest.raises(ValueError):
        Decimal(-1)
