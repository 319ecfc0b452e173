# [TESTER] v1

from __future__ import annotations

import pytest

from anonswap.errors import ArithmeticOverflowError
from anonswap.kernels.python.u256_math import (
    U128_MAX,
    U256_MAX,
    add,
    checked,
    div,
    div_ceil,
    mul,
    saturating_sub,
    sqrt,
    sub,
    to_uint128,
    u256,
)


def test_out_of_range_values_are_absent() -> None:
    assert u256(-1) is None
    assert u256(U256_MAX + 1) is None
    assert u256(U256_MAX) == U256_MAX


def test_overflow_underflow_and_zero_division_are_absent() -> None:
    assert add(U256_MAX, 1) is None
    assert sub(0, 1) is None
    assert mul(1 << 128, 1 << 128) is None
    assert div(5, 0) is None
    assert div_ceil(5, 0) is None


def test_absent_operands_propagate_through_nested_formulas() -> None:
    # sub(ask, div(cp, add(op, oa))) with an overflowing cp
    cp = mul(U256_MAX, 2)
    assert sub(10, div(cp, add(1, 2))) is None


def test_div_ceil_rounds_up_only_on_remainder() -> None:
    assert div_ceil(6, 2) == 3
    assert div_ceil(7, 2) == 4
    assert div_ceil(0, 9) == 0


def test_sqrt_is_exact_integer_floor() -> None:
    n = (1 << 200) + 1
    root = sqrt(n)
    assert root * root <= n < (root + 1) * (root + 1)
    assert sqrt(10100) == 100


def test_checked_raises_with_message() -> None:
    assert checked(7, "never") == 7
    with pytest.raises(ArithmeticOverflowError, match="Cannot calculate"):
        checked(None, "Cannot calculate x")


def test_to_uint128_never_truncates() -> None:
    assert to_uint128(U128_MAX, "x") == U128_MAX
    with pytest.raises(ArithmeticOverflowError, match="does not fit in 128 bits"):
        to_uint128(U128_MAX + 1, "x")


def test_saturating_sub_floors_at_zero() -> None:
    assert saturating_sub(5, 3) == 2
    assert saturating_sub(3, 5) == 0


def test_bool_is_not_an_int() -> None:
    with pytest.raises(TypeError):
        u256(True)
