"""
Checked 256-bit unsigned integer arithmetic.

Every operation takes optional operands and returns an optional result:
- an absent operand propagates (`None` in, `None` out),
- overflow past `U256_MAX`, underflow below zero and division by zero yield `None`.

This lets a formula be written as one nested expression, e.g.
`sub(ask_pool, div(cp, add(offer_pool, offer_amount)))`, with a single
`checked(...)` at the end that turns an absent result into a typed error.
"""

from __future__ import annotations

import math
from typing import Optional

from ...errors import ArithmeticOverflowError


U256_MAX = (1 << 256) - 1
U128_MAX = (1 << 128) - 1

U256 = Optional[int]


def _require_int(name: str, value: int) -> None:
    if not isinstance(value, int) or isinstance(value, bool):
        raise TypeError(f"{name} must be an int")


def u256(value: int) -> U256:
    """Lift a plain int into the checked domain (`None` if out of range)."""
    _require_int("value", value)
    if value < 0 or value > U256_MAX:
        return None
    return value


def _in_range(value: int) -> U256:
    if value < 0 or value > U256_MAX:
        return None
    return value


def add(a: U256, b: U256) -> U256:
    if a is None or b is None:
        return None
    return _in_range(a + b)


def sub(a: U256, b: U256) -> U256:
    if a is None or b is None:
        return None
    return _in_range(a - b)


def mul(a: U256, b: U256) -> U256:
    if a is None or b is None:
        return None
    return _in_range(a * b)


def div(a: U256, b: U256) -> U256:
    if a is None or b is None or b == 0:
        return None
    return a // b


def div_ceil(a: U256, b: U256) -> U256:
    """ceil(a / b); same absence rules as `div`."""
    if a is None or b is None or b == 0:
        return None
    return -(-a // b)


def sqrt(a: U256) -> U256:
    """floor(sqrt(a)), exact for any size."""
    if a is None:
        return None
    return math.isqrt(a)


def saturating_sub(a: int, b: int) -> int:
    """max(0, a - b) for two present values."""
    return a - b if a > b else 0


def checked(value: U256, message: str) -> int:
    """Return `value` or raise `ArithmeticOverflowError(message)` if it is absent."""
    if value is None:
        raise ArithmeticOverflowError(message)
    return value


def to_uint128(value: int, name: str) -> int:
    """Narrow a wide result to the native amount range. Never truncates."""
    _require_int(name, value)
    if value < 0 or value > U128_MAX:
        raise ArithmeticOverflowError(f"{name} {value} does not fit in 128 bits")
    return value
