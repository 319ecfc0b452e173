"""
Fixed-point decimal kernel.

`Decimal` stores a non-negative ratio as `atomics / 10**18`. It is used for
commission rates, slippage tolerances, spread limits and belief prices; reserve
scale math never goes through it (see `u256_math`).

Rounding rules (all floor):
- `from_ratio(a, b) = a * 10**18 // b`
- `x.multiply(y) = x.atomics * y.atomics // 10**18`
- `x.reverse() = 10**36 // x.atomics`
- `x.mul_int(n) = n * x.atomics // 10**18`
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import total_ordering

from ...errors import ArithmeticOverflowError, DegenerateStateError
from .u256_math import checked, div, mul, sub, u256


DECIMAL_PLACES = 18
DECIMAL_FRACTIONAL = 10**DECIMAL_PLACES


def _require_int(name: str, value: int) -> None:
    if not isinstance(value, int) or isinstance(value, bool):
        raise TypeError(f"{name} must be an int")


@total_ordering
@dataclass(frozen=True)
class Decimal:
    atomics: int

    def __post_init__(self) -> None:
        _require_int("atomics", self.atomics)
        if self.atomics < 0:
            raise ValueError(f"Decimal must be non-negative: {self.atomics}")

    @classmethod
    def one(cls) -> "Decimal":
        return cls(DECIMAL_FRACTIONAL)

    @classmethod
    def zero(cls) -> "Decimal":
        return cls(0)

    @classmethod
    def percent(cls, value: int) -> "Decimal":
        return cls.from_ratio(value, 100)

    @classmethod
    def from_ratio(cls, numerator: int, denominator: int) -> "Decimal":
        _require_int("numerator", numerator)
        _require_int("denominator", denominator)
        if denominator == 0:
            raise DegenerateStateError(f"Cannot build Decimal ratio {numerator} / 0")
        atomics = checked(
            div(mul(u256(numerator), u256(DECIMAL_FRACTIONAL)), u256(denominator)),
            f"Cannot calculate Decimal ratio {numerator} / {denominator}",
        )
        return cls(atomics)

    @classmethod
    def from_str(cls, text: str) -> "Decimal":
        """Parse a plain decimal literal such as "0.01" or "3"."""
        if not isinstance(text, str):
            raise TypeError("Decimal literal must be a string")
        s = text.strip()
        if s in ("", "."):
            raise ValueError(f"invalid Decimal literal: {text!r}")
        whole, _, frac = s.partition(".")
        if not whole:
            whole = "0"
        if not whole.isdigit() or (frac and not frac.isdigit()):
            raise ValueError(f"invalid Decimal literal: {text!r}")
        if len(frac) > DECIMAL_PLACES:
            raise ValueError(f"Decimal literal has more than {DECIMAL_PLACES} fractional digits: {text!r}")
        return cls(int(whole) * DECIMAL_FRACTIONAL + int(frac.ljust(DECIMAL_PLACES, "0") or "0"))

    def multiply(self, other: "Decimal") -> "Decimal":
        atomics = checked(
            div(mul(u256(self.atomics), u256(other.atomics)), u256(DECIMAL_FRACTIONAL)),
            f"Cannot calculate Decimal {self} * {other}",
        )
        return Decimal(atomics)

    def subtract(self, other: "Decimal") -> "Decimal":
        atomics = sub(u256(self.atomics), u256(other.atomics))
        if atomics is None:
            raise ArithmeticOverflowError(f"Decimal subtraction underflow: {self} - {other}")
        return Decimal(atomics)

    def reverse(self) -> "Decimal":
        if self.atomics == 0:
            raise DegenerateStateError("Cannot reverse a zero Decimal")
        atomics = checked(
            div(u256(DECIMAL_FRACTIONAL * DECIMAL_FRACTIONAL), u256(self.atomics)),
            f"Cannot calculate 1 / {self}",
        )
        return Decimal(atomics)

    def mul_int(self, amount: int) -> int:
        """floor(amount * self)."""
        _require_int("amount", amount)
        return checked(
            div(mul(u256(amount), u256(self.atomics)), u256(DECIMAL_FRACTIONAL)),
            f"Cannot calculate {amount} * {self}",
        )

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Decimal):
            return NotImplemented
        return self.atomics < other.atomics

    def __str__(self) -> str:
        whole, frac = divmod(self.atomics, DECIMAL_FRACTIONAL)
        if frac == 0:
            return str(whole)
        return f"{whole}.{str(frac).rjust(DECIMAL_PLACES, '0').rstrip('0')}"
