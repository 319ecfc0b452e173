"""Economic guard rails for swaps and deposits.

Both guards run after the exact amounts are computed and before anything is
committed. They raise; they never adjust amounts.

The max-spread guard picks exactly one bound from the optional parameters the
caller supplied, in this priority order:

1. ``expected_return``
2. ``belief_price`` together with ``max_spread``
3. ``max_spread`` alone
4. nothing: the swap is unbounded

A caller passing both ``expected_return`` and ``max_spread`` is checked
against ``expected_return`` only.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence, Union

from ..errors import DegenerateStateError, ReturnBelowExpectedError, SlippageExceededError, SpreadExceededError
from ..kernels.python.decimal_math import Decimal
from ..kernels.python.u256_math import saturating_sub


@dataclass(frozen=True)
class ExpectedReturnBound:
    expected_return: int


@dataclass(frozen=True)
class BeliefPriceBound:
    belief_price: Decimal
    max_spread: Decimal


@dataclass(frozen=True)
class MaxSpreadBound:
    max_spread: Decimal


@dataclass(frozen=True)
class Unbounded:
    pass


SpreadBound = Union[ExpectedReturnBound, BeliefPriceBound, MaxSpreadBound, Unbounded]


def select_spread_bound(
    belief_price: Optional[Decimal],
    max_spread: Optional[Decimal],
    expected_return: Optional[int],
) -> SpreadBound:
    if expected_return is not None:
        return ExpectedReturnBound(expected_return)
    if belief_price is not None and max_spread is not None:
        return BeliefPriceBound(belief_price, max_spread)
    if max_spread is not None:
        return MaxSpreadBound(max_spread)
    return Unbounded()


def assert_max_spread(
    belief_price: Optional[Decimal],
    max_spread: Optional[Decimal],
    expected_return: Optional[int],
    offer_amount: int,
    return_amount: int,
    commission_amount: int,
    spread_amount: int,
) -> None:
    """
    Reject a swap whose realized output breaks the caller's bound.

    `return_amount` is net of commission; the spread modes compare against the
    gross output (`return_amount + commission_amount`).
    """
    match select_spread_bound(belief_price, max_spread, expected_return):
        case ExpectedReturnBound(expected):
            if return_amount < expected:
                raise ReturnBelowExpectedError(
                    f"Operation fell short of expected_return: {return_amount} < {expected}"
                )

        case BeliefPriceBound(price, limit):
            gross_return = return_amount + commission_amount
            expected = price.reverse().mul_int(offer_amount)
            shortfall = saturating_sub(expected, gross_return)
            if gross_return < expected and Decimal.from_ratio(shortfall, expected) > limit:
                raise SpreadExceededError(
                    f"Operation exceeds max spread limit with belief_price: "
                    f"expected {expected}, got {gross_return}, max_spread {limit}"
                )

        case MaxSpreadBound(limit):
            gross_return = return_amount + commission_amount
            total = gross_return + spread_amount
            if total == 0:
                raise DegenerateStateError("Cannot measure spread of a swap with zero output")
            if Decimal.from_ratio(spread_amount, total) > limit:
                raise SpreadExceededError(
                    f"Operation exceeds max spread limit: spread {spread_amount} of {total}, max_spread {limit}"
                )

        case Unbounded():
            pass


def assert_slippage_tolerance(
    slippage_tolerance: Optional[Decimal],
    deposits: Sequence[int],
    pools: Sequence[int],
) -> None:
    """
    Reject a deposit whose price is worse than the pool's by more than the tolerance.

    For both directions i -> j:
        deposits[i] / deposits[j] * (1 - tolerance) > pools[i] / pools[j]  =>  reject
    """
    if slippage_tolerance is None:
        return

    one_minus_slippage_tolerance = Decimal.one().subtract(slippage_tolerance)
    deposit0, deposit1 = deposits
    pool0, pool1 = pools

    if (
        Decimal.from_ratio(deposit0, deposit1).multiply(one_minus_slippage_tolerance)
        > Decimal.from_ratio(pool0, pool1)
        or Decimal.from_ratio(deposit1, deposit0).multiply(one_minus_slippage_tolerance)
        > Decimal.from_ratio(pool1, pool0)
    ):
        raise SlippageExceededError(
            f"Operation exceeds max slippage tolerance {slippage_tolerance}: "
            f"deposits ({deposit0}, {deposit1}) vs pools ({pool0}, {pool1})"
        )
