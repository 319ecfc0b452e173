"""
CPMM swap kernel (commission-on-output semantics).

- The gross output follows the constant product, floored as a whole:
    return_gross = floor(ask_pool - (offer_pool * ask_pool) / (offer_pool + offer_amount))
- Spread is measured against the pre-trade marginal price and floored at zero:
    spread = max(0, offer_amount * ask_pool // offer_pool - return_gross)
- Commission is taken from the gross output and stays in the pool:
    commission = return_gross * nom // denom
    return_amount = return_gross - commission

Reserve-scale products and quotients go through `u256_math`; any absent
intermediate fails the whole computation with a message naming the operands.
Results are narrowed to 128 bits at the end and never truncated.
"""

from __future__ import annotations

from dataclasses import dataclass

from ...errors import DegenerateStateError
from .decimal_math import Decimal
from .u256_math import add, checked, div, div_ceil, mul, saturating_sub, sub, to_uint128, u256


def _require_int(name: str, value: int) -> None:
    if not isinstance(value, int) or isinstance(value, bool):
        raise TypeError(f"{name} must be an int")


def _require_commission(nom: int, denom: int) -> None:
    _require_int("commission_rate_nom", nom)
    _require_int("commission_rate_denom", denom)
    if denom <= 0:
        raise DegenerateStateError(f"commission_rate_denom must be positive: {denom}")
    if not (0 <= nom <= denom):
        raise ValueError(f"commission_rate_nom must be in [0, {denom}]: {nom}")


@dataclass(frozen=True)
class SwapComputation:
    return_amount: int
    spread_amount: int
    commission_amount: int
    new_offer_pool: int
    new_ask_pool: int
    k_before: int
    k_after: int


@dataclass(frozen=True)
class OfferComputation:
    offer_amount: int
    spread_amount: int
    commission_amount: int


def compute_swap(
    *,
    offer_pool: int,
    ask_pool: int,
    offer_amount: int,
    commission_rate_nom: int,
    commission_rate_denom: int,
) -> SwapComputation:
    """
    Exact-in quote against true (or obfuscated, for simulations) reserves.

    `offer_pool` must exclude the offered amount.
    """
    for name, v in (
        ("offer_pool", offer_pool),
        ("ask_pool", ask_pool),
        ("offer_amount", offer_amount),
    ):
        _require_int(name, v)
        if v < 0:
            raise ValueError(f"{name} must be non-negative: {v}")
    _require_commission(commission_rate_nom, commission_rate_denom)
    if offer_pool == 0 or ask_pool == 0:
        raise DegenerateStateError(
            f"Cannot swap against an empty reserve: offer_pool {offer_pool}, ask_pool {ask_pool}"
        )

    offer_pool_w = u256(offer_pool)
    ask_pool_w = u256(ask_pool)
    offer_amount_w = u256(offer_amount)

    cp = checked(
        mul(offer_pool_w, ask_pool_w),
        f"Cannot calculate cp = offer_pool {offer_pool} * ask_pool {ask_pool}",
    )

    # floor(ask_pool - cp / d) == ask_pool - ceil(cp / d); the pool keeps the rounding unit.
    return_gross = checked(
        sub(ask_pool_w, div_ceil(cp, add(offer_pool_w, offer_amount_w))),
        f"Cannot calculate return_amount = (ask_pool {ask_pool} - cp {cp} / "
        f"(offer_pool {offer_pool} + offer_amount {offer_amount}))",
    )

    marginal_return = checked(
        div(mul(offer_amount_w, ask_pool_w), offer_pool_w),
        f"Cannot calculate offer_amount {offer_amount} * ask_pool {ask_pool} / offer_pool {offer_pool}",
    )
    spread_amount = saturating_sub(marginal_return, return_gross)

    commission_amount = checked(
        div(mul(u256(return_gross), u256(commission_rate_nom)), u256(commission_rate_denom)),
        f"Cannot calculate return_amount {return_gross} * commission_rate_nom {commission_rate_nom} "
        f"/ commission_rate_denom {commission_rate_denom}",
    )

    return_amount = checked(
        sub(u256(return_gross), u256(commission_amount)),
        f"Cannot calculate return_amount {return_gross} - commission_amount {commission_amount}",
    )

    new_offer_pool = offer_pool + offer_amount
    new_ask_pool = ask_pool - return_amount

    return SwapComputation(
        return_amount=to_uint128(return_amount, "return_amount"),
        spread_amount=to_uint128(spread_amount, "spread_amount"),
        commission_amount=to_uint128(commission_amount, "commission_amount"),
        new_offer_pool=new_offer_pool,
        new_ask_pool=new_ask_pool,
        k_before=cp,
        k_after=new_offer_pool * new_ask_pool,
    )


def compute_offer_amount(
    *,
    offer_pool: int,
    ask_pool: int,
    ask_amount: int,
    commission_rate_nom: int,
    commission_rate_denom: int,
) -> OfferComputation:
    """
    Exact-out quote (reverse simulation).

        offer_amount = cp // (ask_pool - ask_amount / (1 - commission_rate)) - offer_pool

    The fee back-calculation uses `Decimal`; this path only quotes and never
    drives a balance change.
    """
    for name, v in (
        ("offer_pool", offer_pool),
        ("ask_pool", ask_pool),
        ("ask_amount", ask_amount),
    ):
        _require_int(name, v)
        if v < 0:
            raise ValueError(f"{name} must be non-negative: {v}")
    _require_commission(commission_rate_nom, commission_rate_denom)
    if offer_pool == 0 or ask_pool == 0:
        raise DegenerateStateError(
            f"Cannot quote against an empty reserve: offer_pool {offer_pool}, ask_pool {ask_pool}"
        )

    cp = checked(
        mul(u256(offer_pool), u256(ask_pool)),
        f"Cannot calculate cp = offer_pool {offer_pool} * ask_pool {ask_pool}",
    )

    commission_rate = Decimal.from_ratio(commission_rate_nom, commission_rate_denom)
    one_minus_commission = Decimal.one().subtract(commission_rate)
    before_commission_deduction = one_minus_commission.reverse().mul_int(ask_amount)

    if before_commission_deduction >= ask_pool:
        raise DegenerateStateError(
            f"ask_amount {ask_amount} before commission ({before_commission_deduction}) "
            f"would exhaust ask_pool {ask_pool}"
        )

    offer_amount = checked(
        sub(div(u256(cp), sub(u256(ask_pool), u256(before_commission_deduction))), u256(offer_pool)),
        f"Cannot calculate offer_amount = cp {cp} / (ask_pool {ask_pool} - "
        f"{before_commission_deduction}) - offer_pool {offer_pool}",
    )

    spread_amount = saturating_sub(
        Decimal.from_ratio(ask_pool, offer_pool).mul_int(offer_amount),
        before_commission_deduction,
    )
    commission_amount = commission_rate.mul_int(before_commission_deduction)

    return OfferComputation(
        offer_amount=to_uint128(offer_amount, "offer_amount"),
        spread_amount=to_uint128(spread_amount, "spread_amount"),
        commission_amount=to_uint128(commission_amount, "commission_amount"),
    )
