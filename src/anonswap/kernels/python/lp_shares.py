"""
Liquidity share kernel.

- Bootstrap deposit (total share supply is zero):
    shares = floor(sqrt(deposit0 * deposit1))
- Later deposits, pro-rata to the side that buys fewer shares:
    shares = min(deposit0 * total_share // pool0, deposit1 * total_share // pool1)
- Withdrawal, per side:
    amount = reserve * burn_amount // total_share

No minimum-liquidity lock is applied: the share supply is owned by an external
ledger and starts at exactly the bootstrap amount.
"""

from __future__ import annotations

from .u256_math import checked, div, mul, sqrt, to_uint128, u256
from ...errors import DegenerateStateError


def _require_amount(name: str, value: int) -> None:
    if not isinstance(value, int) or isinstance(value, bool):
        raise TypeError(f"{name} must be an int")
    if value < 0:
        raise ValueError(f"{name} must be non-negative: {value}")


def compute_initial_shares(*, deposit0: int, deposit1: int) -> int:
    _require_amount("deposit0", deposit0)
    _require_amount("deposit1", deposit1)

    shares = checked(
        sqrt(mul(u256(deposit0), u256(deposit1))),
        f"Cannot calculate sqrt(deposit_0 {deposit0} * deposit_1 {deposit1})",
    )
    return to_uint128(shares, "shares")


def _pro_rata(deposit: int, total_share: int, pool: int, side: int) -> int:
    return checked(
        div(mul(u256(deposit), u256(total_share)), u256(pool)),
        f"Cannot calculate deposits[{side}] {deposit} * total_share {total_share} / pools[{side}] {pool}",
    )


def compute_additional_shares(
    *,
    deposit0: int,
    deposit1: int,
    pool0: int,
    pool1: int,
    total_share: int,
) -> int:
    for name, v in (
        ("deposit0", deposit0),
        ("deposit1", deposit1),
        ("pool0", pool0),
        ("pool1", pool1),
        ("total_share", total_share),
    ):
        _require_amount(name, v)
    if pool0 == 0 or pool1 == 0:
        raise DegenerateStateError(f"Cannot add liquidity pro-rata to an empty pool: ({pool0}, {pool1})")

    share0 = _pro_rata(deposit0, total_share, pool0, 0)
    share1 = _pro_rata(deposit1, total_share, pool1, 1)
    return to_uint128(min(share0, share1), "shares")


def compute_withdrawal(*, reserve: int, burn_amount: int, total_share: int) -> int:
    for name, v in (
        ("reserve", reserve),
        ("burn_amount", burn_amount),
        ("total_share", total_share),
    ):
        _require_amount(name, v)
    if total_share == 0:
        raise DegenerateStateError("Cannot withdraw liquidity: total_share is zero")

    amount = checked(
        div(mul(u256(reserve), u256(burn_amount)), u256(total_share)),
        f"Cannot calculate current_pool_amount {reserve} * withdrawn_share_amount {burn_amount} "
        f"/ total_share {total_share}",
    )
    return to_uint128(amount, "withdrawn_asset_amount")
