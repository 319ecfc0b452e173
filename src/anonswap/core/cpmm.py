"""
Constant Product Market Maker (CPMM) engine for a two-asset pair.

This module exposes the swap and liquidity-share computations the pair
dispatcher commits. All of them are pure functions of their arguments.

Algorithm Design:
- Type: Checked 256-bit Integer Arithmetic / Floor Rounding
- Time Complexity: O(1) per operation
- Space Complexity: O(1) auxiliary
- Invariant: After each swap, x' * y' >= x * y (commission stays in the pool)
"""

from typing import Tuple

from ..errors import InvariantViolationError
from ..kernels.python.cpmm_swap import compute_offer_amount as _kernel_compute_offer_amount
from ..kernels.python.cpmm_swap import compute_swap as _kernel_compute_swap
from ..kernels.python.lp_shares import compute_additional_shares as _kernel_compute_additional_shares
from ..kernels.python.lp_shares import compute_initial_shares as _kernel_compute_initial_shares
from ..kernels.python.lp_shares import compute_withdrawal as _kernel_compute_withdrawal
from ..state.assets import Amount


def compute_swap(
    offer_pool: Amount,
    ask_pool: Amount,
    offer_amount: Amount,
    commission_rate_nom: int,
    commission_rate_denom: int,
) -> Tuple[Amount, Amount, Amount]:
    """
    Compute the output of an exact-in swap.

    This implements the CPMM formula:
        cp = offer_pool * ask_pool
        return_gross = ask_pool - ceil(cp / (offer_pool + offer_amount))
        spread = max(0, offer_amount * ask_pool // offer_pool - return_gross)
        commission = return_gross * nom // denom
        return_amount = return_gross - commission

    Args:
        offer_pool: Reserve of the offered asset, excluding `offer_amount`
        ask_pool: Reserve of the asked asset
        offer_amount: Amount swapped in
        commission_rate_nom: Commission numerator
        commission_rate_denom: Commission denominator

    Returns:
        Tuple of (return_amount, spread_amount, commission_amount)

    Raises:
        DegenerateStateError: If either reserve is zero
        ArithmeticOverflowError: If an intermediate or result is out of range
        InvariantViolationError: If the kernel result would shrink x * y
    """
    res = _kernel_compute_swap(
        offer_pool=offer_pool,
        ask_pool=ask_pool,
        offer_amount=offer_amount,
        commission_rate_nom=commission_rate_nom,
        commission_rate_denom=commission_rate_denom,
    )

    # Verify invariant: commission stays in the pool, so k must not decrease.
    if res.k_after < res.k_before:
        raise InvariantViolationError(f"Invariant violation: new_k ({res.k_after}) < old_k ({res.k_before})")

    return res.return_amount, res.spread_amount, res.commission_amount


def compute_offer_amount(
    offer_pool: Amount,
    ask_pool: Amount,
    ask_amount: Amount,
    commission_rate_nom: int,
    commission_rate_denom: int,
) -> Tuple[Amount, Amount, Amount]:
    """
    Compute the input required for a desired output (reverse simulation).

    Formula:
        offer_amount = cp // (ask_pool - ask_amount / (1 - commission_rate)) - offer_pool

    Only used to quote; never drives a balance change.

    Returns:
        Tuple of (offer_amount, spread_amount, commission_amount)

    Raises:
        DegenerateStateError: If a reserve is zero or the request would exhaust the ask pool
        ArithmeticOverflowError: If an intermediate or result is out of range
    """
    res = _kernel_compute_offer_amount(
        offer_pool=offer_pool,
        ask_pool=ask_pool,
        ask_amount=ask_amount,
        commission_rate_nom=commission_rate_nom,
        commission_rate_denom=commission_rate_denom,
    )
    return res.offer_amount, res.spread_amount, res.commission_amount


def compute_initial_shares(deposit0: Amount, deposit1: Amount) -> Amount:
    """
    Shares minted by the first deposit into a pair: floor(sqrt(deposit0 * deposit1)).
    """
    return _kernel_compute_initial_shares(deposit0=deposit0, deposit1=deposit1)


def compute_additional_shares(
    deposit0: Amount,
    deposit1: Amount,
    pool0: Amount,
    pool1: Amount,
    total_share: Amount,
) -> Amount:
    """
    Shares minted by a deposit into a funded pair.

    Formula:
        shares = min(deposit0 * total_share // pool0, deposit1 * total_share // pool1)

    The smaller side wins, so an unbalanced deposit never dilutes existing holders.

    Raises:
        DegenerateStateError: If either pool reserve is zero
        ArithmeticOverflowError: If a product is out of range
    """
    return _kernel_compute_additional_shares(
        deposit0=deposit0,
        deposit1=deposit1,
        pool0=pool0,
        pool1=pool1,
        total_share=total_share,
    )


def compute_withdrawal(reserve: Amount, burn_amount: Amount, total_share: Amount) -> Amount:
    """
    Amount of one reserve returned for burning `burn_amount` shares.

    Formula:
        amount = reserve * burn_amount // total_share

    `burn_amount <= total_share` is the share ledger's responsibility.

    Raises:
        DegenerateStateError: If total_share is zero
        ArithmeticOverflowError: If the product is out of range
    """
    return _kernel_compute_withdrawal(reserve=reserve, burn_amount=burn_amount, total_share=total_share)
