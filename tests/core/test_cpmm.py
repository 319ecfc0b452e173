# [TESTER] v1

from __future__ import annotations

import math

import hypothesis.strategies as st
import pytest
from hypothesis import assume, given, settings

from anonswap.errors import DegenerateStateError, InvariantViolationError
from anonswap.core import cpmm as cpmm_module
from anonswap.core.cpmm import (
    compute_additional_shares,
    compute_initial_shares,
    compute_offer_amount,
    compute_swap,
    compute_withdrawal,
)
from anonswap.kernels.python.cpmm_swap import SwapComputation


RESERVE = st.integers(min_value=1, max_value=10**18)


@settings(max_examples=300, deadline=None)
@given(
    offer_pool=RESERVE,
    ask_pool=RESERVE,
    offer_amount=RESERVE,
    nom=st.integers(min_value=0, max_value=1000),
)
def test_swap_never_decreases_the_product(offer_pool: int, ask_pool: int, offer_amount: int, nom: int) -> None:
    return_amount, _, commission_amount = compute_swap(offer_pool, ask_pool, offer_amount, nom, 1000)

    old_k = offer_pool * ask_pool
    # Before commission the curve alone must hold.
    assert (offer_pool + offer_amount) * (ask_pool - return_amount - commission_amount) >= old_k
    # Commission stays in the pool.
    assert (offer_pool + offer_amount) * (ask_pool - return_amount) >= old_k
    assert return_amount + commission_amount < ask_pool


@settings(max_examples=300, deadline=None)
@given(
    pool=st.integers(min_value=10**3, max_value=10**18),
    data=st.data(),
    nom=st.integers(min_value=0, max_value=10),
)
def test_reverse_quote_recovers_the_offer(pool: int, data, nom: int) -> None:
    offer_amount = data.draw(st.integers(min_value=1, max_value=pool // 100))
    return_amount, _, _ = compute_swap(pool, pool, offer_amount, nom, 1000)
    assume(return_amount > 0)

    recovered, _, _ = compute_offer_amount(pool, pool, return_amount, nom, 1000)
    assert abs(recovered - offer_amount) <= 4


def test_swap_and_reverse_quote_reference() -> None:
    return_amount, spread, commission = compute_swap(1_000_000, 1_000_000, 10_000, 3, 1000)
    assert (return_amount, spread, commission) == (9871, 100, 29)
    # 10**12 // (1_000_000 - 9900) - 1_000_000
    assert compute_offer_amount(1_000_000, 1_000_000, return_amount, 3, 1000) == (9998, 98, 29)


def test_initial_shares_reference() -> None:
    assert compute_initial_shares(100, 400) == 200
    assert compute_initial_shares(100, 101) == math.isqrt(10100) == 100


@settings(max_examples=200, deadline=None)
@given(
    pool0=st.integers(min_value=1, max_value=10**18),
    pool1=st.integers(min_value=1, max_value=10**18),
    total_share=st.integers(min_value=1, max_value=10**18),
    fixed=st.integers(min_value=0, max_value=10**18),
    a=st.integers(min_value=0, max_value=10**18),
    b=st.integers(min_value=0, max_value=10**18),
)
def test_additional_shares_monotone_in_each_deposit(
    pool0: int, pool1: int, total_share: int, fixed: int, a: int, b: int
) -> None:
    lo, hi = min(a, b), max(a, b)
    assert compute_additional_shares(lo, fixed, pool0, pool1, total_share) <= compute_additional_shares(
        hi, fixed, pool0, pool1, total_share
    )
    assert compute_additional_shares(fixed, lo, pool0, pool1, total_share) <= compute_additional_shares(
        fixed, hi, pool0, pool1, total_share
    )


def _redeposit_after_withdraw(reserve0: int, reserve1: int, total_share: int, burn: int) -> int:
    refund0 = compute_withdrawal(reserve0, burn, total_share)
    refund1 = compute_withdrawal(reserve1, burn, total_share)
    remaining = total_share - burn
    if remaining == 0:
        return compute_initial_shares(refund0, refund1)
    return compute_additional_shares(refund0, refund1, reserve0 - refund0, reserve1 - refund1, remaining)


@pytest.mark.parametrize(
    "reserve0,reserve1",
    [
        (1_000_000, 1_000_000),  # balanced
        (10_000, 1_000_000),  # skewed 1:100
        (1, 1),  # near-empty
    ],
)
def test_withdraw_then_redeposit_never_mints_more_than_burned(reserve0: int, reserve1: int) -> None:
    total_share = compute_initial_shares(reserve0, reserve1)
    burns = {1, total_share // 3, total_share // 2, total_share - 1, total_share}
    for burn in sorted(b for b in burns if b >= 1):
        assert _redeposit_after_withdraw(reserve0, reserve1, total_share, burn) <= burn


@settings(max_examples=200, deadline=None)
@given(
    reserve0=st.integers(min_value=1, max_value=10**30),
    reserve1=st.integers(min_value=1, max_value=10**30),
    total_share=st.integers(min_value=2, max_value=10**30),
    data=st.data(),
)
def test_withdraw_then_redeposit_never_creates_shares(reserve0: int, reserve1: int, total_share: int, data) -> None:
    burn = data.draw(st.integers(min_value=1, max_value=total_share - 1))
    refund0 = compute_withdrawal(reserve0, burn, total_share)
    refund1 = compute_withdrawal(reserve1, burn, total_share)
    # A partial burn always leaves something behind on each side.
    assert refund0 < reserve0 and refund1 < reserve1
    minted = compute_additional_shares(refund0, refund1, reserve0 - refund0, reserve1 - refund1, total_share - burn)
    assert minted <= burn


@settings(max_examples=300, deadline=None)
@given(
    reserve=st.integers(min_value=0, max_value=10**30),
    total_share=st.integers(min_value=1, max_value=10**30),
    data=st.data(),
)
def test_withdrawal_never_pays_more_than_the_reserve(reserve: int, total_share: int, data) -> None:
    burn = data.draw(st.integers(min_value=0, max_value=total_share))
    refund = compute_withdrawal(reserve, burn, total_share)
    assert refund <= reserve
    assert compute_withdrawal(reserve, total_share, total_share) == reserve
    assert compute_withdrawal(reserve, 0, total_share) == 0


def test_zero_divisors_are_degenerate() -> None:
    with pytest.raises(DegenerateStateError):
        compute_withdrawal(1000, 10, 0)
    with pytest.raises(DegenerateStateError):
        compute_swap(0, 1000, 10, 3, 1000)
    with pytest.raises(DegenerateStateError):
        compute_offer_amount(1000, 0, 10, 3, 1000)
    with pytest.raises(DegenerateStateError):
        compute_additional_shares(10, 10, 0, 0, 100)


def test_invariant_check_rejects_a_kernel_that_loses_value(monkeypatch: pytest.MonkeyPatch) -> None:
    def broken_kernel(**_kwargs) -> SwapComputation:
        return SwapComputation(
            return_amount=10,
            spread_amount=0,
            commission_amount=0,
            new_offer_pool=100,
            new_ask_pool=90,
            k_before=10_000,
            k_after=9_000,
        )

    monkeypatch.setattr(cpmm_module, "_kernel_compute_swap", broken_kernel)
    with pytest.raises(InvariantViolationError, match="new_k \\(9000\\) < old_k \\(10000\\)") as excinfo:
        compute_swap(100, 100, 0, 0, 1)
    assert excinfo.value.code == "invariant_violation"
