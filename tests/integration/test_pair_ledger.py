# [TESTER] v1

from __future__ import annotations

import pytest

from anonswap.core.collaborators import PairSettings
from anonswap.core.pair import (
    MintShares,
    PairDeps,
    SwapAction,
    TransferFrom,
    handle,
    provide_liquidity,
    query_pool,
    swap,
    withdraw_liquidity,
)
from anonswap.integration import InMemoryPoolLedger, Sha256EntropyPool, StaticPairSettings
from anonswap.state.assets import Asset, AssetInfo
from anonswap.state.pools import create_pair_info


NATIVE = AssetInfo.native("uscrt")
TOKEN = AssetInfo.token("secret1token", token_code_hash="cd" * 32)
PAIR = create_pair_info((NATIVE, TOKEN), "secret1lp")


def _setup() -> tuple[InMemoryPoolLedger, PairDeps]:
    ledger = InMemoryPoolLedger("secret1pair")
    deps = PairDeps(
        ledger=ledger,
        settings=StaticPairSettings(PairSettings(commission_rate_nom=3, commission_rate_denom=1000)),
        entropy=Sha256EntropyPool(b"test"),
    )
    return ledger, deps


def _bootstrap(ledger: InMemoryPoolLedger, deps: PairDeps) -> None:
    ledger.mint("alice", Asset(NATIVE, 1_000_000))
    ledger.mint("alice", Asset(TOKEN, 4_000_000))
    ledger.receive("alice", Asset(NATIVE, 1_000_000))
    res = provide_liquidity(deps, PAIR, [Asset(NATIVE, 1_000_000), Asset(TOKEN, 4_000_000)], sender="alice")
    ledger.apply_effects(res.effects)


def test_provide_swap_withdraw_lifecycle() -> None:
    ledger, deps = _setup()
    _bootstrap(ledger, deps)

    assert ledger.query_pools(PAIR) == (Asset(NATIVE, 1_000_000), Asset(TOKEN, 4_000_000))
    assert ledger.shares.get("alice") == 2_000_000
    assert ledger.balances.get("alice", NATIVE) == 0
    assert ledger.balances.get("alice", TOKEN) == 0

    k_before = 1_000_000 * 4_000_000
    ledger.mint("bob", Asset(NATIVE, 10_000))
    ledger.receive("bob", Asset(NATIVE, 10_000))
    res = swap(deps, PAIR, Asset(NATIVE, 10_000), sender="bob")
    ledger.apply_effects(res.effects)

    bob_tokens = ledger.balances.get("bob", TOKEN)
    assert bob_tokens == res.return_asset.amount > 0
    pool0, pool1 = ledger.query_pools(PAIR)
    assert pool0.amount == 1_010_000
    assert pool0.amount * pool1.amount >= k_before

    res = withdraw_liquidity(deps, PAIR, sender="alice", amount=1_000_000)
    ledger.apply_effects(res.effects)
    assert ledger.shares.total_supply == 1_000_000
    assert ledger.balances.get("alice", NATIVE) == 505_000
    assert ledger.balances.get("alice", TOKEN) == pool1.amount // 2
    assert ledger.shares.verify_supply()

    # Nothing is created or destroyed.
    assert ledger.balances.total(NATIVE) == 1_010_000
    assert ledger.balances.total(TOKEN) == 4_000_000


def test_handle_leaves_ledger_untouched_on_rejection() -> None:
    ledger, deps = _setup()
    _bootstrap(ledger, deps)
    ledger.mint("bob", Asset(NATIVE, 10_000))
    ledger.receive("bob", Asset(NATIVE, 10_000))
    step = handle(deps, PAIR, SwapAction(sender="bob", offer_asset=Asset(NATIVE, 10_000), expected_return=10**9))
    assert not step.ok
    assert ledger.balances.get("bob", TOKEN) == 0


def test_query_pool_does_not_change_true_reserves() -> None:
    ledger, deps = _setup()
    _bootstrap(ledger, deps)
    before = ledger.query_pools(PAIR)
    reports = [query_pool(deps, PAIR) for _ in range(20)]
    assert ledger.query_pools(PAIR) == before
    assert len({r.assets[0].amount for r in reports}) > 1


def test_apply_effects_is_all_or_nothing() -> None:
    ledger, _ = _setup()
    effects = (
        MintShares(recipient="alice", amount=5),
        TransferFrom(asset=Asset(TOKEN, 1), owner="nobody"),
    )
    with pytest.raises(ValueError, match="Insufficient balance"):
        ledger.apply_effects(effects)
    assert ledger.shares.total_supply == 0


def test_apply_effects_rejects_unknown_effects() -> None:
    ledger, _ = _setup()
    with pytest.raises(TypeError, match="unknown effect"):
        ledger.apply_effects([object()])  # type: ignore[list-item]


def test_settings_update_applies_to_next_swap() -> None:
    ledger, deps = _setup()
    _bootstrap(ledger, deps)
    ledger.mint("bob", Asset(NATIVE, 10_000))
    ledger.receive("bob", Asset(NATIVE, 10_000))

    with_fee = swap(deps, PAIR, Asset(NATIVE, 10_000), sender="bob")
    deps.settings.update(PairSettings(commission_rate_nom=0, commission_rate_denom=1))
    without_fee = swap(deps, PAIR, Asset(NATIVE, 10_000), sender="bob")
    assert without_fee.commission_amount == 0
    assert without_fee.return_asset.amount == with_fee.return_asset.amount + with_fee.commission_amount
