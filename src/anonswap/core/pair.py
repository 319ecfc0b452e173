"""
Pair dispatcher (functional core).

This module wires the CPMM engine, the guards and the obfuscation transform
into the operations of one two-asset pair:

- `swap`, `provide_liquidity`, `withdraw_liquidity` run on the ledger's true
  reserves and return the exact effects the ledger must apply.
- `query_pool`, `query_simulation`, `query_reverse_simulation` are read-only
  and see reserves through one fresh obfuscation draw each.

Nothing here stores state. `PairInfo` comes in by value; a swap returns the
updated copy. `handle(...)` is the single entry point for typed actions and
reports failures as a `PairStepResult`; `handle_or_raise(...)` propagates them.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, Optional, Sequence, Tuple, Type, Union

from ..errors import DegenerateStateError, PairError
from ..kernels.python.decimal_math import Decimal
from ..kernels.python.u256_math import checked, sub, u256
from ..state.assets import Amount, Asset
from ..state.balances import Holder
from ..state.pools import PairInfo, match_assets
from .collaborators import EntropySource, PairSettingsQuery, PoolLedger
from .cpmm import (
    compute_additional_shares,
    compute_initial_shares,
    compute_offer_amount,
    compute_swap,
    compute_withdrawal,
)
from .guards import assert_max_spread, assert_slippage_tolerance
from .obfuscation import obfuscate, obfuscate_reserves


logger = logging.getLogger(__name__)


# -- Effects -----------------------------------------------------------------


@dataclass(frozen=True)
class Transfer:
    """Pay `asset` from the pair to `recipient`."""

    asset: Asset
    recipient: Holder


@dataclass(frozen=True)
class TransferFrom:
    """Pull a token deposit from `owner` into the pair."""

    asset: Asset
    owner: Holder


@dataclass(frozen=True)
class MintShares:
    recipient: Holder
    amount: Amount


@dataclass(frozen=True)
class BurnShares:
    owner: Holder
    amount: Amount


Effect = Union[Transfer, TransferFrom, MintShares, BurnShares]


# -- Results -----------------------------------------------------------------


@dataclass(frozen=True)
class PairDeps:
    ledger: PoolLedger
    settings: PairSettingsQuery
    entropy: EntropySource


@dataclass(frozen=True)
class SwapResult:
    pair_info: PairInfo
    offer_asset: Asset
    return_asset: Asset
    spread_amount: Amount
    commission_amount: Amount
    effects: Tuple[Effect, ...]


@dataclass(frozen=True)
class ProvideLiquidityResult:
    deposits: Tuple[Asset, Asset]
    share: Amount
    effects: Tuple[Effect, ...]


@dataclass(frozen=True)
class WithdrawLiquidityResult:
    refund_assets: Tuple[Asset, Asset]
    withdrawn_share: Amount
    effects: Tuple[Effect, ...]


@dataclass(frozen=True)
class PoolResponse:
    assets: Tuple[Asset, Asset]
    total_share: Amount


@dataclass(frozen=True)
class SimulationResponse:
    return_amount: Amount
    spread_amount: Amount
    commission_amount: Amount


@dataclass(frozen=True)
class ReverseSimulationResponse:
    offer_amount: Amount
    spread_amount: Amount
    commission_amount: Amount


# -- State-changing operations -----------------------------------------------


def swap(
    deps: PairDeps,
    pair_info: PairInfo,
    offer_asset: Asset,
    *,
    sender: Holder,
    to: Optional[Holder] = None,
    expected_return: Optional[Amount] = None,
    belief_price: Optional[Decimal] = None,
    max_spread: Optional[Decimal] = None,
) -> SwapResult:
    """
    Sell `offer_asset` for the other side of the pair.

    The ledger's reserves already include the offered amount, so it is taken
    back out of the offer side before pricing.
    """
    side = pair_info.side_of(offer_asset.info)
    pools = deps.ledger.query_pools(pair_info)
    offer_pool = pools[side]
    ask_pool = pools[1 - side]

    offer_pool_amount = checked(
        sub(u256(offer_pool.amount), u256(offer_asset.amount)),
        f"offer_amount {offer_asset.amount} larger than pool_amount + offer_amount {offer_pool.amount}",
    )

    settings = deps.settings.query_settings()
    return_amount, spread_amount, commission_amount = compute_swap(
        offer_pool_amount,
        ask_pool.amount,
        offer_asset.amount,
        settings.commission_rate_nom,
        settings.commission_rate_denom,
    )

    assert_max_spread(
        belief_price,
        max_spread,
        expected_return,
        offer_asset.amount,
        return_amount,
        commission_amount,
        spread_amount,
    )

    return_asset = Asset(info=ask_pool.info, amount=return_amount)
    recipient = to if to is not None else sender

    logger.info(
        "swap pair=%s offer=%s return=%s spread=%d commission=%d recipient=%s",
        pair_info, offer_asset, return_asset, spread_amount, commission_amount, recipient,
    )

    return SwapResult(
        pair_info=pair_info.with_volume(side, offer_asset.amount),
        offer_asset=offer_asset,
        return_asset=return_asset,
        spread_amount=spread_amount,
        commission_amount=commission_amount,
        effects=(Transfer(asset=return_asset, recipient=recipient),),
    )


def provide_liquidity(
    deps: PairDeps,
    pair_info: PairInfo,
    assets: Sequence[Asset],
    *,
    sender: Holder,
    slippage_tolerance: Optional[Decimal] = None,
) -> ProvideLiquidityResult:
    """
    Deposit both assets and mint shares to `sender`.

    Native deposits arrive with the call and are already counted in the
    ledger's reserves; token deposits are pulled by a `TransferFrom` effect.
    """
    deposits = match_assets(pair_info, assets)
    pools = deps.ledger.query_pools(pair_info)

    effects: list = []
    pool_amounts = []
    for pool, deposit in zip(pools, deposits):
        if pool.info.is_native:
            pool_amounts.append(
                checked(
                    sub(u256(pool.amount), u256(deposit)),
                    f"native deposit {deposit}{pool.info} larger than pool balance {pool.amount}",
                )
            )
        else:
            effects.append(TransferFrom(asset=Asset(info=pool.info, amount=deposit), owner=sender))
            pool_amounts.append(pool.amount)

    # An empty pool has no price to deviate from.
    if pool_amounts[0] > 0 and pool_amounts[1] > 0:
        assert_slippage_tolerance(slippage_tolerance, deposits, pool_amounts)

    total_share = deps.ledger.query_total_share(pair_info)
    if total_share == 0:
        share = compute_initial_shares(deposits[0], deposits[1])
    else:
        share = compute_additional_shares(
            deposits[0], deposits[1], pool_amounts[0], pool_amounts[1], total_share
        )
    if share == 0:
        raise DegenerateStateError(
            f"Deposit ({deposits[0]}, {deposits[1]}) too small to mint a share (total_share {total_share})"
        )

    effects.append(MintShares(recipient=sender, amount=share))

    deposit_assets = (
        Asset(info=pair_info.asset_infos[0], amount=deposits[0]),
        Asset(info=pair_info.asset_infos[1], amount=deposits[1]),
    )
    logger.info(
        "provide_liquidity pair=%s assets=%s, %s share=%d sender=%s",
        pair_info, deposit_assets[0], deposit_assets[1], share, sender,
    )
    return ProvideLiquidityResult(deposits=deposit_assets, share=share, effects=tuple(effects))


def withdraw_liquidity(
    deps: PairDeps,
    pair_info: PairInfo,
    *,
    sender: Holder,
    amount: Amount,
) -> WithdrawLiquidityResult:
    """Burn `amount` shares of `sender` and refund both sides pro-rata."""
    pools = deps.ledger.query_pools(pair_info)
    total_share = deps.ledger.query_total_share(pair_info)

    refund_assets = tuple(
        Asset(info=pool.info, amount=compute_withdrawal(pool.amount, amount, total_share))
        for pool in pools
    )

    logger.info(
        "withdraw_liquidity pair=%s withdrawn_share=%d refund_assets=%s, %s sender=%s",
        pair_info, amount, refund_assets[0], refund_assets[1], sender,
    )
    return WithdrawLiquidityResult(
        refund_assets=refund_assets,  # type: ignore[arg-type]
        withdrawn_share=amount,
        effects=(
            BurnShares(owner=sender, amount=amount),
            Transfer(asset=refund_assets[0], recipient=sender),
            Transfer(asset=refund_assets[1], recipient=sender),
        ),
    )


# -- Read-only queries ---------------------------------------------------------


def query_pair(pair_info: PairInfo) -> PairInfo:
    return pair_info


def query_pool(deps: PairDeps, pair_info: PairInfo) -> PoolResponse:
    pools = deps.ledger.query_pools(pair_info)
    total_share = deps.ledger.query_total_share(pair_info)
    assets, reported_share = obfuscate(pools, total_share, deps.entropy)
    logger.debug("query_pool pair=%s assets=%s, %s total_share=%d", pair_info, assets[0], assets[1], reported_share)
    return PoolResponse(assets=assets, total_share=reported_share)


def query_simulation(deps: PairDeps, pair_info: PairInfo, offer_asset: Asset) -> SimulationResponse:
    side = pair_info.side_of(offer_asset.info)
    pools = obfuscate_reserves(deps.ledger.query_pools(pair_info), deps.entropy)
    settings = deps.settings.query_settings()

    return_amount, spread_amount, commission_amount = compute_swap(
        pools[side].amount,
        pools[1 - side].amount,
        offer_asset.amount,
        settings.commission_rate_nom,
        settings.commission_rate_denom,
    )
    logger.debug("query_simulation pair=%s offer=%s return=%d", pair_info, offer_asset, return_amount)
    return SimulationResponse(
        return_amount=return_amount,
        spread_amount=spread_amount,
        commission_amount=commission_amount,
    )


def query_reverse_simulation(deps: PairDeps, pair_info: PairInfo, ask_asset: Asset) -> ReverseSimulationResponse:
    side = pair_info.side_of(ask_asset.info)
    pools = obfuscate_reserves(deps.ledger.query_pools(pair_info), deps.entropy)
    settings = deps.settings.query_settings()

    offer_amount, spread_amount, commission_amount = compute_offer_amount(
        pools[1 - side].amount,
        pools[side].amount,
        ask_asset.amount,
        settings.commission_rate_nom,
        settings.commission_rate_denom,
    )
    logger.debug("query_reverse_simulation pair=%s ask=%s offer=%d", pair_info, ask_asset, offer_amount)
    return ReverseSimulationResponse(
        offer_amount=offer_amount,
        spread_amount=spread_amount,
        commission_amount=commission_amount,
    )


# -- Typed actions -------------------------------------------------------------


@dataclass(frozen=True)
class SwapAction:
    sender: Holder
    offer_asset: Asset
    expected_return: Optional[Amount] = None
    belief_price: Optional[Decimal] = None
    max_spread: Optional[Decimal] = None
    to: Optional[Holder] = None


@dataclass(frozen=True)
class ProvideLiquidityAction:
    sender: Holder
    assets: Tuple[Asset, ...]
    slippage_tolerance: Optional[Decimal] = None


@dataclass(frozen=True)
class WithdrawLiquidityAction:
    sender: Holder
    amount: Amount


PairAction = Union[SwapAction, ProvideLiquidityAction, WithdrawLiquidityAction]
PairResult = Union[SwapResult, ProvideLiquidityResult, WithdrawLiquidityResult]


@dataclass(frozen=True)
class PairStepResult:
    ok: bool
    pair_info: Optional[PairInfo] = None
    result: Optional[PairResult] = None
    effects: Tuple[Effect, ...] = field(default_factory=tuple)
    error: Optional[str] = None
    code: Optional[str] = None


def _handle_swap(deps: PairDeps, pair_info: PairInfo, action: SwapAction) -> Tuple[PairInfo, SwapResult]:
    res = swap(
        deps,
        pair_info,
        action.offer_asset,
        sender=action.sender,
        to=action.to,
        expected_return=action.expected_return,
        belief_price=action.belief_price,
        max_spread=action.max_spread,
    )
    return res.pair_info, res


def _handle_provide(
    deps: PairDeps, pair_info: PairInfo, action: ProvideLiquidityAction
) -> Tuple[PairInfo, ProvideLiquidityResult]:
    res = provide_liquidity(
        deps,
        pair_info,
        action.assets,
        sender=action.sender,
        slippage_tolerance=action.slippage_tolerance,
    )
    return pair_info, res


def _handle_withdraw(
    deps: PairDeps, pair_info: PairInfo, action: WithdrawLiquidityAction
) -> Tuple[PairInfo, WithdrawLiquidityResult]:
    return pair_info, withdraw_liquidity(deps, pair_info, sender=action.sender, amount=action.amount)


_DISPATCH: Dict[Type, Callable] = {
    SwapAction: _handle_swap,
    ProvideLiquidityAction: _handle_provide,
    WithdrawLiquidityAction: _handle_withdraw,
}


def handle_or_raise(deps: PairDeps, pair_info: PairInfo, action: PairAction) -> PairStepResult:
    """Execute one action; typed errors propagate to the caller."""
    fn = _DISPATCH.get(type(action))
    if fn is None:
        raise TypeError(f"unknown pair action: {type(action).__name__}")
    next_info, res = fn(deps, pair_info, action)
    return PairStepResult(ok=True, pair_info=next_info, result=res, effects=res.effects)


def handle(deps: PairDeps, pair_info: PairInfo, action: PairAction) -> PairStepResult:
    """
    Execute one action against the given pair.

    Returns `ok=True` with the updated `PairInfo`, the typed result and its
    effects, or `ok=False` with the error message and code. Nothing is
    applied either way.
    """
    try:
        return handle_or_raise(deps, pair_info, action)
    except PairError as exc:
        logger.warning("%s rejected: %s (%s)", type(action).__name__, exc, exc.code)
        return PairStepResult(ok=False, error=str(exc), code=exc.code)
    except (TypeError, ValueError) as exc:
        logger.warning("%s rejected: %s", type(action).__name__, exc)
        return PairStepResult(ok=False, error=str(exc), code="invalid_input")
