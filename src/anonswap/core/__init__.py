"""
Pair engine: CPMM math, guards, obfuscation and the pair dispatcher
"""

from .collaborators import EntropySource, PairSettings, PairSettingsQuery, PoolLedger
from .cpmm import (
    compute_swap,
    compute_offer_amount,
    compute_initial_shares,
    compute_additional_shares,
    compute_withdrawal,
)
from .guards import assert_max_spread, assert_slippage_tolerance
from .obfuscation import nom_denom_from_draw, obfuscate
from .pair import (
    PairDeps,
    PairStepResult,
    ProvideLiquidityAction,
    SwapAction,
    WithdrawLiquidityAction,
    handle,
    handle_or_raise,
    provide_liquidity,
    query_pair,
    query_pool,
    query_reverse_simulation,
    query_simulation,
    swap,
    withdraw_liquidity,
)

__all__ = [
    "EntropySource",
    "PairSettings",
    "PairSettingsQuery",
    "PoolLedger",
    "compute_swap",
    "compute_offer_amount",
    "compute_initial_shares",
    "compute_additional_shares",
    "compute_withdrawal",
    "assert_max_spread",
    "assert_slippage_tolerance",
    "nom_denom_from_draw",
    "obfuscate",
    "PairDeps",
    "PairStepResult",
    "ProvideLiquidityAction",
    "SwapAction",
    "WithdrawLiquidityAction",
    "handle",
    "handle_or_raise",
    "provide_liquidity",
    "query_pair",
    "query_pool",
    "query_reverse_simulation",
    "query_simulation",
    "swap",
    "withdraw_liquidity",
]
