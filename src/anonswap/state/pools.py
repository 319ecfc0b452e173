"""
Pair metadata.

`PairInfo` is the persisted description of one pair: its two assets in
canonical order, the liquidity-token identifier, and cumulative offered volume
per side. Reserves and share supply are *not* part of it; they are read from
the ledger on every call.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Sequence, Tuple

from ..errors import InvalidAssetError
from ..kernels.python.u256_math import to_uint128
from .assets import Amount, Asset, AssetInfo, canonical_order


@dataclass(frozen=True)
class PairInfo:
    asset_infos: Tuple[AssetInfo, AssetInfo]
    liquidity_token: str
    asset0_volume: Amount = 0
    asset1_volume: Amount = 0

    def __post_init__(self) -> None:
        if len(self.asset_infos) != 2:
            raise ValueError("a pair has exactly two assets")
        a, b = self.asset_infos
        if canonical_order(a, b) != (a, b):
            raise ValueError(f"Assets must be in canonical order: {a} < {b}")
        if not isinstance(self.liquidity_token, str) or not self.liquidity_token:
            raise ValueError("liquidity_token must be a non-empty string")
        if self.asset0_volume < 0 or self.asset1_volume < 0:
            raise ValueError(f"Volumes must be non-negative: ({self.asset0_volume}, {self.asset1_volume})")

    def side_of(self, info: AssetInfo) -> int:
        """Index (0 or 1) of `info` in this pair."""
        for i, candidate in enumerate(self.asset_infos):
            if candidate.equal(info):
                return i
        raise InvalidAssetError(f"Asset {info} does not belong to pair {self.asset_infos[0]}-{self.asset_infos[1]}")

    def with_volume(self, side: int, amount: Amount) -> "PairInfo":
        """Return a copy with `amount` added to the offered volume of `side`."""
        if side == 0:
            return replace(self, asset0_volume=to_uint128(self.asset0_volume + amount, "asset0_volume"))
        if side == 1:
            return replace(self, asset1_volume=to_uint128(self.asset1_volume + amount, "asset1_volume"))
        raise ValueError(f"side must be 0 or 1: {side}")

    def __str__(self) -> str:
        return f"{self.asset_infos[0]}-{self.asset_infos[1]}"


def create_pair_info(asset_infos: Sequence[AssetInfo], liquidity_token: str) -> PairInfo:
    """Fix the canonical asset order of a new pair."""
    if len(asset_infos) != 2:
        raise ValueError("a pair has exactly two assets")
    asset0, asset1 = canonical_order(asset_infos[0], asset_infos[1])
    return PairInfo(asset_infos=(asset0, asset1), liquidity_token=liquidity_token)


def match_assets(pair_info: PairInfo, assets: Sequence[Asset]) -> Tuple[Amount, Amount]:
    """
    Map caller-supplied assets onto the pair's canonical sides.

    Every supplied asset must belong to the pair and both sides must be present.
    """
    amounts: list = [None, None]
    for asset in assets:
        side = pair_info.side_of(asset.info)
        if amounts[side] is not None:
            raise InvalidAssetError(f"Asset {asset.info} given more than once")
        amounts[side] = asset.amount
    if amounts[0] is None or amounts[1] is None:
        raise InvalidAssetError("Wrong asset info is given: both pair assets are required")
    return amounts[0], amounts[1]
