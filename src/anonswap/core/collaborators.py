"""
Interfaces of the services the pair engine depends on.

The engine never reaches into ambient state: reserves, share supply, fee
settings and randomness all come from objects passed in by the caller.
Concrete in-memory implementations live in `anonswap.integration`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from ..state.assets import Amount, Asset
from ..state.pools import PairInfo


@dataclass(frozen=True)
class PairSettings:
    """Commission rate in force for one call."""

    commission_rate_nom: int
    commission_rate_denom: int

    def __post_init__(self) -> None:
        for name, v in (
            ("commission_rate_nom", self.commission_rate_nom),
            ("commission_rate_denom", self.commission_rate_denom),
        ):
            if not isinstance(v, int) or isinstance(v, bool):
                raise TypeError(f"{name} must be an int")
        if self.commission_rate_denom <= 0:
            raise ValueError(f"commission_rate_denom must be positive: {self.commission_rate_denom}")
        if not (0 <= self.commission_rate_nom <= self.commission_rate_denom):
            raise ValueError(
                f"commission_rate_nom must be in [0, {self.commission_rate_denom}]: {self.commission_rate_nom}"
            )


class PoolLedger:
    """Read access to the pair's true reserves and share supply."""

    def query_pools(self, pair_info: PairInfo) -> Tuple[Asset, Asset]:
        """Current reserves of both assets, in the pair's canonical order."""
        raise NotImplementedError

    def query_total_share(self, pair_info: PairInfo) -> Amount:
        """Current total supply of the pair's liquidity shares."""
        raise NotImplementedError


class PairSettingsQuery:
    """Read access to the externally configured fee parameters."""

    def query_settings(self) -> PairSettings:
        raise NotImplementedError


class EntropySource:
    """Produces one fresh pseudo-random 64-bit value per call."""

    def next_u64(self) -> int:
        raise NotImplementedError
