"""
In-memory pool ledger (imperative shell).

Holds the balances of every holder, including the pair account itself, and
the pair's share supply. The dispatcher reads reserves from here and returns
effects; `apply_effects` commits them all or none.
"""

from __future__ import annotations

import logging
from typing import Iterable, Tuple

from ..core.collaborators import PoolLedger
from ..core.pair import BurnShares, Effect, MintShares, Transfer, TransferFrom
from ..state.assets import Amount, Asset
from ..state.balances import BalanceTable, Holder
from ..state.pools import PairInfo
from ..state.shares import ShareTable


logger = logging.getLogger(__name__)


class InMemoryPoolLedger(PoolLedger):
    def __init__(self, pair_account: Holder) -> None:
        if not isinstance(pair_account, str) or not pair_account:
            raise ValueError("pair_account must be a non-empty string")
        self.pair_account = pair_account
        self.balances = BalanceTable()
        self.shares = ShareTable()

    # -- PoolLedger --

    def query_pools(self, pair_info: PairInfo) -> Tuple[Asset, Asset]:
        info0, info1 = pair_info.asset_infos
        return (
            Asset(info=info0, amount=self.balances.get(self.pair_account, info0)),
            Asset(info=info1, amount=self.balances.get(self.pair_account, info1)),
        )

    def query_total_share(self, pair_info: PairInfo) -> Amount:
        return self.shares.total_supply

    # -- Funding helpers --

    def mint(self, holder: Holder, asset: Asset) -> None:
        """Credit `holder` with freshly created funds."""
        self.balances.add(holder, asset.info, asset.amount)

    def receive(self, sender: Holder, asset: Asset) -> None:
        """
        Move funds sent along with a call into the pair account.

        Swaps are priced after the offered amount has arrived, and native
        deposits arrive before `provide_liquidity` runs.
        """
        self.balances.transfer(sender, self.pair_account, asset.info, asset.amount)

    # -- Commit --

    def apply_effects(self, effects: Iterable[Effect]) -> None:
        """
        Apply dispatcher effects in order.

        Raises:
            ValueError: If any effect would overdraw a balance; nothing is applied
            TypeError: On an unknown effect
        """
        balances = self.balances.copy()
        shares = self.shares.copy()

        for effect in effects:
            if isinstance(effect, Transfer):
                balances.transfer(self.pair_account, effect.recipient, effect.asset.info, effect.asset.amount)
            elif isinstance(effect, TransferFrom):
                balances.transfer(effect.owner, self.pair_account, effect.asset.info, effect.asset.amount)
            elif isinstance(effect, MintShares):
                shares.mint(effect.recipient, effect.amount)
            elif isinstance(effect, BurnShares):
                shares.burn(effect.owner, effect.amount)
            else:
                raise TypeError(f"unknown effect: {type(effect).__name__}")
            logger.debug("applied %s", effect)

        self.balances = balances
        self.shares = shares
