"""
Liquidity share tracking for one pair.

Shares are fungible claims on both reserves. The total supply grows only by
minting on deposit and shrinks only by burning on withdrawal.
"""

from __future__ import annotations

from typing import Dict

from .assets import Amount
from .balances import Holder


class ShareTable:
    """
    Share balance table mapping holder -> shares.

    Notes:
    - Share balances are always non-negative.
    - Zero balances are omitted to keep the table sparse.
    """

    def __init__(self) -> None:
        self._balances: Dict[Holder, Amount] = {}
        self._total_supply: Amount = 0

    @property
    def total_supply(self) -> Amount:
        return self._total_supply

    def get(self, holder: Holder) -> Amount:
        """Get share balance for `holder`. Returns 0 if not found."""
        return self._balances.get(holder, 0)

    def mint(self, holder: Holder, amount: Amount) -> None:
        if amount < 0:
            raise ValueError(f"Mint amount must be non-negative: {amount}")
        if amount == 0:
            return
        self._balances[holder] = self.get(holder) + amount
        self._total_supply += amount

    def burn(self, holder: Holder, amount: Amount) -> None:
        if amount < 0:
            raise ValueError(f"Burn amount must be non-negative: {amount}")
        current = self.get(holder)
        if amount > current:
            raise ValueError(f"Insufficient shares for {holder}: {current} < {amount}")
        remaining = current - amount
        if remaining == 0:
            self._balances.pop(holder, None)
        else:
            self._balances[holder] = remaining
        self._total_supply -= amount

    def copy(self) -> "ShareTable":
        clone = ShareTable()
        clone._balances = dict(self._balances)
        clone._total_supply = self._total_supply
        return clone

    def verify_supply(self) -> bool:
        """Total supply equals the sum of all balances."""
        return sum(self._balances.values()) == self._total_supply

    def __repr__(self) -> str:
        return f"ShareTable({len(self._balances)} holders, supply={self._total_supply})"
