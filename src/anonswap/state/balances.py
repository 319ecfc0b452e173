"""
Multi-asset balance tracking.

Implements BalanceTable[Holder, AssetInfo] -> Amount for the in-memory ledger.
"""

from typing import Dict, Tuple

from .assets import Amount, AssetInfo


# Type aliases
Holder = str  # Account or contract address
AssetKey = Tuple[int, str]


class BalanceTable:
    """
    Balance table mapping (holder, asset) -> amount.

    Assets are keyed by `AssetInfo.sort_key()`, so a token's code hash never
    splits one asset into two balances.
    """

    def __init__(self):
        """Initialize empty balance table."""
        self._balances: Dict[Tuple[Holder, AssetKey], Amount] = {}

    def get(self, holder: Holder, asset: AssetInfo) -> Amount:
        """Get balance for (holder, asset). Returns 0 if not found."""
        return self._balances.get((holder, asset.sort_key()), 0)

    def set(self, holder: Holder, asset: AssetInfo, amount: Amount) -> None:
        """
        Set balance for (holder, asset).

        Raises:
            ValueError: If amount is negative
        """
        if amount < 0:
            raise ValueError(f"Balance cannot be negative: {amount}")
        key = (holder, asset.sort_key())
        if amount == 0:
            # Remove zero balances to keep table sparse
            self._balances.pop(key, None)
        else:
            self._balances[key] = amount

    def add(self, holder: Holder, asset: AssetInfo, delta: int) -> None:
        """
        Add delta to balance (delta may be negative).

        Raises:
            ValueError: If resulting balance would be negative
        """
        current = self.get(holder, asset)
        new_balance = current + delta
        if new_balance < 0:
            raise ValueError(
                f"Insufficient balance of {asset} for {holder}: {current} + {delta} = {new_balance} < 0"
            )
        self.set(holder, asset, new_balance)

    def subtract(self, holder: Holder, asset: AssetInfo, delta: Amount) -> None:
        """Subtract a non-negative amount from a balance."""
        if delta < 0:
            raise ValueError(f"Delta must be non-negative: {delta}")
        self.add(holder, asset, -delta)

    def transfer(self, sender: Holder, recipient: Holder, asset: AssetInfo, amount: Amount) -> None:
        """Move `amount` of `asset` from `sender` to `recipient`."""
        if amount < 0:
            raise ValueError(f"Transfer amount must be non-negative: {amount}")
        self.subtract(sender, asset, amount)
        self.add(recipient, asset, amount)

    def total(self, asset: AssetInfo) -> Amount:
        key = asset.sort_key()
        return sum(amount for (_, a), amount in self._balances.items() if a == key)

    def copy(self) -> "BalanceTable":
        clone = BalanceTable()
        clone._balances = dict(self._balances)
        return clone

    def __repr__(self) -> str:
        return f"BalanceTable({len(self._balances)} entries)"
