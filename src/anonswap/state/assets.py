"""
Asset identifiers and amounts.

An asset is either the chain's native currency (identified by its denom) or a
fungible token contract (identified by its address). Two `AssetInfo`s are the
same asset iff kind and identifier match; a token's code hash is carried for
the ledger's benefit and does not take part in equality checks.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional, Tuple

from ..errors import InvalidAssetError


Amount = int  # Non-negative integer in the asset's smallest unit


class AssetKind(Enum):
    NATIVE = "native_token"
    TOKEN = "token"


# Native currency sorts before tokens.
_KIND_ORDER = {AssetKind.NATIVE: 0, AssetKind.TOKEN: 1}


@dataclass(frozen=True)
class AssetInfo:
    kind: AssetKind
    denom: Optional[str] = None
    contract_addr: Optional[str] = None
    token_code_hash: str = ""

    def __post_init__(self) -> None:
        if not isinstance(self.kind, AssetKind):
            raise TypeError(f"kind must be an AssetKind, got {self.kind!r}")
        if self.kind is AssetKind.NATIVE:
            if not isinstance(self.denom, str) or not self.denom:
                raise ValueError("native asset requires a non-empty denom")
            if self.contract_addr is not None:
                raise ValueError("native asset must not carry a contract_addr")
        else:
            if not isinstance(self.contract_addr, str) or not self.contract_addr:
                raise ValueError("token asset requires a non-empty contract_addr")
            if self.denom is not None:
                raise ValueError("token asset must not carry a denom")

    @classmethod
    def native(cls, denom: str) -> "AssetInfo":
        return cls(kind=AssetKind.NATIVE, denom=denom)

    @classmethod
    def token(cls, contract_addr: str, token_code_hash: str = "") -> "AssetInfo":
        return cls(kind=AssetKind.TOKEN, contract_addr=contract_addr, token_code_hash=token_code_hash)

    @property
    def is_native(self) -> bool:
        return self.kind is AssetKind.NATIVE

    @property
    def identifier(self) -> str:
        return self.denom if self.kind is AssetKind.NATIVE else self.contract_addr  # type: ignore[return-value]

    def equal(self, other: "AssetInfo") -> bool:
        return self.kind is other.kind and self.identifier == other.identifier

    def sort_key(self) -> Tuple[int, str]:
        return _KIND_ORDER[self.kind], self.identifier

    def __str__(self) -> str:
        return self.identifier


@dataclass(frozen=True)
class Asset:
    info: AssetInfo
    amount: Amount

    def __post_init__(self) -> None:
        if not isinstance(self.amount, int) or isinstance(self.amount, bool):
            raise TypeError("amount must be an int")
        if self.amount < 0:
            raise ValueError(f"amount must be non-negative: {self.amount}")

    def with_amount(self, amount: Amount) -> "Asset":
        return replace(self, amount=amount)

    def __str__(self) -> str:
        return f"{self.amount}{self.info}"


def canonical_order(a: AssetInfo, b: AssetInfo) -> Tuple[AssetInfo, AssetInfo]:
    """Return the two infos in canonical pool order; identical assets are rejected."""
    if a.equal(b):
        raise InvalidAssetError(f"A pair needs two distinct assets, got {a} twice")
    if a.sort_key() <= b.sort_key():
        return a, b
    return b, a
