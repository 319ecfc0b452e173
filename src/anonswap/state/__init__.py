"""
State types for the anonswap pair
"""

from .assets import Asset, AssetInfo, AssetKind, canonical_order
from .balances import BalanceTable
from .pools import PairInfo, create_pair_info
from .shares import ShareTable

__all__ = [
    "Asset",
    "AssetInfo",
    "AssetKind",
    "canonical_order",
    "BalanceTable",
    "PairInfo",
    "create_pair_info",
    "ShareTable",
]
