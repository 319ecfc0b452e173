"""
In-memory collaborators for running a pair outside a chain
"""

from .entropy import SequenceEntropySource, Sha256EntropyPool
from .ledger import InMemoryPoolLedger
from .settings import StaticPairSettings

__all__ = [
    "InMemoryPoolLedger",
    "SequenceEntropySource",
    "Sha256EntropyPool",
    "StaticPairSettings",
]
