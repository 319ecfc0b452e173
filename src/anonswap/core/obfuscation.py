"""
Reserve obfuscation for read-only observers.

One 64-bit draw selects a multiplier `nom / 10_000`:

    noise = draw % 100
    nom   = 10_000 + noise   if draw is even
    nom   = 10_000 - noise   if draw is odd

so reported figures move by at most 0.99% either way. Every reported reserve
and the reported share supply are scaled by the same multiplier using checked
multiply-then-divide.

Only query paths call into this module. Swaps and liquidity changes always
run on the ledger's true reserves.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence, Tuple

from ..kernels.python.u256_math import checked, div, mul, to_uint128, u256
from ..state.assets import Amount, Asset
from .collaborators import EntropySource


OBFUSCATION_DENOM = 10_000
OBFUSCATION_NOISE_SPAN = 100
U64_MAX = (1 << 64) - 1


@dataclass(frozen=True)
class ObfuscationFactor:
    nom: int
    denom: int

    def apply(self, amount: Amount) -> Amount:
        scaled = checked(
            div(mul(u256(amount), u256(self.nom)), u256(self.denom)),
            f"Cannot calculate {amount} * {self.nom} / {self.denom}",
        )
        return to_uint128(scaled, "obfuscated amount")


def nom_denom_from_draw(draw: int) -> ObfuscationFactor:
    if not isinstance(draw, int) or isinstance(draw, bool):
        raise TypeError("draw must be an int")
    if not (0 <= draw <= U64_MAX):
        raise ValueError(f"draw must be a 64-bit unsigned value: {draw}")

    noise = draw % OBFUSCATION_NOISE_SPAN
    if draw % 2 == 0:
        nom = OBFUSCATION_DENOM + noise
    else:
        nom = OBFUSCATION_DENOM - noise
    return ObfuscationFactor(nom=nom, denom=OBFUSCATION_DENOM)


def draw_factor(entropy: EntropySource) -> ObfuscationFactor:
    """Consume exactly one value from `entropy`."""
    return nom_denom_from_draw(entropy.next_u64())


def _scale_reserves(reserves: Sequence[Asset], factor: ObfuscationFactor) -> Tuple[Asset, Asset]:
    reserve0, reserve1 = reserves
    return (
        reserve0.with_amount(factor.apply(reserve0.amount)),
        reserve1.with_amount(factor.apply(reserve1.amount)),
    )


def obfuscate(
    reserves: Sequence[Asset],
    total_share: Amount,
    entropy: EntropySource,
) -> Tuple[Tuple[Asset, Asset], Amount]:
    """Scale both reserves and the share supply by one fresh multiplier."""
    factor = draw_factor(entropy)
    return _scale_reserves(reserves, factor), factor.apply(total_share)


def obfuscate_reserves(reserves: Sequence[Asset], entropy: EntropySource) -> Tuple[Asset, Asset]:
    """Scale both reserves by one fresh multiplier (simulation queries)."""
    return _scale_reserves(reserves, draw_factor(entropy))
