"""Exception types for the pair engine.

Every failure carries a stable ``code`` so that ``handle()`` in
``core/pair.py`` can report rejections without string matching. All of them
derive from ``ValueError``: they describe inputs or states the engine refuses
to compute over.
"""

from __future__ import annotations


class PairError(ValueError):
    """Base class for pair engine failures."""

    code = "pair_error"


class ArithmeticOverflowError(PairError):
    """An add/sub/mul/div/sqrt could not produce an exact in-range result."""

    code = "arithmetic_overflow"


class InvalidAssetError(PairError):
    """The offered or requested asset matches neither side of the pair."""

    code = "invalid_asset"


class SlippageExceededError(PairError):
    """A deposit's implied price deviates from the pool's by more than the tolerance."""

    code = "slippage_exceeded"


class SpreadExceededError(PairError):
    """A swap's spread is larger than the caller's ``max_spread``."""

    code = "spread_exceeded"


class ReturnBelowExpectedError(PairError):
    """A swap returned less than the caller's ``expected_return``."""

    code = "return_below_expected"


class DegenerateStateError(PairError):
    """Zero reserve, zero share supply or a zero divisor where a ratio is required."""

    code = "degenerate_state"


class InvariantViolationError(PairError):
    """A computed swap would leave the reserve product below its starting value."""

    code = "invariant_violation"
