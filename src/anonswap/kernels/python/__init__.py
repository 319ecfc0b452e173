"""
Production Python kernels.

These modules are designed to be:
- exact (integer-only, 256-bit checked intermediates),
- easy to audit (explicit intermediate variables),
- small surface-area (pure functions, typed results).
"""
