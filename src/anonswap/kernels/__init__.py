"""
Kernel layer.

`anonswap/kernels/python/` holds the pure arithmetic kernels the pair engine is
built on: checked wide integers, fixed-point decimals, swap and share math.
"""
