"""
anonswap: a two-asset constant-product pair with obfuscated reserve queries.
"""

__version__ = "0.1.0"
