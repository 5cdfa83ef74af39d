"""
Cryptographic utilities.

Hash factories, digest helpers, hex encoding and the hasher pool.
"""
from .hashing import (
    DEFAULT_ALGORITHM,
    HashFactory,
    hash_factory,
    digest,
    to_hex,
    from_hex,
)
from .pool import HasherPool

__all__ = [
    "DEFAULT_ALGORITHM",
    "HashFactory",
    "hash_factory",
    "digest",
    "to_hex",
    "from_hex",
    "HasherPool",
]
