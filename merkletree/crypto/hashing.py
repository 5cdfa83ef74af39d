"""
Hashing Utilities
Hash factories, digest helpers and hex encoding for tree hashes.

This module provides:
- Named hash factories (any algorithm hashlib knows about)
- digest() over one or more byte parts using a factory
- Hex encoding/decoding with 0x prefix

Determinism Notes:
- Parts are fed to the hasher in the order given, never sorted
- No implicit encoding of str inputs; callers pass bytes
"""
from __future__ import annotations

import hashlib
from typing import Any, Callable

from merkletree.schemas.errors import UnsupportedAlgorithmException


# A zero-argument callable returning a fresh hashlib-style object
HashFactory = Callable[[], Any]

DEFAULT_ALGORITHM = "sha256"


def hash_factory(algorithm: str = DEFAULT_ALGORITHM) -> HashFactory:
    """
    Return a factory producing fresh hash objects for the named algorithm.

    Args:
        algorithm: Name accepted by hashlib.new() (e.g. "sha256", "blake2b")

    Returns:
        Zero-argument callable returning a new hash object

    Raises:
        UnsupportedAlgorithmException: If hashlib does not provide the algorithm,
            or the algorithm needs an explicit digest length (shake_*)

    Example:
        >>> factory = hash_factory("sha256")
        >>> h = factory()
        >>> h.update(b"hello")
        >>> h.hexdigest()[:8]
        '2cf24dba'
    """
    name = algorithm.lower()
    try:
        probe = hashlib.new(name)
    except (ValueError, TypeError) as e:
        raise UnsupportedAlgorithmException(algorithm) from e

    # Variable-length digests cannot be used without a length argument
    if probe.digest_size == 0:
        raise UnsupportedAlgorithmException(algorithm)

    def factory() -> Any:
        return hashlib.new(name)

    factory.__name__ = f"hash_factory_{name}"
    return factory


def digest(factory: HashFactory, *parts: bytes) -> bytes:
    """
    Hash the concatenation of the given parts with a fresh hasher.

    Args:
        factory: Hash factory to draw the hasher from
        *parts: Byte sequences fed to the hasher in order

    Returns:
        Digest bytes
    """
    hasher = factory()
    for part in parts:
        hasher.update(part)
    return hasher.digest()


def to_hex(data: bytes) -> str:
    """
    Convert bytes to hexadecimal string with 0x prefix.

    Example:
        >>> to_hex(bytes.fromhex("deadbeef"))
        '0xdeadbeef'
    """
    return "0x" + data.hex()


def from_hex(hex_string: str) -> bytes:
    """
    Convert hexadecimal string (with 0x prefix) to bytes.

    Args:
        hex_string: Hex string with 0x prefix

    Returns:
        Decoded bytes

    Raises:
        ValueError: If string doesn't start with 0x, has odd length,
                   or contains invalid hex characters

    Example:
        >>> from_hex("0xdeadbeef").hex()
        'deadbeef'
    """
    if not hex_string.startswith("0x"):
        raise ValueError(
            f"Hex string must start with '0x' prefix, got: {hex_string[:10]}..."
        )

    hex_content = hex_string[2:]

    if len(hex_content) % 2 != 0:
        raise ValueError(
            f"Hex string must have even length after 0x prefix, "
            f"got length {len(hex_content)}"
        )

    try:
        return bytes.fromhex(hex_content)
    except ValueError as e:
        raise ValueError(f"Invalid hex characters in string: {e}") from e


__all__ = [
    "DEFAULT_ALGORITHM",
    "HashFactory",
    "hash_factory",
    "digest",
    "to_hex",
    "from_hex",
]
