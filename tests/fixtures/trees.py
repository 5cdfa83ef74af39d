"""
Tree fixtures shared by all test modules.

Provides reference hashing helpers computed directly with hashlib, so
expected values never go through the code under test:
- leaf_hash: H(value)
- combine: H(left + right)
- make_tree: build (and optionally freeze) a tree from str values
"""

import hashlib
from typing import Iterable, Optional

from merkletree.merkle import MerkleTree


def leaf_hash(value: str | bytes) -> bytes:
    """SHA-256 of a value, as the tree hashes leaves."""
    if isinstance(value, str):
        value = value.encode("utf-8")
    return hashlib.sha256(value).digest()


def combine(left: bytes, right: bytes) -> bytes:
    """SHA-256 of left + right, as the tree hashes parents."""
    return hashlib.sha256(left + right).digest()


def make_tree(
    values: Iterable[str],
    freeze: bool = True,
    pool_size: Optional[int] = None,
) -> MerkleTree:
    """Insert str values (UTF-8) into a SHA-256 tree."""
    values = list(values)
    kwargs = {} if pool_size is None else {"pool_size": pool_size}
    tree = MerkleTree(len(values), hash_factory=hashlib.sha256, **kwargs)
    for value in values:
        tree.insert(value.encode("utf-8"))
    if freeze:
        tree.root()
    return tree


def expected_node_count(leaf_count: int) -> int:
    """Leaves plus one parent per pair (or dangling node) on every level."""
    total = leaf_count
    level = leaf_count
    while True:
        level = (level + 1) // 2
        total += level
        if level == 1:
            return total


def expected_proof_length(leaf_count: int) -> int:
    """ceil(log2(n)), with a single leaf still needing one step."""
    return max(1, (leaf_count - 1).bit_length())
