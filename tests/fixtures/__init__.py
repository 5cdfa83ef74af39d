"""
Test fixtures package for merkletree tests.

Usage:
    from fixtures import leaf_hash, combine, make_tree

    def test_something():
        tree = make_tree(["a", "b", "c"])
        assert tree.root() == combine(combine(leaf_hash("a"), leaf_hash("b")), ...)
"""

from .trees import (
    combine,
    expected_node_count,
    expected_proof_length,
    leaf_hash,
    make_tree,
)

__all__ = [
    "combine",
    "expected_node_count",
    "expected_proof_length",
    "leaf_hash",
    "make_tree",
]
