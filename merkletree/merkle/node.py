"""
Tree node and proof step records.

Nodes live in the tree's arena (a plain list) and refer to each other by
arena index only. A node never owns another node.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


@dataclass
class Node:
    """
    One vertex of the tree.

    Attributes:
        index: Position of this node in the arena
        hash: Digest held by this node
        is_leaf: True if the node wraps an inserted value
        is_self_paired: True if the node was combined with itself because
            its level had an odd count
        parent: Arena index of the combining node (None for the root)
        left: Arena index of the left child (None for leaves)
        right: Arena index of the right child (None for leaves; equal to
            left when that child is self-paired)
    """
    index: int
    hash: bytes
    is_leaf: bool = False
    is_self_paired: bool = False
    parent: Optional[int] = None
    left: Optional[int] = None
    right: Optional[int] = None


class Side(str, Enum):
    """Side on which a proof step's hash is concatenated."""
    LEFT = "left"
    RIGHT = "right"


@dataclass(frozen=True)
class ProofStep:
    """
    One level of an inclusion proof.

    side tells the validator where `hash` goes relative to the running
    hash: RIGHT means H(acc + hash), LEFT means H(hash + acc).
    """
    side: Side
    hash: bytes


__all__ = ["Node", "Side", "ProofStep"]
