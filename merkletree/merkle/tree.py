"""
Merkle Tree Builder
Incremental leaf insertion, one-shot root computation and proof generation.

Canonical Commitment Rules (Hard Contracts):
1. Leaf hashing: leaf = H(value)
2. Parent hashing: parent = H(left + right), left/right in insertion order
3. Padding rule: a dangling last node at any level is combined with itself,
   H(last + last). No padding node is added to the arena; the dangling node
   is flagged is_self_paired and its parent has left == right.
4. Empty tree: root() returns None and the tree stays open for inserts
5. Single leaf: the leaf is self-paired once, root = H(leaf + leaf)

Lifecycle:
- insert() appends leaves until root() is called
- root() builds every internal node in a single pass and freezes the tree
- once frozen, insert() is rejected and proof() becomes available

Arena layout after root(): leaves occupy [0, leaf_count), each combine level
follows contiguously, and the root is the last node.
"""
from __future__ import annotations

import hashlib
import logging
import threading
from typing import Iterable, Optional

from merkletree.crypto.hashing import HashFactory, to_hex
from merkletree.crypto.pool import HasherPool
from merkletree.merkle.node import Node, ProofStep, Side
from merkletree.schemas.errors import (
    ErrorCodes,
    LeafNotFoundException,
    ProofNotReadyException,
)


logger = logging.getLogger(__name__)

DEFAULT_POOL_SIZE = 4


class MerkleTree:
    """
    Binary hash tree over an ordered sequence of values.

    insert() and root() are serialized by a per-tree lock. proof() reads a
    frozen tree only and takes no lock.

    Example:
        >>> tree = MerkleTree()
        >>> h = tree.insert(b"a")
        >>> _ = tree.insert(b"b")
        >>> root = tree.root()
        >>> steps = tree.proof(h)
        >>> [s.side.value for s in steps]
        ['right']
    """

    def __init__(
        self,
        leaf_capacity_hint: int = 0,
        hash_factory: HashFactory = hashlib.sha256,
        pool_size: int = DEFAULT_POOL_SIZE,
    ) -> None:
        """
        Args:
            leaf_capacity_hint: Expected number of leaves. Advisory only;
                the arena grows on demand.
            hash_factory: Zero-argument callable returning a fresh
                hashlib-style object
            pool_size: Number of idle hashers kept for reuse (0 disables
                pooling)
        """
        if leaf_capacity_hint < 0:
            raise ValueError(
                f"leaf_capacity_hint must be non-negative, got {leaf_capacity_hint}"
            )
        self.leaf_capacity_hint = leaf_capacity_hint
        self._hash_factory = hash_factory
        self._pool = HasherPool(hash_factory, max_size=pool_size)
        self._nodes: list[Node] = []
        self._leaf_index: dict[bytes, int] = {}
        self._leaf_count = 0
        self._height = 0
        self._root: Optional[bytes] = None
        self._lock = threading.Lock()

    @classmethod
    def from_values(
        cls,
        values: Iterable[bytes],
        hash_factory: HashFactory = hashlib.sha256,
        pool_size: int = DEFAULT_POOL_SIZE,
    ) -> "MerkleTree":
        """Build a tree from values and freeze it."""
        values = list(values)
        tree = cls(len(values), hash_factory=hash_factory, pool_size=pool_size)
        for value in values:
            tree.insert(value)
        tree.root()
        return tree

    # -------------------------------------------------------------------------
    # Read-only state
    # -------------------------------------------------------------------------

    @property
    def hash_factory(self) -> HashFactory:
        return self._hash_factory

    @property
    def leaf_count(self) -> int:
        return self._leaf_count

    @property
    def node_count(self) -> int:
        return len(self._nodes)

    @property
    def height(self) -> int:
        """Number of combine levels above the leaves (0 until frozen)."""
        return self._height

    @property
    def frozen(self) -> bool:
        return self._root is not None

    @property
    def root_hash(self) -> Optional[bytes]:
        """Cached root, or None if root() has not produced one yet."""
        return self._root

    @property
    def nodes(self) -> tuple[Node, ...]:
        return tuple(self._nodes)

    def leaves(self) -> list[bytes]:
        """Leaf hashes in insertion order."""
        return [node.hash for node in self._nodes[: self._leaf_count]]

    def __len__(self) -> int:
        return self._leaf_count

    # -------------------------------------------------------------------------
    # Mutation
    # -------------------------------------------------------------------------

    def insert(self, value: bytes) -> Optional[bytes]:
        """
        Hash a value and append it as a new leaf.

        Args:
            value: Raw bytes to commit

        Returns:
            The leaf hash, or None if the tree is already frozen and the
            value was not admitted

        Raises:
            TypeError: If value is not bytes-like
        """
        if not isinstance(value, (bytes, bytearray, memoryview)):
            raise TypeError(
                f"value must be bytes-like, got {type(value).__name__}"
            )

        with self._lock:
            if self._root is not None:
                logger.debug(
                    "Insert rejected, tree is frozen",
                    extra={"code": ErrorCodes.FROZEN_TREE},
                )
                return None

            leaf_hash = self._pool.digest(bytes(value))
            index = len(self._nodes)
            self._nodes.append(Node(index=index, hash=leaf_hash, is_leaf=True))
            self._leaf_index.setdefault(leaf_hash, index)
            self._leaf_count += 1

        return leaf_hash

    def root(self) -> Optional[bytes]:
        """
        Compute the root hash and freeze the tree.

        Idempotent: once frozen the cached root is returned.

        Returns:
            Root hash, or None if no leaves have been inserted (the tree is
            not frozen in that case)
        """
        with self._lock:
            if self._root is not None:
                return self._root

            if self._leaf_count == 0:
                logger.debug(
                    "Root requested for empty tree",
                    extra={"code": ErrorCodes.EMPTY_TREE},
                )
                return None

            start, end = 0, self._leaf_count
            height = 0
            while True:
                self._combine_level(start, end)
                height += 1
                start, end = end, len(self._nodes)
                if end - start == 1:
                    break

            self._height = height
            self._root = self._nodes[-1].hash

        logger.info(
            f"Tree frozen: {self._leaf_count} leaves, {len(self._nodes)} nodes, "
            f"height {self._height}, root {to_hex(self._root)}"
        )
        return self._root

    def _combine_level(self, start: int, end: int) -> None:
        """Append the parents of nodes [start, end) to the arena."""
        nodes = self._nodes
        for i in range(start, end, 2):
            left = nodes[i]
            parent_index = len(nodes)

            if i + 1 < end:
                right = nodes[i + 1]
            else:
                # Dangling node pairs with itself
                right = left
                left.is_self_paired = True

            left.parent = parent_index
            right.parent = parent_index
            nodes.append(Node(
                index=parent_index,
                hash=self._pool.digest(left.hash, right.hash),
                left=left.index,
                right=right.index,
            ))

    # -------------------------------------------------------------------------
    # Proofs
    # -------------------------------------------------------------------------

    def proof(self, target_hash: bytes) -> list[ProofStep]:
        """
        Generate an inclusion proof for a leaf hash.

        Steps are ordered leaf to root. When the same value was inserted
        more than once, the proof is for its first occurrence.

        Args:
            target_hash: Leaf hash as returned by insert()

        Returns:
            List of ProofStep, one per level

        Raises:
            ProofNotReadyException: If root() has not been computed
            LeafNotFoundException: If no leaf has this hash
        """
        if self._root is None:
            raise ProofNotReadyException()

        index = self._leaf_index.get(bytes(target_hash))
        if index is None:
            raise LeafNotFoundException(bytes(target_hash))

        nodes = self._nodes
        steps: list[ProofStep] = []
        current = nodes[index]

        while current.parent is not None:
            parent = nodes[current.parent]
            if current.is_self_paired:
                steps.append(ProofStep(Side.RIGHT, current.hash))
            elif parent.left == current.index:
                steps.append(ProofStep(Side.RIGHT, nodes[parent.right].hash))
            else:
                steps.append(ProofStep(Side.LEFT, nodes[parent.left].hash))
            current = parent

        return steps

    def proof_for_value(self, value: bytes) -> list[ProofStep]:
        """Hash value with this tree's algorithm and return its proof."""
        return self.proof(self._pool.digest(bytes(value)))

    # -------------------------------------------------------------------------
    # Debugging
    # -------------------------------------------------------------------------

    def to_graphviz(self) -> str:
        """
        Render the arena as a Graphviz digraph.

        Each node is labelled "index:hexhash"; edges point child -> parent.
        Nodes without a parent (the root, or every leaf of an unfrozen tree)
        are emitted on their own.
        """
        def label(node: Node) -> str:
            return f"{node.index}:{node.hash.hex()}"

        lines = ["digraph G {"]
        for node in self._nodes:
            if node.parent is None:
                lines.append(f'    "{label(node)}"')
            else:
                parent = self._nodes[node.parent]
                lines.append(f'    "{label(node)}" -> "{label(parent)}"')
        lines.append("}")
        return "\n".join(lines)


def new(
    leaf_capacity_hint: int = 0,
    hash_factory: HashFactory = hashlib.sha256,
) -> MerkleTree:
    """Create an empty tree."""
    return MerkleTree(leaf_capacity_hint, hash_factory=hash_factory)


__all__ = ["MerkleTree", "new", "DEFAULT_POOL_SIZE"]
