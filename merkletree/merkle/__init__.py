"""
Merkle Tree and Proofs
Tree construction, inclusion proof generation and stateless validation.

This module provides:
- MerkleTree: arena-backed tree with insert()/root()/proof()
- Node, ProofStep, Side: records shared by the tree and the validator
- validate_proof / verify_proof: recompute a root from a leaf and a proof
- ProofDocument: JSON form of a proof

Usage:
    import hashlib
    from merkletree.merkle import MerkleTree, validate_proof

    tree = MerkleTree(hash_factory=hashlib.sha256)
    leaf = tree.insert(b"value")
    tree.insert(b"other")
    root = tree.root()

    validate_proof(hashlib.sha256, leaf, root, tree.proof(leaf))
"""
from .node import Node, ProofStep, Side
from .tree import DEFAULT_POOL_SIZE, MerkleTree, new
from .validate import compute_root, validate_proof, verify_proof
from .document import ProofDocument, ProofStepModel


__all__ = [
    # Records
    "Node",
    "ProofStep",
    "Side",
    # Tree
    "DEFAULT_POOL_SIZE",
    "MerkleTree",
    "new",
    # Validation
    "compute_root",
    "validate_proof",
    "verify_proof",
    # Serialization
    "ProofDocument",
    "ProofStepModel",
]
