"""
merkletree - binary hash trees with inclusion proofs.
"""
from merkletree.schemas.errors import (
    ErrorCodes,
    LeafNotFoundException,
    MerkleError,
    MerkleException,
    ProofDocumentException,
    ProofMismatchException,
    ProofNotReadyException,
    UnsupportedAlgorithmException,
)
from merkletree.crypto import HasherPool, hash_factory
from merkletree.merkle import (
    MerkleTree,
    Node,
    ProofDocument,
    ProofStep,
    Side,
    new,
    validate_proof,
    verify_proof,
)

__version__ = "0.1.0"

__all__ = [
    "ErrorCodes",
    "LeafNotFoundException",
    "MerkleError",
    "MerkleException",
    "ProofDocumentException",
    "ProofMismatchException",
    "ProofNotReadyException",
    "UnsupportedAlgorithmException",
    "HasherPool",
    "hash_factory",
    "MerkleTree",
    "Node",
    "ProofDocument",
    "ProofStep",
    "Side",
    "new",
    "validate_proof",
    "verify_proof",
    "__version__",
]
