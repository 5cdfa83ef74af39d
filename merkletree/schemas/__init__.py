"""
Schemas
File: __init__.py

Purpose: Export the error taxonomy shared by the tree, the validator and the CLI.
"""

from .errors import (
    ErrorCodes,
    LeafNotFoundException,
    MerkleError,
    MerkleException,
    ProofDocumentException,
    ProofMismatchException,
    ProofNotReadyException,
    UnsupportedAlgorithmException,
)

__all__ = [
    "ErrorCodes",
    "LeafNotFoundException",
    "MerkleError",
    "MerkleException",
    "ProofDocumentException",
    "ProofMismatchException",
    "ProofNotReadyException",
    "UnsupportedAlgorithmException",
]
