"""
Proof Validation
Stateless recomputation of a root from a leaf hash and an inclusion proof.

Needs only the hash algorithm, the claimed leaf hash, the claimed root and
the proof. No tree instance is involved, so validation is safe to run
concurrently anywhere.
"""
from __future__ import annotations

from typing import Sequence

from merkletree.crypto.hashing import HashFactory, digest
from merkletree.merkle.node import ProofStep, Side
from merkletree.schemas.errors import ProofMismatchException


def compute_root(
    hash_factory: HashFactory,
    target_hash: bytes,
    proof: Sequence[ProofStep],
) -> bytes:
    """
    Fold a proof over a leaf hash.

    For each step (bottom-up):
    - side RIGHT: acc = H(acc + step.hash)
    - side LEFT:  acc = H(step.hash + acc)

    Raises:
        ProofMismatchException: If a step has an unknown side
    """
    acc = bytes(target_hash)
    for position, step in enumerate(proof):
        if step.side == Side.RIGHT:
            acc = digest(hash_factory, acc, step.hash)
        elif step.side == Side.LEFT:
            acc = digest(hash_factory, step.hash, acc)
        else:
            raise ProofMismatchException(
                f"Proof step {position} has unknown side {step.side!r}",
                details={"step": position},
            )
    return acc


def validate_proof(
    hash_factory: HashFactory,
    target_hash: bytes,
    root_hash: bytes,
    proof: Sequence[ProofStep],
) -> None:
    """
    Check that a proof commits target_hash into root_hash.

    Args:
        hash_factory: Factory for the tree's hash algorithm
        target_hash: Claimed leaf hash
        root_hash: Claimed root
        proof: Steps ordered leaf to root

    Raises:
        ProofMismatchException: If the recomputed root differs from root_hash
    """
    computed = compute_root(hash_factory, target_hash, proof)
    if computed != bytes(root_hash):
        raise ProofMismatchException(
            "Recomputed root does not match the claimed root",
            expected_root=bytes(root_hash),
            computed_root=computed,
            details={"proof_length": len(proof)},
        )


def verify_proof(
    hash_factory: HashFactory,
    target_hash: bytes,
    root_hash: bytes,
    proof: Sequence[ProofStep],
) -> bool:
    """Boolean form of validate_proof()."""
    try:
        validate_proof(hash_factory, target_hash, root_hash, proof)
    except ProofMismatchException:
        return False
    return True


__all__ = ["compute_root", "validate_proof", "verify_proof"]
