"""
Proof Documents
JSON encoding of a single inclusion proof.

A document carries everything a verifier needs: the algorithm name, the
leaf hash, the claimed root and the ordered steps. Hashes are 0x-prefixed
lowercase hex.

Example document:
    {
      "algorithm": "sha256",
      "leaf": "0x6b86...",
      "root": "0x1a2b...",
      "steps": [{"side": "right", "hash": "0xd4735e..."}]
    }
"""
from __future__ import annotations

from typing import Literal, Optional, Sequence

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from merkletree.crypto.hashing import DEFAULT_ALGORITHM, from_hex, hash_factory, to_hex
from merkletree.merkle.node import ProofStep, Side
from merkletree.merkle.validate import validate_proof
from merkletree.schemas.errors import ProofDocumentException


def _check_hex(value: str) -> str:
    from_hex(value)
    return value.lower()


class ProofStepModel(BaseModel):
    """Serialized form of one ProofStep."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    side: Literal["left", "right"] = Field(
        ...,
        description="Where the hash is concatenated relative to the running hash",
    )
    hash: str = Field(
        ...,
        description="Sibling hash as 0x-prefixed hex",
    )

    @field_validator("hash")
    @classmethod
    def hash_is_hex(cls, v: str) -> str:
        return _check_hex(v)


class ProofDocument(BaseModel):
    """Self-contained, serializable inclusion proof."""

    model_config = ConfigDict(extra="forbid")

    algorithm: str = Field(
        default=DEFAULT_ALGORITHM,
        description="hashlib algorithm name used to build the tree",
        min_length=1,
    )
    leaf: str = Field(..., description="Leaf hash as 0x-prefixed hex")
    root: str = Field(..., description="Root hash as 0x-prefixed hex")
    steps: list[ProofStepModel] = Field(
        default_factory=list,
        description="Proof steps ordered leaf to root",
    )

    @field_validator("leaf", "root")
    @classmethod
    def hashes_are_hex(cls, v: str) -> str:
        return _check_hex(v)

    @classmethod
    def from_proof(
        cls,
        leaf: bytes,
        root: bytes,
        steps: Sequence[ProofStep],
        algorithm: str = DEFAULT_ALGORITHM,
    ) -> "ProofDocument":
        """Build a document from raw bytes and ProofStep objects."""
        return cls(
            algorithm=algorithm,
            leaf=to_hex(leaf),
            root=to_hex(root),
            steps=[
                ProofStepModel(side=Side(step.side).value, hash=to_hex(step.hash))
                for step in steps
            ],
        )

    @classmethod
    def from_json(cls, text: str | bytes) -> "ProofDocument":
        """
        Parse a document from JSON.

        Raises:
            ProofDocumentException: If the JSON is malformed or a field is invalid
        """
        try:
            return cls.model_validate_json(text)
        except ValidationError as e:
            first = e.errors()[0] if e.errors() else {}
            field_path = ".".join(str(p) for p in first.get("loc", ()))
            raise ProofDocumentException(
                f"Invalid proof document: {first.get('msg', str(e))}",
                field_path=field_path or None,
                details={"error_count": e.error_count()},
            ) from e

    def to_json(self) -> str:
        return self.model_dump_json(indent=2)

    def leaf_bytes(self) -> bytes:
        return from_hex(self.leaf)

    def root_bytes(self) -> bytes:
        return from_hex(self.root)

    def to_steps(self) -> list[ProofStep]:
        return [ProofStep(Side(step.side), from_hex(step.hash)) for step in self.steps]

    def verify(self, root: Optional[bytes] = None) -> None:
        """
        Validate this proof.

        Args:
            root: Trusted root to check against. Defaults to the root stored
                in the document, which only proves internal consistency.

        Raises:
            ProofMismatchException: If the proof does not reach the root
            UnsupportedAlgorithmException: If the algorithm is unknown
        """
        validate_proof(
            hash_factory(self.algorithm),
            self.leaf_bytes(),
            root if root is not None else self.root_bytes(),
            self.to_steps(),
        )


__all__ = ["ProofDocument", "ProofStepModel"]
