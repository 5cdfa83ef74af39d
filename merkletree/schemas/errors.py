"""
Schemas
File: errors.py

Purpose: Error taxonomy for tree building, proof generation and validation.
Defines both Pydantic models for structured error communication
and Python exceptions for control flow.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# Error Codes (Machine-Readable Constants)
# =============================================================================

class ErrorCodes:
    """Stable machine-readable error codes."""

    # Tree lifecycle
    FROZEN_TREE = "FROZEN_TREE"
    EMPTY_TREE = "EMPTY_TREE"

    # Proof generation
    PROOF_NOT_READY = "PROOF_NOT_READY"
    LEAF_NOT_FOUND = "LEAF_NOT_FOUND"

    # Proof validation
    ROOT_MISMATCH = "ROOT_MISMATCH"

    # Configuration & encoding
    UNSUPPORTED_ALGORITHM = "UNSUPPORTED_ALGORITHM"
    PROOF_DOCUMENT_INVALID = "PROOF_DOCUMENT_INVALID"


# =============================================================================
# Pydantic Error Models (Structured Communication)
# =============================================================================

class MerkleError(BaseModel):
    """
    Base error model for structured error communication.

    Used where an error has to be reported as data (CLI JSON output)
    rather than raised.
    """

    model_config = ConfigDict(
        extra="forbid",
        frozen=False,
        validate_assignment=True,
    )

    code: str = Field(
        ...,
        description="Stable machine-readable error code",
        examples=[ErrorCodes.ROOT_MISMATCH],
    )
    message: str = Field(
        ...,
        description="Human-readable error message",
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional structured details about the error",
    )
    retryable: bool = Field(
        default=False,
        description="Whether the operation can be retried",
    )

    def to_exception(self) -> "MerkleException":
        """Convert this error model to a raised exception."""
        return MerkleException(
            code=self.code,
            message=self.message,
            details=self.details,
            retryable=self.retryable,
        )


# =============================================================================
# Python Exceptions (Control Flow)
# =============================================================================

class MerkleException(Exception):
    """
    Base exception for all tree and proof errors.

    Carries structured error information and can be converted to/from
    MerkleError models. Every operation in this package is deterministic,
    so nothing raised here is retryable.
    """

    def __init__(
        self,
        message: str,
        code: str = "MERKLE_ERROR",
        details: dict[str, Any] | None = None,
        retryable: bool = False,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}
        self.retryable = retryable

    def to_error_model(self) -> MerkleError:
        """Convert this exception to a MerkleError model."""
        return MerkleError(
            code=self.code,
            message=self.message,
            details=self.details,
            retryable=self.retryable,
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r})"


class ProofNotReadyException(MerkleException):
    """Raised when a proof is requested before the root has been computed."""

    def __init__(self, message: str | None = None) -> None:
        super().__init__(
            message=message or "Proof cannot be generated before the root is computed",
            code=ErrorCodes.PROOF_NOT_READY,
        )


class LeafNotFoundException(MerkleException):
    """Raised when a proof is requested for a hash that is not a leaf."""

    def __init__(self, leaf_hash: bytes) -> None:
        super().__init__(
            message="Target hash does not exist in the tree",
            code=ErrorCodes.LEAF_NOT_FOUND,
            details={"leaf_hash": "0x" + leaf_hash.hex()},
        )


class ProofMismatchException(MerkleException):
    """Raised when a proof does not recompute to the claimed root."""

    def __init__(
        self,
        message: str,
        expected_root: bytes | None = None,
        computed_root: bytes | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if expected_root is not None:
            full_details["expected_root"] = "0x" + expected_root.hex()
        if computed_root is not None:
            full_details["computed_root"] = "0x" + computed_root.hex()
        super().__init__(
            message=message,
            code=ErrorCodes.ROOT_MISMATCH,
            details=full_details,
        )


class UnsupportedAlgorithmException(MerkleException):
    """Raised when a hash algorithm name cannot be resolved."""

    def __init__(self, algorithm: str) -> None:
        super().__init__(
            message=f"Unsupported hash algorithm: {algorithm}",
            code=ErrorCodes.UNSUPPORTED_ALGORITHM,
            details={"algorithm": algorithm},
        )


class ProofDocumentException(MerkleException):
    """Raised when a serialized proof cannot be decoded."""

    def __init__(
        self,
        message: str,
        field_path: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if field_path:
            full_details["field_path"] = field_path
        super().__init__(
            message=message,
            code=ErrorCodes.PROOF_DOCUMENT_INVALID,
            details=full_details,
        )
