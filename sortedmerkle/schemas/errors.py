"""
Schemas
File: errors.py

Purpose: Error taxonomy for Merkle tree construction, proof generation and
proof transport. Defines both Pydantic models for structured error
reporting and Python exceptions for control flow.

Verification itself never raises: a proof that does not check out is a
normal False result, not an error.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# Error Codes (Machine-Readable Constants)
# =============================================================================

class ErrorCodes:
    """Stable machine-readable error codes."""

    # Input Errors
    INVALID_LEAF = "INVALID_LEAF"

    # Tree Errors
    EMPTY_TREE = "EMPTY_TREE"
    LEAF_NOT_FOUND = "LEAF_NOT_FOUND"

    # Proof Errors
    MALFORMED_PROOF = "MALFORMED_PROOF"


# =============================================================================
# Pydantic Error Models (Structured Communication)
# =============================================================================

class MerkleError(BaseModel):
    """
    Base error model for structured error reporting.

    Lets callers pass or serialize a failure without raising it.
    """

    model_config = ConfigDict(
        extra="forbid",
        frozen=False,
        validate_assignment=True,
    )

    code: str = Field(
        ...,
        description="Stable machine-readable error code",
        examples=[ErrorCodes.LEAF_NOT_FOUND],
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
    Base exception for all sortedmerkle errors.

    Carries structured error information and can be converted to a
    MerkleError model.
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


class InvalidLeafException(MerkleException):
    """Raised when a leaf is not a byte string or has the wrong length."""

    def __init__(
        self,
        message: str,
        leaf_index: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if leaf_index is not None:
            full_details["leaf_index"] = leaf_index
        super().__init__(
            message=message,
            code=ErrorCodes.INVALID_LEAF,
            details=full_details,
            retryable=False,
        )


class EmptyTreeException(MerkleException):
    """Raised when an operation needs a root but the tree has no leaves."""

    def __init__(
        self,
        message: str = "Merkle tree has no leaves and therefore no root",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.EMPTY_TREE,
            details=details,
            retryable=False,
        )


class LeafNotFoundException(MerkleException):
    """Raised when a proof is requested for a hash absent from the leaf level."""

    def __init__(
        self,
        message: str,
        leaf_hex: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if leaf_hex:
            full_details["leaf"] = leaf_hex
        super().__init__(
            message=message,
            code=ErrorCodes.LEAF_NOT_FOUND,
            details=full_details,
            retryable=False,
        )


class MalformedProofException(MerkleException):
    """Raised when a transported proof cannot be decoded into a MerkleProof."""

    def __init__(
        self,
        message: str,
        step_index: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if step_index is not None:
            full_details["step_index"] = step_index
        super().__init__(
            message=message,
            code=ErrorCodes.MALFORMED_PROOF,
            details=full_details,
            retryable=False,
        )
