"""
Schemas

Purpose: Export the error taxonomy and proof transport models.
"""

from .errors import (
    ErrorCodes,
    MerkleError,
    MerkleException,
    InvalidLeafException,
    EmptyTreeException,
    LeafNotFoundException,
    MalformedProofException,
)
from .proof import (
    ProofStepModel,
    InclusionProofModel,
)

__all__ = [
    # Errors
    "ErrorCodes",
    "MerkleError",
    "MerkleException",
    "InvalidLeafException",
    "EmptyTreeException",
    "LeafNotFoundException",
    "MalformedProofException",
    # Transport
    "ProofStepModel",
    "InclusionProofModel",
]
