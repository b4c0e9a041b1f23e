"""
Schemas
File: proof.py

Purpose: Transport models for inclusion proofs. A proof travels as an
ordered list of (hex sibling hash, one-bit side flag) steps together with
the leaf, the root and the tree policy it was produced under.
"""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from sortedmerkle.config.runtime import TreeConfig
from sortedmerkle.crypto.hashing import from_hex, to_hex
from sortedmerkle.crypto.ordering import ORDERING_SORTED, get_pair_hasher
from sortedmerkle.merkle.merkle_proofs import (
    MerkleProof,
    ProofStep,
    SiblingSide,
    verify_merkle_proof,
)
from .errors import EmptyTreeException, MalformedProofException


def _check_hex(v: str) -> str:
    # Raises ValueError with a readable message on bad input
    from_hex(v)
    return v.lower()


class ProofStepModel(BaseModel):
    """One proof step on the wire."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    sibling: str = Field(..., description="0x-prefixed hex sibling hash")
    is_left: bool = Field(
        default=False,
        description="True if the sibling was the left argument at this level",
    )

    @field_validator("sibling")
    @classmethod
    def validate_sibling_hex(cls, v: str) -> str:
        return _check_hex(v)

    @classmethod
    def from_step(cls, step: ProofStep) -> "ProofStepModel":
        return cls(sibling=to_hex(step.sibling), is_left=step.side.is_left)

    def to_step(self) -> ProofStep:
        return ProofStep(from_hex(self.sibling), SiblingSide.from_is_left(self.is_left))


class InclusionProofModel(BaseModel):
    """
    Self-describing inclusion proof.

    Carries the policy names so a verifier can reject a proof produced
    under settings it does not share.
    """

    model_config = ConfigDict(extra="forbid")

    leaf: str = Field(..., description="0x-prefixed hex leaf hash")
    root: str = Field(..., description="0x-prefixed hex root hash")
    steps: list[ProofStepModel] = Field(
        default_factory=list,
        description="Proof steps in leaf-to-root order",
    )
    ordering: str = Field(default=ORDERING_SORTED)
    hash_algorithm: str = Field(default="sha256")

    @field_validator("leaf", "root")
    @classmethod
    def validate_hash_hex(cls, v: str) -> str:
        return _check_hex(v)

    @classmethod
    def from_proof(
        cls,
        leaf: bytes,
        proof: MerkleProof,
        root: Optional[bytes],
        config: TreeConfig | None = None,
    ) -> "InclusionProofModel":
        """
        Wrap a proof for transport under the given tree policy.

        Raises:
            EmptyTreeException: If root is None (a tree with no leaves)
        """
        if root is None:
            raise EmptyTreeException("Cannot wrap a proof for a tree with no root")
        config = config or TreeConfig()
        return cls(
            leaf=to_hex(leaf),
            root=to_hex(root),
            steps=[ProofStepModel.from_step(step) for step in proof.steps],
            ordering=config.ordering,
            hash_algorithm=config.hash_algorithm,
        )

    @classmethod
    def from_wire(cls, data: dict[str, Any]) -> "InclusionProofModel":
        """
        Decode a received proof.

        Raises:
            MalformedProofException: If the payload does not match the schema
        """
        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise MalformedProofException(
                f"Invalid inclusion proof payload: {e.error_count()} error(s)",
                details={"errors": e.errors(include_url=False)},
            ) from e

    @property
    def height(self) -> int:
        return len(self.steps)

    def leaf_bytes(self) -> bytes:
        return from_hex(self.leaf)

    def root_bytes(self) -> bytes:
        return from_hex(self.root)

    def to_proof(self) -> MerkleProof:
        return MerkleProof(steps=tuple(step.to_step() for step in self.steps))

    def verify(self, expected_height: int | None = None) -> bool:
        """
        Verify the carried proof under the carried policy.

        Unknown policy names make the proof invalid rather than raising.
        """
        try:
            hasher = get_pair_hasher(self.ordering, self.hash_algorithm)
        except ValueError:
            return False
        return verify_merkle_proof(
            self.leaf_bytes(),
            self.to_proof(),
            self.root_bytes(),
            hasher=hasher,
            expected_height=expected_height,
        )


__all__ = [
    "ProofStepModel",
    "InclusionProofModel",
]
