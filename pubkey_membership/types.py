"""
Value types exchanged between the math core and the proving backend.

This module provides:
1. Signature - ECDSA (r, s) without a recovery bit
2. MerkleProof - root plus leaf-to-root path
3. MembershipProofInputs - the circuit input bundle, in circuit order
4. MembershipProof - opaque groth16 proof with CBOR serialization
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Tuple

import cbor2

from .config import PROOF_VERSION
from .exceptions import SerializationError


@dataclass(frozen=True)
class Signature:
    """ECDSA signature. Range checks happen in the verifier, not here."""

    r: int
    s: int


@dataclass(frozen=True)
class MerkleProof:
    """
    Inclusion path for one leaf.

    Attributes:
        root: Merkle root (field element)
        path_indices: One bit per level, leaf to root; 0 means the node is
            a left child and its sibling sits on the right
        siblings: Sibling hashes, same order and length as ``path_indices``
    """

    root: int
    path_indices: Tuple[int, ...]
    siblings: Tuple[int, ...]

    def __post_init__(self):
        if len(self.path_indices) != len(self.siblings):
            raise ValueError("path_indices and siblings must have equal length")

    @property
    def depth(self) -> int:
        return len(self.siblings)


# Field order the membership circuit expects
CIRCUIT_INPUT_ORDER = ("s", "Tx", "Ty", "Ux", "Uy", "root", "pathIndices", "siblings")


@dataclass(frozen=True)
class MembershipProofInputs:
    """
    Public and private inputs of the membership circuit.

    ``T`` and ``U`` are given in twisted-Edwards coordinates. ``s`` is the
    raw signature component, not its inverse.
    """

    s: int
    Tx: int
    Ty: int
    Ux: int
    Uy: int
    root: int
    path_indices: Tuple[int, ...]
    siblings: Tuple[int, ...]

    def to_circuit_input(self) -> Dict[str, Any]:
        """
        Build the JSON-ready witness input.

        Field elements are decimal strings, as witness generators expect.
        Keys follow ``CIRCUIT_INPUT_ORDER``.
        """
        return {
            "s": str(self.s),
            "Tx": str(self.Tx),
            "Ty": str(self.Ty),
            "Ux": str(self.Ux),
            "Uy": str(self.Uy),
            "root": str(self.root),
            "pathIndices": [int(bit) for bit in self.path_indices],
            "siblings": [str(sibling) for sibling in self.siblings],
        }


@dataclass
class MembershipProof:
    """
    Groth16 proof as returned by the backend.

    Attributes:
        proof: Backend-specific proof object (pi_a, pi_b, pi_c, ...)
        public_signals: Public-input vector the proof was generated for
    """

    proof: Dict[str, Any]
    public_signals: List[str] = field(default_factory=list)

    def serialize(self) -> bytes:
        """
        Serialize proof to bytes using CBOR.

        Raises:
            SerializationError: If serialization fails
        """
        try:
            data = {
                "v": PROOF_VERSION,
                "p": self.proof,
                "ps": list(self.public_signals),
            }
            return cbor2.dumps(data)
        except Exception as e:
            raise SerializationError(f"Failed to serialize proof: {e}") from e

    @classmethod
    def deserialize(cls, data: bytes) -> "MembershipProof":
        """
        Deserialize proof from CBOR bytes.

        Raises:
            SerializationError: If the payload is not a supported proof
        """
        try:
            obj = cbor2.loads(data)
        except Exception as e:
            raise SerializationError(f"Failed to deserialize proof: {e}") from e

        if not isinstance(obj, dict):
            raise SerializationError("Invalid proof format: expected a map")

        version = obj.get("v")
        if version != PROOF_VERSION:
            raise SerializationError(
                f"Unsupported proof version: {version} (expected {PROOF_VERSION})"
            )

        if "p" not in obj or not isinstance(obj["p"], dict):
            raise SerializationError("Invalid proof format: missing proof object")

        public_signals = obj.get("ps", [])
        if not isinstance(public_signals, list):
            raise SerializationError("Invalid proof format: public signals must be a list")

        return cls(proof=obj["p"], public_signals=[str(v) for v in public_signals])

    def to_dict(self) -> dict:
        """snarkjs-style ``{proof, publicSignals}`` dictionary."""
        return {"proof": self.proof, "publicSignals": list(self.public_signals)}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MembershipProof":
        try:
            return cls(
                proof=data["proof"],
                public_signals=[str(v) for v in data["publicSignals"]],
            )
        except (KeyError, TypeError) as e:
            raise SerializationError(f"Invalid proof dictionary: {e}") from e
