"""Public API for pubkey_membership.

Baby Jubjub ECDSA primitives and the input builder for a groth16 circuit
proving that a signature comes from a key in a Merkle-committed set.
"""
from __future__ import annotations

from .curve import (
    BASE_POINT_EDWARDS,
    GENERATOR,
    CurvePoint,
    EdwardsPoint,
    WeierstrassPoint,
    to_edwards,
    to_weierstrass,
)
from .ecdsa import (
    derive_public_key,
    recover_nonce_point,
    recover_public_key_index,
    recover_public_key_index_from_hex,
    verify,
)
from .efficient_ecdsa import compute_tu, compute_tu_edwards, compute_tu_from_nonce_point
from .encoding import hex_to_int, public_key_from_hex, public_key_to_hex
from .inputs import build_membership_inputs
from .merkle import build_merkle_proof, compute_merkle_root, hash_public_key, verify_merkle_proof
from .proving import prove_membership, verify_membership
from .types import MembershipProof, MembershipProofInputs, MerkleProof, Signature

__version__ = "0.1.0"

__all__ = [
    "BASE_POINT_EDWARDS",
    "GENERATOR",
    "CurvePoint",
    "EdwardsPoint",
    "WeierstrassPoint",
    "to_edwards",
    "to_weierstrass",
    "derive_public_key",
    "recover_nonce_point",
    "recover_public_key_index",
    "recover_public_key_index_from_hex",
    "verify",
    "compute_tu",
    "compute_tu_edwards",
    "compute_tu_from_nonce_point",
    "hex_to_int",
    "public_key_from_hex",
    "public_key_to_hex",
    "build_membership_inputs",
    "build_merkle_proof",
    "compute_merkle_root",
    "hash_public_key",
    "verify_merkle_proof",
    "prove_membership",
    "verify_membership",
    "MembershipProof",
    "MembershipProofInputs",
    "MerkleProof",
    "Signature",
]
