"""Assemble the membership circuit inputs from a signature and a key list."""

from __future__ import annotations

import logging
import time
from typing import Optional, Sequence

from .config import MERKLE_TREE_DEPTH, MERKLE_TREE_ZERO_VALUE
from .curve import WeierstrassPoint
from .ecdsa import verify
from .efficient_ecdsa import compute_tu_edwards
from .encoding import public_key_from_hex
from .exceptions import IndexOutOfRangeError, InvalidSignatureError
from .merkle import FieldHasher, PublicKeyLike, build_merkle_proof
from .types import MembershipProofInputs, Signature

logger = logging.getLogger(__name__)


def _signer_key(public_keys: Sequence[PublicKeyLike], index: int) -> WeierstrassPoint:
    if isinstance(index, bool) or not isinstance(index, int):
        raise IndexOutOfRangeError(f"Signer index must be an int, got {index!r}")
    if not 0 <= index < len(public_keys):
        raise IndexOutOfRangeError(
            f"Signer index {index} outside [0, {len(public_keys)})"
        )
    key = public_keys[index]
    if isinstance(key, str):
        return public_key_from_hex(key)
    return key


def build_membership_inputs(
    signature: Signature,
    public_keys: Sequence[PublicKeyLike],
    index: int,
    message_hash: int,
    *,
    depth: int = MERKLE_TREE_DEPTH,
    hasher: Optional[FieldHasher] = None,
    zero_value: int = MERKLE_TREE_ZERO_VALUE,
) -> MembershipProofInputs:
    """
    Build the input bundle for proving that ``public_keys[index]`` signed.

    Args:
        signature: ECDSA signature over ``message_hash``
        public_keys: Ordered anonymity set (hex strings or points)
        index: Position of the signer's key
        message_hash: Message hash already reduced mod n
        depth: Merkle depth shared with the circuit
        hasher: Circuit's arity-2 field hash
        zero_value: Merkle padding leaf

    Returns:
        MembershipProofInputs with T and U in Edwards coordinates

    Raises:
        MalformedSignatureError: If r or s is out of range
        InvalidSignatureError: If the signature does not verify
        IndexOutOfRangeError: If ``index`` is not a valid position
        TooManyLeavesError: If the key list does not fit the tree
    """
    public_key = _signer_key(public_keys, index)
    if not verify(signature, message_hash, public_key):
        raise InvalidSignatureError(
            f"Signature does not verify against public key {index}"
        )

    started = time.perf_counter()
    t, u = compute_tu_edwards(signature, message_hash, public_key)
    logger.debug("T and U generation: %.3fs", time.perf_counter() - started)

    started = time.perf_counter()
    merkle_proof = build_merkle_proof(
        public_keys, index, depth=depth, hasher=hasher, zero_value=zero_value
    )
    logger.debug("Merkle proof generation: %.3fs", time.perf_counter() - started)

    return MembershipProofInputs(
        s=signature.s,
        Tx=t.x,
        Ty=t.y,
        Ux=u.x,
        Uy=u.y,
        root=merkle_proof.root,
        path_indices=merkle_proof.path_indices,
        siblings=merkle_proof.siblings,
    )
