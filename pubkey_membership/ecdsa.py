"""
ECDSA over the Weierstrass form of Baby Jubjub.

Signatures carry no recovery bit. The signer's key is found by checking a
candidate list in order, so ``verify`` must report a bad signature as
``False`` rather than raising; only structurally invalid input raises.
"""

from __future__ import annotations

import logging
from typing import Iterable, Sequence, Tuple

from .config import SUBGROUP_ORDER
from .curve import GENERATOR, WeierstrassPoint
from .encoding import public_key_from_hex
from .exceptions import InvalidEncodingError, KeyNotFoundError, MalformedSignatureError
from .field import reduce_scalar, scalar_inverse
from .types import Signature

logger = logging.getLogger(__name__)


def check_signature_range(signature: Signature) -> None:
    """
    Raises:
        MalformedSignatureError: If r or s is outside [1, n-1]
    """
    for label, value in (("r", signature.r), ("s", signature.s)):
        if not isinstance(value, int) or not 1 <= value < SUBGROUP_ORDER:
            raise MalformedSignatureError(
                f"Signature component {label} must be in [1, n-1]"
            )


def derive_public_key(private_key: int) -> WeierstrassPoint:
    """Raw scalar times the generator (no clamping)."""
    return GENERATOR.scalar_multiply(reduce_scalar(private_key))


def verification_scalars(signature: Signature, message_hash: int) -> Tuple[int, int]:
    """
    Compute ``(u1, u2) = (z * s^-1, r * s^-1) mod n``.

    Raises:
        MalformedSignatureError: If r or s is out of range
    """
    check_signature_range(signature)
    w = scalar_inverse(signature.s)
    u1 = (message_hash * w) % SUBGROUP_ORDER
    u2 = (signature.r * w) % SUBGROUP_ORDER
    return u1, u2


def recover_nonce_point(
    signature: Signature, message_hash: int, public_key: WeierstrassPoint
) -> WeierstrassPoint:
    """
    Reconstruct ``R' = u1*G + u2*Q``.

    Raises:
        MalformedSignatureError: If r or s is out of range
    """
    u1, u2 = verification_scalars(signature, message_hash)
    return GENERATOR.scalar_multiply(u1).add(public_key.scalar_multiply(u2))


def verify(signature: Signature, message_hash: int, public_key: WeierstrassPoint) -> bool:
    """
    Standard ECDSA verification.

    Returns:
        True iff ``R'`` is not infinity and ``R'.x mod n == r``

    Raises:
        MalformedSignatureError: If r or s is out of range
    """
    nonce_point = recover_nonce_point(signature, message_hash, public_key)
    if nonce_point.is_identity:
        return False
    return nonce_point.x % SUBGROUP_ORDER == signature.r


def recover_public_key_index(
    signature: Signature,
    message_hash: int,
    candidates: Sequence[WeierstrassPoint],
) -> int:
    """
    Return the index of the first candidate that verifies the signature.

    Candidates are checked in list order and the scan stops at the first
    match, so duplicated valid keys resolve to the lowest index.

    Raises:
        MalformedSignatureError: If r or s is out of range
        KeyNotFoundError: If no candidate verifies
    """
    check_signature_range(signature)
    for index, candidate in enumerate(candidates):
        if verify(signature, message_hash, candidate):
            logger.debug("Signature verified against candidate %d", index)
            return index
    raise KeyNotFoundError(
        f"No public key among {len(candidates)} candidates verifies the signature"
    )


def recover_public_key_index_from_hex(
    signature: Signature,
    message_hash: int,
    candidates: Iterable[str],
) -> int:
    """
    Same scan as ``recover_public_key_index`` over hex-encoded keys.

    A candidate that does not decode to a curve point cannot have produced
    the signature and is skipped rather than reported.

    Raises:
        MalformedSignatureError: If r or s is out of range
        KeyNotFoundError: If no decodable candidate verifies
    """
    check_signature_range(signature)
    count = 0
    for index, encoded in enumerate(candidates):
        count += 1
        try:
            candidate = public_key_from_hex(encoded)
        except InvalidEncodingError:
            logger.debug("Skipping undecodable candidate %d", index)
            continue
        if verify(signature, message_hash, candidate):
            logger.debug("Signature verified against candidate %d", index)
            return index
    raise KeyNotFoundError(
        f"No public key among {count} candidates verifies the signature"
    )
