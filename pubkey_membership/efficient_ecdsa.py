"""
Move the ``s^-1 mod n`` of ECDSA verification out of the circuit.

Verification reconstructs ``R' = s^-1 * (z*G + r*Q)``. Inverting modulo the
subgroup order is not native to the proof system's field, so the prover
computes the two halves of that sum here and the circuit only has to add
two points and compare an x-coordinate.
"""

from __future__ import annotations

from typing import Tuple

from .config import SUBGROUP_ORDER
from .curve import GENERATOR, EdwardsPoint, WeierstrassPoint
from .ecdsa import check_signature_range
from .field import scalar_inverse
from .types import Signature


def compute_tu(
    signature: Signature, message_hash: int, public_key: WeierstrassPoint
) -> Tuple[WeierstrassPoint, WeierstrassPoint]:
    """
    Split the verification nonce point into ``T + U``.

    ``T = (z*w)*G`` and ``U = (r*w)*Q`` with ``w = s^-1 mod n``, so that
    ``T + U == R'`` and ``(T + U).x mod n == r`` for a valid signature.
    Only meaningful once the signature has been verified.

    Raises:
        MalformedSignatureError: If r or s is out of range
    """
    check_signature_range(signature)
    w = scalar_inverse(signature.s)
    t = GENERATOR.scalar_multiply(message_hash * w % SUBGROUP_ORDER)
    u = public_key.scalar_multiply(signature.r * w % SUBGROUP_ORDER)
    return t, u


def compute_tu_edwards(
    signature: Signature, message_hash: int, public_key: WeierstrassPoint
) -> Tuple[EdwardsPoint, EdwardsPoint]:
    """``compute_tu`` with both points mapped to the circuit's Edwards form."""
    t, u = compute_tu(signature, message_hash, public_key)
    return t.to_edwards(), u.to_edwards()


def compute_tu_from_nonce_point(
    nonce_point: WeierstrassPoint, message_hash: int
) -> Tuple[WeierstrassPoint, WeierstrassPoint]:
    """
    Nonce-point form of the decomposition.

    With ``r = R.x mod n``: ``T = r^-1 * R`` and ``U = -(r^-1 * z) * G``.
    For the key ``Q`` that produced the signature ``s*T + U == Q``, which
    lets a circuit check the signature from ``s``, ``T`` and ``U`` alone.

    Raises:
        DivisionByZeroError: If ``R`` is infinity or ``R.x mod n == 0``
    """
    r = 0 if nonce_point.is_identity else nonce_point.x % SUBGROUP_ORDER
    r_inv = scalar_inverse(r)
    t = nonce_point.scalar_multiply(r_inv)
    u = GENERATOR.scalar_multiply(-(r_inv * message_hash) % SUBGROUP_ORDER)
    return t, u
