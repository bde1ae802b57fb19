"""
Fixed-depth Merkle tree over public keys.

Leaves are field elements ``H(E.x, E.y)`` of each key's Edwards form, and the
leaf list is right-padded with a zero value up to ``2**depth`` entries. The
tree must match the one the membership circuit recomputes, so the hash is
injectable: pass the circuit's Poseidon as ``hasher`` when producing real
proofs. The default is SHA-256 with domain separation, reduced into the field.
"""

from __future__ import annotations

import hashlib
import importlib
from typing import Callable, List, Optional, Sequence, Union

from .config import (
    DOMAIN_SEPARATORS,
    FIELD_MODULUS,
    MERKLE_TREE_DEPTH,
    MERKLE_TREE_ZERO_VALUE,
)
from .curve import WeierstrassPoint
from .encoding import public_key_from_hex
from .exceptions import ConfigurationError, IndexOutOfRangeError, TooManyLeavesError
from .types import MerkleProof

FieldHasher = Callable[[int, int], int]
PublicKeyLike = Union[str, WeierstrassPoint]


def _sha256_to_field(domain_sep: bytes, left: int, right: int) -> int:
    data = domain_sep + left.to_bytes(32, "big") + right.to_bytes(32, "big")
    return int.from_bytes(hashlib.sha256(data).digest(), "big") % FIELD_MODULUS


def hash_leaf(x: int, y: int) -> int:
    """Default leaf hash of an Edwards point's coordinates."""
    return _sha256_to_field(DOMAIN_SEPARATORS["merkle_leaf"], x, y)


def hash_node(left: int, right: int) -> int:
    """
    Default hash of two child nodes.

    Note:
        Uses fixed left||right ordering (no sorting).
    """
    return _sha256_to_field(DOMAIN_SEPARATORS["merkle_node"], left, right)


def load_hasher(reference: str) -> FieldHasher:
    """
    Import a field hasher given as ``"package.module:callable"``.

    Raises:
        ConfigurationError: If the reference is malformed, cannot be
            imported or does not name a callable
    """
    module_name, sep, attr = reference.partition(":")
    if not sep or not module_name or not attr:
        raise ConfigurationError(
            f"Hasher must look like 'module:callable', got {reference!r}"
        )
    try:
        hasher = getattr(importlib.import_module(module_name), attr)
    except (ImportError, AttributeError) as e:
        raise ConfigurationError(f"Cannot load hasher {reference!r}: {e}") from e
    if not callable(hasher):
        raise ConfigurationError(f"Hasher {reference!r} is not callable")
    return hasher


def hash_public_key(
    public_key: PublicKeyLike, hasher: Optional[FieldHasher] = None
) -> int:
    """Leaf value for a public key: hash of its Edwards coordinates."""
    if isinstance(public_key, str):
        public_key = public_key_from_hex(public_key)
    edwards = public_key.to_edwards()
    return (hasher or hash_leaf)(edwards.x, edwards.y)


def build_tree(
    leaves: Sequence[int],
    depth: int = MERKLE_TREE_DEPTH,
    hasher: Optional[FieldHasher] = None,
    zero_value: int = MERKLE_TREE_ZERO_VALUE,
) -> List[List[int]]:
    """
    Build every level of a padded tree, leaves first.

    Returns:
        ``levels`` where ``levels[0]`` has ``2**depth`` leaves and
        ``levels[depth]`` is ``[root]``

    Raises:
        TooManyLeavesError: If ``len(leaves) > 2**depth``
    """
    if depth < 1:
        raise ValueError("depth must be at least 1")
    capacity = 1 << depth
    if len(leaves) > capacity:
        raise TooManyLeavesError(
            f"{len(leaves)} leaves exceed the capacity {capacity} of a depth-{depth} tree"
        )

    node_hash = hasher or hash_node
    levels = [list(leaves) + [zero_value] * (capacity - len(leaves))]
    for _ in range(depth):
        current = levels[-1]
        levels.append([
            node_hash(current[i], current[i + 1])
            for i in range(0, len(current), 2)
        ])
    return levels


def build_merkle_proof(
    public_keys: Sequence[PublicKeyLike],
    index: int,
    depth: int = MERKLE_TREE_DEPTH,
    hasher: Optional[FieldHasher] = None,
    zero_value: int = MERKLE_TREE_ZERO_VALUE,
) -> MerkleProof:
    """
    Build the inclusion proof of ``public_keys[index]``.

    Args:
        public_keys: Ordered key list (hex strings or Weierstrass points)
        index: Leaf to prove
        depth: Tree depth shared with the circuit
        hasher: Arity-2 field hash used for leaves and nodes
        zero_value: Padding leaf

    Returns:
        MerkleProof with root, leaf-to-root path bits and siblings

    Raises:
        IndexOutOfRangeError: If ``index`` is not in ``[0, len(public_keys))``
        TooManyLeavesError: If the list does not fit the tree

    Example:
        proof = build_merkle_proof(pub_keys, 2)
        assert verify_merkle_proof(hash_public_key(pub_keys[2]), proof)
    """
    if isinstance(index, bool) or not isinstance(index, int):
        raise IndexOutOfRangeError(f"Leaf index must be an int, got {index!r}")
    if not 0 <= index < len(public_keys):
        raise IndexOutOfRangeError(
            f"Leaf index {index} outside [0, {len(public_keys)})"
        )
    if len(public_keys) > 1 << depth:
        raise TooManyLeavesError(
            f"{len(public_keys)} public keys exceed the capacity of a depth-{depth} tree"
        )

    leaves = [hash_public_key(key, hasher) for key in public_keys]
    levels = build_tree(leaves, depth=depth, hasher=hasher, zero_value=zero_value)

    path_indices: List[int] = []
    siblings: List[int] = []
    position = index
    for level in levels[:-1]:
        bit = position & 1
        path_indices.append(bit)
        siblings.append(level[position ^ 1])
        position >>= 1

    return MerkleProof(
        root=levels[-1][0],
        path_indices=tuple(path_indices),
        siblings=tuple(siblings),
    )


def compute_merkle_root(
    leaf: int, proof: MerkleProof, hasher: Optional[FieldHasher] = None
) -> int:
    """Recompute the root from a leaf and its path."""
    node_hash = hasher or hash_node
    current = leaf
    for bit, sibling in zip(proof.path_indices, proof.siblings):
        if bit:
            # Sibling is on left, current on right
            current = node_hash(sibling, current)
        else:
            current = node_hash(current, sibling)
    return current


def verify_merkle_proof(
    leaf: int, proof: MerkleProof, hasher: Optional[FieldHasher] = None
) -> bool:
    return compute_merkle_root(leaf, proof, hasher) == proof.root
