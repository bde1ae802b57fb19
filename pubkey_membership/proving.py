"""
Prove and verify public-key membership.

Inputs are computed synchronously by the math core and then handed to the
proof backend, which is the only suspension point of a proving session.
"""

from __future__ import annotations

import logging
import tempfile
import time
from pathlib import Path
from typing import Optional, Sequence

from .config import DEFAULT_REMOTE_BASE_URL, MERKLE_TREE_DEPTH
from .exceptions import ConfigurationError
from .inputs import build_membership_inputs
from .merkle import FieldHasher, PublicKeyLike
from .snark.assets import ArtifactSource, select_artifact_source
from .snark.backend import ProofBackend, SnarkjsBackend
from .types import MembershipProof, Signature

logger = logging.getLogger(__name__)


async def prove_membership(
    signature: Signature,
    public_keys: Sequence[PublicKeyLike],
    index: int,
    message_hash: int,
    *,
    path_to_circuits: str | Path | None = None,
    source: Optional[ArtifactSource] = None,
    backend: Optional[ProofBackend] = None,
    base_url: str = DEFAULT_REMOTE_BASE_URL,
    depth: int = MERKLE_TREE_DEPTH,
    hasher: Optional[FieldHasher] = None,
) -> MembershipProof:
    """
    Prove that the signer of ``signature`` owns a key in ``public_keys``.

    Args:
        signature: ECDSA signature over ``message_hash``
        public_keys: Anonymity set, in tree order
        index: Position of the signer's key
        message_hash: Message hash already reduced mod n
        path_to_circuits: Artifact directory for the local source
        source: Explicit artifact source (skips the runtime flag)
        backend: Proof backend, snarkjs by default
        base_url: Artifact URL prefix for the remote source
        depth: Merkle depth of the circuit
        hasher: Arity-2 field hash the circuit recomputes the Merkle root
            with (Poseidon for the published circuit). Required: the
            default SHA-256 tree never matches a circuit root.

    Raises:
        ConfigurationError: If no hasher is given, or the local source is
            selected without a path
        InvalidSignatureError: If the signature does not verify
        ProofGenerationError: If the backend fails
    """
    if hasher is None:
        raise ConfigurationError(
            "A Merkle hasher matching the circuit must be provided for proving!"
        )
    if source is None:
        source = select_artifact_source(
            path_to_circuits, purpose="proving", base_url=base_url
        )
    backend = backend or SnarkjsBackend()

    inputs = build_membership_inputs(
        signature, public_keys, index, message_hash, depth=depth, hasher=hasher
    )

    with tempfile.TemporaryDirectory() as workdir:
        artifacts = await source.proving_artifacts(Path(workdir))
        started = time.perf_counter()
        proof = await backend.prove(artifacts, inputs)
        logger.debug("Proving: %.3fs", time.perf_counter() - started)

    return proof


async def verify_membership(
    proof: MembershipProof,
    *,
    path_to_circuits: str | Path | None = None,
    source: Optional[ArtifactSource] = None,
    backend: Optional[ProofBackend] = None,
    base_url: str = DEFAULT_REMOTE_BASE_URL,
) -> bool:
    """
    Verify a membership proof against the circuit's verification key.

    Raises:
        ConfigurationError: If the local source is selected without a path
        ArtifactNotFoundError: If the verification key cannot be loaded
    """
    if source is None:
        source = select_artifact_source(
            path_to_circuits, purpose="verification", base_url=base_url
        )
    backend = backend or SnarkjsBackend()

    with tempfile.TemporaryDirectory() as workdir:
        vkey_path = await source.verification_key(Path(workdir))
        started = time.perf_counter()
        verified = await backend.verify_proof(vkey_path, proof)
        logger.debug("Verification: %.3fs", time.perf_counter() - started)

    return verified
