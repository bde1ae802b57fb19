"""Shared fixtures for pubkey_membership unit tests."""

import pytest

from pubkey_membership import feature_flags
from pubkey_membership.curve import WeierstrassPoint
from pubkey_membership.encoding import hex_to_int
from pubkey_membership.test_vectors import ecdsa_vectors as vectors
from pubkey_membership.types import Signature


@pytest.fixture(autouse=True)
def reset_artifact_source(monkeypatch: pytest.MonkeyPatch):
    feature_flags.set_artifact_source_type(None)
    monkeypatch.delenv("PUBKEY_MEMBERSHIP_ARTIFACTS", raising=False)
    yield
    feature_flags.set_artifact_source_type(None)


@pytest.fixture
def signer_public_key() -> WeierstrassPoint:
    return WeierstrassPoint(*vectors.PUBLIC_KEY_VECTORS[0][1])


@pytest.fixture
def signed_message():
    """(signature, message_hash) for the z = 2 vector."""
    message_hash, r_hex, s_hex = vectors.SIGNATURES_BY_PRIVATE_KEY[2]
    return Signature(r=hex_to_int(r_hex), s=hex_to_int(s_hex)), message_hash


@pytest.fixture
def anonymity_set():
    """Two valid hex keys; the signer sits at index 1."""
    return [
        vectors.SECOND_PUBLIC_KEY_HEX,
        vectors.RECOVERY_CANDIDATES[vectors.RECOVERY_INDEX],
    ]
