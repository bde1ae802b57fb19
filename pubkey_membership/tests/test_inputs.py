import logging

import pytest

from pubkey_membership.curve import EdwardsPoint, WeierstrassPoint
from pubkey_membership.efficient_ecdsa import compute_tu_edwards
from pubkey_membership.exceptions import (
    IndexOutOfRangeError,
    InvalidSignatureError,
    MalformedSignatureError,
    TooManyLeavesError,
)
from pubkey_membership.inputs import build_membership_inputs
from pubkey_membership.merkle import build_merkle_proof, hash_public_key, verify_merkle_proof
from pubkey_membership.test_vectors import ecdsa_vectors as vectors
from pubkey_membership.types import CIRCUIT_INPUT_ORDER, MerkleProof, Signature


def test_builds_inputs_for_signer(signed_message, signer_public_key, anonymity_set):
    signature, message_hash = signed_message
    inputs = build_membership_inputs(signature, anonymity_set, 1, message_hash)

    t, u = compute_tu_edwards(signature, message_hash, signer_public_key)
    assert (inputs.Tx, inputs.Ty, inputs.Ux, inputs.Uy) == (t.x, t.y, u.x, u.y)
    assert inputs.s == signature.s

    merkle_proof = build_merkle_proof(anonymity_set, 1)
    assert inputs.root == merkle_proof.root
    assert inputs.path_indices == merkle_proof.path_indices
    assert inputs.siblings == merkle_proof.siblings


def test_t_plus_u_reconstructs_nonce_point(signed_message, anonymity_set):
    signature, message_hash = signed_message
    inputs = build_membership_inputs(signature, anonymity_set, 1, message_hash)

    summed = EdwardsPoint(inputs.Tx, inputs.Ty) + EdwardsPoint(inputs.Ux, inputs.Uy)
    assert summed == WeierstrassPoint(*vectors.NONCE_POINT).to_edwards()


def test_signer_leaf_is_in_tree(signed_message, signer_public_key, anonymity_set):
    signature, message_hash = signed_message
    inputs = build_membership_inputs(signature, anonymity_set, 1, message_hash, depth=3)

    proof = MerkleProof(inputs.root, inputs.path_indices, inputs.siblings)
    assert proof.depth == 3
    assert verify_merkle_proof(hash_public_key(signer_public_key), proof)


def test_accepts_points_and_hex_mixed(signed_message, signer_public_key, anonymity_set):
    signature, message_hash = signed_message
    from_hex = build_membership_inputs(signature, anonymity_set, 1, message_hash)
    mixed = build_membership_inputs(
        signature, [anonymity_set[0], signer_public_key], 1, message_hash
    )
    assert mixed == from_hex


def test_circuit_input_layout(signed_message, anonymity_set):
    signature, message_hash = signed_message
    circuit_input = build_membership_inputs(
        signature, anonymity_set, 1, message_hash
    ).to_circuit_input()

    assert tuple(circuit_input) == CIRCUIT_INPUT_ORDER
    assert circuit_input["s"] == str(signature.s)
    assert circuit_input["pathIndices"] == [1, 0, 0, 0, 0, 0, 0, 0]
    assert all(isinstance(sibling, str) for sibling in circuit_input["siblings"])
    assert len(circuit_input["siblings"]) == 8


def test_signature_from_other_key_rejected(signed_message, anonymity_set):
    signature, message_hash = signed_message
    with pytest.raises(InvalidSignatureError, match="public key 0"):
        build_membership_inputs(signature, anonymity_set, 0, message_hash)


def test_wrong_message_hash_rejected(signed_message, anonymity_set):
    signature, message_hash = signed_message
    with pytest.raises(InvalidSignatureError):
        build_membership_inputs(signature, anonymity_set, 1, message_hash + 1)


def test_malformed_signature_rejected(anonymity_set):
    with pytest.raises(MalformedSignatureError):
        build_membership_inputs(Signature(r=0, s=1), anonymity_set, 1, 0)


@pytest.mark.parametrize("index", [-1, 2, None])
def test_index_out_of_range(signed_message, anonymity_set, index):
    signature, message_hash = signed_message
    with pytest.raises(IndexOutOfRangeError):
        build_membership_inputs(signature, anonymity_set, index, message_hash)


def test_key_list_larger_than_tree(signed_message, anonymity_set):
    signature, message_hash = signed_message
    keys = anonymity_set + [anonymity_set[0]] * 3
    with pytest.raises(TooManyLeavesError):
        build_membership_inputs(signature, keys, 1, message_hash, depth=2)


def test_logs_timings(signed_message, anonymity_set, caplog):
    signature, message_hash = signed_message
    with caplog.at_level(logging.DEBUG, logger="pubkey_membership.inputs"):
        build_membership_inputs(signature, anonymity_set, 1, message_hash)
    assert "T and U generation" in caplog.text
    assert "Merkle proof generation" in caplog.text
