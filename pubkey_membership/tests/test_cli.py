"""Tests for the command-line interface."""

import json

import pytest
from click.testing import CliRunner

from pubkey_membership.cli import main
from pubkey_membership.test_vectors import ecdsa_vectors as vectors

SIGNER_HEX = vectors.RECOVERY_CANDIDATES[vectors.RECOVERY_INDEX]
_, R_HEX, S_HEX = vectors.SIGNATURES_BY_PRIVATE_KEY[0]
HASHER = "pubkey_membership.merkle:hash_node"


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def keys_file(tmp_path):
    path = tmp_path / "keys.json"
    path.write_text(json.dumps([vectors.SECOND_PUBLIC_KEY_HEX, SIGNER_HEX]))
    return str(path)


def _signature_args(msg_hash=0):
    return ["--r", R_HEX, "--s", S_HEX, "--msg-hash", str(msg_hash)]


def test_derive_pubkey(runner):
    result = runner.invoke(main, ["derive-pubkey", vectors.PRIVATE_KEY_HEX])
    assert result.exit_code == 0
    assert result.output.strip() == SIGNER_HEX


def test_derive_pubkey_rejects_bad_hex(runner):
    result = runner.invoke(main, ["derive-pubkey", "not-hex"])
    assert result.exit_code == 1
    assert "Invalid hex string" in result.output


def test_verify_valid(runner):
    result = runner.invoke(main, ["verify", *_signature_args(), "--pubkey", SIGNER_HEX])
    assert result.exit_code == 0
    assert "signature verifies" in result.output


def test_verify_wrong_message(runner):
    result = runner.invoke(main, ["verify", *_signature_args(1), "--pubkey", SIGNER_HEX])
    assert result.exit_code == 1
    assert "does not verify" in result.output


def test_recover_index_from_line_file(runner, tmp_path):
    path = tmp_path / "keys.txt"
    path.write_text("\n".join(vectors.RECOVERY_CANDIDATES) + "\n")
    result = runner.invoke(main, ["recover-index", *_signature_args(), "--keys", str(path)])
    assert result.exit_code == 0
    assert result.output.strip() == str(vectors.RECOVERY_INDEX)


def test_recover_index_not_found(runner, tmp_path):
    path = tmp_path / "keys.json"
    path.write_text(json.dumps([vectors.SECOND_PUBLIC_KEY_HEX]))
    result = runner.invoke(main, ["recover-index", *_signature_args(), "--keys", str(path)])
    assert result.exit_code == 1
    assert "No public key" in result.output


def test_build_inputs_to_stdout(runner, keys_file):
    result = runner.invoke(
        main, ["build-inputs", *_signature_args(), "--keys", keys_file, "--index", "1"]
    )
    assert result.exit_code == 0
    circuit_input = json.loads(result.output)
    assert circuit_input["s"] == str(int(S_HEX, 16))
    assert circuit_input["pathIndices"][0] == 1
    assert len(circuit_input["siblings"]) == 8


def test_build_inputs_to_file_with_config_depth(runner, keys_file, tmp_path):
    config = tmp_path / "settings.yaml"
    config.write_text("depth: 3\n")
    output = tmp_path / "input.json"

    result = runner.invoke(
        main,
        [
            "--config", str(config),
            "build-inputs", *_signature_args(),
            "--keys", keys_file, "--index", "1", "--output", str(output),
        ],
    )
    assert result.exit_code == 0
    assert "Inputs written to" in result.output
    assert len(json.loads(output.read_text())["siblings"]) == 3


def test_build_inputs_wrong_signer(runner, keys_file):
    result = runner.invoke(
        main, ["build-inputs", *_signature_args(), "--keys", keys_file, "--index", "0"]
    )
    assert result.exit_code == 1
    assert "does not verify" in result.output


def test_unknown_setting_rejected(runner, tmp_path):
    config = tmp_path / "settings.yaml"
    config.write_text("depht: 3\n")
    result = runner.invoke(main, ["--config", str(config), "derive-pubkey", "01"])
    assert result.exit_code == 2
    assert "unknown settings: depht" in result.output


def test_prove_requires_circuits(runner, keys_file):
    result = runner.invoke(
        main,
        ["prove", *_signature_args(), "--keys", keys_file, "--hasher", HASHER],
    )
    assert result.exit_code == 1
    assert "Path to circuits must be provided for server side proving!" in result.output


def test_verify_proof_requires_circuits(runner, tmp_path):
    proof_path = tmp_path / "proof.json"
    proof_path.write_text(json.dumps({"proof": {"pi_a": []}, "publicSignals": ["1"]}))
    result = runner.invoke(main, ["verify-proof", str(proof_path)])
    assert result.exit_code == 1
    assert "server side verification!" in result.output


def test_verify_proof_rejects_bad_cbor(runner, tmp_path):
    proof_path = tmp_path / "proof.cbor"
    proof_path.write_bytes(b"\x01")
    result = runner.invoke(main, ["verify-proof", str(proof_path)])
    assert result.exit_code == 1
    assert "expected a map" in result.output


def test_prove_requires_hasher(runner, keys_file, tmp_path):
    result = runner.invoke(
        main,
        ["prove", *_signature_args(), "--keys", keys_file, "--circuits", str(tmp_path)],
    )
    assert result.exit_code == 1
    assert "Merkle hasher matching the circuit must be provided" in result.output


def test_prove_reads_hasher_from_settings(runner, keys_file, tmp_path):
    config = tmp_path / "settings.yaml"
    config.write_text(f"hasher: {HASHER}\n")
    result = runner.invoke(
        main, ["--config", str(config), "prove", *_signature_args(), "--keys", keys_file]
    )
    assert result.exit_code == 1
    assert "Path to circuits must be provided" in result.output


def test_prove_rejects_unloadable_hasher(runner, keys_file):
    result = runner.invoke(
        main,
        ["prove", *_signature_args(), "--keys", keys_file, "--hasher", "no.such:thing"],
    )
    assert result.exit_code == 1
    assert "Cannot load hasher" in result.output


def test_build_inputs_with_hasher_changes_root(runner, keys_file):
    args = ["build-inputs", *_signature_args(), "--keys", keys_file, "--index", "1"]
    default = json.loads(runner.invoke(main, args).output)
    custom = json.loads(
        runner.invoke(main, args + ["--hasher", "pubkey_membership.merkle:hash_leaf"]).output
    )
    assert custom["root"] != default["root"]
    assert custom["Tx"] == default["Tx"]


def test_malformed_keys_file(runner, tmp_path):
    path = tmp_path / "keys.json"
    path.write_text("[\"04abc\",")
    result = runner.invoke(main, ["recover-index", *_signature_args(), "--keys", str(path)])
    assert result.exit_code == 1
    assert "invalid keys file" in result.output


def test_malformed_settings_yaml(runner, tmp_path):
    config = tmp_path / "settings.yaml"
    config.write_text("depth: [1, 2\n")
    result = runner.invoke(main, ["--config", str(config), "derive-pubkey", "01"])
    assert result.exit_code == 2
    assert "invalid YAML" in result.output


def test_unknown_artifact_source_setting(runner, tmp_path):
    config = tmp_path / "settings.yaml"
    config.write_text("artifact_source: cloud\n")
    result = runner.invoke(main, ["--config", str(config), "derive-pubkey", "01"])
    assert result.exit_code == 2
    assert "Invalid artifact source" in result.output
