"""
Command-line interface for pubkey membership proofs.

Thin wrapper over the library: key derivation, signature checks, input
generation and the external prover.
"""

import functools
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, NoReturn, Optional

import click
import trio
import yaml

from pubkey_membership import __version__
from pubkey_membership.config import DEFAULT_REMOTE_BASE_URL, MERKLE_TREE_DEPTH
from pubkey_membership.ecdsa import (
    derive_public_key,
    recover_public_key_index_from_hex,
    verify,
)
from pubkey_membership.encoding import hex_to_int, public_key_from_hex, public_key_to_hex
from pubkey_membership.exceptions import InvalidEncodingError, PubkeyMembershipError
from pubkey_membership.feature_flags import set_artifact_source_type
from pubkey_membership.inputs import build_membership_inputs
from pubkey_membership.merkle import load_hasher
from pubkey_membership.proving import prove_membership, verify_membership
from pubkey_membership.types import MembershipProof, Signature

_SETTING_KEYS = ("depth", "path_to_circuits", "artifact_source", "base_url", "hasher")


def load_settings(path: Optional[str]) -> Dict[str, Any]:
    """
    Read CLI settings from a YAML mapping.

    Unknown keys are rejected so a typo does not silently fall back to a
    default depth or artifact location.
    """
    settings: Dict[str, Any] = {
        "depth": MERKLE_TREE_DEPTH,
        "path_to_circuits": None,
        "artifact_source": None,
        "base_url": DEFAULT_REMOTE_BASE_URL,
        "hasher": None,
    }
    if path is None:
        return settings

    try:
        with open(path, "r", encoding="utf-8") as fh:
            loaded = yaml.safe_load(fh) or {}
    except yaml.YAMLError as e:
        raise click.BadParameter(f"invalid YAML: {e}", param_hint="--config") from e
    if not isinstance(loaded, dict):
        raise click.BadParameter("settings file must contain a mapping", param_hint="--config")
    unknown = sorted(set(loaded) - set(_SETTING_KEYS))
    if unknown:
        raise click.BadParameter(
            f"unknown settings: {', '.join(unknown)}", param_hint="--config"
        )
    settings.update(loaded)
    return settings


def _read_public_keys(path: str) -> List[str]:
    """
    Raises:
        InvalidEncodingError: If a JSON keys file cannot be parsed as a list
    """
    text = Path(path).read_text(encoding="utf-8").strip()
    if text.startswith("["):
        try:
            keys = json.loads(text)
        except json.JSONDecodeError as e:
            raise InvalidEncodingError(f"invalid keys file {path}: {e}") from e
    else:
        keys = [line.strip() for line in text.splitlines() if line.strip()]
    return [str(key) for key in keys]


def _signature(r: str, s: str) -> Signature:
    return Signature(r=hex_to_int(r), s=hex_to_int(s))


def _fail(message: str) -> NoReturn:
    click.echo(click.style(f"✗ {message}", fg="red"), err=True)
    sys.exit(1)


signature_options = [
    click.option("--r", "r_hex", required=True, help="Signature r (hex)"),
    click.option("--s", "s_hex", required=True, help="Signature s (hex)"),
    click.option(
        "--msg-hash", type=int, default=0, show_default=True,
        help="Message hash, already reduced mod n (decimal)",
    ),
]


def with_signature(func):
    for option in reversed(signature_options):
        func = option(func)
    return func


@click.group()
@click.version_option(version=__version__)
@click.option("--config", "config_path", type=click.Path(exists=True), help="YAML settings file")
@click.option("--verbose", is_flag=True, help="Enable debug logging")
@click.pass_context
def main(ctx, config_path, verbose):
    """
    Baby Jubjub ECDSA public-key membership tool.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )
    ctx.obj = load_settings(config_path)
    try:
        set_artifact_source_type(ctx.obj["artifact_source"])
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="--config") from e


@main.command("derive-pubkey")
@click.argument("private_key")
def derive_pubkey(private_key):
    """Print the uncompressed public key of a hex PRIVATE_KEY."""
    try:
        public_key = derive_public_key(hex_to_int(private_key))
        click.echo(public_key_to_hex(public_key))
    except PubkeyMembershipError as e:
        _fail(str(e))


@main.command("verify")
@with_signature
@click.option("--pubkey", required=True, help="Uncompressed public key (hex)")
def verify_command(r_hex, s_hex, msg_hash, pubkey):
    """Check a signature against one public key."""
    try:
        valid = verify(_signature(r_hex, s_hex), msg_hash, public_key_from_hex(pubkey))
    except PubkeyMembershipError as e:
        _fail(str(e))
    if not valid:
        _fail("signature does not verify")
    click.echo(click.style("✓ signature verifies", fg="green"))


@main.command("recover-index")
@with_signature
@click.option("--keys", "keys_path", required=True, type=click.Path(exists=True),
              help="JSON list or one hex public key per line")
def recover_index(r_hex, s_hex, msg_hash, keys_path):
    """Find which listed key produced the signature."""
    try:
        index = recover_public_key_index_from_hex(
            _signature(r_hex, s_hex), msg_hash, _read_public_keys(keys_path)
        )
    except PubkeyMembershipError as e:
        _fail(str(e))
    click.echo(index)


@main.command("build-inputs")
@with_signature
@click.option("--keys", "keys_path", required=True, type=click.Path(exists=True),
              help="JSON list or one hex public key per line")
@click.option("--index", type=int, required=True, help="Signer position in the key list")
@click.option("--hasher", "hasher_ref", help="Merkle hash as module:callable (default SHA-256)")
@click.option("--output", type=click.Path(), help="Write JSON here instead of stdout")
@click.pass_obj
def build_inputs(settings, r_hex, s_hex, msg_hash, keys_path, index, hasher_ref, output):
    """Print the circuit input JSON for a signature."""
    hasher_ref = hasher_ref or settings["hasher"]

    try:
        inputs = build_membership_inputs(
            _signature(r_hex, s_hex),
            _read_public_keys(keys_path),
            index,
            msg_hash,
            depth=settings["depth"],
            hasher=load_hasher(hasher_ref) if hasher_ref else None,
        )
    except PubkeyMembershipError as e:
        _fail(str(e))

    payload = json.dumps(inputs.to_circuit_input(), indent=2)
    if output:
        Path(output).write_text(payload, encoding="utf-8")
        click.echo(f"✓ Inputs written to: {output}")
    else:
        click.echo(payload)


@main.command("prove")
@with_signature
@click.option("--keys", "keys_path", required=True, type=click.Path(exists=True),
              help="JSON list or one hex public key per line")
@click.option("--index", type=int, help="Signer position (recovered when omitted)")
@click.option("--hasher", "hasher_ref", help="Circuit Merkle hash as module:callable")
@click.option("--circuits", "path_to_circuits", type=click.Path(), help="Artifact directory")
@click.option("--output", type=click.Path(), default="proof.json", show_default=True,
              help="Proof file; a .cbor suffix writes CBOR")
@click.pass_obj
def prove(settings, r_hex, s_hex, msg_hash, keys_path, index, hasher_ref, path_to_circuits,
          output):
    """Generate a membership proof with the snarkjs backend."""
    hasher_ref = hasher_ref or settings["hasher"]

    try:
        hasher = load_hasher(hasher_ref) if hasher_ref else None
        public_keys = _read_public_keys(keys_path)
        signature = _signature(r_hex, s_hex)
        if index is None:
            index = recover_public_key_index_from_hex(signature, msg_hash, public_keys)
        proof = trio.run(
            functools.partial(
                prove_membership,
                signature,
                public_keys,
                index,
                msg_hash,
                path_to_circuits=path_to_circuits or settings["path_to_circuits"],
                base_url=settings["base_url"],
                depth=settings["depth"],
                hasher=hasher,
            )
        )
    except PubkeyMembershipError as e:
        _fail(str(e))

    if output.endswith(".cbor"):
        Path(output).write_bytes(proof.serialize())
    else:
        Path(output).write_text(json.dumps(proof.to_dict(), indent=2), encoding="utf-8")
    click.echo(f"✓ Proof written to: {output}")


@main.command("verify-proof")
@click.argument("proof_path", type=click.Path(exists=True))
@click.option("--circuits", "path_to_circuits", type=click.Path(), help="Artifact directory")
@click.pass_obj
def verify_proof(settings, proof_path, path_to_circuits):
    """Verify a proof file produced by ``prove``."""
    try:
        if proof_path.endswith(".cbor"):
            proof = MembershipProof.deserialize(Path(proof_path).read_bytes())
        else:
            proof = MembershipProof.from_dict(
                json.loads(Path(proof_path).read_text(encoding="utf-8"))
            )
        verified = trio.run(
            functools.partial(
                verify_membership,
                proof,
                path_to_circuits=path_to_circuits or settings["path_to_circuits"],
                base_url=settings["base_url"],
            )
        )
    except PubkeyMembershipError as e:
        _fail(str(e))

    if not verified:
        _fail("proof is invalid")
    click.echo(click.style("✓ proof verifies", fg="green"))


if __name__ == "__main__":
    main()
