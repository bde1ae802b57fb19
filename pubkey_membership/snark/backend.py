"""
Groth16 proving and verification through an external backend.

The math core only produces the circuit inputs; proving is a long-running
call handed to a ``ProofBackend``. ``SnarkjsBackend`` drives the snarkjs CLI
as a subprocess under trio, so the call can be cancelled or timed out.
"""

from __future__ import annotations

import json
import logging
import subprocess
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Sequence

import trio

from ..config import PROVER_TIMEOUT_SECONDS, SNARKJS_BINARY, VERIFIER_TIMEOUT_SECONDS
from ..exceptions import ConfigurationError, ProofGenerationError, SerializationError
from ..types import MembershipProof, MembershipProofInputs
from .assets import ProvingArtifacts

logger = logging.getLogger(__name__)


class ProofBackend(ABC):
    """Opaque groth16 prover/verifier for the membership circuit."""

    @abstractmethod
    async def prove(
        self, artifacts: ProvingArtifacts, inputs: MembershipProofInputs
    ) -> MembershipProof:
        """
        Raises:
            ProofGenerationError: If the backend cannot produce a proof
        """

    @abstractmethod
    async def verify_proof(self, vkey_path: Path, proof: MembershipProof) -> bool:
        ...


class SnarkjsBackend(ProofBackend):
    """Run ``snarkjs groth16 fullprove`` / ``snarkjs groth16 verify``."""

    def __init__(
        self,
        binary: str = SNARKJS_BINARY,
        prove_timeout: float = PROVER_TIMEOUT_SECONDS,
        verify_timeout: float = VERIFIER_TIMEOUT_SECONDS,
    ) -> None:
        self.binary = binary
        self.prove_timeout = prove_timeout
        self.verify_timeout = verify_timeout

    async def prove(
        self, artifacts: ProvingArtifacts, inputs: MembershipProofInputs
    ) -> MembershipProof:
        with tempfile.TemporaryDirectory() as tmp_dir:
            tmp = trio.Path(tmp_dir)
            input_path = tmp / "input.json"
            proof_path = tmp / "proof.json"
            public_path = tmp / "public.json"
            await input_path.write_text(json.dumps(inputs.to_circuit_input()))

            command = [
                self.binary,
                "groth16",
                "fullprove",
                str(input_path),
                str(artifacts.wasm_path),
                str(artifacts.zkey_path),
                str(proof_path),
                str(public_path),
            ]
            try:
                result = await self._run(command, self.prove_timeout)
            except trio.TooSlowError as exc:
                raise ProofGenerationError(
                    f"prover timed out after {self.prove_timeout}s"
                ) from exc

            if result.returncode != 0:
                stderr = _decode(result.stderr) or "unknown prover error"
                raise ProofGenerationError(f"prover failed: {stderr}")

            try:
                proof = json.loads(await proof_path.read_text())
                public_signals = json.loads(await public_path.read_text())
            except (OSError, ValueError) as exc:
                raise ProofGenerationError(f"prover produced no readable proof: {exc}") from exc

        try:
            return MembershipProof.from_dict({"proof": proof, "publicSignals": public_signals})
        except SerializationError as exc:
            raise ProofGenerationError(str(exc)) from exc

    async def verify_proof(self, vkey_path: Path, proof: MembershipProof) -> bool:
        with tempfile.TemporaryDirectory() as tmp_dir:
            tmp = trio.Path(tmp_dir)
            proof_path = tmp / "proof.json"
            public_path = tmp / "public.json"
            await proof_path.write_text(json.dumps(proof.proof))
            await public_path.write_text(json.dumps(list(proof.public_signals)))

            command = [
                self.binary,
                "groth16",
                "verify",
                str(vkey_path),
                str(public_path),
                str(proof_path),
            ]
            try:
                result = await self._run(command, self.verify_timeout)
            except trio.TooSlowError:
                logger.warning("Verifier timed out after %ss", self.verify_timeout)
                return False

        if result.returncode != 0:
            logger.debug("Verifier rejected proof: %s", _decode(result.stderr))
            return False
        return True

    async def _run(
        self, command: Sequence[str], timeout: float
    ) -> subprocess.CompletedProcess:
        """
        Raises:
            ConfigurationError: If the snarkjs binary cannot be started
            trio.TooSlowError: If the process outlives ``timeout``
        """
        logger.debug("Running %s", " ".join(command[:3]))
        try:
            with trio.fail_after(timeout):
                return await trio.run_process(
                    list(command),
                    capture_stdout=True,
                    capture_stderr=True,
                    check=False,
                )
        except OSError as exc:
            raise ConfigurationError(
                f"unable to run {self.binary!r}: {exc}"
            ) from exc


def _decode(output: bytes | None) -> str:
    if not output:
        return ""
    return output.decode("utf-8", errors="replace").strip()
