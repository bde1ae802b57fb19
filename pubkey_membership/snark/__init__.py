"""External groth16 backend adapters for the membership circuit."""

from .assets import (
    ArtifactSource,
    LocalArtifactSource,
    ProvingArtifacts,
    RemoteArtifactSource,
    select_artifact_source,
)
from .backend import ProofBackend, SnarkjsBackend

__all__ = [
    "ArtifactSource",
    "LocalArtifactSource",
    "RemoteArtifactSource",
    "ProvingArtifacts",
    "select_artifact_source",
    "ProofBackend",
    "SnarkjsBackend",
]
