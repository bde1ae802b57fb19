"""Resolve membership circuit artifacts from a local directory or a remote URL."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import httpx
import trio

from ..config import (
    CIRCUIT_VKEY_FILE,
    CIRCUIT_WASM_FILE,
    CIRCUIT_ZKEY_FILE,
    DEFAULT_REMOTE_BASE_URL,
    DOWNLOAD_TIMEOUT_SECONDS,
)
from ..exceptions import ArtifactNotFoundError, ConfigurationError
from ..feature_flags import ArtifactSourceType, get_artifact_source_type

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProvingArtifacts:
    wasm_path: Path
    zkey_path: Path


class ArtifactSource(ABC):
    """Where the witness generator, proving key and verification key live."""

    async def proving_artifacts(self, workdir: Path) -> ProvingArtifacts:
        wasm_path = await self.resolve(CIRCUIT_WASM_FILE, workdir)
        zkey_path = await self.resolve(CIRCUIT_ZKEY_FILE, workdir)
        return ProvingArtifacts(wasm_path=wasm_path, zkey_path=zkey_path)

    async def verification_key(self, workdir: Path) -> Path:
        return await self.resolve(CIRCUIT_VKEY_FILE, workdir)

    @abstractmethod
    async def resolve(self, filename: str, workdir: Path) -> Path:
        """
        Return a local path holding ``filename``.

        Raises:
            ArtifactNotFoundError: If the artifact cannot be provided
        """


class LocalArtifactSource(ArtifactSource):
    """Artifacts already on disk; ``workdir`` is not used."""

    def __init__(self, path_to_circuits: str | Path) -> None:
        self._base_dir = Path(path_to_circuits)

    @property
    def base_dir(self) -> Path:
        return self._base_dir

    async def resolve(self, filename: str, workdir: Path) -> Path:
        path = self._base_dir / filename
        if not path.is_file():
            raise ArtifactNotFoundError(f"missing circuit artifact: {path}")
        return path


class RemoteArtifactSource(ArtifactSource):
    """Artifacts downloaded over HTTP into ``workdir``."""

    def __init__(
        self,
        base_url: str = DEFAULT_REMOTE_BASE_URL,
        client: Optional[httpx.AsyncClient] = None,
        timeout: float = DOWNLOAD_TIMEOUT_SECONDS,
    ) -> None:
        self._base_url = base_url.rstrip("/") + "/"
        self._client = client
        self._timeout = timeout

    @property
    def base_url(self) -> str:
        return self._base_url

    def url_for(self, filename: str) -> str:
        return self._base_url + filename

    async def resolve(self, filename: str, workdir: Path) -> Path:
        url = self.url_for(filename)
        target = Path(workdir) / filename
        logger.debug("Downloading %s", url)
        try:
            if self._client is not None:
                response = await self._client.get(url)
            else:
                async with httpx.AsyncClient(timeout=self._timeout) as client:
                    response = await client.get(url)
            response.raise_for_status()
        except httpx.HTTPError as exc:
            raise ArtifactNotFoundError(f"failed to fetch {url}: {exc}") from exc

        await trio.Path(target).write_bytes(response.content)
        return target


def select_artifact_source(
    path_to_circuits: str | Path | None = None,
    *,
    purpose: str = "proving",
    prefer: str | ArtifactSourceType | None = None,
    base_url: str = DEFAULT_REMOTE_BASE_URL,
) -> ArtifactSource:
    """
    Pick the artifact source according to the runtime flag.

    Raises:
        ConfigurationError: If the local source is selected without a path
    """
    if get_artifact_source_type(prefer) is ArtifactSourceType.LOCAL:
        if path_to_circuits is None:
            raise ConfigurationError(
                f"Path to circuits must be provided for server side {purpose}!"
            )
        return LocalArtifactSource(path_to_circuits)
    return RemoteArtifactSource(base_url)
