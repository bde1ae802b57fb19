"""
Runtime flag selecting where circuit artifacts are loaded from.

``local`` reads artifacts from a directory given by the caller (server
side); ``remote`` downloads them from a base URL. The flag is resolved from
an explicit argument, then an in-process override, then the
``PUBKEY_MEMBERSHIP_ARTIFACTS`` environment variable.
"""

from __future__ import annotations

import enum
import os
from typing import Optional, Union

ENV_VAR_NAME = "PUBKEY_MEMBERSHIP_ARTIFACTS"


class ArtifactSourceType(str, enum.Enum):
    LOCAL = "local"
    REMOTE = "remote"


DEFAULT_SOURCE = ArtifactSourceType.LOCAL

_override: Optional[ArtifactSourceType] = None


def parse_source_type(
    value: Union[str, ArtifactSourceType, None]
) -> Optional[ArtifactSourceType]:
    """
    Raises:
        ValueError: If ``value`` names no known source; ``None`` and ``""`` mean unset
    """
    if value is None or value == "":
        return None
    try:
        return ArtifactSourceType(value)
    except ValueError:
        choices = ", ".join(member.value for member in ArtifactSourceType)
        raise ValueError(
            f"Invalid artifact source: {value!r}. Valid options: {choices}"
        ) from None


def get_artifact_source_type(
    prefer: Union[str, ArtifactSourceType, None] = None
) -> ArtifactSourceType:
    for candidate in (prefer, _override, os.getenv(ENV_VAR_NAME)):
        source = parse_source_type(candidate)
        if source is not None:
            return source
    return DEFAULT_SOURCE


def set_artifact_source_type(value: Union[str, ArtifactSourceType, None]) -> None:
    """Force the source for this process; ``None`` or ``""`` clears it."""
    global _override
    _override = parse_source_type(value)
