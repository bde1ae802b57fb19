"""
Unit tests for artifact source resolution.
"""

import pytest

from pubkey_membership import feature_flags
from pubkey_membership.feature_flags import ArtifactSourceType

ENV = feature_flags.ENV_VAR_NAME


def test_default_is_local() -> None:
    assert feature_flags.get_artifact_source_type() is ArtifactSourceType.LOCAL


@pytest.mark.parametrize(
    "prefer, override, env, expected",
    [
        (None, None, "remote", ArtifactSourceType.REMOTE),
        (None, "remote", "local", ArtifactSourceType.REMOTE),
        ("local", "remote", "remote", ArtifactSourceType.LOCAL),
        (ArtifactSourceType.REMOTE, None, None, ArtifactSourceType.REMOTE),
        (None, None, "", ArtifactSourceType.LOCAL),
        ("", "", "remote", ArtifactSourceType.REMOTE),
    ],
)
def test_precedence(monkeypatch: pytest.MonkeyPatch, prefer, override, env, expected) -> None:
    if env is not None:
        monkeypatch.setenv(ENV, env)
    feature_flags.set_artifact_source_type(override)
    assert feature_flags.get_artifact_source_type(prefer) is expected


def test_clearing_override_restores_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv(ENV, "remote")
    feature_flags.set_artifact_source_type("local")
    feature_flags.set_artifact_source_type(None)
    assert feature_flags.get_artifact_source_type() is ArtifactSourceType.REMOTE


def test_source_type_compares_as_string() -> None:
    assert ArtifactSourceType.LOCAL == "local"
    assert feature_flags.parse_source_type("remote") is ArtifactSourceType.REMOTE


@pytest.mark.parametrize("value", ["cloud", "LOCAL", 1])
def test_unknown_values_rejected(value) -> None:
    with pytest.raises(ValueError, match="Invalid artifact source.*local, remote"):
        feature_flags.parse_source_type(value)


def test_bad_env_value_rejected(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv(ENV, "cloud")
    with pytest.raises(ValueError, match="Invalid artifact source"):
        feature_flags.get_artifact_source_type()


def test_bad_override_leaves_previous_value() -> None:
    feature_flags.set_artifact_source_type("remote")
    with pytest.raises(ValueError):
        feature_flags.set_artifact_source_type("cloud")
    assert feature_flags.get_artifact_source_type() is ArtifactSourceType.REMOTE
