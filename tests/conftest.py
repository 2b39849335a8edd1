"""Shared fixtures for jdkprobe tests."""

import pathlib

import pytest

from jdkprobe.config import POSIX_EXECUTABLE_SUBPATHS, DiscoveryConfig


@pytest.fixture
def probe_config() -> DiscoveryConfig:
    """POSIX executable layout with a short probe timeout."""
    return DiscoveryConfig(
        executable_subpaths=POSIX_EXECUTABLE_SUBPATHS,
        timeout=5.0,
    )


@pytest.fixture
def payload_path(tmp_path: pathlib.Path) -> str:
    """A stand-in for the identity payload passed as the class path."""
    payload = tmp_path / "probe-payload.jar"
    payload.write_bytes(b"PK\x03\x04")
    return str(payload)
