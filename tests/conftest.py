"""Pytest configuration and fixtures for release-registry tests."""

import logging
import os
import tempfile

import pytest

# Keep log files and settings out of the user's home directory
os.environ.setdefault(
    "RELEASE_REGISTRY_LOG_DIR", tempfile.mkdtemp(prefix="rr-logs-")
)
os.environ.setdefault(
    "RELEASE_REGISTRY_CONFIG_DIR", tempfile.mkdtemp(prefix="rr-config-")
)

from release_registry.core.models import (  # noqa: E402
    Release,
    ReleaseFile,
    ResolvedArtifact,
    VersionEntry,
)
from release_registry.domain import ArchiveType, PlatformKey  # noqa: E402

DIGEST_A = "a" * 64
DIGEST_B = "b" * 64


@pytest.fixture(autouse=True)
def enable_log_propagation():
    """Enable log propagation for all loggers during tests.

    This allows pytest's caplog fixture to capture logs from all loggers,
    even those created with propagate=False in production code.
    """
    original_propagation = {}
    for name in list(logging.Logger.manager.loggerDict.keys()):
        if name.startswith("release_registry"):
            logger = logging.getLogger(name)
            original_propagation[name] = logger.propagate
            logger.propagate = True

    yield

    for name, propagate_value in original_propagation.items():
        logger = logging.getLogger(name)
        logger.propagate = propagate_value


def make_file(
    name: str, digest: str | None = None, url: str | None = None
) -> ReleaseFile:
    """Build a ReleaseFile with a predictable download URL."""
    return ReleaseFile(
        name=name,
        download_url=url or f"https://example.com/dl/{name}",
        provided_digest=digest,
    )


def make_entry(version: str, url_suffix: str = "") -> VersionEntry:
    """Build a single-platform VersionEntry."""
    return VersionEntry(
        version=version,
        binaries=("bin/tool",),
        platforms={
            PlatformKey.from_string("linux-amd64"): ResolvedArtifact(
                archive_type=ArchiveType.TAR_GZ,
                url=f"https://example.com/{version}{url_suffix}.tar.gz",
                checksum=f"sha256:{DIGEST_A}",
            )
        },
    )


@pytest.fixture
def sample_release() -> Release:
    """A release with Linux, macOS and Windows archives plus noise."""
    return Release.create(
        "v1.2.3",
        [
            make_file("tool-linux-x86_64.tar.gz", f"sha256:{DIGEST_A}"),
            make_file("tool-darwin-arm64.tar.gz", f"sha256:{DIGEST_B}"),
            make_file("tool-windows-amd64.zip", f"sha256:{DIGEST_A}"),
            make_file("tool-windows-amd64.msi", f"sha256:{DIGEST_A}"),
            make_file("checksums.txt"),
            make_file("source.tar.gz"),
        ],
    )
