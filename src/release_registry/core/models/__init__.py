"""Release and catalog models."""

from release_registry.core.models.artifact import (
    Candidate,
    ResolvedArtifact,
    VersionEntry,
)
from release_registry.core.models.catalog import Catalog
from release_registry.core.models.release import Release, ReleaseFile

__all__ = [
    "Candidate",
    "Catalog",
    "Release",
    "ReleaseFile",
    "ResolvedArtifact",
    "VersionEntry",
]
