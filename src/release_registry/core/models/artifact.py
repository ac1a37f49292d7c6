"""Selection and catalog entry models."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from release_registry.core.models.release import ReleaseFile
from release_registry.domain.types import ArchiveType, PlatformKey
from release_registry.logger import get_logger

logger = get_logger(__name__)


@dataclass(slots=True, frozen=True)
class Candidate:
    """A release file competing to represent one platform.

    Attributes:
        file: The release file
        archive_type: Classified archive type
        priority: OS-dependent priority (lower is better)

    """

    file: ReleaseFile
    archive_type: ArchiveType
    priority: int

    @property
    def sort_key(self) -> tuple[int, str]:
        """Priority first, filename second for deterministic ties."""
        return self.priority, self.file.name


@dataclass(slots=True, frozen=True)
class ResolvedArtifact:
    """The artifact persisted for one platform of one version.

    Attributes:
        archive_type: Archive format of the artifact
        url: Download URL
        checksum: "sha256:<64 lowercase hex>"

    """

    archive_type: ArchiveType
    url: str
    checksum: str

    def to_dict(self) -> dict[str, str]:
        """Convert to the catalog mapping {type, url, checksum}."""
        return {
            "type": self.archive_type.value,
            "url": self.url,
            "checksum": self.checksum,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ResolvedArtifact | None:
        """Create from a catalog mapping, or None if it is malformed."""
        try:
            return cls(
                archive_type=ArchiveType(data["type"]),
                url=str(data["url"]),
                checksum=str(data["checksum"]),
            )
        except (KeyError, TypeError, ValueError):
            return None


@dataclass(slots=True, frozen=True)
class VersionEntry:
    """All resolved artifacts of one accepted release.

    Attributes:
        version: Normalized version string (the dedup key)
        binaries: Paths of executables inside the archives
        platforms: One artifact per platform

    """

    version: str
    binaries: tuple[str, ...] = ()
    platforms: Mapping[PlatformKey, ResolvedArtifact] = field(
        default_factory=dict
    )

    def to_dict(self) -> dict[str, Any]:
        """Convert to the catalog mapping with platform keys in table order."""
        ordered = sorted(self.platforms, key=lambda key: key.sort_key)
        return {
            "version": self.version,
            "bins": list(self.binaries),
            "platforms": {
                str(key): self.platforms[key].to_dict() for key in ordered
            },
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> VersionEntry | None:
        """Create from a catalog mapping.

        Platforms with unknown keys or malformed artifacts are dropped with
        a warning; an entry without a version string yields None.
        """
        version = data.get("version")
        if version is None or version == "":
            return None

        raw_bins = data.get("bins") or []
        if isinstance(raw_bins, str):
            raw_bins = [raw_bins]

        platforms: dict[PlatformKey, ResolvedArtifact] = {}
        raw_platforms = data.get("platforms") or {}
        if not isinstance(raw_platforms, Mapping):
            raw_platforms = {}
        for raw_key, raw_artifact in raw_platforms.items():
            key = PlatformKey.from_string(str(raw_key))
            artifact = (
                ResolvedArtifact.from_dict(raw_artifact)
                if isinstance(raw_artifact, Mapping)
                else None
            )
            if key is None or artifact is None:
                logger.warning(
                    "Dropping unreadable platform %s of version %s",
                    raw_key,
                    version,
                )
                continue
            platforms[key] = artifact

        return cls(
            version=str(version),
            binaries=tuple(str(b) for b in raw_bins),
            platforms=platforms,
        )
