"""Pure domain logic: platform types, filename classification, archive
priorities and version validation. Nothing here performs I/O."""

from release_registry.domain.classifier import (
    classify,
    classify_platform,
    detect_archive_type,
)
from release_registry.domain.priority import archive_priority
from release_registry.domain.types import (
    ArchiveType,
    Architecture,
    OperatingSystem,
    PlatformKey,
)
from release_registry.domain.version import (
    precedence_key,
    validate_version,
    version_key,
)

__all__ = [
    "ArchiveType",
    "Architecture",
    "OperatingSystem",
    "PlatformKey",
    "archive_priority",
    "classify",
    "classify_platform",
    "detect_archive_type",
    "precedence_key",
    "validate_version",
    "version_key",
]
