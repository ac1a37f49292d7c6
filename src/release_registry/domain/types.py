"""Domain types for platform and archive classification."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class OperatingSystem(Enum):
    """Operating systems a catalog entry can target."""

    LINUX = "linux"
    MACOS = "macos"
    WINDOWS = "windows"


class Architecture(Enum):
    """CPU architectures a catalog entry can target."""

    X86 = "x86"
    AMD64 = "amd64"
    ARM64 = "arm64"


class ArchiveType(Enum):
    """Archive formats accepted in the catalog (closed allow-list)."""

    TAR = "tar"
    TAR_GZ = "tar.gz"
    TAR_XZ = "tar.xz"
    ZIP = "zip"


_OS_ORDER = {member: index for index, member in enumerate(OperatingSystem)}
_ARCH_ORDER = {member: index for index, member in enumerate(Architecture)}


@dataclass(frozen=True, slots=True)
class PlatformKey:
    """Deployment target identified by operating system and architecture.

    Serialized as "<os>-<arch>", e.g. "linux-amd64".
    """

    os: OperatingSystem
    arch: Architecture

    def __str__(self) -> str:
        """Return the catalog key form, e.g. "macos-arm64"."""
        return f"{self.os.value}-{self.arch.value}"

    @property
    def sort_key(self) -> tuple[int, int]:
        """Enumeration order used for stable serialization."""
        return _OS_ORDER[self.os], _ARCH_ORDER[self.arch]

    @classmethod
    def from_string(cls, value: str) -> PlatformKey | None:
        """Parse a "<os>-<arch>" key.

        Args:
            value: Key as written in a catalog

        Returns:
            PlatformKey or None when either half is not a known member

        """
        os_name, sep, arch_name = value.partition("-")
        if not sep:
            return None
        try:
            return cls(OperatingSystem(os_name), Architecture(arch_name))
        except ValueError:
            return None
