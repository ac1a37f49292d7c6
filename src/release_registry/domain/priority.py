"""Archive type ranking per operating system.

Lower numbers are preferred. Windows accepts exactly one archive format
(zip); Linux and macOS prefer compressed tarballs. Installer formats never
reach this table because the classifier does not recognise them.
"""

from release_registry.constants import UNSUPPORTED_PRIORITY
from release_registry.domain.types import ArchiveType, OperatingSystem

_UNIX_PRIORITIES: dict[ArchiveType, int] = {
    ArchiveType.TAR_GZ: 1,
    ArchiveType.TAR_XZ: 2,
    ArchiveType.TAR: 3,
    ArchiveType.ZIP: 4,
}

PRIORITY_TABLE: dict[OperatingSystem, dict[ArchiveType, int]] = {
    OperatingSystem.WINDOWS: {ArchiveType.ZIP: 1},
    OperatingSystem.LINUX: _UNIX_PRIORITIES,
    OperatingSystem.MACOS: _UNIX_PRIORITIES,
}


def archive_priority(archive_type: ArchiveType, os: OperatingSystem) -> int:
    """Return the selection priority of an archive type on an OS.

    Args:
        archive_type: Classified archive type
        os: Target operating system

    Returns:
        Priority (1 is best); UNSUPPORTED_PRIORITY for combinations the
        OS cannot use

    """
    return PRIORITY_TABLE.get(os, {}).get(archive_type, UNSUPPORTED_PRIORITY)
