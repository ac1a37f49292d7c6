"""Filename classification for release assets.

Maps a free-form asset filename to a PlatformKey and an ArchiveType.
Each axis is an ordered table of rules evaluated top to bottom; the first
rule whose predicate matches decides the result. Table order is part of
the behaviour:

- macOS markers are tested before Windows markers ("darwin" contains
  "win").
- arm64 markers are tested before any bare "64" rule.
- Archive suffixes are tested longest first (".tar.gz" before ".tar").

All functions are pure and total: unknown input yields None, never an
exception.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Generic, TypeVar

from release_registry.domain.types import (
    ArchiveType,
    Architecture,
    OperatingSystem,
    PlatformKey,
)

T = TypeVar("T")

Predicate = Callable[[str, OperatingSystem | None], bool]


@dataclass(frozen=True, slots=True)
class Rule(Generic[T]):
    """One classification rule.

    Attributes:
        name: Short label used in tests and debug output
        matches: Predicate over (lowercased filename, detected OS)
        result: Value returned when the predicate matches

    """

    name: str
    matches: Predicate
    result: T


def first_match(
    rules: Sequence[Rule[T]], name: str, os: OperatingSystem | None = None
) -> Rule[T] | None:
    """Return the first rule matching name, or None."""
    for rule in rules:
        if rule.matches(name, os):
            return rule
    return None


def _contains(*markers: str) -> Predicate:
    return lambda name, _os: any(marker in name for marker in markers)


def _search(pattern: str) -> Predicate:
    compiled = re.compile(pattern)
    return lambda name, _os: compiled.search(name) is not None


# =============================================================================
# Operating system rules
# =============================================================================

# Also matches names such as "emacs-29-linux-x86_64.tar.gz"; the bare "mac"
# marker is kept and wins over any Linux marker.
_MAC_PATTERN = re.compile(r"mac(?!intosh)")


def _is_macos(name: str, _os: OperatingSystem | None) -> bool:
    if any(
        marker in name
        for marker in ("darwin", "macos", "mac-os", "osx", "os-x")
    ):
        return True
    return _MAC_PATTERN.search(name) is not None


def _is_windows(name: str, _os: OperatingSystem | None) -> bool:
    if any(marker in name for marker in ("windows", "win32", "win64")):
        return True
    return "win" in name and "darwin" not in name


OS_RULES: tuple[Rule[OperatingSystem], ...] = (
    Rule("macos", _is_macos, OperatingSystem.MACOS),
    Rule("windows", _is_windows, OperatingSystem.WINDOWS),
    Rule(
        "linux",
        _contains("linux", "musl", "glibc", "ubuntu", "debian", "alpine"),
        OperatingSystem.LINUX,
    ),
)

# =============================================================================
# Architecture rules
# =============================================================================

# Number tokens must not sit inside a larger number or a dotted version
_BARE_32 = re.compile(r"(?<![\d.])32(?!\d|\.\d|-?bit)")
_BARE_64 = re.compile(r"(?<![\d.])64(?!\d|\.\d)")
_BARE_386 = re.compile(r"(?<![\d.])(?:386|686)(?!\d|\.\d)")
_UNSUPPORTED_ARCH = r"(?<![a-z])arm(?!64)|ppc|s390|riscv|mips|loong|sparc"
_WINDOWS_32_SEPARATOR = re.compile(r"win32[^a-z]|windows-32|win-32")


def _is_amd64(name: str, _os: OperatingSystem | None) -> bool:
    if any(
        marker in name
        for marker in ("amd64", "x86_64", "x86-64", "intel64", "em64t")
    ):
        return True
    return "x64" in name and "x86" not in name


def _is_x86(name: str, _os: OperatingSystem | None) -> bool:
    if any(marker in name for marker in ("i386", "i686", "ia32")):
        return True
    if "x86" in name and "x86_64" not in name and "x86-64" not in name:
        return True
    if _BARE_386.search(name):
        return True
    if re.search(r"32-?bit", name):
        return True
    return "64" not in name and _BARE_32.search(name) is not None


def _is_bare_64(name: str, _os: OperatingSystem | None) -> bool:
    if "arm" in name or "aarch" in name:
        return False
    return _BARE_64.search(name) is not None


def _is_windows_32(name: str, os: OperatingSystem | None) -> bool:
    if os is not OperatingSystem.WINDOWS:
        return False
    return _WINDOWS_32_SEPARATOR.search(name) is not None


def _os_without_arch_token(_name: str, os: OperatingSystem | None) -> bool:
    # Reached only after every token rule missed
    return os is not None


ARCH_RULES: tuple[Rule[Architecture | None], ...] = (
    Rule("arm64", _contains("arm64", "aarch64", "armv8"), Architecture.ARM64),
    Rule("amd64", _is_amd64, Architecture.AMD64),
    Rule("x86", _is_x86, Architecture.X86),
    # armv7, ppc64le, riscv64, ... are tokens outside the supported set
    Rule("unsupported", _search(_UNSUPPORTED_ARCH), None),
    Rule("bare-64", _is_bare_64, Architecture.AMD64),
    Rule("windows-32", _is_windows_32, Architecture.X86),
    Rule("default", _os_without_arch_token, Architecture.AMD64),
)

# =============================================================================
# Archive type rules
# =============================================================================

ARCHIVE_RULES: tuple[Rule[ArchiveType], ...] = (
    Rule(
        "tar.gz",
        lambda name, _os: name.endswith((".tar.gz", ".tgz")),
        ArchiveType.TAR_GZ,
    ),
    Rule(
        "tar.xz",
        lambda name, _os: name.endswith((".tar.xz", ".txz")),
        ArchiveType.TAR_XZ,
    ),
    Rule("zip", lambda name, _os: name.endswith(".zip"), ArchiveType.ZIP),
    Rule("tar", lambda name, _os: name.endswith(".tar"), ArchiveType.TAR),
)


def detect_os(filename: str) -> OperatingSystem | None:
    """Detect the operating system named in a filename."""
    rule = first_match(OS_RULES, filename.lower())
    return rule.result if rule else None


def detect_arch(
    filename: str, os: OperatingSystem | None = None
) -> Architecture | None:
    """Detect the architecture named in a filename.

    Args:
        filename: Asset filename
        os: Operating system already detected for the filename; enables
            the Windows-only "32" rule and the amd64 default

    Returns:
        Architecture or None

    """
    rule = first_match(ARCH_RULES, filename.lower(), os)
    return rule.result if rule else None


def classify_platform(filename: str) -> PlatformKey | None:
    """Map a filename to its PlatformKey, or None if either axis is unknown."""
    if not filename:
        return None
    os = detect_os(filename)
    if os is None:
        return None
    arch = detect_arch(filename, os)
    if arch is None:
        return None
    return PlatformKey(os, arch)


def detect_archive_type(filename: str) -> ArchiveType | None:
    """Map a filename to an allowed ArchiveType.

    Installer and package formats (.msi, .exe, .deb, .rpm, .dmg, .pkg,
    .appimage, .snap) and any unknown extension yield None.
    """
    if not filename:
        return None
    rule = first_match(ARCHIVE_RULES, filename.lower())
    return rule.result if rule else None


def classify(
    filename: str,
) -> tuple[PlatformKey | None, ArchiveType | None]:
    """Classify a filename on both axes.

    A filename whose platform cannot be resolved is unclassifiable as a
    whole and yields (None, None); callers skip such files.

    Examples:
        >>> platform, archive = classify("nvim-macos-arm64.tar.gz")
        >>> str(platform), archive.value
        ('macos-arm64', 'tar.gz')
        >>> classify("nvim-win64.msi")[1] is None
        True

    """
    platform = classify_platform(filename)
    if platform is None:
        return None, None
    return platform, detect_archive_type(filename)
