"""Discovery of checksum files among the other files of a release."""

from __future__ import annotations

import re
from dataclasses import dataclass

from release_registry.core.models import ReleaseFile

RELEASE_WIDE_CHECKSUM_NAMES: tuple[str, ...] = (
    "checksums.txt",
    "checksums.sha256",
    "sha256sums",
    "sha256sums.txt",
)

_ARCHIVE_SUFFIX_RE = re.compile(r"\.(?:tar\.gz|tgz|tar\.xz|txz|tar|zip)$")
_PER_ASSET_SUFFIXES = (".sha256", ".sha256sum")


@dataclass(slots=True, frozen=True)
class ChecksumFile:
    """A sibling checksum file that may list an asset.

    Attributes:
        file: The checksum file
        bare_digest_applies: Whether a lone bare digest in the file belongs
            to the asset. True for the asset's own checksum file, and for a
            release-wide file when the asset is the only one it can cover.

    """

    file: ReleaseFile
    bare_digest_applies: bool


def is_checksum_file_name(filename: str) -> bool:
    """Check whether filename names a SHA-256 checksum file."""
    name = filename.lower()
    return name in RELEASE_WIDE_CHECKSUM_NAMES or name.endswith(
        _PER_ASSET_SUFFIXES
    )


def checksum_file_names(filename: str) -> list[str]:
    """List the lowercase checksum file names to look for, best first.

    Per-asset names come first (suffix appended, then archive extension
    swapped), followed by the release-wide names.

    Examples:
        >>> checksum_file_names("Tool.zip")[:4]
        ['tool.zip.sha256', 'tool.zip.sha256sum', 'tool.sha256', 'tool.sha256sum']

    """
    name = filename.lower()
    names = [f"{name}.sha256", f"{name}.sha256sum"]
    stem = _ARCHIVE_SUFFIX_RE.sub("", name)
    if stem != name:
        names.extend([f"{stem}.sha256", f"{stem}.sha256sum"])
    names.extend(RELEASE_WIDE_CHECKSUM_NAMES)
    return list(dict.fromkeys(names))


def find_checksum_files(file: ReleaseFile) -> list[ChecksumFile]:
    """Return the sibling checksum files for file, in lookup order."""
    by_name: dict[str, ReleaseFile] = {}
    for sibling in file.siblings:
        by_name.setdefault(sibling.name.lower(), sibling)
    sole_asset = all(
        is_checksum_file_name(sibling.name) for sibling in file.siblings
    )
    return [
        ChecksumFile(
            file=by_name[name],
            bare_digest_applies=(
                sole_asset or name not in RELEASE_WIDE_CHECKSUM_NAMES
            ),
        )
        for name in checksum_file_names(file.name)
        if name in by_name
    ]
