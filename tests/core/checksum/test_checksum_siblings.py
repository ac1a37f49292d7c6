"""Tests for sibling checksum file discovery."""

from release_registry.core.checksum import (
    checksum_file_names,
    find_checksum_files,
    is_checksum_file_name,
)
from release_registry.core.models import Release, ReleaseFile


def test_names_for_archive():
    """Test per-asset names come before release-wide names."""
    assert checksum_file_names("Tool-Linux.tar.gz") == [
        "tool-linux.tar.gz.sha256",
        "tool-linux.tar.gz.sha256sum",
        "tool-linux.sha256",
        "tool-linux.sha256sum",
        "checksums.txt",
        "checksums.sha256",
        "sha256sums",
        "sha256sums.txt",
    ]


def test_names_without_archive_suffix():
    """Test no swapped names are produced for unknown suffixes."""
    names = checksum_file_names("tool.bin")
    assert "tool.bin" not in names
    assert names[:2] == ["tool.bin.sha256", "tool.bin.sha256sum"]


def test_find_checksum_files_in_lookup_order():
    """Test siblings are matched case-insensitively in lookup order."""
    release = Release.create(
        "v1.0.0",
        [
            ReleaseFile("tool.zip", "u0"),
            ReleaseFile("SHA256SUMS", "u1"),
            ReleaseFile("tool.zip.sha256", "u2"),
            ReleaseFile("notes.txt", "u3"),
        ],
    )
    found = find_checksum_files(release.files[0])
    assert [c.file.name for c in found] == ["tool.zip.sha256", "SHA256SUMS"]
    assert [c.bare_digest_applies for c in found] == [True, False]


def test_find_checksum_files_none():
    """Test a file without siblings."""
    assert find_checksum_files(ReleaseFile("tool.zip", "u")) == []


def test_release_wide_file_covers_sole_asset():
    """Test a bare digest in a shared file applies when one asset exists."""
    release = Release.create(
        "v1.0.0",
        [
            ReleaseFile("tool.tar.gz", "u0"),
            ReleaseFile("tool.tar.gz.sha256", "u1"),
            ReleaseFile("checksums.txt", "u2"),
        ],
    )
    found = find_checksum_files(release.files[0])
    assert [c.bare_digest_applies for c in found] == [True, True]


def test_is_checksum_file_name():
    """Test per-asset and release-wide checksum names are recognised."""
    assert is_checksum_file_name("SHA256SUMS")
    assert is_checksum_file_name("tool.zip.sha256sum")
    assert not is_checksum_file_name("tool.zip.sig")
