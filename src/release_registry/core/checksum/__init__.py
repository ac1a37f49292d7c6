"""Checksum parsing and tiered digest resolution."""

from release_registry.core.checksum.parser import (
    BSDChecksumParser,
    ChecksumEntry,
    ChecksumParser,
    SingleDigestParser,
    StandardChecksumParser,
    find_checksum_entry,
    is_sha256_hex,
    normalize_digest,
)
from release_registry.core.checksum.resolver import (
    ChecksumResolver,
    ChecksumStrategy,
    DownloadDigestStrategy,
    ProvidedDigestStrategy,
    SiblingFileStrategy,
    build_checksum_resolver,
)
from release_registry.core.checksum.siblings import (
    ChecksumFile,
    checksum_file_names,
    find_checksum_files,
    is_checksum_file_name,
)

__all__ = [
    "BSDChecksumParser",
    "ChecksumEntry",
    "ChecksumFile",
    "ChecksumParser",
    "ChecksumResolver",
    "ChecksumStrategy",
    "DownloadDigestStrategy",
    "ProvidedDigestStrategy",
    "SiblingFileStrategy",
    "SingleDigestParser",
    "StandardChecksumParser",
    "build_checksum_resolver",
    "checksum_file_names",
    "find_checksum_entry",
    "find_checksum_files",
    "is_checksum_file_name",
    "is_sha256_hex",
    "normalize_digest",
]
