"""Checksum file parsing.

Supported layouts:

- Traditional ``sha256sum`` output: ``<hex>  <filename>`` (``*`` and ``./``
  filename prefixes are tolerated)
- BSD tagged output: ``SHA256 (<filename>) = <hex>``
- A file holding a single bare digest, applied to the sole asset it
  accompanies

Only SHA-256 digests are accepted; a matching line whose digest is not
exactly 64 hexadecimal characters is discarded and the search goes on.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from release_registry.constants import CHECKSUM_PREFIX, SHA256_HEX_LENGTH
from release_registry.logger import get_logger

logger = get_logger(__name__)

_SHA256_RE = re.compile(rf"^[0-9a-fA-F]{{{SHA256_HEX_LENGTH}}}$")
_BSD_CHECKSUM_PATTERN = re.compile(
    r"^(?P<algo>SHA\d+|MD5)\s*\((?P<filename>.+)\)\s*=\s*(?P<hash>[A-Fa-f0-9]+)$",
    re.IGNORECASE,
)


@dataclass(frozen=True, slots=True)
class ChecksumEntry:
    """Parsed checksum entry."""

    filename: str
    hash_value: str
    line_number: int


def is_sha256_hex(value: str) -> bool:
    """Return True when value is exactly 64 hexadecimal characters."""
    return bool(_SHA256_RE.match(value))


def normalize_digest(value: str | None) -> str | None:
    """Normalize a digest to the catalog form ``sha256:<lowercase hex>``.

    Accepts a bare hex digest or one carrying the ``sha256:`` prefix in
    any case. Digests of other algorithms and malformed values yield None.

    Examples:
        >>> normalize_digest("SHA256:" + "AB" * 32) == "sha256:" + "ab" * 32
        True
        >>> normalize_digest("sha512:" + "ab" * 64) is None
        True

    """
    if not value:
        return None
    digest = value.strip()
    if digest[: len(CHECKSUM_PREFIX)].lower() == CHECKSUM_PREFIX:
        digest = digest[len(CHECKSUM_PREFIX) :]
    if not is_sha256_hex(digest):
        return None
    return CHECKSUM_PREFIX + digest.lower()


def _content_lines(content: str) -> list[tuple[int, str]]:
    return [
        (number, line.strip())
        for number, line in enumerate(content.splitlines(), 1)
        if line.strip()
    ]


class ChecksumParser:
    """Base class for checksum file layouts."""

    def parse(self, content: str, filename: str) -> ChecksumEntry | None:
        """Find the SHA-256 entry for filename in content.

        Args:
            content: Checksum file content
            filename: Asset filename to look up

        Returns:
            ChecksumEntry or None if no valid entry was found

        """
        raise NotImplementedError


class StandardChecksumParser(ChecksumParser):
    """Parser for ``<hex>  <filename>`` lines.

    A line naming exactly the asset wins over a line that merely contains
    the asset name (e.g. a ".sig" companion listed in the same file).
    """

    def parse(self, content: str, filename: str) -> ChecksumEntry | None:
        partial: ChecksumEntry | None = None
        for number, line in _content_lines(content):
            if line.startswith("#") or filename not in line:
                continue
            hash_value, *rest = line.split(None, 1)
            listed = rest[0] if rest else ""
            if not is_sha256_hex(hash_value):
                logger.debug(
                    "Discarding malformed digest on line %d for %s",
                    number,
                    filename,
                )
                continue
            entry = ChecksumEntry(filename, hash_value.lower(), number)
            listed = listed.removeprefix("*").removeprefix("./")
            if listed == filename or listed.endswith(f"/{filename}"):
                return entry
            partial = partial or entry
        return partial


class BSDChecksumParser(ChecksumParser):
    """Parser for ``SHA256 (<filename>) = <hex>`` lines."""

    def parse(self, content: str, filename: str) -> ChecksumEntry | None:
        for number, line in _content_lines(content):
            match = _BSD_CHECKSUM_PATTERN.match(line)
            if not match or match.group("algo").upper() != "SHA256":
                continue
            listed = match.group("filename").strip().removeprefix("./")
            if listed != filename and not listed.endswith(f"/{filename}"):
                continue
            hash_value = match.group("hash")
            if is_sha256_hex(hash_value):
                return ChecksumEntry(filename, hash_value.lower(), number)
        return None


class SingleDigestParser(ChecksumParser):
    """Parser for files that contain nothing but one bare digest."""

    def parse(self, content: str, filename: str) -> ChecksumEntry | None:
        lines = _content_lines(content)
        if len(lines) != 1:
            return None
        number, line = lines[0]
        if not is_sha256_hex(line):
            return None
        return ChecksumEntry(filename, line.lower(), number)


def looks_like_bsd(content: str) -> bool:
    """Return True if any line of content is in BSD tagged layout."""
    return any(
        _BSD_CHECKSUM_PATTERN.match(line) for _, line in _content_lines(content)
    )


def find_checksum_entry(
    content: str, filename: str, *, allow_bare_digest: bool = True
) -> ChecksumEntry | None:
    """Look up filename in checksum content of any supported layout.

    A file holding one bare digest names no asset; callers pass
    allow_bare_digest=False unless the file can only describe filename.

    Examples:
        >>> text = "ab" * 32 + "  tool-linux-amd64.tar.gz\\n"
        >>> find_checksum_entry(text, "tool-linux-amd64.tar.gz").hash_value[:4]
        'abab'

    """
    parsers: list[ChecksumParser] = []
    if looks_like_bsd(content):
        parsers.append(BSDChecksumParser())
    parsers.append(StandardChecksumParser())
    if allow_bare_digest:
        parsers.append(SingleDigestParser())

    for parser in parsers:
        entry = parser.parse(content, filename)
        if entry:
            return entry
    return None
