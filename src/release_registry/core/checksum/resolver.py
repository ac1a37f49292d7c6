"""Tiered SHA-256 resolution for release files.

A ChecksumResolver walks an ordered list of strategies and returns the
first digest that normalizes to ``sha256:<64 lowercase hex>``:

1. ProvidedDigestStrategy - digest supplied by the release listing
2. SiblingFileStrategy - checksum file published in the same release
3. DownloadDigestStrategy - hash of the downloaded artifact (opt-in)

Strategies never raise for network or payload problems; a failing tier
is a miss and the next tier is tried.
"""

from __future__ import annotations

import asyncio
import hashlib
from collections.abc import Awaitable, Callable, Sequence
from typing import Protocol

import aiohttp

from release_registry.constants import (
    DEFAULT_DOWNLOAD_TIMEOUT_SECONDS,
    DOWNLOAD_CHUNK_SIZE,
    MAX_DOWNLOAD_REDIRECTS,
)
from release_registry.core.checksum.parser import (
    find_checksum_entry,
    normalize_digest,
)
from release_registry.core.checksum.siblings import find_checksum_files
from release_registry.core.models import ReleaseFile
from release_registry.logger import get_logger

logger = get_logger(__name__)

TextFetcher = Callable[[str], Awaitable[str | None]]


class ChecksumStrategy(Protocol):
    """One checksum tier."""

    name: str

    async def resolve(self, file: ReleaseFile) -> str | None:
        """Return a digest for file, or None when this tier has none."""
        ...


class ProvidedDigestStrategy:
    """Use the digest published alongside the file listing."""

    name = "provided"

    async def resolve(self, file: ReleaseFile) -> str | None:
        digest = normalize_digest(file.provided_digest)
        if file.provided_digest and digest is None:
            logger.debug(
                "Ignoring unusable provided digest for %s: %s",
                file.name,
                file.provided_digest,
            )
        return digest


class SiblingFileStrategy:
    """Look the file up in checksum files published in the same release.

    Checksum files are fetched at most once per URL for the lifetime of
    the strategy; concurrent lookups share the pending fetch.
    """

    name = "sibling"

    def __init__(self, fetch_text: TextFetcher) -> None:
        """Initialize the strategy.

        Args:
            fetch_text: Coroutine returning the body of a URL as text, or
                None when it is unavailable

        """
        self._fetch_text = fetch_text
        self._cache: dict[str, asyncio.Task[str | None]] = {}

    async def _content(self, url: str) -> str | None:
        task = self._cache.get(url)
        if task is None:
            task = asyncio.ensure_future(self._fetch_text(url))
            self._cache[url] = task
        try:
            return await asyncio.shield(task)
        except (aiohttp.ClientError, TimeoutError, ValueError) as e:
            logger.warning("Failed to fetch checksum file %s: %s", url, e)
            return None

    async def resolve(self, file: ReleaseFile) -> str | None:
        for candidate in find_checksum_files(file):
            checksum_file = candidate.file
            content = await self._content(checksum_file.download_url)
            if not content:
                continue
            entry = find_checksum_entry(
                content,
                file.name,
                allow_bare_digest=candidate.bare_digest_applies,
            )
            if entry:
                logger.debug(
                    "Found %s in %s (line %d)",
                    file.name,
                    checksum_file.name,
                    entry.line_number,
                )
                return entry.hash_value
        return None


class DownloadDigestStrategy:
    """Download the artifact and hash it incrementally."""

    name = "download"

    def __init__(
        self,
        session: aiohttp.ClientSession,
        timeout_seconds: int = DEFAULT_DOWNLOAD_TIMEOUT_SECONDS,
        max_redirects: int = MAX_DOWNLOAD_REDIRECTS,
        chunk_size: int = DOWNLOAD_CHUNK_SIZE,
    ) -> None:
        """Initialize the strategy.

        Args:
            session: aiohttp session used for the download
            timeout_seconds: Upper bound for one whole download
            max_redirects: Redirects followed before giving up
            chunk_size: Bytes read per iteration

        """
        self._session = session
        self._timeout = aiohttp.ClientTimeout(total=timeout_seconds)
        self._max_redirects = max_redirects
        self._chunk_size = chunk_size

    async def resolve(self, file: ReleaseFile) -> str | None:
        digest = hashlib.sha256()
        try:
            async with self._session.get(
                file.download_url,
                timeout=self._timeout,
                max_redirects=self._max_redirects,
            ) as response:
                response.raise_for_status()
                async for chunk in response.content.iter_chunked(
                    self._chunk_size
                ):
                    digest.update(chunk)
        except (aiohttp.ClientError, TimeoutError) as e:
            logger.warning(
                "Failed to download %s for hashing: %s", file.name, e
            )
            return None
        return digest.hexdigest()


class ChecksumResolver:
    """Resolve a file's digest through an ordered list of strategies."""

    def __init__(self, strategies: Sequence[ChecksumStrategy]) -> None:
        """Initialize the resolver.

        Args:
            strategies: Tiers in the order they are tried; an empty list
                resolves nothing

        """
        self.strategies = tuple(strategies)

    async def resolve(self, file: ReleaseFile) -> str | None:
        """Return ``sha256:<hex>`` for file, or None if every tier misses."""
        for strategy in self.strategies:
            digest = normalize_digest(await strategy.resolve(file))
            if digest:
                logger.debug(
                    "Resolved %s via %s tier", file.name, strategy.name
                )
                return digest
        logger.debug("No checksum for %s", file.name)
        return None


def build_checksum_resolver(
    fetch_text: TextFetcher,
    session: aiohttp.ClientSession | None = None,
    *,
    allow_download: bool = False,
    download_timeout_seconds: int = DEFAULT_DOWNLOAD_TIMEOUT_SECONDS,
) -> ChecksumResolver:
    """Create the standard resolver.

    Args:
        fetch_text: Text fetcher used for sibling checksum files
        session: Session used by the download tier
        allow_download: Enable the download tier; requires session
        download_timeout_seconds: Timeout for one artifact download

    Returns:
        ChecksumResolver with two or three tiers

    """
    strategies: list[ChecksumStrategy] = [
        ProvidedDigestStrategy(),
        SiblingFileStrategy(fetch_text),
    ]
    if allow_download:
        if session is None:
            msg = "The download checksum tier requires an HTTP session"
            raise ValueError(msg)
        strategies.append(
            DownloadDigestStrategy(session, download_timeout_seconds)
        )
    return ChecksumResolver(strategies)
