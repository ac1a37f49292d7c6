"""HTTP session utilities for release-registry."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import aiohttp

from release_registry.config.settings import GlobalSettings


@asynccontextmanager
async def create_http_session(
    settings: GlobalSettings,
) -> AsyncIterator[aiohttp.ClientSession]:
    """Create configured HTTP session.

    The session timeout covers API and checksum-file requests; artifact
    downloads pass their own, longer timeout per request.

    Args:
        settings: Global settings

    Yields:
        Configured aiohttp.ClientSession

    """
    timeout_seconds = settings.network.timeout_seconds
    timeout = aiohttp.ClientTimeout(
        total=timeout_seconds * 3,
        sock_read=timeout_seconds * 2,
        sock_connect=timeout_seconds,
    )
    connector = aiohttp.TCPConnector(
        limit=10,
        limit_per_host=settings.max_concurrent_checks,
    )

    async with aiohttp.ClientSession(
        timeout=timeout,
        connector=connector,
    ) as session:
        yield session
