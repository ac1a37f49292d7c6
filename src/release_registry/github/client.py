"""GitHub REST client for release listings and repository metadata.

Handles authentication headers, pagination, and retry with exponential
backoff for transient network errors.
"""

import asyncio
from dataclasses import dataclass
from typing import Any

import aiohttp

from release_registry import __version__
from release_registry.constants import (
    DEFAULT_RETRY_ATTEMPTS,
    DEFAULT_TIMEOUT_SECONDS,
    GITHUB_API_ACCEPT,
    GITHUB_API_BASE,
    GITHUB_RELEASES_PER_PAGE,
    HTTP_NOT_FOUND,
    USER_AGENT_PREFIX,
)
from release_registry.core.models import Release
from release_registry.exceptions import GitHubAPIError
from release_registry.logger import get_logger

logger = get_logger(__name__)


@dataclass(slots=True, frozen=True)
class RepoMetadata:
    """Catalog metadata taken from the repository."""

    description: str = ""
    homepage: str = ""
    license: str = ""

    @classmethod
    def from_api_response(cls, repo_data: dict[str, Any]) -> "RepoMetadata":
        """Create RepoMetadata from GitHub API repository data.

        The homepage falls back to the repository web URL; the license
        prefers its SPDX identifier over its display name.
        """
        license_data = repo_data.get("license") or {}
        if not isinstance(license_data, dict):
            license_data = {}
        return cls(
            description=repo_data.get("description") or "",
            homepage=(
                repo_data.get("homepage") or repo_data.get("html_url") or ""
            ),
            license=(
                license_data.get("spdx_id") or license_data.get("name") or ""
            ),
        )


class GitHubClient:
    """Handles direct communication with the GitHub API."""

    def __init__(
        self,
        session: aiohttp.ClientSession,
        token: str | None = None,
        timeout_seconds: int = DEFAULT_TIMEOUT_SECONDS,
        retry_attempts: int = DEFAULT_RETRY_ATTEMPTS,
        api_base: str = GITHUB_API_BASE,
    ) -> None:
        """Initialize the API client.

        Args:
            session: aiohttp session for making requests
            token: GitHub token sent as ``Authorization: token <t>``
            timeout_seconds: Base timeout for one request
            retry_attempts: Attempts per API request
            api_base: API root URL

        """
        self.session = session
        self.token = token
        self.retry_attempts = max(1, retry_attempts)
        self.api_base = api_base.rstrip("/")
        self.timeout = aiohttp.ClientTimeout(
            total=timeout_seconds * 3,
            sock_read=timeout_seconds * 2,
            sock_connect=timeout_seconds,
        )

    def _headers(self, accept: str = GITHUB_API_ACCEPT) -> dict[str, str]:
        headers = {
            "User-Agent": f"{USER_AGENT_PREFIX}/{__version__}",
            "Accept": accept,
        }
        if self.token:
            headers["Authorization"] = f"token {self.token}"
        return headers

    async def _fetch_json(self, url: str) -> Any | None:  # noqa: ANN401
        """Fetch JSON from the API with retries.

        Args:
            url: API URL to fetch

        Returns:
            Decoded response, or None on 404

        Raises:
            GitHubAPIError: If every attempt fails

        """
        for attempt in range(1, self.retry_attempts + 1):
            try:
                async with self.session.get(
                    url, headers=self._headers(), timeout=self.timeout
                ) as response:
                    if response.status == HTTP_NOT_FOUND:
                        return None
                    response.raise_for_status()
                    return await response.json()
            except (aiohttp.ClientError, TimeoutError, ValueError) as e:
                logger.warning(
                    "Attempt %d/%d for %s failed: %s",
                    attempt,
                    self.retry_attempts,
                    url,
                    e,
                )
                if attempt == self.retry_attempts:
                    raise GitHubAPIError(str(e), target=url) from e
                await asyncio.sleep(2**attempt)
        return None

    async def fetch_releases(self, owner: str, repo: str) -> list[Release]:
        """Fetch every non-prerelease release, newest first.

        Pages are requested until an empty or short page. A failure after
        the first page stops pagination and keeps what was fetched.

        Raises:
            GitHubAPIError: If the first page cannot be fetched

        """
        raw_releases: list[dict[str, Any]] = []
        page = 1
        while True:
            url = (
                f"{self.api_base}/repos/{owner}/{repo}/releases"
                f"?page={page}&per_page={GITHUB_RELEASES_PER_PAGE}"
            )
            try:
                data = await self._fetch_json(url)
            except GitHubAPIError:
                if page == 1:
                    raise
                logger.warning(
                    "Stopping at releases page %d for %s/%s", page, owner, repo
                )
                break

            if not isinstance(data, list) or not data:
                break
            raw_releases.extend(
                item for item in data if isinstance(item, dict)
            )
            if len(data) < GITHUB_RELEASES_PER_PAGE:
                break
            page += 1

        parsed = [Release.from_api_response(item) for item in raw_releases]
        releases = [release for release in parsed if not release.prerelease]
        logger.debug(
            "Fetched %d releases (%d prereleases dropped) for %s/%s",
            len(releases),
            len(parsed) - len(releases),
            owner,
            repo,
        )
        return releases

    async def fetch_repo_metadata(self, owner: str, repo: str) -> RepoMetadata:
        """Fetch description, homepage and license of a repository.

        Failures degrade to empty metadata.
        """
        url = f"{self.api_base}/repos/{owner}/{repo}"
        try:
            data = await self._fetch_json(url)
        except GitHubAPIError as e:
            logger.warning("Repository metadata unavailable: %s", e)
            return RepoMetadata()

        if not isinstance(data, dict):
            return RepoMetadata()
        return RepoMetadata.from_api_response(data)

    async def fetch_text(self, url: str) -> str | None:
        """Fetch a release asset (e.g. a checksum file) as text.

        Returns:
            Body text, or None if the request fails

        """
        try:
            async with self.session.get(
                url,
                headers=self._headers(accept="application/octet-stream"),
                timeout=self.timeout,
            ) as response:
                response.raise_for_status()
                return await response.text()
        except (aiohttp.ClientError, TimeoutError, ValueError) as e:
            logger.warning("Failed to fetch %s: %s", url, e)
            return None
