"""Candidate grouping and checksum-gated selection.

Files are classified, grouped by platform and ranked by archive priority
(then filename). For every platform the best candidate whose checksum
resolves is selected; a candidate without a checksum is skipped in favour
of the next one, and a platform with no resolvable candidate is omitted.
"""

from __future__ import annotations

import asyncio
from collections.abc import Iterable

from release_registry.constants import (
    DEFAULT_MAX_CONCURRENT_CHECKS,
    UNSUPPORTED_PRIORITY,
)
from release_registry.core.checksum import ChecksumResolver
from release_registry.core.models import (
    Candidate,
    ReleaseFile,
    ResolvedArtifact,
)
from release_registry.domain import PlatformKey, archive_priority, classify
from release_registry.logger import get_logger

logger = get_logger(__name__)


def group_candidates(
    files: Iterable[ReleaseFile],
) -> dict[PlatformKey, list[Candidate]]:
    """Classify files and group the usable ones by platform.

    Files with an unknown platform or a non-archive extension are skipped.

    Args:
        files: Release files in listing order

    Returns:
        Mapping of platform to its candidates, in listing order

    """
    groups: dict[PlatformKey, list[Candidate]] = {}
    for file in files:
        platform, archive_type = classify(file.name)
        if platform is None or archive_type is None:
            logger.debug("Skipping unclassifiable file %s", file.name)
            continue
        priority = archive_priority(archive_type, platform.os)
        groups.setdefault(platform, []).append(
            Candidate(file=file, archive_type=archive_type, priority=priority)
        )
    return groups


def rank_candidates(candidates: Iterable[Candidate]) -> list[Candidate]:
    """Order candidates for checksum lookup.

    Candidates are sorted by (priority, filename). Candidates whose archive
    type the OS does not support are kept only when nothing else exists
    for the platform.
    """
    ordered = sorted(candidates, key=lambda candidate: candidate.sort_key)
    supported = [c for c in ordered if c.priority != UNSUPPORTED_PRIORITY]
    return supported or ordered


async def select_artifact(
    candidates: Iterable[Candidate], resolver: ChecksumResolver
) -> ResolvedArtifact | None:
    """Pick the first ranked candidate whose checksum resolves.

    Lower-ranked candidates are not checked once one succeeds.

    Args:
        candidates: Candidates of a single platform
        resolver: Checksum resolver

    Returns:
        ResolvedArtifact or None if no candidate has a checksum

    """
    for candidate in rank_candidates(candidates):
        checksum = await resolver.resolve(candidate.file)
        if checksum:
            return ResolvedArtifact(
                archive_type=candidate.archive_type,
                url=candidate.file.download_url,
                checksum=checksum,
            )
        logger.debug("No checksum for candidate %s", candidate.file.name)
    return None


class CandidateSelector:
    """Resolve one artifact per platform for a release's files."""

    def __init__(
        self,
        resolver: ChecksumResolver,
        max_concurrent: int = DEFAULT_MAX_CONCURRENT_CHECKS,
    ) -> None:
        """Initialize the selector.

        Args:
            resolver: Checksum resolver shared by all platforms
            max_concurrent: Platforms resolved at the same time

        """
        self.resolver = resolver
        self.max_concurrent = max(1, max_concurrent)

    async def select(
        self, files: Iterable[ReleaseFile]
    ) -> dict[PlatformKey, ResolvedArtifact]:
        """Resolve every platform present in files.

        Platforms are resolved concurrently; the result depends only on
        the files and the resolver, never on completion order.
        """
        groups = group_candidates(files)
        platforms = sorted(groups, key=lambda key: key.sort_key)
        semaphore = asyncio.Semaphore(self.max_concurrent)

        async def resolve_platform(
            platform: PlatformKey,
        ) -> ResolvedArtifact | None:
            async with semaphore:
                return await select_artifact(groups[platform], self.resolver)

        results = await asyncio.gather(
            *(resolve_platform(platform) for platform in platforms)
        )

        selected: dict[PlatformKey, ResolvedArtifact] = {}
        for platform, artifact in zip(platforms, results, strict=True):
            if artifact is None:
                logger.info("No verifiable artifact for %s", platform)
                continue
            selected[platform] = artifact
        return selected
