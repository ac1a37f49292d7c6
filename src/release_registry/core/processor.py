"""Per-release orchestration.

A release flows through the version gate, candidate selection and, when
at least one platform resolved, becomes a VersionEntry. Counters for
progress reporting live in a ProgressCounter owned by the caller.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass

from release_registry.core.models import Release, VersionEntry
from release_registry.core.selector import CandidateSelector
from release_registry.domain import validate_version
from release_registry.logger import get_logger

logger = get_logger(__name__)


@dataclass(slots=True)
class ProgressCounter:
    """Run counters for progress reporting.

    Attributes:
        total: Releases to process
        processed: Releases handled so far
        added: Version entries produced
        rejected: Releases rejected by the version gate
        skipped: Releases already cataloged or without usable artifacts

    """

    total: int = 0
    processed: int = 0
    added: int = 0
    rejected: int = 0
    skipped: int = 0

    @property
    def percent(self) -> int:
        """Completion percentage, 100 when there is nothing to do."""
        if self.total <= 0:
            return 100
        return min(100, self.processed * 100 // self.total)


ProgressCallback = Callable[[ProgressCounter], None]


class ReleaseProcessor:
    """Turn releases into version entries."""

    def __init__(
        self,
        selector: CandidateSelector,
        binaries: Sequence[str],
        refresh: bool = False,
        on_progress: ProgressCallback | None = None,
    ) -> None:
        """Initialize the processor.

        Args:
            selector: Candidate selector used for every release
            binaries: Executable paths recorded on every version entry
            refresh: Re-resolve versions that are already cataloged
            on_progress: Called after each release with the counter

        """
        self.selector = selector
        self.binaries = tuple(binaries)
        self.refresh = refresh
        self.on_progress = on_progress

    async def process_release(
        self,
        release: Release,
        known_versions: frozenset[str] = frozenset(),
        counter: ProgressCounter | None = None,
    ) -> VersionEntry | None:
        """Resolve one release.

        Args:
            release: Release with its files
            known_versions: Versions already present in the catalog
            counter: Counter updated with the outcome

        Returns:
            VersionEntry, or None if the release is rejected, already
            known, or has no verifiable artifact

        """
        counter = counter if counter is not None else ProgressCounter()
        version = validate_version(release.tag)
        if version is None:
            logger.info(
                "Skipping release %s: unsupported version", release.tag
            )
            counter.rejected += 1
            return None

        if version in known_versions and not self.refresh:
            logger.debug("Version %s already cataloged", version)
            counter.skipped += 1
            return None

        platforms = await self.selector.select(release.files)
        if not platforms:
            logger.info("Skipping %s: no verifiable artifacts", version)
            counter.skipped += 1
            return None

        logger.info(
            "Resolved %s for %d platform(s): %s",
            version,
            len(platforms),
            ", ".join(str(key) for key in platforms),
        )
        counter.added += 1
        return VersionEntry(
            version=version, binaries=self.binaries, platforms=platforms
        )

    async def process_releases(
        self,
        releases: Iterable[Release],
        known_versions: frozenset[str] = frozenset(),
        counter: ProgressCounter | None = None,
    ) -> list[VersionEntry]:
        """Resolve releases one after another.

        Returns:
            New version entries in release order

        """
        releases = list(releases)
        counter = counter if counter is not None else ProgressCounter()
        counter.total += len(releases)

        entries: list[VersionEntry] = []
        for release in releases:
            entry = await self.process_release(
                release, known_versions, counter
            )
            if entry is not None:
                entries.append(entry)
            counter.processed += 1
            if self.on_progress:
                self.on_progress(counter)
        return entries
