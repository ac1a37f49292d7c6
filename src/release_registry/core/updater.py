"""Catalog update workflow for one package.

Fetches releases and repository metadata, resolves the releases that are
not cataloged yet, merges them into the stored catalog and writes it back
when something new was produced.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import TYPE_CHECKING

from release_registry.core.merger import merge_catalog
from release_registry.core.models import Catalog, VersionEntry
from release_registry.core.processor import ProgressCounter, ReleaseProcessor
from release_registry.logger import get_logger

if TYPE_CHECKING:
    from release_registry.config.package import PackageDefinition
    from release_registry.github import GitHubClient, RepoMetadata
    from release_registry.storage import CatalogStore

logger = get_logger(__name__)


@dataclass(slots=True)
class UpdateResult:
    """Outcome of one catalog update.

    Attributes:
        new_entries: Version entries produced by this run
        catalog: Catalog after the merge (unchanged when nothing is new)
        path: Written catalog path, None when nothing was written
        counter: Final progress counters

    """

    new_entries: list[VersionEntry]
    catalog: Catalog
    path: Path | None = None
    counter: ProgressCounter = field(default_factory=ProgressCounter)


def resolve_metadata(
    catalog: Catalog,
    catalog_exists: bool,
    definition: PackageDefinition,
    repo_metadata: RepoMetadata,
) -> Catalog:
    """Apply catalog metadata precedence.

    Values already stored in an existing catalog win, then the package
    definition, then the repository, then defaults.
    """

    def pick(stored: str, configured: str, fetched: str, default: str) -> str:
        if catalog_exists and stored:
            return stored
        return configured or fetched or default

    return replace(
        catalog,
        name=definition.package_name,
        description=pick(
            catalog.description,
            definition.description,
            repo_metadata.description,
            "",
        ),
        homepage=pick(
            catalog.homepage,
            definition.homepage,
            repo_metadata.homepage,
            definition.repository_url,
        ),
        license=pick(
            catalog.license, definition.license, repo_metadata.license, ""
        ),
    )


class CatalogUpdater:
    """Update the stored catalog of a package from its GitHub releases."""

    def __init__(
        self,
        client: GitHubClient,
        store: CatalogStore,
        processor: ReleaseProcessor,
    ) -> None:
        """Initialize the updater.

        Args:
            client: GitHub client for releases and metadata
            store: Catalog store
            processor: Release processor

        """
        self.client = client
        self.store = store
        self.processor = processor

    async def update(
        self,
        definition: PackageDefinition,
        counter: ProgressCounter | None = None,
    ) -> UpdateResult:
        """Run the update.

        Raises:
            GitHubAPIError: If the release listing cannot be fetched
            CatalogWriteError: If the catalog cannot be written

        """
        counter = counter if counter is not None else ProgressCounter()
        logger.info("Fetching releases from GitHub: %s", definition.repository)
        releases, repo_metadata = await asyncio.gather(
            self.client.fetch_releases(definition.owner, definition.repo),
            self.client.fetch_repo_metadata(definition.owner, definition.repo),
        )
        logger.info("Found %d releases to process", len(releases))

        catalog_exists = self.store.exists(definition.package_name)
        catalog = self.store.load(definition.package_name)
        logger.info(
            "Found %d existing versions in the catalog", len(catalog.versions)
        )

        new_entries = await self.processor.process_releases(
            releases, catalog.version_ids, counter
        )
        if not new_entries:
            logger.info("No new versions to add")
            return UpdateResult(new_entries, catalog, counter=counter)

        merged = merge_catalog(
            resolve_metadata(
                catalog, catalog_exists, definition, repo_metadata
            ),
            new_entries,
        )
        path = self.store.save(merged)
        logger.info("Added %d new version(s) to %s", len(new_entries), path)
        return UpdateResult(new_entries, merged, path=path, counter=counter)
