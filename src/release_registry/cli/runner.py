"""CLI runner for release-registry.

Builds the package definition from the command line, wires the GitHub
client, checksum resolver, processor and catalog store together, and
maps failures to exit codes.
"""

import os
import sys
from argparse import Namespace
from pathlib import Path
from typing import Any

import orjson

from release_registry import __version__
from release_registry.cli.parser import CLIParser
from release_registry.cli.progress import ProgressLine
from release_registry.config import (
    GlobalSettings,
    PackageDefinition,
    Paths,
    SettingsManager,
    build_package_definition,
    load_package_file,
)
from release_registry.constants import ENV_GITHUB_TOKEN
from release_registry.core.checksum import build_checksum_resolver
from release_registry.core.http_session import create_http_session
from release_registry.core.processor import ProgressCounter, ReleaseProcessor
from release_registry.core.selector import CandidateSelector
from release_registry.core.updater import CatalogUpdater, UpdateResult
from release_registry.exceptions import (
    CatalogWriteError,
    ConfigurationError,
    GitHubAPIError,
)
from release_registry.github import GitHubClient
from release_registry.logger import get_logger, update_logger_from_config
from release_registry.storage import CatalogStore

logger = get_logger(__name__)


def parse_bins(raw: str) -> list[Any]:
    """Parse the --bins JSON array.

    Raises:
        ConfigurationError: If raw is not a JSON array

    """
    try:
        bins = orjson.loads(raw)
    except orjson.JSONDecodeError as e:
        msg = f"Error parsing --bins: {e}"
        raise ConfigurationError(msg) from e
    if not isinstance(bins, list):
        msg = "--bins must be a JSON array"
        raise ConfigurationError(msg)
    return bins


def build_definition(args: Namespace) -> PackageDefinition:
    """Combine the --config file (if any) with command-line overrides.

    Raises:
        ConfigurationError: If the input is incomplete or malformed

    """
    file_data = load_package_file(Path(args.config)) if args.config else None
    overrides = {
        "owner": args.owner,
        "repo": args.repo,
        "package_name": args.package_name,
        "bins": parse_bins(args.bins) if args.bins is not None else None,
        "description": args.description,
        "homepage": args.homepage,
        "license": args.license,
        "allow_download_checksum": args.allow_download_checksum,
    }
    return build_package_definition(file_data, overrides)


class CLIRunner:
    """CLI runner and orchestrator."""

    def __init__(self, settings: GlobalSettings | None = None) -> None:
        """Initialize CLI runner with global settings.

        Args:
            settings: Global settings (loaded from settings.conf if None)

        """
        self.settings = settings or SettingsManager().load()
        update_logger_from_config(
            self.settings.console_log_level, self.settings.log_level
        )

    async def run(self, argv: list[str] | None = None) -> None:
        """Run the CLI application.

        Exits with status 1 on invalid input, on a failed release listing
        and when the catalog cannot be written.
        """
        args = CLIParser().parse_args(argv)

        if args.version:
            print(__version__)
            return

        try:
            definition = build_definition(args)
        except ConfigurationError as e:
            logger.error("%s", e)
            print(f"❌ {e}", file=sys.stderr)
            sys.exit(1)

        output_dir = (
            Paths.expand_path(args.output_dir)
            if args.output_dir
            else Paths.default_output_dir()
        )
        token = args.github_token or os.getenv(ENV_GITHUB_TOKEN) or None

        try:
            result = await self.update(
                definition, output_dir, token, args.refresh
            )
        except (GitHubAPIError, CatalogWriteError) as e:
            logger.error("%s", e)
            print(f"❌ {e}", file=sys.stderr)
            sys.exit(1)

        self._report(result)

    async def update(
        self,
        definition: PackageDefinition,
        output_dir: Path,
        token: str | None,
        refresh: bool = False,
    ) -> UpdateResult:
        """Update the catalog of one package."""
        network = self.settings.network
        progress = ProgressLine()
        counter = ProgressCounter()

        async with create_http_session(self.settings) as session:
            client = GitHubClient(
                session,
                token=token,
                timeout_seconds=network.timeout_seconds,
                retry_attempts=network.retry_attempts,
            )
            resolver = build_checksum_resolver(
                client.fetch_text,
                session,
                allow_download=definition.allow_download_checksum,
                download_timeout_seconds=network.download_timeout_seconds,
            )
            processor = ReleaseProcessor(
                CandidateSelector(
                    resolver, self.settings.max_concurrent_checks
                ),
                definition.binaries,
                refresh=refresh,
                on_progress=progress,
            )
            updater = CatalogUpdater(
                client, CatalogStore(output_dir), processor
            )
            try:
                return await updater.update(definition, counter)
            finally:
                progress.finish()

    def _report(self, result: UpdateResult) -> None:
        counter = result.counter
        logger.info(
            "Processed %d releases: %d new, %d skipped, %d rejected",
            counter.processed,
            counter.added,
            counter.skipped,
            counter.rejected,
        )
        if result.path is None:
            print("No new versions to add.")
        else:
            print(
                f"✅ Added {len(result.new_entries)} new version(s) "
                f"to {result.path}"
            )
