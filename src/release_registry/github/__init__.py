"""GitHub release source."""

from release_registry.github.client import GitHubClient, RepoMetadata

__all__ = ["GitHubClient", "RepoMetadata"]
