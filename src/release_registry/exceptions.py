"""Exception classes for release-registry operations."""


class ReleaseRegistryError(Exception):
    """Base exception for release-registry operations."""

    error_prefix: str = "Operation failed"

    def __init__(self, message: str, target: str | None = None) -> None:
        """Initialize error with message and optional target.

        Args:
            message: Error message describing the failure.
            target: Optional name of the target that failed.

        """
        super().__init__(message)
        self.message = message
        self.target = target

    def __str__(self) -> str:
        """Return formatted error message."""
        if self.target:
            return f"{self.error_prefix} for '{self.target}': {self.message}"
        return f"{self.error_prefix}: {self.message}"


class ConfigurationError(ReleaseRegistryError):
    """Raised when CLI input or a package definition is invalid."""

    error_prefix = "Invalid configuration"


class CatalogWriteError(ReleaseRegistryError):
    """Raised when the final catalog cannot be written."""

    error_prefix = "Catalog write failed"


class GitHubAPIError(ReleaseRegistryError):
    """Raised when the GitHub API cannot be queried."""

    error_prefix = "GitHub API request failed"
