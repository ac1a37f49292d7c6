"""Tests for exception formatting."""

import pytest

from release_registry.exceptions import (
    CatalogWriteError,
    ConfigurationError,
    GitHubAPIError,
    ReleaseRegistryError,
)


@pytest.mark.parametrize(
    ("error_class", "prefix"),
    [
        (ConfigurationError, "Invalid configuration"),
        (CatalogWriteError, "Catalog write failed"),
        (GitHubAPIError, "GitHub API request failed"),
    ],
)
def test_prefix_and_target(error_class, prefix):
    """Test messages carry the class prefix and the optional target."""
    error = error_class("broken", target="ripgrep")
    assert isinstance(error, ReleaseRegistryError)
    assert str(error) == f"{prefix} for 'ripgrep': broken"
    assert str(error_class("broken")) == f"{prefix}: broken"
    assert error.message == "broken"
