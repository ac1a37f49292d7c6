"""Package definitions: which repository to track and what it ships."""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import orjson

from release_registry.config.schemas import (
    SchemaValidationError,
    validate_package_definition,
)
from release_registry.exceptions import ConfigurationError
from release_registry.logger import get_logger

logger = get_logger(__name__)


@dataclass(slots=True, frozen=True)
class PackageDefinition:
    """A validated package definition.

    Attributes:
        owner: GitHub repository owner
        repo: GitHub repository name
        package_name: Catalog name (also the output file stem)
        binaries: Executable paths inside the release archives
        description: Catalog description override
        homepage: Catalog homepage override
        license: Catalog license override
        allow_download_checksum: Enable the download checksum tier

    """

    owner: str
    repo: str
    package_name: str
    binaries: tuple[str, ...]
    description: str = ""
    homepage: str = ""
    license: str = ""
    allow_download_checksum: bool = False

    @property
    def repository(self) -> str:
        """Return "owner/repo"."""
        return f"{self.owner}/{self.repo}"

    @property
    def repository_url(self) -> str:
        """Return the GitHub web URL of the repository."""
        return f"https://github.com/{self.owner}/{self.repo}"


def normalize_bins(
    raw_bins: Sequence[str | Mapping[str, Any]],
) -> tuple[str, ...]:
    """Flatten binary declarations to their paths.

    Examples:
        >>> normalize_bins(["nvim", {"name": "rg", "path": "bin/rg"}, {"name": "fd"}])
        ('nvim', 'bin/rg', 'fd')

    """
    binaries: list[str] = []
    for item in raw_bins:
        if isinstance(item, str):
            binaries.append(item)
            continue
        value = item.get("path") or item.get("name")
        if value:
            binaries.append(str(value))
    return tuple(binaries)


def load_package_file(path: Path) -> dict[str, Any]:
    """Read a JSON package definition file.

    Raises:
        ConfigurationError: If the file is missing, unreadable or not a
            JSON object

    """
    try:
        data = orjson.loads(path.read_bytes())
    except OSError as e:
        raise ConfigurationError(str(e), target=str(path)) from e
    except orjson.JSONDecodeError as e:
        msg = f"invalid JSON: {e}"
        raise ConfigurationError(msg, target=str(path)) from e

    if not isinstance(data, dict):
        msg = "a package definition must be a JSON object"
        raise ConfigurationError(msg, target=str(path))
    return data


def build_package_definition(
    file_data: Mapping[str, Any] | None = None,
    overrides: Mapping[str, Any] | None = None,
) -> PackageDefinition:
    """Combine file values with overrides and validate the result.

    Override values that are None are ignored, so unset CLI flags never
    mask values from the file.

    Args:
        file_data: Values loaded from a package definition file
        overrides: Values given on the command line

    Returns:
        PackageDefinition

    Raises:
        ConfigurationError: If the combined definition is invalid

    """
    merged: dict[str, Any] = dict(file_data or {})
    merged.update(
        {
            key: value
            for key, value in (overrides or {}).items()
            if value is not None
        }
    )

    try:
        validate_package_definition(merged)
    except SchemaValidationError as e:
        raise ConfigurationError(
            str(e), target=merged.get("package_name") or None
        ) from e

    definition = PackageDefinition(
        owner=merged["owner"],
        repo=merged["repo"],
        package_name=merged["package_name"],
        binaries=normalize_bins(merged["bins"]),
        description=merged.get("description", ""),
        homepage=merged.get("homepage", ""),
        license=merged.get("license", ""),
        allow_download_checksum=merged.get("allow_download_checksum", False),
    )
    logger.debug(
        "Package %s tracks %s", definition.package_name, definition.repository
    )
    return definition
