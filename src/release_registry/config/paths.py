"""Path helpers for release-registry configuration and output."""

import os
from pathlib import Path

from release_registry.constants import (
    CATALOG_FILE_SUFFIX,
    CONFIG_DIR_NAME,
    CONFIG_FILE_NAME,
    DEFAULT_CONFIG_SUBDIR,
    DEFAULT_OUTPUT_DIR_NAME,
    ENV_CONFIG_DIR,
)


class Paths:
    """Application paths and directory structure."""

    @classmethod
    def config_dir(cls) -> Path:
        """Return the configuration directory.

        ``$RELEASE_REGISTRY_CONFIG_DIR`` wins over
        ``~/.config/release-registry``.
        """
        override = os.getenv(ENV_CONFIG_DIR)
        if override:
            return cls.expand_path(override)
        return Path.home() / CONFIG_DIR_NAME / DEFAULT_CONFIG_SUBDIR

    @classmethod
    def settings_file(cls) -> Path:
        """Return the global settings file path."""
        return cls.config_dir() / CONFIG_FILE_NAME

    @classmethod
    def default_output_dir(cls) -> Path:
        """Return the catalog output directory used when none is given."""
        return Path.cwd() / DEFAULT_OUTPUT_DIR_NAME

    @classmethod
    def catalog_path(cls, output_dir: Path, package_name: str) -> Path:
        """Get path to the catalog file of a package.

        Args:
            output_dir: Directory holding catalog files
            package_name: Package name

        Returns:
            Path to ``<output_dir>/<package_name>.yaml``

        """
        return output_dir / f"{package_name}{CATALOG_FILE_SUFFIX}"

    @classmethod
    def expand_path(cls, path_str: str | Path) -> Path:
        """Expand ``~`` and make the path absolute."""
        path = Path(path_str).expanduser()
        if not path.is_absolute():
            path = Path.cwd() / path
        return path
