"""Configuration: paths, global INI settings and package definitions."""

from release_registry.config.package import (
    PackageDefinition,
    build_package_definition,
    load_package_file,
    normalize_bins,
)
from release_registry.config.paths import Paths
from release_registry.config.settings import (
    GlobalSettings,
    NetworkSettings,
    SettingsManager,
)

__all__ = [
    "GlobalSettings",
    "NetworkSettings",
    "PackageDefinition",
    "Paths",
    "SettingsManager",
    "build_package_definition",
    "load_package_file",
    "normalize_bins",
]
