"""YAML persistence for package catalogs."""

import tempfile
from pathlib import Path

import yaml

from release_registry.config.paths import Paths
from release_registry.core.models import Catalog
from release_registry.exceptions import CatalogWriteError
from release_registry.logger import get_logger

logger = get_logger(__name__)


class _CatalogDumper(yaml.SafeDumper):
    """SafeDumper that never emits anchors or aliases."""

    def ignore_aliases(self, data: object) -> bool:  # noqa: ARG002
        return True


def dump_catalog(catalog: Catalog) -> str:
    """Serialize a catalog in block style with its key order preserved."""
    return yaml.dump(
        catalog.to_dict(),
        Dumper=_CatalogDumper,
        sort_keys=False,
        default_flow_style=False,
        allow_unicode=True,
        width=float("inf"),
    )


class CatalogStore:
    """Read and write ``<output_dir>/<package_name>.yaml`` catalogs."""

    def __init__(self, output_dir: Path) -> None:
        """Initialize the store.

        Args:
            output_dir: Directory holding catalog files

        """
        self.output_dir = output_dir

    def path_for(self, package_name: str) -> Path:
        """Return the catalog path of a package."""
        return Paths.catalog_path(self.output_dir, package_name)

    def exists(self, package_name: str) -> bool:
        """Check whether a catalog file exists for a package."""
        return self.path_for(package_name).is_file()

    def load(self, package_name: str) -> Catalog:
        """Load a package catalog.

        A missing, unreadable or malformed file yields an empty catalog;
        loading never raises.
        """
        path = self.path_for(package_name)
        if not path.is_file():
            logger.debug("No existing catalog at %s", path)
            return Catalog(name=package_name)

        try:
            with path.open(encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except (OSError, UnicodeDecodeError, yaml.YAMLError) as e:
            logger.warning("Ignoring unreadable catalog %s: %s", path, e)
            return Catalog(name=package_name)

        if not isinstance(data, dict):
            logger.warning("Ignoring catalog %s: not a mapping", path)
            return Catalog(name=package_name)

        catalog = Catalog.from_dict(data, name=package_name)
        logger.debug(
            "Loaded %d versions from %s", len(catalog.versions), path
        )
        return catalog

    def save(self, catalog: Catalog) -> Path:
        """Write a catalog atomically (temporary file, then rename).

        Returns:
            Path of the written catalog

        Raises:
            CatalogWriteError: If the file cannot be written

        """
        path = self.path_for(catalog.name)
        temp_path: Path | None = None
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                mode="w",
                dir=path.parent,
                prefix=f".{path.stem}-",
                suffix=".tmp",
                delete=False,
                encoding="utf-8",
            ) as tmp_file:
                temp_path = Path(tmp_file.name)
                tmp_file.write(dump_catalog(catalog))
                tmp_file.flush()
            temp_path.replace(path)
        except (OSError, yaml.YAMLError) as e:
            if temp_path is not None:
                temp_path.unlink(missing_ok=True)
            raise CatalogWriteError(str(e), target=str(path)) from e

        logger.debug("Saved catalog to %s", path)
        return path
