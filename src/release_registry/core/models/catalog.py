"""Catalog model: the persisted record of one package."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, replace
from typing import Any

from release_registry.constants import CATALOG_SCHEMA_VERSION
from release_registry.core.models.artifact import VersionEntry


@dataclass(slots=True, frozen=True)
class Catalog:
    """Deduplicated, version-sorted catalog of one package.

    Attributes:
        name: Package name
        description: Package description
        homepage: Project homepage URL
        license: License identifier
        versions: Version entries, newest first
        schema: Catalog format version

    """

    name: str
    description: str = ""
    homepage: str = ""
    license: str = ""
    versions: tuple[VersionEntry, ...] = ()
    schema: int = CATALOG_SCHEMA_VERSION

    @property
    def version_ids(self) -> frozenset[str]:
        """Normalized version strings present in the catalog."""
        return frozenset(entry.version for entry in self.versions)

    def with_versions(self, versions: list[VersionEntry]) -> Catalog:
        """Return a copy holding the given version entries."""
        return replace(self, versions=tuple(versions))

    def to_dict(self) -> dict[str, Any]:
        """Convert to the serialized key order used on disk."""
        return {
            "schema": self.schema,
            "name": self.name,
            "description": self.description,
            "homepage": self.homepage,
            "license": self.license,
            "versions": [entry.to_dict() for entry in self.versions],
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], name: str = "") -> Catalog:
        """Create a Catalog from loaded data, tolerating missing fields.

        Args:
            data: Mapping loaded from persisted storage
            name: Name used when the data carries none

        Returns:
            Catalog instance

        """
        versions = []
        for raw_entry in data.get("versions") or []:
            if not isinstance(raw_entry, Mapping):
                continue
            entry = VersionEntry.from_dict(raw_entry)
            if entry is not None:
                versions.append(entry)

        schema = data.get("schema", CATALOG_SCHEMA_VERSION)
        return cls(
            name=str(data.get("name") or name),
            description=str(data.get("description") or ""),
            homepage=str(data.get("homepage") or ""),
            license=str(data.get("license") or ""),
            versions=tuple(versions),
            schema=schema if isinstance(schema, int) else CATALOG_SCHEMA_VERSION,
        )
