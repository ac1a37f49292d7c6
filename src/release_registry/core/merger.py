"""Catalog merge: deduplicate by version string, newest first."""

from __future__ import annotations

from collections.abc import Iterable

from release_registry.core.models import Catalog, VersionEntry
from release_registry.domain import precedence_key


def merge_versions(
    existing: Iterable[VersionEntry], new_entries: Iterable[VersionEntry]
) -> list[VersionEntry]:
    """Merge new version entries into existing ones.

    Entries are keyed by their exact version string; a new entry replaces
    an existing entry with the same version wholesale. The result is sorted
    by version precedence, newest first.

    Examples:
        >>> old = [VersionEntry("1.0.0"), VersionEntry("0.9.0")]
        >>> merged = merge_versions(old, [VersionEntry("1.1.0")])
        >>> [entry.version for entry in merged]
        ['1.1.0', '1.0.0', '0.9.0']

    """
    by_version: dict[str, VersionEntry] = {}
    for entry in existing:
        by_version[entry.version] = entry
    for entry in new_entries:
        by_version[entry.version] = entry
    return sorted(
        by_version.values(),
        key=lambda entry: precedence_key(entry.version),
        reverse=True,
    )


def merge_catalog(
    catalog: Catalog, new_entries: Iterable[VersionEntry]
) -> Catalog:
    """Return a copy of catalog with new_entries merged in."""
    return catalog.with_versions(merge_versions(catalog.versions, new_entries))
