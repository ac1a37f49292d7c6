"""Catalog persistence."""

from release_registry.storage.catalog_store import CatalogStore, dump_catalog

__all__ = ["CatalogStore", "dump_catalog"]
