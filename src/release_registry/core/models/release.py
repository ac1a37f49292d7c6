"""Release input models."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any


@dataclass(slots=True, frozen=True)
class ReleaseFile:
    """A downloadable file attached to a release.

    Attributes:
        name: Asset filename
        download_url: Direct download URL for the asset
        provided_digest: Digest supplied by the release source alongside
            the listing (e.g. "sha256:<hex>"), if any
        siblings: The other files of the same release, in listing order

    """

    name: str
    download_url: str
    provided_digest: str | None = None
    siblings: tuple[ReleaseFile, ...] = ()

    @classmethod
    def from_api_response(cls, asset_data: dict[str, Any]) -> ReleaseFile | None:
        """Create ReleaseFile from GitHub API asset data.

        Args:
            asset_data: Raw asset data from GitHub API

        Returns:
            ReleaseFile or None if required fields are missing

        """
        try:
            name = asset_data.get("name", "")
            download_url = asset_data.get("browser_download_url", "")
            digest = asset_data.get("digest") or None
        except AttributeError:
            return None

        if not name or not download_url:
            return None
        if digest is not None and not isinstance(digest, str):
            digest = None

        return cls(
            name=name, download_url=download_url, provided_digest=digest
        )


def link_siblings(files: list[ReleaseFile]) -> tuple[ReleaseFile, ...]:
    """Attach to every file the list of the other files of its release."""
    bare = [replace(file, siblings=()) for file in files]
    return tuple(
        replace(file, siblings=tuple(bare[:index] + bare[index + 1 :]))
        for index, file in enumerate(bare)
    )


@dataclass(slots=True, frozen=True)
class Release:
    """A published release with its files.

    Attributes:
        tag: Tag name as published (not yet validated)
        files: Release files, each linked to its siblings
        prerelease: Whether the source flags the release as a prerelease

    """

    tag: str
    files: tuple[ReleaseFile, ...]
    prerelease: bool = False

    @classmethod
    def create(
        cls, tag: str, files: list[ReleaseFile], prerelease: bool = False
    ) -> Release:
        """Build a Release, linking each file to its siblings."""
        return cls(tag=tag, files=link_siblings(files), prerelease=prerelease)

    @classmethod
    def from_api_response(cls, api_data: dict[str, Any]) -> Release:
        """Create Release from GitHub API response data.

        Args:
            api_data: Raw release data from GitHub API

        Returns:
            Release instance

        """
        files = []
        for asset_data in api_data.get("assets") or []:
            if not isinstance(asset_data, dict):
                continue
            release_file = ReleaseFile.from_api_response(asset_data)
            if release_file:
                files.append(release_file)

        return cls.create(
            tag=api_data.get("tag_name") or "",
            files=files,
            prerelease=bool(api_data.get("prerelease", False)),
        )
