"""Tests for candidate grouping and selection."""

import asyncio
from unittest.mock import AsyncMock

import pytest
from conftest import DIGEST_A, DIGEST_B, make_file

from release_registry.constants import UNSUPPORTED_PRIORITY
from release_registry.core.checksum import (
    ChecksumResolver,
    ProvidedDigestStrategy,
    SiblingFileStrategy,
)
from release_registry.core.models import Release
from release_registry.core.selector import (
    CandidateSelector,
    group_candidates,
    rank_candidates,
    select_artifact,
)
from release_registry.domain import ArchiveType, PlatformKey


def _provided_only() -> ChecksumResolver:
    return ChecksumResolver([ProvidedDigestStrategy()])


class TestGroupCandidates:
    """Test grouping by platform."""

    def test_groups_and_skips(self, sample_release):
        """Test unclassifiable files and installers are skipped."""
        groups = group_candidates(sample_release.files)
        assert sorted(str(key) for key in groups) == [
            "linux-amd64",
            "macos-arm64",
            "windows-amd64",
        ]
        windows = groups[PlatformKey.from_string("windows-amd64")]
        assert [c.file.name for c in windows] == ["tool-windows-amd64.zip"]

    def test_priorities(self):
        """Test priorities are looked up per OS."""
        groups = group_candidates(
            [
                make_file("t-linux-amd64.tar.xz"),
                make_file("t-windows-amd64.tar.gz"),
            ]
        )
        linux = groups[PlatformKey.from_string("linux-amd64")][0]
        windows = groups[PlatformKey.from_string("windows-amd64")][0]
        assert linux.priority == 2
        assert windows.priority == UNSUPPORTED_PRIORITY


class TestRankCandidates:
    """Test candidate ranking."""

    def test_priority_then_name(self):
        """Test ties on priority are broken by filename."""
        candidates = group_candidates(
            [
                make_file("t-linux-amd64.zip"),
                make_file("t-linux-x86_64.tar.gz"),
                make_file("t-linux-amd64.tar.gz"),
            ]
        )[PlatformKey.from_string("linux-amd64")]
        assert [c.file.name for c in rank_candidates(candidates)] == [
            "t-linux-amd64.tar.gz",
            "t-linux-x86_64.tar.gz",
            "t-linux-amd64.zip",
        ]

    def test_unsupported_only_as_last_resort(self):
        """Test unsupported formats are dropped when a supported one exists."""
        candidates = group_candidates(
            [make_file("t-windows-amd64.tar.gz"), make_file("t-windows-amd64.zip")]
        )[PlatformKey.from_string("windows-amd64")]
        assert [c.file.name for c in rank_candidates(candidates)] == [
            "t-windows-amd64.zip"
        ]

        alone = group_candidates([make_file("t-windows-amd64.tar.gz")])
        ranked = rank_candidates(alone[PlatformKey.from_string("windows-amd64")])
        assert [c.file.name for c in ranked] == ["t-windows-amd64.tar.gz"]


class TestSelectArtifact:
    """Test checksum-gated selection."""

    @pytest.mark.asyncio
    async def test_checksum_gating_overrides_priority(self):
        """Test a verifiable tar.xz beats an unverifiable tar.gz."""
        release = Release.create(
            "v1.0.0",
            [
                make_file("a-linux-amd64.tar.gz"),
                make_file("a-linux-amd64.tar.xz", f"sha256:{DIGEST_A}"),
            ],
        )
        selected = await CandidateSelector(_provided_only()).select(release.files)
        artifact = selected[PlatformKey.from_string("linux-amd64")]
        assert artifact.archive_type is ArchiveType.TAR_XZ
        assert artifact.url.endswith("a-linux-amd64.tar.xz")
        assert artifact.checksum == f"sha256:{DIGEST_A}"

    @pytest.mark.asyncio
    async def test_msi_is_never_selected(self):
        """Test installers never become artifacts even with digests."""
        release = Release.create(
            "v1.0.0",
            [
                make_file("pkg-windows-amd64.msi", f"sha256:{DIGEST_A}"),
                make_file("pkg-windows-amd64.zip", f"sha256:{DIGEST_B}"),
            ],
        )
        selected = await CandidateSelector(_provided_only()).select(release.files)
        assert list(selected) == [PlatformKey.from_string("windows-amd64")]
        artifact = selected[PlatformKey.from_string("windows-amd64")]
        assert artifact.archive_type is ArchiveType.ZIP
        assert artifact.checksum == f"sha256:{DIGEST_B}"

    @pytest.mark.asyncio
    async def test_lower_candidates_not_checked(self):
        """Test lookups stop at the first resolved candidate."""
        resolver = AsyncMock()
        resolver.resolve = AsyncMock(return_value=f"sha256:{DIGEST_A}")
        candidates = group_candidates(
            [make_file("a-linux-amd64.tar.gz"), make_file("a-linux-amd64.zip")]
        )[PlatformKey.from_string("linux-amd64")]
        artifact = await select_artifact(candidates, resolver)
        assert artifact.archive_type is ArchiveType.TAR_GZ
        assert resolver.resolve.await_count == 1

    @pytest.mark.asyncio
    async def test_platform_omitted_without_checksum(self):
        """Test a platform with no verifiable candidate is left out."""
        release = Release.create(
            "v1.0.0",
            [
                make_file("a-linux-amd64.tar.gz", f"sha256:{DIGEST_A}"),
                make_file("a-macos-arm64.tar.gz"),
            ],
        )
        selected = await CandidateSelector(_provided_only()).select(release.files)
        assert [str(key) for key in selected] == ["linux-amd64"]

    @pytest.mark.asyncio
    async def test_sibling_checksum_file(self):
        """Test selection through a published checksum file."""
        release = Release.create(
            "v1.0.0",
            [
                make_file("a-linux-amd64.tar.gz"),
                make_file("checksums.txt", url="https://example.com/sums"),
            ],
        )
        fetch = AsyncMock(return_value=f"{DIGEST_B}  a-linux-amd64.tar.gz\n")
        resolver = ChecksumResolver(
            [ProvidedDigestStrategy(), SiblingFileStrategy(fetch)]
        )
        selected = await CandidateSelector(resolver).select(release.files)
        artifact = selected[PlatformKey.from_string("linux-amd64")]
        assert artifact.checksum == f"sha256:{DIGEST_B}"


class TestConcurrency:
    """Test concurrent resolution is deterministic."""

    @pytest.mark.asyncio
    async def test_outcome_matches_sequential(self, sample_release):
        """Test results do not depend on completion order."""
        delays = {
            "tool-linux-x86_64.tar.gz": 0.03,
            "tool-darwin-arm64.tar.gz": 0.0,
            "tool-windows-amd64.zip": 0.01,
        }

        class SlowResolver:
            async def resolve(self, file):
                await asyncio.sleep(delays.get(file.name, 0))
                return f"sha256:{DIGEST_A}"

        concurrent = await CandidateSelector(SlowResolver(), 4).select(
            sample_release.files
        )
        sequential = await CandidateSelector(SlowResolver(), 1).select(
            sample_release.files
        )
        assert concurrent == sequential
        assert list(concurrent) == sorted(concurrent, key=lambda k: k.sort_key)

    @pytest.mark.asyncio
    async def test_concurrency_is_bounded(self, sample_release):
        """Test no more than max_concurrent platforms resolve at once."""
        active = 0
        peak = 0

        class CountingResolver:
            async def resolve(self, file):
                nonlocal active, peak
                active += 1
                peak = max(peak, active)
                await asyncio.sleep(0.01)
                active -= 1
                return f"sha256:{DIGEST_A}"

        await CandidateSelector(CountingResolver(), 2).select(sample_release.files)
        assert peak == 2
