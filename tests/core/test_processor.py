"""Tests for per-release processing."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from conftest import DIGEST_A, make_file

from release_registry.core.checksum import ChecksumResolver, ProvidedDigestStrategy
from release_registry.core.models import Release
from release_registry.core.processor import ProgressCounter, ReleaseProcessor
from release_registry.core.selector import CandidateSelector


@pytest.fixture
def processor() -> ReleaseProcessor:
    """Processor resolving provided digests only."""
    selector = CandidateSelector(ChecksumResolver([ProvidedDigestStrategy()]))
    return ReleaseProcessor(selector, ["bin/tool"])


def _release(tag: str, digest: str | None = f"sha256:{DIGEST_A}") -> Release:
    return Release.create(tag, [make_file("tool-linux-amd64.tar.gz", digest)])


class TestProcessRelease:
    """Test a single release."""

    @pytest.mark.asyncio
    async def test_accepted(self, processor):
        """Test a valid release becomes a version entry."""
        counter = ProgressCounter()
        entry = await processor.process_release(_release("v1.2.3"), counter=counter)
        assert entry.version == "1.2.3"
        assert entry.binaries == ("bin/tool",)
        assert [str(key) for key in entry.platforms] == ["linux-amd64"]
        assert counter.added == 1

    @pytest.mark.asyncio
    async def test_rejected_version(self, processor, caplog):
        """Test an invalid tag is skipped without touching assets."""
        processor.selector = MagicMock()
        processor.selector.select = AsyncMock()
        counter = ProgressCounter()
        caplog.set_level("INFO", logger="release_registry")
        assert await processor.process_release(_release("1.25rc3"), counter=counter) is None
        assert counter.rejected == 1
        processor.selector.select.assert_not_awaited()
        assert "1.25rc3" in caplog.text

    @pytest.mark.asyncio
    async def test_known_version_skipped(self, processor):
        """Test cataloged versions are not resolved again."""
        counter = ProgressCounter()
        entry = await processor.process_release(
            _release("v1.0.0"), frozenset({"1.0.0"}), counter
        )
        assert entry is None
        assert counter.skipped == 1

    @pytest.mark.asyncio
    async def test_refresh_resolves_known_version(self, processor):
        """Test refresh mode re-resolves cataloged versions."""
        processor.refresh = True
        entry = await processor.process_release(_release("v1.0.0"), frozenset({"1.0.0"}))
        assert entry is not None

    @pytest.mark.asyncio
    async def test_empty_entry_discarded(self, processor):
        """Test a release without verifiable artifacts yields nothing."""
        counter = ProgressCounter()
        entry = await processor.process_release(_release("v1.0.0", None), counter=counter)
        assert entry is None
        assert counter.skipped == 1
        assert counter.added == 0


class TestProcessReleases:
    """Test processing a release list."""

    @pytest.mark.asyncio
    async def test_counts_and_progress(self, processor):
        """Test counters and the progress callback."""
        seen = []
        processor.on_progress = lambda counter: seen.append(counter.processed)
        counter = ProgressCounter()
        entries = await processor.process_releases(
            [_release("v2.0.0"), _release("nightly"), _release("v1.0.0")],
            frozenset({"1.0.0"}),
            counter,
        )
        assert [e.version for e in entries] == ["2.0.0"]
        assert counter == ProgressCounter(
            total=3, processed=3, added=1, rejected=1, skipped=1
        )
        assert seen == [1, 2, 3]
        assert counter.percent == 100


def test_percent():
    """Test percentage rounding and the empty case."""
    assert ProgressCounter(total=3, processed=1).percent == 33
    assert ProgressCounter().percent == 100
