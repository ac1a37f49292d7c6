"""Tests for the CLI runner."""

from pathlib import Path
from unittest.mock import AsyncMock, patch

import pytest

from conftest import make_entry

from release_registry.cli import CLIRunner
from release_registry.cli.runner import parse_bins
from release_registry.config import GlobalSettings
from release_registry.core.models import Catalog
from release_registry.core.processor import ProgressCounter
from release_registry.core.updater import UpdateResult
from release_registry.exceptions import ConfigurationError, GitHubAPIError

ARGS = [
    "--owner",
    "BurntSushi",
    "--repo",
    "ripgrep",
    "--package-name",
    "ripgrep",
    "--bins",
    '[{"name": "rg", "path": "rg"}]',
]


@pytest.fixture
def runner():
    """CLIRunner with default settings."""
    return CLIRunner(GlobalSettings())


class TestParseBins:
    """Test --bins parsing."""

    def test_array(self):
        """Test a JSON array is returned."""
        assert parse_bins('["a", {"name": "b"}]') == ["a", {"name": "b"}]

    def test_invalid_json(self):
        """Test malformed JSON."""
        with pytest.raises(ConfigurationError, match="--bins"):
            parse_bins("[rg")

    def test_not_array(self):
        """Test a JSON object is rejected."""
        with pytest.raises(ConfigurationError, match="JSON array"):
            parse_bins('{"name": "rg"}')


class TestCLIRunner:
    """Test CLIRunner.run."""

    @pytest.mark.asyncio
    async def test_version(self, runner, capsys):
        """Test --version prints the version and does nothing else."""
        with patch.object(runner, "update", new=AsyncMock()) as update:
            await runner.run(["--version"])
        assert capsys.readouterr().out.strip()
        update.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_bad_bins_exits(self, runner, capsys):
        """Test malformed --bins exits with status 1."""
        argv = [*ARGS[:-1], "not json"]
        with pytest.raises(SystemExit) as exc_info:
            await runner.run(argv)
        assert exc_info.value.code == 1
        assert "--bins" in capsys.readouterr().err

    @pytest.mark.asyncio
    async def test_missing_fields_exit(self, runner):
        """Test an incomplete definition exits with status 1."""
        with pytest.raises(SystemExit) as exc_info:
            await runner.run(["--owner", "o"])
        assert exc_info.value.code == 1

    @pytest.mark.asyncio
    async def test_reports_added_versions(self, runner, tmp_path, capsys):
        """Test a successful update prints what was written."""
        catalog_path = tmp_path / "ripgrep.yaml"
        result = UpdateResult(
            new_entries=[make_entry("14.1.0")],
            catalog=Catalog(name="ripgrep"),
            path=catalog_path,
            counter=ProgressCounter(total=1, processed=1, added=1),
        )
        with patch.object(
            runner, "update", new=AsyncMock(return_value=result)
        ) as update:
            await runner.run([*ARGS, "--output-dir", str(tmp_path), "--refresh"])

        definition, output_dir, token, refresh = update.await_args.args
        assert definition.binaries == ("rg",)
        assert output_dir == tmp_path
        assert refresh is True
        assert "Added 1 new version(s)" in capsys.readouterr().out

    @pytest.mark.asyncio
    async def test_reports_nothing_new(self, runner, capsys, monkeypatch):
        """Test the token falls back to the environment."""
        monkeypatch.setenv("GITHUB_TOKEN", "env-token")
        result = UpdateResult(new_entries=[], catalog=Catalog(name="ripgrep"))
        with patch.object(
            runner, "update", new=AsyncMock(return_value=result)
        ) as update:
            await runner.run(ARGS)

        _, output_dir, token, _ = update.await_args.args
        assert token == "env-token"
        assert output_dir == Path.cwd() / "packages"
        assert "No new versions to add." in capsys.readouterr().out

    @pytest.mark.asyncio
    async def test_api_failure_exits(self, runner, capsys):
        """Test a failed release listing exits with status 1."""
        error = GitHubAPIError("boom", target="https://api.github.com/x")
        with (
            patch.object(runner, "update", new=AsyncMock(side_effect=error)),
            pytest.raises(SystemExit) as exc_info,
        ):
            await runner.run(ARGS)
        assert exc_info.value.code == 1
        assert "GitHub API request failed" in capsys.readouterr().err
