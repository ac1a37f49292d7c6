"""Tests for package definitions."""

import pytest

from release_registry.config import (
    build_package_definition,
    load_package_file,
    normalize_bins,
)
from release_registry.exceptions import ConfigurationError

BASE = {
    "owner": "BurntSushi",
    "repo": "ripgrep",
    "package_name": "ripgrep",
    "bins": [{"name": "rg", "path": "rg"}],
}


class TestNormalizeBins:
    """Test binary declaration flattening."""

    def test_mixed(self):
        """Test strings and objects are both accepted."""
        assert normalize_bins(["a", {"name": "b"}, {"path": "x/c"}]) == (
            "a",
            "b",
            "x/c",
        )

    def test_path_wins_over_name(self):
        """Test the path is preferred."""
        assert normalize_bins([{"name": "nvim", "path": "bin/nvim"}]) == (
            "bin/nvim",
        )


class TestBuildPackageDefinition:
    """Test combining file values and overrides."""

    def test_from_file_data(self):
        """Test a complete definition."""
        definition = build_package_definition(BASE)
        assert definition.repository == "BurntSushi/ripgrep"
        assert definition.repository_url == "https://github.com/BurntSushi/ripgrep"
        assert definition.binaries == ("rg",)
        assert definition.allow_download_checksum is False

    def test_overrides_win(self):
        """Test overrides replace file values."""
        definition = build_package_definition(
            BASE, {"package_name": "rg", "license": "MIT"}
        )
        assert definition.package_name == "rg"
        assert definition.license == "MIT"

    def test_none_overrides_ignored(self):
        """Test unset flags keep file values."""
        definition = build_package_definition(
            BASE, {"owner": None, "allow_download_checksum": None}
        )
        assert definition.owner == "BurntSushi"

    def test_overrides_only(self):
        """Test a definition made purely from flags."""
        definition = build_package_definition(None, dict(BASE))
        assert definition.package_name == "ripgrep"

    def test_missing_field(self):
        """Test a missing required field is a configuration error."""
        data = {key: value for key, value in BASE.items() if key != "repo"}
        with pytest.raises(ConfigurationError, match="repo"):
            build_package_definition(data)

    def test_unknown_field(self):
        """Test unknown fields are rejected."""
        with pytest.raises(ConfigurationError):
            build_package_definition({**BASE, "colour": "blue"})

    def test_wrong_bins_type(self):
        """Test bins must be a list."""
        with pytest.raises(ConfigurationError):
            build_package_definition({**BASE, "bins": "rg"})


class TestLoadPackageFile:
    """Test reading definition files."""

    def test_valid(self, tmp_path):
        """Test a JSON object is returned."""
        path = tmp_path / "pkg.json"
        path.write_text('{"owner": "o"}')
        assert load_package_file(path) == {"owner": "o"}

    def test_missing(self, tmp_path):
        """Test a missing file."""
        with pytest.raises(ConfigurationError):
            load_package_file(tmp_path / "absent.json")

    def test_invalid_json(self, tmp_path):
        """Test malformed JSON."""
        path = tmp_path / "pkg.json"
        path.write_text("{owner: o")
        with pytest.raises(ConfigurationError, match="invalid JSON"):
            load_package_file(path)

    def test_not_an_object(self, tmp_path):
        """Test a JSON array is rejected."""
        path = tmp_path / "pkg.json"
        path.write_text("[]")
        with pytest.raises(ConfigurationError, match="JSON object"):
            load_package_file(path)
