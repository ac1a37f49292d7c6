"""Tests for the global settings file."""

from release_registry.config import GlobalSettings, SettingsManager


class TestSettingsManager:
    """Test SettingsManager.load."""

    def test_writes_defaults_when_missing(self, tmp_path):
        """Test a missing file is created with default values."""
        settings_file = tmp_path / "conf" / "settings.conf"
        settings = SettingsManager(settings_file).load()

        assert settings == GlobalSettings()
        text = settings_file.read_text()
        assert "[network]" in text
        assert "max_concurrent_checks = 4" in text

    def test_default_file_reloads(self, tmp_path):
        """Test the generated file parses back to the defaults."""
        settings_file = tmp_path / "settings.conf"
        SettingsManager(settings_file).load()
        assert SettingsManager(settings_file).load() == GlobalSettings()

    def test_reads_values(self, tmp_path):
        """Test values and inline comments."""
        settings_file = tmp_path / "settings.conf"
        settings_file.write_text(
            "[DEFAULT]\n"
            "log_level = debug  # verbose\n"
            "max_concurrent_checks = 8\n"
            "[network]\n"
            "timeout_seconds = 5\n"
            "retry_attempts = 1\n"
        )
        settings = SettingsManager(settings_file).load()

        assert settings.log_level == "DEBUG"
        assert settings.console_log_level == "WARNING"
        assert settings.max_concurrent_checks == 8
        assert settings.network.timeout_seconds == 5
        assert settings.network.retry_attempts == 1
        assert settings.network.download_timeout_seconds == 600

    def test_invalid_values_fall_back(self, tmp_path, caplog):
        """Test unusable values are replaced by defaults."""
        settings_file = tmp_path / "settings.conf"
        settings_file.write_text(
            "[DEFAULT]\n"
            "log_level = LOUD\n"
            "max_concurrent_checks = 0\n"
            "[network]\n"
            "timeout_seconds = soon\n"
        )
        settings = SettingsManager(settings_file).load()

        assert settings.log_level == "INFO"
        assert settings.max_concurrent_checks == 4
        assert settings.network.timeout_seconds == 30
        assert "Invalid log_level" in caplog.text

    def test_unparsable_file(self, tmp_path, caplog):
        """Test a broken file yields the defaults."""
        settings_file = tmp_path / "settings.conf"
        settings_file.write_text("no section header\n")
        assert SettingsManager(settings_file).load() == GlobalSettings()
        assert "Cannot read" in caplog.text
