"""Global INI settings (settings.conf)."""

import configparser
from dataclasses import dataclass, field
from pathlib import Path

from release_registry.config.parser import (
    SECTION_COMMENTS,
    CommentAwareConfigParser,
    settings_file_header,
)
from release_registry.config.paths import Paths
from release_registry.constants import (
    DEFAULT_CONSOLE_LOG_LEVEL,
    DEFAULT_DOWNLOAD_TIMEOUT_SECONDS,
    DEFAULT_LOG_LEVEL,
    DEFAULT_MAX_CONCURRENT_CHECKS,
    DEFAULT_RETRY_ATTEMPTS,
    DEFAULT_TIMEOUT_SECONDS,
    KEY_CONSOLE_LOG_LEVEL,
    KEY_DOWNLOAD_TIMEOUT_SECONDS,
    KEY_LOG_LEVEL,
    KEY_MAX_CONCURRENT_CHECKS,
    KEY_RETRY_ATTEMPTS,
    KEY_TIMEOUT_SECONDS,
    SECTION_DEFAULT,
    SECTION_NETWORK,
    VALID_LOG_LEVELS,
)
from release_registry.logger import get_logger

logger = get_logger(__name__)


@dataclass(slots=True, frozen=True)
class NetworkSettings:
    """Network options."""

    timeout_seconds: int = DEFAULT_TIMEOUT_SECONDS
    download_timeout_seconds: int = DEFAULT_DOWNLOAD_TIMEOUT_SECONDS
    retry_attempts: int = DEFAULT_RETRY_ATTEMPTS


@dataclass(slots=True, frozen=True)
class GlobalSettings:
    """Options read from settings.conf."""

    log_level: str = DEFAULT_LOG_LEVEL
    console_log_level: str = DEFAULT_CONSOLE_LOG_LEVEL
    max_concurrent_checks: int = DEFAULT_MAX_CONCURRENT_CHECKS
    network: NetworkSettings = field(default_factory=NetworkSettings)


class SettingsManager:
    """Load and create the global settings file."""

    def __init__(self, settings_file: Path | None = None) -> None:
        """Initialize the manager.

        Args:
            settings_file: Settings path (defaults to Paths.settings_file())

        """
        self.settings_file = settings_file or Paths.settings_file()

    def load(self) -> GlobalSettings:
        """Load settings, writing a default file when none exists.

        Values that cannot be parsed fall back to their defaults with a
        warning; a file that cannot be read yields the defaults.
        """
        defaults = GlobalSettings()
        if not self.settings_file.exists():
            self._write_defaults(defaults)
            return defaults

        parser = CommentAwareConfigParser()
        try:
            parser.read(self.settings_file, encoding="utf-8")
        except (OSError, UnicodeDecodeError, configparser.Error) as e:
            logger.warning("Cannot read %s: %s", self.settings_file, e)
            return defaults

        network_defaults = defaults.network
        return GlobalSettings(
            log_level=self._level(
                parser, SECTION_DEFAULT, KEY_LOG_LEVEL, defaults.log_level
            ),
            console_log_level=self._level(
                parser,
                SECTION_DEFAULT,
                KEY_CONSOLE_LOG_LEVEL,
                defaults.console_log_level,
            ),
            max_concurrent_checks=self._positive_int(
                parser,
                SECTION_DEFAULT,
                KEY_MAX_CONCURRENT_CHECKS,
                defaults.max_concurrent_checks,
            ),
            network=NetworkSettings(
                timeout_seconds=self._positive_int(
                    parser,
                    SECTION_NETWORK,
                    KEY_TIMEOUT_SECONDS,
                    network_defaults.timeout_seconds,
                ),
                download_timeout_seconds=self._positive_int(
                    parser,
                    SECTION_NETWORK,
                    KEY_DOWNLOAD_TIMEOUT_SECONDS,
                    network_defaults.download_timeout_seconds,
                ),
                retry_attempts=self._positive_int(
                    parser,
                    SECTION_NETWORK,
                    KEY_RETRY_ATTEMPTS,
                    network_defaults.retry_attempts,
                ),
            ),
        )

    def _raw(
        self, parser: CommentAwareConfigParser, section: str, key: str
    ) -> str | None:
        if section == SECTION_DEFAULT:
            if key not in parser.defaults():
                return None
            return parser.get(SECTION_DEFAULT, key)
        if not parser.has_option(section, key):
            return None
        return parser.get(section, key)

    def _level(
        self,
        parser: CommentAwareConfigParser,
        section: str,
        key: str,
        default: str,
    ) -> str:
        raw = self._raw(parser, section, key)
        if raw is None:
            return default
        level = raw.strip().upper()
        if level not in VALID_LOG_LEVELS:
            logger.warning(
                "Invalid %s '%s' in %s, using %s",
                key,
                raw,
                self.settings_file,
                default,
            )
            return default
        return level

    def _positive_int(
        self,
        parser: CommentAwareConfigParser,
        section: str,
        key: str,
        default: int,
    ) -> int:
        raw = self._raw(parser, section, key)
        if raw is None:
            return default
        try:
            value = int(raw.strip())
        except ValueError:
            value = 0
        if value < 1:
            logger.warning(
                "Invalid %s '%s' in %s, using %d",
                key,
                raw,
                self.settings_file,
                default,
            )
            return default
        return value

    def _write_defaults(self, settings: GlobalSettings) -> None:
        """Write a commented settings file holding settings."""
        network = settings.network
        sections = {
            SECTION_DEFAULT: {
                KEY_LOG_LEVEL: settings.log_level,
                KEY_CONSOLE_LOG_LEVEL: settings.console_log_level,
                KEY_MAX_CONCURRENT_CHECKS: str(settings.max_concurrent_checks),
            },
            SECTION_NETWORK: {
                KEY_TIMEOUT_SECONDS: str(network.timeout_seconds),
                KEY_DOWNLOAD_TIMEOUT_SECONDS: str(
                    network.download_timeout_seconds
                ),
                KEY_RETRY_ATTEMPTS: str(network.retry_attempts),
            },
        }
        try:
            self.settings_file.parent.mkdir(parents=True, exist_ok=True)
            with self.settings_file.open("w", encoding="utf-8") as f:
                f.write(settings_file_header())
                for section, values in sections.items():
                    f.write(SECTION_COMMENTS[section])
                    f.write(f"[{section}]\n")
                    for key, value in values.items():
                        f.write(f"{key} = {value}\n")
        except OSError as e:
            logger.warning(
                "Cannot write default settings to %s: %s",
                self.settings_file,
                e,
            )
