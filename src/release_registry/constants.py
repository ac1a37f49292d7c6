"""Centralized constants module for release-registry.

This module serves as the single source of truth for shared constants.
Constants are organized by logical categories and use typing.Final
annotations to ensure immutability.

Usage:
    from release_registry.constants import CATALOG_SCHEMA_VERSION
"""

from typing import Final

# =============================================================================
# Configuration Constants
# =============================================================================

CONFIG_FILE_NAME: Final[str] = "settings.conf"

# Default config directory name under the user's home directory
CONFIG_DIR_NAME: Final[str] = ".config"

# Application-specific subdirectory under the config directory
DEFAULT_CONFIG_SUBDIR: Final[str] = "release-registry"

# Environment overrides
ENV_CONFIG_DIR: Final[str] = "RELEASE_REGISTRY_CONFIG_DIR"
ENV_LOG_DIR: Final[str] = "RELEASE_REGISTRY_LOG_DIR"
ENV_LOG_LEVEL: Final[str] = "LOG_LEVEL"
ENV_GITHUB_TOKEN: Final[str] = "GITHUB_TOKEN"

DEFAULT_LOG_LEVEL: Final[str] = "INFO"
DEFAULT_CONSOLE_LOG_LEVEL: Final[str] = "WARNING"
DEFAULT_MAX_CONCURRENT_CHECKS: Final[int] = 4

# Config section and key names
SECTION_DEFAULT: Final[str] = "DEFAULT"
SECTION_NETWORK: Final[str] = "network"

KEY_LOG_LEVEL: Final[str] = "log_level"
KEY_CONSOLE_LOG_LEVEL: Final[str] = "console_log_level"
KEY_MAX_CONCURRENT_CHECKS: Final[str] = "max_concurrent_checks"
KEY_TIMEOUT_SECONDS: Final[str] = "timeout_seconds"
KEY_DOWNLOAD_TIMEOUT_SECONDS: Final[str] = "download_timeout_seconds"
KEY_RETRY_ATTEMPTS: Final[str] = "retry_attempts"

VALID_LOG_LEVELS: Final[tuple[str, ...]] = (
    "DEBUG",
    "INFO",
    "WARNING",
    "ERROR",
    "CRITICAL",
)

# =============================================================================
# Network Constants
# =============================================================================

DEFAULT_TIMEOUT_SECONDS: Final[int] = 30
DEFAULT_DOWNLOAD_TIMEOUT_SECONDS: Final[int] = 600
DEFAULT_RETRY_ATTEMPTS: Final[int] = 3

# Redirects followed when downloading an artifact to hash it
MAX_DOWNLOAD_REDIRECTS: Final[int] = 5

# Read size for streamed downloads
DOWNLOAD_CHUNK_SIZE: Final[int] = 64 * 1024

GITHUB_API_BASE: Final[str] = "https://api.github.com"
GITHUB_API_ACCEPT: Final[str] = "application/vnd.github.v3+json"
GITHUB_RELEASES_PER_PAGE: Final[int] = 100
USER_AGENT_PREFIX: Final[str] = "release-registry"

HTTP_NOT_FOUND: Final[int] = 404

# =============================================================================
# Catalog Constants
# =============================================================================

CATALOG_SCHEMA_VERSION: Final[int] = 1
CATALOG_FILE_SUFFIX: Final[str] = ".yaml"
DEFAULT_OUTPUT_DIR_NAME: Final[str] = "packages"

# Wire-level checksum format consumed by downstream installers
CHECKSUM_PREFIX: Final[str] = "sha256:"
SHA256_HEX_LENGTH: Final[int] = 64

# Priority assigned to archive types a platform cannot use
UNSUPPORTED_PRIORITY: Final[int] = 999

# =============================================================================
# Logging Constants
# =============================================================================

LOG_ROTATION_THRESHOLD_BYTES: Final[int] = 1024 * 1024  # 1 MB
LOG_BACKUP_COUNT: Final[int] = 3
LOG_FILE_NAME: Final[str] = "release-registry.log"

LOG_CONSOLE_FORMAT: Final[str] = (
    "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
LOG_CONSOLE_DATE_FORMAT: Final[str] = "%H:%M:%S"
LOG_FILE_FORMAT: Final[str] = (
    "%(asctime)s - %(name)s - %(levelname)s - "
    "%(funcName)s:%(lineno)d - %(message)s"
)
LOG_FILE_DATE_FORMAT: Final[str] = "%Y-%m-%d %H:%M:%S"

# ANSI color codes for console log levels
LOG_COLORS: Final[dict[str, str]] = {
    "DEBUG": "\033[36m",  # Cyan
    "INFO": "\033[32m",  # Green
    "WARNING": "\033[33m",  # Yellow
    "ERROR": "\033[31m",  # Red
    "CRITICAL": "\033[35m",  # Magenta
    "RESET": "\033[0m",
}

# =============================================================================
# Progress Display Constants
# =============================================================================

PROGRESS_BAR_WIDTH: Final[int] = 40
PROGRESS_FILLED_CHAR: Final[str] = "█"
PROGRESS_EMPTY_CHAR: Final[str] = "░"
