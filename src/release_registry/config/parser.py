"""INI parser utilities for release-registry configuration."""

import configparser
from datetime import UTC, datetime
from typing import Any

from release_registry.constants import SECTION_DEFAULT, SECTION_NETWORK


def _strip_inline_comment(value: str) -> str:
    """Strip inline comments (anything after '  #') from a value."""
    if "  #" in value:
        return value.split("  #")[0].strip()
    return value


class CommentAwareConfigParser(configparser.ConfigParser):
    """ConfigParser that strips inline comments when reading values."""

    def __init__(self) -> None:
        """Create a parser without interpolation."""
        super().__init__(
            inline_comment_prefixes=("#", ";"), interpolation=None
        )

    def get(  # type: ignore[override]
        self,
        section: str,
        option: str,
        **kwargs: Any,  # noqa: ANN401
    ) -> str:
        """Get a configuration value with inline comments stripped."""
        value = super().get(section, option, **kwargs)
        return _strip_inline_comment(value)


def settings_file_header() -> str:
    """Return the comment block written at the top of settings.conf."""
    timestamp = datetime.now(tz=UTC).strftime("%Y-%m-%dT%H:%M:%S")
    return f"""# release-registry configuration
# Values left out fall back to their defaults.
#
# Created: {timestamp}

"""


SECTION_COMMENTS: dict[str, str] = {
    SECTION_DEFAULT: """# log_level: Detail level for the log file (DEBUG, INFO, WARNING, ERROR)
# console_log_level: Console detail level (DEBUG, INFO, WARNING, ERROR)
# max_concurrent_checks: Platforms resolved at the same time (1-16)
""",
    SECTION_NETWORK: """
# timeout_seconds: Timeout for GitHub API and checksum file requests
# download_timeout_seconds: Timeout for hashing one downloaded artifact
# retry_attempts: Attempts for GitHub API requests (1-10)
""",
}
