"""Console formatting for release-registry.

INFO records are progress narration and print as the bare message; every
other level carries time, logger name and a coloured level name.
"""

import logging

from release_registry.constants import (
    LOG_COLORS,
    LOG_CONSOLE_DATE_FORMAT,
    LOG_CONSOLE_FORMAT,
)


class ConsoleFormatter(logging.Formatter):
    """Bare INFO messages, structured output for other levels."""

    def __init__(
        self,
        fmt: str = LOG_CONSOLE_FORMAT,
        datefmt: str | None = LOG_CONSOLE_DATE_FORMAT,
        *,
        color: bool = True,
    ) -> None:
        """Initialize the formatter.

        Args:
            fmt: Format for records other than INFO
            datefmt: Timestamp format
            color: Wrap the level name in ANSI colour codes

        """
        super().__init__(fmt, datefmt)
        # One formatter per level with the colour in its format string;
        # records stay untouched
        self._colored: dict[str, logging.Formatter] = {}
        if color:
            reset = LOG_COLORS["RESET"]
            for level_name, code in LOG_COLORS.items():
                if level_name == "RESET":
                    continue
                colored_fmt = fmt.replace(
                    "%(levelname)s", f"{code}%(levelname)s{reset}"
                )
                self._colored[level_name] = logging.Formatter(
                    colored_fmt, datefmt
                )

    def format(self, record: logging.LogRecord) -> str:
        if record.levelno == logging.INFO:
            return record.getMessage()
        formatter = self._colored.get(record.levelname)
        if formatter is None:
            return super().format(record)
        return formatter.format(record)
