"""Single-line progress bar for interactive runs."""

import sys
from typing import TextIO

from release_registry.constants import (
    PROGRESS_BAR_WIDTH,
    PROGRESS_EMPTY_CHAR,
    PROGRESS_FILLED_CHAR,
)
from release_registry.core.processor import ProgressCounter


def render_progress(
    counter: ProgressCounter, width: int = PROGRESS_BAR_WIDTH
) -> str:
    """Render a counter as a progress line.

    Examples:
        >>> render_progress(ProgressCounter(total=4, processed=1, added=1), width=8)
        '[██░░░░░░] 25% (1/4) | new: 1'

    """
    filled = width * counter.percent // 100
    empty = width - filled
    bar = PROGRESS_FILLED_CHAR * filled + PROGRESS_EMPTY_CHAR * empty
    return (
        f"[{bar}] {counter.percent}% "
        f"({counter.processed}/{counter.total}) | new: {counter.added}"
    )


class ProgressLine:
    """Redraw a progress bar in place on a terminal stream."""

    def __init__(self, stream: TextIO | None = None) -> None:
        """Initialize the progress line.

        Args:
            stream: Output stream (defaults to stdout); nothing is drawn
                unless it is a TTY

        """
        self.stream = stream or sys.stdout
        self.enabled = self.stream.isatty()
        self._drawn = False

    def __call__(self, counter: ProgressCounter) -> None:
        """Draw the current state of counter."""
        if not self.enabled:
            return
        self.stream.write("\r" + render_progress(counter))
        self.stream.flush()
        self._drawn = True

    def finish(self) -> None:
        """End the progress line."""
        if self._drawn:
            self.stream.write("\n")
            self.stream.flush()
            self._drawn = False
