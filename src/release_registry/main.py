"""Console entry point for release-registry."""

import sys

import uvloop

from release_registry.cli import CLIRunner
from release_registry.logger import get_logger, shutdown_logging

logger = get_logger(__name__)


async def async_main() -> None:
    """Run the CLI asynchronously."""
    logger.debug("CLI started")
    runner = CLIRunner()
    await runner.run()
    logger.debug("CLI completed successfully")


def main() -> None:
    """Run the CLI application on the uvloop event loop.

    Exits with status 1 when the user cancels or an unexpected error
    escapes the runner. Queued log records are written before exit.
    """
    try:
        uvloop.run(async_main())
    except KeyboardInterrupt:
        logger.info("CLI cancelled by user")
        sys.exit(1)
    except Exception:
        logger.exception("❌ Unexpected error")
        sys.exit(1)
    finally:
        shutdown_logging()


if __name__ == "__main__":
    main()
