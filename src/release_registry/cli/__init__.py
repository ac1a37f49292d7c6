"""Command-line interface."""

from release_registry.cli.parser import CLIParser
from release_registry.cli.runner import CLIRunner

__all__ = ["CLIParser", "CLIRunner"]
