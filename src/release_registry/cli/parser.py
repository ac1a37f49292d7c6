"""CLI argument parser for release-registry."""

import argparse
from argparse import Namespace
from collections.abc import Sequence


class CLIParser:
    """Command-line argument parser for release-registry."""

    def parse_args(self, argv: Sequence[str] | None = None) -> Namespace:
        """Parse command-line arguments.

        Args:
            argv: Arguments to parse (defaults to sys.argv[1:])

        Returns:
            Namespace: Parsed arguments namespace.

        """
        parser = self._create_main_parser()
        self._add_package_options(parser)
        self._add_run_options(parser)
        return parser.parse_args(argv)

    def _create_main_parser(self) -> argparse.ArgumentParser:
        return argparse.ArgumentParser(
            prog="release-registry",
            description=(
                "Resolve one checksum-verified archive per platform for "
                "every GitHub release of a package and record them in a "
                "YAML catalog."
            ),
            formatter_class=argparse.RawDescriptionHelpFormatter,
            epilog="""
Examples:
  # Track neovim, binaries given as JSON
  %(prog)s --owner neovim --repo neovim --package-name neovim \\
      --bins '[{"name":"nvim","path":"bin/nvim"}]'

  # Use a package definition file and hash downloads when needed
  %(prog)s --config packages/ripgrep.json --allow-download-checksum

  # Re-resolve versions that are already cataloged
  %(prog)s --config packages/ripgrep.json --refresh
            """,
        )

    def _add_package_options(self, parser: argparse.ArgumentParser) -> None:
        group = parser.add_argument_group("package")
        group.add_argument(
            "--config",
            metavar="FILE",
            help="JSON package definition; flags override its values",
        )
        group.add_argument("--owner", help="GitHub repository owner")
        group.add_argument("--repo", help="GitHub repository name")
        group.add_argument(
            "--package-name",
            dest="package_name",
            help="Catalog name, also the output file name",
        )
        group.add_argument(
            "--bins",
            metavar="JSON",
            help='JSON array of binaries, e.g. \'[{"name":"rg","path":"rg"}]\'',
        )
        group.add_argument("--description", help="Catalog description")
        group.add_argument("--homepage", help="Catalog homepage URL")
        group.add_argument("--license", help="Catalog license identifier")

    def _add_run_options(self, parser: argparse.ArgumentParser) -> None:
        parser.add_argument(
            "--github-token",
            dest="github_token",
            metavar="TOKEN",
            help="GitHub token (defaults to $GITHUB_TOKEN)",
        )
        parser.add_argument(
            "--allow-download-checksum",
            dest="allow_download_checksum",
            action="store_true",
            default=None,
            help="Download artifacts to hash them when no checksum is published",
        )
        parser.add_argument(
            "--refresh",
            action="store_true",
            help="Re-resolve versions that are already in the catalog",
        )
        parser.add_argument(
            "--output-dir",
            dest="output_dir",
            metavar="DIR",
            help="Directory for catalog files (default: ./packages)",
        )
        parser.add_argument(
            "--version",
            action="store_true",
            help="Show version information",
        )
