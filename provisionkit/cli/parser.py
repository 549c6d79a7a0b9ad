"""
ProvisionKit CLI argument parser.

This module implements the command-line interface for ProvisionKit using argparse.
"""

import argparse
import importlib
import logging
import sys
from pathlib import Path
from typing import List, Optional

# Get version from package
try:
    from importlib.metadata import version

    __version__ = version("provisionkit")
except Exception:
    __version__ = "0.1.0"

logger = logging.getLogger(__name__)


class CLI:
    """ProvisionKit command-line interface."""

    def __init__(self):
        """Initialize CLI with argument parser."""
        self.parser = self._create_parser()

    def _create_parser(self) -> argparse.ArgumentParser:
        """
        Create argument parser with all subcommands.

        Returns:
            Configured ArgumentParser instance
        """
        parser = argparse.ArgumentParser(
            prog="provisionkit",
            description="ProvisionKit - verified archive download and unpacking",
            epilog='Use "provisionkit COMMAND --help" for command-specific help',
            formatter_class=argparse.RawDescriptionHelpFormatter,
        )

        # Global options
        parser.add_argument(
            "--version", action="version", version=f"ProvisionKit {__version__}"
        )
        parser.add_argument(
            "--verbose", "-v", action="store_true", help="Enable verbose output"
        )
        parser.add_argument(
            "--quiet",
            "-q",
            action="store_true",
            help="Enable minimal output (errors only)",
        )
        parser.add_argument(
            "--config",
            type=Path,
            metavar="PATH",
            help="Path to configuration file (default: ./provisionkit.yaml if present)",
        )

        subparsers = parser.add_subparsers(
            dest="command", help="Available commands", metavar="COMMAND"
        )

        self._add_probe_command(subparsers)
        self._add_fetch_command(subparsers)
        self._add_install_command(subparsers)
        self._add_unpack_command(subparsers)
        self._add_package_command(subparsers)
        self._add_list_command(subparsers)

        return parser

    def _add_probe_command(self, subparsers):
        """Add 'probe' subcommand."""
        subparsers.add_parser(
            "probe",
            help="Show the engines found on this host",
            description="Probe for download, compression and shell engines",
        )

    def _add_fetch_command(self, subparsers):
        """Add 'fetch' subcommand."""
        parser = subparsers.add_parser(
            "fetch",
            help="Download a file and verify its hash",
            description="Download URL to DEST and verify it against HASH",
        )
        parser.add_argument("url", metavar="URL", help="URL to download")
        parser.add_argument(
            "hash", metavar="HASH", help="Expected hash (hex or algorithm:hex)"
        )
        parser.add_argument("dest", type=Path, metavar="DEST", help="Output file")
        parser.add_argument(
            "--force",
            action="store_true",
            help="Re-download DEST if it exists but does not match HASH",
        )

    def _add_install_command(self, subparsers):
        """Add 'install' subcommand."""
        parser = subparsers.add_parser(
            "install",
            help="Download, verify and unpack a tarball",
            description="Download a tarball, verify it against HASH and unpack it into DEST",
        )
        parser.add_argument("url", metavar="URL", help="Tarball URL")
        parser.add_argument(
            "hash", metavar="HASH", help="Expected hash (hex or algorithm:hex)"
        )
        parser.add_argument(
            "dest", type=Path, metavar="DEST", help="Directory to unpack into"
        )

    def _add_unpack_command(self, subparsers):
        """Add 'unpack' subcommand."""
        parser = subparsers.add_parser(
            "unpack",
            help="Unpack a local tarball",
            description="Unpack TARBALL into directory DEST",
        )
        parser.add_argument("tarball", type=Path, metavar="TARBALL")
        parser.add_argument("dest", type=Path, metavar="DEST")

    def _add_package_command(self, subparsers):
        """Add 'package' subcommand."""
        parser = subparsers.add_parser(
            "package",
            help="Package a directory into a tarball",
            description="Package the contents of DIR into the gzipped tarball TARBALL",
        )
        parser.add_argument("directory", type=Path, metavar="DIR")
        parser.add_argument("tarball", type=Path, metavar="TARBALL")

    def _add_list_command(self, subparsers):
        """Add 'list' subcommand."""
        parser = subparsers.add_parser(
            "list",
            help="List files inside a tarball",
            description="List the files (not directories) contained in TARBALL",
        )
        parser.add_argument("tarball", type=Path, metavar="TARBALL")

    def parse_args(self, args: Optional[List[str]] = None):
        """
        Parse command-line arguments.

        Args:
            args: Arguments to parse (uses sys.argv if None)

        Returns:
            Parsed arguments namespace
        """
        return self.parser.parse_args(args)

    def run(self, args: Optional[List[str]] = None) -> int:
        """
        Run CLI with given arguments.

        Args:
            args: Arguments to parse (uses sys.argv if None)

        Returns:
            Exit code (0 for success, non-zero for error)
        """
        parsed_args = self.parse_args(args)

        self._configure_logging(parsed_args)

        if not parsed_args.command:
            self.parser.print_help()
            return 1

        try:
            return self._dispatch_command(parsed_args)
        except KeyboardInterrupt:
            logger.info("Operation cancelled by user")
            return 130  # Standard exit code for SIGINT

    def _configure_logging(self, args):
        """
        Configure logging based on verbose/quiet flags.

        Args:
            args: Parsed arguments with verbose/quiet flags
        """
        if args.verbose:
            level = logging.DEBUG
            format_str = "%(levelname)s [%(name)s] %(message)s"
        elif args.quiet:
            level = logging.ERROR
            format_str = "%(levelname)s: %(message)s"
        else:
            level = logging.INFO
            format_str = "%(message)s"

        logging.basicConfig(
            level=level,
            format=format_str,
            force=True,  # Reconfigure if already configured
        )
        logging.captureWarnings(True)

    def _dispatch_command(self, args) -> int:
        """
        Dispatch to appropriate command handler.

        Args:
            args: Parsed arguments with command field

        Returns:
            Exit code from command handler
        """
        command_map = {
            "probe": "provisionkit.cli.commands.probe",
            "fetch": "provisionkit.cli.commands.fetch",
            "install": "provisionkit.cli.commands.install",
            "unpack": "provisionkit.cli.commands.unpack",
            "package": "provisionkit.cli.commands.package",
            "list": "provisionkit.cli.commands.list_files",
        }

        module_name = command_map.get(args.command)
        if not module_name:
            logger.error(f"Unknown command: {args.command}")
            return 1

        module = importlib.import_module(module_name)
        return module.run(args)


def main():
    """Main entry point for CLI."""
    cli = CLI()
    sys.exit(cli.run())


if __name__ == "__main__":
    main()
