"""
SleekKit CLI argument parser.

This module implements the command-line interface for SleekKit using argparse.
"""

import argparse
import importlib
import logging
import sys
from pathlib import Path
from typing import List, Optional

from sleekkit import __version__
from sleekkit.core.exceptions import SleekKitError

logger = logging.getLogger(__name__)

COMMAND_MODULES = {
    "which": "sleekkit.cli.commands.which",
    "install": "sleekkit.cli.commands.install",
    "update": "sleekkit.cli.commands.update",
    "format": "sleekkit.cli.commands.format",
    "check": "sleekkit.cli.commands.check",
}


class CLI:
    """SleekKit command-line interface."""

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
            prog="sleekkit",
            description="SleekKit - manage the sleek SQL formatter executable",
            epilog='Use "sleekkit COMMAND --help" for command-specific help',
            formatter_class=argparse.RawDescriptionHelpFormatter,
        )

        # Global options
        parser.add_argument(
            "--version", action="version", version=f"SleekKit {__version__}"
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
            help="Path to configuration file (default: ./sleek.yaml)",
        )
        parser.add_argument(
            "--executable",
            metavar="PATH",
            help="Configured sleek executable (overrides config)",
        )

        subparsers = parser.add_subparsers(
            dest="command", help="Available commands", metavar="COMMAND"
        )

        self._add_which_command(subparsers)
        self._add_install_command(subparsers)
        self._add_update_command(subparsers)
        self._add_format_command(subparsers)
        self._add_check_command(subparsers)

        return parser

    def _add_which_command(self, subparsers):
        """Add 'which' subcommand."""
        subparsers.add_parser(
            "which",
            help="Show which sleek executable would run",
            description="Probe configured and downloaded executables and select one",
        )

    def _add_install_command(self, subparsers):
        """Add 'install' subcommand."""
        parser = subparsers.add_parser(
            "install",
            help="Download the latest sleek release",
            description="Download, verify and activate the newest sleek release",
        )
        parser.add_argument(
            "--force",
            action="store_true",
            help="Reinstall even if the managed executable is up to date",
        )
        parser.add_argument(
            "--timeout",
            type=float,
            metavar="SECONDS",
            help="Abort the download after this many seconds",
        )

    def _add_update_command(self, subparsers):
        """Add 'update' subcommand."""
        parser = subparsers.add_parser(
            "update",
            help="Check for and install sleek updates",
            description="Compare the installed sleek with the release feed",
        )
        parser.add_argument(
            "--check",
            action="store_true",
            help="Only report whether an update is available",
        )
        parser.add_argument(
            "--if-due",
            action="store_true",
            help="Skip unless the configured check interval has elapsed",
        )
        parser.add_argument(
            "--yes",
            "-y",
            action="store_true",
            help="Install without prompting",
        )

    def _add_format_command(self, subparsers):
        """Add 'format' subcommand."""
        parser = subparsers.add_parser(
            "format",
            help="Format SQL with sleek",
            description="Format SQL from files or standard input",
        )
        parser.add_argument(
            "files",
            nargs="*",
            type=Path,
            metavar="FILE",
            help="Files to format in place (default: stdin to stdout)",
        )

    def _add_check_command(self, subparsers):
        """Add 'check' subcommand."""
        parser = subparsers.add_parser(
            "check",
            help="Check whether SQL is formatted",
            description="Exit 0 if all input is formatted, 1 otherwise",
        )
        parser.add_argument(
            "files",
            nargs="*",
            type=Path,
            metavar="FILE",
            help="Files to check (default: stdin)",
        )

    def parse_args(self, args: Optional[List[str]] = None):
        """Parse command-line arguments."""
        return self.parser.parse_args(args)

    def run(self, args: Optional[List[str]] = None) -> int:
        """
        Run CLI with given arguments.

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
            return 130
        except SleekKitError as e:
            logger.error(f"Error: {e}")
            return 1

    def _configure_logging(self, args):
        """Configure logging based on verbose/quiet flags."""
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
            force=True,
        )

    def _dispatch_command(self, args) -> int:
        """Dispatch to the command module's run() function."""
        module_name = COMMAND_MODULES.get(args.command)
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
