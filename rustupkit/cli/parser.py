"""
RustupKit CLI argument parser.

This module implements the command-line interface for RustupKit using argparse.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

# Get version from package
try:
    from importlib.metadata import version

    __version__ = version("rustupkit")
except Exception:
    __version__ = "0.1.0"

logger = logging.getLogger(__name__)


class CLI:
    """RustupKit command-line interface."""

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
            prog="rustupkit",
            description="RustupKit - Prepare a rustup toolchain for the Rust Language Server",
            epilog='Use "rustupkit COMMAND --help" for command-specific help',
            formatter_class=argparse.RawDescriptionHelpFormatter,
        )

        # Global options
        parser.add_argument(
            "--version", action="version", version=f"RustupKit {__version__}"
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
            help="Path to configuration file (default: ./rustupkit.yaml)",
        )
        parser.add_argument(
            "--project-root",
            type=Path,
            metavar="PATH",
            default=Path.cwd(),
            help="Project root directory (default: current directory)",
        )

        # Subcommands
        subparsers = parser.add_subparsers(
            dest="command", help="Available commands", metavar="COMMAND"
        )

        self._add_bootstrap_command(subparsers)
        self._add_run_command(subparsers)
        self._add_status_command(subparsers)
        self._add_update_command(subparsers)

        return parser

    def _add_bootstrap_command(self, subparsers):
        """Add 'bootstrap' subcommand."""
        parser = subparsers.add_parser(
            "bootstrap",
            help="Install the toolchain and RLS components if missing",
            description="Check the toolchain channel and RLS components, offering to install missing ones",
        )
        parser.add_argument(
            "--yes",
            "-y",
            action="store_true",
            help="Install missing prerequisites without asking",
        )

    def _add_run_command(self, subparsers):
        """Add 'run' subcommand."""
        parser = subparsers.add_parser(
            "run",
            help="Bootstrap, then start the RLS",
            description="Ensure prerequisites are installed, then run the RLS through rustup",
        )
        parser.add_argument(
            "--yes",
            "-y",
            action="store_true",
            help="Install missing prerequisites without asking",
        )
        parser.add_argument(
            "--env",
            action="append",
            type=lambda kv: kv.split("=", 1),
            metavar="KEY=VALUE",
            help="Environment variables for the server (can be used multiple times)",
        )

    def _add_status_command(self, subparsers):
        """Add 'status' subcommand."""
        subparsers.add_parser(
            "status",
            help="Show whether prerequisites are installed",
            description="Report toolchain and component status without installing anything",
        )

    def _add_update_command(self, subparsers):
        """Add 'update' subcommand."""
        subparsers.add_parser(
            "update",
            help="Update installed toolchains",
            description="Run 'rustup update' and report whether anything changed",
        )

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

        # Configure logging
        self._configure_logging(parsed_args)

        # Check if command specified
        if not parsed_args.command:
            self.parser.print_help()
            return 1

        # Dispatch to command handler
        try:
            return self._dispatch_command(parsed_args)
        except KeyboardInterrupt:
            logger.info("Operation cancelled by user")
            return 130  # Standard exit code for SIGINT
        except Exception as e:
            logger.error(f"Error: {e}")
            if parsed_args.verbose:
                import traceback

                traceback.print_exc()
            return 1

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

    def _dispatch_command(self, args) -> int:
        """
        Dispatch to appropriate command handler.

        Args:
            args: Parsed arguments with command field

        Returns:
            Exit code from command handler
        """
        # Command module mapping
        command_map = {
            "bootstrap": "rustupkit.cli.commands.bootstrap",
            "run": "rustupkit.cli.commands.run",
            "status": "rustupkit.cli.commands.status",
            "update": "rustupkit.cli.commands.update",
        }

        module_name = command_map.get(args.command)
        if not module_name:
            logger.error(f"Unknown command: {args.command}")
            return 1

        try:
            # Dynamic import of command module
            import importlib

            module = importlib.import_module(module_name)
        except ImportError as e:
            logger.error(f"Failed to load command module: {e}")
            if args.verbose:
                import traceback

                traceback.print_exc()
            return 1

        return module.run(args)


def main():
    """Main entry point for CLI."""
    cli = CLI()
    sys.exit(cli.run())


if __name__ == "__main__":
    main()
