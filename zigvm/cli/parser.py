"""
zigvm CLI argument parser.

This module implements the command-line interface for zigvm using argparse.
"""

import argparse
import importlib
import logging
import sys
from typing import List, Optional

from zigvm import __version__
from zigvm.core.exceptions import UserError

logger = logging.getLogger(__name__)

# Canonical command name -> accepted aliases
COMMAND_ALIASES = {
    "install": ["i"],
    "uninstall": ["remove", "rm"],
    "use": ["activate"],
    "deactivate": ["unuse"],
    "current": [],
    "alias": [],
    "list": ["ls"],
    "list-remote": ["ls-remote"],
    "init": [],
}


class CLI:
    """zigvm command-line interface."""

    def __init__(self):
        self.parser = self._create_parser()

    def _create_parser(self) -> argparse.ArgumentParser:
        """
        Create argument parser with all subcommands.

        Returns:
            Configured ArgumentParser instance
        """
        parser = argparse.ArgumentParser(
            prog="zvm",
            description="Zig Version Manager - install and switch between Zig versions",
            epilog='Use "zvm COMMAND --help" for command-specific help',
            formatter_class=argparse.RawDescriptionHelpFormatter,
        )

        parser.add_argument(
            "--version", action="version", version=f"zigvm {__version__}"
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
            "--no-mirrors",
            action="store_true",
            help="Download only from the official server",
        )

        subparsers = parser.add_subparsers(
            dest="command", help="Available commands", metavar="COMMAND"
        )

        self._add_install_command(subparsers)
        self._add_uninstall_command(subparsers)
        self._add_use_command(subparsers)
        self._add_deactivate_command(subparsers)
        self._add_current_command(subparsers)
        self._add_alias_command(subparsers)
        self._add_list_command(subparsers)
        self._add_list_remote_command(subparsers)
        self._add_init_command(subparsers)

        return parser

    def _add_install_command(self, subparsers):
        """Add 'install' subcommand."""
        parser = subparsers.add_parser(
            "install",
            aliases=COMMAND_ALIASES["install"],
            help="Install a specific version",
            description="Download and install a Zig version, optionally with an alias",
        )
        parser.add_argument(
            "version", help="Version to install (e.g., 0.13.0, master)"
        )
        parser.add_argument(
            "--alias", metavar="NAME", help="Alias to assign after installing"
        )

    def _add_uninstall_command(self, subparsers):
        """Add 'uninstall' subcommand."""
        parser = subparsers.add_parser(
            "uninstall",
            aliases=COMMAND_ALIASES["uninstall"],
            help="Remove an installed version",
            description="Remove an installed version and its aliases",
        )
        parser.add_argument("version", help="Version or alias to remove")

    def _add_use_command(self, subparsers):
        """Add 'use' subcommand."""
        parser = subparsers.add_parser(
            "use",
            aliases=COMMAND_ALIASES["use"],
            help="Set a version as active",
            description=(
                "Set a version as active. Without a version, the nearest "
                ".zig-version file is used."
            ),
        )
        parser.add_argument("version", nargs="?", help="Version or alias to activate")

    def _add_deactivate_command(self, subparsers):
        """Add 'deactivate' subcommand."""
        subparsers.add_parser(
            "deactivate",
            aliases=COMMAND_ALIASES["deactivate"],
            help="Deactivate the current version",
        )

    def _add_current_command(self, subparsers):
        """Add 'current' subcommand."""
        subparsers.add_parser("current", help="Display the currently active version")

    def _add_alias_command(self, subparsers):
        """Add 'alias' subcommand."""
        parser = subparsers.add_parser(
            "alias",
            help="Create or remove an alias",
            description="zvm alias <name> <version> OR zvm alias --unset <name>",
        )
        parser.add_argument("name", nargs="?", help="Alias name")
        parser.add_argument("version", nargs="?", help="Version or alias to point to")
        parser.add_argument("--unset", metavar="NAME", help="Remove an alias")

    def _add_list_command(self, subparsers):
        """Add 'list' subcommand."""
        subparsers.add_parser(
            "list",
            aliases=COMMAND_ALIASES["list"],
            help="List installed versions",
        )

    def _add_list_remote_command(self, subparsers):
        """Add 'list-remote' subcommand."""
        subparsers.add_parser(
            "list-remote",
            aliases=COMMAND_ALIASES["list-remote"],
            help="List versions available for download",
        )

    def _add_init_command(self, subparsers):
        """Add 'init' subcommand."""
        subparsers.add_parser(
            "init", help="Display setup instructions for your shell"
        )

    def parse_args(self, args: Optional[List[str]] = None):
        """
        Parse command-line arguments.

        Args:
            args: Arguments to parse (uses sys.argv if None)

        Returns:
            Parsed arguments namespace
        """
        parsed = self.parser.parse_args(args)
        parsed.command = canonical_command(parsed.command)
        return parsed

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
        except UserError as e:
            logger.error(str(e))
            return 1
        except Exception as e:
            logger.error(f"An error occurred: {e}")
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
        module_name = "zigvm.cli.commands." + args.command.replace("-", "_")
        module = importlib.import_module(module_name)
        return module.run(args)


def canonical_command(command: Optional[str]) -> Optional[str]:
    """Map a command alias (``i``, ``rm``, ...) to its canonical name."""
    if command is None:
        return None
    for name, aliases in COMMAND_ALIASES.items():
        if command == name or command in aliases:
            return name
    return command


def main():
    """Main entry point for CLI."""
    cli = CLI()
    sys.exit(cli.run())


if __name__ == "__main__":
    main()
