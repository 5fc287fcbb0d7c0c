"""
buildmatrix CLI argument parser.

This module implements the command-line interface for buildmatrix using argparse.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from buildmatrix.core.exceptions import BuildMatrixError

# Get version from package
try:
    from importlib.metadata import version

    __version__ = version("buildmatrix")
except Exception:
    __version__ = "0.1.0"

logger = logging.getLogger(__name__)

OUTPUT_FORMATS = ["text", "json", "yaml"]


class CLI:
    """buildmatrix command-line interface."""

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
            prog="buildmatrix",
            description="buildmatrix - compiler backend and engine test matrix resolver",
            epilog='Use "buildmatrix COMMAND --help" for command-specific help',
            formatter_class=argparse.RawDescriptionHelpFormatter,
        )

        # Global options
        parser.add_argument(
            "--version", action="version", version=f"buildmatrix {__version__}"
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
            help="Path to configuration file (default: ./buildmatrix.yaml)",
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

        self._add_show_command(subparsers)
        self._add_features_command(subparsers)
        self._add_matrix_command(subparsers)
        self._add_capi_features_command(subparsers)
        self._add_plan_command(subparsers)
        self._add_probe_command(subparsers)

        return parser

    def _add_host_arguments(self, parser):
        """Add host override options shared by resolving commands."""
        group = parser.add_argument_group("host overrides")
        group.add_argument(
            "--os",
            metavar="NAME",
            help="Kernel name to resolve for instead of probing (e.g. Darwin, Linux, Windows_NT)",
        )
        group.add_argument(
            "--arch",
            metavar="NAME",
            help="Machine name to resolve for instead of probing (e.g. x86_64, arm64)",
        )
        group.add_argument(
            "--llvm-version",
            metavar="VERSION",
            help='LLVM version string to assume ("" for no LLVM)',
        )

    def _add_format_argument(self, parser):
        """Add --format option."""
        parser.add_argument(
            "--format",
            choices=OUTPUT_FORMATS,
            default="text",
            metavar="FORMAT",
            help="Output format (text|json|yaml) [default: text]",
        )

    def _add_show_command(self, subparsers):
        """Add 'show' subcommand."""
        parser = subparsers.add_parser(
            "show",
            help="Show resolved compilers and test matrix",
            description="Resolve and summarize compilers, features and test targets",
        )
        self._add_host_arguments(parser)
        self._add_format_argument(parser)
        parser.add_argument(
            "--no-color", action="store_true", help="Disable colored output"
        )

    def _add_features_command(self, subparsers):
        """Add 'features' subcommand."""
        parser = subparsers.add_parser(
            "features",
            help="Print the compiler feature flag",
            description='Print --features "<compilers>" for cargo invocations',
        )
        self._add_host_arguments(parser)
        parser.add_argument(
            "--spaced",
            action="store_true",
            help="Print only the space-joined compiler names",
        )

    def _add_matrix_command(self, subparsers):
        """Add 'matrix' subcommand."""
        parser = subparsers.add_parser(
            "matrix",
            help="List compiler+engine test targets",
            description="List the compiler+engine combinations to test",
        )
        self._add_host_arguments(parser)
        self._add_format_argument(parser)
        parser.add_argument(
            "--backend",
            metavar="NAME",
            help="Only list targets of this compiler backend",
        )

    def _add_capi_features_command(self, subparsers):
        """Add 'capi-features' subcommand."""
        parser = subparsers.add_parser(
            "capi-features",
            help="Print extra C API feature flags",
            description="Print the default extra features for C API builds (may be empty)",
        )
        self._add_host_arguments(parser)

    def _add_plan_command(self, subparsers):
        """Add 'plan' subcommand."""
        parser = subparsers.add_parser(
            "plan",
            help="Print cargo commands for a target",
            description="Render the cargo invocations of a build/test target (nothing is run)",
        )
        parser.add_argument(
            "target",
            nargs="?",
            metavar="TARGET",
            help="Target name (e.g. build-wasmer, test, test-cranelift-jit)",
        )
        parser.add_argument(
            "--list", action="store_true", help="List available targets"
        )
        self._add_host_arguments(parser)
        self._add_format_argument(parser)

    def _add_probe_command(self, subparsers):
        """Add 'probe' subcommand."""
        parser = subparsers.add_parser(
            "probe",
            help="Show detected host facts",
            description="Show the detected OS, architecture and LLVM version",
        )
        self._add_host_arguments(parser)
        self._add_format_argument(parser)

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
        except BuildMatrixError as e:
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
            "show": "buildmatrix.cli.commands.show",
            "features": "buildmatrix.cli.commands.features",
            "matrix": "buildmatrix.cli.commands.matrix",
            "capi-features": "buildmatrix.cli.commands.capi_features",
            "plan": "buildmatrix.cli.commands.plan",
            "probe": "buildmatrix.cli.commands.probe",
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

        # Call run() function in module
        if not hasattr(module, "run"):
            logger.error(f"Command module {module_name} has no run() function")
            return 1

        return module.run(args)


def main():
    """Main entry point for CLI."""
    cli = CLI()
    sys.exit(cli.run())


if __name__ == "__main__":
    main()
