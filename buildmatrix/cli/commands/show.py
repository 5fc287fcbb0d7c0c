"""
Show command implementation.

Prints the resolved compilers, feature flag and compiler+engine test targets.
"""

import logging

from buildmatrix.cli.utils import emit_structured, resolution_from_args, use_color

logger = logging.getLogger(__name__)


def run(args) -> int:
    """
    Run the show command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success)
    """
    resolution = resolution_from_args(args)

    if args.format != "text":
        emit_structured(resolution.to_dict(), args.format)
        return 0

    for line in resolution.summary_lines(color=use_color(args)):
        print(line)

    if resolution.capi_feature:
        print(f"C API default features: {' '.join(resolution.capi_default_features)}")

    if not resolution.matrix:
        logger.warning(
            f"No validated compiler+engine combinations for {resolution.facts.arch.value}"
        )

    return 0
