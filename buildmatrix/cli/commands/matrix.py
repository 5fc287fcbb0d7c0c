"""
Matrix command implementation.

Lists the compiler+engine combinations to test, one target per line.
"""

import logging

from buildmatrix.cli.utils import emit_structured, resolution_from_args

logger = logging.getLogger(__name__)


def run(args) -> int:
    """
    Run the matrix command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success)
    """
    resolution = resolution_from_args(args)

    if args.backend:
        if args.backend not in resolution.backends:
            logger.warning(f"Compiler backend {args.backend} is not enabled on this host")
        targets = resolution.targets_for_backend(args.backend)
    else:
        targets = resolution.test_targets

    if args.format != "text":
        emit_structured(
            [
                {"backend": entry.backend, "engine": entry.engine, "target": entry.target_name}
                for entry in resolution.matrix
                if entry.target_name in targets
            ],
            args.format,
        )
        return 0

    for target in targets:
        print(target)

    return 0
