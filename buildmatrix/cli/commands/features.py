"""
Features command implementation.

Prints the cargo feature flag selecting the resolved compilers.
"""

from buildmatrix.cli.utils import resolution_from_args


def run(args) -> int:
    """
    Run the features command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success)
    """
    resolution = resolution_from_args(args)

    if args.spaced:
        print(resolution.compiler_features)
    else:
        print(resolution.features_argument)

    return 0
