"""
C API features command implementation.

Prints the extra feature arguments every C API build needs on this host.
Prints nothing when there are none.
"""

from buildmatrix.cli.utils import resolution_from_args


def run(args) -> int:
    """
    Run the capi-features command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success)
    """
    resolution = resolution_from_args(args)

    if resolution.capi_default_features:
        print(" ".join(resolution.capi_default_features))

    return 0
