"""
Plan command implementation.

Renders the cargo invocations behind a build/test target. Nothing is run.
"""

import logging

from buildmatrix.cli.utils import emit_structured, resolution_from_args
from buildmatrix.plan.cargo import CargoPlanner

logger = logging.getLogger(__name__)


def run(args) -> int:
    """
    Run the plan command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success, 1 when no target is given)

    Raises:
        UnknownTargetError: If the target does not exist for this host
    """
    planner = CargoPlanner(resolution_from_args(args))

    if args.list:
        targets = planner.available_targets()
        if args.format != "text":
            emit_structured(targets, args.format)
        else:
            for target in targets:
                print(target)
        return 0

    if not args.target:
        logger.error("No target given (use --list to see available targets)")
        return 1

    invocations = planner.plan(args.target)

    if args.format != "text":
        emit_structured([invocation.to_dict() for invocation in invocations], args.format)
        return 0

    if not invocations:
        logger.info(f"Target {args.target} has nothing to run on this host")

    for invocation in invocations:
        print(invocation.command_line())

    return 0
