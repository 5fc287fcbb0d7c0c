"""
Probe command implementation.

Shows the host facts the resolver works from.
"""

from buildmatrix.cli.utils import emit_structured, host_facts_from_args, load_cli_config
from buildmatrix.toolchain.availability import is_available


def run(args) -> int:
    """
    Run the probe command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success)
    """
    config = load_cli_config(args)
    facts = host_facts_from_args(args, config)
    llvm_usable = is_available(facts.toolchain_version, config.llvm.supported_major)

    if args.format != "text":
        data = facts.to_dict()
        data["llvm_available"] = llvm_usable
        emit_structured(data, args.format)
        return 0

    print(f"OS family:    {facts.os.value} ({facts.kernel_name or 'n/a'})")
    print(f"Architecture: {facts.arch.value} ({facts.machine or 'n/a'})")
    if facts.toolchain_version:
        status = "supported" if llvm_usable else "unsupported"
        print(f"LLVM:         {facts.toolchain_version} ({status})")
    else:
        print("LLVM:         not found")

    return 0
