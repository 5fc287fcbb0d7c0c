"""
Shared utilities for CLI commands.

Provides common functionality used across multiple CLI commands to
eliminate duplication and ensure consistent behavior.
"""

import json
import logging
import sys
from pathlib import Path
from typing import Any, Optional

import yaml

from buildmatrix.config.parser import BuildMatrixConfig, load_config
from buildmatrix.core.platform import HostFacts, probe_host_facts
from buildmatrix.resolver.resolution import Resolution, resolve

logger = logging.getLogger(__name__)


# ============================================================================
# Configuration and Host Facts
# ============================================================================


def load_cli_config(args) -> BuildMatrixConfig:
    """
    Load configuration referenced by the global --config/--project-root flags.

    Args:
        args: Parsed arguments

    Returns:
        Configuration (defaults when no file is found)

    Raises:
        ConfigError: If the configuration file is invalid
    """
    config_file: Optional[Path] = getattr(args, "config", None)
    project_root: Optional[Path] = getattr(args, "project_root", None)
    return load_config(config_file, project_root)


def host_facts_from_args(args, config: Optional[BuildMatrixConfig] = None) -> HostFacts:
    """
    Probe the host and apply configuration and command-line overrides.

    Command-line flags win over the configuration file, which wins over
    probing.

    Args:
        args: Parsed arguments (may carry os/arch/llvm_version)
        config: Loaded configuration

    Returns:
        Host facts to resolve for
    """
    if config is None:
        config = load_cli_config(args)

    facts = probe_host_facts(
        timeout=config.probe_timeout,
        llvm_binaries=config.llvm.lookup_binaries(),
    )

    facts = facts.with_overrides(
        os_name=config.host.os,
        arch_name=config.host.arch,
        toolchain_version=config.host.llvm_version,
    )
    facts = facts.with_overrides(
        os_name=getattr(args, "os", None),
        arch_name=getattr(args, "arch", None),
        toolchain_version=getattr(args, "llvm_version", None),
    )

    logger.debug(f"Host facts: {facts}")
    return facts


def resolution_from_args(args) -> Resolution:
    """Load configuration, probe the host and resolve in one step."""
    config = load_cli_config(args)
    facts = host_facts_from_args(args, config)
    return resolve(facts, config.llvm.supported_major)


# ============================================================================
# Output
# ============================================================================


def emit_structured(data: Any, output_format: str, file=None) -> None:
    """
    Print data as JSON or YAML.

    Args:
        data: Plain data (dicts, lists, strings)
        output_format: 'json' or 'yaml'
        file: Output file (default: stdout)
    """
    if output_format == "json":
        print(json.dumps(data, indent=2), file=file)
    elif output_format == "yaml":
        print(
            yaml.safe_dump(data, default_flow_style=False, sort_keys=False).rstrip(),
            file=file,
        )
    else:
        raise ValueError(f"Unsupported output format: {output_format}")


def use_color(args) -> bool:
    """Whether terminal colors should be used for text output."""
    if getattr(args, "no_color", False):
        return False
    return sys.stdout.isatty()
