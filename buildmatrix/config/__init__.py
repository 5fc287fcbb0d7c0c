"""
Configuration for buildmatrix.

Parses the optional buildmatrix.yaml file.
"""

from ..core.exceptions import ConfigError
from .parser import (
    DEFAULT_CONFIG_NAME,
    BuildMatrixConfig,
    HostOverrides,
    LLVMConfig,
    load_config,
    parse_config,
)

__all__ = [
    "ConfigError",
    "DEFAULT_CONFIG_NAME",
    "BuildMatrixConfig",
    "HostOverrides",
    "LLVMConfig",
    "load_config",
    "parse_config",
]
