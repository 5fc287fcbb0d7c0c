"""YAML configuration parser for buildmatrix.

This module provides parsing and validation for buildmatrix.yaml files.
Every section is optional; a missing file means defaults.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

import yaml

from ..core.exceptions import ConfigError
from ..core.platform import DEFAULT_PROBE_TIMEOUT
from ..toolchain.availability import DEFAULT_SUPPORTED_MAJOR
from ..toolchain.system_detector import default_llvm_binaries

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_NAME = "buildmatrix.yaml"


@dataclass
class LLVMConfig:
    """LLVM toolchain detection settings."""

    supported_major: str = DEFAULT_SUPPORTED_MAJOR
    binaries: List[str] = field(default_factory=list)  # empty: derived from major

    def lookup_binaries(self) -> List[str]:
        """llvm-config names to try, in order."""
        return list(self.binaries) or default_llvm_binaries(self.supported_major)


@dataclass
class HostOverrides:
    """Raw names replacing probed host facts (e.g. when resolving for CI)."""

    os: Optional[str] = None  # 'Darwin', 'Linux', 'Windows_NT'
    arch: Optional[str] = None  # 'x86_64', 'aarch64', 'arm64'
    llvm_version: Optional[str] = None


@dataclass
class BuildMatrixConfig:
    """Complete buildmatrix configuration."""

    version: int = 1
    probe_timeout: float = DEFAULT_PROBE_TIMEOUT
    llvm: LLVMConfig = field(default_factory=LLVMConfig)
    host: HostOverrides = field(default_factory=HostOverrides)


def parse_config(config_path: Path) -> BuildMatrixConfig:
    """
    Parse buildmatrix.yaml configuration file.

    Args:
        config_path: Path to buildmatrix.yaml

    Returns:
        Parsed and validated configuration

    Raises:
        ConfigError: If configuration is missing or invalid
    """
    if not config_path.exists():
        raise ConfigError(f"Configuration file not found: {config_path}")

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML syntax: {e}")

    if data is None:
        logger.debug(f"Configuration file is empty: {config_path}")
        return BuildMatrixConfig()

    if not isinstance(data, dict):
        raise ConfigError("Configuration root must be a mapping")

    return _parse_and_validate(data)


def load_config(
    config_path: Optional[Path] = None, project_root: Optional[Path] = None
) -> BuildMatrixConfig:
    """
    Load configuration, falling back to defaults.

    An explicit path must exist; otherwise ``buildmatrix.yaml`` in the
    project root is used when present.

    Args:
        config_path: Explicit configuration file
        project_root: Directory searched for the default file

    Returns:
        Parsed configuration (defaults when nothing is found)
    """
    if config_path is not None:
        return parse_config(Path(config_path))

    default_path = (project_root or Path.cwd()) / DEFAULT_CONFIG_NAME
    if default_path.exists():
        logger.debug(f"Loading configuration from {default_path}")
        return parse_config(default_path)

    logger.debug("No configuration file found, using defaults")
    return BuildMatrixConfig()


def _parse_and_validate(data: dict) -> BuildMatrixConfig:
    """Parse and validate configuration data."""
    version = data.get("version", 1)
    if version != 1:
        raise ConfigError(f"Unsupported version: {version} (expected 1)")

    probe_timeout = data.get("probe_timeout", DEFAULT_PROBE_TIMEOUT)
    if isinstance(probe_timeout, bool) or not isinstance(probe_timeout, (int, float)):
        raise ConfigError("probe_timeout must be a number")
    if probe_timeout <= 0:
        raise ConfigError("probe_timeout must be positive")

    return BuildMatrixConfig(
        version=version,
        probe_timeout=probe_timeout,
        llvm=_parse_llvm(data.get("llvm") or {}),
        host=_parse_host(data.get("host") or {}),
    )


def _parse_llvm(data) -> LLVMConfig:
    """Parse llvm section."""
    if not isinstance(data, dict):
        raise ConfigError("llvm must be a dictionary")

    supported_major = data.get("supported_major", DEFAULT_SUPPORTED_MAJOR)
    if isinstance(supported_major, bool) or not isinstance(supported_major, (str, int)):
        raise ConfigError("llvm.supported_major must be a string or integer")
    supported_major = str(supported_major).strip()
    if not supported_major:
        raise ConfigError("llvm.supported_major cannot be empty")

    binaries = data.get("binaries", [])
    if not isinstance(binaries, list) or not all(
        isinstance(b, str) and b for b in binaries
    ):
        raise ConfigError("llvm.binaries must be a list of executable names")

    return LLVMConfig(supported_major=supported_major, binaries=binaries)


def _parse_host(data) -> HostOverrides:
    """Parse host overrides section."""
    if not isinstance(data, dict):
        raise ConfigError("host must be a dictionary")

    values = {}
    for key in ("os", "arch", "llvm_version"):
        value = data.get(key)
        if value is not None and (
            isinstance(value, bool) or not isinstance(value, (str, int, float))
        ):
            raise ConfigError(f"host.{key} must be a string")
        values[key] = None if value is None else str(value)

    unknown = set(data) - set(values)
    if unknown:
        logger.warning(f"Ignoring unknown host keys: {', '.join(sorted(unknown))}")

    return HostOverrides(**values)
