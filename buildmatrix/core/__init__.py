"""
Core functionality for buildmatrix.

This package contains the host model and exception hierarchy the resolver
depends on.
"""

from .platform import (
    OSFamily,
    ArchKind,
    HostFacts,
    is_windows_host,
    run_probe,
    probe_host_facts,
)

from .exceptions import (
    BuildMatrixError,
    ProbeUnavailableError,
    ConfigError,
    PlanError,
    UnknownTargetError,
)

__all__ = [
    "OSFamily",
    "ArchKind",
    "HostFacts",
    "is_windows_host",
    "run_probe",
    "probe_host_facts",
    "BuildMatrixError",
    "ProbeUnavailableError",
    "ConfigError",
    "PlanError",
    "UnknownTargetError",
]
