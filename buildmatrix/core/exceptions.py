"""
Centralized exception hierarchy for buildmatrix.

The resolver itself never fails: missing probes, unknown platforms and
unsupported toolchains all degrade to a minimal configuration. Exceptions
are reserved for the edges (probe plumbing, configuration files, planning).
"""


# ============================================================================
# Base Exceptions
# ============================================================================


class BuildMatrixError(Exception):
    """Base exception for all buildmatrix errors."""

    pass


# ============================================================================
# Probe Exceptions
# ============================================================================


class ProbeUnavailableError(BuildMatrixError):
    """
    Raised when an external discovery command is missing or fails.

    Always caught by the prober and turned into an absent value.
    """

    def __init__(self, command: str, reason: str = ""):
        self.command = command
        self.reason = reason
        msg = f"Probe unavailable: {command}"
        if reason:
            msg += f" ({reason})"
        super().__init__(msg)


# ============================================================================
# Configuration Exceptions
# ============================================================================


class ConfigError(BuildMatrixError):
    """Configuration parsing or validation error."""

    pass


# ============================================================================
# Planning Exceptions
# ============================================================================


class PlanError(BuildMatrixError):
    """Base exception for command planning errors."""

    pass


class UnknownTargetError(PlanError):
    """Raised when a build/test target does not exist for a resolution."""

    def __init__(self, target: str, available=None):
        self.target = target
        self.available = list(available or [])
        msg = f"Unknown target: {target}"
        if self.available:
            msg += f" (available: {', '.join(self.available)})"
        super().__init__(msg)
