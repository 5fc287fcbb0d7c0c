"""
Host detection for buildmatrix.

This module captures the facts the resolver decides on: operating system
family, CPU architecture and the version of the optional LLVM toolchain.

Features:
- Authoritative Windows short-circuit (``OS=Windows_NT``), no commands run
- Architecture and kernel name detection through ``uname``
- LLVM version probing through ``llvm-config`` (see toolchain.system_detector)
- Missing commands resolve to absent values, never to errors

Usage:
    from buildmatrix.core.platform import probe_host_facts

    facts = probe_host_facts()
    print(f"OS: {facts.os.value}")
    print(f"Architecture: {facts.arch.value}")
"""

import logging
import os
import subprocess
from dataclasses import dataclass, replace
from enum import Enum
from typing import List, Mapping, Optional

from .exceptions import ProbeUnavailableError

logger = logging.getLogger(__name__)

# Value of the OS environment variable on every Windows host
WINDOWS_NT = "Windows_NT"

DEFAULT_PROBE_TIMEOUT = 5


class OSFamily(Enum):
    """Operating system families the resolver distinguishes."""

    WINDOWS = "windows"
    DARWIN = "darwin"
    OTHER_UNIX = "unix"

    @classmethod
    def from_name(cls, name: Optional[str]) -> "OSFamily":
        """
        Map a kernel name (``uname -s`` output) onto an OS family.

        Args:
            name: Raw kernel name, e.g. 'Darwin', 'Linux', 'Windows_NT'

        Returns:
            Matching OSFamily; unknown or absent names are OTHER_UNIX
        """
        normalized = (name or "").strip().lower()
        if normalized in ("windows", "windows_nt"):
            return cls.WINDOWS
        if normalized == "darwin":
            return cls.DARWIN
        return cls.OTHER_UNIX


class ArchKind(Enum):
    """CPU architecture families the resolver distinguishes."""

    X86_64 = "x86_64"
    AARCH64 = "aarch64"
    OTHER = "other"

    @classmethod
    def from_name(cls, name: Optional[str]) -> "ArchKind":
        """
        Map a machine name (``uname -m`` output) onto an architecture.

        Args:
            name: Raw machine name, e.g. 'x86_64', 'arm64', 'riscv64'

        Returns:
            Matching ArchKind; unknown or absent names are OTHER
        """
        normalized = (name or "").strip().lower()
        if normalized in ("x86_64", "amd64"):
            return cls.X86_64
        if normalized in ("aarch64", "arm64"):
            return cls.AARCH64
        return cls.OTHER


@dataclass(frozen=True)
class HostFacts:
    """
    Immutable facts about the host, captured once per resolution.

    Attributes:
        os: Operating system family
        arch: CPU architecture family
        toolchain_version: Raw LLVM version string, or None when absent
        kernel_name: Raw kernel name as probed ('' on Windows)
        machine: Raw machine name as probed
    """

    os: OSFamily
    arch: ArchKind
    toolchain_version: Optional[str] = None
    kernel_name: str = ""
    machine: str = ""

    @classmethod
    def from_names(
        cls,
        os_name: Optional[str],
        arch_name: Optional[str],
        toolchain_version: Optional[str] = None,
    ) -> "HostFacts":
        """
        Build facts from raw names without probing anything.

        Example:
            >>> facts = HostFacts.from_names("Darwin", "arm64")
            >>> facts.arch
            <ArchKind.AARCH64: 'aarch64'>
        """
        os_family = OSFamily.from_name(os_name)
        return cls(
            os=os_family,
            arch=ArchKind.from_name(arch_name),
            toolchain_version=toolchain_version or None,
            kernel_name="" if os_family is OSFamily.WINDOWS else (os_name or ""),
            machine=arch_name or "",
        )

    def with_overrides(
        self,
        os_name: Optional[str] = None,
        arch_name: Optional[str] = None,
        toolchain_version: Optional[str] = None,
    ) -> "HostFacts":
        """
        Return a copy with the given raw names replacing probed values.

        A Windows OS override without an architecture also sets x86_64,
        the architecture a Windows probe always reports.
        """
        facts = self
        if os_name is not None:
            os_family = OSFamily.from_name(os_name)
            facts = replace(
                facts,
                os=os_family,
                kernel_name="" if os_family is OSFamily.WINDOWS else os_name,
            )
            if os_family is OSFamily.WINDOWS and arch_name is None:
                facts = replace(
                    facts, arch=ArchKind.X86_64, machine=ArchKind.X86_64.value
                )
        if arch_name is not None:
            facts = replace(
                facts, arch=ArchKind.from_name(arch_name), machine=arch_name
            )
        if toolchain_version is not None:
            facts = replace(facts, toolchain_version=toolchain_version or None)
        return facts

    def to_dict(self) -> dict:
        """Convert to a plain dictionary for structured output."""
        return {
            "os": self.os.value,
            "arch": self.arch.value,
            "toolchain_version": self.toolchain_version,
            "kernel_name": self.kernel_name,
            "machine": self.machine,
        }

    def __str__(self) -> str:
        """String representation of host facts."""
        parts = [f"{self.os.value}-{self.arch.value}"]
        if self.toolchain_version:
            parts.append(f"[llvm {self.toolchain_version}]")
        return " ".join(parts)


def is_windows_host(environ: Optional[Mapping[str, str]] = None) -> bool:
    """
    Check the explicit Windows signal.

    Args:
        environ: Environment mapping (defaults to os.environ)

    Returns:
        True if the OS environment variable is 'Windows_NT'
    """
    if environ is None:
        environ = os.environ
    return environ.get("OS") == WINDOWS_NT


def run_probe(argv: List[str], timeout: float = DEFAULT_PROBE_TIMEOUT) -> str:
    """
    Run an external discovery command and return its stripped stdout.

    Args:
        argv: Command and arguments
        timeout: Seconds to wait before giving up

    Returns:
        Command output with surrounding whitespace removed

    Raises:
        ProbeUnavailableError: If the command is missing, times out or fails
    """
    command = " ".join(argv)
    try:
        result = subprocess.run(
            argv,
            capture_output=True,
            text=True,
            timeout=timeout,
            check=False,
        )
    except FileNotFoundError:
        raise ProbeUnavailableError(command, "command not found")
    except subprocess.TimeoutExpired:
        raise ProbeUnavailableError(command, f"timed out after {timeout}s")
    except OSError as e:
        raise ProbeUnavailableError(command, str(e))

    if result.returncode != 0:
        raise ProbeUnavailableError(command, f"exit status {result.returncode}")

    return result.stdout.strip()


def _probe_optional(argv: List[str], timeout: float) -> Optional[str]:
    """Run a probe, mapping unavailability to None."""
    try:
        output = run_probe(argv, timeout=timeout)
    except ProbeUnavailableError as e:
        logger.debug(str(e))
        return None
    return output or None


def _detect_machine(timeout: float = DEFAULT_PROBE_TIMEOUT) -> Optional[str]:
    """Detect the raw machine name via ``uname -m``."""
    return _probe_optional(["uname", "-m"], timeout)


def _detect_kernel_name(timeout: float = DEFAULT_PROBE_TIMEOUT) -> Optional[str]:
    """Detect the raw kernel name via ``uname -s``."""
    return _probe_optional(["uname", "-s"], timeout)


def probe_host_facts(
    environ: Optional[Mapping[str, str]] = None,
    timeout: float = DEFAULT_PROBE_TIMEOUT,
    llvm_binaries: Optional[List[str]] = None,
) -> HostFacts:
    """
    Probe the current host.

    On Windows no command is run: architecture is assumed to be x86_64 and
    the kernel name is empty. Elsewhere ``uname -m``, ``uname -s`` and the
    LLVM version query run one after the other.

    Args:
        environ: Environment mapping (defaults to os.environ)
        timeout: Per-probe timeout in seconds
        llvm_binaries: llvm-config names to try, in order

    Returns:
        HostFacts for this host

    Example:
        >>> facts = probe_host_facts()
        >>> print(f"Running on {facts}")
        Running on unix-x86_64
    """
    if is_windows_host(environ):
        logger.debug("Windows host detected, skipping uname and llvm-config")
        return HostFacts(
            os=OSFamily.WINDOWS,
            arch=ArchKind.X86_64,
            toolchain_version=None,
            kernel_name="",
            machine=ArchKind.X86_64.value,
        )

    from buildmatrix.toolchain.system_detector import LLVMDetector

    machine = _detect_machine(timeout)
    kernel_name = _detect_kernel_name(timeout)
    toolchain_version = LLVMDetector(binaries=llvm_binaries, timeout=timeout).detect()

    facts = HostFacts(
        os=OSFamily.from_name(kernel_name),
        arch=ArchKind.from_name(machine),
        toolchain_version=toolchain_version,
        kernel_name=kernel_name or "",
        machine=machine or "",
    )
    logger.debug(f"Probed host facts: {facts}")
    return facts


__all__ = [
    "OSFamily",
    "ArchKind",
    "HostFacts",
    "is_windows_host",
    "run_probe",
    "probe_host_facts",
]
