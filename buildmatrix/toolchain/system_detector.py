"""
buildmatrix/toolchain/system_detector.py

System LLVM detection - asks llvm-config for the installed LLVM version.
"""

import logging
from typing import List, Optional

from ..core.exceptions import ProbeUnavailableError
from ..core.platform import DEFAULT_PROBE_TIMEOUT, run_probe
from .availability import DEFAULT_SUPPORTED_MAJOR

logger = logging.getLogger(__name__)


def default_llvm_binaries(supported_major: str = DEFAULT_SUPPORTED_MAJOR) -> List[str]:
    """
    Get the llvm-config names to try, generic name first.

    Distributions that ship several LLVM releases side by side install
    versioned binaries such as ``llvm-config-10``.

    Args:
        supported_major: Supported LLVM major version

    Returns:
        Binary names in lookup order
    """
    return ["llvm-config", f"llvm-config-{supported_major}"]


class LLVMDetector:
    """
    Find the LLVM version through llvm-config.

    Each candidate binary is asked for ``--version``; the first one that
    runs wins, even when the version it reports is not supported.
    """

    def __init__(
        self,
        binaries: Optional[List[str]] = None,
        timeout: float = DEFAULT_PROBE_TIMEOUT,
    ):
        """
        Initialize detector.

        Args:
            binaries: llvm-config names to try, in order
            timeout: Per-probe timeout in seconds
        """
        self.binaries = list(binaries) if binaries else default_llvm_binaries()
        self.timeout = timeout

    def detect(self) -> Optional[str]:
        """
        Query the candidates in order.

        Returns:
            Raw version string from the first binary that runs, or None
        """
        for binary in self.binaries:
            try:
                version = run_probe([binary, "--version"], timeout=self.timeout)
            except ProbeUnavailableError as e:
                logger.debug(str(e))
                continue

            logger.debug(f"{binary} reports LLVM version {version!r}")
            return version or None

        logger.debug(f"No llvm-config found (tried {', '.join(self.binaries)})")
        return None


def detect_llvm_version(
    binaries: Optional[List[str]] = None, timeout: float = DEFAULT_PROBE_TIMEOUT
) -> Optional[str]:
    """Convenience wrapper around LLVMDetector.detect()."""
    return LLVMDetector(binaries=binaries, timeout=timeout).detect()
