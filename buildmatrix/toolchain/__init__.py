"""
Toolchain detection for buildmatrix.

Finds the optional LLVM toolchain and decides whether its version is usable.
"""

from .availability import DEFAULT_SUPPORTED_MAJOR, is_available
from .system_detector import LLVMDetector, default_llvm_binaries, detect_llvm_version

__all__ = [
    "DEFAULT_SUPPORTED_MAJOR",
    "is_available",
    "LLVMDetector",
    "default_llvm_binaries",
    "detect_llvm_version",
]
