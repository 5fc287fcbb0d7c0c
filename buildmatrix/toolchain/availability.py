"""
LLVM toolchain availability.

Decides whether the llvm backend can be built from the raw version string
reported by llvm-config. The check is a substring match on the supported
major version, the same heuristic the build scripts have always used: the
llvm-config output format is not stable enough to parse strictly.
"""

import logging
from typing import Optional

logger = logging.getLogger(__name__)

DEFAULT_SUPPORTED_MAJOR = "10"


def is_available(
    version: Optional[str], supported_major: str = DEFAULT_SUPPORTED_MAJOR
) -> bool:
    """
    Check whether an LLVM version string names the supported major version.

    Total: never raises, any unusable input yields False.

    Args:
        version: Raw llvm-config output, or None when LLVM is absent
        supported_major: Major version marker to look for

    Returns:
        True if the marker occurs in the version string

    Example:
        >>> is_available("LLVM version 10.0.0")
        True
        >>> is_available("11.1.0")
        False
    """
    if not isinstance(version, str) or not version:
        return False
    if not supported_major:
        return False

    if supported_major in version:
        return True

    logger.debug(
        f"Unsupported LLVM version {version!r} (need major {supported_major}), "
        "llvm backend disabled"
    )
    return False
