"""
Compiler backend selection.

Decides which compiler backends get built on a host. cranelift has no
external dependencies and is always built; llvm needs a supported system
LLVM; singlepass only works on x86_64 outside Windows.
"""

import logging
from typing import Iterable, Tuple

from ..core.platform import ArchKind, HostFacts, OSFamily
from ..toolchain.availability import DEFAULT_SUPPORTED_MAJOR, is_available

logger = logging.getLogger(__name__)

CRANELIFT = "cranelift"
LLVM = "llvm"
SINGLEPASS = "singlepass"

# Enablement order; flag strings follow it
ALL_BACKENDS: Tuple[str, ...] = (CRANELIFT, LLVM, SINGLEPASS)


def normalize_backends(backends: Iterable[str]) -> Tuple[str, ...]:
    """
    Deduplicate backend names, keeping first-seen order and dropping blanks.

    Args:
        backends: Backend names, possibly repeated or empty

    Returns:
        Tuple of unique, non-empty names
    """
    seen = []
    for name in backends:
        name = (name or "").strip()
        if name and name not in seen:
            seen.append(name)
    return tuple(seen)


def select_backends(
    facts: HostFacts, supported_major: str = DEFAULT_SUPPORTED_MAJOR
) -> Tuple[str, ...]:
    """
    Compute the compiler backends to build for a host.

    Args:
        facts: Host facts
        supported_major: LLVM major version the llvm backend builds against

    Returns:
        Backend names in enablement order

    Example:
        >>> facts = HostFacts.from_names("Linux", "x86_64")
        >>> select_backends(facts)
        ('cranelift', 'singlepass')
    """
    backends = [CRANELIFT]

    if facts.os is not OSFamily.WINDOWS and is_available(
        facts.toolchain_version, supported_major
    ):
        backends.append(LLVM)

    if facts.arch is ArchKind.X86_64 and facts.os is not OSFamily.WINDOWS:
        backends.append(SINGLEPASS)

    selected = normalize_backends(backends)
    logger.debug(f"Selected backends for {facts}: {', '.join(selected)}")
    return selected
