"""
buildmatrix - platform-aware compiler backend and engine matrix resolver.

Decides which compiler backends to build and which backend/engine
combinations to test on the current host.
"""

from .core.platform import ArchKind, HostFacts, OSFamily, probe_host_facts
from .resolver import Resolution, resolve

__all__ = [
    "ArchKind",
    "HostFacts",
    "OSFamily",
    "probe_host_facts",
    "Resolution",
    "resolve",
]
