"""
Resolved build configuration.

Bundles everything the resolver decides for one host into a single
immutable value that the CLI and the cargo planner read from.

Usage:
    from buildmatrix.core.platform import probe_host_facts
    from buildmatrix.resolver import resolve

    resolution = resolve(probe_host_facts())
    print(resolution.features_argument)
    print(" ".join(resolution.test_targets))
"""

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from ..core.platform import HostFacts, OSFamily
from ..toolchain.availability import DEFAULT_SUPPORTED_MAJOR
from .backends import select_backends
from .engines import EngineMatrixEntry, build_matrix
from .features import (
    capi_default_features,
    features_argument,
    resolve_capi_feature,
    serialize,
)

logger = logging.getLogger(__name__)

BOLD = "\033[1m"
GREEN = "\033[32m"
RESET = "\033[0m"


@dataclass(frozen=True)
class Resolution:
    """
    Build/test configuration resolved for one host.

    Attributes:
        facts: Host facts the resolution was computed from
        backends: Compiler backends to build, in enablement order
        matrix: (backend, engine) pairs to test
        capi_feature: Extra C API feature token, or None
    """

    facts: HostFacts
    backends: Tuple[str, ...]
    matrix: Tuple[EngineMatrixEntry, ...]
    capi_feature: Optional[str] = None

    @property
    def compiler_features(self) -> str:
        """Space-joined backend names."""
        return serialize(self.backends)

    @property
    def features_argument(self) -> str:
        """``--features "<backends>"`` argument for cargo."""
        return features_argument(self.backends)

    @property
    def capi_default_features(self) -> List[str]:
        """Extra cargo arguments for every C API build."""
        return capi_default_features(self.facts)

    @property
    def test_targets(self) -> Tuple[str, ...]:
        """Test target names, one per matrix entry."""
        return tuple(entry.target_name for entry in self.matrix)

    def targets_for_backend(self, backend: str) -> Tuple[str, ...]:
        """
        Test targets of a single backend.

        Args:
            backend: Backend name

        Returns:
            Target names whose backend matches, in matrix order
        """
        return tuple(
            entry.target_name for entry in self.matrix if entry.backend == backend
        )

    def summary_lines(self, color: bool = False) -> List[str]:
        """
        Human readable summary of the resolution.

        Args:
            color: Highlight values in bold green (ignored on Windows hosts)

        Returns:
            Three lines: compilers, feature argument, test targets
        """
        if color and self.facts.os is not OSFamily.WINDOWS:
            start, end = f"{BOLD}{GREEN}", RESET
        else:
            start, end = "", ""

        return [
            f"Available compilers: {start}{self.compiler_features}{end}",
            f"Compilers features: {start}{self.features_argument}{end}",
            "Available compilers + engines for test: "
            f"{start}{' '.join(self.test_targets)}{end}",
        ]

    def to_dict(self) -> Dict[str, object]:
        """Convert to a plain dictionary for JSON/YAML output."""
        return {
            "host": self.facts.to_dict(),
            "compilers": list(self.backends),
            "compiler_features": self.compiler_features,
            "features_argument": self.features_argument,
            "test_compilers_engines": list(self.test_targets),
            "capi_default_features": self.capi_default_features,
        }


def resolve(
    facts: HostFacts, supported_major: str = DEFAULT_SUPPORTED_MAJOR
) -> Resolution:
    """
    Resolve the build/test configuration for a host.

    Args:
        facts: Host facts (see probe_host_facts)
        supported_major: LLVM major version the llvm backend builds against

    Returns:
        Resolution for the host
    """
    backends = select_backends(facts, supported_major)
    matrix = build_matrix(facts, backends)
    resolution = Resolution(
        facts=facts,
        backends=backends,
        matrix=matrix,
        capi_feature=resolve_capi_feature(facts),
    )
    logger.debug(
        f"Resolved {facts}: compilers={resolution.compiler_features!r} "
        f"tests={' '.join(resolution.test_targets)!r}"
    )
    return resolution
