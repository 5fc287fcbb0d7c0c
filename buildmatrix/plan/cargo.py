"""
Cargo command planning.

Renders the cargo invocations a resolution implies (builds, test runs, C API
builds) without running them. Target names follow the make targets CI
already knows: ``build-wasmer``, ``test-cranelift-jit``,
``build-capi-llvm-native``, ``test-packages``, ``test-capi``...
"""

import logging
import shlex
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from ..core.exceptions import UnknownTargetError
from ..resolver.backends import CRANELIFT
from ..resolver.engines import ALL_ENGINES, NATIVE, OBJECT_FILE
from ..resolver.features import SYSTEM_LIBFFI
from ..resolver.resolution import Resolution

logger = logging.getLogger(__name__)

CLI_MANIFEST = "lib/cli/Cargo.toml"
CAPI_MANIFEST = "lib/c-api/Cargo.toml"
WASI_MANIFEST = "lib/wasi/Cargo.toml"
RUNTIME_CORE_MANIFEST = "lib/deprecated/runtime-core/Cargo.toml"
RUNTIME_MANIFEST = "lib/deprecated/runtime/Cargo.toml"

# (package, extra arguments) tested one by one by test-packages
WORKSPACE_PACKAGES: Tuple[Tuple[str, Tuple[str, ...]], ...] = (
    ("wasmer", ()),
    ("wasmer-vm", ()),
    ("wasmer-types", ()),
    ("wasmer-wasi", ()),
    ("wasmer-object", ()),
    ("wasmer-engine-native", ("--no-default-features",)),
    ("wasmer-cli", ()),
    ("wasmer-cache", ()),
    ("wasmer-engine", ()),
)

INTEGRATION_TESTS_PACKAGE = "wasmer-integration-tests-cli"

# C API builds with a compiler carry these around the backend/engine features
CAPI_BASE_FEATURES = ("deprecated", "wat")
CAPI_TRAILING_FEATURES = ("wasi",)

LINT_RUSTFLAGS = " ".join(
    f"-D {lint}"
    for lint in (
        "dead-code",
        "nonstandard-style",
        "unused-imports",
        "unused-mut",
        "unused-variables",
        "unused-unsafe",
        "unreachable-patterns",
        "bad-style",
        "improper-ctypes",
        "unused-allocation",
        "unused-comparisons",
        "while-true",
        "unconditional-recursion",
        "bare-trait-objects",
        "function_item_references",
    )
)


@dataclass(frozen=True)
class CargoInvocation:
    """
    A single cargo command line.

    Attributes:
        name: Target the invocation belongs to
        argv: Command and arguments
        env: Extra environment variables
    """

    name: str
    argv: Tuple[str, ...]
    env: Dict[str, str] = field(default_factory=dict)

    def command_line(self) -> str:
        """Shell-quoted command line, environment assignments first."""
        assignments = [f"{key}={shlex.quote(value)}" for key, value in self.env.items()]
        return " ".join(assignments + [shlex.join(self.argv)])

    def to_dict(self) -> dict:
        """Convert to a plain dictionary for structured output."""
        return {"name": self.name, "argv": list(self.argv), "env": dict(self.env)}


def capi_engine_features(backend: str, engine: str) -> List[str]:
    """
    Cargo features selecting one C API engine.

    cranelift's object-file engine is built together with the native engine.
    """
    if backend == CRANELIFT and engine == OBJECT_FILE:
        return [NATIVE, OBJECT_FILE]
    return [engine]


def capi_features(backend: str, engines: List[str]) -> str:
    """Comma-separated feature list for a C API build."""
    return ",".join(
        list(CAPI_BASE_FEATURES) + engines + [backend] + list(CAPI_TRAILING_FEATURES)
    )


class CargoPlanner:
    """
    Map target names to cargo invocations for one resolution.

    Example:
        >>> planner = CargoPlanner(resolve(facts))
        >>> for invocation in planner.plan("test-cranelift"):
        ...     print(invocation.command_line())
    """

    def __init__(self, resolution: Resolution):
        """
        Initialize planner.

        Args:
            resolution: Resolved configuration to plan for
        """
        self.resolution = resolution
        self._targets = self._build_targets()

    def available_targets(self) -> List[str]:
        """All target names, in definition order."""
        return list(self._targets)

    def plan(self, target: str) -> List[CargoInvocation]:
        """
        Get the invocations for a target.

        Args:
            target: Target name (see available_targets)

        Returns:
            Invocations in execution order; may be empty for a test group
            whose backend has no validated engine

        Raises:
            UnknownTargetError: If the target does not exist
        """
        if target not in self._targets:
            raise UnknownTargetError(target, self.available_targets())
        return list(self._targets[target])

    # ------------------------------------------------------------------
    # Target construction
    # ------------------------------------------------------------------

    def _features(self) -> List[str]:
        return ["--features", self.resolution.compiler_features]

    def _build_targets(self) -> Dict[str, List[CargoInvocation]]:
        targets: Dict[str, List[CargoInvocation]] = {}

        targets["build-wasmer"] = [
            CargoInvocation(
                "build-wasmer",
                ("cargo", "build", "--release", "--manifest-path", CLI_MANIFEST)
                + tuple(self._features()),
            )
        ]
        targets["build-wasmer-debug"] = [
            CargoInvocation(
                "build-wasmer-debug",
                ("cargo", "build", "--manifest-path", CLI_MANIFEST)
                + tuple(self._features()),
            )
        ]
        targets["bench"] = [
            CargoInvocation("bench", ("cargo", "bench") + tuple(self._features()))
        ]
        targets["build-docs"] = [
            CargoInvocation(
                "build-docs",
                ("cargo", "doc", "--release")
                + tuple(self._features())
                + ("--document-private-items", "--no-deps", "--workspace"),
            )
        ]
        targets["lint"] = [
            CargoInvocation("lint", ("cargo", "fmt", "--all", "--", "--check")),
            CargoInvocation(
                "lint",
                ("cargo", "clippy") + tuple(self._features()),
                env={"RUSTFLAGS": LINT_RUSTFLAGS},
            ),
        ]

        for entry in self.resolution.matrix:
            name = f"test-{entry.target_name}"
            targets[name] = [
                CargoInvocation(
                    name,
                    ("cargo", "test", "--release")
                    + tuple(self._features())
                    + ("--features", f"test-{entry.backend} test-{entry.engine}"),
                )
            ]

        for backend in self.resolution.backends:
            targets[f"test-{backend}"] = [
                invocation
                for target_name in self.resolution.targets_for_backend(backend)
                for invocation in targets[f"test-{target_name}"]
            ]

        targets["test-examples"] = [
            CargoInvocation(
                "test-examples",
                ("cargo", "test", "--release")
                + tuple(self._features())
                + ("--features", "wasi", "--examples"),
            )
        ]
        targets["test-packages"] = [
            CargoInvocation(
                "test-packages",
                ("cargo", "test", "-p", package, "--release") + extra,
            )
            for package, extra in WORKSPACE_PACKAGES
        ]
        targets["test-deprecated"] = [
            CargoInvocation(
                "test-deprecated",
                (
                    "cargo",
                    "test",
                    "--manifest-path",
                    RUNTIME_CORE_MANIFEST,
                    "-p",
                    "wasmer-runtime-core",
                    "--release",
                ),
            ),
            CargoInvocation(
                "test-deprecated",
                (
                    "cargo",
                    "test",
                    "--manifest-path",
                    RUNTIME_MANIFEST,
                    "-p",
                    "wasmer-runtime",
                    "--release",
                ),
            ),
            CargoInvocation(
                "test-deprecated",
                (
                    "cargo",
                    "test",
                    "--manifest-path",
                    RUNTIME_MANIFEST,
                    "-p",
                    "wasmer-runtime",
                    "--release",
                    "--examples",
                ),
            ),
        ]
        targets["test"] = (
            [
                invocation
                for backend in self.resolution.backends
                for invocation in targets[f"test-{backend}"]
            ]
            + targets["test-packages"]
            + targets["test-examples"]
            + targets["test-deprecated"]
        )
        targets["test-wasi-unit"] = [
            CargoInvocation(
                "test-wasi-unit",
                ("cargo", "test", "--manifest-path", WASI_MANIFEST, "--release"),
            )
        ]
        targets["test-integration"] = [
            CargoInvocation(
                "test-integration", ("cargo", "test", "-p", INTEGRATION_TESTS_PACKAGE)
            )
        ]

        for backend in self.resolution.backends:
            name = f"build-capi-{backend}"
            targets[name] = [self._capi_build(name, backend, list(ALL_ENGINES))]
            for engine in ALL_ENGINES:
                name = f"build-capi-{backend}-{engine}"
                targets[name] = [
                    self._capi_build(name, backend, capi_engine_features(backend, engine))
                ]
        targets["build-capi"] = targets[f"build-capi-{CRANELIFT}"]
        name = f"build-capi-{CRANELIFT}-{SYSTEM_LIBFFI}"
        targets[name] = [
            self._capi_build(
                name, CRANELIFT, list(ALL_ENGINES), extra_features=[SYSTEM_LIBFFI]
            )
        ]

        # Headless builds carry no compiler and ignore the default C API features
        for engine in ALL_ENGINES:
            name = f"build-capi-headless-{engine}"
            targets[name] = [self._capi_headless_build(name, [engine])]
        targets["build-capi-headless-all"] = [
            self._capi_headless_build("build-capi-headless-all", list(ALL_ENGINES))
        ]

        for entry in self.resolution.matrix:
            name = f"test-capi-{entry.target_name}"
            targets[name] = targets[f"build-capi-{entry.target_name}"] + [
                self._capi_test(name, entry.backend, [entry.engine])
            ]
        targets["test-capi"] = [
            invocation
            for entry in self.resolution.matrix
            for invocation in targets[f"test-capi-{entry.target_name}"]
        ]

        logger.debug(f"Planned {len(targets)} cargo targets")
        return targets

    def _capi_build(
        self,
        name: str,
        backend: str,
        engines: List[str],
        extra_features: Optional[List[str]] = None,
    ) -> CargoInvocation:
        features = capi_features(backend, engines)
        if extra_features:
            features = ",".join([features] + extra_features)
        return CargoInvocation(
            name,
            (
                "cargo",
                "build",
                "--manifest-path",
                CAPI_MANIFEST,
                "--release",
                "--no-default-features",
                "--features",
                features,
            )
            + tuple(self.resolution.capi_default_features),
        )

    def _capi_headless_build(self, name: str, engines: List[str]) -> CargoInvocation:
        return CargoInvocation(
            name,
            (
                "cargo",
                "build",
                "--manifest-path",
                CAPI_MANIFEST,
                "--release",
                "--no-default-features",
                "--features",
                ",".join(engines + list(CAPI_TRAILING_FEATURES)),
            ),
        )

    def _capi_test(self, name: str, backend: str, engines: List[str]) -> CargoInvocation:
        return CargoInvocation(
            name,
            (
                "cargo",
                "test",
                "--manifest-path",
                CAPI_MANIFEST,
                "--release",
                "--no-default-features",
                "--features",
                capi_features(backend, engines),
            )
            + tuple(self.resolution.capi_default_features)
            + ("--", "--nocapture"),
        )


def plan(resolution: Resolution, target: str) -> List[CargoInvocation]:
    """Convenience wrapper around CargoPlanner.plan()."""
    return CargoPlanner(resolution).plan(target)
