"""
Engine test matrix.

Each entry pairs a compiler backend with an execution engine known to work
on the host. The matrix is built from an ordered list of rules; a rule only
ever adds entries. Architectures without a rule get an empty matrix.

Known limitations encoded here:
- the native engine does not work on Windows
- singlepass does not work with the native engine
- on aarch64 only cranelift-jit and llvm-native are validated
"""

import logging
from dataclasses import dataclass
from typing import Callable, Iterable, List, NamedTuple, Sequence, Tuple

from ..core.platform import ArchKind, HostFacts, OSFamily
from .backends import CRANELIFT, LLVM, SINGLEPASS

logger = logging.getLogger(__name__)

JIT = "jit"
NATIVE = "native"
OBJECT_FILE = "object-file"

ALL_ENGINES: Tuple[str, ...] = (JIT, NATIVE, OBJECT_FILE)


class EngineMatrixEntry(NamedTuple):
    """One validated (backend, engine) pairing."""

    backend: str
    engine: str

    @property
    def target_name(self) -> str:
        """Test target name, e.g. 'cranelift-jit'."""
        return f"{self.backend}-{self.engine}"


Predicate = Callable[[HostFacts, Sequence[str]], bool]


@dataclass(frozen=True)
class MatrixRule:
    """Adds `entries` when `applies(facts, backends)` holds."""

    description: str
    applies: Predicate
    entries: Tuple[EngineMatrixEntry, ...]


def _x86_64(facts: HostFacts, backends: Sequence[str]) -> bool:
    return facts.arch is ArchKind.X86_64


def _x86_64_unix(facts: HostFacts, backends: Sequence[str]) -> bool:
    return _x86_64(facts, backends) and facts.os is not OSFamily.WINDOWS


def _x86_64_unix_llvm(facts: HostFacts, backends: Sequence[str]) -> bool:
    return _x86_64_unix(facts, backends) and LLVM in backends


def _aarch64(facts: HostFacts, backends: Sequence[str]) -> bool:
    return facts.arch is ArchKind.AARCH64


def _aarch64_llvm(facts: HostFacts, backends: Sequence[str]) -> bool:
    return _aarch64(facts, backends) and LLVM in backends


MATRIX_RULES: Tuple[MatrixRule, ...] = (
    MatrixRule(
        "x86_64",
        _x86_64,
        (EngineMatrixEntry(CRANELIFT, JIT),),
    ),
    MatrixRule(
        "x86_64 outside Windows",
        _x86_64_unix,
        (EngineMatrixEntry(CRANELIFT, NATIVE), EngineMatrixEntry(SINGLEPASS, JIT)),
    ),
    MatrixRule(
        "x86_64 outside Windows with llvm",
        _x86_64_unix_llvm,
        (EngineMatrixEntry(LLVM, JIT), EngineMatrixEntry(LLVM, NATIVE)),
    ),
    MatrixRule(
        "aarch64",
        _aarch64,
        (EngineMatrixEntry(CRANELIFT, JIT),),
    ),
    MatrixRule(
        "aarch64 with llvm",
        _aarch64_llvm,
        (EngineMatrixEntry(LLVM, NATIVE),),
    ),
)


def build_matrix(
    facts: HostFacts,
    backends: Sequence[str],
    rules: Iterable[MatrixRule] = MATRIX_RULES,
) -> Tuple[EngineMatrixEntry, ...]:
    """
    Compute the (backend, engine) pairs to test on a host.

    Entries whose backend is not in `backends` are dropped, so the matrix
    never references a backend that is not built.

    Args:
        facts: Host facts
        backends: Selected backends (see select_backends)
        rules: Matrix rules, applied in order

    Returns:
        Unique entries in rule order
    """
    backends = tuple(backends)
    entries: List[EngineMatrixEntry] = []

    for rule in rules:
        if not rule.applies(facts, backends):
            continue
        logger.debug(f"Matrix rule matched: {rule.description}")
        for entry in rule.entries:
            if entry in entries:
                continue
            if entry.backend not in backends:
                logger.debug(
                    f"Skipping {entry.target_name}: backend {entry.backend} not selected"
                )
                continue
            entries.append(entry)

    if not entries:
        logger.debug(f"No validated engine matrix for {facts}")

    return tuple(entries)
