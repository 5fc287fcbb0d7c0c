"""
Build/test configuration resolver.

Pure functions over HostFacts: backend selection, engine test matrix,
feature flag rendering and the combined Resolution.
"""

from .backends import (
    CRANELIFT,
    LLVM,
    SINGLEPASS,
    ALL_BACKENDS,
    normalize_backends,
    select_backends,
)
from .engines import (
    JIT,
    NATIVE,
    OBJECT_FILE,
    ALL_ENGINES,
    EngineMatrixEntry,
    MatrixRule,
    MATRIX_RULES,
    build_matrix,
)
from .features import (
    SYSTEM_LIBFFI,
    serialize,
    features_argument,
    resolve_capi_feature,
    capi_default_features,
)
from .resolution import Resolution, resolve

__all__ = [
    "CRANELIFT",
    "LLVM",
    "SINGLEPASS",
    "ALL_BACKENDS",
    "normalize_backends",
    "select_backends",
    "JIT",
    "NATIVE",
    "OBJECT_FILE",
    "ALL_ENGINES",
    "EngineMatrixEntry",
    "MatrixRule",
    "MATRIX_RULES",
    "build_matrix",
    "SYSTEM_LIBFFI",
    "serialize",
    "features_argument",
    "resolve_capi_feature",
    "capi_default_features",
    "Resolution",
    "resolve",
]
