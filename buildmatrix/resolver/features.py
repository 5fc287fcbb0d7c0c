"""
Feature flag rendering.

Turns resolver decisions into the cargo feature arguments downstream builds
are invoked with.
"""

from typing import Iterable, List, Optional

from ..core.platform import ArchKind, HostFacts, OSFamily

SYSTEM_LIBFFI = "system-libffi"


def serialize(backends: Iterable[str]) -> str:
    """
    Join backend names with single spaces, keeping their order.

    Example:
        >>> serialize(("cranelift", "singlepass"))
        'cranelift singlepass'
        >>> serialize(())
        ''
    """
    return " ".join(backends)


def features_argument(backends: Iterable[str]) -> str:
    """Render the backends as a quoted ``--features`` argument."""
    return f'--features "{serialize(backends)}"'


def resolve_capi_feature(facts: HostFacts) -> Optional[str]:
    """
    Extra C API feature for the host, if any.

    The bundled libffi is broken on Apple silicon, so macOS on aarch64
    links against the system libffi instead.

    Args:
        facts: Host facts

    Returns:
        'system-libffi' on macOS/aarch64, None elsewhere
    """
    if facts.arch is ArchKind.AARCH64 and facts.os is OSFamily.DARWIN:
        return SYSTEM_LIBFFI
    return None


def capi_default_features(facts: HostFacts) -> List[str]:
    """Render resolve_capi_feature() as cargo arguments (possibly empty)."""
    feature = resolve_capi_feature(facts)
    if feature is None:
        return []
    return ["--features", feature]
