"""
Tests for feature flag rendering.
"""

import pytest

from buildmatrix.core.platform import ArchKind, HostFacts, OSFamily
from buildmatrix.resolver.features import (
    SYSTEM_LIBFFI,
    capi_default_features,
    features_argument,
    resolve_capi_feature,
    serialize,
)


class TestSerialize:
    """Tests for serialize()."""

    def test_joins_with_spaces(self):
        """Test names are joined with single spaces."""
        assert serialize(("cranelift", "llvm", "singlepass")) == "cranelift llvm singlepass"

    def test_single(self):
        """Test a single backend."""
        assert serialize(("cranelift",)) == "cranelift"

    def test_empty(self):
        """Test an empty set gives an empty string."""
        assert serialize(()) == ""
        assert serialize([]) == ""

    def test_keeps_order(self):
        """Test order is preserved, not sorted."""
        assert serialize(("singlepass", "cranelift")) == "singlepass cranelift"

    def test_idempotent(self):
        """Test repeated calls give identical strings."""
        backends = ("cranelift", "singlepass")
        assert serialize(backends) == serialize(backends)

    def test_accepts_generators(self):
        """Test any iterable is accepted."""
        assert serialize(name for name in ["cranelift", "llvm"]) == "cranelift llvm"


class TestFeaturesArgument:
    """Tests for features_argument()."""

    def test_wraps_in_quotes(self):
        """Test the flag wraps names in double quotes."""
        assert (
            features_argument(("cranelift", "singlepass"))
            == '--features "cranelift singlepass"'
        )

    def test_empty(self):
        """Test the flag for an empty set."""
        assert features_argument(()) == '--features ""'


class TestCapiFeature:
    """Tests for the C API default feature."""

    def test_darwin_arm64(self, darwin_arm64_facts):
        """Test Apple silicon uses the system libffi."""
        assert resolve_capi_feature(darwin_arm64_facts) == SYSTEM_LIBFFI
        assert SYSTEM_LIBFFI == "system-libffi"

    def test_darwin_aarch64_name(self):
        """Test 'aarch64' is treated like 'arm64'."""
        facts = HostFacts.from_names("Darwin", "aarch64")
        assert resolve_capi_feature(facts) == SYSTEM_LIBFFI

    def test_linux_aarch64(self, linux_aarch64_facts):
        """Test aarch64 outside macOS has no extra feature."""
        assert resolve_capi_feature(linux_aarch64_facts) is None

    def test_darwin_x86_64(self):
        """Test Intel macs have no extra feature."""
        facts = HostFacts.from_names("Darwin", "x86_64")
        assert resolve_capi_feature(facts) is None

    @pytest.mark.parametrize("os_family", [OSFamily.WINDOWS, OSFamily.OTHER_UNIX])
    def test_other_os_on_aarch64(self, os_family):
        """Test only Darwin triggers the feature."""
        facts = HostFacts(os=os_family, arch=ArchKind.AARCH64)
        assert resolve_capi_feature(facts) is None

    def test_capi_default_features(self, darwin_arm64_facts, linux_x86_64_facts):
        """Test the feature rendered as cargo arguments."""
        assert capi_default_features(darwin_arm64_facts) == ["--features", "system-libffi"]
        assert capi_default_features(linux_x86_64_facts) == []
