"""
Tests for buildmatrix.toolchain.availability module.
"""

import pytest

from buildmatrix.toolchain.availability import DEFAULT_SUPPORTED_MAJOR, is_available


class TestIsAvailable:
    """Tests for the LLVM availability predicate."""

    @pytest.mark.parametrize(
        "version",
        [
            "LLVM version 10.0.0",
            "10.0.0",
            "10.0.1",
            "10",
        ],
    )
    def test_supported_versions(self, version):
        """Test versions containing the supported major are available."""
        assert is_available(version) is True

    @pytest.mark.parametrize(
        "version",
        [
            "11.1.0",
            "9.0.1",
            "LLVM version 12.0.1",
            "not a version",
            "",
            "   ",
            None,
        ],
    )
    def test_unsupported_versions(self, version):
        """Test other versions and garbage are not available."""
        assert is_available(version) is False

    @pytest.mark.parametrize("value", [10, 10.0, b"10.0.0", ["10"], object()])
    def test_non_string_input(self, value):
        """Test non-string input returns False instead of raising."""
        assert is_available(value) is False

    def test_custom_marker(self):
        """Test the supported major can be changed."""
        assert is_available("12.0.1", supported_major="12") is True
        assert is_available("10.0.0", supported_major="12") is False

    def test_empty_marker_is_never_available(self):
        """Test an empty marker does not match everything."""
        assert is_available("10.0.0", supported_major="") is False

    def test_default_marker(self):
        """Test the default supported major version."""
        assert DEFAULT_SUPPORTED_MAJOR == "10"
