"""
Pytest configuration and shared fixtures for buildmatrix tests.
"""

import pytest

from buildmatrix.core.platform import ArchKind, HostFacts, OSFamily


def pytest_addoption(parser):
    """Add custom command line options."""
    parser.addoption(
        "--integration",
        action="store_true",
        default=False,
        help="run integration tests that execute real host commands",
    )


def pytest_collection_modifyitems(config, items):
    """Skip integration tests unless --integration flag is provided."""
    if not config.getoption("--integration"):
        skip_integration = pytest.mark.skip(reason="need --integration option to run")
        for item in items:
            if "integration" in item.keywords:
                item.add_marker(skip_integration)


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers",
        "integration: marks tests as integration tests (requires --integration)",
    )


# ============================================================================
# Shared Host Facts
# ============================================================================


LLVM_10 = "LLVM version 10.0.0"


@pytest.fixture
def windows_facts() -> HostFacts:
    """Facts as probed on a Windows host."""
    return HostFacts(
        os=OSFamily.WINDOWS,
        arch=ArchKind.X86_64,
        toolchain_version=None,
        kernel_name="",
        machine="x86_64",
    )


@pytest.fixture
def linux_x86_64_facts() -> HostFacts:
    """Linux x86_64 without LLVM."""
    return HostFacts.from_names("Linux", "x86_64")


@pytest.fixture
def linux_x86_64_llvm_facts() -> HostFacts:
    """Linux x86_64 with LLVM 10."""
    return HostFacts.from_names("Linux", "x86_64", LLVM_10)


@pytest.fixture
def linux_aarch64_facts() -> HostFacts:
    """Linux aarch64 without LLVM."""
    return HostFacts.from_names("Linux", "aarch64")


@pytest.fixture
def darwin_arm64_facts() -> HostFacts:
    """macOS on Apple silicon without LLVM."""
    return HostFacts.from_names("Darwin", "arm64")


@pytest.fixture
def darwin_arm64_llvm_facts() -> HostFacts:
    """macOS on Apple silicon with LLVM 10."""
    return HostFacts.from_names("Darwin", "arm64", LLVM_10)


@pytest.fixture
def riscv_facts() -> HostFacts:
    """An architecture with no validated configuration."""
    return HostFacts.from_names("Linux", "riscv64", LLVM_10)
