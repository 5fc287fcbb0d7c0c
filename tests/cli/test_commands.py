"""
Tests for CLI command implementations.

Host probing is mocked; every test resolves for fixed host facts.
"""

import json
from unittest.mock import patch

import pytest
import yaml

from buildmatrix.cli.parser import CLI
from buildmatrix.core.platform import HostFacts


@pytest.fixture
def run_cli(tmp_path):
    """Run the CLI against a fixed host, returning (exit code, stdout)."""

    def _run(argv, facts, capsys):
        with patch(
            "buildmatrix.cli.utils.probe_host_facts", return_value=facts
        ) as mock_probe:
            code = CLI().run(["--project-root", str(tmp_path)] + argv)
        _run.probe = mock_probe
        return code, capsys.readouterr().out

    return _run


class TestShow:
    """Tests for the show command."""

    def test_text(self, run_cli, capsys, linux_x86_64_facts):
        """Test the text summary."""
        code, out = run_cli(["show", "--no-color"], linux_x86_64_facts, capsys)

        assert code == 0
        assert "Available compilers: cranelift singlepass" in out
        assert 'Compilers features: --features "cranelift singlepass"' in out
        assert "cranelift-jit cranelift-native singlepass-jit" in out
        assert "\033[" not in out

    def test_text_shows_capi_feature(self, run_cli, capsys, darwin_arm64_facts):
        """Test Apple silicon prints the C API feature."""
        code, out = run_cli(["show", "--no-color"], darwin_arm64_facts, capsys)

        assert code == 0
        assert "C API default features: --features system-libffi" in out

    def test_json(self, run_cli, capsys, linux_x86_64_llvm_facts):
        """Test JSON output."""
        code, out = run_cli(["show", "--format", "json"], linux_x86_64_llvm_facts, capsys)

        assert code == 0
        data = json.loads(out)
        assert data["compilers"] == ["cranelift", "llvm", "singlepass"]
        assert "llvm-native" in data["test_compilers_engines"]

    def test_yaml(self, run_cli, capsys, windows_facts):
        """Test YAML output."""
        code, out = run_cli(["show", "--format", "yaml"], windows_facts, capsys)

        assert code == 0
        data = yaml.safe_load(out)
        assert data["compilers"] == ["cranelift"]
        assert data["test_compilers_engines"] == ["cranelift-jit"]

    def test_overrides(self, run_cli, capsys, linux_x86_64_facts):
        """Test command-line overrides replace probed facts."""
        code, out = run_cli(
            ["show", "--format", "json", "--os", "Darwin", "--arch", "arm64"],
            linux_x86_64_facts,
            capsys,
        )

        data = json.loads(out)
        assert data["compilers"] == ["cranelift"]
        assert data["capi_default_features"] == ["--features", "system-libffi"]

    def test_config_overrides(self, run_cli, capsys, tmp_path, linux_x86_64_facts):
        """Test configuration overrides are applied and passed to probing."""
        (tmp_path / "buildmatrix.yaml").write_text(
            "probe_timeout: 2\nhost:\n  llvm_version: '10.0.0'\n"
        )

        code, out = run_cli(["show", "--format", "json"], linux_x86_64_facts, capsys)

        assert code == 0
        assert json.loads(out)["compilers"] == ["cranelift", "llvm", "singlepass"]
        run_cli.probe.assert_called_once_with(
            timeout=2, llvm_binaries=["llvm-config", "llvm-config-10"]
        )

    def test_cli_wins_over_config(self, run_cli, capsys, tmp_path, linux_x86_64_facts):
        """Test command-line flags take precedence over the config file."""
        (tmp_path / "buildmatrix.yaml").write_text("host:\n  llvm_version: '10.0.0'\n")

        code, out = run_cli(
            ["features", "--llvm-version", ""], linux_x86_64_facts, capsys
        )

        assert out.strip() == '--features "cranelift singlepass"'

    def test_invalid_config(self, run_cli, capsys, tmp_path, linux_x86_64_facts):
        """Test an invalid config file exits with 1."""
        (tmp_path / "buildmatrix.yaml").write_text("version: 3\n")

        code, out = run_cli(["show"], linux_x86_64_facts, capsys)

        assert code == 1
        assert out == ""


class TestFeatures:
    """Tests for the features command."""

    def test_features(self, run_cli, capsys, linux_x86_64_llvm_facts):
        """Test the quoted feature flag."""
        code, out = run_cli(["features"], linux_x86_64_llvm_facts, capsys)

        assert code == 0
        assert out.strip() == '--features "cranelift llvm singlepass"'

    def test_spaced(self, run_cli, capsys, linux_x86_64_facts):
        """Test the bare compiler list."""
        code, out = run_cli(["features", "--spaced"], linux_x86_64_facts, capsys)
        assert out.strip() == "cranelift singlepass"


class TestMatrix:
    """Tests for the matrix command."""

    def test_text(self, run_cli, capsys, linux_x86_64_facts):
        """Test one target per line."""
        code, out = run_cli(["matrix"], linux_x86_64_facts, capsys)

        assert code == 0
        assert out.splitlines() == ["cranelift-jit", "cranelift-native", "singlepass-jit"]

    def test_backend_filter(self, run_cli, capsys, linux_x86_64_llvm_facts):
        """Test filtering by backend."""
        code, out = run_cli(
            ["matrix", "--backend", "llvm"], linux_x86_64_llvm_facts, capsys
        )
        assert out.splitlines() == ["llvm-jit", "llvm-native"]

    def test_json(self, run_cli, capsys, darwin_arm64_llvm_facts):
        """Test JSON output."""
        code, out = run_cli(["matrix", "--format", "json"], darwin_arm64_llvm_facts, capsys)

        assert json.loads(out) == [
            {"backend": "cranelift", "engine": "jit", "target": "cranelift-jit"},
            {"backend": "llvm", "engine": "native", "target": "llvm-native"},
        ]

    def test_empty_matrix(self, run_cli, capsys, riscv_facts):
        """Test unknown architectures print nothing."""
        code, out = run_cli(["matrix"], riscv_facts, capsys)

        assert code == 0
        assert out == ""


class TestCapiFeatures:
    """Tests for the capi-features command."""

    def test_apple_silicon(self, run_cli, capsys, darwin_arm64_facts):
        """Test the system libffi flag is printed."""
        code, out = run_cli(["capi-features"], darwin_arm64_facts, capsys)

        assert code == 0
        assert out.strip() == "--features system-libffi"

    def test_elsewhere(self, run_cli, capsys, linux_aarch64_facts):
        """Test nothing is printed elsewhere."""
        code, out = run_cli(["capi-features"], linux_aarch64_facts, capsys)

        assert code == 0
        assert out == ""


class TestPlan:
    """Tests for the plan command."""

    def test_target(self, run_cli, capsys, linux_x86_64_facts):
        """Test rendering a target's commands."""
        code, out = run_cli(["plan", "test-singlepass"], linux_x86_64_facts, capsys)

        assert code == 0
        assert out.strip() == (
            "cargo test --release --features 'cranelift singlepass' "
            "--features 'test-singlepass test-jit'"
        )

    def test_list(self, run_cli, capsys, windows_facts):
        """Test listing targets."""
        code, out = run_cli(["plan", "--list"], windows_facts, capsys)

        targets = out.splitlines()
        assert code == 0
        assert "test-cranelift-jit" in targets
        assert "test-singlepass-jit" not in targets

    def test_json(self, run_cli, capsys, windows_facts):
        """Test JSON output."""
        code, out = run_cli(["plan", "bench", "--format", "json"], windows_facts, capsys)

        assert json.loads(out) == [
            {"name": "bench", "argv": ["cargo", "bench", "--features", "cranelift"], "env": {}}
        ]

    def test_missing_target(self, run_cli, capsys, windows_facts):
        """Test a missing target is an error."""
        code, out = run_cli(["plan"], windows_facts, capsys)
        assert code == 1

    def test_unknown_target(self, run_cli, capsys, windows_facts):
        """Test an unknown target is an error."""
        code, out = run_cli(["plan", "test-llvm"], windows_facts, capsys)

        assert code == 1
        assert out == ""


class TestProbe:
    """Tests for the probe command."""

    def test_text(self, run_cli, capsys, linux_x86_64_llvm_facts):
        """Test the text report."""
        code, out = run_cli(["probe"], linux_x86_64_llvm_facts, capsys)

        assert code == 0
        assert "Architecture: x86_64 (x86_64)" in out
        assert "LLVM:         LLVM version 10.0.0 (supported)" in out

    def test_text_without_llvm(self, run_cli, capsys, windows_facts):
        """Test the text report without LLVM."""
        code, out = run_cli(["probe"], windows_facts, capsys)

        assert "OS family:    windows (n/a)" in out
        assert "LLVM:         not found" in out

    def test_json(self, run_cli, capsys):
        """Test JSON output reports LLVM availability."""
        facts = HostFacts.from_names("Linux", "x86_64", "11.0.0")
        code, out = run_cli(["probe", "--format", "json"], facts, capsys)

        data = json.loads(out)
        assert data["toolchain_version"] == "11.0.0"
        assert data["llvm_available"] is False
