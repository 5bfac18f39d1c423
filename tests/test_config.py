"""
Tests for configuration management
Tests Config class, sub-configurations, YAML loading and environment variables
"""

import pytest
from pydantic import ValidationError

from snipcheck.config import (
    DEFAULT_TOOLCHAINS,
    Config,
    OutputConfig,
    ToolchainSpec,
    VerifierConfig,
)


class TestVerifierConfig:
    """Test VerifierConfig class"""

    def test_default_values(self):
        config = VerifierConfig()
        assert config.workers == 1
        assert config.timeout is None

    def test_custom_values(self):
        config = VerifierConfig(workers=8, timeout=12.5)
        assert config.workers == 8
        assert config.timeout == 12.5

    def test_validation(self):
        with pytest.raises(ValidationError):
            VerifierConfig(workers=0)  # Should be positive

        with pytest.raises(ValidationError):
            VerifierConfig(timeout=0)  # Should be positive

    def test_environment(self, monkeypatch):
        monkeypatch.setenv("SNIPCHECK_VERIFIER_WORKERS", "3")
        assert VerifierConfig().workers == 3


class TestOutputConfig:
    """Test OutputConfig class"""

    def test_default_values(self):
        assert OutputConfig().format == "text"

    def test_format_validation(self):
        assert OutputConfig(format="JSONL").format == "jsonl"
        with pytest.raises(ValidationError):
            OutputConfig(format="xml")


class TestConfig:
    """Test main Config class"""

    def test_default_values(self):
        config = Config()
        assert config.log_level == "INFO"
        assert config.log_file is None
        assert config.verifier.workers == 1
        assert set(config.toolchains) == set(DEFAULT_TOOLCHAINS)
        assert config.toolchains["c"].command == "gcc -fsyntax-only -x c -"

    def test_toolchain_shorthand(self):
        config = Config(toolchains={"Go": "gofmt -e", "rust": {"command": "rustfmt --check {file}", "suffix": ".rs"}})
        assert config.toolchains["go"] == ToolchainSpec(command="gofmt -e")
        assert config.toolchains["rust"].suffix == ".rs"

    def test_invalid_toolchain(self):
        with pytest.raises(ValidationError):
            Config(toolchains={"c": {"command": ""}})

    def test_log_level_normalized(self):
        assert Config(log_level="debug").log_level == "DEBUG"

    def test_from_file(self, temp_dir):
        config_file = temp_dir / "snipcheck.yaml"
        config_file.write_text(
            "log_level: warning\n"
            "verifier:\n"
            "  workers: 4\n"
            "  timeout: 60\n"
            "output:\n"
            "  format: json\n"
            "toolchains:\n"
            "  c: clang -fsyntax-only -x c -\n",
            encoding="utf-8",
        )

        config = Config.from_file(str(config_file))
        assert config.log_level == "WARNING"
        assert config.verifier.workers == 4
        assert config.verifier.timeout == 60
        assert config.output.format == "json"
        assert list(config.toolchains) == ["c"]

    def test_from_empty_file(self, temp_dir):
        config_file = temp_dir / "empty.yaml"
        config_file.write_text("", encoding="utf-8")
        assert Config.from_file(str(config_file)).verifier.workers == 1

    def test_from_file_not_mapping(self, temp_dir):
        config_file = temp_dir / "list.yaml"
        config_file.write_text("- a\n- b\n", encoding="utf-8")
        with pytest.raises(ValueError):
            Config.from_file(str(config_file))

    def test_environment_nested(self, monkeypatch):
        monkeypatch.setenv("SNIPCHECK_LOG_LEVEL", "ERROR")
        monkeypatch.setenv("SNIPCHECK_OUTPUT__FORMAT", "jsonl")
        config = Config()
        assert config.log_level == "ERROR"
        assert config.output.format == "jsonl"

    def test_environment_overrides_file(self, temp_dir, monkeypatch):
        config_file = temp_dir / "snipcheck.yaml"
        config_file.write_text(
            "log_level: warning\n"
            "verifier:\n"
            "  workers: 2\n"
            "  timeout: 60\n",
            encoding="utf-8",
        )
        monkeypatch.setenv("SNIPCHECK_VERIFIER__WORKERS", "4")

        config = Config.from_file(str(config_file))
        assert config.verifier.workers == 4
        # Values the environment does not set still come from the file
        assert config.verifier.timeout == 60
        assert config.log_level == "WARNING"
        assert type(config) is Config
