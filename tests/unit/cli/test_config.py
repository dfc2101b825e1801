"""Tests for CLI configuration loading."""

from __future__ import annotations

from pathlib import Path

import pytest

from stackpurge.cli.config import Config, ConfigError


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "STACKPURGE_CONFIG",
        "STACKPURGE_NAMESPACE",
        "STACKPURGE_LOG_LEVEL",
        "AWS_PROFILE",
        "AWS_REGION",
        "AWS_DEFAULT_REGION",
    ):
        monkeypatch.delenv(name, raising=False)


class TestConfigLoad:
    def test_defaults_without_file(self, tmp_path: Path) -> None:
        config = Config.load(str(tmp_path / "missing.yaml"))

        assert config.namespace == "mu"
        assert config.aws_profile is None
        assert config.region is None
        assert config.log_level == "INFO"
        assert config.get_param("suppressConfirmation") is None

    def test_reads_yaml(self, tmp_path: Path) -> None:
        config_file = tmp_path / "config.yaml"
        config_file.write_text(
            "namespace: acme\n"
            "aws_profile: prod\n"
            "region: us-west-2\n"
            "log_level: DEBUG\n"
            "params:\n"
            "  suppressConfirmation: 'yes'\n"
        )

        config = Config.load(str(config_file))

        assert config.namespace == "acme"
        assert config.aws_profile == "prod"
        assert config.region == "us-west-2"
        assert config.log_level == "DEBUG"
        assert config.get_param("suppressConfirmation") == "yes"

    def test_env_overrides_file(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        config_file = tmp_path / "config.yaml"
        config_file.write_text("namespace: acme\nregion: us-west-2\n")
        monkeypatch.setenv("STACKPURGE_CONFIG", str(config_file))
        monkeypatch.setenv("STACKPURGE_NAMESPACE", "other")
        monkeypatch.setenv("AWS_DEFAULT_REGION", "eu-west-1")

        config = Config.load()

        assert config.namespace == "other"
        assert config.region == "eu-west-1"

    def test_invalid_yaml_raises(self, tmp_path: Path) -> None:
        config_file = tmp_path / "config.yaml"
        config_file.write_text("namespace: [unclosed\n")

        with pytest.raises(ConfigError, match="Invalid config file"):
            Config.load(str(config_file))

    def test_non_mapping_raises(self, tmp_path: Path) -> None:
        config_file = tmp_path / "config.yaml"
        config_file.write_text("- just\n- a list\n")

        with pytest.raises(ConfigError, match="expected a mapping"):
            Config.load(str(config_file))


def test_set_param() -> None:
    config = Config()

    config.set_param("suppressConfirmation", "yes")

    assert config.get_param("suppressConfirmation") == "yes"
