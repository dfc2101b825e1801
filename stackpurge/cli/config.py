"""CLI configuration.

Loaded from a YAML file with environment variable overrides:

    namespace: mu
    aws_profile: prod
    region: us-east-1
    log_level: INFO
    params:
      suppressConfirmation: "no"
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Optional

import yaml

from ..workflows.interfaces import ParamGetter

DEFAULT_CONFIG_PATH = Path.home() / ".stackpurge" / "config.yaml"


class ConfigError(Exception):
    """The configuration file could not be read."""


@dataclass
class Config(ParamGetter):
    """Settings for a purge run.

    Attributes:
        namespace: Namespace prefixing stack and role names
        aws_profile: AWS profile name (optional)
        region: AWS region (optional)
        log_level: Log level name
        params: Named parameters read through get_param()
    """

    namespace: str = "mu"
    aws_profile: Optional[str] = None
    region: Optional[str] = None
    log_level: str = "INFO"
    params: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def load(cls, path: Optional[str] = None) -> "Config":
        """Load configuration.

        Args:
            path: Config file (default: $STACKPURGE_CONFIG or ~/.stackpurge/config.yaml)

        Returns:
            Config with file values and environment overrides applied

        Raises:
            ConfigError: If the file exists but is not a valid YAML mapping
        """
        config_path = Path(path or os.environ.get("STACKPURGE_CONFIG") or DEFAULT_CONFIG_PATH)

        data: dict = {}
        if config_path.exists():
            try:
                with open(config_path, "r") as f:
                    data = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                raise ConfigError(f"Invalid config file {config_path}: {e}")
            if not isinstance(data, dict):
                raise ConfigError(f"Invalid config file {config_path}: expected a mapping")

        config = cls(
            namespace=str(data.get("namespace", cls.namespace)),
            aws_profile=data.get("aws_profile"),
            region=data.get("region"),
            log_level=str(data.get("log_level", cls.log_level)),
            params={str(k): str(v) for k, v in (data.get("params") or {}).items()},
        )

        config.namespace = os.environ.get("STACKPURGE_NAMESPACE", config.namespace)
        config.aws_profile = os.environ.get("AWS_PROFILE", config.aws_profile)
        config.region = os.environ.get("AWS_REGION", os.environ.get("AWS_DEFAULT_REGION", config.region))
        config.log_level = os.environ.get("STACKPURGE_LOG_LEVEL", config.log_level)

        return config

    def get_param(self, name: str) -> Optional[str]:
        return self.params.get(name)

    def set_param(self, name: str, value: str) -> None:
        self.params[name] = value
