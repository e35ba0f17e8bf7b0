"""Configuration provider following Black Box Design principles."""
import json
import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Mapping, Protocol, Union

import yaml

from ..errors import ConfigError

MAX_NODE_ID = 0xFFFFFFFF


@dataclass
class PanelConfig:
    """Panel connection and sync configuration."""
    enabled: bool = False
    api_host: str = ""
    api_key: str = ""
    node_id: int = 0
    node_type: str = "trojan"
    sync_interval: float = 180.0
    connect_timeout: float = 10.0
    timeout: float = 10.0

    def __post_init__(self):
        self.api_host = (self.api_host or "").rstrip("/")

    def validate(self) -> "PanelConfig":
        """
        Check the configuration for an enabled authenticator.

        Returns:
            self, for chaining

        Raises:
            ConfigError: If a required field is missing or out of range
        """
        if not self.enabled:
            return self

        problems = []
        if not self.api_host:
            problems.append("api_host is required")
        elif not self.api_host.startswith(("http://", "https://")):
            problems.append(f"api_host must be an http(s) URL, got {self.api_host!r}")
        if not self.api_key:
            problems.append("api_key is required")
        if not 0 <= self.node_id <= MAX_NODE_ID:
            problems.append(f"node_id must fit in 32 bits, got {self.node_id}")
        if not self.node_type:
            problems.append("node_type is required")
        for name in ("sync_interval", "connect_timeout", "timeout"):
            if getattr(self, name) <= 0:
                problems.append(f"{name} must be positive")

        if problems:
            raise ConfigError("Invalid panel configuration: " + "; ".join(problems))
        return self

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "PanelConfig":
        """
        Build a config from a plain mapping, ignoring unknown keys.

        Raises:
            ConfigError: If a value has the wrong type
        """
        known = {f.name for f in fields(cls)}
        values = {key: value for key, value in data.items() if key in known}
        try:
            if "enabled" in values:
                values["enabled"] = _parse_bool(values["enabled"])
            if "node_id" in values:
                values["node_id"] = int(values["node_id"])
            for name in ("sync_interval", "connect_timeout", "timeout"):
                if name in values:
                    values[name] = float(values[name])
        except (TypeError, ValueError) as e:
            raise ConfigError(f"Invalid panel configuration value: {e}") from e
        return cls(**values)


def _parse_bool(value: Union[str, bool, int]) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return value != 0
    return str(value).strip().lower() in ("1", "true", "yes", "on")


class ConfigProvider(Protocol):
    """Protocol for configuration providers."""

    def get_panel_config(self) -> PanelConfig:
        """Get panel configuration."""
        ...


class StaticConfigProvider:
    """Provider returning a ready-made configuration."""

    def __init__(self, config: PanelConfig):
        self._config = config

    def get_panel_config(self) -> PanelConfig:
        return self._config.validate()


class EnvConfigProvider:
    """Environment-based configuration provider."""

    def get_panel_config(self) -> PanelConfig:
        """Get panel configuration from environment variables."""
        env = {
            "enabled": os.getenv("PANEL_ENABLED", "false"),
            "api_host": os.getenv("PANEL_API_HOST", ""),
            "api_key": os.getenv("PANEL_API_KEY", ""),
            "node_id": os.getenv("PANEL_NODE_ID", "0"),
            "node_type": os.getenv("PANEL_NODE_TYPE", "trojan"),
            "sync_interval": os.getenv("PANEL_SYNC_INTERVAL", "180"),
            "connect_timeout": os.getenv("PANEL_CONNECT_TIMEOUT", "10"),
            "timeout": os.getenv("PANEL_TIMEOUT", "10"),
        }
        return PanelConfig.from_mapping(env).validate()


class FileConfigProvider:
    """
    Reads the ``v2board`` section of a proxy configuration file.

    JSON is the proxy's native format; ``.yaml`` and ``.yml`` files are
    parsed with PyYAML.
    """

    SECTION = "v2board"

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def _load(self) -> Dict[str, Any]:
        try:
            with open(self.path, "r") as f:
                if self.path.suffix in (".yaml", ".yml"):
                    data = yaml.safe_load(f)
                else:
                    data = json.load(f)
        except OSError as e:
            raise ConfigError(f"Cannot read config file {self.path}: {e}") from e
        except (json.JSONDecodeError, yaml.YAMLError) as e:
            raise ConfigError(f"Cannot parse config file {self.path}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigError(f"Config file {self.path} must contain an object")
        return data

    def get_panel_config(self) -> PanelConfig:
        """Get panel configuration from the file's v2board section."""
        section = self._load().get(self.SECTION) or {}
        if not isinstance(section, dict):
            raise ConfigError(f"'{self.SECTION}' section in {self.path} must be an object")
        return PanelConfig.from_mapping(section).validate()
