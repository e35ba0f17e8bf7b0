"""
Tests for panel configuration providers.
"""

import json
import os
import re
from unittest.mock import patch

import pytest
import yaml

from uniproxy_auth.config.provider import (
    EnvConfigProvider,
    FileConfigProvider,
    PanelConfig,
    StaticConfigProvider,
)
from uniproxy_auth.errors import ConfigError


class TestPanelConfig:
    """Test PanelConfig defaults and validation."""

    def test_defaults(self):
        config = PanelConfig()

        assert config.enabled is False
        assert config.node_type == "trojan"
        assert config.sync_interval == 180.0
        assert config.connect_timeout == 10.0
        assert config.timeout == 10.0

    def test_disabled_config_needs_nothing(self):
        assert PanelConfig(enabled=False).validate().enabled is False

    def test_strips_trailing_slash(self):
        assert PanelConfig(api_host="https://panel.example.com//").api_host == "https://panel.example.com"

    @pytest.mark.parametrize(
        "overrides,message",
        [
            ({"api_host": ""}, "api_host is required"),
            ({"api_host": "panel.example.com"}, "http(s) URL"),
            ({"api_key": ""}, "api_key is required"),
            ({"node_id": -1}, "node_id"),
            ({"node_id": 2**32}, "node_id"),
            ({"sync_interval": 0}, "sync_interval"),
            ({"timeout": -1}, "timeout"),
        ],
    )
    def test_validate_rejects(self, overrides, message):
        values = {"enabled": True, "api_host": "https://p", "api_key": "k", "node_id": 1}
        values.update(overrides)

        with pytest.raises(ConfigError, match=re.escape(message)):
            PanelConfig(**values).validate()

    def test_from_mapping_coerces_types(self):
        config = PanelConfig.from_mapping(
            {"enabled": "true", "node_id": "12", "sync_interval": "60", "unknown": "x"}
        )

        assert config.enabled is True
        assert config.node_id == 12
        assert config.sync_interval == 60.0

    def test_from_mapping_bad_number(self):
        with pytest.raises(ConfigError):
            PanelConfig.from_mapping({"node_id": "twelve"})


class TestEnvConfigProvider:
    def test_reads_environment(self):
        env = {
            "PANEL_ENABLED": "true",
            "PANEL_API_HOST": "https://panel.example.com/",
            "PANEL_API_KEY": "k",
            "PANEL_NODE_ID": "5",
            "PANEL_SYNC_INTERVAL": "30",
        }
        with patch.dict(os.environ, env, clear=False):
            config = EnvConfigProvider().get_panel_config()

        assert config.enabled is True
        assert config.api_host == "https://panel.example.com"
        assert config.node_id == 5
        assert config.sync_interval == 30.0
        assert config.node_type == "trojan"

    def test_disabled_by_default(self):
        with patch.dict(os.environ, {}, clear=True):
            config = EnvConfigProvider().get_panel_config()

        assert config.enabled is False

    def test_enabled_without_host_fails(self):
        with patch.dict(os.environ, {"PANEL_ENABLED": "1"}, clear=True):
            with pytest.raises(ConfigError):
                EnvConfigProvider().get_panel_config()


class TestFileConfigProvider:
    SECTION = {
        "enabled": True,
        "api_host": "https://panel.example.com",
        "api_key": "k",
        "node_id": 9,
    }

    def test_reads_json_v2board_section(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"run_type": "server", "v2board": self.SECTION}))

        config = FileConfigProvider(path).get_panel_config()

        assert config.enabled is True
        assert config.node_id == 9

    def test_reads_yaml(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text(yaml.safe_dump({"v2board": self.SECTION}))

        config = FileConfigProvider(str(path)).get_panel_config()

        assert config.api_key == "k"

    def test_missing_section_means_disabled(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"run_type": "server"}))

        assert FileConfigProvider(path).get_panel_config().enabled is False

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError, match="Cannot read"):
            FileConfigProvider(tmp_path / "nope.json").get_panel_config()

    def test_malformed_json(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text("{not json")

        with pytest.raises(ConfigError, match="Cannot parse"):
            FileConfigProvider(path).get_panel_config()

    def test_section_must_be_object(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"v2board": [1, 2]}))

        with pytest.raises(ConfigError):
            FileConfigProvider(path).get_panel_config()


def test_static_provider_validates():
    with pytest.raises(ConfigError):
        StaticConfigProvider(PanelConfig(enabled=True)).get_panel_config()
