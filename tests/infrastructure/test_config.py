"""Tests for configuration module."""

import json
import os
import pytest
from unittest.mock import patch

from railway_mcp.infrastructure.config import (
    ApiConfig,
    MCPConfig,
    ProvisioningConfig,
    RailwayMCPConfig,
    ReadinessConfig,
    TemplateSearchConfig,
    load_config,
)

MISSING = "/nonexistent/railway-mcp.json"


@pytest.fixture
def no_dotenv(tmp_path):
    return str(tmp_path / "absent.env")


class TestDefaultConfig:
    def test_defaults(self, no_dotenv):
        config = load_config(path=MISSING, dotenv_path=no_dotenv)
        assert config.log_level == "WARNING"
        assert config.log_json is False
        assert config.api.endpoint == "https://backboard.railway.app/graphql/v2"
        assert config.api.default_token == ""
        assert config.templates.search_threshold == 70.0
        assert config.templates.name_weight == 3.0
        assert config.templates.description_weight == 2.0
        assert config.provisioning.default_port == 5432
        assert config.provisioning.default_mount_path == "/data"
        assert config.readiness.delay_seconds == 5.0
        assert config.mcp.server_name == "railway-tools"

    def test_all_sections_present(self, no_dotenv):
        config = load_config(path=MISSING, dotenv_path=no_dotenv)
        assert isinstance(config.api, ApiConfig)
        assert isinstance(config.templates, TemplateSearchConfig)
        assert isinstance(config.provisioning, ProvisioningConfig)
        assert isinstance(config.readiness, ReadinessConfig)
        assert isinstance(config.mcp, MCPConfig)

    def test_token_hidden_from_repr(self):
        config = RailwayMCPConfig(api=ApiConfig(default_token="super-secret"))
        assert "super-secret" not in repr(config)


class TestFileConfig:
    def test_load_from_file(self, tmp_path, no_dotenv):
        config_file = tmp_path / "railway-mcp.json"
        config_file.write_text(json.dumps({
            "log_level": "debug",
            "api": {"timeout_seconds": 10},
            "templates": {"search_threshold": 80},
            "provisioning": {"default_port": 27017, "default_mount_path": "/mnt"},
        }))

        config = load_config(path=str(config_file), dotenv_path=no_dotenv)
        assert config.log_level == "DEBUG"
        assert config.api.timeout_seconds == 10
        assert config.templates.search_threshold == 80
        assert config.provisioning.default_port == 27017
        assert config.provisioning.default_mount_path == "/mnt"
        assert config.readiness.max_attempts == 6  # default preserved

    def test_invalid_json_returns_defaults(self, tmp_path, no_dotenv):
        config_file = tmp_path / "railway-mcp.json"
        config_file.write_text("not valid json{{{")

        config = load_config(path=str(config_file), dotenv_path=no_dotenv)
        assert config.provisioning.default_port == 5432

    def test_unknown_keys_ignored(self, tmp_path, no_dotenv):
        config_file = tmp_path / "railway-mcp.json"
        config_file.write_text(json.dumps({
            "readiness": {"max_attempts": 2, "unknown_key": "ignored"},
        }))

        config = load_config(path=str(config_file), dotenv_path=no_dotenv)
        assert config.readiness.max_attempts == 2


class TestEnvOverride:
    def test_env_overrides_file(self, tmp_path, no_dotenv):
        config_file = tmp_path / "railway-mcp.json"
        config_file.write_text(json.dumps({"readiness": {"max_attempts": 2}}))

        with patch.dict(os.environ, {"RAILWAY_MCP_READINESS_MAX_ATTEMPTS": "9"}):
            config = load_config(path=str(config_file), dotenv_path=no_dotenv)

        assert config.readiness.max_attempts == 9

    def test_env_type_conversion(self, no_dotenv):
        env = {
            "RAILWAY_MCP_READINESS_DELAY_SECONDS": "0.5",
            "RAILWAY_MCP_LOG_JSON": "true",
            "RAILWAY_MCP_LOG_LEVEL": "info",
        }
        with patch.dict(os.environ, env):
            config = load_config(path=MISSING, dotenv_path=no_dotenv)

        assert config.readiness.delay_seconds == 0.5
        assert config.log_json is True
        assert config.log_level == "INFO"

    def test_default_token_from_env(self, no_dotenv):
        with patch.dict(os.environ, {"RAILWAY_MCP_API_DEFAULT_TOKEN": "tok"}):
            config = load_config(path=MISSING, dotenv_path=no_dotenv)

        assert config.api.default_token == "tok"

    def test_custom_prefix(self, no_dotenv):
        with patch.dict(os.environ, {"MYAPP_PROVISIONING_DEFAULT_PORT": "3306"}):
            config = load_config(path=MISSING, env_prefix="MYAPP", dotenv_path=no_dotenv)

        assert config.provisioning.default_port == 3306

    def test_dotenv_file(self, tmp_path, monkeypatch):
        # register the key so monkeypatch removes what load_dotenv sets
        monkeypatch.setenv("RAILWAY_MCP_MCP_SERVER_NAME", "placeholder")
        monkeypatch.delenv("RAILWAY_MCP_MCP_SERVER_NAME")
        dotenv = tmp_path / ".env"
        dotenv.write_text("RAILWAY_MCP_MCP_SERVER_NAME=from-dotenv\n")

        config = load_config(path=MISSING, dotenv_path=str(dotenv))

        assert config.mcp.server_name == "from-dotenv"

    def test_environment_beats_dotenv(self, tmp_path, monkeypatch):
        monkeypatch.setenv("RAILWAY_MCP_MCP_SERVER_NAME", "from-env")
        dotenv = tmp_path / ".env"
        dotenv.write_text("RAILWAY_MCP_MCP_SERVER_NAME=from-dotenv\n")

        config = load_config(path=MISSING, dotenv_path=str(dotenv))

        assert config.mcp.server_name == "from-env"


class TestConfigImmutability:
    def test_frozen(self, no_dotenv):
        config = load_config(path=MISSING, dotenv_path=no_dotenv)
        with pytest.raises(AttributeError):
            config.log_level = "DEBUG"

    def test_sub_config_frozen(self, no_dotenv):
        config = load_config(path=MISSING, dotenv_path=no_dotenv)
        with pytest.raises(AttributeError):
            config.provisioning.default_port = 1
