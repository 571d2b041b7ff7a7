"""
Configuration Module

Architectural Intent:
- Centralized configuration loading from JSON files
- Provides typed access to all server settings
- Falls back to sensible defaults when config file is absent
- Environment variables (and an optional .env file) override file-based config

Design Decisions:
- Config is a frozen dataclass for immutability after load
- Nested config sections map to sub-dataclasses
- The access token default exists only for local use; per-call credentials
  always take precedence
"""

from __future__ import annotations
from dataclasses import dataclass, field
import dataclasses
from pathlib import Path
from typing import Optional
import json
import logging
import os

from dotenv import find_dotenv, load_dotenv

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ApiConfig:
    """Remote platform API configuration."""
    endpoint: str = "https://backboard.railway.app/graphql/v2"
    timeout_seconds: float = 30.0
    default_token: str = field(default="", repr=False)


@dataclass(frozen=True)
class TemplateSearchConfig:
    """Fuzzy template search tuning (similarity is 0-100)."""
    search_threshold: float = 70.0
    name_weight: float = 3.0
    description_weight: float = 2.0


@dataclass(frozen=True)
class ProvisioningConfig:
    """Defaults applied when a template leaves a descriptor out."""
    default_port: int = 5432
    default_mount_path: str = "/data"


@dataclass(frozen=True)
class ReadinessConfig:
    """Waiting for eventually consistent platform state."""
    delay_seconds: float = 5.0
    max_attempts: int = 6
    backoff_min: float = 1.0
    backoff_max: float = 10.0


@dataclass(frozen=True)
class MCPConfig:
    """MCP server configuration."""
    server_name: str = "railway-tools"


@dataclass(frozen=True)
class RailwayMCPConfig:
    """Root configuration for the application."""
    api: ApiConfig = field(default_factory=ApiConfig)
    templates: TemplateSearchConfig = field(default_factory=TemplateSearchConfig)
    provisioning: ProvisioningConfig = field(default_factory=ProvisioningConfig)
    readiness: ReadinessConfig = field(default_factory=ReadinessConfig)
    mcp: MCPConfig = field(default_factory=MCPConfig)
    log_level: str = "WARNING"
    log_json: bool = False


_SECTIONS = {
    "api": ApiConfig,
    "templates": TemplateSearchConfig,
    "provisioning": ProvisioningConfig,
    "readiness": ReadinessConfig,
    "mcp": MCPConfig,
}
_TOP_LEVEL = ("log_level", "log_json")


def _env_override(data: dict, prefix: str = "RAILWAY_MCP") -> dict:
    """Override config values with environment variables.

    Environment variables follow the pattern RAILWAY_MCP_SECTION_KEY.
    For example: RAILWAY_MCP_API_DEFAULT_TOKEN=..., RAILWAY_MCP_LOG_LEVEL=DEBUG
    """
    for key, value in os.environ.items():
        if not key.startswith(f"{prefix}_"):
            continue
        name = key[len(prefix) + 1:].lower()
        if name in _TOP_LEVEL:
            data[name] = value
            continue
        parts = name.split("_", 1)
        if len(parts) == 2 and parts[0] in _SECTIONS:
            section, field_name = parts
            if not isinstance(data.get(section), dict):
                data[section] = {}
            data[section][field_name] = value
    return data


def _parse_config_file(path: Path) -> dict:
    """Parse a JSON config file. Returns empty dict on failure."""
    try:
        with open(path) as f:
            return json.load(f)
    except FileNotFoundError:
        logger.debug("Config file not found: %s", path)
        return {}
    except json.JSONDecodeError as e:
        logger.warning("Invalid config file %s: %s", path, e)
        return {}


def _coerce(type_name: str, value):
    if not isinstance(value, str):
        return value
    if type_name == "int":
        return int(value)
    if type_name == "float":
        return float(value)
    if type_name == "bool":
        return value.lower() in ("true", "1", "yes")
    return value


def _build_sub_config(cls, data: dict):
    """Build a sub-config dataclass from a dict, ignoring unknown keys."""
    fields = {f.name: f for f in dataclasses.fields(cls)}
    filtered = {
        k: _coerce(fields[k].type, v) for k, v in data.items() if k in fields
    }
    return cls(**filtered)


def load_config(
    path: Optional[str] = None,
    env_prefix: str = "RAILWAY_MCP",
    dotenv_path: Optional[str] = None,
) -> RailwayMCPConfig:
    """Load configuration from .env, file and environment variables.

    Priority (highest to lowest):
    1. Environment variables (RAILWAY_MCP_SECTION_KEY), including values
       loaded from a .env file that are not already set
    2. Config file values
    3. Defaults

    Args:
        path: Path to config file (JSON). Defaults to railway-mcp.json in CWD.
        env_prefix: Environment variable prefix. Defaults to RAILWAY_MCP.
        dotenv_path: Optional .env file; defaults to searching from CWD.
    """
    load_dotenv(dotenv_path or find_dotenv(usecwd=True), override=False)

    config_path = Path(path) if path else Path("railway-mcp.json")
    data = _parse_config_file(config_path)
    data = _env_override(data, env_prefix)

    sections = {
        name: _build_sub_config(cls, data.get(name) or {})
        for name, cls in _SECTIONS.items()
    }
    return RailwayMCPConfig(
        **sections,
        log_level=str(data.get("log_level", "WARNING")).upper(),
        log_json=_coerce("bool", data.get("log_json", False)),
    )
