"""Pydantic Settings for the HTB client.

All environment variables use the HTB_ prefix.
Example: HTB_API_TOKEN=eyJ0eXAi..., HTB_RATE_LIMIT_TOKENS=10

Settings may also come from a YAML file with a top-level ``htb:`` mapping;
environment variables and explicit overrides win over file values.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings

from htb.errors import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://labs.hackthebox.com/api"


class HTBSettings(BaseSettings):
    """Client configuration validated from environment variables."""

    # API
    api_token: str  # App token, sent as a bearer header
    base_url: str = DEFAULT_BASE_URL
    timeout_seconds: float = Field(default=30.0, gt=0)
    user_agent: str = "htb-python/0.1.0"

    # Rate limiting
    rate_limit_tokens: int = Field(default=5, ge=1)
    rate_limit_interval_seconds: float = Field(default=1.0, gt=0)

    # Logging. The client never configures logging itself; applications pass
    # this to htb.logging_config.configure_logging.
    log_level: str = "INFO"

    model_config = {"env_prefix": "HTB_"}


def _read_yaml(yaml_path: str) -> dict[str, Any]:
    path = Path(yaml_path)

    if not path.exists():
        logger.warning("Settings file not found at %s, using environment only", yaml_path)
        return {}

    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Failed to parse settings YAML at {yaml_path}: {exc}") from exc

    if raw is None:
        return {}
    if not isinstance(raw, dict) or not isinstance(raw.get("htb", {}), dict):
        raise ConfigurationError(f"Settings YAML at {yaml_path} must contain an 'htb' mapping")

    return raw.get("htb") or {}


def load_settings(yaml_path: str | None = None, **overrides: Any) -> HTBSettings:
    """Build settings from an optional YAML file, the environment and overrides.

    Precedence (highest first): ``overrides``, ``HTB_*`` environment
    variables, YAML file values, field defaults.

    Raises:
        ConfigurationError: If the YAML is malformed or validation fails.
    """
    file_values = _read_yaml(yaml_path) if yaml_path else {}

    # Init kwargs beat the environment in pydantic-settings, so file values
    # that are also set in the environment are dropped here.
    prefix = HTBSettings.model_config["env_prefix"]
    env_keys = {key.upper() for key in os.environ}
    values = {k: v for k, v in file_values.items() if f"{prefix}{k}".upper() not in env_keys}
    values.update(overrides)

    try:
        return HTBSettings(**values)
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid settings: {exc}") from exc
