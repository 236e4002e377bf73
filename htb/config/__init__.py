"""Configuration module: client settings and the YAML loader."""

from htb.config.settings import HTBSettings, load_settings

__all__ = [
    "HTBSettings",
    "load_settings",
]
