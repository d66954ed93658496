"""Configuration of the engine API types."""

from .env import ENV_VARIABLE, CodecConfig, Config, EnvConfig, get_config

__all__ = [
    "ENV_VARIABLE",
    "CodecConfig",
    "Config",
    "EnvConfig",
    "get_config",
]
