"""
A module for exposing the codec configuration.

The configuration is read from a YAML file whose path is given explicitly or
through the `ENGINE_TYPES_CONFIG` environment variable, and validated with
Pydantic. Without a file the defaults below apply, which match mainnet.

Classes:
- CodecConfig: Blob size and the versioned hash version.
- Config: The overall configuration structure.
- EnvConfig: Loads the configuration from disk.

Usage:
- Call `get_config()` to obtain the process-wide configuration.
"""

import functools
import os
from pathlib import Path

import yaml
from pydantic import BaseModel, Field, ValidationError

ENV_VARIABLE = "ENGINE_TYPES_CONFIG"


class CodecConfig(BaseModel):
    """
    Sizes used by the blob bundle types.

    Attributes:
    - bytes_per_blob (int): Size of a single blob.
    - versioned_hash_version (int): Version byte of blob versioned hashes.

    """

    bytes_per_blob: int = Field(131_072, gt=0)
    versioned_hash_version: int = Field(1, ge=0, le=255)


class Config(BaseModel):
    """Represents the overall configuration."""

    codec: CodecConfig = CodecConfig()


class EnvConfig(Config):
    """
    Loads and validates the configuration from a YAML file.

    This is a wrapper class for the Config model. It reads a config file
    from disk into a Config model and then exposes it.
    """

    def __init__(self, path: Path | str | None = None):
        """Init for the EnvConfig class."""
        if path is None:
            path = os.environ.get(ENV_VARIABLE)
        if path is None:
            super().__init__()
            return

        config_path = Path(path)
        if not config_path.exists():
            raise FileNotFoundError(f"The configuration file '{config_path}' does not exist.")

        with config_path.open("r") as file:
            config_data = yaml.safe_load(file) or {}
            if not isinstance(config_data, dict):
                raise ValueError(f"Invalid configuration: expected a mapping in '{config_path}'")
            try:
                super().__init__(**config_data)
            except ValidationError as e:
                raise ValueError(f"Invalid configuration: {e}") from e


@functools.cache
def get_config() -> Config:
    """Return the configuration, loading it on first use."""
    return EnvConfig()
