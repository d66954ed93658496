"""
Common definitions and types.
"""

from .base_types import (
    Address,
    Bloom,
    Bytes,
    Bytes8,
    Bytes48,
    FixedSizeBytes,
    Hash,
    HexQuantity,
    Uint64,
    Uint256,
)
from .conversions import to_bytes
from .json import to_json
from .pydantic import CamelModel, EngineRootModel, FlatCamelModel

__all__ = (
    "Address",
    "Bloom",
    "Bytes",
    "Bytes8",
    "Bytes48",
    "CamelModel",
    "EngineRootModel",
    "FixedSizeBytes",
    "FlatCamelModel",
    "Hash",
    "HexQuantity",
    "Uint64",
    "Uint256",
    "to_bytes",
    "to_json",
)
