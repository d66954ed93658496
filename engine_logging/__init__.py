"""Logging helpers shared by the engine API type packages."""

from .logging import VERBOSE_LEVEL, EngineLogger, get_logger

__all__ = [
    "VERBOSE_LEVEL",
    "EngineLogger",
    "get_logger",
]
