"""Config module exports."""

from interpose.config.loader import get_config, load_config, reset_config
from interpose.config.models import (
    EngineConfig,
    InterposeConfig,
    LoggingConfig,
    LogOutputConfig,
)

__all__ = [
    "get_config",
    "load_config",
    "reset_config",
    "EngineConfig",
    "InterposeConfig",
    "LoggingConfig",
    "LogOutputConfig",
]
