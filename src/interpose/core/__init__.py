"""Core module exports."""

from interpose.core.errors import (
    ConfigError,
    ErrorCode,
    InternalError,
    InterposeError,
    RegistrationError,
)
from interpose.core.logging import (
    configure_logging,
    get_log_file_path,
    get_logger,
)

__all__ = [
    # Errors
    "ConfigError",
    "ErrorCode",
    "InternalError",
    "InterposeError",
    "RegistrationError",
    # Logging
    "configure_logging",
    "get_log_file_path",
    "get_logger",
]
