"""Pydantic configuration models with env var support.

Configuration Hierarchy (highest to lowest precedence):
1. Direct kwargs to load_config()
2. Environment variables (INTERPOSE__SECTION__KEY)
3. Project YAML (./interpose.yaml)
4. Global YAML (~/.config/interpose/config.yaml)
5. Built-in defaults (this file)

Environment Variable Format:
    INTERPOSE__<SECTION>__<KEY>=<VALUE>

Examples:
    INTERPOSE__LOGGING__LEVEL=DEBUG
    INTERPOSE__ENGINE__STRICT_REGISTRATION=true
    INTERPOSE__ENGINE__TRACE_CHAINS=1
"""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class LogOutputConfig(BaseModel):
    """Single logging output configuration.

    Env vars: Not directly configurable via env (use YAML for multi-output).
    """

    format: Literal["json", "console"] = "console"
    destination: str = "stderr"  # stderr, stdout, or absolute file path
    level: LogLevel | None = None  # Inherits from parent if None

    @field_validator("destination")
    @classmethod
    def validate_destination(cls, v: str) -> str:
        if v in ("stderr", "stdout"):
            return v
        path = Path(v).expanduser()
        if not path.is_absolute():
            raise ValueError(f"File destination must be absolute path: {v}")
        return str(path)


class LoggingConfig(BaseModel):
    """Logging configuration.

    Env vars:
        INTERPOSE__LOGGING__LEVEL: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """

    level: LogLevel = Field(
        default="INFO",
        description="Root log level. DEBUG together with engine.trace_chains logs every chain step.",
    )
    outputs: list[LogOutputConfig] = Field(default_factory=lambda: [LogOutputConfig()])


class EngineConfig(BaseModel):
    """Interception engine configuration.

    Env vars:
        INTERPOSE__ENGINE__STRICT_REGISTRATION: Raise on registrations that would be ignored
        INTERPOSE__ENGINE__TRACE_CHAINS: Log every chain step at debug level
        INTERPOSE__ENGINE__REJECT_FALSY_WRITES: Raise when a write chain returns a falsy value
    """

    strict_registration: bool = Field(
        default=False,
        description="Raise RegistrationError when interceptors are registered on a class "
        "that is already wrapped. When false the registration is logged and ignored.",
    )
    trace_chains: bool = Field(
        default=False,
        description="Log each interceptor step and fallthrough at debug level. "
        "TRADEOFF: Adds a log call per step on every intercepted access.",
    )
    reject_falsy_writes: bool = Field(
        default=True,
        description="Raise AttributeError when the access chain of an assignment returns "
        "a falsy value. When false a rejected write is silently dropped.",
    )


class InterposeConfig(BaseModel):
    """Root configuration for interpose.

    All settings can be configured via:
    1. Environment variables: INTERPOSE__SECTION__KEY
    2. YAML config files (project or global)
    3. Direct kwargs to load_config()
    """

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    engine: EngineConfig = Field(default_factory=EngineConfig)
