"""Interpose error types with typed error codes.

Error code ranges:
- 2xxx: Config
- 3xxx: Registration
- 9xxx: Internal

Interceptor chains never raise these: a fault inside an interceptor or a
base operation reaches the caller unmodified.
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any


class ErrorCode(IntEnum):
    """Typed error codes for programmatic handling."""

    # Config (2xxx)
    CONFIG_PARSE_ERROR = 2001
    CONFIG_INVALID_VALUE = 2002

    # Registration (3xxx)
    REGISTRATION_SEALED = 3001
    REGISTRATION_NOT_CALLABLE = 3002
    REGISTRATION_MISSING_MEMBER = 3003
    REGISTRATION_UNSUPPORTED_TARGET = 3004
    REGISTRATION_ALREADY_WRAPPED = 3005
    REGISTRATION_FACADE_SUBCLASSED = 3006

    # Internal (9xxx)
    INTERNAL_ERROR = 9001


@dataclass(frozen=True, slots=True)
class InterposeError(Exception):
    """Base error with structured context."""

    code: ErrorCode
    message: str
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def error_name(self) -> str:
        """String identifier for logging (e.g., 'REGISTRATION_SEALED')."""
        return self.code.name

    def to_dict(self) -> dict[str, Any]:
        return {
            "code": self.code.value,
            "error": self.error_name,
            "message": self.message,
            "details": self.details,
        }

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.error_name}: {self.message}"


class ConfigError(InterposeError):
    """Configuration-related errors."""

    @classmethod
    def parse_error(cls, path: str, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_PARSE_ERROR,
            message=f"Failed to parse config at {path}: {reason}",
            details={"path": path, "reason": reason},
        )

    @classmethod
    def invalid_value(cls, field: str, value: Any, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_INVALID_VALUE,
            message=f"Invalid value for '{field}': {reason}",
            details={"field": field, "value": str(value), "reason": reason},
        )


class RegistrationError(InterposeError):
    """Errors raised while declaring interceptors or wrapping a class."""

    @classmethod
    def sealed_table(cls, class_name: str, member: str) -> "RegistrationError":
        return cls(
            code=ErrorCode.REGISTRATION_SEALED,
            message=f"Cannot register on '{class_name}.{member}': class is already wrapped",
            details={"class": class_name, "member": member},
        )

    @classmethod
    def not_callable(cls, member: str, interceptor: Any) -> "RegistrationError":
        return cls(
            code=ErrorCode.REGISTRATION_NOT_CALLABLE,
            message=f"Interceptor for '{member}' is not callable: {interceptor!r}",
            details={"member": member, "interceptor": repr(interceptor)},
        )

    @classmethod
    def missing_member(cls, class_name: str) -> "RegistrationError":
        return cls(
            code=ErrorCode.REGISTRATION_MISSING_MEMBER,
            message=f"Class-level registration on '{class_name}' needs member=<name>",
            details={"class": class_name},
        )

    @classmethod
    def unsupported_target(cls, target: Any) -> "RegistrationError":
        return cls(
            code=ErrorCode.REGISTRATION_UNSUPPORTED_TARGET,
            message=f"Cannot attach interceptors to {target!r}",
            details={"target": repr(target)},
        )

    @classmethod
    def already_wrapped(cls, class_name: str) -> "RegistrationError":
        return cls(
            code=ErrorCode.REGISTRATION_ALREADY_WRAPPED,
            message=f"Class '{class_name}' is already wrapped",
            details={"class": class_name},
        )

    @classmethod
    def facade_subclassed(cls, class_name: str, subclass_name: str) -> "RegistrationError":
        return cls(
            code=ErrorCode.REGISTRATION_FACADE_SUBCLASSED,
            message=f"Cannot subclass wrapped class '{class_name}' as '{subclass_name}'; "
            f"subclass {class_name}.__wrapped__ and apply proxy() to the subclass",
            details={"class": class_name, "subclass": subclass_name},
        )


class InternalError(InterposeError):
    """Internal/unexpected errors."""

    @classmethod
    def unexpected(cls, reason: str, **details: Any) -> "InternalError":
        return cls(
            code=ErrorCode.INTERNAL_ERROR,
            message=f"Internal error: {reason}",
            details=details,
        )
