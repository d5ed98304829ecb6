"""Override registry: per-class tables of interceptor lists.

Each registered class owns one ``InterceptorTable`` mapping a member name to
its ``Override`` (an ordered list of method interceptors and an ordered list
of access interceptors). Registrations only ever append. Once the wrapper
factory has run for a class its table is sealed and treated as read-only.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

import structlog

from interpose.config.loader import get_config
from interpose.core.errors import RegistrationError

if TYPE_CHECKING:
    from interpose.engine.context import AccessContext, InvocationContext

log = structlog.get_logger(__name__)

MethodInterceptor = Callable[["InvocationContext"], Any]
AccessInterceptor = Callable[["AccessContext"], Any]


@dataclass
class Override:
    """Interceptor lists of a single member."""

    method_interceptors: list[MethodInterceptor] = field(default_factory=list)
    access_interceptors: list[AccessInterceptor] = field(default_factory=list)

    def is_empty(self) -> bool:
        return not self.method_interceptors and not self.access_interceptors


class InterceptorTable:
    """Member name -> Override for one class."""

    def __init__(self, owner: type) -> None:
        self.owner = owner
        self.sealed = False
        self._overrides: dict[str, Override] = {}

    def get(self, member: str) -> Override | None:
        return self._overrides.get(member)

    def override_for(self, member: str) -> Override:
        """Return the member's Override, creating it on first use."""
        override = self._overrides.get(member)
        if override is None:
            override = self._overrides[member] = Override()
        return override

    def seal(self) -> None:
        self.sealed = True

    def __contains__(self, member: object) -> bool:
        return member in self._overrides

    def __iter__(self) -> Iterator[str]:
        return iter(self._overrides)

    def __len__(self) -> int:
        return len(self._overrides)


class OverrideRegistry:
    """Registry of interceptor tables keyed by class identity.

    Usage:
        registry = OverrideRegistry()
        registry.register_method_interceptors(Greeter, "greet", log_call)
        registry.register_access_interceptors(Greeter, "first_name", upper)
        Greeter = wrap_class(Greeter, registry)
    """

    def __init__(self, *, strict: bool | None = None) -> None:
        """Create an empty registry.

        Args:
            strict: Raise on registrations against sealed tables. ``None``
                    defers to ``engine.strict_registration`` from config.
        """
        self._strict = strict
        self._tables: dict[type, InterceptorTable] = {}

    @property
    def strict(self) -> bool:
        if self._strict is not None:
            return self._strict
        return get_config().engine.strict_registration

    def table_for(self, cls: type) -> InterceptorTable | None:
        """Get the table of a class, or None if nothing was ever registered."""
        return self._tables.get(cls)

    def register_method_interceptors(
        self, cls: type, member: str, *interceptors: MethodInterceptor
    ) -> None:
        """Append method interceptors to ``cls.member``."""
        override = self._writable_override(cls, member, interceptors)
        if override is not None:
            override.method_interceptors.extend(interceptors)

    def register_access_interceptors(
        self, cls: type, member: str, *interceptors: AccessInterceptor
    ) -> None:
        """Append access interceptors to ``cls.member``."""
        override = self._writable_override(cls, member, interceptors)
        if override is not None:
            override.access_interceptors.extend(interceptors)

    def clear(self) -> None:
        """Clear all registrations (for testing)."""
        self._tables.clear()

    def _writable_override(
        self, cls: type, member: str, interceptors: tuple[Callable[..., Any], ...]
    ) -> Override | None:
        for interceptor in interceptors:
            if not callable(interceptor):
                raise RegistrationError.not_callable(member, interceptor)

        table = self._tables.get(cls)
        if table is None:
            table = self._tables[cls] = InterceptorTable(cls)
        elif table.sealed:
            if self.strict:
                raise RegistrationError.sealed_table(cls.__qualname__, member)
            log.warning(
                "registration_ignored",
                cls=cls.__qualname__,
                member=member,
                reason="class already wrapped",
            )
            return None

        log.debug(
            "interceptors_registered",
            cls=cls.__qualname__,
            member=member,
            count=len(interceptors),
        )
        return table.override_for(member)


# Global registry instance used by the declarative decorators
registry = OverrideRegistry()
