"""Declarative registration: member decorators and the ``proxy`` class decorator.

Member decorators record their interceptors on the decorated function; the
``proxy()`` class decorator collects those records into a registry and wraps
the class. Stacked decorators are applied bottom-up, so the one nearest the
``def`` registers first and ends up innermost::

    @proxy()
    @getter(str.title, member="first_name")
    class Greeter:
        def __init__(self) -> None:
            self.first_name = "jon"

        @around(log_call)      # outermost
        @before(normalize)     # innermost
        def greet(self, greeting: str) -> str:
            return f"{self.first_name}: {greeting}"

Plain data attributes cannot carry decorators, so member decorators also
accept a class together with ``member=<name>``.

Decorating a class without ``proxy()`` records interceptors that are never
registered: the class behaves as if it had none.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, Literal, TypeVar

from interpose.config.constants import PENDING_ATTR
from interpose.core.errors import RegistrationError
from interpose.engine.context import AccessContext, InvocationContext
from interpose.engine.facade import is_facade_type, wrap_class
from interpose.engine.registry import (
    AccessInterceptor,
    MethodInterceptor,
    OverrideRegistry,
    registry as default_registry,
)

T = TypeVar("T")

ChainKind = Literal["method", "access"]

# (member name or None, chain kind, interceptors)
PendingEntry = tuple[str | None, ChainKind, tuple[Callable[..., Any], ...]]


def _carrier(target: Any) -> Any:
    """Object the pending registrations are stored on."""
    if isinstance(target, property):
        if target.fget is None:
            raise RegistrationError.unsupported_target(target)
        return target.fget
    if isinstance(target, (classmethod, staticmethod)):
        return target.__func__
    return target


def _pending_of(carrier: Any) -> list[PendingEntry]:
    if not hasattr(carrier, "__dict__"):
        return []
    return vars(carrier).get(PENDING_ATTR, [])


def _ensure_pending(carrier: Any) -> list[PendingEntry]:
    pending = vars(carrier).get(PENDING_ATTR) if hasattr(carrier, "__dict__") else None
    if pending is None:
        pending = []
        try:
            setattr(carrier, PENDING_ATTR, pending)
        except (AttributeError, TypeError):
            raise RegistrationError.unsupported_target(carrier) from None
    return pending


def _member_decorator(
    kind: ChainKind,
    interceptors: tuple[Callable[..., Any], ...],
    member: str | None,
) -> Callable[[T], T]:
    for interceptor in interceptors:
        if not callable(interceptor):
            raise RegistrationError.not_callable(member or "<member>", interceptor)

    def decorator(target: T) -> T:
        if isinstance(target, type):
            if member is None:
                raise RegistrationError.missing_member(target.__qualname__)
            _ensure_pending(target).append((member, kind, interceptors))
            return target
        if member is not None or not _has_carrier(target):
            raise RegistrationError.unsupported_target(target)
        _ensure_pending(_carrier(target)).append((None, kind, interceptors))
        return target

    return decorator


def around(*interceptors: MethodInterceptor, member: str | None = None) -> Callable[[T], T]:
    """Register method interceptors.

    Each receives an ``InvocationContext`` and returns the call result,
    normally by calling ``invocation.next()``.
    """
    return _member_decorator("method", interceptors, member)


def access(*interceptors: AccessInterceptor, member: str | None = None) -> Callable[[T], T]:
    """Register access interceptors.

    Each receives an ``AccessContext`` and returns the read value (reads) or
    a success flag (writes), normally by calling ``access.next()``.
    """
    return _member_decorator("access", interceptors, member)


def after(*transforms: Callable[[Any], Any], member: str | None = None) -> Callable[[T], T]:
    """Pipe the call result through each transform."""

    def make(transform: Callable[[Any], Any]) -> MethodInterceptor:
        def after_interceptor(invocation: InvocationContext) -> Any:
            return transform(invocation.next())

        return after_interceptor

    return around(*(make(t) for t in transforms), member=member)


def before(
    *transforms: Callable[[list[Any]], list[Any]], member: str | None = None
) -> Callable[[T], T]:
    """Replace the call arguments with ``transform(args)`` before the call."""

    def make(transform: Callable[[list[Any]], list[Any]]) -> MethodInterceptor:
        def before_interceptor(invocation: InvocationContext) -> Any:
            invocation.args = list(transform(invocation.args))
            return invocation.next()

        return before_interceptor

    return around(*(make(t) for t in transforms), member=member)


def getter(*transforms: Callable[[Any], Any], member: str | None = None) -> Callable[[T], T]:
    """Pipe read values through each transform; writes pass untouched."""

    def make(transform: Callable[[Any], Any]) -> AccessInterceptor:
        def getter_interceptor(acc: AccessContext) -> Any:
            if acc.setter:
                return acc.next()
            return transform(acc.next())

        return getter_interceptor

    return access(*(make(t) for t in transforms), member=member)


def setter(*transforms: Callable[[Any], Any], member: str | None = None) -> Callable[[T], T]:
    """Replace assigned values with ``transform(value)``; reads pass untouched."""

    def make(transform: Callable[[Any], Any]) -> AccessInterceptor:
        def setter_interceptor(acc: AccessContext) -> Any:
            if not acc.setter:
                return acc.next()
            acc.value = transform(acc.value)
            return acc.next()

        return setter_interceptor

    return access(*(make(t) for t in transforms), member=member)


def _register(
    target_registry: OverrideRegistry,
    cls: type,
    member: str,
    kind: ChainKind,
    interceptors: tuple[Callable[..., Any], ...],
) -> None:
    if kind == "method":
        target_registry.register_method_interceptors(cls, member, *interceptors)
    else:
        target_registry.register_access_interceptors(cls, member, *interceptors)


def _collect(cls: type, target_registry: OverrideRegistry) -> None:
    # Most-derived definition of each member wins
    namespace: dict[str, Any] = {}
    for klass in reversed(cls.__mro__):
        namespace.update(vars(klass))

    for name, value in namespace.items():
        if not _has_carrier(value):
            continue
        for _, kind, interceptors in _pending_of(_carrier(value)):
            _register(target_registry, cls, name, kind, interceptors)

    # Class-level registrations, base classes first
    for klass in reversed(cls.__mro__):
        for member, kind, interceptors in _pending_of(klass):
            _register(target_registry, cls, member, kind, interceptors)


def _has_carrier(value: Any) -> bool:
    # Classes keep their own class-level entries, never member entries
    if isinstance(value, type):
        return False
    if isinstance(value, property):
        return value.fget is not None
    return isinstance(value, (classmethod, staticmethod)) or callable(value)


def proxy(registry: OverrideRegistry | None = None) -> Callable[[type], type]:
    """Class decorator: register the recorded interceptors and wrap the class.

    Must be the outermost decorator so every member and class-level
    registration is known when it runs. Returns the class unchanged when no
    interceptors were recorded.
    """
    target_registry = registry if registry is not None else default_registry

    def decorator(cls: type) -> type:
        if is_facade_type(cls):
            raise RegistrationError.already_wrapped(cls.__qualname__)
        _collect(cls, target_registry)
        return wrap_class(cls, target_registry)

    return decorator
