"""Instance wrapper factory.

``wrap_class`` turns a class with registered interceptors into a façade type.
Constructing the façade type builds the real ("raw") instance with the
original constructor, allocates a fresh persistent context, and returns a
façade object whose attribute reads and writes are routed through the class
table:

- members without an Override go straight to the raw instance;
- members with one run their access chain on every read/write;
- a callable read result is handed out as a wrapper that runs the member's
  method chain on every call.

The façade type subclasses the original class, so ``isinstance`` checks and
special methods keep working; special methods run with ``self`` bound to the
façade and therefore see intercepted attributes.
"""

from __future__ import annotations

import functools
from collections.abc import Callable
from types import MethodType, SimpleNamespace
from typing import Any

import structlog

from interpose.config.constants import ORIGINAL_ATTR, STATE_SLOT
from interpose.config.loader import get_config
from interpose.core.errors import InternalError, RegistrationError
from interpose.engine.context import AccessContext, InvocationContext, new_persistent_context
from interpose.engine.registry import InterceptorTable, Override, OverrideRegistry

log = structlog.get_logger(__name__)


class InstanceState:
    """Per-instance bookkeeping behind a façade."""

    __slots__ = ("raw", "facade", "persistent_context", "table", "trace", "reject_falsy_writes")

    def __init__(
        self,
        raw: Any,
        facade: Any,
        table: InterceptorTable,
        *,
        trace: bool = False,
        reject_falsy_writes: bool = True,
    ) -> None:
        self.raw = raw
        self.facade = facade
        self.persistent_context: SimpleNamespace = new_persistent_context()
        self.table = table
        self.trace = trace
        self.reject_falsy_writes = reject_falsy_writes

    def _override(self, name: str) -> Override | None:
        override = self.table.get(name)
        if override is None or override.is_empty():
            return None
        return override

    def read(self, name: str) -> Any:
        override = self._override(name)
        if override is None:
            return self._rebind_to_facade(getattr(self.raw, name))

        access = AccessContext(self, override.access_interceptors, name, setter=False)
        value = access.next()
        if not callable(value):
            return value
        return self._method_wrapper(override, name, access, value)

    def write(self, name: str, value: Any) -> None:
        override = self._override(name)
        if override is None:
            setattr(self.raw, name, value)
            return

        access = AccessContext(self, override.access_interceptors, name, setter=True, value=value)
        if not access.next() and self.reject_falsy_writes:
            raise AttributeError(
                f"assignment to {name!r} was rejected by its access interceptors"
            )

    def _rebind_to_facade(self, value: Any) -> Any:
        if isinstance(value, MethodType) and value.__self__ is self.raw:
            return MethodType(value.__func__, self.facade)
        return value

    def _method_wrapper(
        self,
        override: Override,
        name: str,
        access: AccessContext,
        function: Callable[..., Any],
    ) -> Callable[..., Any]:
        this = access.this
        rebindable = (self.raw, self.facade, this, access.source)
        interceptors = override.method_interceptors

        def intercepted(*args: Any, **kwargs: Any) -> Any:
            invocation = InvocationContext(
                self,
                interceptors,
                name,
                function=function,
                this=this,
                args=list(args),
                kwargs=kwargs,
                rebindable=rebindable,
            )
            return invocation.next()

        return functools.wraps(function, updated=())(intercepted)


def _state_of(facade: Any) -> InstanceState:
    try:
        return object.__getattribute__(facade, STATE_SLOT)
    except AttributeError:
        raise InternalError.unexpected(
            "façade accessed before construction finished",
            type=type(facade).__qualname__,
        ) from None


def unwrap(facade: Any) -> Any:
    """Return the raw instance behind a façade (or the object itself)."""
    if ORIGINAL_ATTR not in vars(type(facade)):
        return facade
    return _state_of(facade).raw


def is_facade_type(cls: type) -> bool:
    return ORIGINAL_ATTR in vars(cls)


def wrap_class(cls: type, registry: OverrideRegistry) -> type:
    """Return the façade type for ``cls``, or ``cls`` itself if nothing is registered.

    Must run once per class, after all its registrations. Seals the class
    table.

    ``engine.trace_chains`` and ``engine.reject_falsy_writes`` are read from
    ``get_config()`` each time an instance is constructed, so a
    ``reset_config()`` applies to instances built afterwards. Existing
    instances keep the settings they were built with.

    The façade type cannot be subclassed. Subclass ``cls.__wrapped__`` and
    wrap the subclass instead.

    Raises:
        RegistrationError: If ``cls`` is already a façade type.
    """
    if is_facade_type(cls):
        raise RegistrationError.already_wrapped(cls.__qualname__)

    table = registry.table_for(cls)
    if table is None or not len(table):
        log.debug("class_left_unwrapped", cls=cls.__qualname__)
        return cls

    table.seal()
    original = cls

    def __new__(facade_cls: type, *args: Any, **kwargs: Any) -> Any:
        engine = get_config().engine
        raw = original(*args, **kwargs)
        facade = object.__new__(facade_cls)
        state = InstanceState(
            raw,
            facade,
            table,
            trace=engine.trace_chains,
            reject_falsy_writes=engine.reject_falsy_writes,
        )
        object.__setattr__(facade, STATE_SLOT, state)
        return facade

    def __init__(self: Any, *args: Any, **kwargs: Any) -> None:
        # The raw instance was fully initialised in __new__
        pass

    def __init_subclass__(subclass: type, **kwargs: Any) -> None:
        raise RegistrationError.facade_subclassed(original.__qualname__, subclass.__qualname__)

    def __getattribute__(self: Any, name: str) -> Any:
        return _state_of(self).read(name)

    def __setattr__(self: Any, name: str, value: Any) -> None:
        _state_of(self).write(name, value)

    def __delattr__(self: Any, name: str) -> None:
        delattr(_state_of(self).raw, name)

    def __dir__(self: Any) -> list[str]:
        return dir(_state_of(self).raw)

    namespace: dict[str, Any] = {
        "__slots__": (STATE_SLOT,),
        "__new__": __new__,
        "__init__": __init__,
        "__init_subclass__": __init_subclass__,
        "__getattribute__": __getattribute__,
        "__setattr__": __setattr__,
        "__delattr__": __delattr__,
        "__dir__": __dir__,
        "__module__": cls.__module__,
        "__qualname__": cls.__qualname__,
        "__doc__": cls.__doc__,
        "__wrapped__": cls,
        ORIGINAL_ATTR: cls,
    }
    facade_type = type(cls)(cls.__name__, (cls,), namespace)

    log.debug("class_wrapped", cls=cls.__qualname__, members=sorted(table))
    return facade_type
