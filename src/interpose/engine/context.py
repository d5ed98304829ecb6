"""Invocation and access contexts.

An ``InvocationContext`` lives for one method call, an ``AccessContext`` for
one attribute read or write. Both are created fresh per activation, so
re-entrant and recursive access never shares cursor state.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from types import MethodType, SimpleNamespace
from typing import TYPE_CHECKING, Any

from interpose.engine.chain import ChainContext

if TYPE_CHECKING:
    from interpose.engine.facade import InstanceState


class AccessContext(ChainContext):
    """Attribute read (``setter`` false) or write (``setter`` true).

    For writes ``value`` holds the value being assigned and may be replaced by
    interceptors. For reads it is ignored: the read result is whatever the
    chain returns.
    """

    __slots__ = ("_state", "_setter", "value", "source")

    def __init__(
        self,
        state: InstanceState,
        interceptors: Sequence[Callable[[Any], Any]],
        member: str,
        *,
        setter: bool,
        value: Any = None,
    ) -> None:
        super().__init__(
            interceptors,
            target=state.facade,
            member=member,
            persistent_context=state.persistent_context,
            this=state.facade,
            trace=state.trace,
        )
        self._state = state
        self._setter = setter
        self.value = value
        # Object the fallthrough operated on, None until it runs
        self.source: Any = None

    @property
    def setter(self) -> bool:
        return self._setter

    def _invokee(self) -> Any:
        # Still the originating façade: go to the raw instance, otherwise the
        # read would land in the same trap again.
        if self.this is self._state.facade:
            return self._state.raw
        return self.this

    def _fallthrough(self) -> Any:
        invokee = self.source = self._invokee()
        if self._setter:
            setattr(invokee, self._member, self.value)
            return True
        return getattr(invokee, self._member)


class InvocationContext(ChainContext):
    """One call of an intercepted callable.

    ``args`` and ``kwargs`` may be mutated or replaced by interceptors; the
    base operation uses their values at the time it runs.
    """

    __slots__ = ("_function", "_rebindable", "args", "kwargs")

    def __init__(
        self,
        state: InstanceState,
        interceptors: Sequence[Callable[[Any], Any]],
        member: str,
        *,
        function: Callable[..., Any],
        this: Any,
        args: list[Any],
        kwargs: dict[str, Any],
        rebindable: tuple[Any, ...] = (),
    ) -> None:
        super().__init__(
            interceptors,
            target=state.facade,
            member=member,
            persistent_context=state.persistent_context,
            this=this,
            trace=state.trace,
        )
        self._function = function
        self._rebindable = rebindable
        self.args = args
        self.kwargs = kwargs

    def _fallthrough(self) -> Any:
        function = self._function
        if isinstance(function, MethodType) and _is_receiver(function.__self__, self._rebindable):
            # Re-bind to the current this so reassignment takes effect
            return function.__func__(self.this, *self.args, **self.kwargs)
        return function(*self.args, **self.kwargs)


def _is_receiver(bound_to: Any, candidates: tuple[Any, ...]) -> bool:
    return any(bound_to is candidate for candidate in candidates)


def new_persistent_context() -> SimpleNamespace:
    """Fresh, empty per-instance record."""
    return SimpleNamespace()
