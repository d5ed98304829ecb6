"""Cursor-based interceptor chain.

A chain walks its interceptor list from the end: the last registered
interceptor is the outermost wrapper, the first registered the innermost, and
the base operation sits inside all of them. Every ``next()`` call moves the
cursor one step inward; once the list is exhausted ``next()`` runs the base
operation with whatever state the interceptors left on the context.

Nothing here catches exceptions. A fault raised by an interceptor or by the
base operation unwinds through every active frame to the caller.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from types import SimpleNamespace
from typing import Any

import structlog

log = structlog.get_logger(__name__)


class ChainContext:
    """State of one chain activation, handed to every interceptor.

    ``target``, ``member`` and ``persistent_context`` are fixed for the whole
    activation. ``this`` may be reassigned by any interceptor; later
    interceptors and the base operation see the new value.
    """

    __slots__ = ("_interceptors", "_cursor", "_target", "_member", "_persistent", "_trace", "this")

    def __init__(
        self,
        interceptors: Sequence[Callable[[Any], Any]],
        *,
        target: Any,
        member: str,
        persistent_context: SimpleNamespace,
        this: Any,
        trace: bool = False,
    ) -> None:
        self._interceptors = interceptors
        self._cursor = len(interceptors)
        self._target = target
        self._member = member
        self._persistent = persistent_context
        self._trace = trace
        self.this = this

    @property
    def target(self) -> Any:
        """The façade the access originated on. Never changes."""
        return self._target

    @property
    def member(self) -> str:
        return self._member

    @property
    def persistent_context(self) -> SimpleNamespace:
        """Per-instance record shared by every chain of that instance."""
        return self._persistent

    def next(self) -> Any:
        """Invoke the next interceptor, or the base operation once exhausted."""
        if self._cursor > 0:
            self._cursor -= 1
            interceptor = self._interceptors[self._cursor]
            if self._trace:
                log.debug(
                    "chain_step",
                    member=self._member,
                    position=self._cursor,
                    interceptor=getattr(interceptor, "__qualname__", repr(interceptor)),
                )
            return interceptor(self)
        if self._trace:
            log.debug("chain_fallthrough", member=self._member)
        return self._fallthrough()

    def _fallthrough(self) -> Any:
        raise NotImplementedError
