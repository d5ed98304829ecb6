"""Tests for the cursor-based chain executor.

Covers:
- LIFO execution order (last registered runs outermost)
- Fallthrough with empty chains
- Zero, one and repeated next() calls
- Read-only fields vs reassignable this
- Exception propagation
"""

from __future__ import annotations

from types import SimpleNamespace
from typing import Any

import pytest

from interpose.engine.chain import ChainContext


class _RecordingChain(ChainContext):
    """Chain whose base operation records the receiver it ran with."""

    __slots__ = ("base_calls",)

    def __init__(self, interceptors: list[Any], **kwargs: Any) -> None:
        super().__init__(
            interceptors,
            target=kwargs.pop("target", "target"),
            member=kwargs.pop("member", "member"),
            persistent_context=kwargs.pop("persistent_context", SimpleNamespace()),
            this=kwargs.pop("this", "target"),
        )
        self.base_calls: list[Any] = []

    def _fallthrough(self) -> Any:
        self.base_calls.append(self.this)
        return f"base({self.this})"


def _tagging(log: list[str], tag: str) -> Any:
    def interceptor(ctx: ChainContext) -> Any:
        log.append(f"{tag}-before")
        result = ctx.next()
        log.append(f"{tag}-after")
        return result

    return interceptor


class TestChainOrdering:
    """Execution order of registered interceptors."""

    def test_given_empty_chain_when_next_then_runs_base(self) -> None:
        """An empty chain falls straight through to the base operation."""
        # Given
        chain = _RecordingChain([])

        # When
        result = chain.next()

        # Then
        assert result == "base(target)"
        assert chain.base_calls == ["target"]

    def test_given_three_interceptors_when_next_then_last_registered_is_outermost(self) -> None:
        """The list is walked from the end towards the start."""
        # Given
        log: list[str] = []
        chain = _RecordingChain([_tagging(log, "first"), _tagging(log, "second"), _tagging(log, "third")])

        # When
        chain.next()

        # Then
        assert log == [
            "third-before",
            "second-before",
            "first-before",
            "first-after",
            "second-after",
            "third-after",
        ]

    def test_given_interceptor_when_it_returns_then_caller_sees_its_result(self) -> None:
        """Interceptors can replace the result of inner frames."""
        chain = _RecordingChain([lambda ctx: f"<{ctx.next()}>", lambda ctx: f"[{ctx.next()}]"])

        assert chain.next() == "[<base(target)>]"


class TestNextCardinality:
    """Interceptors decide how often the chain continues."""

    def test_given_interceptor_not_calling_next_then_base_never_runs(self) -> None:
        """Short-circuiting swallows the call."""
        chain = _RecordingChain([lambda ctx: "swallowed"])

        assert chain.next() == "swallowed"
        assert chain.base_calls == []

    def test_given_interceptor_calling_next_twice_then_base_runs_twice(self) -> None:
        """Re-invoking next() after exhaustion repeats the base operation."""

        def twice(ctx: ChainContext) -> Any:
            ctx.next()
            return ctx.next()

        chain = _RecordingChain([twice])

        chain.next()

        assert len(chain.base_calls) == 2

    def test_given_repeated_next_from_outer_then_inner_interceptors_are_skipped(self) -> None:
        """The cursor is shared by the activation: a second call starts where the first stopped."""
        inner_calls: list[int] = []

        def inner(ctx: ChainContext) -> Any:
            inner_calls.append(1)
            return ctx.next()

        def outer(ctx: ChainContext) -> Any:
            ctx.next()
            return ctx.next()

        chain = _RecordingChain([inner, outer])

        chain.next()

        assert len(inner_calls) == 1
        assert len(chain.base_calls) == 2


class TestContextFields:
    """Read-only and mutable context fields."""

    def test_given_interceptor_when_this_reassigned_then_base_sees_new_this(self) -> None:
        """Reassigning this is visible to later interceptors and the base."""
        seen: list[Any] = []

        def swap(ctx: ChainContext) -> Any:
            ctx.this = "other"
            return ctx.next()

        def observe(ctx: ChainContext) -> Any:
            seen.append(ctx.this)
            return ctx.next()

        chain = _RecordingChain([observe, swap])

        assert chain.next() == "base(other)"
        assert seen == ["other"]

    @pytest.mark.parametrize("attribute", ["target", "member", "persistent_context"])
    def test_given_context_when_assigning_fixed_field_then_fails(self, attribute: str) -> None:
        """target, member and persistent_context cannot be reassigned."""
        chain = _RecordingChain([])

        with pytest.raises(AttributeError):
            setattr(chain, attribute, "changed")

    def test_persistent_context_is_passed_through(self) -> None:
        """Interceptors reach the persistent context they were given."""
        persistent = SimpleNamespace(counter=41)

        def bump(ctx: ChainContext) -> Any:
            ctx.persistent_context.counter += 1
            return ctx.next()

        chain = _RecordingChain([bump], persistent_context=persistent)
        chain.next()

        assert persistent.counter == 42


class TestErrorPropagation:
    """Faults unwind unmodified."""

    def test_given_failing_interceptor_then_exception_reaches_caller(self) -> None:
        log: list[str] = []

        def boom(ctx: ChainContext) -> Any:
            raise ValueError("boom")

        chain = _RecordingChain([boom, _tagging(log, "outer")])

        with pytest.raises(ValueError, match="boom"):
            chain.next()
        assert log == ["outer-before"]
        assert chain.base_calls == []

    def test_base_operation_must_be_provided(self) -> None:
        chain = ChainContext([], target=None, member="m", persistent_context=SimpleNamespace(), this=None)

        with pytest.raises(NotImplementedError):
            chain.next()
