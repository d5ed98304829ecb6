"""Tests for the override registry."""

from __future__ import annotations

from typing import Any

import pytest
from structlog.testing import capture_logs

from interpose.core.errors import ErrorCode, RegistrationError
from interpose.engine.registry import InterceptorTable, Override, OverrideRegistry


def _first(ctx: Any) -> Any:
    return ctx.next()


def _second(ctx: Any) -> Any:
    return ctx.next()


class _Target:
    pass


class TestOverride:
    def test_new_override_is_empty(self) -> None:
        assert Override().is_empty()

    def test_override_with_access_interceptor_is_not_empty(self) -> None:
        assert not Override(access_interceptors=[_first]).is_empty()


class TestRegistration:
    """Appending interceptors to per-member lists."""

    def test_given_unknown_class_when_table_for_then_none(self) -> None:
        assert OverrideRegistry().table_for(_Target) is None

    def test_given_first_registration_then_table_and_override_are_created(self) -> None:
        # Given
        registry = OverrideRegistry()

        # When
        registry.register_method_interceptors(_Target, "greet", _first)

        # Then
        table = registry.table_for(_Target)
        assert isinstance(table, InterceptorTable)
        assert table.owner is _Target
        assert "greet" in table
        override = table.get("greet")
        assert override is not None
        assert override.method_interceptors == [_first]
        assert override.access_interceptors == []

    def test_given_several_calls_then_order_is_call_order(self) -> None:
        registry = OverrideRegistry()

        registry.register_method_interceptors(_Target, "greet", _first)
        registry.register_method_interceptors(_Target, "greet", _second, _first)

        override = registry.table_for(_Target).get("greet")  # type: ignore[union-attr]
        assert override is not None
        assert override.method_interceptors == [_first, _second, _first]

    def test_method_and_access_lists_are_independent(self) -> None:
        registry = OverrideRegistry()

        registry.register_access_interceptors(_Target, "name", _first)
        registry.register_method_interceptors(_Target, "name", _second)

        override = registry.table_for(_Target).get("name")  # type: ignore[union-attr]
        assert override is not None
        assert override.access_interceptors == [_first]
        assert override.method_interceptors == [_second]

    def test_members_get_separate_overrides(self) -> None:
        registry = OverrideRegistry()

        registry.register_access_interceptors(_Target, "a", _first)
        registry.register_access_interceptors(_Target, "b", _second)

        table = registry.table_for(_Target)
        assert table is not None
        assert sorted(table) == ["a", "b"]
        assert len(table) == 2

    def test_registration_without_interceptors_creates_empty_override(self) -> None:
        registry = OverrideRegistry()

        registry.register_method_interceptors(_Target, "noop")

        override = registry.table_for(_Target).get("noop")  # type: ignore[union-attr]
        assert override is not None
        assert override.is_empty()

    def test_given_non_callable_then_raises(self) -> None:
        registry = OverrideRegistry()

        with pytest.raises(RegistrationError) as exc_info:
            registry.register_access_interceptors(_Target, "name", "not callable")  # type: ignore[arg-type]

        assert exc_info.value.code == ErrorCode.REGISTRATION_NOT_CALLABLE
        assert registry.table_for(_Target) is None

    def test_clear_drops_all_tables(self) -> None:
        registry = OverrideRegistry()
        registry.register_access_interceptors(_Target, "name", _first)

        registry.clear()

        assert registry.table_for(_Target) is None


class TestSealedTables:
    """Registrations after the class was wrapped."""

    def _sealed(self, strict: bool | None) -> OverrideRegistry:
        registry = OverrideRegistry(strict=strict)
        registry.register_access_interceptors(_Target, "name", _first)
        table = registry.table_for(_Target)
        assert table is not None
        table.seal()
        return registry

    def test_given_strict_registry_when_registering_on_sealed_table_then_raises(self) -> None:
        registry = self._sealed(strict=True)

        with pytest.raises(RegistrationError) as exc_info:
            registry.register_access_interceptors(_Target, "name", _second)

        assert exc_info.value.code == ErrorCode.REGISTRATION_SEALED
        assert exc_info.value.details == {"class": "_Target", "member": "name"}

    def test_given_lenient_registry_when_registering_on_sealed_table_then_ignored(self) -> None:
        registry = self._sealed(strict=False)

        with capture_logs() as logs:
            registry.register_access_interceptors(_Target, "name", _second)

        override = registry.table_for(_Target).get("name")  # type: ignore[union-attr]
        assert override is not None
        assert override.access_interceptors == [_first]
        assert any(
            entry["event"] == "registration_ignored" and entry["log_level"] == "warning"
            for entry in logs
        )

    def test_given_default_strictness_then_follows_config(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        from interpose.config.loader import reset_config

        monkeypatch.setenv("INTERPOSE__ENGINE__STRICT_REGISTRATION", "true")
        reset_config()
        registry = self._sealed(strict=None)

        assert registry.strict is True
        with pytest.raises(RegistrationError):
            registry.register_method_interceptors(_Target, "name", _second)

    def test_default_strictness_is_lenient(self) -> None:
        assert OverrideRegistry().strict is False
