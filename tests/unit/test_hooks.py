"""Unit tests for the hook registry."""

import pytest

from wp_logic.core.hooks import HookRegistry


class TestFilters:
    def test_apply_without_callbacks_returns_value(self) -> None:
        hooks = HookRegistry()
        assert hooks.apply_filters("@universal_classes", ["no-js"]) == ["no-js"]
        assert hooks.has_filter("@universal_classes") is False

    def test_priority_then_registration_order(self) -> None:
        hooks = HookRegistry()
        hooks.add_filter("name", lambda v: v + ["late"], priority=20)
        hooks.add_filter("name", lambda v: v + ["first"])
        hooks.add_filter("name", lambda v: v + ["second"])

        assert hooks.apply_filters("name", []) == ["first", "second", "late"]

    def test_extra_arguments(self) -> None:
        hooks = HookRegistry()
        hooks.add_filter("name", lambda v, suffix: f"{v}-{suffix}")
        assert hooks.apply_filters("name", "a", "b") == "a-b"

    def test_remove_filter(self) -> None:
        hooks = HookRegistry()

        def add_js(value: list[str]) -> list[str]:
            return value + ["js"]

        hooks.add_filter("name", add_js)
        assert hooks.has_filter("name") is True
        assert hooks.remove_filter("name", add_js) is True
        assert hooks.remove_filter("name", add_js) is False
        assert hooks.has_filter("name") is False
        assert hooks.apply_filters("name", []) == []

    def test_callback_errors_propagate(self) -> None:
        hooks = HookRegistry()

        def broken(value: object) -> object:
            raise RuntimeError("boom")

        hooks.add_filter("name", broken)
        with pytest.raises(RuntimeError, match="boom"):
            hooks.apply_filters("name", None)


class TestActions:
    def test_run_action(self) -> None:
        hooks = HookRegistry()
        calls: list[str] = []
        hooks.add_action("wp_loaded", lambda: calls.append("loaded"))
        hooks.run_action("wp_loaded")
        assert calls == ["loaded"]
