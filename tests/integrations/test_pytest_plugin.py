from __future__ import annotations

import gc

import pytest

import ctxlocator
from ctxlocator.configuration import system_properties
from ctxlocator.execution_context import ExecutionContext, current_execution_context


def test_context_fixture_binds_named_context(ctxlocator_context: ExecutionContext) -> None:
    assert current_execution_context() is ctxlocator_context
    assert ctxlocator_context.name == "test_context_fixture_binds_named_context"


def test_context_fixture_isolates_module_accessor(ctxlocator_context: ExecutionContext) -> None:
    locator = ctxlocator.get_instance({})

    assert ctxlocator_context in ctxlocator.locator_manager.cache
    assert locator is ctxlocator.get_instance({})


def test_module_accessor_keeps_binding_without_locator_reference(
    ctxlocator_context: ExecutionContext,
) -> None:
    ctxlocator.get_instance({}).bind_application_context("app")  # type: ignore[union-attr]
    gc.collect()

    assert ctxlocator.locate_application_context({}) == "app"


@pytest.mark.asyncio
async def test_context_fixture_reaches_async_tests(ctxlocator_context: ExecutionContext) -> None:
    assert current_execution_context() is ctxlocator_context


def test_properties_fixture_changes_are_visible(ctxlocator_properties: dict[str, str]) -> None:
    ctxlocator_properties["plugin.test.key"] = "value"

    assert system_properties["plugin.test.key"] == "value"


def test_properties_fixture_restores_content(pytester: pytest.Pytester) -> None:
    system_properties["plugin.test.kept"] = "kept"
    try:
        pytester.makeconftest('pytest_plugins = ["ctxlocator.integrations.pytest_plugin"]')
        pytester.makepyfile(
            """
            from ctxlocator.configuration import system_properties

            def test_changes(ctxlocator_properties):
                ctxlocator_properties["plugin.test.added"] = "added"
                ctxlocator_properties["plugin.test.kept"] = "changed"
                del ctxlocator_properties["plugin.test.kept"]

            def test_restored():
                assert "plugin.test.added" not in system_properties
                assert system_properties["plugin.test.kept"] == "kept"
            """,
        )

        result = pytester.runpytest_inprocess("-p", "no:cacheprovider")

        result.assert_outcomes(passed=2)
        assert "plugin.test.added" not in system_properties
        assert system_properties["plugin.test.kept"] == "kept"
    finally:
        system_properties.pop("plugin.test.kept", None)
