from __future__ import annotations

from collections.abc import Iterator

import pytest

from ctxlocator.configuration import system_properties
from ctxlocator.execution_context import ExecutionContext, execution_scope


@pytest.fixture()
def ctxlocator_context(request: pytest.FixtureRequest) -> Iterator[ExecutionContext]:
    """Bind a fresh execution context for the duration of one test.

    Locators cached by ``get_instance()`` during the test belong to this
    context, so every test resolves from scratch and the entries are
    reclaimed once the test finishes.

    Yields:
        The bound ``ExecutionContext``, named after the test node.

    """
    context = ExecutionContext(request.node.name)
    with execution_scope(context):
        yield context


@pytest.fixture()
def ctxlocator_properties() -> Iterator[dict[str, str]]:
    """Expose ``system_properties`` and restore its content after the test."""
    saved = dict(system_properties)
    try:
        yield system_properties
    finally:
        system_properties.clear()
        system_properties.update(saved)
