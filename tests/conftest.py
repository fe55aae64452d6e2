"""Shared pytest fixtures for ctxlocator tests."""

from collections.abc import Iterator

import pytest

from ctxlocator.configuration import LocatorSettings
from ctxlocator.discovery import StaticDiscovery
from ctxlocator.execution_context import ExecutionContext, execution_scope
from ctxlocator.manager import LocatorManager

pytest_plugins = ["pytester", "ctxlocator.integrations.pytest_plugin"]


@pytest.fixture()
def discovery() -> StaticDiscovery:
    """Empty in-process discovery table."""
    return StaticDiscovery()


@pytest.fixture()
def settings() -> LocatorSettings:
    """Settings that ignore the process environment."""
    return LocatorSettings(locator=None, require_provider=False)


@pytest.fixture()
def manager(discovery: StaticDiscovery, settings: LocatorSettings) -> LocatorManager:
    """Manager wired to the static discovery table."""
    return LocatorManager(discovery=discovery, settings=settings)


@pytest.fixture()
def context() -> Iterator[ExecutionContext]:
    """Fresh execution context bound for the test."""
    with execution_scope(ExecutionContext("test")) as bound:
        yield bound
