"""Tests for provider discovery backends."""

from __future__ import annotations

from importlib.metadata import EntryPoint

import pytest

import ctxlocator.discovery
from ctxlocator.discovery import EntryPointDiscovery, StaticDiscovery
from ctxlocator.exceptions import AmbiguousProviderError, ProviderDiscoveryError
from ctxlocator.instantiation import ImportPathInstantiator
from ctxlocator.locator import ApplicationContextLocator, DefaultApplicationContextLocator
from ctxlocator.resolver import ProviderResolver
from tests.locators import BarLocator, FooLocator

GROUP = "ctxlocator.test-locators"


@pytest.fixture()
def registered(monkeypatch: pytest.MonkeyPatch) -> list[EntryPoint]:
    entry_points: list[EntryPoint] = []

    def fake_entry_points(*, group: str) -> list[EntryPoint]:
        return [entry_point for entry_point in entry_points if entry_point.group == group]

    monkeypatch.setattr(ctxlocator.discovery, "entry_points", fake_entry_points)
    return entry_points


def _entry_point(name: str, value: str, group: str = GROUP) -> EntryPoint:
    return EntryPoint(name=name, value=value, group=group)


class TestEntryPointDiscovery:
    def test_no_entry_points(self, registered: list[EntryPoint]) -> None:
        assert list(EntryPointDiscovery(GROUP).discover(ApplicationContextLocator)) == []

    def test_classes_are_instantiated(self, registered: list[EntryPoint]) -> None:
        registered.append(_entry_point("foo", "tests.locators:FooLocator"))
        registered.append(_entry_point("other", "tests.locators:BarLocator", group="elsewhere"))

        candidates = list(EntryPointDiscovery(GROUP).discover(ApplicationContextLocator))

        assert len(candidates) == 1
        assert isinstance(candidates[0], FooLocator)

    def test_loading_is_lazy(self, registered: list[EntryPoint]) -> None:
        registered.append(_entry_point("broken", "tests.no_such_module:Locator"))

        candidates = EntryPointDiscovery(GROUP).discover(ApplicationContextLocator)

        with pytest.raises(ProviderDiscoveryError, match="broken"):
            next(candidates)

    def test_several_entry_points_are_ambiguous_before_loading(
        self,
        registered: list[EntryPoint],
    ) -> None:
        registered.append(_entry_point("foo", "tests.locators:FooLocator"))
        registered.append(_entry_point("broken", "tests.no_such_module:Locator"))

        with pytest.raises(AmbiguousProviderError) as exc_info:
            list(EntryPointDiscovery(GROUP).discover(ApplicationContextLocator))

        assert exc_info.value.candidates == tuple(registered)
        assert "foo = tests.locators:FooLocator" in str(exc_info.value)
        assert "broken = tests.no_such_module:Locator" in str(exc_info.value)

    def test_resolver_reports_ambiguity_over_broken_entry_point(
        self,
        registered: list[EntryPoint],
    ) -> None:
        registered.append(_entry_point("foo", "tests.locators:FooLocator"))
        registered.append(_entry_point("broken", "tests.no_such_module:Locator"))
        resolver = ProviderResolver(
            ApplicationContextLocator,
            discovery=EntryPointDiscovery(GROUP),
            instantiator=ImportPathInstantiator(),
            default_factory=DefaultApplicationContextLocator,
        )

        with pytest.raises(AmbiguousProviderError):
            resolver.resolve({})

    def test_foreign_type_is_rejected(self, registered: list[EntryPoint]) -> None:
        registered.append(_entry_point("wrong", "tests.locators:NotALocator"))

        with pytest.raises(ProviderDiscoveryError, match="not a ApplicationContextLocator"):
            list(EntryPointDiscovery(GROUP).discover(ApplicationContextLocator))

    def test_constructor_failure_is_wrapped(self, registered: list[EntryPoint]) -> None:
        registered.append(_entry_point("boom", "tests.locators:ExplodingLocator"))

        with pytest.raises(ProviderDiscoveryError) as exc_info:
            list(EntryPointDiscovery(GROUP).discover(ApplicationContextLocator))

        assert isinstance(exc_info.value.__cause__, RuntimeError)
        assert exc_info.value.interface is ApplicationContextLocator

    def test_default_group(self) -> None:
        assert EntryPointDiscovery().group == "ctxlocator.locators"


class TestStaticDiscovery:
    def test_registration_order_is_kept(self) -> None:
        discovery = StaticDiscovery()
        bar = BarLocator()
        discovery.register(ApplicationContextLocator, FooLocator)
        discovery.register(ApplicationContextLocator, bar)

        candidates = list(discovery.discover(ApplicationContextLocator))

        assert isinstance(candidates[0], FooLocator)
        assert candidates[1] is bar

    def test_interfaces_are_separate(self) -> None:
        discovery = StaticDiscovery()
        discovery.register(object, FooLocator)

        assert list(discovery.discover(ApplicationContextLocator)) == []

    def test_factories_run_on_every_pass(self) -> None:
        discovery = StaticDiscovery()
        discovery.register(ApplicationContextLocator, FooLocator)

        first = next(discovery.discover(ApplicationContextLocator))
        second = next(discovery.discover(ApplicationContextLocator))

        assert first is not second

    def test_foreign_instance_is_rejected(self) -> None:
        discovery = StaticDiscovery()
        discovery.register(ApplicationContextLocator, "not a locator")

        with pytest.raises(ProviderDiscoveryError):
            list(discovery.discover(ApplicationContextLocator))

    def test_failing_factory_is_wrapped(self) -> None:
        discovery = StaticDiscovery()

        def factory() -> ApplicationContextLocator:
            msg = "factory failed"
            raise ValueError(msg)

        discovery.register(ApplicationContextLocator, factory)

        with pytest.raises(ProviderDiscoveryError, match="factory failed"):
            list(discovery.discover(ApplicationContextLocator))
