"""Focused example: two discovered locators are a deployment error."""

from __future__ import annotations

from typing import Any

from ctxlocator import (
    AmbiguousProviderError,
    ApplicationContextLocator,
    LocatorManager,
    LocatorSettings,
    StaticDiscovery,
    execution_scope,
)


class FirstLocator(ApplicationContextLocator):
    def locate_application_context(self) -> Any:
        return "first"


class SecondLocator(ApplicationContextLocator):
    def locate_application_context(self) -> Any:
        return "second"


def main() -> None:
    discovery = StaticDiscovery()
    discovery.register(ApplicationContextLocator, FirstLocator)
    discovery.register(ApplicationContextLocator, SecondLocator)
    manager = LocatorManager(discovery=discovery, settings=LocatorSettings(locator=None))

    with execution_scope() as context:
        try:
            manager.get_instance({})
        except AmbiguousProviderError as error:
            error_name = type(error).__name__

        print(f"error={error_name}")  # => error=AmbiguousProviderError
        print(f"cached={context in manager.cache}")  # => cached=False


if __name__ == "__main__":
    main()
