"""Resolution order: override property, then discovery, then the default.

The override key is the fully qualified name of ``ApplicationContextLocator``.
Its value is an import path, built with no arguments. Discovery is only
consulted when the key is absent.
"""

from __future__ import annotations

from typing import Any

from ctxlocator import (
    ApplicationContextLocator,
    LocatorManager,
    LocatorSettings,
    StaticDiscovery,
    capability_key,
    execution_scope,
)


class PluginLocator(ApplicationContextLocator):
    def locate_application_context(self) -> Any:
        return "plugin-context"


class ConfiguredLocator(ApplicationContextLocator):
    def locate_application_context(self) -> Any:
        return "configured-context"


def main() -> None:
    discovery = StaticDiscovery()
    manager = LocatorManager(discovery=discovery, settings=LocatorSettings(locator=None))
    key = capability_key(ApplicationContextLocator)

    print(f"key={key}")  # => key=ctxlocator.locator.ApplicationContextLocator

    with execution_scope():
        empty = type(manager.get_instance({})).__name__
    print(f"empty={empty}")  # => empty=DefaultApplicationContextLocator

    discovery.register(ApplicationContextLocator, PluginLocator)
    with execution_scope():
        discovered = type(manager.get_instance({})).__name__
    print(f"discovered={discovered}")  # => discovered=PluginLocator

    with execution_scope():
        locator = manager.get_instance({key: "__main__:ConfiguredLocator"})
        print(f"override={type(locator).__name__}")  # => override=ConfiguredLocator


if __name__ == "__main__":
    main()
