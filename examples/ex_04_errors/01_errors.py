"""Errors: a broken override is fatal and never replaced by the default."""

from __future__ import annotations

from ctxlocator import (
    ApplicationContextLocator,
    InstantiationError,
    LocatorManager,
    LocatorSettings,
    NoProviderFoundError,
    StaticDiscovery,
    capability_key,
    execution_scope,
)


def main() -> None:
    key = capability_key(ApplicationContextLocator)
    manager = LocatorManager(discovery=StaticDiscovery(), settings=LocatorSettings(locator=None))

    with execution_scope():
        try:
            manager.get_instance({key: "myapp.missing.Locator"})
        except InstantiationError as error:
            print(f"error={type(error).__name__}")  # => error=InstantiationError
            print(f"type_name={error.type_name}")  # => type_name=myapp.missing.Locator

    strict = LocatorManager(
        discovery=StaticDiscovery(),
        default_factory=None,
        settings=LocatorSettings(locator=None, require_provider=True),
    )
    with execution_scope():
        try:
            strict.get_instance({})
        except NoProviderFoundError as error:
            print(f"strict={type(error).__name__}")  # => strict=NoProviderFoundError

    lenient = LocatorManager(
        discovery=StaticDiscovery(),
        default_factory=None,
        settings=LocatorSettings(locator=None),
    )
    with execution_scope():
        print(f"lenient={lenient.get_instance({})}")  # => lenient=None


if __name__ == "__main__":
    main()
