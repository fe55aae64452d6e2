from __future__ import annotations

from collections.abc import Sequence
from importlib.metadata import EntryPoint
from typing import Any

from ctxlocator.configuration import capability_key


def _describe_candidate(candidate: object) -> str:
    if isinstance(candidate, EntryPoint):
        return f"{candidate.name} = {candidate.value}"
    return type(candidate).__qualname__


class LocatorError(Exception):
    """Represent a base class for all ctxlocator-specific failures.

    Catch this type when you want to handle any locator error path without
    matching each concrete exception class individually.
    """


class AmbiguousProviderError(LocatorError):
    """Signal that discovery found more than one provider for an interface.

    Raised by ``ProviderResolver.resolve`` when no explicit override is
    configured and the discovery backend yields two or more candidates, and
    by ``EntryPointDiscovery`` as soon as its group holds two or more entry
    points, before any of them is imported.
    Nothing is cached for the calling execution context.

    Typical fixes include removing the duplicate registration from the build
    or pinning one implementation with the override property.
    """

    def __init__(self, interface: type[Any], candidates: Sequence[object]) -> None:
        self.interface = interface
        self.candidates = tuple(candidates)
        super().__init__(
            f"There is more than one instance of {capability_key(interface)}: "
            f"{', '.join(_describe_candidate(candidate) for candidate in self.candidates)}",
        )


class InstantiationError(LocatorError):
    """Signal that an explicitly configured provider could not be built.

    Raised when the override property names a type that cannot be imported,
    is not callable, raises from its constructor, or does not produce an
    instance of the located interface. The underlying failure is available
    as ``__cause__``.

    A misconfigured override is never replaced by discovery or the default.
    """

    def __init__(self, type_name: str, reason: str) -> None:
        self.type_name = type_name
        super().__init__(f"Cannot instantiate '{type_name}': {reason}")


class NoProviderFoundError(LocatorError):
    """Signal that no provider exists and one is required.

    Raised only by resolvers configured with ``require_provider=True`` and no
    default factory, when neither override nor discovery applies.
    """

    def __init__(self, interface: type[Any]) -> None:
        self.interface = interface
        super().__init__(f"No provider found for {capability_key(interface)}")


class ProviderDiscoveryError(LocatorError):
    """Signal that a discovery backend failed to produce a candidate.

    Raised while loading a registered entry point, constructing it, or when
    the produced object does not implement the located interface.
    """

    def __init__(self, interface: type[Any], reason: str) -> None:
        self.interface = interface
        super().__init__(f"Discovery of {capability_key(interface)} failed: {reason}")


class ApplicationContextNotSetError(LocatorError):
    """Signal use of the default locator before an application context is bound.

    Typical fix is calling ``bind_application_context(context)`` on the
    resolved locator during application startup.
    """
