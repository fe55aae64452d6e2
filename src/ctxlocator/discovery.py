from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Iterator
from importlib.metadata import EntryPoint, entry_points
from typing import Any, Protocol

from ctxlocator.configuration import DEFAULT_ENTRY_POINT_GROUP
from ctxlocator.exceptions import AmbiguousProviderError, ProviderDiscoveryError

logger = logging.getLogger(__name__)


class ProviderDiscovery(Protocol):
    """Enumerate registered implementations of an interface."""

    def discover(self, interface: type[Any]) -> Iterator[object]:
        """Yield provider instances lazily, in registration order."""
        ...


class EntryPointDiscovery:
    """Discover providers published as package entry points.

    Distributions register implementations in the configured group::

        [project.entry-points."ctxlocator.locators"]
        mylocator = "myapp.locators:MyLocator"

    The group is checked before anything is imported: two or more entry
    points raise ``AmbiguousProviderError`` even when one of them is broken.
    A single entry point is loaded only when the caller consumes the
    iterator. Classes are instantiated without arguments, other objects are
    used as is.
    """

    def __init__(self, group: str = DEFAULT_ENTRY_POINT_GROUP) -> None:
        self.group = group

    def discover(self, interface: type[Any]) -> Iterator[object]:
        selected = tuple(entry_points(group=self.group))
        if len(selected) > 1:
            raise AmbiguousProviderError(interface, selected)
        for entry_point in selected:
            yield self._load(interface, entry_point)

    def _load(self, interface: type[Any], entry_point: EntryPoint) -> object:
        logger.debug("Loading entry point %s = %s", entry_point.name, entry_point.value)
        try:
            loaded = entry_point.load()
            candidate = loaded() if isinstance(loaded, type) else loaded
        except Exception as exc:
            msg = f"entry point '{entry_point.name}' ({entry_point.value}) failed with {exc!r}"
            raise ProviderDiscoveryError(interface, msg) from exc
        return _checked(interface, candidate, entry_point.name)


class StaticDiscovery:
    """Discover providers from an in-process registration table.

    Registered values are either ready instances or zero-argument factories,
    which are called on every discovery pass.
    """

    def __init__(self) -> None:
        self._registrations: dict[type[Any], list[object]] = {}
        self._lock = threading.Lock()

    def register(self, interface: type[Any], provider: object | Callable[[], object]) -> None:
        with self._lock:
            self._registrations.setdefault(interface, []).append(provider)

    def discover(self, interface: type[Any]) -> Iterator[object]:
        with self._lock:
            registrations = list(self._registrations.get(interface, ()))
        for registration in registrations:
            if isinstance(registration, interface):
                yield registration
                continue
            if not callable(registration):
                yield _checked(interface, registration, repr(registration))
                continue
            try:
                candidate = registration()
            except Exception as exc:
                msg = f"factory {registration!r} failed with {exc!r}"
                raise ProviderDiscoveryError(interface, msg) from exc
            yield _checked(interface, candidate, repr(registration))


def _checked(interface: type[Any], candidate: object, source: str) -> object:
    if not isinstance(candidate, interface):
        msg = f"{source} produced {type(candidate).__qualname__}, not a {interface.__qualname__}"
        raise ProviderDiscoveryError(interface, msg)
    return candidate
