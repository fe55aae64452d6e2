from __future__ import annotations

import logging
import threading
import weakref
from collections.abc import Callable, Mapping
from typing import Any, Generic, TypeVar, cast

T = TypeVar("T")

logger = logging.getLogger(__name__)


class _NoProvider:
    __slots__ = ()

    def __repr__(self) -> str:
        return "NO_PROVIDER"

    def __call__(self) -> None:
        return None


NO_PROVIDER = _NoProvider()
"""Cache marker for a resolution that legitimately found no provider."""


class _StrongRef(Generic[T]):
    """Callable holder for instances that do not support weak references."""

    __slots__ = ("_value",)

    def __init__(self, value: T) -> None:
        self._value = value

    def __call__(self) -> T:
        return self._value


_Entry = Callable[[], Any]


class ContextCache(Generic[T]):
    """Cache one resolved provider per execution context.

    Both sides of an entry are held weakly: the table is a
    ``WeakKeyDictionary`` keyed by the context, and the value is a weak
    reference to the provider. The cache is therefore never the reason a
    context or its provider stays alive. When the provider has been collected
    while the context lives on, the next lookup resolves again.

    Hits are served without locking. Misses serialize through one table-wide
    lock, re-check the entry and resolve exactly once; the entry becomes
    visible only after the provider is fully built. Errors leave no entry.
    """

    def __init__(self) -> None:
        self._entries: weakref.WeakKeyDictionary[Any, _Entry] = weakref.WeakKeyDictionary()
        self._lock = threading.Lock()

    def get_or_resolve(
        self,
        context: object,
        configuration: Mapping[str, str],
        resolve: Callable[[Mapping[str, str]], T | None],
    ) -> T | None:
        found, instance = self._lookup(context)
        if found:
            return instance

        with self._lock:
            # Second check after acquiring lock - another thread may have resolved
            found, instance = self._lookup(context)
            if found:
                return instance

            logger.debug("Provider was not cached for %r, resolving", context)
            instance = resolve(configuration)
            if instance is None:
                logger.debug("Unable to find a provider for %r", context)
            self._entries[context] = self._entry_for(instance)
            return instance

    def _lookup(self, context: object) -> tuple[bool, T | None]:
        entry = self._entries.get(context)
        if entry is None:
            return False, None
        if entry is NO_PROVIDER:
            return True, None
        instance = entry()
        if instance is None:
            # Provider was reclaimed while the context is still alive
            return False, None
        logger.debug("Found cached provider for %r", context)
        return True, cast("T", instance)

    @staticmethod
    def _entry_for(instance: object | None) -> _Entry:
        if instance is None:
            return NO_PROVIDER
        try:
            return weakref.ref(instance)
        except TypeError:
            logger.debug(
                "%s does not support weak references, holding it for the context lifetime",
                type(instance).__qualname__,
            )
            return _StrongRef(instance)

    def __contains__(self, context: object) -> bool:
        return self._lookup(context)[0]

    def __len__(self) -> int:
        return sum(1 for context in list(self._entries.keys()) if context in self)
