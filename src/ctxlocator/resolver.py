from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from itertools import islice
from typing import Generic, TypeVar, cast

from ctxlocator.configuration import capability_key
from ctxlocator.discovery import ProviderDiscovery
from ctxlocator.exceptions import (
    AmbiguousProviderError,
    InstantiationError,
    NoProviderFoundError,
)
from ctxlocator.instantiation import Instantiator

T = TypeVar("T")

logger = logging.getLogger(__name__)


class ProviderResolver(Generic[T]):
    """Decide which provider of ``interface`` to use and build it.

    Resolution follows a strict priority and never falls through once a tier
    has committed:

    1. Explicit override: the configuration key ``capability_key(interface)``
       names a type that is built by the instantiator. Failures raise
       ``InstantiationError``.
    2. Discovery: exactly one discovered candidate is used verbatim, two or
       more raise ``AmbiguousProviderError``.
    3. Default: ``default_factory()`` builds the bundled implementation.

    Without a default factory the outcome of an empty discovery is ``None``,
    or ``NoProviderFoundError`` when ``require_provider`` is set.
    """

    def __init__(
        self,
        interface: type[T],
        *,
        discovery: ProviderDiscovery,
        instantiator: Instantiator,
        default_factory: Callable[[], T] | None = None,
        require_provider: bool = False,
    ) -> None:
        self.interface = interface
        self.key = capability_key(interface)
        self._discovery = discovery
        self._instantiator = instantiator
        self._default_factory = default_factory
        self._require_provider = require_provider

    def resolve(self, configuration: Mapping[str, str]) -> T | None:
        type_name = configuration.get(self.key)
        if type_name is not None:
            logger.debug("Property %s is set, instantiating %s", self.key, type_name)
            return self._instantiate(type_name)

        logger.debug("Property %s was not found, using discovery", self.key)
        candidates = list(islice(self._discovery.discover(self.interface), 2))
        if len(candidates) > 1:
            raise AmbiguousProviderError(self.interface, candidates)
        if candidates:
            logger.debug("Discovery found %r", candidates[0])
            return cast("T", candidates[0])

        if self._default_factory is not None:
            logger.debug(
                "Discovery found nothing, using the default %s",
                self.interface.__qualname__,
            )
            return self._default_factory()

        if self._require_provider:
            raise NoProviderFoundError(self.interface)
        logger.debug("No provider found for %s", self.key)
        return None

    def _instantiate(self, type_name: str) -> T:
        instance = self._instantiator.instantiate(type_name)
        if not isinstance(instance, self.interface):
            msg = f"{type(instance).__qualname__} is not a {self.interface.__qualname__}"
            raise InstantiationError(type_name, msg)
        return instance
