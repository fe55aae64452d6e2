from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any

from ctxlocator.cache import ContextCache
from ctxlocator.configuration import LocatorSettings, ambient_configuration
from ctxlocator.discovery import EntryPointDiscovery, ProviderDiscovery
from ctxlocator.execution_context import current_execution_context
from ctxlocator.instantiation import ImportPathInstantiator, Instantiator
from ctxlocator.locator import ApplicationContextLocator, DefaultApplicationContextLocator
from ctxlocator.resolver import ProviderResolver

_USE_BUNDLED_DEFAULT: Any = object()


class LocatorManager:
    """Find the ``ApplicationContextLocator`` for the calling execution context.

    This is not a plain singleton: one locator is cached per execution
    context, and the cache holds contexts and locators weakly so that a
    reloaded plugin or finished tenant scope can be garbage-collected.

    The locator is chosen from, in order, the override property named after
    ``ApplicationContextLocator``, the single provider found by discovery, and
    finally ``DefaultApplicationContextLocator``. More than one discovered
    provider is an error.
    """

    def __init__(
        self,
        *,
        discovery: ProviderDiscovery | None = None,
        instantiator: Instantiator | None = None,
        default_factory: Callable[[], ApplicationContextLocator] | None = _USE_BUNDLED_DEFAULT,
        settings: LocatorSettings | None = None,
        cache: ContextCache[ApplicationContextLocator] | None = None,
    ) -> None:
        """Initialize a manager.

        Args:
            discovery: Discovery backend. Defaults to ``EntryPointDiscovery``
                over ``settings.entry_point_group``.
            instantiator: Builds override types. Defaults to
                ``ImportPathInstantiator``.
            default_factory: Builds the fallback locator. Pass ``None`` to
                disable the default tier.
            settings: Settings object. Read from the environment when omitted.
            cache: Context cache, mainly for sharing between managers in tests.

        """
        self.settings = settings if settings is not None else LocatorSettings()
        if default_factory is _USE_BUNDLED_DEFAULT:
            default_factory = DefaultApplicationContextLocator
        self.resolver: ProviderResolver[ApplicationContextLocator] = ProviderResolver(
            ApplicationContextLocator,
            discovery=(
                discovery
                if discovery is not None
                else EntryPointDiscovery(self.settings.entry_point_group)
            ),
            instantiator=instantiator if instantiator is not None else ImportPathInstantiator(),
            default_factory=default_factory,
            require_provider=self.settings.require_provider,
        )
        self.cache: ContextCache[ApplicationContextLocator] = (
            cache if cache is not None else ContextCache()
        )

    def get_instance(
        self,
        configuration: Mapping[str, str] | None = None,
    ) -> ApplicationContextLocator | None:
        """Return the locator cached for the current execution context.

        Args:
            configuration: Property bag consulted for the override key. The
                ambient configuration (``system_properties``, settings, and
                ``os.environ``) is used when omitted.

        Raises:
            AmbiguousProviderError: Discovery found more than one locator.
            InstantiationError: The override names a type that cannot be built.

        """
        if configuration is None:
            configuration = ambient_configuration(ApplicationContextLocator, self.settings)
        context = current_execution_context()
        return self.cache.get_or_resolve(context, configuration, self.resolver.resolve)

    def locate_application_context(self, configuration: Mapping[str, str] | None = None) -> Any:
        """Return the application context found by the current locator."""
        locator = self.get_instance(configuration)
        if locator is None:
            return None
        return locator.locate_application_context()


locator_manager = LocatorManager()


def get_instance(
    configuration: Mapping[str, str] | None = None,
) -> ApplicationContextLocator | None:
    """Return the locator for the current execution context from ``locator_manager``."""
    return locator_manager.get_instance(configuration)


def locate_application_context(configuration: Mapping[str, str] | None = None) -> Any:
    """Return the application context via ``locator_manager``."""
    return locator_manager.locate_application_context(configuration)
