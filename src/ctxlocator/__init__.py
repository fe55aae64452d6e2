from ctxlocator.cache import NO_PROVIDER, ContextCache
from ctxlocator.configuration import (
    LocatorSettings,
    ambient_configuration,
    capability_key,
    system_properties,
)
from ctxlocator.discovery import EntryPointDiscovery, ProviderDiscovery, StaticDiscovery
from ctxlocator.exceptions import (
    AmbiguousProviderError,
    ApplicationContextNotSetError,
    InstantiationError,
    LocatorError,
    NoProviderFoundError,
    ProviderDiscoveryError,
)
from ctxlocator.execution_context import (
    ROOT_CONTEXT,
    ExecutionContext,
    current_execution_context,
    execution_scope,
)
from ctxlocator.instantiation import FactoryRegistry, ImportPathInstantiator, Instantiator
from ctxlocator.locator import ApplicationContextLocator, DefaultApplicationContextLocator
from ctxlocator.manager import (
    LocatorManager,
    get_instance,
    locate_application_context,
    locator_manager,
)
from ctxlocator.resolver import ProviderResolver

__all__ = [
    "NO_PROVIDER",
    "ROOT_CONTEXT",
    "AmbiguousProviderError",
    "ApplicationContextLocator",
    "ApplicationContextNotSetError",
    "ContextCache",
    "DefaultApplicationContextLocator",
    "EntryPointDiscovery",
    "ExecutionContext",
    "FactoryRegistry",
    "ImportPathInstantiator",
    "InstantiationError",
    "Instantiator",
    "LocatorError",
    "LocatorManager",
    "LocatorSettings",
    "NoProviderFoundError",
    "ProviderDiscovery",
    "ProviderDiscoveryError",
    "ProviderResolver",
    "StaticDiscovery",
    "ambient_configuration",
    "capability_key",
    "current_execution_context",
    "execution_scope",
    "get_instance",
    "locate_application_context",
    "locator_manager",
    "system_properties",
]
