from __future__ import annotations

import os
from collections import ChainMap
from collections.abc import Mapping
from typing import Any

from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_ENTRY_POINT_GROUP = "ctxlocator.locators"

system_properties: dict[str, str] = {}
"""Process-wide properties consulted before settings and environment.

Keys set here win over everything else in the ambient configuration.
"""


class LocatorSettings(BaseSettings):
    """Environment-driven settings for the locator manager.

    Values are read from ``CTXLOCATOR_*`` environment variables, for example
    ``CTXLOCATOR_LOCATOR=myapp.locators:SpringLikeLocator``.
    """

    model_config = SettingsConfigDict(env_prefix="CTXLOCATOR_", extra="ignore")

    locator: str | None = None
    """Type path of the locator to instantiate, an env-friendly override."""

    entry_point_group: str = DEFAULT_ENTRY_POINT_GROUP
    """Entry point group scanned by the default discovery backend."""

    require_provider: bool = False
    """Treat "no provider" as an error when the resolver has no default."""


def capability_key(interface: type[Any]) -> str:
    """Return the configuration key that overrides the provider of ``interface``."""
    return f"{interface.__module__}.{interface.__qualname__}"


def ambient_configuration(
    interface: type[Any],
    settings: LocatorSettings | None = None,
) -> Mapping[str, str]:
    """Build the process-wide configuration view used by ``get_instance()``.

    Precedence: ``system_properties``, then ``settings.locator`` under the
    capability key, then ``os.environ``.
    """
    if settings is None:
        settings = LocatorSettings()
    settings_layer: dict[str, str] = {}
    if settings.locator:
        settings_layer[capability_key(interface)] = settings.locator
    return ChainMap(system_properties, settings_layer, os.environ)
