from __future__ import annotations

import importlib
import logging
import threading
from collections.abc import Callable
from typing import Any, Protocol

from ctxlocator.exceptions import InstantiationError

logger = logging.getLogger(__name__)


class Instantiator(Protocol):
    """Build a default instance from a type name."""

    def instantiate(self, type_name: str) -> object:
        """Return a new instance of ``type_name`` or raise ``InstantiationError``."""
        ...


def import_object(path: str) -> Any:
    """Import the object named by ``package.module.Name`` or ``package.module:Name``.

    For dotted paths the longest importable module prefix wins, so nested
    attributes such as ``package.module.Outer.Inner`` also work.
    """
    if ":" in path:
        module_name, _, attribute_path = path.partition(":")
        target: Any = importlib.import_module(module_name)
        for attribute in attribute_path.split("."):
            target = getattr(target, attribute)
        return target

    parts = path.split(".")
    for split in range(len(parts) - 1, 0, -1):
        module_name = ".".join(parts[:split])
        try:
            target = importlib.import_module(module_name)
        except ModuleNotFoundError as exc:
            # Only skip when the missing module is the one being probed
            if exc.name is not None and not (
                module_name == exc.name or module_name.startswith(f"{exc.name}.")
            ):
                raise
            continue
        for attribute in parts[split:]:
            target = getattr(target, attribute)
        return target
    msg = f"No module found for '{path}'"
    raise ModuleNotFoundError(msg, name=parts[0])


class ImportPathInstantiator:
    """Instantiate types by importing their dotted path."""

    def instantiate(self, type_name: str) -> object:
        logger.debug("Loading class %s", type_name)
        try:
            factory = import_object(type_name)
        except (ImportError, AttributeError, ValueError) as exc:
            raise InstantiationError(type_name, "type could not be imported") from exc
        return _call_factory(type_name, factory)


class FactoryRegistry:
    """Map string identifiers to zero-argument factories.

    Populate the registry during startup. Unknown names fall back to
    import-path instantiation unless ``allow_import=False``.
    """

    def __init__(self, *, allow_import: bool = True) -> None:
        self._factories: dict[str, Callable[[], object]] = {}
        self._lock = threading.Lock()
        self._allow_import = allow_import
        self._importer = ImportPathInstantiator()

    def register(self, name: str, factory: Callable[[], object]) -> None:
        """Register ``factory`` under ``name``, replacing any previous one."""
        if not callable(factory):
            msg = f"Factory registered as '{name}' is not callable: {factory!r}"
            raise TypeError(msg)
        with self._lock:
            self._factories[name] = factory

    def __contains__(self, name: object) -> bool:
        return name in self._factories

    def instantiate(self, type_name: str) -> object:
        factory = self._factories.get(type_name)
        if factory is not None:
            logger.debug("Building %s from registered factory", type_name)
            return _call_factory(type_name, factory)
        if not self._allow_import:
            raise InstantiationError(type_name, "no factory registered under this name")
        return self._importer.instantiate(type_name)


def _call_factory(type_name: str, factory: Any) -> object:
    if not callable(factory):
        raise InstantiationError(type_name, f"{factory!r} is not callable")
    try:
        return factory()
    except Exception as exc:
        raise InstantiationError(type_name, f"construction failed with {exc!r}") from exc
