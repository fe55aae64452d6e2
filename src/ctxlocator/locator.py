from __future__ import annotations

import threading
import weakref
from abc import ABC, abstractmethod
from typing import Any

from ctxlocator.exceptions import ApplicationContextNotSetError
from ctxlocator.execution_context import current_execution_context

_UNSET: Any = object()

# Bindings outlive the weakly cached locator and die with their execution context
_bindings: weakref.WeakKeyDictionary[Any, Any] = weakref.WeakKeyDictionary()
_bindings_lock = threading.Lock()


class ApplicationContextLocator(ABC):
    """Locate the application context for the calling code.

    This is the capability resolved by ``LocatorManager``. The application
    context itself is opaque to ctxlocator. Implementations are registered
    through discovery or named explicitly in configuration, and must be
    constructible without arguments.
    """

    @abstractmethod
    def locate_application_context(self) -> Any:
        """Return the application context visible to the caller."""


class DefaultApplicationContextLocator(ApplicationContextLocator):
    """Bundled locator used when neither override nor discovery applies.

    The application context is bound explicitly during startup. The binding
    belongs to the execution context the locator was created in, not to the
    locator object, so ``get_instance().bind_application_context(ctx)`` keeps
    working after the locator itself has been collected and resolved again.
    The binding is released together with its execution context.
    """

    def __init__(self, execution_context: object | None = None) -> None:
        if execution_context is None:
            execution_context = current_execution_context()
        self._execution_context = weakref.ref(execution_context)

    @property
    def is_bound(self) -> bool:
        return self._binding() is not _UNSET

    def bind_application_context(self, application_context: Any) -> None:
        """Bind the application context returned by later lookups."""
        execution_context = self._execution_context()
        if execution_context is None:
            msg = "Execution context of this locator has already been reclaimed."
            raise ApplicationContextNotSetError(msg)
        with _bindings_lock:
            _bindings[execution_context] = application_context

    def locate_application_context(self) -> Any:
        application_context = self._binding()
        if application_context is _UNSET:
            msg = (
                "Application context is not bound. "
                "Call bind_application_context(context) on the locator during startup."
            )
            raise ApplicationContextNotSetError(msg)
        return application_context

    def _binding(self) -> Any:
        execution_context = self._execution_context()
        if execution_context is None:
            return _UNSET
        return _bindings.get(execution_context, _UNSET)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(is_bound={self.is_bound})"
