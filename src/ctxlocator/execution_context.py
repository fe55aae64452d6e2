from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from itertools import count

_ids = count(1)


class ExecutionContext:
    """Opaque isolation scope used as the locator cache key.

    Contexts compare and hash by identity. The cache only holds them weakly,
    so a context and everything cached for it is reclaimed once the owner
    drops its last reference.
    """

    __slots__ = ("__weakref__", "_id", "name")

    def __init__(self, name: str | None = None) -> None:
        self._id = next(_ids)
        self.name = name

    def __repr__(self) -> str:
        if self.name is None:
            return f"ExecutionContext(#{self._id})"
        return f"ExecutionContext({self.name!r}, #{self._id})"


ROOT_CONTEXT = ExecutionContext("root")
"""Process-wide context used when nothing has been bound."""

# Works with both threads and asyncio tasks; new threads start from ROOT_CONTEXT
_current_context: ContextVar[object | None] = ContextVar("ctxlocator_context", default=None)


def current_execution_context() -> object:
    """Return the execution context bound for the calling thread or task."""
    context = _current_context.get()
    if context is None:
        return ROOT_CONTEXT
    return context


@contextmanager
def execution_scope(context: object | None = None) -> Iterator[object]:
    """Bind an execution context for the duration of a ``with`` block.

    A fresh ``ExecutionContext`` is created when ``context`` is omitted. Any
    hashable, weak-referenceable object is accepted. The previous binding is
    restored on exit.
    """
    if context is None:
        context = ExecutionContext()
    token = _current_context.set(context)
    try:
        yield context
    finally:
        _current_context.reset(token)
