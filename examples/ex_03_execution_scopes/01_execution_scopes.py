"""Execution scopes: one locator per scope, released with the scope.

Each tenant or plugin sandbox binds its own ``ExecutionContext``. The cache
holds contexts and locators weakly, so a finished scope leaves nothing behind.
"""

from __future__ import annotations

import gc

from ctxlocator import (
    ExecutionContext,
    LocatorManager,
    LocatorSettings,
    StaticDiscovery,
    execution_scope,
)


def main() -> None:
    manager = LocatorManager(discovery=StaticDiscovery(), settings=LocatorSettings(locator=None))

    tenant_a = ExecutionContext("tenant-a")
    tenant_b = ExecutionContext("tenant-b")

    with execution_scope(tenant_a):
        locator_a = manager.get_instance({})
        print(f"a_stable={manager.get_instance({}) is locator_a}")  # => a_stable=True

    with execution_scope(tenant_b):
        locator_b = manager.get_instance({})

    print(f"isolated={locator_a is not locator_b}")  # => isolated=True
    print(f"cached_contexts={len(manager.cache)}")  # => cached_contexts=2

    del tenant_b, locator_b
    gc.collect()
    print(f"after_release={len(manager.cache)}")  # => after_release=1


if __name__ == "__main__":
    main()
