"""Quickstart: bind an application context and locate it from anywhere.

With no override property and no discovered plugins, the manager falls back
to ``DefaultApplicationContextLocator``. The same locator instance is
returned for every call in the same execution context. The binding belongs to
the execution context, so the locator does not need to be kept around.
"""

from __future__ import annotations

from ctxlocator import DefaultApplicationContextLocator, get_instance, locate_application_context


class ApplicationContext:
    def __init__(self, name: str) -> None:
        self.name = name


def main() -> None:
    locator = get_instance({})
    assert isinstance(locator, DefaultApplicationContextLocator)

    print(f"locator={type(locator).__name__}")  # => locator=DefaultApplicationContextLocator
    print(f"same_instance={get_instance({}) is locator}")  # => same_instance=True
    del locator

    billing = ApplicationContext("billing")
    get_instance({}).bind_application_context(billing)  # type: ignore[union-attr]

    application_context = locate_application_context({})
    print(f"application_context={application_context.name}")  # => application_context=billing


if __name__ == "__main__":
    main()
