"""Dependency injection setup (dishka)."""

from marketplace.setup.ioc.container import (
    AppProvider,
    InMemoryProvider,
    create_container,
)

__all__ = ["AppProvider", "InMemoryProvider", "create_container"]
