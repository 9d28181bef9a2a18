"""Named factories for swappable strategy implementations.

Used to pick a navigation-log calculator ("local" or "remote") by name from
configuration or the command line.

Typical usage example:
    from navplan.core.registry import ComponentRegistry

    registry = ComponentRegistry()
    registry.register("local", LocalNavLogCalculator.from_config)
    calculator = registry.create("local", config)
"""

import logging
from collections.abc import Callable
from typing import Any

logger = logging.getLogger(__name__)


class RegistryError(Exception):
    """Raised when registry operations fail."""


class ComponentRegistry:
    """Registry of component factories keyed by name.

    Examples:
        >>> registry = ComponentRegistry()
        >>> registry.register("local", dict)
        >>> registry.create("local")
        {}
    """

    def __init__(self) -> None:
        """Initialize an empty registry."""
        self._factories: dict[str, Callable[..., Any]] = {}

    def register(self, name: str, factory: Callable[..., Any]) -> None:
        """Register a factory under a name.

        Args:
            name: Component name (e.g. "remote").
            factory: Class or callable producing the component.

        Raises:
            RegistryError: If name is already registered.
        """
        if name in self._factories:
            raise RegistryError(f"Component already registered: {name}")

        self._factories[name] = factory
        logger.debug("Registered component: %s -> %s", name, getattr(factory, "__qualname__", factory))

    def create(self, name: str, *args: Any, **kwargs: Any) -> Any:
        """Create a component through its registered factory.

        Raises:
            RegistryError: If name is not registered.
        """
        if name not in self._factories:
            raise RegistryError(
                f"Component not registered: {name} (available: {', '.join(self.names())})"
            )

        return self._factories[name](*args, **kwargs)

    def is_registered(self, name: str) -> bool:
        """Check if a name is registered."""
        return name in self._factories

    def names(self) -> list[str]:
        """List registered names in registration order."""
        return list(self._factories)
