"""Object registry -- named singletons created during startup.

The application creates one registry per run. Startup steps register the
objects they produce; later code looks them up by name.
"""

from __future__ import annotations

import logging
from typing import Any

logger = logging.getLogger(__name__)


class ObjectRegistry:
    """Name -> object store owned by a single application run.

    Usage:
        registry = ObjectRegistry()
        registry.register("startupBanner", rendered)

        registry.lookup("startupBanner")   # rendered, or None if absent
        registry.get("startupBanner")      # rendered, or KeyError
    """

    def __init__(self) -> None:
        self._objects: dict[str, Any] = {}

    def register(self, name: str, value: Any) -> None:
        """Register an object under a name, replacing any previous entry.

        None is rejected so that lookup() returning None always means absent.
        """
        if not name:
            raise ValueError("Registry name must be a non-empty string")
        if value is None:
            raise ValueError(f"Cannot register None under '{name}'")

        if name in self._objects:
            logger.warning("Overwriting existing registry entry '%s'", name)

        self._objects[name] = value
        logger.debug("Registered %s: %s", name, type(value).__name__)

    def lookup(self, name: str) -> Any | None:
        """Return the object registered under `name`, or None."""
        return self._objects.get(name)

    def get(self, name: str) -> Any:
        """Get an object by name.

        Raises KeyError if not found.
        """
        if name not in self._objects:
            raise KeyError(
                f"No object named '{name}'. "
                f"Available: {list(self._objects.keys())}"
            )
        return self._objects[name]

    def has(self, name: str) -> bool:
        """Check if an object is registered."""
        return name in self._objects

    def names(self) -> list[str]:
        """List all registered names."""
        return list(self._objects.keys())

    def summary(self) -> dict[str, str]:
        """Return registered names mapped to their type names."""
        return {name: type(value).__name__ for name, value in self._objects.items()}

    def clear(self) -> None:
        """Drop every entry (used when the application context closes)."""
        self._objects.clear()
