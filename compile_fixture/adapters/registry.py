"""
Adapter registry — central lookup for tool adapters.

The fixture engine never constructs tool adapters itself; it asks the
registry for "compiler" or "runtime". Tests register doubles under the
same names.
"""

from __future__ import annotations

import logging
from typing import Any

from compile_fixture.adapters.base import ToolAdapter

logger = logging.getLogger(__name__)


class AdapterRegistry:
    """Registry of tool adapters keyed by name."""

    def __init__(self) -> None:
        self._adapters: dict[str, ToolAdapter] = {}

    def register(self, adapter: ToolAdapter) -> None:
        """Register an adapter, replacing any adapter with the same name."""
        name = adapter.name
        if name in self._adapters:
            logger.warning("Overwriting existing adapter: %s", name)
        self._adapters[name] = adapter
        logger.debug("Registered adapter: %s", name)

    def unregister(self, name: str) -> None:
        """Remove an adapter from the registry."""
        self._adapters.pop(name, None)

    def get(self, name: str) -> ToolAdapter | None:
        """Look up an adapter by name."""
        return self._adapters.get(name)

    def require(self, name: str) -> ToolAdapter:
        """Look up an adapter that must be present.

        Raises:
            KeyError: If nothing is registered under ``name``.
        """
        adapter = self._adapters.get(name)
        if adapter is None:
            raise KeyError(f"No adapter registered for '{name}'")
        return adapter

    def list_adapters(self) -> list[str]:
        """List all registered adapter names."""
        return list(self._adapters.keys())

    def adapter_status(self) -> dict[str, dict[str, Any]]:
        """Get availability status of all registered adapters."""
        status = {}
        for name, adapter in self._adapters.items():
            try:
                available = adapter.is_available()
            except OSError:
                available = False
            status[name] = {
                "name": name,
                "available": available,
                "executable": adapter.executable,
                "type": adapter.__class__.__name__,
            }
        return status
