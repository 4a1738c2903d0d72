"""Registry of tool command adapters, keyed by tool id."""

from __future__ import annotations

from typing import Dict, List, Type

from opsx_sync.adapters.base import ToolCommandAdapter
from opsx_sync.exceptions import UnknownToolError


class CommandAdapterRegistry:
    """One adapter instance per supported tool."""

    _adapters: Dict[str, ToolCommandAdapter] = {}

    @classmethod
    def register(
        cls, adapter_class: Type[ToolCommandAdapter]
    ) -> Type[ToolCommandAdapter]:
        """Decorator to register an adapter class.

        Raises:
            ValueError: If tool_id is unset or already registered
        """
        if not adapter_class.tool_id:
            raise ValueError(f"Adapter {adapter_class.__name__} must have a tool_id")
        if adapter_class.tool_id in cls._adapters:
            raise ValueError(f"Duplicate adapter for tool: {adapter_class.tool_id}")
        cls._adapters[adapter_class.tool_id] = adapter_class()
        return adapter_class

    @classmethod
    def unregister(cls, tool_id: str) -> None:
        """Remove an adapter (for testing)."""
        cls._adapters.pop(tool_id, None)

    @classmethod
    def get(cls, tool_id: str) -> ToolCommandAdapter:
        """Return the adapter for ``tool_id``.

        Raises:
            UnknownToolError: If no adapter is registered for tool_id
        """
        adapter = cls._adapters.get(tool_id)
        if adapter is None:
            raise UnknownToolError(tool_id, list(cls._adapters))
        return adapter

    @classmethod
    def has(cls, tool_id: str) -> bool:
        return tool_id in cls._adapters

    @classmethod
    def tool_ids(cls) -> List[str]:
        return sorted(cls._adapters)

    @classmethod
    def get_all(cls) -> List[ToolCommandAdapter]:
        """Return all adapters ordered by tool id."""
        return [cls._adapters[tool_id] for tool_id in cls.tool_ids()]
