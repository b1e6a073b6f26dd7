"""Tool registry: compiler operations callable by name from the MCP server."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from stratspec.core.errors import RegistryError

ToolFn = Callable[..., dict[str, Any]]


@dataclass(frozen=True)
class ToolDef:
    name: str
    description: str
    fn: ToolFn


class ToolRegistry:
    """Name -> tool mapping, filled by ``@registry.tool`` at import time."""

    def __init__(self) -> None:
        self._tools: dict[str, ToolDef] = {}

    def tool(self, name: str, description: str) -> Callable[[ToolFn], ToolFn]:
        """Register the decorated function; a name can only be taken once."""

        def decorator(fn: ToolFn) -> ToolFn:
            if name in self._tools:
                raise RegistryError(f"tool {name!r} is already registered")
            self._tools[name] = ToolDef(name=name, description=description, fn=fn)
            return fn

        return decorator

    def all_tools(self) -> list[ToolDef]:
        return list(self._tools.values())

    def names(self) -> list[str]:
        return list(self._tools)

    def get(self, name: str) -> ToolDef:
        """Raises KeyError for an unregistered name."""
        return self._tools[name]

    def call(self, name: str, **kwargs: Any) -> dict[str, Any]:
        return self.get(name).fn(**kwargs)


registry = ToolRegistry()
