"""stratspec.tools: compiler operations exposed through a central registry."""

from stratspec.tools import spec as _spec_tools  # noqa: F401
from stratspec.tools.registry import ToolDef, ToolRegistry, registry

__all__ = ["ToolDef", "ToolRegistry", "registry"]
