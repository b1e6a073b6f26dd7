from __future__ import annotations

from mcp.server.fastmcp import FastMCP

from stratspec.core.logging import configure_logging
from stratspec.tools import registry

configure_logging()

mcp = FastMCP("stratspec")

# Auto-register all compiler tools from the registry
for tool_def in registry.all_tools():
    mcp.tool(name=tool_def.name, description=tool_def.description)(tool_def.fn)


if __name__ == "__main__":
    mcp.run(transport="stdio")
