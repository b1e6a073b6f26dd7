"""structlog setup shared by the library, the tools and the MCP server."""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog

from stratspec.core.config import CompilerSettings, resolve_settings

_configured = False


def configure_logging(settings: CompilerSettings | None = None) -> None:
    """Configure structlog once; later calls are no-ops.

    Logs go to stderr so stdio transports (MCP) keep stdout clean.
    """
    global _configured
    if _configured:
        return
    settings = settings or resolve_settings()

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=getattr(logging, settings.log_level, logging.INFO),
    )
    renderer: Any
    if settings.log_format == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=False)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
    _configured = True


def get_logger(name: str) -> Any:
    return structlog.get_logger(name)
