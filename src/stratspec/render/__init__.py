"""Compile a strategy record into a table or a build document."""

from __future__ import annotations

from enum import StrEnum
from typing import assert_never

from stratspec.core.config import CompilerSettings
from stratspec.core.records import StrategyRecord
from stratspec.render.document import candle_buffer, render_document
from stratspec.render.table import TableRow, format_table, render_table


class RenderMode(StrEnum):
    TABLE = "table"
    DOCUMENT = "document"


def render(
    record: StrategyRecord,
    mode: RenderMode = RenderMode.DOCUMENT,
    settings: CompilerSettings | None = None,
) -> list[TableRow] | str:
    match RenderMode(mode):
        case RenderMode.TABLE:
            return render_table(record, settings)
        case RenderMode.DOCUMENT:
            return render_document(record, settings)
        case _ as unreachable:
            assert_never(unreachable)


__all__ = [
    "RenderMode",
    "TableRow",
    "candle_buffer",
    "format_table",
    "render",
    "render_document",
    "render_table",
]
