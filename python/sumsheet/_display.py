"""Text rendering of evaluated cells."""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING

from sumsheet.calc._functions import is_error

if TYPE_CHECKING:
    from sumsheet._cell import CellIdentifier
    from sumsheet.calc._functions import CellValue


def format_value(value: CellValue) -> str:
    """``5.0``, ``-0.5``, ``nan``, ``inf`` or ``REFERROR``."""
    if is_error(value):
        return str(value)
    return repr(float(value))


def render_cells(results: Mapping[CellIdentifier, CellValue]) -> list[str]:
    """One ``"row,column: value"`` line per cell, ordered by (row, column)."""
    return [f"{cell}: {format_value(results[cell])}" for cell in sorted(results)]
