"""Sheet: the cell store. Owns every cell and its dependency edges."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from typing import Any

from sumsheet._cell import Cell, CellIdentifier, Sum
from sumsheet._display import render_cells
from sumsheet.calc._evaluator import SheetEvaluator
from sumsheet.calc._functions import CellValue, sum_values
from sumsheet.calc._graph import DependencyGraph

logger = logging.getLogger(__name__)


class Sheet:
    """In-memory mapping from :class:`CellIdentifier` to :class:`Cell`.

    Cells are created by their first write and replaced whole by later
    writes; there is no deletion. Identifiers may be given as
    ``CellIdentifier``, ``(row, column)`` tuples or ``"row,column"`` strings.

    Not thread-safe: callers sharing a sheet across threads must serialize
    writes, and reads that overlap a write, themselves.
    """

    __slots__ = ("_cells", "_graph", "_evaluator")

    def __init__(self) -> None:
        self._cells: dict[CellIdentifier, Cell] = {}
        self._graph = DependencyGraph()
        self._evaluator = SheetEvaluator(self)

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------

    @property
    def graph(self) -> DependencyGraph:
        return self._graph

    @property
    def evaluator(self) -> SheetEvaluator:
        return self._evaluator

    def get(self, cell: Any) -> Cell | None:
        """Stored record for *cell*, or None if it was never written."""
        return self._cells.get(CellIdentifier.coerce(cell))

    def cells(self) -> dict[CellIdentifier, Cell]:
        """Snapshot copy of the stored records."""
        return dict(self._cells)

    def __contains__(self, cell: object) -> bool:
        try:
            return CellIdentifier.coerce(cell) in self._cells
        except (TypeError, ValueError):
            return False

    def __iter__(self) -> Iterator[CellIdentifier]:
        return iter(self._cells)

    def __len__(self) -> int:
        return len(self._cells)

    def __repr__(self) -> str:
        return f"<Sheet cells={len(self._cells)}>"

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def set_constant(self, cell: Any, value: float) -> None:
        """Store a constant. NaN and infinities are kept as given."""
        cell = CellIdentifier.coerce(cell)
        self._cells[cell] = Cell(float(value))
        self._graph.discard(cell)
        logger.debug("Set %s = %r", cell, value)

    def set_sum_cell(self, cell: Any, arguments: Iterable[Any]) -> None:
        """Store a SUM formula over *arguments*.

        The sum is computed once now and kept as the cell's content. The
        first argument that evaluates to an error becomes the content and
        the remaining arguments are not evaluated.
        """
        cell = CellIdentifier.coerce(cell)
        formula = Sum.of(arguments)
        content = sum_values(self._evaluator.evaluate(ref) for ref in formula.references)
        self._cells[cell] = Cell(content, formula)
        self._graph.add_formula(cell, formula.references)
        logger.debug("Set %s = %s (%s)", cell, formula, content)

    # ------------------------------------------------------------------
    # Evaluation shortcuts
    # ------------------------------------------------------------------

    def evaluate(self, cell: Any) -> CellValue:
        return self._evaluator.evaluate(CellIdentifier.coerce(cell))

    def evaluate_all(self, memoize: bool = False) -> dict[CellIdentifier, CellValue]:
        return self._evaluator.evaluate_all(memoize=memoize)

    def print_cells(self) -> str:
        """Evaluate every cell and render one ``"row,column: value"`` line each."""
        return "".join(line + "\n" for line in render_cells(self.evaluate_all()))
