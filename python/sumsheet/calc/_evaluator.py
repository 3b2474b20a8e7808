"""SheetEvaluator: cycle-safe evaluator for SUM formula graphs.

Values are always recomputed from the stored formulas, so a change to any
constant is visible to every sum that reads it, directly or transitively.
Circular references evaluate to ``REFERROR`` instead of raising.

Traversal is depth-first over an explicit stack. The ``visited`` set holds
the cells on the current path from the root, not every cell seen so far:
a cell is added when its formula is entered and removed when that formula
finishes, so two sums sharing a dependency are not mistaken for a cycle.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING

from sumsheet._cell import CellIdentifier
from sumsheet.calc._functions import CellError, CellValue, is_error
from sumsheet.calc._protocol import CellDelta, RecalcResult

if TYPE_CHECKING:
    from sumsheet._sheet import Sheet

logger = logging.getLogger(__name__)

# Marker returned by _enter when a formula frame was pushed.
_PENDING = object()


@dataclass(slots=True)
class _Frame:
    """A sum being accumulated on the traversal stack."""

    cell: CellIdentifier
    references: tuple[CellIdentifier, ...]
    position: int = 0
    total: float = 0.0


def _values_differ(a: CellValue, b: CellValue, tolerance: float) -> bool:
    """Check if two values differ beyond tolerance."""
    if is_error(a) or is_error(b):
        return a != b
    if a == b or (a != a and b != b):  # equal, or both NaN
        return False
    return not abs(a - b) <= tolerance


# ---------------------------------------------------------------------------
# Evaluator
# ---------------------------------------------------------------------------


class SheetEvaluator:
    """Evaluates the cells of a :class:`~sumsheet.Sheet`.

    Usage::

        evaluator = SheetEvaluator(sheet)
        value = evaluator.evaluate(CellIdentifier(0, 2))
        results = evaluator.evaluate_all()
        recalc = evaluator.recalculate({CellIdentifier(0, 0): 42.0})

    The evaluator keeps no state between calls; it only reads the sheet,
    except in :meth:`recalculate`, which writes constants through it.
    """

    def __init__(self, sheet: Sheet) -> None:
        self._sheet = sheet

    def evaluate(
        self,
        cell: CellIdentifier,
        visited: set[CellIdentifier] | None = None,
    ) -> CellValue:
        """Compute *cell* fresh from the formula graph.

        *visited* is the set of cells already on the evaluation path; a
        reference back into it is a cycle. A caller-supplied set is used in
        place and is back to its original contents when this returns.
        """
        return self._evaluate(cell, set() if visited is None else visited, None)

    def evaluate_all(self, memoize: bool = False) -> dict[CellIdentifier, CellValue]:
        """Evaluate every stored cell, each from a fresh ``visited`` set.

        With *memoize*, finished results are reused across cells within this
        call. Results are identical either way: a cell that hits the current
        path can reach one of its own ancestors, which in turn reaches it, so
        it sits on a cycle and is ``REFERROR`` from any root.
        """
        cache: dict[CellIdentifier, CellValue] | None = {} if memoize else None
        results: dict[CellIdentifier, CellValue] = {}
        for cell in list(self._sheet):
            results[cell] = self._evaluate(cell, set(), cache)
        return results

    def recalculate(
        self,
        perturbations: Mapping[CellIdentifier, float],
        tolerance: float = 1e-10,
    ) -> RecalcResult:
        """Write constants and report the formula cells whose values changed."""
        perturbations = {CellIdentifier.coerce(k): v for k, v in perturbations.items()}
        graph = self._sheet.graph
        affected = graph.affected_cells(perturbations.keys())
        old_values = {cell: self.evaluate(cell) for cell in affected}

        for cell, value in perturbations.items():
            self._sheet.set_constant(cell, value)

        # A perturbed formula cell became a constant; it no longer propagates.
        affected = [cell for cell in affected if cell not in perturbations]

        deltas: list[CellDelta] = []
        for cell in affected:
            new_value = self.evaluate(cell)
            if _values_differ(old_values[cell], new_value, tolerance):
                deltas.append(CellDelta(cell=cell, old_value=old_values[cell], new_value=new_value))

        logger.debug(
            "Recalculated %d affected cell(s), %d changed", len(affected), len(deltas),
        )
        return RecalcResult(
            perturbations=dict(perturbations),
            deltas=tuple(deltas),
            total_formula_cells=len(graph.formula_cells),
            propagated_cells=len(deltas),
            max_chain_depth=graph.max_depth(perturbations.keys()),
        )

    # ------------------------------------------------------------------
    # Traversal
    # ------------------------------------------------------------------

    def _evaluate(
        self,
        root: CellIdentifier,
        visited: set[CellIdentifier],
        cache: dict[CellIdentifier, CellValue] | None,
    ) -> CellValue:
        stack: list[_Frame] = []
        value = self._enter(root, visited, stack, cache)

        while stack:
            frame = stack[-1]
            if value is not _PENDING:
                # A reference of ``frame`` just finished with ``value``.
                if is_error(value):
                    self._leave(frame, value, visited, stack, cache)
                    continue
                frame.total += value

            if frame.position < len(frame.references):
                ref = frame.references[frame.position]
                frame.position += 1
                value = self._enter(ref, visited, stack, cache)
            else:
                value = frame.total
                self._leave(frame, value, visited, stack, cache)

        return value

    def _enter(
        self,
        cell: CellIdentifier,
        visited: set[CellIdentifier],
        stack: list[_Frame],
        cache: dict[CellIdentifier, CellValue] | None,
    ) -> object:
        """Resolve *cell* directly, or push a frame and return ``_PENDING``."""
        if cell in visited:
            logger.debug("Circular reference detected at %s", cell)
            return CellError.REF
        if cache is not None and cell in cache:
            return cache[cell]

        stored = self._sheet.get(cell)
        if stored is None:
            logger.debug("Reference to empty cell %s", cell)
            return CellError.REF
        if stored.formula is None:
            return stored.content

        visited.add(cell)
        stack.append(_Frame(cell, stored.formula.references))
        return _PENDING

    @staticmethod
    def _leave(
        frame: _Frame,
        value: CellValue,
        visited: set[CellIdentifier],
        stack: list[_Frame],
        cache: dict[CellIdentifier, CellValue] | None,
    ) -> None:
        stack.pop()
        visited.discard(frame.cell)
        if cache is not None:
            cache[frame.cell] = value
