"""CalcEngine protocol and result dataclasses."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from sumsheet._cell import CellIdentifier
    from sumsheet.calc._functions import CellValue


@dataclass(frozen=True)
class CellDelta:
    """A single cell's value change from recalculation."""

    cell: CellIdentifier
    old_value: CellValue
    new_value: CellValue


@dataclass(frozen=True)
class RecalcResult:
    """Result of a perturbation-driven recalculation."""

    perturbations: dict[CellIdentifier, float]  # cell -> new constant
    deltas: tuple[CellDelta, ...]  # cells that changed
    total_formula_cells: int = 0
    propagated_cells: int = 0  # formula cells whose value actually changed
    max_chain_depth: int = 0  # longest dependency chain from perturbed inputs

    @property
    def propagation_ratio(self) -> float:
        if self.total_formula_cells == 0:
            return 0.0
        return self.propagated_cells / self.total_formula_cells


@runtime_checkable
class CalcEngine(Protocol):
    """Protocol for formula evaluation engines."""

    def evaluate(
        self,
        cell: CellIdentifier,
        visited: set[CellIdentifier] | None = None,
    ) -> CellValue:
        """Compute one cell's value fresh from its formula graph."""
        ...

    def evaluate_all(self, memoize: bool = False) -> dict[CellIdentifier, CellValue]:
        """Evaluate every stored cell, each with its own cycle tracking."""
        ...

    def recalculate(
        self,
        perturbations: Mapping[CellIdentifier, float],
        tolerance: float = 1e-10,
    ) -> RecalcResult:
        """Write constants and report which formula cells changed."""
        ...
