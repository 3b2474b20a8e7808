"""sumsheet.calc - Formula evaluation engine for sumsheet sheets."""

from sumsheet.calc._evaluator import SheetEvaluator
from sumsheet.calc._functions import CellError, CellValue, first_error, is_error, sum_values
from sumsheet.calc._graph import DependencyGraph
from sumsheet.calc._parser import Assignment, apply_assignment, parse_assignment, parse_identifier
from sumsheet.calc._protocol import CalcEngine, CellDelta, RecalcResult

__all__ = [
    "Assignment",
    "CalcEngine",
    "CellDelta",
    "CellError",
    "CellValue",
    "DependencyGraph",
    "RecalcResult",
    "SheetEvaluator",
    "apply_assignment",
    "first_error",
    "is_error",
    "parse_assignment",
    "parse_identifier",
    "sum_values",
]
