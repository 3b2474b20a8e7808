"""sumsheet - in-memory spreadsheet of constants and SUM formulas.

Usage::

    from sumsheet import CellIdentifier, Sheet

    sheet = Sheet()
    sheet.set_constant(CellIdentifier(0, 0), 5)
    sheet.set_constant((0, 1), 10)
    sheet.set_sum_cell((0, 2), [(0, 0), (0, 1)])
    print(sheet.evaluate((0, 2)))   # 15.0
    print(sheet.print_cells())      # "0,0: 5.0" ...

Circular references and references to empty cells evaluate to ``REFERROR``
(``CellError.REF``) rather than raising.
"""

from sumsheet._cell import Cell, CellIdentifier, Formula, Sum
from sumsheet._display import format_value, render_cells
from sumsheet._sheet import Sheet
from sumsheet.calc import CellError, CellValue, is_error

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "Cell",
    "CellError",
    "CellIdentifier",
    "CellValue",
    "Formula",
    "Sheet",
    "Sum",
    "format_value",
    "is_error",
    "render_cells",
]
