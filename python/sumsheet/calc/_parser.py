"""Assignment parser: regex-based reading of ``row,col=...`` statements."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import TYPE_CHECKING

from sumsheet._cell import CellIdentifier, Sum

if TYPE_CHECKING:
    from sumsheet._sheet import Sheet

# ---------------------------------------------------------------------------
# Regex patterns
# ---------------------------------------------------------------------------

# Cell identifier: 0,1  -3, 4
_CELL_ID = r"\s*-?\d+\s*,\s*-?\d+\s*"
_CELL_ID_RE = re.compile(rf"^{_CELL_ID}$")

# Target and right-hand side: 0,2 = SUM(0,0;0,1)
_ASSIGNMENT_RE = re.compile(rf"^({_CELL_ID})=(.*)$", re.DOTALL)

# SUM(...) with its raw argument list
_SUM_RE = re.compile(r"^\s*SUM\s*\((.*)\)\s*$", re.IGNORECASE | re.DOTALL)


@dataclass(frozen=True)
class Assignment:
    """A parsed write: a constant when ``formula`` is None, else a sum."""

    cell: CellIdentifier
    value: float | None = None
    formula: Sum | None = None


def parse_identifier(text: str) -> CellIdentifier:
    """Parse ``"row,column"`` into a :class:`CellIdentifier`."""
    if not _CELL_ID_RE.match(text):
        raise ValueError(f"Invalid cell identifier: {text!r}")
    return CellIdentifier.parse(text)


def parse_sum_arguments(args: str) -> list[CellIdentifier]:
    """Split a ``;``-separated argument list; blank means no arguments."""
    if not args.strip():
        return []
    return [parse_identifier(part) for part in args.split(";")]


def parse_assignment(text: str) -> Assignment:
    """Parse ``row,col=NUMBER`` or ``row,col=SUM(row,col;...)``."""
    m = _ASSIGNMENT_RE.match(text)
    if not m:
        raise ValueError(f"Invalid assignment: {text!r}")
    cell = parse_identifier(m.group(1))
    rhs = m.group(2)

    sum_match = _SUM_RE.match(rhs)
    if sum_match:
        try:
            refs = parse_sum_arguments(sum_match.group(1))
        except ValueError as e:
            raise ValueError(f"Invalid assignment: {text!r} ({e})") from e
        return Assignment(cell=cell, formula=Sum(tuple(refs)))

    try:
        value = float(rhs.strip())
    except ValueError:
        raise ValueError(f"Invalid assignment: {text!r}") from None
    return Assignment(cell=cell, value=value)


def apply_assignment(sheet: Sheet, assignment: Assignment) -> None:
    """Write a parsed assignment into *sheet*."""
    if assignment.formula is not None:
        sheet.set_sum_cell(assignment.cell, assignment.formula.references)
    else:
        sheet.set_constant(assignment.cell, assignment.value)
