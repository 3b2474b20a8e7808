"""Cell addressing and stored cell records."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from sumsheet.calc._functions import CellError


@dataclass(frozen=True, order=True)
class CellIdentifier:
    """A ``(row, column)`` cell address.

    Equality and hashing are structural, so identifiers work as dict keys.
    No range checks: negative rows and columns are accepted as given.
    """

    row: int
    column: int

    def __str__(self) -> str:
        return f"{self.row},{self.column}"

    @classmethod
    def parse(cls, text: str) -> CellIdentifier:
        """Parse the ``"row,column"`` display form."""
        parts = text.split(",")
        if len(parts) != 2:
            raise ValueError(f"Invalid cell identifier: {text!r}")
        try:
            return cls(int(parts[0].strip()), int(parts[1].strip()))
        except ValueError:
            raise ValueError(f"Invalid cell identifier: {text!r}") from None

    @classmethod
    def coerce(cls, obj: Any) -> CellIdentifier:
        """Accept an identifier, a ``(row, column)`` pair, or ``"row,column"``."""
        if isinstance(obj, CellIdentifier):
            return obj
        if isinstance(obj, str):
            return cls.parse(obj)
        if isinstance(obj, tuple) and len(obj) == 2:
            row, column = obj
            if isinstance(row, int) and isinstance(column, int):
                return cls(row, column)
        raise TypeError(f"Cannot use {obj!r} as a cell identifier")


@dataclass(frozen=True)
class Sum:
    """``SUM`` formula over an ordered list of cell references."""

    references: tuple[CellIdentifier, ...] = ()

    @classmethod
    def of(cls, references: Iterable[Any]) -> Sum:
        return cls(tuple(CellIdentifier.coerce(ref) for ref in references))

    def __str__(self) -> str:
        return "SUM(" + ";".join(str(ref) for ref in self.references) + ")"


# A cell's formula: a Sum, or None for a plain constant.
Formula = Sum | None


@dataclass(frozen=True)
class Cell:
    """Stored record for one identifier.

    ``content`` is authoritative when ``formula`` is None. For a sum cell it
    is the value computed when the formula was set, kept for inspection only;
    evaluation always walks the formula.
    """

    content: float | CellError
    formula: Formula = None

    @property
    def is_formula(self) -> bool:
        return self.formula is not None
