"""Error values and the SUM builtin used by formula evaluation."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any


# ---------------------------------------------------------------------------
# CellError: typed error values that propagate through formula chains
# ---------------------------------------------------------------------------


class CellError:
    """Error value that propagates through formula chains.

    Use ``CellError.of(code)`` to get a cached singleton for each error code.
    Errors compare equal to their string code (``CellError.REF == "REFERROR"``).
    """

    __slots__ = ("code",)
    _cache: dict[str, CellError] = {}

    REF: CellError

    def __init__(self, code: str) -> None:
        self.code = code

    @classmethod
    def of(cls, code: str) -> CellError:
        canon = code.upper()
        if canon not in cls._cache:
            cls._cache[canon] = cls(canon)
        return cls._cache[canon]

    def __repr__(self) -> str:
        return self.code

    def __str__(self) -> str:
        return self.code

    def __eq__(self, other: object) -> bool:
        if isinstance(other, CellError):
            return self.code == other.code
        if isinstance(other, str):
            return self.code == other.upper()
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.code)


# Missing cell, transitive error, or circular reference.
CellError.REF = CellError.of("REFERROR")

CellValue = float | CellError


def is_error(val: Any) -> bool:
    """Return True if *val* is a CellError instance."""
    return isinstance(val, CellError)


def first_error(*values: Any) -> CellError | None:
    """Return the first CellError found in *values*, or None."""
    for v in values:
        if isinstance(v, CellError):
            return v
    return None


def sum_values(values: Iterable[CellValue]) -> CellValue:
    """Add *values* left to right, stopping at the first error.

    Unlike a spreadsheet SUM over a range, errors are never skipped: the
    first one becomes the result and later values are not consumed.
    """
    total = 0.0
    for v in values:
        if isinstance(v, CellError):
            return v
        total += v
    return total
