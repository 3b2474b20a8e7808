"""Tests for sumsheet.calc error values and the SUM builtin."""

from __future__ import annotations

from sumsheet.calc._functions import CellError, first_error, is_error, sum_values


class TestCellError:
    def test_singleton(self) -> None:
        assert CellError.of("referror") is CellError.REF

    def test_compares_to_code(self) -> None:
        assert CellError.REF == "REFERROR"
        assert CellError.REF == "referror"
        assert CellError.REF != 0.0

    def test_rendering(self) -> None:
        assert str(CellError.REF) == "REFERROR"
        assert repr(CellError.REF) == "REFERROR"

    def test_hashable(self) -> None:
        assert {CellError.REF, CellError.of("REFERROR")} == {CellError.REF}

    def test_is_error(self) -> None:
        assert is_error(CellError.REF)
        assert not is_error(0.0)
        assert not is_error("REFERROR")

    def test_first_error(self) -> None:
        assert first_error(1.0, CellError.REF, 2.0) is CellError.REF
        assert first_error(1.0, 2.0) is None


class TestSumValues:
    def test_empty(self) -> None:
        assert sum_values([]) == 0.0

    def test_adds_in_order(self) -> None:
        assert sum_values([1.5, 2.5, -1.0]) == 3.0

    def test_error_wins(self) -> None:
        assert sum_values([1.0, CellError.REF, 2.0]) is CellError.REF

    def test_stops_at_first_error(self) -> None:
        consumed: list[object] = []

        def values():
            for v in (1.0, CellError.REF, 2.0):
                consumed.append(v)
                yield v

        assert sum_values(values()) is CellError.REF
        assert consumed == [1.0, CellError.REF]
