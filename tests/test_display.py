"""Tests for rendering evaluated cells."""

from __future__ import annotations

from sumsheet import CellError, CellIdentifier as C, Sheet, format_value, render_cells


class TestFormatValue:
    def test_numbers(self) -> None:
        assert format_value(5.0) == "5.0"
        assert format_value(-0.5) == "-0.5"
        assert format_value(float("inf")) == "inf"
        assert format_value(float("nan")) == "nan"

    def test_ref_error(self) -> None:
        assert format_value(CellError.REF) == "REFERROR"


class TestRenderCells:
    def test_sorted_by_row_then_column(self) -> None:
        results = {C(1, 0): 1.0, C(0, 2): CellError.REF, C(0, 0): 5.0}
        assert render_cells(results) == ["0,0: 5.0", "0,2: REFERROR", "1,0: 1.0"]

    def test_empty(self) -> None:
        assert render_cells({}) == []


class TestPrintCells:
    def test_simple_sum(self) -> None:
        sheet = Sheet()
        sheet.set_constant(C(0, 0), 5)
        sheet.set_constant(C(0, 1), 10)
        sheet.set_sum_cell(C(0, 2), [C(0, 0), C(0, 1)])
        assert sheet.print_cells() == "0,0: 5.0\n0,1: 10.0\n0,2: 15.0\n"

    def test_cycle(self) -> None:
        sheet = Sheet()
        sheet.set_sum_cell(C(0, 0), [C(0, 1)])
        sheet.set_sum_cell(C(0, 1), [C(0, 0)])
        assert sheet.print_cells() == "0,0: REFERROR\n0,1: REFERROR\n"

    def test_empty_sheet(self) -> None:
        assert Sheet().print_cells() == ""
