"""Tests for the sumsheet command line."""

from __future__ import annotations

import logging
from collections.abc import Iterator

import pytest
from typer.testing import CliRunner

from sumsheet.cli import SCENARIOS, app

runner = CliRunner()


@pytest.fixture
def restore_root_logger() -> Iterator[None]:
    """Undo the handler and level that ``--verbose`` installs."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


class TestDemo:
    def test_all_scenarios(self) -> None:
        result = runner.invoke(app, ["demo"])
        assert result.exit_code == 0
        for number, name in enumerate(SCENARIOS, start=1):
            assert f"TEST {number} ({name})" in result.output

    def test_update_scenario_propagates(self) -> None:
        result = runner.invoke(app, ["demo", "update"])
        assert result.exit_code == 0
        assert "0,0: 5.0\n0,1: 5.0\n" in result.output
        assert "0,0: 10.0\n0,1: 10.0\n" in result.output

    def test_late_definition_scenario(self) -> None:
        result = runner.invoke(app, ["demo", "late"])
        assert result.exit_code == 0
        assert "0,1: REFERROR\n" in result.output
        assert "0,0: 5.0\n0,1: 5.0\n" in result.output

    @pytest.mark.parametrize(
        ("name", "expected"),
        [
            ("sum", "0,0: 5.0\n0,1: 10.0\n0,2: 15.0\n"),
            ("chain", "0,0: 5.0\n0,1: 5.0\n0,2: 5.0\n"),
            ("cycle", "0,0: REFERROR\n0,1: REFERROR\n"),
            ("empty", "0,0: 0.0\n"),
            ("self", "0,0: REFERROR\n"),
            ("diamond", "0,3: 4.0\n"),
        ],
    )
    def test_single_scenario(self, name: str, expected: str) -> None:
        result = runner.invoke(app, ["demo", name])
        assert result.exit_code == 0
        assert expected in result.output

    def test_unknown_scenario(self) -> None:
        result = runner.invoke(app, ["demo", "nope"])
        assert result.exit_code == 2
        assert "Unknown scenario" in result.output


class TestRun:
    def test_assignments(self) -> None:
        result = runner.invoke(app, ["run", "0,0=5", "0,1=10", "0,2=SUM(0,0;0,1)"])
        assert result.exit_code == 0
        assert result.output == "0,0: 5.0\n0,1: 10.0\n0,2: 15.0\n"

    def test_dangling_reference(self) -> None:
        result = runner.invoke(app, ["run", "1,1=SUM(0,0)"])
        assert result.exit_code == 0
        assert result.output == "1,1: REFERROR\n"

    def test_malformed_assignment(self) -> None:
        result = runner.invoke(app, ["run", "0,0=five"])
        assert result.exit_code == 2
        assert "Invalid assignment" in result.output

    def test_verbose_flag(self, restore_root_logger: None) -> None:
        result = runner.invoke(app, ["-v", "run", "0,0=1"])
        assert result.exit_code == 0
        assert "0,0: 1.0" in result.output
