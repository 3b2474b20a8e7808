"""Typer CLI: run the built-in scenarios or evaluate ad-hoc assignments."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from typing import Annotated, Optional

import typer

from sumsheet._cell import CellIdentifier as C
from sumsheet._sheet import Sheet
from sumsheet.calc._parser import apply_assignment, parse_assignment

app = typer.Typer(
    help="Evaluate a small spreadsheet of constants and SUM formulas.",
    no_args_is_help=True,
    add_completion=False,
)

# ---------------------------------------------------------------------------
# Scenarios: each writes cells and yields the sheet's printout at each step
# ---------------------------------------------------------------------------

Scenario = Callable[[Sheet], Iterator[str]]


def _update_propagates(sheet: Sheet) -> Iterator[str]:
    sheet.set_constant(C(0, 0), 5)
    sheet.set_sum_cell(C(0, 1), [C(0, 0)])
    yield sheet.print_cells()
    sheet.set_constant(C(0, 0), 10)
    yield sheet.print_cells()


def _simple_sum(sheet: Sheet) -> Iterator[str]:
    sheet.set_constant(C(0, 0), 5)
    sheet.set_constant(C(0, 1), 10)
    sheet.set_sum_cell(C(0, 2), [C(0, 0), C(0, 1)])
    yield sheet.print_cells()


def _chained_sums(sheet: Sheet) -> Iterator[str]:
    sheet.set_constant(C(0, 0), 5)
    sheet.set_sum_cell(C(0, 1), [C(0, 0)])
    sheet.set_sum_cell(C(0, 2), [C(0, 1)])
    yield sheet.print_cells()


def _mutual_cycle(sheet: Sheet) -> Iterator[str]:
    sheet.set_sum_cell(C(0, 0), [C(0, 1)])
    sheet.set_sum_cell(C(0, 1), [C(0, 0)])
    yield sheet.print_cells()


def _late_definition(sheet: Sheet) -> Iterator[str]:
    sheet.set_sum_cell(C(0, 1), [C(0, 0)])
    yield sheet.print_cells()
    sheet.set_constant(C(0, 0), 5)
    yield sheet.print_cells()


def _empty_sum(sheet: Sheet) -> Iterator[str]:
    sheet.set_sum_cell(C(0, 0), [])
    yield sheet.print_cells()


def _self_reference(sheet: Sheet) -> Iterator[str]:
    sheet.set_sum_cell(C(0, 0), [C(0, 0)])
    yield sheet.print_cells()


def _diamond(sheet: Sheet) -> Iterator[str]:
    sheet.set_constant(C(0, 0), 2)
    sheet.set_sum_cell(C(0, 1), [C(0, 0)])
    sheet.set_sum_cell(C(0, 2), [C(0, 0)])
    sheet.set_sum_cell(C(0, 3), [C(0, 1), C(0, 2)])
    yield sheet.print_cells()


SCENARIOS: dict[str, Scenario] = {
    "update": _update_propagates,
    "sum": _simple_sum,
    "chain": _chained_sums,
    "cycle": _mutual_cycle,
    "late": _late_definition,
    "empty": _empty_sum,
    "self": _self_reference,
    "diamond": _diamond,
}


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


@app.callback()
def main(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Log engine activity.")] = False,
) -> None:
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")


@app.command()
def demo(
    name: Annotated[
        Optional[str],
        typer.Argument(help=f"Scenario to run: {', '.join(SCENARIOS)}. Default: all."),
    ] = None,
) -> None:
    """Run the built-in scenarios and print each sheet."""
    if name is None:
        selected = list(SCENARIOS.items())
    elif name in SCENARIOS:
        selected = [(name, SCENARIOS[name])]
    else:
        typer.echo(f"Unknown scenario {name!r}. Choose from: {', '.join(SCENARIOS)}", err=True)
        raise typer.Exit(code=2)

    for number, (scenario_name, scenario) in enumerate(selected, start=1):
        typer.echo(f"TEST {number} ({scenario_name})")
        for printout in scenario(Sheet()):
            typer.echo(printout)


@app.command()
def run(
    assignments: Annotated[
        list[str],
        typer.Argument(help='Writes applied in order, e.g. "0,0=5" "0,1=SUM(0,0;0,0)".'),
    ],
) -> None:
    """Apply assignments to an empty sheet and print every cell."""
    sheet = Sheet()
    for text in assignments:
        try:
            assignment = parse_assignment(text)
        except ValueError as e:
            typer.echo(f"Error: {e}", err=True)
            raise typer.Exit(code=2) from e
        apply_assignment(sheet, assignment)
    typer.echo(sheet.print_cells(), nl=False)


if __name__ == "__main__":
    app()
