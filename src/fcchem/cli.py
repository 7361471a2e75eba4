"""Command-line entrypoints for fcchem."""

from __future__ import annotations

import json
import logging
from typing import Annotated, NoReturn

import typer

from fcchem.constants import DEFAULT_MAX_DENOMINATOR, DEFAULT_ZERO_TOLERANCE
from fcchem.formula import charge, count_elements, read_species
from fcchem.models import Reaction, Species
from fcchem.stoichiometry import BalanceOptions

app = typer.Typer(add_completion=False)

FormulasArgument = Annotated[list[str], typer.Argument(help="Chemical formulas, e.g. H2O or SO4-2.")]


def _fail(error: Exception) -> NoReturn:
    typer.echo(f"Error: {error}", err=True)
    raise typer.Exit(code=1)


@app.callback()
def main(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Log debug output.")] = False,
) -> None:
    """Parse chemical formulas and balance reactions."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG)


@app.command()
def parse(formulas: FormulasArgument) -> None:
    """Show the elements, charge and element count of each formula."""
    payload = {}
    for formula in formulas:
        try:
            payload[formula] = {
                "elements": read_species(formula),
                "charge": charge(formula, strict=True),
                "count": count_elements(formula),
            }
        except ValueError as error:
            _fail(error)
    typer.echo(json.dumps(payload, indent=2))


@app.command("charge")
def charge_command(
    formulas: FormulasArgument,
    strict: Annotated[
        bool, typer.Option(help="Fail on unparsable formulas instead of reporting 0.")
    ] = False,
) -> None:
    """Show the net charge of each formula."""
    try:
        payload = {formula: charge(formula, strict=strict) for formula in formulas}
    except ValueError as error:
        _fail(error)
    typer.echo(json.dumps(payload, indent=2))


@app.command()
def balance(
    formulas: FormulasArgument,
    zero_tolerance: Annotated[
        float, typer.Option(help="Magnitude treated as zero in the decomposition.")
    ] = DEFAULT_ZERO_TOLERANCE,
    max_denominator: Annotated[
        int, typer.Option(help="Largest denominator when reducing coefficients.")
    ] = DEFAULT_MAX_DENOMINATOR,
    reversible: Annotated[bool, typer.Option(help="Render the reaction as reversible.")] = False,
) -> None:
    """Balance a reaction among the given species."""
    try:
        options = BalanceOptions(zero_tolerance=zero_tolerance, max_denominator=max_denominator)
        species = [Species(name=formula, formula=formula) for formula in formulas]
        reaction = Reaction.balance("cli", species, options, reversible=reversible)
    except ValueError as error:
        _fail(error)

    payload = {
        "formulas": formulas,
        "coefficients": [reaction.stoichiometry[formula] for formula in formulas],
        "equation": reaction.equation(),
    }
    typer.echo(json.dumps(payload, indent=2))
