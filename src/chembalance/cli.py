"""Command-line entrypoints for chembalance."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Annotated, Any, Dict, NoReturn, Optional

import typer

from chembalance.balancer import balance
from chembalance.classify import classify_equation, validate_equation
from chembalance.config import BalancerConfiguration, configure_logging, load_configuration
from chembalance.errors import BalanceError
from chembalance.formula import parse_formula

app = typer.Typer(add_completion=False)

ConfigOption = Annotated[
    Optional[Path], typer.Option("--config", help="Path to a JSON balancer configuration.")
]
VerboseOption = Annotated[bool, typer.Option("--verbose", "-v", help="Enable debug logging.")]


def _configuration(config_file: Path | None, arithmetic: str | None = None) -> BalancerConfiguration:
    data: Dict[str, Any] = {}
    try:
        if config_file is not None:
            data.update(load_configuration(config_file).__dict__)
        if arithmetic is not None:
            data["arithmetic"] = arithmetic
        return BalancerConfiguration.from_mapping(data)
    except ValueError as error:
        raise typer.BadParameter(str(error)) from error


def _fail(error: BalanceError) -> NoReturn:
    typer.echo(f"{error.kind} error: {error.message}", err=True)
    raise typer.Exit(code=1)


@app.command("balance")
def balance_command(
    equation: Annotated[str, typer.Argument(help="Equation such as 'Al + O2 -> Al2O3'.")],
    arithmetic: Annotated[
        Optional[str], typer.Option(help="Arithmetic mode: exact or float.")
    ] = None,
    config_file: ConfigOption = None,
    as_json: Annotated[bool, typer.Option("--json", help="Print a JSON object.")] = False,
    verbose: VerboseOption = False,
) -> None:
    """Balance a chemical equation."""
    configure_logging("DEBUG" if verbose else None)
    configuration = _configuration(config_file, arithmetic)
    try:
        balanced = balance(equation, configuration)
    except BalanceError as error:
        _fail(error)

    if not as_json:
        typer.echo(balanced.format())
        return

    payload = {
        "equation": balanced.format(),
        "coefficients": list(balanced.coefficients),
        "reactants": [molecule.formula for molecule in balanced.equation.reactants],
        "products": [molecule.formula for molecule in balanced.equation.products],
    }
    typer.echo(json.dumps(payload, indent=2))


@app.command("parse")
def parse_command(
    formula: Annotated[str, typer.Argument(help="Molecular formula such as 'Ca(OH)2'.")],
    as_json: Annotated[bool, typer.Option("--json", help="Print a JSON object.")] = False,
) -> None:
    """Print the element counts of a formula."""
    try:
        counts = parse_formula(formula)
    except BalanceError as error:
        _fail(error)

    if as_json:
        typer.echo(json.dumps(counts, indent=2))
        return
    for symbol, count in counts.items():
        typer.echo(f"{symbol}: {count}")


@app.command("classify")
def classify_command(
    equation: Annotated[str, typer.Argument(help="Equation such as 'Zn + HCl -> ZnCl2 + H2'.")],
) -> None:
    """Guess the reaction type of an equation."""
    try:
        reaction_type = classify_equation(equation)
    except BalanceError as error:
        _fail(error)
    typer.echo(reaction_type.value)


@app.command("validate")
def validate_command(
    equation: Annotated[str, typer.Argument(help="Equation such as 'Xx + O2 -> XxO2'.")],
) -> None:
    """Check element symbols and element conservation of an equation."""
    try:
        validation = validate_equation(equation)
    except BalanceError as error:
        _fail(error)
    typer.echo(validation.reason)
    if not validation.is_possible:
        raise typer.Exit(code=1)


@app.command("batch")
def batch_command(
    input_file: Annotated[Path, typer.Argument(help="Text file with one equation per line.")],
    output: Annotated[
        Optional[Path], typer.Option(help="Path to save output JSON.")
    ] = None,
    config_file: ConfigOption = None,
    verbose: VerboseOption = False,
) -> None:
    """Balance every equation in a file and report the results as JSON."""
    configure_logging("DEBUG" if verbose else None)
    configuration = _configuration(config_file)

    with open(input_file, "r", encoding="utf-8") as f:
        lines = [line.strip() for line in f if line.strip()]

    results = []
    for line in lines:
        entry: Dict[str, Any] = {"input": line, "balanced": None, "error": None}
        try:
            entry["balanced"] = balance(line, configuration).format()
        except BalanceError as error:
            entry["error"] = {"kind": error.kind, "message": error.message}
        results.append(entry)

    json_output = json.dumps(results, indent=2, ensure_ascii=False)
    typer.echo(json_output)

    if output:
        with open(output, "w", encoding="utf-8") as f:
            f.write(json_output)
