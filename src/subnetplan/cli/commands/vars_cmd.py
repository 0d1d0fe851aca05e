"""Variable inspection commands."""

import os
from typing import Annotated

import typer
from rich.table import Table

from subnetplan.cli.formatters import format_variable_table
from subnetplan.cli.inputs import resolve_cli_configuration
from subnetplan.cli.output import console, print_error
from subnetplan.config import config
from subnetplan.exceptions import PlanError
from subnetplan.variables import DEFAULT_VARIABLES

app = typer.Typer(help="Variable commands")


@app.command("show")
def show_variables(
    values: Annotated[
        str | None,
        typer.Option("--values", "-v", help="YAML/JSON values file"),
    ] = None,
    var: Annotated[
        list[str] | None,
        typer.Option("--var", help="Override a variable (NAME=VALUE), repeatable"),
    ] = None,
):
    """Show resolved variables and where each value came from."""
    try:
        resolved = resolve_cli_configuration(values, var)
    except PlanError as e:
        print_error(str(e))
        raise typer.Exit(1)

    console.print(format_variable_table(resolved))


@app.command("env")
def show_env():
    """Show the environment variables that override each variable."""
    table = Table(title="Environment Overrides", show_header=True)
    table.add_column("Variable", style="cyan")
    table.add_column("Description")
    table.add_column("Current Value", style="green")

    for name, spec in DEFAULT_VARIABLES.items():
        env_name = f"{config.VAR_ENV_PREFIX}{name}"
        table.add_row(env_name, spec.description, os.environ.get(env_name, "-"))

    console.print(table)
