"""Plan command: resolve, discover zones and expand subnets."""

import os
from typing import Annotated

import typer

from subnetplan.catalog import ZoneCatalog
from subnetplan.cli.formatters import format_network_panel, format_subnet_table
from subnetplan.cli.inputs import resolve_cli_configuration
from subnetplan.cli.output import console, print_error, print_success
from subnetplan.config import config
from subnetplan.exceptions import PlanError
from subnetplan.models.enums import OutputFormat
from subnetplan.planner import build_plan
from subnetplan.render import render_plan
from subnetplan.utils.logger import format_traceback, get_logger

logger = get_logger(__name__)


def plan_command(
    values: Annotated[
        str | None,
        typer.Option("--values", "-v", help="YAML/JSON values file"),
    ] = None,
    var: Annotated[
        list[str] | None,
        typer.Option("--var", help="Override a variable (NAME=VALUE), repeatable"),
    ] = None,
    output_format: Annotated[
        OutputFormat | None,
        typer.Option("--format", "-f", help="Output format"),
    ] = None,
    output: Annotated[
        str | None,
        typer.Option("--output", "-o", help="Write the rendered plan to a file"),
    ] = None,
):
    """Plan the network and its subnets."""
    output_format = output_format or config.OUTPUT_FORMAT

    if output and output_format == OutputFormat.TABLE:
        print_error("--output needs a file format: json, yaml or terraform")
        raise typer.Exit(1)

    try:
        plan_config = resolve_cli_configuration(values, var)
        catalog = ZoneCatalog(config.get_inventory())
        plan = build_plan(plan_config, catalog)
    except (PlanError, ValueError) as e:
        logger.debug(format_traceback(e))
        print_error(str(e))
        raise typer.Exit(1)

    if output_format == OutputFormat.TABLE:
        console.print(format_network_panel(plan))
        if plan.subnets:
            console.print(format_subnet_table(plan))
        else:
            console.print("[yellow]No subnets planned.[/yellow]")
        return

    try:
        text = render_plan(plan, output_format)
    except ValueError as e:
        print_error(str(e))
        raise typer.Exit(1)

    if output:
        output_path = os.path.expanduser(output)
        try:
            os.makedirs(os.path.dirname(output_path) or ".", exist_ok=True)
            with open(output_path, "w") as f:
                f.write(text)
        except OSError as e:
            logger.debug(format_traceback(e))
            print_error(f"Cannot write {output_path}: {e.strerror or e}")
            raise typer.Exit(1)
        print_success(f"Plan written to: {output_path}")
    else:
        typer.echo(text, nl=False)
