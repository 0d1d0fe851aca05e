"""
subnetplan CLI entry point.

Usage:
    subnetplan [OPTIONS] COMMAND [ARGS]...

Commands:
    plan      Plan the network and its subnets
    vars      Variable inspection
    zones     Zone catalog queries
    init      Generate starter input files
    version   Show version information
"""

from typing import Annotated

import typer

from subnetplan.cli.commands import init, plan, vars_cmd, zones
from subnetplan.cli.output import console
from subnetplan.config import config
from subnetplan.models.enums import LogLevel, OutputFormat
from subnetplan.utils.logger import configure_logging

app = typer.Typer(
    name="subnetplan",
    help="Declarative VPC subnet planner",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

# Register commands
app.command("plan")(plan.plan_command)
app.add_typer(vars_cmd.app, name="vars", help="Variable inspection")
app.add_typer(zones.app, name="zones", help="Zone catalog queries")
app.add_typer(init.app, name="init", help="Generate starter input files")


@app.callback()
def main(
    inventory_url: Annotated[
        str | None,
        typer.Option(
            "--inventory-url",
            help="Zone inventory service base URL",
            envvar="SUBNETPLAN_INVENTORY_URL",
        ),
    ] = None,
    inventory_token: Annotated[
        str | None,
        typer.Option(
            "--inventory-token",
            help="Bearer token for the inventory service",
            envvar="SUBNETPLAN_INVENTORY_TOKEN",
        ),
    ] = None,
    zones_file: Annotated[
        str | None,
        typer.Option(
            "--zones-file",
            "-z",
            help="Static YAML zone listing (used instead of the inventory service)",
            envvar="SUBNETPLAN_ZONES_FILE",
        ),
    ] = None,
    output_format: Annotated[
        OutputFormat,
        typer.Option("--format", "-f", help="Default output format"),
    ] = OutputFormat.TABLE,
    log_level: Annotated[
        LogLevel,
        typer.Option("--log-level", "-l", help="Logging verbosity"),
    ] = LogLevel.WARNING,
):
    """
    Declarative VPC subnet planner.

    Resolves variables, discovers the zones of a region and assigns every
    subnet a deterministic, non-overlapping CIDR range.
    """
    if inventory_url:
        config.INVENTORY_URL = inventory_url
    if inventory_token:
        config.INVENTORY_TOKEN = inventory_token
    if zones_file:
        config.ZONES_FILE = zones_file
    config.OUTPUT_FORMAT = output_format
    config.LOG_LEVEL = log_level

    configure_logging(config.LOG_LEVEL)


@app.command("version")
def version():
    """Show version information."""
    from subnetplan import __version__

    console.print(f"subnetplan v{__version__}")


def run():
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    run()
