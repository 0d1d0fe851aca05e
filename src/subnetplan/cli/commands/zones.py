"""Zone catalog commands."""

from typing import Annotated

import typer

from subnetplan.catalog import ZoneCatalog
from subnetplan.cli.formatters import format_zone_table
from subnetplan.cli.output import console, print_error
from subnetplan.config import config
from subnetplan.exceptions import PlanError

app = typer.Typer(help="Zone catalog commands")


@app.command("list")
def list_zones(
    region: Annotated[str, typer.Argument(help="Region to query")],
):
    """List the available zones of a region, in catalog order."""
    try:
        zones = ZoneCatalog(config.get_inventory()).list_zones(region)
    except (PlanError, ValueError) as e:
        print_error(str(e))
        raise typer.Exit(1)

    if not zones:
        console.print(f"[yellow]No zones available in {region}.[/yellow]")
        return

    console.print(format_zone_table(region, zones))
