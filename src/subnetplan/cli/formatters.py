"""Rich renderables for plans, variables and zones."""

from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from subnetplan.models.enums import ValueSource
from subnetplan.models.resources import Plan
from subnetplan.variables import Configuration

SOURCE_COLORS = {
    ValueSource.DEFAULT: "dim",
    ValueSource.FILE: "cyan",
    ValueSource.OVERRIDE: "yellow",
}


def format_bool(value: bool) -> Text:
    return Text("yes", style="green") if value else Text("no", style="dim")


def format_network_panel(plan: Plan) -> Panel:
    """Summary panel for the parent network."""
    network = plan.network
    lines = [
        f"[bold]Name:[/bold]      {network.name}",
        f"[bold]Region:[/bold]    {network.region}",
        f"[bold]CIDR:[/bold]      {network.cidr}",
        f"[bold]DNS:[/bold]       support={network.enable_dns_support}, "
        f"hostnames={network.enable_dns_hostnames}",
        f"[bold]Subnets:[/bold]   {len(plan.subnets)}",
    ]
    return Panel("\n".join(lines), title="Network", expand=False)


def format_subnet_table(plan: Plan) -> Table:
    table = Table(title="Subnets", show_header=True)
    table.add_column("Index", justify="right")
    table.add_column("Name", style="cyan")
    table.add_column("CIDR", style="green")
    table.add_column("Zone")
    table.add_column("Public IP")

    for subnet in plan.subnets:
        table.add_row(
            str(subnet.index),
            subnet.name,
            subnet.cidr,
            subnet.zone,
            format_bool(subnet.map_public_ip_on_launch),
        )
    return table


def format_variable_table(config: Configuration) -> Table:
    """Resolved variables with their type and the layer that set them."""
    table = Table(title="Resolved Variables", show_header=True)
    table.add_column("Variable", style="cyan")
    table.add_column("Type")
    table.add_column("Value", style="green")
    table.add_column("Source")

    for name, value in config.to_dict().items():
        spec = config.spec_of(name)
        source = config.source_of(name)
        table.add_row(
            name,
            spec.type_label if spec else "-",
            "null" if value is None else str(value),
            Text(source.value, style=SOURCE_COLORS[source]),
        )
    return table


def format_zone_table(region: str, zones: tuple[str, ...]) -> Table:
    table = Table(title=f"Zones in {region}", show_header=True)
    table.add_column("Index", justify="right")
    table.add_column("Zone", style="cyan")

    for index, zone in enumerate(zones):
        table.add_row(str(index), zone)
    return table
