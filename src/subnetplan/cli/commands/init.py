"""
subnetplan init: generate starter input files.

Usage:
    subnetplan init values               # Write values.yaml and zones.yaml
    subnetplan init values -o ./network  # Custom output dir
"""

import os
from typing import Annotated

import typer

from subnetplan.cli.output import console, print_success, print_warning

app = typer.Typer(help="Generate starter input files")


VALUES_TEMPLATE = """\
# subnetplan values file
#
# Values here override the compiled-in defaults. They are in turn overridden
# by SUBNETPLAN_VAR_<name> environment variables and --var NAME=VALUE flags.
#
#   subnetplan plan --values values.yaml

# =============================================================================
# Placement
# =============================================================================

# Region whose available zones host the subnets
region: eu-central-1

# =============================================================================
# Addressing
# =============================================================================

# Network CIDR that subnets are carved from
parentCidr: 172.16.0.0/16

# Prefix bits added per subnet (4 on a /16 gives up to 16 subnets of /20)
extraBits: 4

# Number of subnets; null creates one per available zone
preferredSubnetCount: null

# =============================================================================
# Network Settings
# =============================================================================

vpcName: main
mapPublicIp: true
enableDnsSupport: true
enableDnsHostnames: false
"""

ZONES_TEMPLATE = """\
# Static zone listing, used with: subnetplan --zones-file zones.yaml plan
# Order matters: subnet index N is placed in the Nth zone of its region.

eu-central-1:
  - eu-central-1a
  - eu-central-1b
  - eu-central-1c
"""


def generate_file(output_dir: str, filename: str, content: str) -> str:
    """Write a starter file unless it already exists, and return its path."""
    os.makedirs(output_dir, exist_ok=True)
    filepath = os.path.join(output_dir, filename)

    if os.path.exists(filepath):
        print_warning(f"{filepath} already exists, skipping.")
        return filepath

    with open(filepath, "w") as f:
        f.write(content)

    return filepath


@app.command("values")
def init_values(
    output_dir: Annotated[
        str,
        typer.Option("--output-dir", "-o", help="Directory for the generated files"),
    ] = ".",
    no_zones: Annotated[
        bool,
        typer.Option("--no-zones", help="Do not generate the static zones file"),
    ] = False,
):
    """Generate an example values file (and a static zones file)."""
    output_dir = os.path.expanduser(output_dir)
    generated = [generate_file(output_dir, "values.yaml", VALUES_TEMPLATE)]
    if not no_zones:
        generated.append(generate_file(output_dir, "zones.yaml", ZONES_TEMPLATE))

    console.print("[bold]Generated files:[/bold]")
    for path in generated:
        console.print(f"  {path}")

    console.print()
    console.print("[bold]Usage:[/bold]")
    if no_zones:
        console.print(f"  subnetplan --inventory-url URL plan --values {generated[0]}")
    else:
        console.print(
            f"  subnetplan --zones-file {generated[1]} plan --values {generated[0]}"
        )
    print_success("Done.")
