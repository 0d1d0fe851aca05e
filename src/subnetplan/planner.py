"""
Planning pipeline: variables -> zones -> subnets.

A run resolves the configuration first, so configuration errors abort before
any external call, then queries the zone catalog once for the resolved
region and expands the subnet template.
"""

from collections.abc import Mapping
from typing import Any

from subnetplan.catalog import ZoneCatalog, ZoneInventory
from subnetplan.expander import expand
from subnetplan.models.resources import NetworkDescriptor, Plan
from subnetplan.utils.logger import get_logger
from subnetplan.variables import DEFAULT_VARIABLES, Configuration, resolve

logger = get_logger(__name__)


def build_network(config: Configuration) -> NetworkDescriptor:
    """Descriptor for the parent network the subnets attach to."""
    return NetworkDescriptor(
        name=config.vpc_name,
        region=config.region,
        cidr=str(config.parent_cidr),
        enable_dns_support=config.enable_dns_support,
        enable_dns_hostnames=config.enable_dns_hostnames,
        tags={"Name": config.vpc_name},
    )


def build_plan(config: Configuration, catalog: ZoneCatalog) -> Plan:
    """
    Build the complete plan for a resolved configuration.

    Raises:
        CatalogUnavailable: If the zone query fails
        AllocationOverflow: If the subnet count exceeds the address space
        ZoneIndexOutOfRange: If the subnet count exceeds the zone count
    """
    zones = catalog.list_zones(config.region)
    network = build_network(config)
    subnets = expand(config, zones, network_ref=network.name)

    logger.info(
        f"Planned network {network.name} ({network.cidr}) with "
        f"{len(subnets)} subnet(s) in {config.region}"
    )
    return Plan(region=config.region, network=network, subnets=subnets)


def plan_from_sources(
    inventory: ZoneInventory,
    values_file: Mapping[str, Any] | None = None,
    overrides: Mapping[str, Any] | None = None,
    defaults: Mapping[str, Any] | None = None,
) -> Plan:
    """Resolve variables and build a plan with a fresh per-run catalog."""
    config = resolve(
        DEFAULT_VARIABLES if defaults is None else defaults, values_file, overrides
    )
    return build_plan(config, ZoneCatalog(inventory))
