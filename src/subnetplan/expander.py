"""
Resource expansion: one subnet descriptor per allocation index.

The repeat count is ``preferredSubnetCount`` when set, otherwise the number
of zones in the region. Index ``i`` gets the ``i``-th child of the parent
CIDR and the ``i``-th zone, and descriptors come back in ascending index
order so the same logical subnet keeps the same identity across runs.
"""

from collections.abc import Sequence

from subnetplan.exceptions import ZoneIndexOutOfRange
from subnetplan.models.cidr import allocate, max_children
from subnetplan.models.resources import SubnetDescriptor
from subnetplan.utils.logger import get_logger
from subnetplan.variables import Configuration

logger = get_logger(__name__)


def resolve_count(config: Configuration, zones: Sequence[str]) -> int:
    """Explicit subnet count, or one subnet per zone."""
    preferred = config.preferred_subnet_count
    if preferred is not None:
        return preferred
    return len(zones)


def subnet_name(network_ref: str, index: int) -> str:
    return f"{network_ref}-subnet-{index}"


def expand(
    config: Configuration,
    zones: Sequence[str],
    network_ref: str | None = None,
) -> tuple[SubnetDescriptor, ...]:
    """
    Expand the subnet template over ``[0, count)``.

    Args:
        config: Resolved configuration
        zones: Ordered zones of ``config.region``
        network_ref: Parent network reference (defaults to ``vpcName``)

    Returns:
        Descriptors in ascending index order

    Raises:
        AllocationOverflow: If an index does not fit in ``extraBits``
        ZoneIndexOutOfRange: If an index has no corresponding zone
    """
    if network_ref is None:
        network_ref = config.vpc_name
    count = resolve_count(config, zones)
    source = (
        "preferredSubnetCount"
        if config.preferred_subnet_count is not None
        else "zone count"
    )
    capacity = max_children(config.parent_cidr, config.extra_bits)
    logger.debug(
        f"Expanding {count} subnet(s) ({source}) over {config.parent_cidr}, "
        f"capacity {capacity} with {config.extra_bits} extra bit(s)"
    )

    # Built fully before returning; any failure leaves the caller with nothing
    descriptors = []
    for index in range(count):
        cidr = allocate(config.parent_cidr, config.extra_bits, index)
        if index >= len(zones):
            raise ZoneIndexOutOfRange(index, len(zones))

        name = subnet_name(network_ref, index)
        descriptors.append(
            SubnetDescriptor(
                index=index,
                network_ref=network_ref,
                cidr=str(cidr),
                zone=zones[index],
                map_public_ip_on_launch=config.map_public_ip,
                name=name,
                tags={"Name": name},
            )
        )

    return tuple(descriptors)
