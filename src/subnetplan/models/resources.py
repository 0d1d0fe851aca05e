"""
Pydantic models for emitted resource descriptors.

Descriptors are the hand-off contract to the provisioning backend: they are
immutable once built and the engine does not track them afterwards.

Model Categories:
    - NetworkDescriptor: The parent network (VPC)
    - SubnetDescriptor: One subnet per expansion index
    - Plan: Everything emitted by one run
"""

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# Resource Descriptors
# =============================================================================


class NetworkDescriptor(BaseModel):
    """Parent network that every subnet in a plan references."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Network name, also its reference id")
    region: str = Field(..., description="Region the network lives in")
    cidr: str = Field(..., description="Network CIDR in a.b.c.d/n notation")
    enable_dns_support: bool = Field(default=True)
    enable_dns_hostnames: bool = Field(default=False)
    tags: dict[str, str] = Field(default_factory=dict)


class SubnetDescriptor(BaseModel):
    """
    One subnet produced by the expander.

    ``index`` is the identity of the subnet across runs: the same index always
    maps to the same CIDR and zone for unchanged inputs.
    """

    model_config = ConfigDict(frozen=True)

    index: int = Field(..., ge=0, description="Allocation index")
    network_ref: str = Field(..., description="Name of the parent network")
    cidr: str = Field(..., description="Subnet CIDR in a.b.c.d/n notation")
    zone: str = Field(..., description="Placement zone")
    map_public_ip_on_launch: bool = Field(
        default=False,
        description="Auto-assign public IPs to instances launched here",
    )
    name: str = Field(default="")
    tags: dict[str, str] = Field(default_factory=dict)


# =============================================================================
# Plan
# =============================================================================


class Plan(BaseModel):
    """Complete output of one provisioning run."""

    model_config = ConfigDict(frozen=True)

    region: str
    network: NetworkDescriptor
    subnets: tuple[SubnetDescriptor, ...] = ()
