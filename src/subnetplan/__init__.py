"""
subnetplan: declarative VPC subnet expansion.

Resolves provisioning variables, discovers the zones of a region and expands
a subnet template into one descriptor per zone (or per requested index), each
with a deterministic, non-overlapping CIDR range.
"""

from subnetplan.catalog import (
    HttpZoneInventory,
    StaticZoneInventory,
    ZoneCatalog,
    ZoneInventory,
)
from subnetplan.exceptions import (
    AllocationOverflow,
    CatalogUnavailable,
    InvalidValuesFile,
    PlanError,
    TypeMismatch,
    UnknownVariable,
    ZoneIndexOutOfRange,
)
from subnetplan.expander import expand
from subnetplan.models.cidr import CIDRBlock, allocate
from subnetplan.models.resources import NetworkDescriptor, Plan, SubnetDescriptor
from subnetplan.planner import build_plan, plan_from_sources
from subnetplan.variables import DEFAULT_VARIABLES, Configuration, VariableSpec, resolve

__all__ = [
    # Variables
    "DEFAULT_VARIABLES",
    "Configuration",
    "VariableSpec",
    "resolve",
    # Catalog
    "ZoneCatalog",
    "ZoneInventory",
    "HttpZoneInventory",
    "StaticZoneInventory",
    # Allocation / expansion
    "CIDRBlock",
    "allocate",
    "expand",
    "build_plan",
    "plan_from_sources",
    # Descriptors
    "NetworkDescriptor",
    "SubnetDescriptor",
    "Plan",
    # Exceptions
    "PlanError",
    "UnknownVariable",
    "TypeMismatch",
    "InvalidValuesFile",
    "CatalogUnavailable",
    "AllocationOverflow",
    "ZoneIndexOutOfRange",
]

__version__ = "0.1.0"
