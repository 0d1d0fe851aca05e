"""
Plan serialization.

Formats:
    - dict/JSON/YAML: the descriptor document as emitted by the planner
    - Terraform: JSON configuration syntax, one ``aws_subnet`` block per
      index keyed ``<network>_<index>`` so block identity follows the index
"""

import ipaddress
import json
from typing import Any

import yaml

from subnetplan.models.enums import OutputFormat
from subnetplan.models.resources import Plan


def plan_to_dict(plan: Plan) -> dict[str, Any]:
    return plan.model_dump(mode="json")


def plan_to_json(plan: Plan) -> str:
    return json.dumps(plan_to_dict(plan), indent=2) + "\n"


def plan_to_yaml(plan: Plan) -> str:
    return yaml.safe_dump(plan_to_dict(plan), sort_keys=False)


def plan_to_terraform(plan: Plan) -> dict[str, Any]:
    """
    Build a Terraform JSON document (``*.tf.json``) for the plan.

    Subnets reference the network through ``${aws_vpc.<name>.id}``.

    Raises:
        ValueError: If the network is not IPv4 (``aws_vpc.cidr_block`` is
            IPv4 only; IPv6 ranges are assigned by AWS, not chosen)
    """
    network = plan.network
    if ipaddress.ip_network(network.cidr).version != 4:
        raise ValueError(
            f"Terraform output needs an IPv4 parentCidr, got {network.cidr}"
        )
    vpc_ref = f"${{aws_vpc.{network.name}.id}}"

    subnets = {}
    for subnet in plan.subnets:
        subnets[f"{network.name}_{subnet.index}"] = {
            "vpc_id": vpc_ref,
            "cidr_block": subnet.cidr,
            "availability_zone": subnet.zone,
            "map_public_ip_on_launch": subnet.map_public_ip_on_launch,
            "tags": dict(subnet.tags),
        }

    resources: dict[str, Any] = {
        "aws_vpc": {
            network.name: {
                "cidr_block": network.cidr,
                "enable_dns_support": network.enable_dns_support,
                "enable_dns_hostnames": network.enable_dns_hostnames,
                "tags": dict(network.tags),
            }
        }
    }
    if subnets:
        resources["aws_subnet"] = subnets

    return {
        "provider": {"aws": {"region": plan.region}},
        "resource": resources,
    }


def render_plan(plan: Plan, output_format: OutputFormat) -> str:
    """
    Render a plan as text in a machine-readable format.

    TABLE output is produced by the CLI formatters, not here.
    """
    match OutputFormat(output_format):
        case OutputFormat.JSON:
            return plan_to_json(plan)
        case OutputFormat.YAML:
            return plan_to_yaml(plan)
        case OutputFormat.TERRAFORM:
            return json.dumps(plan_to_terraform(plan), indent=2) + "\n"
        case _:
            raise ValueError(f"Format {output_format} is not a text format")
