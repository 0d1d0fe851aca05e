"""Tests for the planning pipeline and plan rendering."""

import json

import pytest
import yaml

from subnetplan.catalog import ZoneCatalog
from subnetplan.exceptions import CatalogUnavailable, TypeMismatch, UnknownVariable
from subnetplan.models.cidr import CIDRBlock
from subnetplan.models.enums import OutputFormat
from subnetplan.planner import build_network, build_plan, plan_from_sources
from subnetplan.render import plan_to_dict, plan_to_terraform, render_plan


class TestBuildPlan:
    """Tests for build_plan and plan_from_sources."""

    def test_plan(self, make_config, inventory) -> None:
        config = make_config(preferredSubnetCount=2, enableDnsHostnames=True)
        plan = build_plan(config, ZoneCatalog(inventory))

        assert plan.region == "eu-central-1"
        assert plan.network.name == "main"
        assert plan.network.cidr == "172.16.0.0/16"
        assert plan.network.enable_dns_hostnames is True
        assert [s.cidr for s in plan.subnets] == ["172.16.0.0/20", "172.16.16.0/20"]
        assert inventory.calls == ["eu-central-1"]

    def test_region_drives_catalog_query(self, inventory_factory) -> None:
        inventory = inventory_factory({"us-east-1": ["us-east-1a", "us-east-1b"]})
        plan = plan_from_sources(inventory, {"region": "us-east-1"})

        assert [s.zone for s in plan.subnets] == ["us-east-1a", "us-east-1b"]
        assert inventory.calls == ["us-east-1"]

    def test_resolution_error_before_catalog_query(self, inventory) -> None:
        with pytest.raises(UnknownVariable):
            plan_from_sources(inventory, {"zones": 3})
        with pytest.raises(TypeMismatch):
            plan_from_sources(inventory, None, {"extraBits": "many"})

        assert inventory.calls == []

    def test_catalog_failure(self, inventory_factory) -> None:
        inventory = inventory_factory(error=CatalogUnavailable("eu-central-1", "auth"))
        with pytest.raises(CatalogUnavailable):
            plan_from_sources(inventory)

    def test_custom_defaults(self, inventory) -> None:
        defaults = {
            "region": "eu-central-1",
            "parentCidr": CIDRBlock.parse("10.0.0.0/8"),
            "extraBits": 8,
            "preferredSubnetCount": 1,
            "mapPublicIp": False,
        }
        plan = plan_from_sources(inventory, defaults=defaults)

        assert [s.cidr for s in plan.subnets] == ["10.0.0.0/16"]
        assert plan.subnets[0].map_public_ip_on_launch is False

    def test_build_network(self, make_config) -> None:
        network = build_network(make_config(vpcName="core", region="us-west-2"))
        assert network.name == "core"
        assert network.region == "us-west-2"
        assert network.tags == {"Name": "core"}


class TestRender:
    """Tests for plan serialization."""

    @pytest.fixture
    def plan(self, make_config, inventory):
        return build_plan(make_config(preferredSubnetCount=2), ZoneCatalog(inventory))

    def test_dict(self, plan) -> None:
        data = plan_to_dict(plan)
        assert data["network"]["cidr"] == "172.16.0.0/16"
        assert [s["index"] for s in data["subnets"]] == [0, 1]

    def test_json_and_yaml_agree(self, plan) -> None:
        from_json = json.loads(render_plan(plan, OutputFormat.JSON))
        from_yaml = yaml.safe_load(render_plan(plan, OutputFormat.YAML))
        assert from_json == from_yaml == plan_to_dict(plan)

    def test_terraform(self, plan) -> None:
        document = plan_to_terraform(plan)

        assert document["provider"]["aws"]["region"] == "eu-central-1"
        assert document["resource"]["aws_vpc"]["main"]["cidr_block"] == "172.16.0.0/16"

        subnets = document["resource"]["aws_subnet"]
        assert list(subnets) == ["main_0", "main_1"]
        assert subnets["main_1"] == {
            "vpc_id": "${aws_vpc.main.id}",
            "cidr_block": "172.16.16.0/20",
            "availability_zone": "eu-central-1b",
            "map_public_ip_on_launch": True,
            "tags": {"Name": "main-subnet-1"},
        }

    def test_terraform_text(self, plan) -> None:
        document = json.loads(render_plan(plan, OutputFormat.TERRAFORM))
        assert document == plan_to_terraform(plan)

    def test_table_is_not_text(self, plan) -> None:
        with pytest.raises(ValueError):
            render_plan(plan, OutputFormat.TABLE)

    def test_terraform_rejects_ipv6(self, make_config, inventory) -> None:
        config = make_config(parentCidr="2001:db8::/56", extraBits=8)
        plan = build_plan(config, ZoneCatalog(inventory))

        assert plan.subnets[1].cidr == "2001:db8:0:1::/64"
        with pytest.raises(ValueError, match="IPv4"):
            plan_to_terraform(plan)
        # Other formats still carry the IPv6 plan
        assert json.loads(render_plan(plan, OutputFormat.JSON))["network"]["cidr"] == (
            "2001:db8::/56"
        )
