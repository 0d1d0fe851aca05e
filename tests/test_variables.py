"""Tests for variable resolution."""

import pytest

from subnetplan.exceptions import InvalidValuesFile, TypeMismatch, UnknownVariable
from subnetplan.models.cidr import CIDRBlock
from subnetplan.models.enums import ValueSource, VariableType
from subnetplan.variables import (
    DEFAULT_VARIABLES,
    VariableSpec,
    env_overrides,
    load_values_file,
    resolve,
)


class TestPrecedence:
    """Tests for layer precedence."""

    def test_overrides_win(self) -> None:
        config = resolve({"a": 1}, {"a": 2}, {"a": 3})
        assert config["a"] == 3
        assert config.source_of("a") == ValueSource.OVERRIDE

    def test_values_file_beats_defaults(self) -> None:
        config = resolve({"a": 1}, {"a": 2})
        assert config["a"] == 2
        assert config.source_of("a") == ValueSource.FILE

    def test_defaults_only(self) -> None:
        config = resolve({"a": 1})
        assert config["a"] == 1
        assert config.source_of("a") == ValueSource.DEFAULT

    def test_layers_merge_per_variable(self) -> None:
        config = resolve({"a": 1, "b": "x", "c": True}, {"b": "y"}, {"c": False})
        assert dict(config) == {"a": 1, "b": "y", "c": False}


class TestDefaultVariables:
    """Tests for the recognized variable set."""

    def test_defaults(self) -> None:
        config = resolve(DEFAULT_VARIABLES)
        assert config.region == "eu-central-1"
        assert config.parent_cidr == CIDRBlock.parse("172.16.0.0/16")
        assert config.extra_bits == 4
        assert config.preferred_subnet_count is None
        assert config.map_public_ip is True
        assert config.vpc_name == "main"

    def test_string_overrides_are_coerced(self) -> None:
        config = resolve(
            DEFAULT_VARIABLES,
            None,
            {
                "parentCidr": "10.0.0.0/8",
                "extraBits": "8",
                "preferredSubnetCount": "2",
                "mapPublicIp": "False",
            },
        )
        assert str(config.parent_cidr) == "10.0.0.0/8"
        assert config.extra_bits == 8
        assert config.preferred_subnet_count == 2
        assert config.map_public_ip is False

    def test_null_override_restores_zone_count(self) -> None:
        config = resolve(
            DEFAULT_VARIABLES, {"preferredSubnetCount": 3}, {"preferredSubnetCount": "null"}
        )
        assert config.preferred_subnet_count is None

    def test_to_dict_renders_cidr(self) -> None:
        config = resolve(DEFAULT_VARIABLES)
        assert config.to_dict()["parentCidr"] == "172.16.0.0/16"

    def test_configuration_is_read_only(self) -> None:
        config = resolve(DEFAULT_VARIABLES)
        with pytest.raises(TypeError):
            config["region"] = "us-east-1"  # type: ignore[index]


class TestErrors:
    """Tests for resolution failures."""

    def test_unknown_in_values_file(self) -> None:
        with pytest.raises(UnknownVariable) as exc_info:
            resolve({"a": 1}, {"b": 2})
        assert exc_info.value.name == "b"
        assert exc_info.value.source == "values file"

    def test_unknown_in_overrides(self) -> None:
        with pytest.raises(UnknownVariable) as exc_info:
            resolve(DEFAULT_VARIABLES, None, {"subnetCount": "2"})
        assert exc_info.value.name == "subnetCount"

    @pytest.mark.parametrize(
        "name, value",
        [
            ("mapPublicIp", "yes"),
            ("mapPublicIp", 1),
            ("extraBits", True),
            ("extraBits", "four"),
            ("extraBits", -1),
            ("extraBits", None),
            ("parentCidr", "172.16.0.0"),
            ("parentCidr", 42),
            ("region", 3),
            ("preferredSubnetCount", 2.5),
        ],
    )
    def test_type_mismatch(self, name: str, value: object) -> None:
        with pytest.raises(TypeMismatch) as exc_info:
            resolve(DEFAULT_VARIABLES, {name: value})
        assert exc_info.value.name == name

    def test_unsupported_default(self) -> None:
        with pytest.raises(TypeMismatch):
            resolve({"a": [1, 2]})

    @pytest.mark.parametrize("value", ["", "prod vpc", "1st", "vpc.main", "${x}"])
    def test_invalid_vpc_name(self, value: str) -> None:
        with pytest.raises(TypeMismatch) as exc_info:
            resolve(DEFAULT_VARIABLES, None, {"vpcName": value})
        assert exc_info.value.name == "vpcName"
        assert "must match" in str(exc_info.value)

    def test_invalid_vpc_name_in_values_file(self) -> None:
        with pytest.raises(TypeMismatch):
            resolve(DEFAULT_VARIABLES, {"vpcName": "my network"})


class TestVariableSpec:
    def test_infer(self) -> None:
        assert VariableSpec.infer("a", True).type == VariableType.BOOL
        assert VariableSpec.infer("a", 1).type == VariableType.INT
        assert VariableSpec.infer("a", "x").type == VariableType.STRING

    def test_type_label(self) -> None:
        assert DEFAULT_VARIABLES["extraBits"].type_label == "uint"
        assert DEFAULT_VARIABLES["preferredSubnetCount"].type_label == "uint|null"
        assert DEFAULT_VARIABLES["parentCidr"].type_label == "cidr"

    @pytest.mark.parametrize("value", ["main", "edge-vpc_1", "_shared"])
    def test_valid_vpc_name(self, value: str) -> None:
        assert DEFAULT_VARIABLES["vpcName"].coerce(value) == value

    def test_pattern_is_optional(self) -> None:
        spec = VariableSpec("label", VariableType.STRING, "x")
        assert spec.coerce("any text at all") == "any text at all"


class TestValuesFile:
    def test_load_yaml(self, tmp_path) -> None:
        path = tmp_path / "values.yaml"
        path.write_text("region: us-east-1\nextraBits: 3\nmapPublicIp: false\n")

        values = load_values_file(path)
        assert values == {"region": "us-east-1", "extraBits": 3, "mapPublicIp": False}

    def test_load_json(self, tmp_path) -> None:
        path = tmp_path / "values.json"
        path.write_text('{"preferredSubnetCount": 2}')
        assert load_values_file(path) == {"preferredSubnetCount": 2}

    def test_empty_file(self, tmp_path) -> None:
        path = tmp_path / "values.yaml"
        path.write_text("")
        assert load_values_file(path) == {}

    def test_missing_file(self, tmp_path) -> None:
        with pytest.raises(InvalidValuesFile):
            load_values_file(tmp_path / "missing.yaml")

    def test_not_a_mapping(self, tmp_path) -> None:
        path = tmp_path / "values.yaml"
        path.write_text("- a\n- b\n")
        with pytest.raises(InvalidValuesFile):
            load_values_file(path)

    def test_malformed(self, tmp_path) -> None:
        path = tmp_path / "values.yaml"
        path.write_text("region: [unclosed\n")
        with pytest.raises(InvalidValuesFile):
            load_values_file(path)


class TestEnvOverrides:
    def test_prefix_filtering(self) -> None:
        environ = {
            "SUBNETPLAN_VAR_region": "us-west-2",
            "SUBNETPLAN_VAR_": "ignored",
            "HOME": "/root",
        }
        assert env_overrides(environ) == {"region": "us-west-2"}

    def test_custom_prefix(self) -> None:
        assert env_overrides({"TF_VAR_extraBits": "2"}, prefix="TF_VAR_") == {
            "extraBits": "2"
        }
