"""
Variable resolution for provisioning runs.

Values come from three layers, in increasing priority:

    defaults  <  values file  <  overrides

Defaults declare the variable set: a name that only appears in the values
file or the overrides is an error, as is a value that cannot be read as the
declared type. The resolved Configuration is immutable and built once per run.

Overrides usually arrive as strings (``SUBNETPLAN_VAR_<name>`` environment
entries and ``--var NAME=VALUE`` flags), so string values are coerced to the
declared type. Values from a YAML values file are already typed and must match.
"""

from __future__ import annotations

import os
import re
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Any

import yaml

from subnetplan.exceptions import InvalidValuesFile, TypeMismatch, UnknownVariable
from subnetplan.models.cidr import CIDRBlock
from subnetplan.models.enums import ValueSource, VariableType
from subnetplan.utils.logger import get_logger

logger = get_logger(__name__)

ENV_PREFIX = "SUBNETPLAN_VAR_"

_TRUE_STRINGS = ("true",)
_FALSE_STRINGS = ("false",)


# =============================================================================
# Variable Declarations
# =============================================================================


@dataclass(frozen=True)
class VariableSpec:
    """
    Declaration of a provisioning variable.

    Attributes:
        name: Variable name as written in values files and overrides
        type: Declared value type
        default: Compiled-in default (None only for nullable variables)
        nullable: Whether null is an accepted value
        minimum: Lowest accepted value for INT variables
        pattern: Regular expression a STRING value must fully match
        description: Help text shown by ``subnetplan vars show``
    """

    name: str
    type: VariableType
    default: Any = None
    nullable: bool = False
    minimum: int | None = None
    pattern: str | None = None
    description: str = ""

    @classmethod
    def infer(cls, name: str, value: Any) -> VariableSpec:
        """Declare a variable from a bare default value."""
        if isinstance(value, VariableSpec):
            return value
        if isinstance(value, bool):
            return cls(name=name, type=VariableType.BOOL, default=value)
        if isinstance(value, int):
            return cls(name=name, type=VariableType.INT, default=value)
        if isinstance(value, str):
            return cls(name=name, type=VariableType.STRING, default=value)
        if isinstance(value, CIDRBlock):
            return cls(name=name, type=VariableType.CIDR, default=value)
        raise TypeMismatch(name, "string, bool, int or CIDR default", value)

    @property
    def type_label(self) -> str:
        label = self.type.value
        if self.type == VariableType.INT and self.minimum == 0:
            label = "uint"
        if self.nullable:
            label += "|null"
        return label

    def coerce(self, value: Any) -> Any:
        """
        Convert ``value`` to this variable's type.

        Raises:
            TypeMismatch: If the value cannot represent the declared type
        """
        if value is None or (
            self.nullable
            and isinstance(value, str)
            and value.strip().lower() == "null"
        ):
            if self.nullable:
                return None
            raise TypeMismatch(self.name, self.type_label, value, "not nullable")

        match self.type:
            case VariableType.STRING:
                if isinstance(value, str):
                    if self.pattern is not None and not re.fullmatch(
                        self.pattern, value
                    ):
                        raise TypeMismatch(
                            self.name,
                            self.type_label,
                            value,
                            f"must match {self.pattern}",
                        )
                    return value
            case VariableType.BOOL:
                if isinstance(value, bool):
                    return value
                if isinstance(value, str):
                    lowered = value.strip().lower()
                    if lowered in _TRUE_STRINGS:
                        return True
                    if lowered in _FALSE_STRINGS:
                        return False
            case VariableType.INT:
                return self._coerce_int(value)
            case VariableType.CIDR:
                if isinstance(value, CIDRBlock):
                    return value
                if isinstance(value, str):
                    try:
                        return CIDRBlock.parse(value)
                    except ValueError as e:
                        raise TypeMismatch(self.name, self.type_label, value, str(e))

        raise TypeMismatch(self.name, self.type_label, value)

    def _coerce_int(self, value: Any) -> int:
        # bool is an int subclass but never a valid integer value here
        if isinstance(value, bool):
            raise TypeMismatch(self.name, self.type_label, value)

        if isinstance(value, int):
            number = value
        elif isinstance(value, str):
            try:
                number = int(value.strip(), 10)
            except ValueError:
                raise TypeMismatch(self.name, self.type_label, value)
        else:
            raise TypeMismatch(self.name, self.type_label, value)

        if self.minimum is not None and number < self.minimum:
            raise TypeMismatch(
                self.name, self.type_label, value, f"must be >= {self.minimum}"
            )
        return number


VPC_NAME_PATTERN = r"[A-Za-z_][A-Za-z0-9_-]*"

DEFAULT_VARIABLES: dict[str, VariableSpec] = {
    spec.name: spec
    for spec in (
        VariableSpec(
            "region",
            VariableType.STRING,
            "eu-central-1",
            description="Region whose zones host the subnets",
        ),
        VariableSpec(
            "parentCidr",
            VariableType.CIDR,
            "172.16.0.0/16",
            description="Network CIDR that subnets are carved from",
        ),
        VariableSpec(
            "extraBits",
            VariableType.INT,
            4,
            minimum=0,
            description="Prefix bits added to parentCidr for each subnet",
        ),
        VariableSpec(
            "preferredSubnetCount",
            VariableType.INT,
            None,
            nullable=True,
            minimum=0,
            description="Number of subnets (null = one per available zone)",
        ),
        VariableSpec(
            "mapPublicIp",
            VariableType.BOOL,
            True,
            description="Auto-assign public IPs on launch",
        ),
        VariableSpec(
            "vpcName",
            VariableType.STRING,
            "main",
            # Used verbatim as a Terraform resource key and subnet name prefix
            pattern=VPC_NAME_PATTERN,
            description="Network name, also used to name subnets",
        ),
        VariableSpec(
            "enableDnsSupport",
            VariableType.BOOL,
            True,
            description="Enable DNS resolution in the network",
        ),
        VariableSpec(
            "enableDnsHostnames",
            VariableType.BOOL,
            False,
            description="Assign DNS hostnames to instances",
        ),
    )
}


# =============================================================================
# Resolved Configuration
# =============================================================================


class Configuration(Mapping):
    """
    Immutable, fully typed variable values for one run.

    Behaves as a read-only mapping of variable name to value and remembers
    which layer supplied each value.
    """

    def __init__(
        self,
        values: Mapping[str, Any],
        sources: Mapping[str, ValueSource] | None = None,
        specs: Mapping[str, VariableSpec] | None = None,
    ):
        self._values = MappingProxyType(dict(values))
        self._sources = MappingProxyType(dict(sources or {}))
        self._specs = MappingProxyType(dict(specs or {}))

    def __getitem__(self, name: str) -> Any:
        return self._values[name]

    def __iter__(self):
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"Configuration({dict(self._values)!r})"

    def source_of(self, name: str) -> ValueSource:
        """Layer that supplied ``name`` (DEFAULT if unknown)."""
        return self._sources.get(name, ValueSource.DEFAULT)

    def spec_of(self, name: str) -> VariableSpec | None:
        return self._specs.get(name)

    def to_dict(self) -> dict[str, Any]:
        """Plain dict with CIDR blocks rendered as strings."""
        return {
            name: str(value) if isinstance(value, CIDRBlock) else value
            for name, value in self._values.items()
        }

    # -------------------------------------------------------------------------
    # Recognized variables
    # -------------------------------------------------------------------------

    @property
    def region(self) -> str:
        return self["region"]

    @property
    def parent_cidr(self) -> CIDRBlock:
        return self["parentCidr"]

    @property
    def extra_bits(self) -> int:
        return self["extraBits"]

    @property
    def preferred_subnet_count(self) -> int | None:
        return self.get("preferredSubnetCount")

    @property
    def map_public_ip(self) -> bool:
        return self["mapPublicIp"]

    @property
    def vpc_name(self) -> str:
        return self.get("vpcName", "main")

    @property
    def enable_dns_support(self) -> bool:
        return self.get("enableDnsSupport", True)

    @property
    def enable_dns_hostnames(self) -> bool:
        return self.get("enableDnsHostnames", False)


# =============================================================================
# Resolution
# =============================================================================


def resolve(
    defaults: Mapping[str, Any],
    values_file: Mapping[str, Any] | None = None,
    overrides: Mapping[str, Any] | None = None,
) -> Configuration:
    """
    Merge the three layers into a Configuration.

    Args:
        defaults: Declared variables, as VariableSpec or bare default values
        values_file: Values loaded from a values file
        overrides: Explicit overrides (environment and command line)

    Returns:
        Resolved Configuration

    Raises:
        UnknownVariable: If a layer names an undeclared variable
        TypeMismatch: If any value does not match its declared type
    """
    specs = {name: VariableSpec.infer(name, value) for name, value in defaults.items()}
    layers = (
        (ValueSource.FILE, values_file or {}, "values file"),
        (ValueSource.OVERRIDE, overrides or {}, "overrides"),
    )

    for _, layer, label in layers:
        unknown = sorted(name for name in layer if name not in specs)
        if unknown:
            raise UnknownVariable(unknown[0], label)

    values: dict[str, Any] = {}
    sources: dict[str, ValueSource] = {}
    for name, spec in specs.items():
        values[name] = spec.coerce(spec.default) if spec.default is not None else None
        if values[name] is None and not spec.nullable:
            raise TypeMismatch(name, spec.type_label, None, "no default value")
        sources[name] = ValueSource.DEFAULT

    for source, layer, label in layers:
        for name, raw in layer.items():
            values[name] = specs[name].coerce(raw)
            sources[name] = source
            logger.debug(f"{name} = {values[name]!s} (from {label})")

    return Configuration(values, sources, specs)


def load_values_file(path: str | os.PathLike) -> dict[str, Any]:
    """
    Load a YAML (or JSON) values file.

    An empty file yields no values.

    Raises:
        InvalidValuesFile: If the file is missing, malformed or not a mapping
    """
    path = Path(path)
    try:
        with open(path) as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise InvalidValuesFile(str(path), e.strerror or str(e))
    except yaml.YAMLError as e:
        raise InvalidValuesFile(str(path), f"malformed YAML: {e}")

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise InvalidValuesFile(
            str(path), f"top level must be a mapping, got {type(data).__name__}"
        )
    for key in data:
        if not isinstance(key, str):
            raise InvalidValuesFile(str(path), f"variable names must be strings: {key!r}")

    logger.debug(f"Loaded {len(data)} value(s) from {path}")
    return data


def env_overrides(
    environ: Mapping[str, str] | None = None, prefix: str = ENV_PREFIX
) -> dict[str, str]:
    """Collect ``<prefix><name>=value`` environment entries as overrides."""
    environ = os.environ if environ is None else environ
    return {
        key[len(prefix) :]: value
        for key, value in environ.items()
        if key.startswith(prefix) and len(key) > len(prefix)
    }
