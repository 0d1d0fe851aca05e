"""
Variable inputs gathered from the command line.

Environment overrides and ``--var NAME=VALUE`` flags form a single override
layer; flags win over environment entries of the same name.
"""

import typer

from subnetplan.config import config
from subnetplan.variables import (
    DEFAULT_VARIABLES,
    Configuration,
    env_overrides,
    load_values_file,
    resolve,
)


def parse_var_assignments(assignments: list[str] | None) -> dict[str, str]:
    """Parse ``NAME=VALUE`` flags into an override mapping."""
    overrides = {}
    for item in assignments or []:
        name, sep, value = item.partition("=")
        name = name.strip()
        if not sep or not name:
            raise typer.BadParameter(
                f"Expected NAME=VALUE, got '{item}'", param_hint="--var"
            )
        overrides[name] = value
    return overrides


def resolve_cli_configuration(
    values_path: str | None, assignments: list[str] | None
) -> Configuration:
    """
    Resolve variables from a values file, the environment and ``--var`` flags.

    Raises:
        InvalidValuesFile, UnknownVariable, TypeMismatch
    """
    values = load_values_file(values_path) if values_path else None
    overrides = env_overrides(prefix=config.VAR_ENV_PREFIX)
    overrides.update(parse_var_assignments(assignments))
    return resolve(DEFAULT_VARIABLES, values, overrides)
