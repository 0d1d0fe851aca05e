"""
Enumeration types for subnetplan.

This module defines the enumerations shared by the resolver, the renderers
and the CLI so that string values stay consistent across components.
"""

from enum import Enum


# =============================================================================
# Variable-Related Enums
# =============================================================================


class VariableType(str, Enum):
    """
    Declared type of a provisioning variable.

    String inputs (environment, ``--var`` flags) are coerced to the declared
    type; structured inputs (values file) must already match it, with the
    exception of CIDR values which are always written as strings.
    """

    STRING = "string"
    BOOL = "bool"
    INT = "int"
    CIDR = "cidr"


class ValueSource(str, Enum):
    """Layer that supplied a resolved variable value."""

    DEFAULT = "default"
    FILE = "file"
    OVERRIDE = "override"


# =============================================================================
# Output Enums
# =============================================================================


class OutputFormat(str, Enum):
    """
    Output format for rendered plans.

    - TABLE: Rich tables for interactive use
    - JSON: Plain descriptor document
    - YAML: Same document as YAML
    - TERRAFORM: Terraform JSON configuration syntax (``*.tf.json``)
    """

    TABLE = "table"
    JSON = "json"
    YAML = "yaml"
    TERRAFORM = "terraform"


# =============================================================================
# Configuration Enums
# =============================================================================


class LogLevel(str, Enum):
    """
    Logging verbosity levels.

    Levels (from most to least verbose):
        - FULL: Complete trace with detailed stack information
        - DEBUG: Debug messages and above
        - INFO: Informational messages and above
        - WARNING: Only warnings and errors
    """

    FULL = "full"
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
