"""
Application configuration for subnetplan.

This module defines the settings that control how a run talks to the outside
world (zone inventory, output, logging). Provisioning variables such as the
region or parent CIDR are not settings; they go through the variable
resolver.

Configuration can be modified at runtime by importing the global config
instance and updating its attributes. The CLI callback does this from its
options and ``SUBNETPLAN_*`` environment variables.

Usage:
    from subnetplan.config import config

    config.INVENTORY_URL = "https://inventory.internal/api"
    config.LOG_LEVEL = LogLevel.DEBUG
"""

from dataclasses import dataclass

from subnetplan.catalog import HttpZoneInventory, StaticZoneInventory, ZoneInventory
from subnetplan.models.enums import LogLevel, OutputFormat
from subnetplan.variables import ENV_PREFIX


# =============================================================================
# Configuration Dataclass
# =============================================================================


@dataclass
class PlannerConfig:
    """
    Planner settings.

    Attributes:
        INVENTORY_URL: Base URL of the zone inventory service.
        INVENTORY_TOKEN: Bearer token for the inventory service.
        INVENTORY_TIMEOUT: Request timeout in seconds.
        ZONES_FILE: YAML zone listing used instead of the inventory service.
        VAR_ENV_PREFIX: Prefix of environment variable overrides.
        OUTPUT_FORMAT: Default plan output format.
        LOG_LEVEL: Logging verbosity level.
    """

    # -------------------------------------------------------------------------
    # Zone Inventory Configuration
    # -------------------------------------------------------------------------

    INVENTORY_URL: str = ""
    INVENTORY_TOKEN: str = ""
    INVENTORY_TIMEOUT: float = 10.0
    ZONES_FILE: str = ""  # Takes precedence over INVENTORY_URL when set

    # -------------------------------------------------------------------------
    # Variable Configuration
    # -------------------------------------------------------------------------

    VAR_ENV_PREFIX: str = ENV_PREFIX

    # -------------------------------------------------------------------------
    # Output / Logging Configuration
    # -------------------------------------------------------------------------

    OUTPUT_FORMAT: OutputFormat = OutputFormat.TABLE
    LOG_LEVEL: LogLevel = LogLevel.WARNING

    def get_inventory(self) -> ZoneInventory:
        """
        Build the zone inventory for this configuration.

        Raises:
            ValueError: If neither a zones file nor an inventory URL is set
        """
        if self.ZONES_FILE:
            return StaticZoneInventory.from_file(self.ZONES_FILE)
        if self.INVENTORY_URL:
            return HttpZoneInventory(
                self.INVENTORY_URL,
                token=self.INVENTORY_TOKEN or None,
                timeout=self.INVENTORY_TIMEOUT,
            )
        raise ValueError(
            "No zone inventory configured: set --zones-file or --inventory-url"
        )


# =============================================================================
# Global Instance
# =============================================================================

config = PlannerConfig()
