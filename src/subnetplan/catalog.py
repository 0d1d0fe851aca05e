"""
Zone catalog: discovery of available placement zones per region.

The catalog asks a ZoneInventory for the zones of a region and remembers the
answer for the rest of the run, so every subnet index sees the same ordered
list. Failures are never cached and never retried here; they surface as
CatalogUnavailable and abort the run.

Inventories:
    - HttpZoneInventory: queries an inventory service over HTTP
    - StaticZoneInventory: fixed region -> zones mapping (offline, tests)
"""

from __future__ import annotations

import os
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Protocol

import httpx
import yaml

from subnetplan.exceptions import CatalogUnavailable
from subnetplan.utils.logger import get_logger

logger = get_logger(__name__)

# Zone state reported by inventories for usable zones
AVAILABLE_STATE = "available"


class ZoneInventory(Protocol):
    """External source of zone listings."""

    def fetch_zones(self, region: str) -> Sequence[str]:
        """Return the ordered zone names of ``region``."""
        ...


# =============================================================================
# Catalog
# =============================================================================


class ZoneCatalog:
    """
    Per-run memo over a ZoneInventory.

    Exactly one inventory query is made per distinct region. The cached
    tuples are written once and only read afterwards.
    """

    def __init__(self, inventory: ZoneInventory):
        self.inventory = inventory
        self._zones: dict[str, tuple[str, ...]] = {}

    def list_zones(self, region: str) -> tuple[str, ...]:
        """
        Get the ordered zones of a region.

        Raises:
            CatalogUnavailable: If the inventory query fails
        """
        cached = self._zones.get(region)
        if cached is not None:
            return cached

        logger.debug(f"Querying zone inventory for region {region}")
        zones = tuple(self.inventory.fetch_zones(region))
        if not zones:
            logger.warning(f"Zone inventory reported no zones for region {region}")
        else:
            logger.info(f"Region {region}: {len(zones)} zone(s): {', '.join(zones)}")

        self._zones[region] = zones
        return zones


# =============================================================================
# Inventories
# =============================================================================


class StaticZoneInventory:
    """Fixed zone listings, keyed by region."""

    def __init__(self, zones: Mapping[str, Sequence[str]]):
        self._zones = {region: list(names) for region, names in zones.items()}

    @classmethod
    def from_file(cls, path: str | os.PathLike) -> StaticZoneInventory:
        """
        Load listings from a YAML file of ``region: [zone, ...]`` entries.

        Raises:
            CatalogUnavailable: If the file cannot be read or has the wrong shape
        """
        path = Path(path)
        try:
            with open(path) as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise CatalogUnavailable("*", f"cannot read zones file {path}: {e}")

        if not isinstance(data, dict) or not all(
            isinstance(zones, list) for zones in data.values()
        ):
            raise CatalogUnavailable(
                "*", f"zones file {path} must map regions to lists of zones"
            )

        return cls({str(region): [str(z) for z in zones] for region, zones in data.items()})

    def fetch_zones(self, region: str) -> list[str]:
        if region not in self._zones:
            raise CatalogUnavailable(region, "region not present in zone listing")
        return list(self._zones[region])


class HttpZoneInventory:
    """
    Zone inventory service client.

    Issues ``GET {base_url}/regions/{region}/zones``. The response is either
    a JSON list of zone names or ``{"zones": [{"name": ..., "state": ...}]}``;
    entries whose state is not ``available`` are skipped.
    """

    def __init__(
        self,
        base_url: str,
        token: str | None = None,
        timeout: float = 10.0,
        transport: httpx.BaseTransport | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.token = token
        self.timeout = timeout
        self._transport = transport

    def _get_headers(self) -> dict[str, str]:
        """Get authorization headers if a token is configured."""
        if self.token:
            return {"Authorization": f"Bearer {self.token}"}
        return {}

    def fetch_zones(self, region: str) -> list[str]:
        url = f"{self.base_url}/regions/{region}/zones"

        try:
            with httpx.Client(
                headers=self._get_headers(),
                timeout=self.timeout,
                transport=self._transport,
            ) as client:
                response = client.get(url)
                response.raise_for_status()
                payload = response.json()
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            logger.error(f"HTTP {status} from zone inventory for {region}")
            raise CatalogUnavailable(region, f"HTTP {status}: {e.response.text}")
        except httpx.RequestError as e:
            logger.error(f"Request error querying zone inventory: {e}")
            raise CatalogUnavailable(region, f"network error: {e}")
        except ValueError as e:
            raise CatalogUnavailable(region, f"malformed response: {e}")

        return _parse_zone_payload(region, payload)


def _parse_zone_payload(region: str, payload: object) -> list[str]:
    """Extract available zone names from an inventory response body."""
    if isinstance(payload, dict):
        payload = payload.get("zones")

    if not isinstance(payload, list):
        raise CatalogUnavailable(region, "malformed response: expected a zone list")

    zones = []
    for entry in payload:
        if isinstance(entry, str):
            zones.append(entry)
        elif isinstance(entry, dict) and isinstance(entry.get("name"), str):
            state = entry.get("state", AVAILABLE_STATE)
            if state != AVAILABLE_STATE:
                logger.debug(f"Skipping zone {entry['name']} (state={state})")
                continue
            zones.append(entry["name"])
        else:
            raise CatalogUnavailable(
                region, f"malformed response: bad zone entry {entry!r}"
            )
    return zones
