import pytest

from subnetplan.catalog import StaticZoneInventory
from subnetplan.config import config
from subnetplan.variables import DEFAULT_VARIABLES, resolve

ZONES = ["eu-central-1a", "eu-central-1b", "eu-central-1c"]


class CountingInventory:
    """Static inventory that records every query it receives."""

    def __init__(self, zones=None, error=None):
        self.zones = {"eu-central-1": list(ZONES)} if zones is None else zones
        self.error = error
        self.calls = []

    def fetch_zones(self, region):
        self.calls.append(region)
        if self.error is not None:
            raise self.error
        return StaticZoneInventory(self.zones).fetch_zones(region)


@pytest.fixture
def zones():
    return list(ZONES)


@pytest.fixture
def inventory():
    return CountingInventory()


@pytest.fixture
def inventory_factory():
    return CountingInventory


@pytest.fixture
def make_config():
    """Resolve the default variables with the given overrides."""

    def _make(**overrides):
        return resolve(DEFAULT_VARIABLES, None, overrides)

    return _make


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch):
    """Keep CLI callbacks and SUBNETPLAN_* variables from leaking across tests."""
    for name in (
        "SUBNETPLAN_INVENTORY_URL",
        "SUBNETPLAN_INVENTORY_TOKEN",
        "SUBNETPLAN_ZONES_FILE",
    ):
        monkeypatch.delenv(name, raising=False)
    for name in DEFAULT_VARIABLES:
        monkeypatch.delenv(f"SUBNETPLAN_VAR_{name}", raising=False)

    saved = dict(vars(config))
    yield
    for key, value in saved.items():
        setattr(config, key, value)


@pytest.fixture
def zones_file(tmp_path):
    path = tmp_path / "zones.yaml"
    path.write_text(
        "eu-central-1:\n"
        "  - eu-central-1a\n"
        "  - eu-central-1b\n"
        "  - eu-central-1c\n"
        "us-east-1:\n"
        "  - us-east-1a\n"
        "  - us-east-1b\n"
    )
    return path
