"""Pytest configuration and fixtures for Hive Heating tests."""

from typing import Any

import pytest

from custom_components.hive_heating.models import HiveConfig

TEST_HOST = "h.example"
TEST_BASE_URL = f"https://{TEST_HOST}"
TEST_NODES_URL = f"{TEST_BASE_URL}/omnia/nodes"


def login_headers(host: str = TEST_HOST) -> dict[str, str]:
    """Headers returned by a successful login."""
    return {"x-governess-endpoint": f"{host}:443"}


def heating_node(
    node_id: str = "heat-1",
    *,
    temperature: float = 18.5,
    target: float = 21.0,
    relay: str | None = "ON",
    mode: str | None = "HEAT",
    target_mode: str | None = "HEAT",
) -> dict[str, Any]:
    """Build a heating node as returned by the nodes endpoint."""
    attributes: dict[str, Any] = {
        "temperature": {"reportedValue": temperature},
        "targetHeatTemperature": {"reportedValue": target, "targetValue": target},
    }
    if relay is not None:
        attributes["stateHeatingRelay"] = {"reportedValue": relay}
    if mode is not None:
        attributes["activeHeatCoolMode"] = {
            "reportedValue": mode,
            "targetValue": target_mode,
        }
    return {"id": node_id, "attributes": attributes}


def hot_water_node(
    node_id: str = "water-1",
    *,
    relay: str | None = "OFF",
    mode: str | None = "HEAT",
) -> dict[str, Any]:
    """Build a hot water node as returned by the nodes endpoint."""
    attributes: dict[str, Any] = {"supportsHotWater": {"reportedValue": True}}
    if relay is not None:
        attributes["stateHotWaterRelay"] = {"reportedValue": relay}
    if mode is not None:
        attributes["activeHeatCoolMode"] = {"reportedValue": mode, "targetValue": mode}
    return {"id": node_id, "attributes": attributes}


@pytest.fixture
def hive_config() -> HiveConfig:
    """Fixture providing account configuration."""
    return HiveConfig.create("bobby@charlton.com", "england66")


@pytest.fixture
def sample_nodes_response() -> dict[str, Any]:
    """Fixture providing a nodes response with a heating and a hot water node."""
    return {
        "nodes": [
            {"id": "hub-1", "attributes": {"devicesState": {"reportedValue": "OK"}}},
            heating_node(),
            hot_water_node(),
        ],
    }
