"""Data models for Hive Heating integration."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from enum import Enum
from typing import Any, Generic, TypeVar

from .const import DEFAULT_BOOST_DURATION, DEFAULT_POLL_INTERVAL, MIN_POLL_INTERVAL

T = TypeVar("T")


class HeatingMode(Enum):
    """Heating mode as presented to consumers of the cached state."""

    OFF = "off"
    HEATING = "heating"
    SCHEDULED = "scheduled"


class NodeRole(Enum):
    """Role a node plays, inferred from the attributes it carries."""

    HEATING = "heating"
    HOT_WATER = "hot_water"
    BOTH = "both"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class HiveConfig:
    """Account credentials and polling options."""

    username: str
    password: str
    poll_interval: timedelta = DEFAULT_POLL_INTERVAL
    heating_boost_duration: timedelta = DEFAULT_BOOST_DURATION
    hot_water_boost_duration: timedelta = DEFAULT_BOOST_DURATION

    @classmethod
    def create(
        cls,
        username: str,
        password: str,
        poll_interval: timedelta | None = None,
        heating_boost_duration: timedelta | None = None,
        hot_water_boost_duration: timedelta | None = None,
    ) -> HiveConfig:
        """Build a config, defaulting unset or too-short intervals."""
        if poll_interval is None or poll_interval < MIN_POLL_INTERVAL:
            poll_interval = DEFAULT_POLL_INTERVAL
        return cls(
            username=username,
            password=password,
            poll_interval=poll_interval,
            heating_boost_duration=heating_boost_duration or DEFAULT_BOOST_DURATION,
            hot_water_boost_duration=hot_water_boost_duration
            or DEFAULT_BOOST_DURATION,
        )


@dataclass(frozen=True)
class Session:
    """An authenticated session against the per-account API endpoint."""

    token: str
    base_endpoint: str
    authenticated_at: datetime


@dataclass(frozen=True, slots=True)
class NodeReport(Generic[T]):
    """A reported/target value pair as sent by the upstream API."""

    reported: T | None = None
    target: T | None = None

    @classmethod
    def from_dict(cls, data: Any) -> NodeReport | None:
        if not isinstance(data, dict):
            return None
        return cls(reported=data.get("reportedValue"), target=data.get("targetValue"))


@dataclass(frozen=True, slots=True)
class NodeAttributes:
    """The subset of node attributes this integration understands."""

    temperature: NodeReport[float] | None = None
    target_heat_temperature: NodeReport[float] | None = None
    state_heating_relay: NodeReport[str] | None = None
    active_heat_cool_mode: NodeReport[str] | None = None
    supports_hot_water: NodeReport[bool] | None = None
    state_hot_water_relay: NodeReport[str] | None = None
    schedule_lock_duration: NodeReport[int] | None = None
    active_schedule_lock: NodeReport[bool] | None = None

    @classmethod
    def from_dict(cls, data: Any) -> NodeAttributes:
        if not isinstance(data, dict):
            return cls()
        return cls(
            temperature=NodeReport.from_dict(data.get("temperature")),
            target_heat_temperature=NodeReport.from_dict(
                data.get("targetHeatTemperature")
            ),
            state_heating_relay=NodeReport.from_dict(data.get("stateHeatingRelay")),
            active_heat_cool_mode=NodeReport.from_dict(data.get("activeHeatCoolMode")),
            supports_hot_water=NodeReport.from_dict(data.get("supportsHotWater")),
            state_hot_water_relay=NodeReport.from_dict(
                data.get("stateHotWaterRelay")
            ),
            schedule_lock_duration=NodeReport.from_dict(
                data.get("scheduleLockDuration")
            ),
            active_schedule_lock=NodeReport.from_dict(data.get("activeScheduleLock")),
        )


@dataclass(frozen=True, slots=True)
class Node:
    """A device record returned by the nodes endpoint."""

    id: str
    attributes: NodeAttributes = field(default_factory=NodeAttributes)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Node:
        return cls(
            id=str(data.get("id") or ""),
            attributes=NodeAttributes.from_dict(data.get("attributes")),
        )


@dataclass(frozen=True, slots=True)
class State:
    """Snapshot of the heating system derived from the latest poll."""

    heating: bool = False
    heating_boosted: bool = False
    current_heating_mode: HeatingMode = HeatingMode.OFF
    target_heating_mode: HeatingMode = HeatingMode.OFF
    current_temp: float = 0.0
    target_temp: float = 0.0
    hot_water: bool = False
    hot_water_boosted: bool = False
    heating_node_id: str = ""
    hot_water_node_id: str = ""
