"""Boost switches for Hive Heating."""

from __future__ import annotations

import logging
from abc import abstractmethod
from typing import TYPE_CHECKING, Any

from homeassistant.components.switch import SwitchEntity

from .api import HiveApiClientError
from .const import DOMAIN
from .entity import HiveEntity

if TYPE_CHECKING:
    from datetime import timedelta

    from homeassistant.config_entries import ConfigEntry
    from homeassistant.core import HomeAssistant
    from homeassistant.helpers.entity_platform import AddEntitiesCallback

_LOGGER = logging.getLogger(__name__)


async def async_setup_entry(
    hass: HomeAssistant,
    entry: ConfigEntry,
    async_add_entities: AddEntitiesCallback,
) -> None:
    """Set up the heating boost and hot water switches."""
    entry_data = hass.data[DOMAIN][entry.entry_id]
    coordinator = entry_data["coordinator"]
    config = entry_data["config"]
    async_add_entities(
        [
            HiveHeatingBoostSwitch(coordinator, config, entry.entry_id),
            HiveHotWaterSwitch(coordinator, config, entry.entry_id),
        ]
    )


class HiveBoostSwitch(HiveEntity, SwitchEntity):
    """A switch that boosts for the configured duration while on."""

    @property
    @abstractmethod
    def boost_duration(self) -> timedelta:
        """Return how long turning the switch on boosts for."""

    @abstractmethod
    async def _async_toggle(self, on: bool, duration: timedelta) -> None:
        """Send the boost command to the coordinator."""

    async def async_turn_on(self, **kwargs: Any) -> None:  # noqa: ANN401
        await self._async_set(on=True)

    async def async_turn_off(self, **kwargs: Any) -> None:  # noqa: ANN401
        await self._async_set(on=False)

    async def _async_set(self, *, on: bool) -> None:
        try:
            await self._async_toggle(on, self.boost_duration)
        except HiveApiClientError:
            _LOGGER.exception("Unable to switch %s %s", self.name, "on" if on else "off")


class HiveHeatingBoostSwitch(HiveBoostSwitch):
    """Heating boost."""

    _attr_name = "Heating boost"
    _attr_icon = "mdi:radiator"

    def __init__(self, coordinator, config, entry_id: str) -> None:
        super().__init__(coordinator, config, entry_id, "heating_boost")

    @property
    def is_on(self) -> bool:
        return self.hive_state.heating_boosted

    @property
    def boost_duration(self) -> timedelta:
        return self._config.heating_boost_duration

    async def _async_toggle(self, on: bool, duration: timedelta) -> None:
        await self.coordinator.async_toggle_heating_boost(on, duration)


class HiveHotWaterSwitch(HiveBoostSwitch):
    """Hot water boost."""

    _attr_name = "Hot water"
    _attr_icon = "mdi:water-boiler"

    def __init__(self, coordinator, config, entry_id: str) -> None:
        super().__init__(coordinator, config, entry_id, "hot_water")

    @property
    def is_on(self) -> bool:
        return self.hive_state.hot_water

    @property
    def boost_duration(self) -> timedelta:
        return self._config.hot_water_boost_duration

    async def _async_toggle(self, on: bool, duration: timedelta) -> None:
        await self.coordinator.async_toggle_hot_water(on, duration)
