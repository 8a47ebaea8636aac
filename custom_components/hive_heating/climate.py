"""Climate entity for Hive Heating.

Exposes the Hive thermostat as a Home Assistant climate entity. Mode changes
are driven by the Hive schedule and are read-only here; the target
temperature can be set.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from homeassistant.components.climate import (
    ClimateEntity,
    ClimateEntityFeature,
    HVACAction,
    HVACMode,
)
from homeassistant.const import ATTR_TEMPERATURE, UnitOfTemperature

from .api import HiveApiClientError
from .const import DOMAIN, MAX_TEMP, MIN_TEMP
from .entity import HiveEntity
from .models import HeatingMode

if TYPE_CHECKING:
    from homeassistant.config_entries import ConfigEntry
    from homeassistant.core import HomeAssistant
    from homeassistant.helpers.entity_platform import AddEntitiesCallback

_LOGGER = logging.getLogger(__name__)

HVAC_MODE_MAP = {
    HeatingMode.OFF: HVACMode.OFF,
    HeatingMode.HEATING: HVACMode.HEAT,
    HeatingMode.SCHEDULED: HVACMode.AUTO,
}


async def async_setup_entry(
    hass: HomeAssistant,
    entry: ConfigEntry,
    async_add_entities: AddEntitiesCallback,
) -> None:
    """Set up the Hive thermostat entity."""
    entry_data = hass.data[DOMAIN][entry.entry_id]
    async_add_entities(
        [
            HiveThermostatEntity(
                entry_data["coordinator"],
                entry_data["config"],
                entry.entry_id,
            )
        ]
    )


class HiveThermostatEntity(HiveEntity, ClimateEntity):
    """Climate entity for the Hive heating thermostat."""

    _attr_name = "Heating"
    _attr_temperature_unit = UnitOfTemperature.CELSIUS
    _attr_target_temperature_step = 0.5
    _attr_min_temp = MIN_TEMP
    _attr_max_temp = MAX_TEMP
    _attr_hvac_modes = [HVACMode.OFF, HVACMode.HEAT, HVACMode.AUTO]
    _attr_supported_features = ClimateEntityFeature.TARGET_TEMPERATURE

    def __init__(self, coordinator, config, entry_id: str) -> None:
        super().__init__(coordinator, config, entry_id, "thermostat")

    @property
    def current_temperature(self) -> float | None:
        return self.hive_state.current_temp

    @property
    def target_temperature(self) -> float | None:
        return self.hive_state.target_temp

    @property
    def hvac_mode(self) -> HVACMode:
        return HVAC_MODE_MAP[self.hive_state.target_heating_mode]

    @property
    def hvac_action(self) -> HVACAction:
        if self.hive_state.current_heating_mode is HeatingMode.OFF:
            return HVACAction.OFF
        return HVACAction.HEATING if self.hive_state.heating else HVACAction.IDLE

    @property
    def extra_state_attributes(self) -> dict[str, Any]:
        last_refresh = self.coordinator.last_refresh
        return {
            "boosted": self.hive_state.heating_boosted,
            "last_refresh": last_refresh.isoformat() if last_refresh else None,
        }

    async def async_set_temperature(self, **kwargs: Any) -> None:  # noqa: ANN401
        """Set the target temperature.

        Args:
            **kwargs: Keyword arguments containing temperature data.

        """
        temperature = kwargs.get(ATTR_TEMPERATURE)
        if temperature is None:
            return

        try:
            await self.coordinator.async_set_target_temperature(temperature)
        except HiveApiClientError:
            _LOGGER.exception("Unable to set target temperature for %s", self.name)

    async def async_set_hvac_mode(self, hvac_mode: HVACMode) -> None:
        """Changing the mode is not supported by the Hive API client."""
        _LOGGER.warning(
            "Changing the heating mode to %s is not supported, use the Hive schedule",
            hvac_mode,
        )
