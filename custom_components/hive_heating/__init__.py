from __future__ import annotations

import logging
from datetime import timedelta

from homeassistant.config_entries import ConfigEntry
from homeassistant.const import (
    CONF_PASSWORD,
    CONF_SCAN_INTERVAL,
    CONF_USERNAME,
    Platform,
)
from homeassistant.core import HomeAssistant

from . import api
from .api import create_session_client
from .const import (
    CONF_HEATING_BOOST_DURATION,
    CONF_HOT_WATER_BOOST_DURATION,
    DOMAIN,
)
from .coordinator import async_connect
from .models import HiveConfig, State

_LOGGER = logging.getLogger(__name__)

PLATFORMS = [Platform.CLIMATE, Platform.SWITCH]


def config_from_entry(entry: ConfigEntry) -> HiveConfig:
    """Build the client configuration from a config entry."""
    data = {**entry.data, **entry.options}

    def _seconds(key: str) -> timedelta | None:
        value = data.get(key)
        return timedelta(seconds=value) if value else None

    def _minutes(key: str) -> timedelta | None:
        value = data.get(key)
        return timedelta(minutes=value) if value else None

    return HiveConfig.create(
        username=data[CONF_USERNAME],
        password=data[CONF_PASSWORD],
        poll_interval=_seconds(CONF_SCAN_INTERVAL),
        heating_boost_duration=_minutes(CONF_HEATING_BOOST_DURATION),
        hot_water_boost_duration=_minutes(CONF_HOT_WATER_BOOST_DURATION),
    )


async def async_setup_entry(hass: HomeAssistant, entry: ConfigEntry) -> bool:
    _LOGGER.info("Setting up Hive Heating integration for entry %s", entry.entry_id)

    if CONF_USERNAME not in entry.data or CONF_PASSWORD not in entry.data:
        _LOGGER.error("Missing credentials in configuration for entry %s", entry.entry_id)
        return False

    config = config_from_entry(entry)
    session = create_session_client(hass)
    insecure_session = create_session_client(hass, verify_ssl=False)

    try:
        coordinator = await async_connect(hass, session, insecure_session, config)
    except api.HiveApiAuthError as err:
        _LOGGER.warning(
            "Authentication failed for entry %s: %s", entry.entry_id, str(err)
        )
        return False

    def _handle_state_change(state: State) -> None:
        _LOGGER.debug("Hive state updated for entry %s: %s", entry.entry_id, state)

    coordinator.register_change_handler(_handle_state_change)

    hass.data.setdefault(DOMAIN, {})[entry.entry_id] = {
        "coordinator": coordinator,
        "config": config,
    }

    try:
        await hass.config_entries.async_forward_entry_setups(entry, PLATFORMS)
    except Exception as err:
        _LOGGER.error("Failed to setup platforms for entry %s: %s", entry.entry_id, err)
        await coordinator.async_stop()
        hass.data[DOMAIN].pop(entry.entry_id, None)
        return False

    _LOGGER.info(
        "Successfully setup Hive Heating integration for entry %s", entry.entry_id
    )
    return True


async def async_unload_entry(hass: HomeAssistant, entry: ConfigEntry) -> bool:
    _LOGGER.info("Unloading Hive Heating integration for entry %s", entry.entry_id)

    unload_ok = await hass.config_entries.async_unload_platforms(entry, PLATFORMS)
    if not unload_ok:
        _LOGGER.warning("Failed to unload some platforms for entry %s", entry.entry_id)
        return False

    entry_data = hass.data.get(DOMAIN, {}).pop(entry.entry_id, None)
    if entry_data is not None:
        await entry_data["coordinator"].async_stop()
        _LOGGER.debug("Cleaned up data for entry %s", entry.entry_id)

    _LOGGER.info(
        "Successfully unloaded Hive Heating integration for entry %s", entry.entry_id
    )
    return True
