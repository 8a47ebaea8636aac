"""
Configuration flow for Hive Heating integration.

This module handles the setup and configuration of the Hive Heating
integration through Home Assistant's config flow system.
"""

import logging
from typing import Any

import httpx
import voluptuous as vol
from homeassistant.config_entries import ConfigFlow, ConfigFlowResult
from homeassistant.const import CONF_PASSWORD, CONF_SCAN_INTERVAL, CONF_USERNAME
from homeassistant.helpers.httpx_client import get_async_client

from . import api
from .const import (
    CONF_HEATING_BOOST_DURATION,
    CONF_HOT_WATER_BOOST_DURATION,
    DEFAULT_BOOST_DURATION,
    DEFAULT_POLL_INTERVAL,
    DOMAIN,
    ERROR_CANNOT_CONNECT,
    ERROR_INVALID_AUTH,
    ERROR_UNKNOWN,
    MIN_POLL_INTERVAL,
)
from .models import HiveConfig

_LOGGER = logging.getLogger(__name__)

DATA_SCHEMA = vol.Schema(
    {
        vol.Required(CONF_USERNAME): str,
        vol.Required(CONF_PASSWORD): str,
        vol.Optional(
            CONF_SCAN_INTERVAL,
            default=int(DEFAULT_POLL_INTERVAL.total_seconds()),
        ): vol.All(
            vol.Coerce(int), vol.Range(min=int(MIN_POLL_INTERVAL.total_seconds()))
        ),
        vol.Optional(
            CONF_HEATING_BOOST_DURATION,
            default=int(DEFAULT_BOOST_DURATION.total_seconds() // 60),
        ): vol.All(vol.Coerce(int), vol.Range(min=1)),
        vol.Optional(
            CONF_HOT_WATER_BOOST_DURATION,
            default=int(DEFAULT_BOOST_DURATION.total_seconds() // 60),
        ): vol.All(vol.Coerce(int), vol.Range(min=1)),
    }
)


class HiveHeatingConfigFlow(ConfigFlow, domain=DOMAIN):
    """Handle configuration flow for Hive Heating integration."""

    VERSION = 1

    async def async_step_user(
        self, user_input: dict[str, Any] | None = None
    ) -> ConfigFlowResult:
        """
        Handle the initial step of the config flow.

        Args:
            user_input: User input data containing credentials and options.

        Returns:
            ConfigFlowResult indicating the next step or errors.

        """
        errors: dict[str, str] = {}

        if user_input is not None:
            username = user_input[CONF_USERNAME]
            password = user_input[CONF_PASSWORD]

            try:
                session = get_async_client(self.hass)
                client = api.HiveApiClient(
                    session, session, HiveConfig.create(username, password)
                )
                await client.async_login()
                _LOGGER.info("Successfully authenticated with Hive API")

            except api.HiveApiAuthError as err:
                # A login that never reached the API is a connection problem
                if isinstance(err.__cause__, httpx.RequestError):
                    _LOGGER.warning(
                        "Connection error (%s): %s", ERROR_CANNOT_CONNECT, err
                    )
                    errors["base"] = ERROR_CANNOT_CONNECT
                else:
                    _LOGGER.warning(
                        "Authentication failed (%s): %s", ERROR_INVALID_AUTH, err
                    )
                    errors["base"] = ERROR_INVALID_AUTH
            except Exception:
                _LOGGER.exception(
                    "Unexpected error during authentication (%s)",
                    ERROR_UNKNOWN,
                )
                errors["base"] = ERROR_UNKNOWN

            else:
                await self.async_set_unique_id(username.lower())
                self._abort_if_unique_id_configured()

                return self.async_create_entry(
                    title=f"Hive Heating ({username})",
                    data=user_input,
                )

        return self.async_show_form(
            step_id="user",
            data_schema=DATA_SCHEMA,
            errors=errors,
        )
