"""Coordinator for Hive Heating integration.

Owns the cached State for one account: polls the nodes endpoint on the
coordinator timer, runs forced refreshes after commands, and hands every
new snapshot to the registered change handler.
"""

from __future__ import annotations

import asyncio
import logging
import time
from typing import TYPE_CHECKING

from homeassistant.core import CALLBACK_TYPE, callback
from homeassistant.helpers.debounce import Debouncer
from homeassistant.helpers.event import async_call_later
from homeassistant.helpers.update_coordinator import DataUpdateCoordinator, UpdateFailed
from homeassistant.util import dt as dt_util

from .api import (
    HiveApiClient,
    HiveApiClientError,
    boost_attributes,
    target_temperature_attributes,
)
from .const import (
    COMMAND_REFRESH_DELAY,
    DEBOUNCE_INTERVAL,
    DOMAIN,
    MAX_PENDING_REFRESHES,
)
from .models import HiveConfig, State
from .state import reduce_nodes

if TYPE_CHECKING:
    from collections.abc import Callable
    from datetime import datetime, timedelta

    import httpx
    from homeassistant.core import HomeAssistant

_LOGGER = logging.getLogger(__name__)


class HiveCoordinator(DataUpdateCoordinator[State]):
    """Poll the Hive API and keep the last known State."""

    def __init__(
        self,
        hass: HomeAssistant,
        api: HiveApiClient,
        config: HiveConfig,
    ) -> None:
        """Initialize the coordinator.

        Args:
            hass: Home Assistant instance.
            api: Authenticated API client.
            config: Account configuration, used for the poll interval.

        """
        super().__init__(
            hass,
            _LOGGER,
            name=DOMAIN,
            update_interval=config.poll_interval,
            request_refresh_debouncer=Debouncer(
                hass,
                _LOGGER,
                cooldown=DEBOUNCE_INTERVAL.total_seconds(),
                immediate=True,
            ),
        )
        self.api = api
        self.config = config
        self.data = State()
        self._notified_state: State | None = self.data
        self._poll_lock = asyncio.Lock()
        # Monotonic time the last successful GET was issued
        self._last_poll_started: float | None = None
        self._last_poll_at: datetime | None = None
        self._change_handler: Callable[[State], None] | None = None
        self._remove_change_listener: CALLBACK_TYPE | None = None
        self._pending_refreshes: set[CALLBACK_TYPE] = set()

    @property
    def state(self) -> State:
        """Return the last known state."""
        return self.data

    @property
    def last_refresh(self) -> datetime | None:
        """Return when the state was last refreshed successfully."""
        return self._last_poll_at

    def register_change_handler(
        self, handler: Callable[[State], None] | None
    ) -> None:
        """Register the handler called with every new state.

        Only one handler is kept; registering a new one replaces it.
        """
        self._change_handler = handler
        if self._remove_change_listener is None:
            self._remove_change_listener = self.async_add_listener(
                self._notify_change_handler
            )

    @callback
    def _notify_change_handler(self) -> None:
        handler = self._change_handler
        state = self.data
        # Skipped and failed refreshes leave the same snapshot in place
        if handler is None or state is self._notified_state:
            return
        self._notified_state = state
        try:
            handler(state)
        except Exception:
            _LOGGER.exception("Error in state change handler")

    async def _async_update_data(self) -> State:
        """Fetch the nodes unless the last refresh is too recent."""
        async with self._poll_lock:
            if self._is_debounced():
                _LOGGER.debug("Skipping refresh, last one was too recent")
                return self.data
            return await self._async_fetch_state()

    def _is_debounced(self) -> bool:
        return (
            self._last_poll_started is not None
            and time.monotonic() - self._last_poll_started
            < DEBOUNCE_INTERVAL.total_seconds()
        )

    async def _async_fetch_state(self) -> State:
        started = time.monotonic()
        try:
            nodes = await self.api.async_get_nodes()
        except HiveApiClientError as err:
            raise UpdateFailed(f"Unable to get nodes info: {err}") from err

        state = reduce_nodes(nodes)
        self._last_poll_started = started
        self._last_poll_at = dt_util.utcnow()
        return state

    async def async_refresh(self, *, force: bool = False) -> None:
        """Refresh the cached state from the API.

        A non-forced refresh is skipped if the last successful one is more
        recent than the debounce interval. Errors are logged and leave the
        cached state untouched.
        """
        if not force:
            await super().async_refresh()
            return
        await self._async_forced_refresh()

    async def _async_forced_refresh(self, requested_at: float | None = None) -> None:
        """Refresh regardless of the debounce interval.

        When requested_at is given the refresh is skipped if a successful
        one was issued after it.
        """
        async with self._poll_lock:
            if (
                requested_at is not None
                and self._last_poll_started is not None
                and self._last_poll_started >= requested_at
            ):
                _LOGGER.debug("State already refreshed since request, skipping")
                return
            try:
                state = await self._async_fetch_state()
            except UpdateFailed as err:
                _LOGGER.warning("%s", err)
                return
            except Exception:
                _LOGGER.exception("Unexpected error refreshing %s data", self.name)
                return

        self.async_set_updated_data(state)

    @callback
    def _async_refresh_after_command(self) -> None:
        """Force a refresh once the device has applied a command.

        A refresh issued after the command was sent covers it, so commands in
        quick succession share one request.
        """
        if len(self._pending_refreshes) >= MAX_PENDING_REFRESHES:
            _LOGGER.debug("Too many pending refreshes, dropping refresh request")
            return

        requested_at = time.monotonic()
        cancel: CALLBACK_TYPE | None = None

        async def _async_refresh_later(_now: datetime) -> None:
            self._pending_refreshes.discard(cancel)
            await self._async_forced_refresh(requested_at)

        cancel = async_call_later(
            self.hass, COMMAND_REFRESH_DELAY, _async_refresh_later
        )
        self._pending_refreshes.add(cancel)

    async def async_stop(self) -> None:
        """Stop polling and cancel refreshes scheduled by commands."""
        for cancel in self._pending_refreshes:
            cancel()
        self._pending_refreshes.clear()
        if self._remove_change_listener is not None:
            self._remove_change_listener()
            self._remove_change_listener = None
        await self.async_shutdown()
        _LOGGER.debug("Stopped polling")

    async def async_set_target_temperature(self, celsius: float) -> None:
        """Set the target temperature of the heating node.

        The value is sent as is; the API accepts MIN_TEMP to MAX_TEMP.

        Raises:
            HiveApiClientError: If the update could not be sent.

        """
        await self.api.async_update_node(
            self.data.heating_node_id, target_temperature_attributes(celsius)
        )
        self._async_refresh_after_command()

    async def async_toggle_hot_water(self, on: bool, duration: timedelta) -> None:
        """Boost the hot water for a duration, or return it to its schedule.

        Raises:
            HiveApiClientError: If the update could not be sent.

        """
        await self.api.async_update_node(
            self.data.hot_water_node_id, boost_attributes(on, duration)
        )
        self._async_refresh_after_command()

    async def async_toggle_heating_boost(self, on: bool, duration: timedelta) -> None:
        """Boost the heating for a duration, or return it to its schedule.

        Raises:
            HiveApiClientError: If the update could not be sent.

        """
        await self.api.async_update_node(
            self.data.heating_node_id, boost_attributes(on, duration)
        )
        self._async_refresh_after_command()


async def async_connect(
    hass: HomeAssistant,
    session: httpx.AsyncClient,
    insecure_session: httpx.AsyncClient,
    config: HiveConfig,
) -> HiveCoordinator:
    """Log in and run the initial poll.

    Polling on the interval runs while the coordinator has listeners.

    Raises:
        HiveApiAuthError: If the initial login fails.

    """
    api = HiveApiClient(session, insecure_session, config)
    await api.async_login()

    coordinator = HiveCoordinator(hass, api, config)
    await coordinator.async_refresh(force=True)
    return coordinator
