"""Tests for the Hive Heating Climate entity."""

from datetime import UTC, datetime
from unittest.mock import AsyncMock, Mock

import pytest
from homeassistant.components.climate import HVACAction, HVACMode
from homeassistant.const import ATTR_TEMPERATURE, UnitOfTemperature

from custom_components.hive_heating.api import HiveApiUpstreamError
from custom_components.hive_heating.climate import (
    HiveThermostatEntity,
    async_setup_entry,
)
from custom_components.hive_heating.const import DOMAIN, MAX_TEMP, MIN_TEMP
from custom_components.hive_heating.models import HeatingMode, HiveConfig, State

TEST_TARGET_TEMP = 22.0


@pytest.fixture
def mock_coordinator() -> Mock:
    """Create a mock coordinator holding a heating state."""
    coordinator = Mock()
    coordinator.data = State(
        heating=True,
        current_temp=18.5,
        target_temp=21.0,
        current_heating_mode=HeatingMode.HEATING,
        target_heating_mode=HeatingMode.SCHEDULED,
    )
    coordinator.last_refresh = None
    coordinator.async_set_target_temperature = AsyncMock()
    return coordinator


@pytest.fixture
def entity(mock_coordinator: Mock, hive_config: HiveConfig) -> HiveThermostatEntity:
    """Create a HiveThermostatEntity instance for testing."""
    entity_instance = HiveThermostatEntity(mock_coordinator, hive_config, "entry1")
    entity_instance.async_write_ha_state = Mock()
    return entity_instance


class TestAsyncSetupEntry:
    """Tests for the climate platform setup."""

    @pytest.mark.asyncio
    async def test_async_setup_entry_adds_thermostat(
        self, mock_coordinator: Mock, hive_config: HiveConfig
    ) -> None:
        """Test that a single thermostat entity is added."""
        hass = Mock()
        hass.data = {
            DOMAIN: {"entry1": {"coordinator": mock_coordinator, "config": hive_config}}
        }
        entry = Mock()
        entry.entry_id = "entry1"
        async_add_entities = Mock()

        await async_setup_entry(hass, entry, async_add_entities)

        entities = async_add_entities.call_args.args[0]
        assert len(entities) == 1
        assert isinstance(entities[0], HiveThermostatEntity)


class TestHiveThermostatEntity:
    """Tests for HiveThermostatEntity."""

    def test_entity_attributes(self, entity: HiveThermostatEntity) -> None:
        """Test the static entity attributes."""
        assert entity.unique_id == "entry1_thermostat"
        assert entity.temperature_unit == UnitOfTemperature.CELSIUS
        assert entity.min_temp == MIN_TEMP
        assert entity.max_temp == MAX_TEMP
        assert entity.should_poll is False

    def test_temperatures_come_from_state(self, entity: HiveThermostatEntity) -> None:
        """Test that temperatures are read from the cached state."""
        assert entity.current_temperature == 18.5
        assert entity.target_temperature == 21.0

    @pytest.mark.parametrize(
        ("mode", "expected"),
        [
            (HeatingMode.OFF, HVACMode.OFF),
            (HeatingMode.HEATING, HVACMode.HEAT),
            (HeatingMode.SCHEDULED, HVACMode.AUTO),
        ],
    )
    def test_hvac_mode_follows_target_mode(
        self,
        entity: HiveThermostatEntity,
        mock_coordinator: Mock,
        mode: HeatingMode,
        expected: HVACMode,
    ) -> None:
        """Test the heating mode to HVAC mode mapping."""
        mock_coordinator.data = State(target_heating_mode=mode)
        assert entity.hvac_mode == expected

    def test_hvac_action_heating(self, entity: HiveThermostatEntity) -> None:
        """Test that an active relay reports heating."""
        assert entity.hvac_action == HVACAction.HEATING

    def test_hvac_action_idle(
        self, entity: HiveThermostatEntity, mock_coordinator: Mock
    ) -> None:
        """Test that an inactive relay reports idle."""
        mock_coordinator.data = State(current_heating_mode=HeatingMode.SCHEDULED)
        assert entity.hvac_action == HVACAction.IDLE

    def test_hvac_action_off(
        self, entity: HiveThermostatEntity, mock_coordinator: Mock
    ) -> None:
        """Test that heating switched off reports off."""
        mock_coordinator.data = State(
            heating=True, current_heating_mode=HeatingMode.OFF
        )
        assert entity.hvac_action == HVACAction.OFF

    def test_extra_state_attributes(
        self, entity: HiveThermostatEntity, mock_coordinator: Mock
    ) -> None:
        """Test that boost and refresh time are exposed."""
        refreshed = datetime(2024, 1, 1, 12, 0, tzinfo=UTC)
        mock_coordinator.data = State(heating_boosted=True)
        mock_coordinator.last_refresh = refreshed

        assert entity.extra_state_attributes == {
            "boosted": True,
            "last_refresh": refreshed.isoformat(),
        }

    def test_extra_state_attributes_before_first_refresh(
        self, entity: HiveThermostatEntity
    ) -> None:
        """Test that the refresh time is empty before any poll."""
        assert entity.extra_state_attributes["last_refresh"] is None

    @pytest.mark.asyncio
    async def test_async_set_temperature(
        self, entity: HiveThermostatEntity, mock_coordinator: Mock
    ) -> None:
        """Test that setting a temperature is passed to the coordinator."""
        await entity.async_set_temperature(**{ATTR_TEMPERATURE: TEST_TARGET_TEMP})
        mock_coordinator.async_set_target_temperature.assert_awaited_once_with(
            TEST_TARGET_TEMP
        )

    @pytest.mark.asyncio
    async def test_async_set_temperature_without_value(
        self, entity: HiveThermostatEntity, mock_coordinator: Mock
    ) -> None:
        """Test that a call without a temperature does nothing."""
        await entity.async_set_temperature()
        mock_coordinator.async_set_target_temperature.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_async_set_temperature_logs_api_error(
        self,
        entity: HiveThermostatEntity,
        mock_coordinator: Mock,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        """Test that an API failure is logged and not raised."""
        mock_coordinator.async_set_target_temperature.side_effect = (
            HiveApiUpstreamError("Unexpected status 500")
        )

        await entity.async_set_temperature(**{ATTR_TEMPERATURE: TEST_TARGET_TEMP})

        assert "Unable to set target temperature" in caplog.text

    @pytest.mark.asyncio
    async def test_async_set_hvac_mode_is_ignored(
        self,
        entity: HiveThermostatEntity,
        mock_coordinator: Mock,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        """Test that mode changes only log a warning."""
        await entity.async_set_hvac_mode(HVACMode.HEAT)

        assert "not supported" in caplog.text
        mock_coordinator.async_set_target_temperature.assert_not_awaited()

    def test_coordinator_update_writes_state(
        self, entity: HiveThermostatEntity
    ) -> None:
        """Test that a coordinator update triggers a state write."""
        entity._handle_coordinator_update()
        entity.async_write_ha_state.assert_called_once()
