"""Base entity for Hive Heating integration."""

from __future__ import annotations

from typing import TYPE_CHECKING

from homeassistant.helpers.update_coordinator import CoordinatorEntity

from .coordinator import HiveCoordinator

if TYPE_CHECKING:
    from .models import HiveConfig, State


class HiveEntity(CoordinatorEntity[HiveCoordinator]):
    """Entity backed by the coordinator's cached state."""

    _attr_has_entity_name = True

    def __init__(
        self,
        coordinator: HiveCoordinator,
        config: HiveConfig,
        entry_id: str,
        key: str,
    ) -> None:
        super().__init__(coordinator)
        self._config = config
        self._attr_unique_id = f"{entry_id}_{key}"

    @property
    def hive_state(self) -> State:
        """Return the last known state."""
        return self.coordinator.data
