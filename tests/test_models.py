"""Tests for the Hive Heating data models."""

from datetime import timedelta

import pytest

from custom_components.hive_heating.const import (
    DEFAULT_BOOST_DURATION,
    DEFAULT_POLL_INTERVAL,
)
from custom_components.hive_heating.models import HiveConfig, Node, NodeReport


class TestHiveConfig:
    """Tests for HiveConfig.create."""

    def test_create_defaults_unset_interval(self) -> None:
        """Test that an unset poll interval uses the default."""
        config = HiveConfig.create("user", "pass")
        assert config.poll_interval == DEFAULT_POLL_INTERVAL
        assert config.heating_boost_duration == DEFAULT_BOOST_DURATION
        assert config.hot_water_boost_duration == DEFAULT_BOOST_DURATION

    def test_create_defaults_too_short_interval(self) -> None:
        """Test that an interval below the minimum uses the default."""
        config = HiveConfig.create("user", "pass", timedelta(seconds=1))
        assert config.poll_interval == DEFAULT_POLL_INTERVAL

    def test_create_keeps_valid_interval(self) -> None:
        """Test that a valid interval is kept."""
        config = HiveConfig.create("user", "pass", timedelta(seconds=30))
        assert config.poll_interval == timedelta(seconds=30)

    def test_config_is_frozen(self) -> None:
        """Test that the config cannot be changed after construction."""
        config = HiveConfig.create("user", "pass")
        with pytest.raises((AttributeError, TypeError)):
            config.username = "other"


class TestNode:
    """Tests for Node.from_dict."""

    def test_from_dict_without_attributes(self) -> None:
        """Test that a node without attributes has none set."""
        node = Node.from_dict({"id": "hub"})
        assert node.id == "hub"
        assert node.attributes.temperature is None
        assert node.attributes.supports_hot_water is None

    def test_from_dict_reads_reported_and_target(self) -> None:
        """Test that report values are read from both fields."""
        node = Node.from_dict(
            {
                "id": "heat-1",
                "attributes": {
                    "targetHeatTemperature": {
                        "reportedValue": 20.0,
                        "targetValue": 21.0,
                    },
                },
            }
        )
        assert node.attributes.target_heat_temperature == NodeReport(
            reported=20.0, target=21.0
        )
