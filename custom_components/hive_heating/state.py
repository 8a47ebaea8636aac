"""Derive the domain state from the nodes reported by the Hive API.

The nodes endpoint returns every device on the account with a loose bag of
optional attributes. Which attributes are present tells us what a node is:
a thermostat/receiver pair carries temperatures, a boiler module that can
drive a cylinder advertises ``supportsHotWater``. A single node may play
both roles.
"""

from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING, Any

from .const import API_BOOST, API_OFF, API_ON
from .models import HeatingMode, Node, NodeAttributes, NodeRole, State

if TYPE_CHECKING:
    from collections.abc import Iterable

_LOGGER = logging.getLogger(__name__)


def is_heating_node(attributes: NodeAttributes) -> bool:
    """Return True if the node reports both current and target temperature."""
    return (
        attributes.temperature is not None
        and attributes.target_heat_temperature is not None
    )


def is_hot_water_node(attributes: NodeAttributes) -> bool:
    """Return True if the node advertises hot water support."""
    supports = attributes.supports_hot_water
    return supports is not None and supports.reported is True


def node_role(node: Node) -> NodeRole:
    """Resolve the role of a node from the attributes it carries."""
    heating = is_heating_node(node.attributes)
    hot_water = is_hot_water_node(node.attributes)

    if heating and hot_water:
        return NodeRole.BOTH
    if heating:
        return NodeRole.HEATING
    if hot_water:
        return NodeRole.HOT_WATER
    return NodeRole.UNKNOWN


def heating_mode_for(value: str | None, *, boosted: bool = False) -> HeatingMode:
    """Map an ``activeHeatCoolMode`` value onto a heating mode.

    BOOST means heating on demand, OFF means off and everything else
    (normally HEAT) means the schedule is in charge.
    """
    if boosted or value == API_BOOST:
        return HeatingMode.HEATING
    if value == API_OFF:
        return HeatingMode.OFF
    return HeatingMode.SCHEDULED


def as_float(value: Any) -> float | None:
    """Return value as a float, or None if it is not a finite number."""
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        _LOGGER.debug("Ignoring non-numeric value %r", value)
        return None
    return number if math.isfinite(number) else None


def _heating_fields(node: Node) -> dict[str, Any]:
    attrs = node.attributes
    fields: dict[str, Any] = {"heating_node_id": node.id}

    current_temp = as_float(attrs.temperature.reported)
    if current_temp is not None:
        fields["current_temp"] = current_temp
    target_temp = as_float(attrs.target_heat_temperature.reported)
    if target_temp is not None:
        fields["target_temp"] = target_temp

    if attrs.state_heating_relay is not None:
        fields["heating"] = attrs.state_heating_relay.reported == API_ON

    if attrs.active_heat_cool_mode is not None:
        boosted = attrs.active_heat_cool_mode.reported == API_BOOST
        fields["heating_boosted"] = boosted
        fields["current_heating_mode"] = heating_mode_for(
            attrs.active_heat_cool_mode.reported, boosted=boosted
        )
        fields["target_heating_mode"] = heating_mode_for(
            attrs.active_heat_cool_mode.target
        )

    return fields


def _hot_water_fields(node: Node) -> dict[str, Any]:
    attrs = node.attributes
    fields: dict[str, Any] = {"hot_water_node_id": node.id}

    if attrs.state_hot_water_relay is not None:
        fields["hot_water"] = attrs.state_hot_water_relay.reported == API_ON

    # The API exposes no separate hot water boost flag, the active mode of
    # the node is the only signal.
    if attrs.active_heat_cool_mode is not None:
        fields["hot_water_boosted"] = attrs.active_heat_cool_mode.reported == API_BOOST

    return fields


def reduce_nodes(nodes: Iterable[Node]) -> State:
    """Reduce a list of nodes to a single State.

    Never fails: attributes that are missing leave the matching State field
    at its default. If more than one node claims a role the last one wins.
    """
    fields: dict[str, Any] = {}

    for node in nodes:
        role = node_role(node)
        if role in (NodeRole.HEATING, NodeRole.BOTH):
            fields.update(_heating_fields(node))
        if role in (NodeRole.HOT_WATER, NodeRole.BOTH):
            fields.update(_hot_water_fields(node))

    state = State(**fields)
    _LOGGER.debug("Reduced nodes to state: %s", state)
    return state
