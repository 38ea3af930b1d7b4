"""Arrow store: per-lane arrow flags with change propagation.

The store is the only place lane arrows are written. Every successful write
queues a routing recalculation for the lane's segment and, when enabled,
notifies segment-change listeners.

Final arrows resolve in priority order: highway arrows, custom arrows, then
the lane's default arrows.
"""

from __future__ import annotations

__all__ = ["ArrowStore", "SetLaneArrowError"]

import logging
from enum import Enum
from typing import Callable

from lane_arrows.config import Options
from lane_arrows.constants import LANE_ARROW_MASK, LANE_TYPES, VEHICLE_TYPES
from lane_arrows.network.model import LaneArrows, RoadNetwork
from lane_arrows.routing import RoutingRecalculator

logger = logging.getLogger(__name__)


class SetLaneArrowError(Enum):
    """Why an interactive arrow toggle was refused."""

    INVALID_SEGMENT = "invalid_segment"
    LANE_CONNECTION = "lane_connection"
    HIGHWAY_ARROWS = "highway_arrows"


def _is_negative(flags: LaneArrows | int) -> bool:
    return not isinstance(flags, LaneArrows) and int(flags) < 0


def _masked(flags: LaneArrows | int) -> LaneArrows:
    if _is_negative(flags):
        raise ValueError(f"Negative lane arrow flags: {flags}")
    value = flags.value if isinstance(flags, LaneArrows) else int(flags)
    return LaneArrows(value & LANE_ARROW_MASK)


class ArrowStore:
    """Reads and writes lane arrows for one road network."""

    def __init__(
        self,
        network: RoadNetwork,
        routing: RoutingRecalculator | None = None,
        options: Options | None = None,
    ) -> None:
        self.network = network
        self.routing = routing if routing is not None else RoutingRecalculator()
        self.options = options if options is not None else Options()
        self._arrows: dict[int, LaneArrows] = {}
        self._highway_arrows: dict[int, LaneArrows] = {}
        self._lane_connections: set[tuple[int, bool]] = set()
        self._segment_listeners: list[Callable[[int], None]] = []

    # -- queries ----------------------------------------------------------

    def is_lane_valid(self, lane_id: int) -> bool:
        lane = self.network.lanes.get(lane_id)
        return lane is not None and lane.segment_id in self.network.segments

    def can_have_lane_arrows(self, lane_id: int) -> bool:
        if not self.is_lane_valid(lane_id):
            return False
        return self.network.lanes[lane_id].matches(LANE_TYPES, VEHICLE_TYPES)

    def has_lane_connections(self, lane_id: int, start_node: bool) -> bool:
        return (lane_id, start_node) in self._lane_connections

    def get_lane_arrows(self, lane_id: int) -> LaneArrows | None:
        """Return the custom arrows of a lane, or None if none are set."""
        return self._arrows.get(lane_id)

    def get_final_lane_arrows(self, lane_id: int) -> LaneArrows:
        """Return the arrows in effect for a lane."""
        if not self.can_have_lane_arrows(lane_id):
            return LaneArrows.NONE
        highway = self._highway_arrows.get(lane_id)
        if highway is not None:
            return highway
        custom = self._arrows.get(lane_id)
        if custom is not None:
            return custom
        return self.network.lanes[lane_id].default_arrows

    def custom_arrows(self) -> dict[int, LaneArrows]:
        return dict(sorted(self._arrows.items()))

    # -- writes -----------------------------------------------------------

    def set_lane_arrows(
        self,
        lane_id: int,
        flags: LaneArrows | int,
        override_highway_arrows: bool = False,
    ) -> bool:
        """Set custom arrows for a lane. Returns False if the lane refuses them."""
        if _is_negative(flags):
            logger.warning("set_lane_arrows: lane %d refused negative flags %d", lane_id, flags)
            return False
        if not self.can_have_lane_arrows(lane_id):
            self._arrows.pop(lane_id, None)
            return False
        _, start_node = self.network.outgoing_node(lane_id)
        if self.has_lane_connections(lane_id, start_node):
            return False
        if lane_id in self._highway_arrows:
            if not override_highway_arrows:
                return False
            del self._highway_arrows[lane_id]

        self._arrows[lane_id] = _masked(flags)
        self._on_lane_change(lane_id)
        return True

    def toggle_lane_arrows(
        self,
        lane_id: int,
        start_node: bool,
        flags: LaneArrows | int,
    ) -> tuple[bool, SetLaneArrowError | None]:
        """Flip ``flags`` on the lane's current arrows."""
        if not self.can_have_lane_arrows(lane_id):
            return False, SetLaneArrowError.INVALID_SEGMENT
        if self.has_lane_connections(lane_id, start_node):
            return False, SetLaneArrowError.LANE_CONNECTION
        if lane_id in self._highway_arrows:
            return False, SetLaneArrowError.HIGHWAY_ARROWS

        current = self.get_final_lane_arrows(lane_id)
        self._arrows[lane_id] = _masked(current.value ^ _masked(flags).value)
        self._on_lane_change(lane_id)
        return True, None

    def remove_lane_arrows(self, lane_id: int) -> None:
        self._arrows.pop(lane_id, None)

    def reset_segment_arrows(self, segment_id: int) -> None:
        """Drop custom and highway arrows on every lane of a segment."""
        segment = self.network.segments.get(segment_id)
        if segment is None:
            return
        for lane_id in segment.lanes:
            self._arrows.pop(lane_id, None)
            self._highway_arrows.pop(lane_id, None)
        logger.debug("Reset arrows of segment %d", segment_id)

    def set_highway_lane_arrows(self, lane_id: int, flags: LaneArrows | int) -> bool:
        """Lock a lane to arrows chosen by highway rules."""
        if _is_negative(flags):
            return False
        if not self.can_have_lane_arrows(lane_id):
            return False
        self._highway_arrows[lane_id] = _masked(flags)
        self._on_lane_change(lane_id)
        return True

    def remove_highway_lane_arrows(self, lane_id: int) -> None:
        self._highway_arrows.pop(lane_id, None)

    def clear_highway_lane_arrows(self) -> None:
        self._highway_arrows.clear()

    def add_lane_connection(self, lane_id: int, start_node: bool) -> None:
        """Mark a lane as having manual lane connections at one end."""
        self._lane_connections.add((lane_id, start_node))

    # -- change propagation ----------------------------------------------

    def add_segment_listener(self, listener: Callable[[int], None]) -> None:
        self._segment_listeners.append(listener)

    def _on_lane_change(self, lane_id: int) -> None:
        segment_id = self.network.lanes[lane_id].segment_id
        self.routing.request_recalculation(segment_id)
        if self.options.publish_segment_changes:
            for listener in self._segment_listeners:
                listener(segment_id)
